"""Exception types raised across Tripster."""


class TripsterError(Exception):
    """Base class for Tripster errors."""


class ConfigError(TripsterError):
    """Required configuration is missing or invalid. Fatal at startup."""


class MessageValidationError(TripsterError):
    """An outbound message is structurally invalid and must not be sent."""


class LineApiError(TripsterError):
    """The LINE Messaging API rejected a request or could not be reached."""
