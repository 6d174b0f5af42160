"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Union

from .errors import ConfigError

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "tripster.db"
DEFAULT_LOG_PATH = LOGS_DIR / "tripster.log"

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)


PathLike = Union[str, Path]

REQUIRED_ENV_VARS = (
    "ANTHROPIC_API_KEY",
    "GOOGLE_PLACES_API_KEY",
    "GOOGLE_VISION_API_KEY",
    "GOOGLE_TRANSLATE_API_KEY",
    "GOOGLE_CUSTOM_SEARCH_API_KEY",
    "GOOGLE_CUSTOM_SEARCH_ENGINE_ID",
    "LINE_ACCESS_TOKEN",
)

DEFAULT_LLM_MODEL = "claude-sonnet-4-5"
DEFAULT_TRIP_PLANNER_URL = "https://tripster-plans.netlify.app/"


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


@dataclass(frozen=True)
class Settings:
    """Immutable runtime configuration, built once at startup."""

    anthropic_api_key: str
    google_places_api_key: str
    google_vision_api_key: str
    google_translate_api_key: str
    google_custom_search_api_key: str
    google_custom_search_engine_id: str
    line_access_token: str
    llm_model: str = DEFAULT_LLM_MODEL
    db_path: PathLike = DEFAULT_DB_PATH
    trip_planner_url: str = DEFAULT_TRIP_PLANNER_URL
    http_timeout: float = 15.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """
        Build settings from environment variables.

        Raises:
            ConfigError: if any required variable is missing or empty.
        """
        env = os.environ if environ is None else environ

        missing = [name for name in REQUIRED_ENV_VARS if not env.get(name)]
        if missing:
            raise ConfigError(
                f"Missing environment variable(s): {', '.join(missing)}"
            )

        try:
            http_timeout = float(env.get("HTTP_TIMEOUT", "15"))
        except ValueError as e:
            raise ConfigError(f"HTTP_TIMEOUT must be a number: {e}") from e

        return cls(
            anthropic_api_key=env["ANTHROPIC_API_KEY"],
            google_places_api_key=env["GOOGLE_PLACES_API_KEY"],
            google_vision_api_key=env["GOOGLE_VISION_API_KEY"],
            google_translate_api_key=env["GOOGLE_TRANSLATE_API_KEY"],
            google_custom_search_api_key=env["GOOGLE_CUSTOM_SEARCH_API_KEY"],
            google_custom_search_engine_id=env["GOOGLE_CUSTOM_SEARCH_ENGINE_ID"],
            line_access_token=env["LINE_ACCESS_TOKEN"],
            llm_model=env.get("LLM_MODEL") or DEFAULT_LLM_MODEL,
            db_path=resolve_db_path(env.get("DATABASE_URL")),
            trip_planner_url=env.get("TRIP_PLANNER_URL") or DEFAULT_TRIP_PLANNER_URL,
            http_timeout=http_timeout,
        )
