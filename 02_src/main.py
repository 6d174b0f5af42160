"""Main entry point for Tripster."""

import os

import uvicorn
from dotenv import load_dotenv

from tripster.api import create_fastapi_app
from tripster.app import Application
from tripster.config import PROJECT_ROOT, Settings
from tripster.logging_config import setup_logging


def main():
    """Run the application."""
    load_dotenv(PROJECT_ROOT / ".env")
    setup_logging()

    # Fails fast with ConfigError when a required variable is missing
    settings = Settings.from_env()

    api_host = os.getenv("API_HOST", "0.0.0.0")
    api_port = int(os.getenv("API_PORT", "5000"))

    app = create_fastapi_app(Application(settings))

    uvicorn.run(
        app,
        host=api_host,
        port=api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
