"""Configuration management for fitbit_toolkit."""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _get_int_env(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class Config:
    """Library configuration."""

    # Fitbit Web API, version 1
    BASE_URL = os.environ.get("FITBIT_API_BASE_URL", "https://api.fitbit.com/1")

    # OAuth2 endpoints
    AUTHORIZE_URL = "https://www.fitbit.com/oauth2/authorize"
    TOKEN_URL = "https://api.fitbit.com/oauth2/token"
    DEFAULT_SCOPES = ("activity", "profile")

    # Sent as User-Agent on every request
    USER_AGENT = "fitbit-toolkit:v0.1.0"

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Transport
    REQUEST_TIMEOUT = _get_int_env("FITBIT_REQUEST_TIMEOUT", 30)  # seconds

    # Refresh tokens this many seconds before they actually expire
    TOKEN_EXPIRY_LEEWAY = _get_int_env("FITBIT_TOKEN_EXPIRY_LEEWAY", 60)
