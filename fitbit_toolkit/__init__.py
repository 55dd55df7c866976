"""Minimal client for the Fitbit Web API."""

from fitbit_toolkit.auth import (
    BearerAuth,
    ConfigSource,
    OAuth2Config,
    OAuth2TokenSource,
    StaticTokenSource,
    TokenSource,
)
from fitbit_toolkit.clients import BaseClient, FitbitClient
from fitbit_toolkit.exceptions import (
    DecodeError,
    FitbitError,
    MalformedInput,
    RequestFailed,
    TransportError,
)
from fitbit_toolkit.models import (
    ActivitySummary,
    Distance,
    Goals,
    Summary,
    User,
    UserProfile,
)

__version__ = "0.1.0"

__all__ = [
    "ActivitySummary",
    "BaseClient",
    "BearerAuth",
    "ConfigSource",
    "DecodeError",
    "Distance",
    "FitbitClient",
    "FitbitError",
    "Goals",
    "MalformedInput",
    "OAuth2Config",
    "OAuth2TokenSource",
    "RequestFailed",
    "StaticTokenSource",
    "Summary",
    "TokenSource",
    "TransportError",
    "User",
    "UserProfile",
]
