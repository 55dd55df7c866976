"""OAuth2 support for the Fitbit API.

A ``TokenSource`` hands out a valid bearer credential on demand. The
``OAuth2TokenSource`` delegates the refresh-token grant to requests-oauthlib
and reports new tokens through an optional ``token_updater`` callback so the
caller can persist them. ``ConfigSource`` turns application credentials and
a previously obtained token into a ready-to-use ``FitbitClient``.
"""

import logging
import os
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

import requests
from oauthlib.oauth2 import OAuth2Error
from requests.auth import AuthBase, HTTPBasicAuth
from requests_oauthlib import OAuth2Session

from fitbit_toolkit.clients.fitbit import FitbitClient
from fitbit_toolkit.config import Config
from fitbit_toolkit.exceptions import TransportError

logger = logging.getLogger(__name__)

TokenUpdater = Callable[[Dict[str, Any]], None]


class TokenSource(ABC):
    """Supplies a valid OAuth2 token on demand."""

    @abstractmethod
    def token(self) -> Dict[str, Any]:
        """Return a token dictionary that is valid right now."""
        pass

    def access_token(self) -> str:
        return self.token()["access_token"]


class StaticTokenSource(TokenSource):
    """Always returns the same token. Never refreshes."""

    def __init__(self, token: Dict[str, Any]):
        self._token = dict(token)

    def token(self) -> Dict[str, Any]:
        return dict(self._token)


@dataclass(frozen=True)
class OAuth2Config:
    """OAuth2 application credentials and endpoints."""

    client_id: str
    client_secret: str
    redirect_uri: Optional[str] = None
    scopes: Tuple[str, ...] = Config.DEFAULT_SCOPES
    authorize_url: str = Config.AUTHORIZE_URL
    token_url: str = Config.TOKEN_URL

    @classmethod
    def from_env(cls) -> "OAuth2Config":
        """Build a config from FITBIT_* environment variables."""
        scopes = os.environ.get("FITBIT_SCOPES")
        return cls(
            client_id=os.environ.get("FITBIT_CLIENT_ID", ""),
            client_secret=os.environ.get("FITBIT_CLIENT_SECRET", ""),
            redirect_uri=os.environ.get("FITBIT_REDIRECT_URI") or None,
            scopes=tuple(scopes.split()) if scopes else Config.DEFAULT_SCOPES,
        )


class OAuth2TokenSource(TokenSource):
    """Token source that refreshes expired tokens with the refresh-token grant."""

    def __init__(
        self,
        config: OAuth2Config,
        token: Dict[str, Any],
        token_updater: Optional[TokenUpdater] = None,
    ):
        self.config = config
        self._token = dict(token)
        self._token_updater = token_updater
        # Concurrent callers must not refresh the same token twice
        self._lock = threading.Lock()

    def expired(self) -> bool:
        expires_at = self._token.get("expires_at")
        if expires_at is None:
            return False
        return float(expires_at) - Config.TOKEN_EXPIRY_LEEWAY <= time.time()

    def token(self) -> Dict[str, Any]:
        with self._lock:
            if self.expired():
                self._refresh()
            return dict(self._token)

    def _refresh(self):
        refresh_token = self._token.get("refresh_token")
        if not refresh_token:
            logger.error("Access token expired and no refresh token is available")
            raise TransportError("access token expired and no refresh token is available")

        logger.info("Access token expired, refreshing")
        oauth = OAuth2Session(self.config.client_id, token=self._token)
        new_token = oauth.refresh_token(
            self.config.token_url,
            refresh_token=refresh_token,
            auth=HTTPBasicAuth(self.config.client_id, self.config.client_secret),
            timeout=Config.REQUEST_TIMEOUT,
        )
        self._token = dict(new_token)
        logger.info("Access token refreshed")

        if self._token_updater is not None:
            self._token_updater(dict(self._token))


class BearerAuth(AuthBase):
    """Attach ``Authorization: Bearer <token>`` from a token source."""

    def __init__(self, token_source: TokenSource):
        self.token_source = token_source

    def __call__(self, r):
        r.headers["Authorization"] = f"Bearer {self.token_source.access_token()}"
        return r


class ConfigSource:
    """Creates authenticated clients from an OAuth2 application config."""

    def __init__(self, config: OAuth2Config):
        self.config = config

    def _oauth_session(self, state: Optional[str] = None) -> OAuth2Session:
        return OAuth2Session(
            self.config.client_id,
            redirect_uri=self.config.redirect_uri,
            scope=list(self.config.scopes),
            state=state,
        )

    def authorization_url(self, state: Optional[str] = None) -> Tuple[str, str]:
        """Return the consent URL and the state it carries."""
        return self._oauth_session(state).authorization_url(self.config.authorize_url)

    def exchange(self, code: str) -> Dict[str, Any]:
        """Trade an authorization code for a token."""
        try:
            token = self._oauth_session().fetch_token(
                self.config.token_url,
                code=code,
                auth=HTTPBasicAuth(self.config.client_id, self.config.client_secret),
                timeout=Config.REQUEST_TIMEOUT,
            )
        except (requests.RequestException, OAuth2Error) as e:
            logger.error(f"Authorization code exchange failed: {e}")
            raise TransportError(f"authorization code exchange failed: {e}") from e

        logger.info("Obtained access token from authorization code")
        return dict(token)

    def token_source(
        self, token: Dict[str, Any], token_updater: Optional[TokenUpdater] = None
    ) -> OAuth2TokenSource:
        return OAuth2TokenSource(self.config, token, token_updater=token_updater)

    def new_client(
        self,
        token: Dict[str, Any],
        base_url: Optional[str] = None,
        token_updater: Optional[TokenUpdater] = None,
    ) -> FitbitClient:
        """Create a client that authenticates every request with ``token``.

        No network calls happen here; the token is only checked, and
        refreshed if needed, when a request is sent.
        """
        session = requests.Session()
        session.auth = BearerAuth(self.token_source(token, token_updater))
        return FitbitClient(session, base_url=base_url)
