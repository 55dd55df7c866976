"""Request building and execution shared by API clients."""

import json
import logging
from typing import Any, Optional, Type
from urllib.parse import urlsplit

import requests
from oauthlib.oauth2 import OAuth2Error

from fitbit_toolkit.config import Config
from fitbit_toolkit.exceptions import (
    DecodeError,
    MalformedInput,
    RequestFailed,
    TransportError,
)
from fitbit_toolkit.models import Record

logger = logging.getLogger(__name__)


def join_url(base_url: str, path: str) -> str:
    """Join an API path onto the base URL with exactly one slash between them.

    Absolute URLs are returned unchanged.
    """
    if urlsplit(path).scheme:
        return path
    if not path:
        return base_url
    return base_url.rstrip("/") + "/" + path.lstrip("/")


class BaseClient:
    """Client bound to an authenticated session and a base URL."""

    def __init__(self, session: requests.Session, base_url: Optional[str] = None):
        self.session = session
        self.base_url = base_url or Config.BASE_URL

    def new_request(self, method: str, path: str, body: Any = None) -> requests.Request:
        """Build a request for ``path`` relative to the base URL.

        ``body``, when given, is sent as JSON. Raises MalformedInput if the
        body cannot be encoded or the address is not a valid URL.
        """
        url = join_url(self.base_url, path)
        headers = {"User-Agent": Config.USER_AGENT}

        data = None
        if body is not None:
            if isinstance(body, Record):
                body = body.to_dict()
            try:
                data = json.dumps(body, allow_nan=False).encode("utf-8")
            except (TypeError, ValueError) as e:
                logger.error(f"Cannot encode request body for {url}: {e}")
                raise MalformedInput(f"cannot encode request body: {e}") from e
            headers["Content-Type"] = "application/json"

        request = requests.Request(method, url, headers=headers, data=data)
        try:
            request.prepare()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Cannot build request for {url}: {e}")
            raise MalformedInput(f"cannot build request for {url!r}: {e}") from e

        return request

    def do(self, request: requests.Request, into: Optional[Type[Record]] = None):
        """Send ``request`` and decode the JSON response into ``into``.

        Returns the decoded record, or None when ``into`` is not given. The
        response is always closed before returning.
        """
        try:
            response = self.session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.data,
                timeout=Config.REQUEST_TIMEOUT,
            )
        except (requests.RequestException, OAuth2Error) as e:
            logger.error(f"{request.method} {request.url} failed: {e}")
            raise TransportError(f"{request.method} {request.url} failed: {e}") from e

        try:
            logger.debug(f"{request.method} {request.url} -> {response.status_code}")

            if response.status_code < 200 or response.status_code > 299:
                logger.error(
                    f"{request.method} {request.url} returned {response.status_code}"
                )
                raise RequestFailed(response)

            if into is None:
                return None

            try:
                payload = response.json()
            except ValueError as e:
                logger.error(f"Response from {request.url} is not valid JSON: {e}")
                raise DecodeError(f"response body is not valid JSON: {e}") from e

            return into.from_dict(payload)
        finally:
            response.close()
