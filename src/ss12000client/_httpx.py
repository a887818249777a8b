from __future__ import annotations

import httpx

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Generator
    import ssl


@dataclass(frozen=True)
class SS12000ConnectionParameters:
    """Parameters required to connect to an SS12000 service.

    Attributes:
        base_url (str): The base URL of the service, without a trailing slash.
        auth_token (str | None): Bearer token sent with every request, if any.
        ssl_verify (bool | ssl.SSLContext): Whether to verify SSL certificates.
        timeout (httpx.Timeout): Configured timeout object for HTTP requests.
    """

    base_url: str
    auth_token: Optional[str]
    ssl_verify: bool | ssl.SSLContext
    timeout: httpx.Timeout


class SS12000Auth(httpx.Auth):
    """Bearer token authentication for SS12000 services.

    The token comes from the immutable connection parameters, so a single
    instance is safe to share between concurrent requests.
    Works with both synchronous and asynchronous httpx clients.
    """

    def __init__(self, params: SS12000ConnectionParameters):
        self._params = params

    @property
    def auth_token(self) -> Optional[str]:
        return self._params.auth_token

    def auth_flow(self, request: httpx.Request) -> "Generator[httpx.Request, httpx.Response, None]":
        # Allows a per-request Authorization header override
        if self.auth_token and "Authorization" not in request.headers:
            request.headers["Authorization"] = f"Bearer {self.auth_token}"
        yield request
