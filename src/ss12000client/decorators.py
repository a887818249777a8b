"""This module contains decorators for the ss12000client package."""

import inspect
import logging
from functools import wraps

from ss12000client.exceptions import SS12000ClientClosed

logger = logging.getLogger(__name__)


def use_client_session(func):
    """
    Decorator to make sure an open httpx.AsyncClient is available on the
    SS12000Client before the decorated method runs.

    The client is created on first use and then shared by every call, so
    concurrent requests reuse one connection pool. Calls on a closed
    SS12000Client raise SS12000ClientClosed.

    This decorator assumes it is decorating a coroutine method on an SS12000Client object
    """
    if not inspect.iscoroutinefunction(func):
        raise TypeError(f"use_client_session requires a coroutine function, got {func!r}")

    @wraps(func)
    async def async_wrapper(self, *args, **kwargs):
        if self.is_closed:
            raise SS12000ClientClosed()
        if (
            getattr(self, "async_httpx_client", None) is None
            or self.async_httpx_client.is_closed
        ):
            logger.debug("Opening new httpx.AsyncClient session")
            self.async_httpx_client = self.get_ss12000_http_client_async()
        return await func(self, *args, **kwargs)

    return async_wrapper
