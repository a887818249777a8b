"""
Custom exceptions for the ss12000client package.

This module provides SS12000-specific exceptions that wrap httpx exceptions
to give meaningful error context for school data API operations.
"""

import functools
import inspect
from typing import (
    Callable,
    ParamSpec,
    TypeVar,
    Any,
    Dict,
    List,
    Tuple,
    Type,
    Optional,
    Union,
    cast,
    overload,
    Awaitable,
)

import httpx

P = ParamSpec("P")
T = TypeVar("T")


# Base SS12000 exceptions
class SS12000Error(Exception):
    """Base exception for all SS12000-related errors."""

    pass


class SS12000ConfigurationError(SS12000Error, ValueError):
    """
    Raised when the client is constructed with an invalid configuration,
    such as an empty or non-absolute base URL.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"SS12000 configuration error: {self.message}"


class SS12000ClientClosed(SS12000Error):
    """
    Raised when an operation is attempted on a closed SS12000Client.
    """

    def __init__(self, message: str = "The SS12000Client is closed") -> None:
        super().__init__(message)


# Connection and network errors
class SS12000ConnectionError(SS12000Error, httpx.RequestError):
    """
    Base class for transport-level errors.
    Raised when no response was received from the SS12000 service.
    """

    def __init__(self, message: str, *, request: httpx.Request) -> None:
        super().__init__(message)
        self.message = message
        self.request = request

    def __str__(self) -> str:
        return f"SS12000 connection error: {self.message}"


class SS12000SystemUnavailableError(SS12000ConnectionError):
    """
    Raised when the SS12000 service cannot be reached at all.
    """

    def __str__(self) -> str:
        return f"SS12000 service unavailable: {self.message}"


class SS12000TimeoutError(SS12000ConnectionError, httpx.TimeoutException):
    """
    Raised when a request to the SS12000 service times out.
    """

    def __str__(self) -> str:
        return f"SS12000 request timeout: {self.message}"


class SS12000ProtocolError(SS12000ConnectionError):
    """
    Raised for HTTP protocol-level errors, e.g. a connection dropped mid-response.
    """

    def __str__(self) -> str:
        return f"SS12000 protocol error: {self.message}"


class SS12000NetworkError(SS12000ConnectionError):
    """
    Raised for general network issues: DNS resolution, refused connections, resets.
    """

    def __str__(self) -> str:
        return f"SS12000 network error: {self.message}"


# HTTP Status-based exceptions
class SS12000HTTPError(SS12000Error, httpx.HTTPStatusError):
    """
    Base class for SS12000 HTTP status errors.

    The raw response body is kept as-is in ``body``; error payloads are never
    decoded as JSON since their shape is not guaranteed by the standard.
    """

    def __init__(self, message: str, *, request: httpx.Request, response: httpx.Response) -> None:
        super().__init__(message, request=request, response=response)
        self.message = message

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def body(self) -> str:
        """The literal response body text."""
        return self.response.text

    def __str__(self) -> str:
        return f"SS12000 HTTP error: {self.message} (HTTP {self.status_code})"


# 4xx Client Errors
class SS12000ClientError(SS12000HTTPError):
    """
    Base class for 4xx errors returned by the SS12000 service.
    """

    def __str__(self) -> str:
        return f"SS12000 client error: {self.message} (HTTP {self.status_code})"


class SS12000BadRequestError(SS12000ClientError):
    """
    Raised for 400 bad request errors.
    Malformed request syntax or invalid filter parameters.
    """

    def __init__(
        self,
        message: str = "Bad request - malformed request or invalid parameters",
        *,
        request: httpx.Request,
        response: httpx.Response,
    ) -> None:
        super().__init__(message, request=request, response=response)

    def __str__(self) -> str:
        return f"SS12000 bad request: {self.message}"


class SS12000AuthenticationError(SS12000ClientError):
    """
    Raised for 401 authentication failures.
    Missing, invalid or expired bearer token.
    """

    def __init__(
        self,
        message: str = "Authentication failed - missing, invalid or expired token",
        *,
        request: httpx.Request,
        response: httpx.Response,
    ) -> None:
        super().__init__(message, request=request, response=response)

    def __str__(self) -> str:
        return f"SS12000 authentication failed: {self.message}"


class SS12000PermissionError(SS12000ClientError):
    """
    Raised for 403 permission denied errors.
    The token is valid but not allowed to access the requested data.
    """

    def __init__(
        self,
        message: str = "Permission denied - token lacks access to the requested data",
        *,
        request: httpx.Request,
        response: httpx.Response,
    ) -> None:
        super().__init__(message, request=request, response=response)

    def __str__(self) -> str:
        return f"SS12000 permission denied: {self.message}"


class SS12000ResourceNotFoundError(SS12000ClientError):
    """
    Raised for 404 not found errors.
    The requested record does not exist, or the service does not implement the endpoint.
    """

    def __init__(
        self,
        message: str = "Resource not found - record or endpoint missing for the request",
        *,
        request: httpx.Request,
        response: httpx.Response,
    ) -> None:
        super().__init__(message, request=request, response=response)

    def __str__(self) -> str:
        return f"SS12000 resource not found: {self.message}"


class SS12000DataConflictError(SS12000ClientError):
    """
    Raised for 409 conflict errors.
    """

    def __init__(
        self,
        message: str = "Data conflict - record may already exist",
        *,
        request: httpx.Request,
        response: httpx.Response,
    ) -> None:
        super().__init__(message, request=request, response=response)

    def __str__(self) -> str:
        return f"SS12000 data conflict: {self.message}"


class SS12000ValidationError(SS12000ClientError):
    """
    Raised for 422 validation errors.
    """

    def __init__(
        self,
        message: str = "Validation failed - payload rejected by the service",
        *,
        request: httpx.Request,
        response: httpx.Response,
    ) -> None:
        super().__init__(message, request=request, response=response)

    def __str__(self) -> str:
        return f"SS12000 validation error: {self.message}"


class SS12000RateLimitError(SS12000ClientError):
    """
    Raised for 429 rate limiting errors.
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded - too many requests",
        *,
        request: httpx.Request,
        response: httpx.Response,
    ) -> None:
        super().__init__(message, request=request, response=response)

    def __str__(self) -> str:
        return f"SS12000 rate limit exceeded: {self.message}"


# 5xx Server Errors
class SS12000ServerError(SS12000HTTPError):
    """
    Base class for 5xx errors returned by the SS12000 service.
    """

    def __str__(self) -> str:
        return f"SS12000 server error: {self.message} (HTTP {self.status_code})"


class SS12000InternalServerError(SS12000ServerError):
    """
    Raised for 500 internal server errors.
    """

    def __init__(
        self,
        message: str = "Internal server error - unexpected service error",
        *,
        request: httpx.Request,
        response: httpx.Response,
    ) -> None:
        super().__init__(message, request=request, response=response)

    def __str__(self) -> str:
        return f"SS12000 internal server error: {self.message}"


class SS12000BadGatewayError(SS12000ServerError):
    """
    Raised for 502 bad gateway errors.
    """

    def __init__(
        self,
        message: str = "Bad gateway - invalid response from upstream service",
        *,
        request: httpx.Request,
        response: httpx.Response,
    ) -> None:
        super().__init__(message, request=request, response=response)

    def __str__(self) -> str:
        return f"SS12000 bad gateway: {self.message}"


class SS12000ServiceUnavailableError(SS12000ServerError):
    """
    Raised for 503 service unavailable errors.
    """

    def __init__(
        self,
        message: str = "Service unavailable - SS12000 service temporarily unavailable",
        *,
        request: httpx.Request,
        response: httpx.Response,
    ) -> None:
        super().__init__(message, request=request, response=response)

    def __str__(self) -> str:
        return f"SS12000 service unavailable: {self.message}"


class SS12000GatewayTimeoutError(SS12000ServerError):
    """
    Raised for 504 gateway timeout errors.
    """

    def __init__(
        self,
        message: str = "Gateway timeout - upstream service did not respond in time",
        *,
        request: httpx.Request,
        response: httpx.Response,
    ) -> None:
        super().__init__(message, request=request, response=response)

    def __str__(self) -> str:
        return f"SS12000 gateway timeout: {self.message}"


# Response body errors
class SS12000DecodeError(SS12000Error):
    """
    Raised when a successful response body is not valid JSON.

    Attributes:
        cause (Exception): The original decoding exception.
        response (httpx.Response | None): The response whose body failed to decode.
    """

    def __init__(
        self,
        message: str,
        *,
        cause: Exception,
        response: Optional[httpx.Response] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.response = response

    def __str__(self) -> str:
        return f"SS12000 decode error: {self.message}"


# Exception mapping dictionaries
_HTTP_STATUS_EXCEPTIONS: Dict[int, Type[SS12000HTTPError]] = {
    # 4xx Client Errors
    400: SS12000BadRequestError,
    401: SS12000AuthenticationError,
    403: SS12000PermissionError,
    404: SS12000ResourceNotFoundError,
    409: SS12000DataConflictError,
    422: SS12000ValidationError,
    429: SS12000RateLimitError,
    # 5xx Server Errors
    500: SS12000InternalServerError,
    502: SS12000BadGatewayError,
    503: SS12000ServiceUnavailableError,
    504: SS12000GatewayTimeoutError,
}

# Checked in order: httpx.ConnectTimeout is both a timeout and a transport error
_CONNECTION_EXCEPTIONS: List[Tuple[Type[httpx.RequestError], Type[SS12000ConnectionError]]] = [
    (httpx.TimeoutException, SS12000TimeoutError),
    (httpx.ConnectError, SS12000SystemUnavailableError),
    (httpx.RemoteProtocolError, SS12000ProtocolError),
    (httpx.NetworkError, SS12000NetworkError),
]


def _get_error_detail(response: Optional[httpx.Response]) -> str:
    """Extract error details from the response, safely handling any exceptions."""
    if response is None:
        return "No response available"
    try:
        error_text = response.text or "No error details in response"
        # Limit length to prevent extremely long error messages
        return error_text[:500] + "..." if len(error_text) > 500 else error_text
    except Exception:
        return "Unable to read error details from response"


def _create_ss12000_exception(
    original_error: Union[httpx.RequestError, httpx.HTTPStatusError],
) -> SS12000Error:
    """Create appropriate SS12000 exception based on the original httpx error."""

    # Handle HTTP status errors (have response)
    if isinstance(original_error, httpx.HTTPStatusError):
        status_code = original_error.response.status_code
        error_detail = _get_error_detail(original_error.response)

        if status_code in _HTTP_STATUS_EXCEPTIONS:
            http_exception_class: Type[SS12000HTTPError] = _HTTP_STATUS_EXCEPTIONS[status_code]
            return http_exception_class(
                error_detail, request=original_error.request, response=original_error.response
            )

        if 400 <= status_code < 500:
            return SS12000ClientError(
                f"Client error: {error_detail}",
                request=original_error.request,
                response=original_error.response,
            )
        elif 500 <= status_code < 600:
            return SS12000ServerError(
                f"Server error: {error_detail}",
                request=original_error.request,
                response=original_error.response,
            )
        else:
            return SS12000HTTPError(
                f"HTTP error: {error_detail}",
                request=original_error.request,
                response=original_error.response,
            )

    # Handle connection errors (no response)
    req_err = cast(httpx.RequestError, original_error)
    try:
        request = req_err.request
    except RuntimeError:
        # httpx raises when the error was never bound to a request
        request = None
    for httpx_class, exception_class in _CONNECTION_EXCEPTIONS:
        if isinstance(req_err, httpx_class):
            return exception_class(str(req_err), request=request)
    return SS12000ConnectionError(f"Connection error: {req_err}", request=request)


@overload
def ss12000_errors(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
    ...  # pragma: no cover


@overload
def ss12000_errors(func: Callable[P, T]) -> Callable[P, T]:
    ...  # pragma: no cover


def ss12000_errors(func: Callable[P, Any]) -> Callable[P, Any]:
    """
    Decorator that converts httpx exceptions to SS12000-specific exceptions.

    This decorator catches both httpx.RequestError (transport issues) and
    httpx.HTTPStatusError (HTTP status errors) and re-raises them as the
    matching SS12000 exception, chained to the original error.

    Works with both synchronous and asynchronous functions.

    Usage:
        >>> @ss12000_errors
        ... async def get_person(self, person_id: str):
        ...     response = await self.async_httpx_client.get(f"/persons/{person_id}")
        ...     response.raise_for_status()
        ...     return response.json()
    """
    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except SS12000Error:
                raise
            except (httpx.RequestError, httpx.HTTPStatusError) as e:
                ss12000_exception = _create_ss12000_exception(e)
                raise ss12000_exception from e

        return cast(Callable[P, Awaitable[T]], async_wrapper)
    else:

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except SS12000Error:
                raise
            except (httpx.RequestError, httpx.HTTPStatusError) as e:
                ss12000_exception = _create_ss12000_exception(e)
                raise ss12000_exception from e

        return cast(Callable[P, T], sync_wrapper)
