from __future__ import annotations

import logging
import os
from http import HTTPStatus
from typing import (
    Any,
    AsyncGenerator,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Type,
    Union,
    cast,
    TYPE_CHECKING,
)
from urllib.parse import quote

import httpx

from ss12000client._httpx import SS12000Auth, SS12000ConnectionParameters
from ss12000client.decorators import use_client_session
from ss12000client.encoding import (
    CONTENT_TYPE_JSON,
    JSON_DECODE_ERRORS,
    dump_json,
    encode_query_string,
    load_json,
)
from ss12000client.exceptions import (
    SS12000ClientClosed,
    SS12000ConfigurationError,
    SS12000DecodeError,
    ss12000_errors,
)
from ss12000client.queries import (
    AbsencesQuery,
    ActivitiesQuery,
    AggregatedAttendanceQuery,
    AttendanceEventsQuery,
    AttendanceSchedulesQuery,
    AttendancesQuery,
    CalendarEventsQuery,
    DeletedEntitiesQuery,
    DutiesQuery,
    GradesQuery,
    GroupsQuery,
    OrganisationsQuery,
    PersonsQuery,
    PlacementsQuery,
    ProgrammesQuery,
    Query,
    ResourcesQuery,
    RoomsQuery,
    SchoolUnitOfferingsQuery,
    StudyPlansQuery,
    SubscriptionsQuery,
    SyllabusesQuery,
)

if TYPE_CHECKING:  # pragma: no cover
    import ssl


SUPPORTED_METHODS = ("GET", "POST", "PATCH", "DELETE")

# Default timeout for every phase, overridden per phase by TIMEOUT_CONFIG
try:
    timeout_str = os.environ.get("SS12000CLIENT_HTTP_TIMEOUT")
    HTTPX_TIMEOUT = float(timeout_str) if timeout_str is not None else None
except (TypeError, ValueError):
    HTTPX_TIMEOUT = None

USER_AGENT_STRING = "SS12000 Client (ss12000client for Python)"

# Set up logger
logger = logging.getLogger("SS12000Client")

QueryLike = Union[Query, Mapping[str, Any], None]


# Sentinel value for detecting unset timeout parameter
class _TimeoutUnsetType:
    def __repr__(self):
        return "_TIMEOUT_UNSET"


_TIMEOUT_UNSET = _TimeoutUnsetType()


# Timeout configuration with granular control
def _get_timeout_config() -> dict:
    """Get timeout configuration from environment variables or defaults.

    Returns:
        dict: Timeout configuration dictionary with connect, read, write, and pool timeouts.
    """
    return {
        "connect": float(os.environ["SS12000CLIENT_CONNECT_TIMEOUT"])
        if "SS12000CLIENT_CONNECT_TIMEOUT" in os.environ
        else None,
        "read": float(os.environ["SS12000CLIENT_READ_TIMEOUT"])
        if "SS12000CLIENT_READ_TIMEOUT" in os.environ
        else None,
        "write": float(os.environ["SS12000CLIENT_WRITE_TIMEOUT"])
        if "SS12000CLIENT_WRITE_TIMEOUT" in os.environ
        else None,
        "pool": float(os.environ["SS12000CLIENT_POOL_TIMEOUT"])
        if "SS12000CLIENT_POOL_TIMEOUT" in os.environ
        else None,
    }


TIMEOUT_CONFIG = _get_timeout_config()


class SS12000Client:
    """An asynchronous Python client for SS12000 school data APIs

    SS12000 is the Swedish standard for exchanging school data (organisations,
    persons, groups, activities, attendance, grades, ...) between school
    systems. Every method on this class maps to exactly one endpoint of the
    standard and returns the service's JSON unchanged.

    Initialization:
        SS12000Client is designed to be used as an async context manager

        >>> from ss12000client import SS12000Client, OrganisationsQuery
        >>> async with SS12000Client(
        ...     "https://example.com/ss12000/v2.0",
        ...     "my-bearer-token",
        ... ) as client:
        ...     page = await client.get_organisations(OrganisationsQuery(limit=2))
        ...     print(page["data"][0]["id"])

    Parameters:
        base_url (str): The base URL of the SS12000 service, e.g. ``https://host/v2.0``.
        auth_token (str, optional): Bearer token sent as ``Authorization: Bearer <token>``.
        ssl_verify (bool | ssl.SSLContext), keyword-only: Whether to verify SSL certificates, or a custom SSL context. Default is True.
        timeout (float | dict | httpx.Timeout | None, optional), keyword-only: Timeout configuration for HTTP requests.
        transport (httpx.AsyncBaseTransport, optional), keyword-only: Transport to use instead of the network, e.g. ``httpx.MockTransport``.

    Raises:
        SS12000ConfigurationError: If base_url is empty or not an absolute http(s) URL.
    """  # noqa: E501

    def __init__(
        self,
        base_url: str,
        auth_token: str | None = None,
        *,
        ssl_verify: bool | ssl.SSLContext = True,
        timeout: float | dict | httpx.Timeout | None | _TimeoutUnsetType = _TIMEOUT_UNSET,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        base_url = self._validate_base_url(base_url)
        if not base_url.startswith("https://"):
            logger.warning(
                "Base URL does not use HTTPS. All communication should occur over HTTPS"
                " in production environments."
            )
        if not auth_token or not auth_token.strip():
            logger.warning(
                "Authentication token is missing. Calls may fail if the API requires authentication."
            )
            auth_token = None

        # Determine timeout value to use
        if timeout is _TIMEOUT_UNSET:
            # User didn't specify timeout, use environment variables
            timeout_value: httpx.Timeout = SS12000Client._construct_timeout_from_env()
        elif timeout is None:
            # User explicitly passed None, ignore environment variables
            timeout_value = httpx.Timeout(None)
        else:
            timeout_value = SS12000Client._construct_timeout(
                cast(float | dict | httpx.Timeout, timeout)
            )

        self.ss12000_parameters: SS12000ConnectionParameters = SS12000ConnectionParameters(
            base_url=base_url,
            auth_token=auth_token,
            ssl_verify=ssl_verify,
            timeout=timeout_value,
        )
        self.ss12000_auth: SS12000Auth = SS12000Auth(self.ss12000_parameters)
        self.base_headers = {
            "Accept": CONTENT_TYPE_JSON,
            "User-Agent": USER_AGENT_STRING,
        }
        self._transport = transport
        self.async_httpx_client: Optional[httpx.AsyncClient] = None
        self.is_closed = False

    def __repr__(self) -> str:
        return f"SS12000Client at {self.base_url}"

    async def __aenter__(self):
        """Asynchronous context manager entry for SS12000Client.

        Returns:
            SS12000Client: The SS12000Client instance.

        Note:
            Instantiates the shared httpx.AsyncClient using
            `self.get_ss12000_http_client_async()`.
        """
        self.validate_client_open()
        if self.async_httpx_client is None or self.async_httpx_client.is_closed:
            self.async_httpx_client = self.get_ss12000_http_client_async()
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        """Asynchronous context manager exit method.

        Closes the shared httpx.AsyncClient and marks the SS12000Client as closed.

        Args:
            exc_type: Exception type if an exception occurred.
            exc_value: Exception value if an exception occurred.
            traceback: Traceback if an exception occurred.
        """
        if self.async_httpx_client is not None and not self.async_httpx_client.is_closed:
            await self.async_httpx_client.aclose()
            logger.debug("Closed httpx.AsyncClient session")
        self.is_closed = True

    async def async_close(self) -> None:
        """Manually close the SS12000Client object.

        This should only be used when running SS12000Client outside a context manager.
        """
        await self.__aexit__(None, None, None)

    @staticmethod
    def _validate_base_url(base_url: str) -> str:
        """Check the base URL and strip any trailing slash.

        Raises:
            SS12000ConfigurationError: If the URL is empty or not an absolute http(s) URL.
        """
        if not base_url or not base_url.strip():
            raise SS12000ConfigurationError("Base URL is mandatory for SS12000Client.")
        base_url = base_url.strip().rstrip("/")
        try:
            url = httpx.URL(base_url)
        except httpx.InvalidURL as e:
            raise SS12000ConfigurationError(f"Invalid base URL {base_url!r}: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise SS12000ConfigurationError(
                f"Base URL must be an absolute http(s) URL, got {base_url!r}"
            )
        return base_url

    @staticmethod
    def _construct_timeout_from_env() -> httpx.Timeout:
        """Construct httpx.Timeout object from environment variables only.

        Returns:
            httpx.Timeout: Configured timeout object from environment variables.
                          If no environment configuration is found, returns httpx.Timeout(None).
        """
        default_timeout_config = {k: v for k, v in TIMEOUT_CONFIG.items() if v is not None}

        if not default_timeout_config and HTTPX_TIMEOUT is None:
            return httpx.Timeout(None)

        return httpx.Timeout(HTTPX_TIMEOUT, **default_timeout_config)

    @staticmethod
    def _construct_timeout(timeout: float | dict | httpx.Timeout) -> httpx.Timeout:
        """Construct httpx.Timeout object from user-provided timeout parameter.

        If timeout is a dict, any unspecified values will be replaced by the environment
        default values.

        Args:
            timeout: Timeout configuration - can be float, dict, or httpx.Timeout.

        Returns:
            httpx.Timeout: Configured timeout object.
        """
        if isinstance(timeout, httpx.Timeout):
            return timeout
        elif isinstance(timeout, dict):
            default_timeout_config = {k: v for k, v in TIMEOUT_CONFIG.items() if v is not None}
            merged_timeout = {**default_timeout_config, **timeout}
            return httpx.Timeout(HTTPX_TIMEOUT, **merged_timeout)
        else:
            return httpx.Timeout(timeout)

    @property
    def base_url(self) -> str:
        """The base URL of the SS12000 service, without a trailing slash."""
        return self.ss12000_parameters.base_url

    @property
    def auth_token(self) -> str | None:
        return self.ss12000_parameters.auth_token

    @property
    def ssl_verify(self) -> bool | ssl.SSLContext:
        return self.ss12000_parameters.ssl_verify

    @property
    def http_timeout(self) -> httpx.Timeout:
        """The httpx.Timeout configured during initialization."""
        return self.ss12000_parameters.timeout

    def validate_client_open(self):
        if self.is_closed:
            raise SS12000ClientClosed()

    def get_ss12000_http_client_async(self) -> httpx.AsyncClient:
        """Returns an async httpx client for use in SS12000 communication.

        Creates an asynchronous HTTP client configured with the bearer token
        authentication, default headers, timeout, and SSL verification settings.

        Returns:
            httpx.AsyncClient: Configured async HTTP client for SS12000 API calls.
        """
        return httpx.AsyncClient(
            timeout=self.ss12000_parameters.timeout,
            verify=self.ss12000_parameters.ssl_verify,
            auth=self.ss12000_auth,
            headers=self.base_headers,
            transport=self._transport,
        )

    # --- Request engine ---

    def build_url(self, path: str, query_params: Optional[Mapping[str, Any]] = None) -> str:
        """Build the complete request URL from the base URL, path and query parameters.

        Args:
            path (str): The API endpoint path, e.g. ``/persons``.
            query_params (Mapping[str, Any], optional): Query parameters, encoded with
                :func:`ss12000client.encoding.encode_query_string`.

        Returns:
            str: The complete URL. No ``?`` is appended when there is nothing to encode.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        query_string = encode_query_string(query_params)
        return f"{url}?{query_string}" if query_string else url

    @ss12000_errors
    @use_client_session
    async def execute(
        self,
        method: str,
        path: str,
        query_params: Optional[Mapping[str, Any]] = None,
        body: Any = None,
        *,
        expect_content: bool = True,
    ) -> Any:
        """Send a single request to the SS12000 service and decode the response.

        Args:
            method (str): One of GET, POST, PATCH or DELETE.
            path (str): Server-relative path beginning with ``/``.
            query_params (Mapping[str, Any], optional): Query parameters. None values are skipped.
            body (Any, optional): JSON-serializable request body. Sent with
                ``Content-Type: application/json`` when given.
            expect_content (bool, keyword-only): When False, any successful response
                yields None without reading the body.

        Returns:
            Any: The decoded JSON body, or None for 204 No Content (and for
            ``expect_content=False``).

        Raises:
            ValueError: For an unsupported HTTP method.
            SS12000HTTPError: For responses with status 400 or above. The raw body is kept
                in ``.body``.
            SS12000DecodeError: If a successful response body is not valid JSON.
            SS12000ConnectionError: For transport failures before a response was received.
            SS12000ClientClosed: If the client has been closed.
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")
        url = self.build_url(path, query_params)
        headers = {}
        content = None
        if body is not None:
            content = dump_json(body)
            headers["Content-Type"] = CONTENT_TYPE_JSON
        logger.debug(f"{method} {url}")
        response = await self.async_httpx_client.request(
            method, url, content=content, headers=headers
        )
        logger.debug(f"{method} {url} returned HTTP {response.status_code}")
        return self.handle_response(response, expect_content=expect_content)

    @staticmethod
    def handle_response(response: httpx.Response, *, expect_content: bool = True) -> Any:
        """Map an HTTP response to a decoded result.

        Args:
            response: The HTTP response object.
            expect_content (bool, keyword-only): Whether the body should be decoded.

        Returns:
            Any: The decoded JSON, or None for 204 responses and when no content is expected.

        Raises:
            httpx.HTTPStatusError: For any non-2xx status, including redirects, which are
                not followed (converted to SS12000 exceptions by the calling method's
                @ss12000_errors decorator).
            SS12000DecodeError: If the body is not valid JSON.
        """
        if not response.is_success:
            logger.error(f"API error response ({response.status_code}): {response.text}")
            response.raise_for_status()
        if response.status_code == HTTPStatus.NO_CONTENT or not expect_content:
            return None
        return SS12000Client.handle_json_response(response)

    @staticmethod
    def handle_json_response(response: httpx.Response) -> Any:
        """Decode a JSON response body.

        Uses orjson for faster parsing if enabled, otherwise the standard json library.

        Raises:
            SS12000DecodeError: If the body is empty or not valid JSON.
        """
        try:
            return load_json(response.content)
        except JSON_DECODE_ERRORS as e:
            logger.error(f"Failed to decode JSON response: {response.text[:500]}")
            raise SS12000DecodeError(
                f"Response body is not valid JSON (HTTP {response.status_code})",
                cause=e,
                response=response,
            ) from e

    # --- Parameter marshaling ---

    @staticmethod
    def _build_query_params(
        query: QueryLike, query_class: Optional[Type[Query]] = None
    ) -> Dict[str, Any]:
        """Turn a query structure or mapping into query parameters and check required keys.

        Args:
            query: A Query instance, a mapping of standard parameter names, or None.
            query_class: The Query type the endpoint expects, if any.

        Returns:
            Dict[str, Any]: A fresh mapping of standard parameter names to values.

        Raises:
            TypeError: If query is a Query of the wrong type or not a mapping.
            ValueError: If a required parameter is missing.
        """
        if query is None:
            query_params: Dict[str, Any] = {}
        elif isinstance(query, Query):
            if query_class is not None and not isinstance(query, query_class):
                raise TypeError(
                    f"Expected {query_class.__name__}, got {type(query).__name__}"
                )
            query_params = query.to_query_params()
            query_class = query_class or type(query)
        elif isinstance(query, Mapping):
            query_params = dict(query)
        else:
            raise TypeError(f"Query must be a Query or a mapping, got {type(query).__name__}")

        required_keys = query_class.required_keys if query_class is not None else ()
        missing = [key for key in required_keys if query_params.get(key) is None]
        if missing:
            raise ValueError(f"Missing required query parameter(s): {', '.join(missing)}")
        return query_params

    @staticmethod
    def _expansion_params(
        expand: Optional[Sequence[str]] = None, expand_reference_names: bool = False
    ) -> Dict[str, Any]:
        if isinstance(expand, str):
            expand = [expand]
        return {
            "expand": list(expand) if expand is not None else None,
            "expandReferenceNames": True if expand_reference_names else None,
        }

    @staticmethod
    def _id_list(ids: Optional[Iterable[str]], name: str = "ids") -> List[str]:
        if ids is None:
            raise ValueError(f"{name} is required")
        if isinstance(ids, str):
            ids = [ids]
        id_list = [str(i) for i in ids]
        if not id_list:
            raise ValueError(f"At least one value is required in {name}")
        return id_list

    @staticmethod
    def _optional_id_list(ids: Optional[Iterable[str]]) -> List[str]:
        if ids is None:
            return []
        if isinstance(ids, str):
            ids = [ids]
        return [str(i) for i in ids]

    @staticmethod
    def _resource_path(resource: str, resource_id: str) -> str:
        if resource_id is None or not str(resource_id).strip():
            raise ValueError(f"An id is required for /{resource}/{{id}}")
        return f"/{resource}/{quote(str(resource_id), safe='')}"

    @staticmethod
    def _require_body(body: Any) -> Any:
        if body is None:
            raise ValueError("A request body is required")
        return body

    async def _list(self, path: str, query: QueryLike, query_class: Type[Query]) -> Any:
        return await self.execute("GET", path, self._build_query_params(query, query_class))

    async def _lookup(
        self,
        resource: str,
        ids: Iterable[str],
        expand: Optional[Sequence[str]] = None,
        expand_reference_names: bool = False,
    ) -> Any:
        body = {"ids": self._id_list(ids)}
        return await self.execute(
            "POST",
            f"/{resource}/lookup",
            self._expansion_params(expand, expand_reference_names),
            body,
        )

    async def _get_by_id(
        self,
        resource: str,
        resource_id: str,
        expand: Optional[Sequence[str]] = None,
        expand_reference_names: bool = False,
    ) -> Any:
        return await self.execute(
            "GET",
            self._resource_path(resource, resource_id),
            self._expansion_params(expand, expand_reference_names),
        )

    async def _delete(self, resource: str, resource_id: str) -> None:
        await self.execute(
            "DELETE", self._resource_path(resource, resource_id), expect_content=False
        )

    # --- Pagination ---

    async def get_all(
        self, path: str, query: QueryLike = None, *, limit: Optional[int] = None
    ) -> AsyncGenerator[Dict[str, Any], None]:
        """Iterate over every record of a list endpoint, following ``pageToken``.

        The first request carries the full query. Every following request only
        carries ``pageToken`` (and ``limit``), since the standard does not allow
        combining a page token with other filters.

        Args:
            path (str): List endpoint path, e.g. ``/persons``.
            query: Query structure or mapping for the first request.
            limit (int, optional), keyword-only: Page size. Overrides ``limit`` in query.

        Yields:
            Dict[str, Any]: Records from the ``data`` array of each page.

        Raises:
            SS12000DecodeError: If a page is not a JSON object.

        Example:
            >>> async for person in client.get_all("/persons", PersonsQuery(civic_no="19000101-0000")):
            ...     print(person["id"])
        """
        query_params = self._build_query_params(query)
        if limit is not None:
            query_params["limit"] = limit
        page_limit = query_params.get("limit")
        while True:
            page = await self.execute("GET", path, query_params)
            if not isinstance(page, Mapping):
                raise SS12000DecodeError(
                    f"Expected a paged JSON object from {path}, got {type(page).__name__}",
                    cause=TypeError(type(page).__name__),
                )
            for record in page.get("data") or []:
                yield record
            page_token = page.get("pageToken")
            if not page_token:
                return
            logger.debug(f"Fetching next page of {path}")
            query_params = {"pageToken": page_token, "limit": page_limit}

    # --- Organisations ---

    async def get_organisations(self, query: QueryLike = None) -> Any:
        """GET /organisations

        Args:
            query (OrganisationsQuery | Mapping, optional): Filters, sorting and paging.

        Returns:
            Any: The paged response, ``{"data": [...], "pageToken": ...}``.
        """
        return await self._list("/organisations", query, OrganisationsQuery)

    async def lookup_organisations(
        self, ids: Iterable[str], expand_reference_names: bool = False
    ) -> Any:
        """POST /organisations/lookup

        Args:
            ids (Iterable[str]): Organisation ids to fetch.
            expand_reference_names (bool): Include ``displayName`` for referenced objects.
        """
        return await self._lookup("organisations", ids, None, expand_reference_names)

    async def get_organisation_by_id(
        self, organisation_id: str, expand_reference_names: bool = False
    ) -> Any:
        """GET /organisations/{id}"""
        return await self._get_by_id("organisations", organisation_id, None, expand_reference_names)

    # --- Persons ---

    async def get_persons(self, query: QueryLike = None) -> Any:
        """GET /persons

        Args:
            query (PersonsQuery | Mapping, optional): Filters, expansion, sorting and paging.

        Returns:
            Any: The paged response, ``{"data": [...], "pageToken": ...}``.
        """
        return await self._list("/persons", query, PersonsQuery)

    async def lookup_persons(
        self,
        ids: Optional[Iterable[str]] = None,
        civic_nos: Optional[Iterable[str]] = None,
        expand: Optional[Sequence[str]] = None,
        expand_reference_names: bool = False,
    ) -> Any:
        """POST /persons/lookup

        Persons can be looked up by id, by civic number, or both. An empty
        list counts as not given.

        Args:
            ids (Iterable[str], optional): Person ids.
            civic_nos (Iterable[str], optional): Civic numbers.
            expand (Sequence[str], optional): ``duties``, ``responsibleFor``, ``placements``,
                ``ownedPlacements``, ``groupMemberships``.
            expand_reference_names (bool): Include ``displayName`` for referenced objects.

        Raises:
            ValueError: If neither ids nor civic_nos contain a value.
        """
        id_list = self._optional_id_list(ids)
        civic_no_list = self._optional_id_list(civic_nos)
        if not id_list and not civic_no_list:
            raise ValueError("ids or civic_nos is required")
        body: Dict[str, List[str]] = {}
        if id_list:
            body["ids"] = id_list
        if civic_no_list:
            body["civicNos"] = civic_no_list
        return await self.execute(
            "POST",
            "/persons/lookup",
            self._expansion_params(expand, expand_reference_names),
            body,
        )

    async def get_person_by_id(
        self,
        person_id: str,
        expand: Optional[Sequence[str]] = None,
        expand_reference_names: bool = False,
    ) -> Any:
        """GET /persons/{id}"""
        return await self._get_by_id("persons", person_id, expand, expand_reference_names)

    # --- Placements ---

    async def get_placements(self, query: QueryLike = None) -> Any:
        """GET /placements

        Args:
            query (PlacementsQuery | Mapping, optional): Filters, expansion, sorting and paging.
        """
        return await self._list("/placements", query, PlacementsQuery)

    async def lookup_placements(
        self,
        ids: Iterable[str],
        expand: Optional[Sequence[str]] = None,
        expand_reference_names: bool = False,
    ) -> Any:
        """POST /placements/lookup. expand: ``child``, ``owners``."""
        return await self._lookup("placements", ids, expand, expand_reference_names)

    async def get_placement_by_id(
        self,
        placement_id: str,
        expand: Optional[Sequence[str]] = None,
        expand_reference_names: bool = False,
    ) -> Any:
        """GET /placements/{id}"""
        return await self._get_by_id("placements", placement_id, expand, expand_reference_names)

    # --- Duties ---

    async def get_duties(self, query: QueryLike = None) -> Any:
        """GET /duties

        Args:
            query (DutiesQuery | Mapping, optional): Filters, expansion, sorting and paging.
        """
        return await self._list("/duties", query, DutiesQuery)

    async def lookup_duties(
        self,
        ids: Iterable[str],
        expand: Optional[Sequence[str]] = None,
        expand_reference_names: bool = False,
    ) -> Any:
        """POST /duties/lookup. expand: ``person``."""
        return await self._lookup("duties", ids, expand, expand_reference_names)

    async def get_duty_by_id(
        self,
        duty_id: str,
        expand: Optional[Sequence[str]] = None,
        expand_reference_names: bool = False,
    ) -> Any:
        """GET /duties/{id}"""
        return await self._get_by_id("duties", duty_id, expand, expand_reference_names)

    # --- Groups ---

    async def get_groups(self, query: QueryLike = None) -> Any:
        """GET /groups

        Args:
            query (GroupsQuery | Mapping, optional): Filters, expansion, sorting and paging.
        """
        return await self._list("/groups", query, GroupsQuery)

    async def lookup_groups(
        self,
        ids: Iterable[str],
        expand: Optional[Sequence[str]] = None,
        expand_reference_names: bool = False,
    ) -> Any:
        """POST /groups/lookup. expand: ``assignmentRoles``."""
        return await self._lookup("groups", ids, expand, expand_reference_names)

    async def get_group_by_id(
        self,
        group_id: str,
        expand: Optional[Sequence[str]] = None,
        expand_reference_names: bool = False,
    ) -> Any:
        """GET /groups/{id}"""
        return await self._get_by_id("groups", group_id, expand, expand_reference_names)

    # --- Programmes ---

    async def get_programmes(self, query: QueryLike = None) -> Any:
        """GET /programmes"""
        return await self._list("/programmes", query, ProgrammesQuery)

    async def lookup_programmes(
        self, ids: Iterable[str], expand_reference_names: bool = False
    ) -> Any:
        """POST /programmes/lookup"""
        return await self._lookup("programmes", ids, None, expand_reference_names)

    async def get_programme_by_id(
        self, programme_id: str, expand_reference_names: bool = False
    ) -> Any:
        """GET /programmes/{id}"""
        return await self._get_by_id("programmes", programme_id, None, expand_reference_names)

    # --- Study plans (the standard defines no lookup) ---

    async def get_study_plans(self, query: QueryLike = None) -> Any:
        """GET /studyplans"""
        return await self._list("/studyplans", query, StudyPlansQuery)

    async def get_study_plan_by_id(
        self, study_plan_id: str, expand_reference_names: bool = False
    ) -> Any:
        """GET /studyplans/{id}"""
        return await self._get_by_id("studyplans", study_plan_id, None, expand_reference_names)

    # --- Syllabuses ---

    async def get_syllabuses(self, query: QueryLike = None) -> Any:
        """GET /syllabuses"""
        return await self._list("/syllabuses", query, SyllabusesQuery)

    async def lookup_syllabuses(
        self, ids: Iterable[str], expand_reference_names: bool = False
    ) -> Any:
        """POST /syllabuses/lookup"""
        return await self._lookup("syllabuses", ids, None, expand_reference_names)

    async def get_syllabus_by_id(
        self, syllabus_id: str, expand_reference_names: bool = False
    ) -> Any:
        """GET /syllabuses/{id}"""
        return await self._get_by_id("syllabuses", syllabus_id, None, expand_reference_names)

    # --- School unit offerings ---

    async def get_school_unit_offerings(self, query: QueryLike = None) -> Any:
        """GET /schoolUnitOfferings"""
        return await self._list("/schoolUnitOfferings", query, SchoolUnitOfferingsQuery)

    async def lookup_school_unit_offerings(
        self, ids: Iterable[str], expand_reference_names: bool = False
    ) -> Any:
        """POST /schoolUnitOfferings/lookup"""
        return await self._lookup("schoolUnitOfferings", ids, None, expand_reference_names)

    async def get_school_unit_offering_by_id(
        self, offering_id: str, expand_reference_names: bool = False
    ) -> Any:
        """GET /schoolUnitOfferings/{id}"""
        return await self._get_by_id(
            "schoolUnitOfferings", offering_id, None, expand_reference_names
        )

    # --- Activities ---

    async def get_activities(self, query: QueryLike = None) -> Any:
        """GET /activities

        Args:
            query (ActivitiesQuery | Mapping, optional): Filters, expansion, sorting and paging.
        """
        return await self._list("/activities", query, ActivitiesQuery)

    async def lookup_activities(
        self,
        ids: Iterable[str],
        expand: Optional[Sequence[str]] = None,
        expand_reference_names: bool = False,
    ) -> Any:
        """POST /activities/lookup. expand: ``groups``, ``teachers``, ``syllabus``."""
        return await self._lookup("activities", ids, expand, expand_reference_names)

    async def get_activity_by_id(
        self,
        activity_id: str,
        expand: Optional[Sequence[str]] = None,
        expand_reference_names: bool = False,
    ) -> Any:
        """GET /activities/{id}"""
        return await self._get_by_id("activities", activity_id, expand, expand_reference_names)

    # --- Calendar events ---

    async def get_calendar_events(self, query: QueryLike) -> Any:
        """GET /calendarEvents

        Args:
            query (CalendarEventsQuery | Mapping): Must include the
                ``startTime.onOrAfter`` and ``startTime.onOrBefore`` window.

        Raises:
            ValueError: If the time window is missing.
        """
        return await self._list("/calendarEvents", query, CalendarEventsQuery)

    async def lookup_calendar_events(
        self, ids: Iterable[str], expand_reference_names: bool = False
    ) -> Any:
        """POST /calendarEvents/lookup"""
        return await self._lookup("calendarEvents", ids, None, expand_reference_names)

    async def get_calendar_event_by_id(
        self,
        event_id: str,
        expand: Optional[Sequence[str]] = None,
        expand_reference_names: bool = False,
    ) -> Any:
        """GET /calendarEvents/{id}. expand: ``activity``, ``attendance``."""
        return await self._get_by_id("calendarEvents", event_id, expand, expand_reference_names)

    # --- Attendances ---

    async def get_attendances(self, query: QueryLike = None) -> Any:
        """GET /attendances"""
        return await self._list("/attendances", query, AttendancesQuery)

    async def create_attendance(self, body: Mapping[str, Any]) -> Any:
        """POST /attendances

        Args:
            body (Mapping[str, Any]): The attendance to register.

        Returns:
            Any: The created attendance as returned by the service.
        """
        return await self.execute("POST", "/attendances", None, self._require_body(body))

    async def lookup_attendances(
        self, ids: Iterable[str], expand_reference_names: bool = False
    ) -> Any:
        """POST /attendances/lookup"""
        return await self._lookup("attendances", ids, None, expand_reference_names)

    async def get_attendance_by_id(
        self, attendance_id: str, expand_reference_names: bool = False
    ) -> Any:
        """GET /attendances/{id}"""
        return await self._get_by_id("attendances", attendance_id, None, expand_reference_names)

    async def delete_attendance(self, attendance_id: str) -> None:
        """DELETE /attendances/{id}. Returns None on 204 No Content."""
        await self._delete("attendances", attendance_id)

    # --- Attendance events ---

    async def get_attendance_events(self, query: QueryLike = None) -> Any:
        """GET /attendanceEvents"""
        return await self._list("/attendanceEvents", query, AttendanceEventsQuery)

    async def create_attendance_event(self, body: Mapping[str, Any]) -> Any:
        """POST /attendanceEvents (a check-in or check-out)."""
        return await self.execute("POST", "/attendanceEvents", None, self._require_body(body))

    async def lookup_attendance_events(
        self,
        ids: Iterable[str],
        expand: Optional[Sequence[str]] = None,
        expand_reference_names: bool = False,
    ) -> Any:
        """POST /attendanceEvents/lookup. expand: ``person``, ``group``, ``registeredBy``."""
        return await self._lookup("attendanceEvents", ids, expand, expand_reference_names)

    async def get_attendance_event_by_id(
        self,
        event_id: str,
        expand: Optional[Sequence[str]] = None,
        expand_reference_names: bool = False,
    ) -> Any:
        """GET /attendanceEvents/{id}"""
        return await self._get_by_id("attendanceEvents", event_id, expand, expand_reference_names)

    async def delete_attendance_event(self, event_id: str) -> None:
        """DELETE /attendanceEvents/{id}"""
        await self._delete("attendanceEvents", event_id)

    # --- Attendance schedules ---

    async def get_attendance_schedules(self, query: QueryLike = None) -> Any:
        """GET /attendanceSchedules"""
        return await self._list("/attendanceSchedules", query, AttendanceSchedulesQuery)

    async def create_attendance_schedule(self, body: Mapping[str, Any]) -> Any:
        """POST /attendanceSchedules"""
        return await self.execute(
            "POST", "/attendanceSchedules", None, self._require_body(body)
        )

    async def lookup_attendance_schedules(
        self, ids: Iterable[str], expand_reference_names: bool = False
    ) -> Any:
        """POST /attendanceSchedules/lookup"""
        return await self._lookup("attendanceSchedules", ids, None, expand_reference_names)

    async def get_attendance_schedule_by_id(
        self, schedule_id: str, expand_reference_names: bool = False
    ) -> Any:
        """GET /attendanceSchedules/{id}"""
        return await self._get_by_id(
            "attendanceSchedules", schedule_id, None, expand_reference_names
        )

    async def delete_attendance_schedule(self, schedule_id: str) -> None:
        """DELETE /attendanceSchedules/{id}"""
        await self._delete("attendanceSchedules", schedule_id)

    # --- Grades ---

    async def get_grades(self, query: QueryLike = None) -> Any:
        """GET /grades"""
        return await self._list("/grades", query, GradesQuery)

    async def lookup_grades(self, ids: Iterable[str], expand_reference_names: bool = False) -> Any:
        """POST /grades/lookup"""
        return await self._lookup("grades", ids, None, expand_reference_names)

    async def get_grade_by_id(self, grade_id: str, expand_reference_names: bool = False) -> Any:
        """GET /grades/{id}"""
        return await self._get_by_id("grades", grade_id, None, expand_reference_names)

    # --- Absences ---

    async def get_absences(self, query: QueryLike = None) -> Any:
        """GET /absences"""
        return await self._list("/absences", query, AbsencesQuery)

    async def create_absence(self, body: Mapping[str, Any]) -> Any:
        """POST /absences (a reported absence or granted leave)."""
        return await self.execute("POST", "/absences", None, self._require_body(body))

    async def lookup_absences(
        self, ids: Iterable[str], expand_reference_names: bool = False
    ) -> Any:
        """POST /absences/lookup"""
        return await self._lookup("absences", ids, None, expand_reference_names)

    async def get_absence_by_id(
        self, absence_id: str, expand_reference_names: bool = False
    ) -> Any:
        """GET /absences/{id}"""
        return await self._get_by_id("absences", absence_id, None, expand_reference_names)

    # --- Aggregated attendance (list only) ---

    async def get_aggregated_attendance(self, query: QueryLike) -> Any:
        """GET /aggregatedAttendance

        Args:
            query (AggregatedAttendanceQuery | Mapping): Must include ``startDate`` and ``endDate``.

        Raises:
            ValueError: If the date window is missing.
        """
        return await self._list("/aggregatedAttendance", query, AggregatedAttendanceQuery)

    # --- Resources ---

    async def get_resources(self, query: QueryLike = None) -> Any:
        """GET /resources"""
        return await self._list("/resources", query, ResourcesQuery)

    async def lookup_resources(
        self, ids: Iterable[str], expand_reference_names: bool = False
    ) -> Any:
        """POST /resources/lookup"""
        return await self._lookup("resources", ids, None, expand_reference_names)

    async def get_resource_by_id(
        self, resource_id: str, expand_reference_names: bool = False
    ) -> Any:
        """GET /resources/{id}"""
        return await self._get_by_id("resources", resource_id, None, expand_reference_names)

    # --- Rooms ---

    async def get_rooms(self, query: QueryLike = None) -> Any:
        """GET /rooms"""
        return await self._list("/rooms", query, RoomsQuery)

    async def lookup_rooms(self, ids: Iterable[str], expand_reference_names: bool = False) -> Any:
        """POST /rooms/lookup"""
        return await self._lookup("rooms", ids, None, expand_reference_names)

    async def get_room_by_id(self, room_id: str, expand_reference_names: bool = False) -> Any:
        """GET /rooms/{id}"""
        return await self._get_by_id("rooms", room_id, None, expand_reference_names)

    # --- Subscriptions (webhooks) ---

    async def get_subscriptions(self, query: QueryLike = None) -> Any:
        """GET /subscriptions"""
        return await self._list("/subscriptions", query, SubscriptionsQuery)

    async def lookup_subscriptions(self, ids: Iterable[str]) -> Any:
        """POST /subscriptions/lookup"""
        return await self._lookup("subscriptions", ids)

    async def get_subscription_by_id(self, subscription_id: str) -> Any:
        """GET /subscriptions/{id}"""
        return await self._get_by_id("subscriptions", subscription_id)

    async def create_subscription(self, body: Mapping[str, Any]) -> Any:
        """POST /subscriptions

        Registers a webhook. The service pushes ``{"modifiedEntities": [...],
        "deletedEntities": [...]}`` notifications to ``target`` when records of the
        listed resource types change.

        Args:
            body (Mapping[str, Any]): ``{"name": ..., "target": ..., "resourceTypes": [...]}``
                plus optional fields such as ``expires``.

        Returns:
            Any: The created subscription, including its server-assigned ``id``.
        """
        return await self.execute("POST", "/subscriptions", None, self._require_body(body))

    async def update_subscription(self, subscription_id: str, body: Mapping[str, Any]) -> Any:
        """PATCH /subscriptions/{id}

        Typically used to push ``expires`` forward before the subscription lapses.
        """
        return await self.execute(
            "PATCH",
            self._resource_path("subscriptions", subscription_id),
            None,
            self._require_body(body),
        )

    async def delete_subscription(self, subscription_id: str) -> None:
        """DELETE /subscriptions/{id}

        Raises:
            SS12000ResourceNotFoundError: If the subscription does not exist.
        """
        await self._delete("subscriptions", subscription_id)

    # --- Deleted entities (list only) ---

    async def get_deleted_entities(self, query: QueryLike = None) -> Any:
        """GET /deletedEntities"""
        return await self._list("/deletedEntities", query, DeletedEntitiesQuery)

    # --- Log and statistics (create only) ---

    async def post_log(self, body: Mapping[str, Any]) -> None:
        """POST /log

        Returns None on success. The created log entry is not read back, so the
        call works against services that answer 201 with an empty body.

        Args:
            body (Mapping[str, Any]): Log entry with ``severityLevel`` and ``message``.
        """
        await self.execute("POST", "/log", None, self._require_body(body), expect_content=False)

    async def post_statistics(self, body: Mapping[str, Any]) -> None:
        """POST /statistics

        Returns None on success, without reading back the created entry.

        Args:
            body (Mapping[str, Any]): Statistics entry such as ``resourceType``,
                ``newCount``, ``updatedCount`` and ``deletedCount``.
        """
        await self.execute(
            "POST", "/statistics", None, self._require_body(body), expect_content=False
        )
