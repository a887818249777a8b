"""ss12000client is an asynchronous Python client for SS12000 school data APIs.

It provides one method per endpoint of the SS12000 standard, typed query
structures for the list endpoints, bearer token authentication, and a
helper that follows ``pageToken`` through paged results.
"""

import importlib.metadata

from ss12000client.exceptions import (
    # Base exceptions
    SS12000Error,
    SS12000ConfigurationError,
    SS12000ClientClosed,
    SS12000DecodeError,
    # Connection errors
    SS12000ConnectionError,
    SS12000SystemUnavailableError,
    SS12000TimeoutError,
    SS12000ProtocolError,
    SS12000NetworkError,
    # HTTP errors
    SS12000HTTPError,
    # 4xx client errors
    SS12000ClientError,
    SS12000BadRequestError,
    SS12000AuthenticationError,
    SS12000PermissionError,
    SS12000ResourceNotFoundError,
    SS12000DataConflictError,
    SS12000ValidationError,
    SS12000RateLimitError,
    # 5xx server errors
    SS12000ServerError,
    SS12000InternalServerError,
    SS12000BadGatewayError,
    SS12000ServiceUnavailableError,
    SS12000GatewayTimeoutError,
)
from ss12000client.queries import (
    Query,
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
    ResourcesQuery,
    RoomsQuery,
    SchoolUnitOfferingsQuery,
    StudyPlansQuery,
    SubscriptionsQuery,
    SyllabusesQuery,
)
from ss12000client.SS12000Client import SS12000Client
from ss12000client._httpx import SS12000Auth, SS12000ConnectionParameters

__version__ = importlib.metadata.version("ss12000client")
__all__ = [
    # Core client
    "SS12000Client",
    # Auth components
    "SS12000Auth",
    "SS12000ConnectionParameters",
    # Query structures
    "Query",
    "AbsencesQuery",
    "ActivitiesQuery",
    "AggregatedAttendanceQuery",
    "AttendanceEventsQuery",
    "AttendanceSchedulesQuery",
    "AttendancesQuery",
    "CalendarEventsQuery",
    "DeletedEntitiesQuery",
    "DutiesQuery",
    "GradesQuery",
    "GroupsQuery",
    "OrganisationsQuery",
    "PersonsQuery",
    "PlacementsQuery",
    "ProgrammesQuery",
    "ResourcesQuery",
    "RoomsQuery",
    "SchoolUnitOfferingsQuery",
    "StudyPlansQuery",
    "SubscriptionsQuery",
    "SyllabusesQuery",
    # Base exceptions
    "SS12000Error",
    "SS12000ConfigurationError",
    "SS12000ClientClosed",
    "SS12000DecodeError",
    # Connection errors
    "SS12000ConnectionError",
    "SS12000SystemUnavailableError",
    "SS12000TimeoutError",
    "SS12000ProtocolError",
    "SS12000NetworkError",
    # HTTP errors
    "SS12000HTTPError",
    # 4xx client errors
    "SS12000ClientError",
    "SS12000BadRequestError",
    "SS12000AuthenticationError",
    "SS12000PermissionError",
    "SS12000ResourceNotFoundError",
    "SS12000DataConflictError",
    "SS12000ValidationError",
    "SS12000RateLimitError",
    # 5xx server errors
    "SS12000ServerError",
    "SS12000InternalServerError",
    "SS12000BadGatewayError",
    "SS12000ServiceUnavailableError",
    "SS12000GatewayTimeoutError",
]
