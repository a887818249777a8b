"""Typed query parameters for the SS12000 list endpoints.

Every list endpoint has a frozen, keyword-only dataclass describing the filters
the standard defines for it. Field names are the snake_case form of the
standard's parameter names; the exact wire key is kept in the field metadata,
so ``start_date_on_or_before`` is sent as ``startDate.onOrBefore``.

Example:
    >>> query = PersonsQuery(name_contains=["Pa", "gens"], expand=["duties"], limit=10)
    >>> query.to_query_params()["nameContains"]
    ['Pa', 'gens']

``pageToken`` cannot be combined with other filters, but can be combined with
``limit``. The service enforces that rule, not this client.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date
from typing import Any, ClassVar, Dict, Optional, Sequence, Tuple, Union

DateLike = Union[date, str]
"""A ``datetime.date``/``datetime.datetime`` or an RFC 3339 string."""


def param(key: str) -> Any:
    """Optional query field sent under ``key``."""
    return field(default=None, metadata={"key": key})


def required_param(key: str) -> Any:
    """Mandatory query field sent under ``key``."""
    return field(metadata={"key": key})


@dataclass(frozen=True, kw_only=True)
class Query:
    """Base class for the query structures.

    Attributes:
        required_keys (tuple[str, ...]): Wire keys that must carry a value.
    """

    required_keys: ClassVar[Tuple[str, ...]] = ()

    def to_query_params(self) -> Dict[str, Any]:
        """Return the query as a mapping of standard parameter names to values.

        Unset fields are included as ``None``; they are dropped when the query
        string is encoded.
        """
        return {f.metadata.get("key", f.name): getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True, kw_only=True)
class PagedQuery(Query):
    limit: Optional[int] = param("limit")
    page_token: Optional[str] = param("pageToken")

    def __post_init__(self) -> None:
        if self.limit is not None and self.limit < 1:
            raise ValueError(f"limit must be at least 1, got {self.limit}")


@dataclass(frozen=True, kw_only=True)
class MetaQuery(Query):
    """Filters on record creation and modification timestamps.

    ``before`` bounds are inclusive, ``after`` bounds are exclusive.
    """

    meta_created_before: Optional[DateLike] = param("meta.created.before")
    meta_created_after: Optional[DateLike] = param("meta.created.after")
    meta_modified_before: Optional[DateLike] = param("meta.modified.before")
    meta_modified_after: Optional[DateLike] = param("meta.modified.after")


@dataclass(frozen=True, kw_only=True)
class DateRangeQuery(Query):
    """Filters on ``startDate``/``endDate``. Records with an unset ``endDate`` are always included."""

    start_date_on_or_before: Optional[DateLike] = param("startDate.onOrBefore")
    start_date_on_or_after: Optional[DateLike] = param("startDate.onOrAfter")
    end_date_on_or_before: Optional[DateLike] = param("endDate.onOrBefore")
    end_date_on_or_after: Optional[DateLike] = param("endDate.onOrAfter")


@dataclass(frozen=True, kw_only=True)
class OrganisationsQuery(DateRangeQuery, MetaQuery, PagedQuery):
    """Query for ``GET /organisations``.

    sortkey: ``ModifiedDesc``, ``DisplayNameAsc``.
    """

    parent: Optional[Sequence[str]] = param("parent")
    school_unit_code: Optional[Sequence[str]] = param("schoolUnitCode")
    organisation_code: Optional[Sequence[str]] = param("organisationCode")
    municipality_code: Optional[str] = param("municipalityCode")
    type: Optional[Sequence[str]] = param("type")
    school_types: Optional[Sequence[str]] = param("schoolTypes")
    expand_reference_names: Optional[bool] = param("expandReferenceNames")
    sortkey: Optional[str] = param("sortkey")


@dataclass(frozen=True, kw_only=True)
class PersonsQuery(MetaQuery, PagedQuery):
    """Query for ``GET /persons``.

    ``name_contains`` matches case-insensitively anywhere in the name fields;
    with several values, every value must match one of the name fields.

    ``relationship_entity_type`` selects which relationship the other
    ``relationship_*`` filters apply to: ``enrolment``, ``duty``,
    ``placement.child``, ``placement.owner``, ``responsibleFor.enrolment``,
    ``responsibleFor.placement`` or ``groupMembership``.

    expand: ``duties``, ``responsibleFor``, ``placements``, ``ownedPlacements``,
    ``groupMemberships``.

    sortkey: ``DisplayNameAsc``, ``GivenNameDesc``, ``GivenNameAsc``,
    ``FamilyNameDesc``, ``FamilyNameAsc``, ``CivicNoAsc``, ``CivicNoDesc``,
    ``ModifiedDesc``.
    """

    name_contains: Optional[Sequence[str]] = param("nameContains")
    civic_no: Optional[str] = param("civicNo")
    edu_person_principal_name: Optional[str] = param("eduPersonPrincipalName")
    identifier_value: Optional[str] = param("identifier.value")
    identifier_context: Optional[str] = param("identifier.context")
    relationship_entity_type: Optional[str] = param("relationship.entity.type")
    relationship_organisation: Optional[str] = param("relationship.organisation")
    relationship_start_date_on_or_before: Optional[DateLike] = param(
        "relationship.startDate.onOrBefore"
    )
    relationship_start_date_on_or_after: Optional[DateLike] = param(
        "relationship.startDate.onOrAfter"
    )
    relationship_end_date_on_or_before: Optional[DateLike] = param(
        "relationship.endDate.onOrBefore"
    )
    relationship_end_date_on_or_after: Optional[DateLike] = param(
        "relationship.endDate.onOrAfter"
    )
    expand: Optional[Sequence[str]] = param("expand")
    expand_reference_names: Optional[bool] = param("expandReferenceNames")
    sortkey: Optional[str] = param("sortkey")


@dataclass(frozen=True, kw_only=True)
class PlacementsQuery(DateRangeQuery, MetaQuery, PagedQuery):
    """Query for ``GET /placements``.

    expand: ``child``, ``owners``.
    sortkey: ``StartDateAsc``, ``StartDateDesc``, ``EndDateAsc``, ``EndDateDesc``, ``ModifiedDesc``.
    """

    organisation: Optional[str] = param("organisation")
    group: Optional[str] = param("group")
    child: Optional[str] = param("child")
    owner: Optional[str] = param("owner")
    expand: Optional[Sequence[str]] = param("expand")
    expand_reference_names: Optional[bool] = param("expandReferenceNames")
    sortkey: Optional[str] = param("sortkey")


@dataclass(frozen=True, kw_only=True)
class DutiesQuery(DateRangeQuery, MetaQuery, PagedQuery):
    """Query for ``GET /duties``.

    expand: ``person``.
    sortkey: ``StartDateDesc``, ``StartDateAsc``, ``ModifiedDesc``.
    """

    organisation: Optional[str] = param("organisation")
    duty_role: Optional[str] = param("dutyRole")
    person: Optional[str] = param("person")
    expand: Optional[Sequence[str]] = param("expand")
    expand_reference_names: Optional[bool] = param("expandReferenceNames")
    sortkey: Optional[str] = param("sortkey")


@dataclass(frozen=True, kw_only=True)
class GroupsQuery(DateRangeQuery, MetaQuery, PagedQuery):
    """Query for ``GET /groups``.

    expand: ``assignmentRoles``.
    sortkey: ``ModifiedDesc``, ``DisplayNameAsc``, ``StartDateAsc``,
    ``StartDateDesc``, ``EndDateAsc``, ``EndDateDesc``.
    """

    group_type: Optional[Sequence[str]] = param("groupType")
    school_types: Optional[Sequence[str]] = param("schoolTypes")
    organisation: Optional[Sequence[str]] = param("organisation")
    expand: Optional[Sequence[str]] = param("expand")
    expand_reference_names: Optional[bool] = param("expandReferenceNames")
    sortkey: Optional[str] = param("sortkey")


@dataclass(frozen=True, kw_only=True)
class ProgrammesQuery(MetaQuery, PagedQuery):
    """Query for ``GET /programmes``. sortkey: ``NameAsc``, ``CodeAsc``, ``ModifiedDesc``."""

    school_type: Optional[Sequence[str]] = param("schoolType")
    code: Optional[str] = param("code")
    parent_programme: Optional[str] = param("parentProgramme")
    expand_reference_names: Optional[bool] = param("expandReferenceNames")
    sortkey: Optional[str] = param("sortkey")


@dataclass(frozen=True, kw_only=True)
class StudyPlansQuery(DateRangeQuery, MetaQuery, PagedQuery):
    """Query for ``GET /studyplans``."""

    student: Optional[Sequence[str]] = param("student")
    expand_reference_names: Optional[bool] = param("expandReferenceNames")
    sortkey: Optional[str] = param("sortkey")


@dataclass(frozen=True, kw_only=True)
class SyllabusesQuery(MetaQuery, PagedQuery):
    """Query for ``GET /syllabuses``."""

    expand_reference_names: Optional[bool] = param("expandReferenceNames")
    sortkey: Optional[str] = param("sortkey")


@dataclass(frozen=True, kw_only=True)
class SchoolUnitOfferingsQuery(MetaQuery, PagedQuery):
    """Query for ``GET /schoolUnitOfferings``."""

    organisation: Optional[str] = param("organisation")
    expand_reference_names: Optional[bool] = param("expandReferenceNames")
    sortkey: Optional[str] = param("sortkey")


@dataclass(frozen=True, kw_only=True)
class ActivitiesQuery(DateRangeQuery, MetaQuery, PagedQuery):
    """Query for ``GET /activities``.

    ``member`` and ``teacher`` ignore the date window.
    expand: ``groups``, ``teachers``, ``syllabus``.
    """

    member: Optional[str] = param("member")
    teacher: Optional[str] = param("teacher")
    organisation: Optional[str] = param("organisation")
    group: Optional[str] = param("group")
    expand: Optional[Sequence[str]] = param("expand")
    expand_reference_names: Optional[bool] = param("expandReferenceNames")
    sortkey: Optional[str] = param("sortkey")


@dataclass(frozen=True, kw_only=True)
class CalendarEventsQuery(MetaQuery, PagedQuery):
    """Query for ``GET /calendarEvents``.

    The time window ``start_time_on_or_after`` .. ``start_time_on_or_before``
    is mandatory.

    expand: ``activity``, ``attendance``.
    sortkey: ``ModifiedDesc``, ``StartTimeAsc``, ``StartTimeDesc``.
    """

    required_keys: ClassVar[Tuple[str, ...]] = ("startTime.onOrAfter", "startTime.onOrBefore")

    start_time_on_or_after: DateLike = required_param("startTime.onOrAfter")
    start_time_on_or_before: DateLike = required_param("startTime.onOrBefore")
    end_time_on_or_before: Optional[DateLike] = param("endTime.onOrBefore")
    end_time_on_or_after: Optional[DateLike] = param("endTime.onOrAfter")
    activity: Optional[str] = param("activity")
    student: Optional[str] = param("student")
    teacher: Optional[str] = param("teacher")
    organisation: Optional[str] = param("organisation")
    group: Optional[str] = param("group")
    expand: Optional[Sequence[str]] = param("expand")
    expand_reference_names: Optional[bool] = param("expandReferenceNames")
    sortkey: Optional[str] = param("sortkey")


@dataclass(frozen=True, kw_only=True)
class AttendancesQuery(MetaQuery, PagedQuery):
    """Query for ``GET /attendances``."""

    student: Optional[str] = param("student")
    organisation: Optional[str] = param("organisation")
    calendar_event: Optional[str] = param("calendarEvent")
    expand_reference_names: Optional[bool] = param("expandReferenceNames")


@dataclass(frozen=True, kw_only=True)
class AttendanceEventsQuery(MetaQuery, PagedQuery):
    """Query for ``GET /attendanceEvents``. expand: ``person``, ``group``, ``registeredBy``."""

    group: Optional[Sequence[str]] = param("group")
    person: Optional[str] = param("person")
    expand: Optional[Sequence[str]] = param("expand")
    expand_reference_names: Optional[bool] = param("expandReferenceNames")


@dataclass(frozen=True, kw_only=True)
class AttendanceSchedulesQuery(DateRangeQuery, MetaQuery, PagedQuery):
    """Query for ``GET /attendanceSchedules``."""

    placement: Optional[str] = param("placement")
    group: Optional[str] = param("group")
    expand_reference_names: Optional[bool] = param("expandReferenceNames")


@dataclass(frozen=True, kw_only=True)
class GradesQuery(MetaQuery, PagedQuery):
    """Query for ``GET /grades``. sortkey: ``registeredDateAsc``, ``registeredDateDesc``, ``ModifiedDesc``."""

    organisation: Optional[str] = param("organisation")
    student: Optional[str] = param("student")
    registered_by: Optional[str] = param("registeredBy")
    grading_teacher: Optional[str] = param("gradingTeacher")
    registered_date_on_or_after: Optional[DateLike] = param("registeredDate.onOrAfter")
    registered_date_on_or_before: Optional[DateLike] = param("registeredDate.onOrBefore")
    expand_reference_names: Optional[bool] = param("expandReferenceNames")
    sortkey: Optional[str] = param("sortkey")


@dataclass(frozen=True, kw_only=True)
class AbsencesQuery(MetaQuery, PagedQuery):
    """Query for ``GET /absences``. sortkey: ``ModifiedDesc``, ``StartTimeAsc``, ``StartTimeDesc``."""

    organisation: Optional[str] = param("organisation")
    student: Optional[str] = param("student")
    registered_by: Optional[str] = param("registeredBy")
    type: Optional[str] = param("type")
    start_time_on_or_before: Optional[DateLike] = param("startTime.onOrBefore")
    start_time_on_or_after: Optional[DateLike] = param("startTime.onOrAfter")
    end_time_on_or_before: Optional[DateLike] = param("endTime.onOrBefore")
    end_time_on_or_after: Optional[DateLike] = param("endTime.onOrAfter")
    expand_reference_names: Optional[bool] = param("expandReferenceNames")
    sortkey: Optional[str] = param("sortkey")


@dataclass(frozen=True, kw_only=True)
class AggregatedAttendanceQuery(PagedQuery):
    """Query for ``GET /aggregatedAttendance``.

    ``start_date`` and ``end_date`` are mandatory and inclusive.
    expand: ``activity``, ``student``.
    """

    required_keys: ClassVar[Tuple[str, ...]] = ("startDate", "endDate")

    start_date: DateLike = required_param("startDate")
    end_date: DateLike = required_param("endDate")
    organisation: Optional[str] = param("organisation")
    school_type: Optional[Sequence[str]] = param("schoolType")
    student: Optional[Sequence[str]] = param("student")
    expand: Optional[Sequence[str]] = param("expand")
    expand_reference_names: Optional[bool] = param("expandReferenceNames")


@dataclass(frozen=True, kw_only=True)
class ResourcesQuery(MetaQuery, PagedQuery):
    """Query for ``GET /resources``."""

    organisation: Optional[str] = param("organisation")
    expand_reference_names: Optional[bool] = param("expandReferenceNames")
    sortkey: Optional[str] = param("sortkey")


@dataclass(frozen=True, kw_only=True)
class RoomsQuery(MetaQuery, PagedQuery):
    """Query for ``GET /rooms``."""

    organisation: Optional[str] = param("organisation")
    expand_reference_names: Optional[bool] = param("expandReferenceNames")
    sortkey: Optional[str] = param("sortkey")


@dataclass(frozen=True, kw_only=True)
class SubscriptionsQuery(PagedQuery):
    """Query for ``GET /subscriptions``."""


@dataclass(frozen=True, kw_only=True)
class DeletedEntitiesQuery(PagedQuery):
    """Query for ``GET /deletedEntities``.

    ``after`` is a timestamp; ``entities`` lists endpoint names such as
    ``Person`` or ``Activity``.
    """

    after: Optional[DateLike] = param("after")
    entities: Optional[Sequence[str]] = param("entities")
