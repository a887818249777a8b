import asyncio
import importlib
import json
import logging
from datetime import date

import httpx
import pytest

from ss12000client import (
    AggregatedAttendanceQuery,
    CalendarEventsQuery,
    OrganisationsQuery,
    PersonsQuery,
    PlacementsQuery,
    SS12000Client,
)
from ss12000client.exceptions import (
    SS12000AuthenticationError,
    SS12000ClientClosed,
    SS12000ConfigurationError,
    SS12000DecodeError,
    SS12000HTTPError,
    SS12000InternalServerError,
    SS12000ResourceNotFoundError,
    SS12000SystemUnavailableError,
    SS12000TimeoutError,
)

from test_utils import BASE_URL, RecordingHandler, json_reply, make_client, open_client


def body_of(request: httpx.Request):
    return json.loads(request.content)


class TestConstruction:
    def test_trailing_slash_is_stripped(self):
        client = SS12000Client("https://host.example/v2.0/", "token")
        assert client.base_url == "https://host.example/v2.0"

    def test_several_trailing_slashes_are_stripped(self):
        client = SS12000Client("https://host.example/v2.0///", "token")
        assert client.base_url == "https://host.example/v2.0"

    @pytest.mark.parametrize("base_url", ["", "   ", None])
    def test_empty_base_url_is_rejected(self, base_url):
        with pytest.raises(SS12000ConfigurationError):
            SS12000Client(base_url, "token")

    @pytest.mark.parametrize("base_url", ["not a url", "ftp://host.example/v2.0", "/v2.0"])
    def test_non_http_base_url_is_rejected(self, base_url):
        with pytest.raises(SS12000ConfigurationError):
            SS12000Client(base_url, "token")

    def test_configuration_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            SS12000Client("", "token")

    def test_plain_http_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="SS12000Client"):
            SS12000Client("http://host.example/v2.0", "token")
        assert "HTTPS" in caplog.text

    def test_missing_token_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="SS12000Client"):
            client = SS12000Client("https://host.example/v2.0")
        assert "token is missing" in caplog.text
        assert client.auth_token is None

    def test_https_with_token_logs_nothing(self, caplog):
        with caplog.at_level(logging.WARNING, logger="SS12000Client"):
            SS12000Client("https://host.example/v2.0", "token")
        assert caplog.records == []

    def test_repr_hides_token(self):
        client = SS12000Client("https://host.example/v2.0", "secret-token")
        assert repr(client) == "SS12000Client at https://host.example/v2.0"
        assert "secret-token" not in repr(client)

    def test_properties(self):
        client = SS12000Client("https://host.example/v2.0", "token", ssl_verify=False)
        assert client.auth_token == "token"
        assert client.ssl_verify is False
        assert client.is_closed is False


class TestTimeouts:
    def test_no_timeout_by_default(self, monkeypatch):
        module = importlib.import_module("ss12000client.SS12000Client")
        monkeypatch.setattr(module, "HTTPX_TIMEOUT", None)
        monkeypatch.setattr(module, "TIMEOUT_CONFIG", {})
        client = SS12000Client("https://host.example/v2.0", "token")
        assert client.http_timeout == httpx.Timeout(None)

    def test_timeout_from_environment(self, monkeypatch):
        module = importlib.import_module("ss12000client.SS12000Client")
        monkeypatch.setattr(module, "HTTPX_TIMEOUT", 30.0)
        monkeypatch.setattr(module, "TIMEOUT_CONFIG", {"connect": 5.0, "read": None})
        client = SS12000Client("https://host.example/v2.0", "token")
        assert client.http_timeout == httpx.Timeout(30.0, connect=5.0)

    def test_explicit_none_ignores_environment(self, monkeypatch):
        module = importlib.import_module("ss12000client.SS12000Client")
        monkeypatch.setattr(module, "HTTPX_TIMEOUT", 30.0)
        client = SS12000Client("https://host.example/v2.0", "token", timeout=None)
        assert client.http_timeout == httpx.Timeout(None)

    def test_float_timeout(self):
        client = SS12000Client("https://host.example/v2.0", "token", timeout=12.5)
        assert client.http_timeout == httpx.Timeout(12.5)

    def test_timeout_object_is_used_as_is(self):
        timeout = httpx.Timeout(3.0, read=9.0)
        client = SS12000Client("https://host.example/v2.0", "token", timeout=timeout)
        assert client.http_timeout is timeout

    def test_dict_timeout_merges_environment(self, monkeypatch):
        module = importlib.import_module("ss12000client.SS12000Client")
        monkeypatch.setattr(module, "HTTPX_TIMEOUT", 20.0)
        monkeypatch.setattr(module, "TIMEOUT_CONFIG", {"read": 11.0})
        client = SS12000Client("https://host.example/v2.0", "token", timeout={"connect": 2.0})
        assert client.http_timeout == httpx.Timeout(20.0, connect=2.0, read=11.0)


class TestBuildUrl:
    def setup_method(self):
        self.client = SS12000Client("https://host.example/v2.0/", "token")

    def test_without_query(self):
        assert self.client.build_url("/persons") == "https://host.example/v2.0/persons"

    def test_all_none_query_adds_no_question_mark(self):
        url = self.client.build_url("/persons", {"limit": None, "pageToken": None})
        assert url == "https://host.example/v2.0/persons"

    def test_repeated_keys(self):
        url = self.client.build_url("/placements", {"expand": ["child", "owners"], "limit": 2})
        assert url == "https://host.example/v2.0/placements?expand=child&expand=owners&limit=2"


class TestRequestEngine:
    @pytest.mark.asyncio
    async def test_get_sends_auth_and_accept_headers(self):
        handler = RecordingHandler(json_reply({"data": []}))
        async with open_client(handler) as client:
            result = await client.execute("get", "/persons")

        request = handler.last_request
        assert result == {"data": []}
        assert request.method == "GET"
        assert str(request.url) == f"{BASE_URL}/persons"
        assert request.headers["Authorization"] == "Bearer test-token"
        assert request.headers["Accept"] == "application/json"
        assert "content-type" not in request.headers

    @pytest.mark.asyncio
    async def test_no_authorization_header_without_token(self):
        handler = RecordingHandler(json_reply({"data": []}))
        async with open_client(handler, auth_token=None) as client:
            await client.execute("GET", "/persons")
        assert "authorization" not in handler.last_request.headers

    @pytest.mark.asyncio
    async def test_body_is_sent_as_json(self):
        handler = RecordingHandler(json_reply({"id": "new"}, status_code=201))
        async with open_client(handler) as client:
            result = await client.execute("POST", "/attendances", body={"student": "p1"})

        request = handler.last_request
        assert result == {"id": "new"}
        assert request.headers["Content-Type"] == "application/json"
        assert body_of(request) == {"student": "p1"}

    @pytest.mark.asyncio
    async def test_no_content_returns_none(self):
        handler = RecordingHandler((204, {}))
        async with open_client(handler) as client:
            assert await client.execute("DELETE", "/attendances/a1") is None

    @pytest.mark.asyncio
    async def test_expect_content_false_ignores_body(self):
        handler = RecordingHandler((201, {"content": b"created"}))
        async with open_client(handler) as client:
            assert await client.execute("POST", "/log", body={}, expect_content=False) is None

    @pytest.mark.asyncio
    async def test_redirect_on_delete_is_an_error(self):
        handler = RecordingHandler(
            (302, {"headers": {"Location": f"{BASE_URL}/elsewhere"}, "text": "moved"})
        )
        async with open_client(handler) as client:
            with pytest.raises(SS12000HTTPError) as exc_info:
                await client.delete_subscription("sub-1")

        assert exc_info.value.status_code == 302
        assert exc_info.value.body == "moved"
        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    async def test_redirect_on_read_is_an_error(self):
        handler = RecordingHandler((301, {"headers": {"Location": f"{BASE_URL}/other"}}))
        async with open_client(handler) as client:
            with pytest.raises(SS12000HTTPError):
                await client.get_persons()

    @pytest.mark.asyncio
    async def test_not_found_keeps_raw_body(self):
        handler = RecordingHandler((404, {"text": "Not found"}))
        async with open_client(handler) as client:
            with pytest.raises(SS12000ResourceNotFoundError) as exc_info:
                await client.get_person_by_id("missing")

        error = exc_info.value
        assert error.status_code == 404
        assert error.body == "Not found"
        assert isinstance(error, SS12000HTTPError)
        assert isinstance(error, httpx.HTTPStatusError)

    @pytest.mark.asyncio
    async def test_error_body_is_not_decoded(self):
        raw = '{"code": "E1", "message": "boom"}'
        handler = RecordingHandler((500, {"text": raw}))
        async with open_client(handler) as client:
            with pytest.raises(SS12000InternalServerError) as exc_info:
                await client.get_persons()
        assert exc_info.value.body == raw

    @pytest.mark.asyncio
    async def test_error_is_logged(self, caplog):
        handler = RecordingHandler((401, {"text": "expired"}))
        with caplog.at_level(logging.ERROR, logger="SS12000Client"):
            async with open_client(handler) as client:
                with pytest.raises(SS12000AuthenticationError):
                    await client.get_groups()
        assert "401" in caplog.text
        assert "expired" in caplog.text

    @pytest.mark.asyncio
    async def test_malformed_json_raises_decode_error(self):
        handler = RecordingHandler((200, {"content": b"<html>oops</html>"}))
        async with open_client(handler) as client:
            with pytest.raises(SS12000DecodeError) as exc_info:
                await client.get_persons()
        assert exc_info.value.response.status_code == 200
        assert exc_info.value.cause is not None

    @pytest.mark.asyncio
    async def test_empty_success_body_raises_decode_error(self):
        handler = RecordingHandler((200, {"content": b""}))
        async with open_client(handler) as client:
            with pytest.raises(SS12000DecodeError):
                await client.get_persons()

    @pytest.mark.asyncio
    async def test_unsupported_method(self):
        async with open_client(RecordingHandler()) as client:
            with pytest.raises(ValueError):
                await client.execute("PUT", "/persons")

    @pytest.mark.asyncio
    async def test_connection_error_is_converted(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        async with open_client(handler) as client:
            with pytest.raises(SS12000SystemUnavailableError):
                await client.get_persons()

    @pytest.mark.asyncio
    async def test_timeout_is_converted(self):
        def handler(request):
            raise httpx.ReadTimeout("Timed out", request=request)

        async with open_client(handler) as client:
            with pytest.raises(SS12000TimeoutError):
                await client.get_persons()

    @pytest.mark.asyncio
    async def test_shared_http_client_is_reused(self):
        handler = RecordingHandler(json_reply({"data": []}))
        async with open_client(handler) as client:
            http_client = client.async_httpx_client
            await client.get_persons()
            await client.get_groups()
            assert client.async_httpx_client is http_client
        assert http_client.is_closed


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_closed_client_rejects_requests(self):
        handler = RecordingHandler(json_reply({"data": []}))
        client = make_client(handler)
        await client.get_persons()
        await client.async_close()

        assert client.is_closed
        with pytest.raises(SS12000ClientClosed):
            await client.get_persons()
        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    async def test_concurrent_calls_share_one_pool(self):
        def handler(request):
            return httpx.Response(200, json={"data": [{"id": request.url.params["limit"]}]})

        recorder = RecordingHandler(handler)
        client = make_client(recorder)
        try:
            results = await asyncio.gather(
                *[client.get_persons({"limit": n}) for n in range(1, 21)]
            )
            http_clients = {id(client.async_httpx_client)}
            await asyncio.gather(*[client.get_groups() for _ in range(5)])
            http_clients.add(id(client.async_httpx_client))
        finally:
            await client.async_close()

        assert len(recorder.requests) == 25
        assert [result["data"][0]["id"] for result in results] == [
            str(n) for n in range(1, 21)
        ]
        assert len(http_clients) == 1

    @pytest.mark.asyncio
    async def test_close_twice_is_harmless(self):
        client = make_client(RecordingHandler())
        await client.async_close()
        await client.async_close()
        assert client.is_closed

    @pytest.mark.asyncio
    async def test_cannot_reenter_closed_client(self):
        client = make_client(RecordingHandler())
        await client.async_close()
        with pytest.raises(SS12000ClientClosed):
            async with client:
                pass

    @pytest.mark.asyncio
    async def test_client_works_without_context_manager(self):
        handler = RecordingHandler(json_reply({"data": [{"id": "o1"}]}))
        client = make_client(handler)
        try:
            result = await client.get_organisations()
        finally:
            await client.async_close()
        assert result["data"][0]["id"] == "o1"


class TestFacade:
    @pytest.mark.asyncio
    async def test_placements_with_expand_and_limit(self):
        handler = RecordingHandler(json_reply({"data": [], "pageToken": None}))
        async with open_client(handler) as client:
            await client.get_placements(PlacementsQuery(expand=["child", "owners"], limit=2))

        request = handler.last_request
        assert request.url.path == "/v2.0/placements"
        assert request.url.params.get_list("expand") == ["child", "owners"]
        assert request.url.params["limit"] == "2"

    @pytest.mark.asyncio
    async def test_mapping_query_is_accepted(self):
        handler = RecordingHandler(json_reply({"data": []}))
        async with open_client(handler) as client:
            await client.get_organisations({"schoolUnitCode": ["12345678"], "limit": None})
        assert str(handler.last_request.url) == f"{BASE_URL}/organisations?schoolUnitCode=12345678"

    @pytest.mark.asyncio
    async def test_query_of_wrong_type_is_rejected(self):
        handler = RecordingHandler()
        async with open_client(handler) as client:
            with pytest.raises(TypeError):
                await client.get_organisations(PersonsQuery(civic_no="190001010000"))
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_get_by_id_quotes_id(self):
        handler = RecordingHandler(json_reply({"id": "a b"}))
        async with open_client(handler) as client:
            await client.get_person_by_id("a b", expand=["duties"], expand_reference_names=True)

        request = handler.last_request
        assert request.url.raw_path == b"/v2.0/persons/a%20b?expand=duties&expandReferenceNames=true"

    @pytest.mark.asyncio
    async def test_get_by_id_without_flags_sends_no_query(self):
        handler = RecordingHandler(json_reply({"id": "o1"}))
        async with open_client(handler) as client:
            await client.get_organisation_by_id("o1")
        assert str(handler.last_request.url) == f"{BASE_URL}/organisations/o1"

    @pytest.mark.asyncio
    async def test_empty_id_is_rejected(self):
        handler = RecordingHandler()
        async with open_client(handler) as client:
            with pytest.raises(ValueError):
                await client.get_group_by_id("")
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_lookup_posts_ids(self):
        handler = RecordingHandler(json_reply({"data": [{"id": "g1"}]}))
        async with open_client(handler) as client:
            result = await client.lookup_groups(["g1", "g2"], expand=["assignmentRoles"])

        request = handler.last_request
        assert result == {"data": [{"id": "g1"}]}
        assert request.method == "POST"
        assert str(request.url) == f"{BASE_URL}/groups/lookup?expand=assignmentRoles"
        assert body_of(request) == {"ids": ["g1", "g2"]}

    @pytest.mark.asyncio
    async def test_lookup_accepts_single_id(self):
        handler = RecordingHandler(json_reply({"data": []}))
        async with open_client(handler) as client:
            await client.lookup_rooms("r1")
        assert body_of(handler.last_request) == {"ids": ["r1"]}

    @pytest.mark.asyncio
    async def test_lookup_with_no_ids_is_rejected(self):
        handler = RecordingHandler()
        async with open_client(handler) as client:
            with pytest.raises(ValueError):
                await client.lookup_activities([])
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_lookup_persons_by_civic_number(self):
        handler = RecordingHandler(json_reply({"data": []}))
        async with open_client(handler) as client:
            await client.lookup_persons(civic_nos=["190001010000"], expand_reference_names=True)

        request = handler.last_request
        assert str(request.url) == f"{BASE_URL}/persons/lookup?expandReferenceNames=true"
        assert body_of(request) == {"civicNos": ["190001010000"]}

    @pytest.mark.asyncio
    async def test_lookup_persons_requires_ids_or_civic_numbers(self):
        async with open_client(RecordingHandler()) as client:
            with pytest.raises(ValueError):
                await client.lookup_persons()
            with pytest.raises(ValueError):
                await client.lookup_persons(ids=[], civic_nos=[])

    @pytest.mark.asyncio
    async def test_lookup_persons_empty_ids_with_civic_numbers(self):
        handler = RecordingHandler(json_reply({"data": []}))
        async with open_client(handler) as client:
            await client.lookup_persons(ids=[], civic_nos=["19000101-0000"])
        assert body_of(handler.last_request) == {"civicNos": ["19000101-0000"]}

    @pytest.mark.asyncio
    async def test_lookup_persons_by_ids_and_civic_numbers(self):
        handler = RecordingHandler(json_reply({"data": []}))
        async with open_client(handler) as client:
            await client.lookup_persons(ids="p1", civic_nos=["19000101-0000"])
        assert body_of(handler.last_request) == {
            "ids": ["p1"],
            "civicNos": ["19000101-0000"],
        }

    @pytest.mark.asyncio
    async def test_calendar_events_require_time_window(self):
        handler = RecordingHandler()
        async with open_client(handler) as client:
            with pytest.raises(ValueError):
                await client.get_calendar_events(None)
            with pytest.raises(ValueError):
                await client.get_calendar_events({"startTime.onOrAfter": "2024-09-01"})
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_calendar_events_with_time_window(self):
        handler = RecordingHandler(json_reply({"data": []}))
        async with open_client(handler) as client:
            await client.get_calendar_events(
                CalendarEventsQuery(
                    start_time_on_or_after=date(2024, 9, 1),
                    start_time_on_or_before=date(2024, 9, 7),
                )
            )
        params = handler.last_request.url.params
        assert params["startTime.onOrAfter"] == "2024-09-01"
        assert params["startTime.onOrBefore"] == "2024-09-07"

    @pytest.mark.asyncio
    async def test_aggregated_attendance(self):
        handler = RecordingHandler(json_reply({"data": []}))
        async with open_client(handler) as client:
            await client.get_aggregated_attendance(
                AggregatedAttendanceQuery(
                    start_date=date(2024, 8, 1), end_date=date(2024, 12, 20), student=["p1"]
                )
            )
        assert str(handler.last_request.url) == (
            f"{BASE_URL}/aggregatedAttendance?startDate=2024-08-01&endDate=2024-12-20&student=p1"
        )

    @pytest.mark.asyncio
    async def test_aggregated_attendance_requires_dates(self):
        async with open_client(RecordingHandler()) as client:
            with pytest.raises(ValueError):
                await client.get_aggregated_attendance({"startDate": "2024-08-01"})

    @pytest.mark.asyncio
    async def test_create_and_delete_subscription(self):
        created = {"id": "sub-1", "name": "n", "target": "https://hook.example/cb"}
        handler = RecordingHandler(json_reply(created, status_code=201), (204, {}))
        body = {
            "name": "n",
            "target": "https://hook.example/cb",
            "resourceTypes": [{"resource": "Person"}],
        }
        async with open_client(handler) as client:
            result = await client.create_subscription(body)
            deleted = await client.delete_subscription(result["id"])

        create_request, delete_request = handler.requests
        assert result["id"] == "sub-1"
        assert deleted is None
        assert create_request.method == "POST"
        assert str(create_request.url) == f"{BASE_URL}/subscriptions"
        assert body_of(create_request) == body
        assert delete_request.method == "DELETE"
        assert str(delete_request.url) == f"{BASE_URL}/subscriptions/sub-1"

    @pytest.mark.asyncio
    async def test_delete_missing_subscription(self):
        handler = RecordingHandler((404, {"text": "no such subscription"}))
        async with open_client(handler) as client:
            with pytest.raises(SS12000ResourceNotFoundError):
                await client.delete_subscription("nope")

    @pytest.mark.asyncio
    async def test_update_subscription_uses_patch(self):
        handler = RecordingHandler(json_reply({"id": "sub-1", "expires": "2025-01-01T00:00:00Z"}))
        async with open_client(handler) as client:
            await client.update_subscription("sub-1", {"expires": "2025-01-01T00:00:00Z"})

        request = handler.last_request
        assert request.method == "PATCH"
        assert str(request.url) == f"{BASE_URL}/subscriptions/sub-1"
        assert body_of(request) == {"expires": "2025-01-01T00:00:00Z"}

    @pytest.mark.asyncio
    async def test_create_requires_body(self):
        handler = RecordingHandler()
        async with open_client(handler) as client:
            with pytest.raises(ValueError):
                await client.create_absence(None)
        assert handler.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method_name, path",
        [
            ("delete_attendance", "/attendances/x1"),
            ("delete_attendance_event", "/attendanceEvents/x1"),
            ("delete_attendance_schedule", "/attendanceSchedules/x1"),
        ],
    )
    async def test_attendance_deletes(self, method_name, path):
        handler = RecordingHandler((204, {}))
        async with open_client(handler) as client:
            assert await getattr(client, method_name)("x1") is None
        assert handler.last_request.method == "DELETE"
        assert handler.last_request.url.path == f"/v2.0{path}"

    @pytest.mark.asyncio
    async def test_create_absence_path(self):
        handler = RecordingHandler(json_reply({"id": "abs-1"}, status_code=201))
        async with open_client(handler) as client:
            await client.create_absence({"student": "p1", "type": "Leave"})
        assert str(handler.last_request.url) == f"{BASE_URL}/absences"

    @pytest.mark.asyncio
    async def test_post_log_and_statistics(self):
        handler = RecordingHandler((201, {}))
        async with open_client(handler) as client:
            assert await client.post_log({"severityLevel": "Info", "message": "m"}) is None
            assert await client.post_statistics({"resourceType": "Person", "newCount": 3}) is None

        log_request, statistics_request = handler.requests
        assert str(log_request.url) == f"{BASE_URL}/log"
        assert str(statistics_request.url) == f"{BASE_URL}/statistics"
        assert body_of(statistics_request) == {"resourceType": "Person", "newCount": 3}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method_name, path",
        [
            ("get_organisations", "/organisations"),
            ("get_persons", "/persons"),
            ("get_placements", "/placements"),
            ("get_duties", "/duties"),
            ("get_groups", "/groups"),
            ("get_programmes", "/programmes"),
            ("get_study_plans", "/studyplans"),
            ("get_syllabuses", "/syllabuses"),
            ("get_school_unit_offerings", "/schoolUnitOfferings"),
            ("get_activities", "/activities"),
            ("get_attendances", "/attendances"),
            ("get_attendance_events", "/attendanceEvents"),
            ("get_attendance_schedules", "/attendanceSchedules"),
            ("get_grades", "/grades"),
            ("get_absences", "/absences"),
            ("get_resources", "/resources"),
            ("get_rooms", "/rooms"),
            ("get_subscriptions", "/subscriptions"),
            ("get_deleted_entities", "/deletedEntities"),
        ],
    )
    async def test_list_paths(self, method_name, path):
        handler = RecordingHandler(json_reply({"data": []}))
        async with open_client(handler) as client:
            await getattr(client, method_name)()
        assert handler.last_request.method == "GET"
        assert str(handler.last_request.url) == f"{BASE_URL}{path}"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method_name, path",
        [
            ("lookup_organisations", "/organisations/lookup"),
            ("lookup_placements", "/placements/lookup"),
            ("lookup_duties", "/duties/lookup"),
            ("lookup_programmes", "/programmes/lookup"),
            ("lookup_syllabuses", "/syllabuses/lookup"),
            ("lookup_school_unit_offerings", "/schoolUnitOfferings/lookup"),
            ("lookup_calendar_events", "/calendarEvents/lookup"),
            ("lookup_attendances", "/attendances/lookup"),
            ("lookup_attendance_events", "/attendanceEvents/lookup"),
            ("lookup_attendance_schedules", "/attendanceSchedules/lookup"),
            ("lookup_grades", "/grades/lookup"),
            ("lookup_absences", "/absences/lookup"),
            ("lookup_resources", "/resources/lookup"),
            ("lookup_subscriptions", "/subscriptions/lookup"),
        ],
    )
    async def test_lookup_paths(self, method_name, path):
        handler = RecordingHandler(json_reply({"data": []}))
        async with open_client(handler) as client:
            await getattr(client, method_name)(["id-1"])
        assert handler.last_request.method == "POST"
        assert str(handler.last_request.url) == f"{BASE_URL}{path}"
        assert body_of(handler.last_request) == {"ids": ["id-1"]}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method_name, path",
        [
            ("get_placement_by_id", "/placements/id-1"),
            ("get_duty_by_id", "/duties/id-1"),
            ("get_programme_by_id", "/programmes/id-1"),
            ("get_study_plan_by_id", "/studyplans/id-1"),
            ("get_syllabus_by_id", "/syllabuses/id-1"),
            ("get_school_unit_offering_by_id", "/schoolUnitOfferings/id-1"),
            ("get_activity_by_id", "/activities/id-1"),
            ("get_calendar_event_by_id", "/calendarEvents/id-1"),
            ("get_attendance_by_id", "/attendances/id-1"),
            ("get_attendance_event_by_id", "/attendanceEvents/id-1"),
            ("get_attendance_schedule_by_id", "/attendanceSchedules/id-1"),
            ("get_grade_by_id", "/grades/id-1"),
            ("get_absence_by_id", "/absences/id-1"),
            ("get_resource_by_id", "/resources/id-1"),
            ("get_room_by_id", "/rooms/id-1"),
            ("get_subscription_by_id", "/subscriptions/id-1"),
        ],
    )
    async def test_get_by_id_paths(self, method_name, path):
        handler = RecordingHandler(json_reply({"id": "id-1"}))
        async with open_client(handler) as client:
            result = await getattr(client, method_name)("id-1")
        assert result == {"id": "id-1"}
        assert str(handler.last_request.url) == f"{BASE_URL}{path}"


class TestGetAll:
    @pytest.mark.asyncio
    async def test_follows_page_tokens(self):
        handler = RecordingHandler(
            json_reply({"data": [{"id": "p1"}, {"id": "p2"}], "pageToken": "next-1"}),
            json_reply({"data": [{"id": "p3"}], "pageToken": "next-2"}),
            json_reply({"data": [{"id": "p4"}]}),
        )
        async with open_client(handler) as client:
            records = [
                record
                async for record in client.get_all(
                    "/persons", PersonsQuery(name_contains=["Pa"]), limit=2
                )
            ]

        assert [record["id"] for record in records] == ["p1", "p2", "p3", "p4"]
        first, second, third = handler.requests
        assert str(first.url) == f"{BASE_URL}/persons?limit=2&nameContains=Pa"
        assert str(second.url) == f"{BASE_URL}/persons?pageToken=next-1&limit=2"
        assert str(third.url) == f"{BASE_URL}/persons?pageToken=next-2&limit=2"

    @pytest.mark.asyncio
    async def test_stops_on_empty_page(self):
        handler = RecordingHandler(json_reply({"data": []}))
        async with open_client(handler) as client:
            records = [record async for record in client.get_all("/organisations")]
        assert records == []
        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    async def test_later_pages_without_limit(self):
        handler = RecordingHandler(
            json_reply({"data": [{"id": "o1"}], "pageToken": "t"}),
            json_reply({"data": [{"id": "o2"}], "pageToken": ""}),
        )
        async with open_client(handler) as client:
            records = [
                record
                async for record in client.get_all(
                    "/organisations", OrganisationsQuery(school_unit_code=["123"])
                )
            ]
        assert [record["id"] for record in records] == ["o1", "o2"]
        assert str(handler.requests[1].url) == f"{BASE_URL}/organisations?pageToken=t"

    @pytest.mark.asyncio
    async def test_non_object_page_raises_decode_error(self):
        handler = RecordingHandler(json_reply([1, 2, 3]))
        async with open_client(handler) as client:
            with pytest.raises(SS12000DecodeError):
                async for _ in client.get_all("/persons"):
                    pass

    @pytest.mark.asyncio
    async def test_invalid_query_type_is_rejected(self):
        handler = RecordingHandler()
        async with open_client(handler) as client:
            with pytest.raises(TypeError):
                async for _ in client.get_all("/calendarEvents", object()):
                    pass
        assert handler.requests == []
