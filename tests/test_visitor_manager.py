"""
Tests for the visitor list/form controller.

Most tests drive `VisitorManager` with an in-memory client so that the
number and order of remote calls can be asserted directly; the last group
runs the full stack over `httpx.MockTransport`.
"""

import pytest

from conftest import API_URL, FakeVisitorApi, make_record
from src.config import Settings
from src.errors import ApiConnectionError, ServerStatusError
from src.ui_logic import VisitorManager
from src.ui_logic.visitor_manager import ADD_FAILED, DELETE_FAILED, UPDATE_FAILED
from src.visitor_model import Visitor, VisitorDraft
from ui.state import build_manager


class RecordingClient:
    """In-memory stand-in for `VisitorService` that logs every call."""

    def __init__(self, visitors=None):
        self.visitors = list(visitors or [])
        self.calls = []
        self.errors = {}

    def _maybe_fail(self, op):
        if op in self.errors:
            raise self.errors[op]

    def list_visitors(self):
        self.calls.append(("list",))
        self._maybe_fail("list")
        return list(self.visitors)

    def create_visitor(self, payload):
        self.calls.append(("create", payload))
        self._maybe_fail("create")
        created = Visitor.from_api(dict(payload, id=100 + len(self.visitors)))
        self.visitors.append(created)
        return created

    def update_visitor(self, visitor_id, payload):
        self.calls.append(("update", visitor_id, payload))
        self._maybe_fail("update")
        updated = Visitor.from_api(dict(payload, id=visitor_id))
        self.visitors = [updated if v.id == visitor_id else v for v in self.visitors]
        return updated

    def delete_visitor(self, visitor_id):
        self.calls.append(("delete", visitor_id))
        self._maybe_fail("delete")
        self.visitors = [v for v in self.visitors if v.id != visitor_id]


def _visitor(visitor_id, name):
    return Visitor.from_api(make_record(visitor_id, name))


def _fill_draft(manager, name="New"):
    manager.set_field("name", name)
    manager.set_field("email", f"{name.lower()}@example.com")
    manager.set_field("phone", "555-0199")
    manager.set_field("purpose", "Interview")


class TestFetchVisitors:

    def test_populates_exactly_the_returned_records(self):
        records = [_visitor(1, "A"), _visitor(2, "B")]
        manager = VisitorManager(RecordingClient(records))

        assert manager.fetch_visitors() is True
        state = manager.get_state()
        assert state.visitors == records
        assert state.error is None
        assert state.loading is False

    def test_server_status_error_is_detailed(self):
        client = RecordingClient([_visitor(1, "A")])
        manager = VisitorManager(client)
        manager.fetch_visitors()
        client.errors["list"] = ServerStatusError(500, "Database down")

        assert manager.fetch_visitors() is False
        state = manager.get_state()
        assert state.visitors == []
        assert state.error == "Server error (500): Database down"
        assert state.loading is False

    def test_server_status_error_without_message(self):
        client = RecordingClient()
        client.errors["list"] = ServerStatusError(404)
        manager = VisitorManager(client)
        manager.fetch_visitors()
        assert manager.get_state().error == "Server error (404): Unknown error"

    def test_connectivity_error_names_the_server(self):
        client = RecordingClient()
        client.errors["list"] = ApiConnectionError("refused")
        manager = VisitorManager(client, server_origin="http://localhost:8083")

        assert manager.fetch_visitors() is False
        error = manager.get_state().error
        assert error.startswith("Could not connect to the server.")
        assert error.endswith("http://localhost:8083")
        assert manager.get_state().visitors == []

    def test_success_clears_previous_error(self):
        client = RecordingClient([_visitor(1, "A")])
        client.errors["list"] = ApiConnectionError("refused")
        manager = VisitorManager(client)
        manager.fetch_visitors()
        del client.errors["list"]

        manager.fetch_visitors()
        assert manager.get_state().error is None
        assert len(manager.get_state().visitors) == 1


class TestSubmit:

    def test_create_without_edit_target_then_full_reload(self):
        client = RecordingClient([_visitor(1, "A")])
        manager = VisitorManager(client)
        manager.fetch_visitors()
        _fill_draft(manager, "New")
        manager.set_field("checkInTime", "2024-05-02T10:00")

        assert manager.submit() is True
        ops = [c[0] for c in client.calls]
        assert ops == ["list", "create", "list"]
        assert client.calls[1][1] == {
            "name": "New",
            "email": "new@example.com",
            "phone": "555-0199",
            "purpose": "Interview",
            "checkInTime": "2024-05-02T10:00",
            "checkOutTime": "",
        }
        state = manager.get_state()
        assert [v.name for v in state.visitors] == ["A", "New"]
        assert state.draft == VisitorDraft()
        assert state.editing_id is None

    def test_update_with_edit_target_then_reload_and_exit_edit_mode(self):
        client = RecordingClient([_visitor(1, "A"), _visitor(2, "B")])
        manager = VisitorManager(client)
        manager.fetch_visitors()

        manager.start_edit(manager.get_state().visitors[1])
        assert manager.is_editing
        assert manager.submit_label == "Update Visitor"
        manager.set_field("checkOutTime", "2024-05-01T17:30")

        assert manager.submit() is True
        op, visitor_id, payload = client.calls[1]
        assert (op, visitor_id) == ("update", 2)
        assert payload["name"] == "B"
        assert payload["checkOutTime"] == "2024-05-01T17:30"
        assert "id" not in payload
        assert client.calls[2] == ("list",)

        state = manager.get_state()
        assert state.editing_id is None
        assert not manager.is_editing
        assert manager.submit_label == "Add Visitor"
        assert state.draft == VisitorDraft()
        assert state.visitors[1].check_out_time == "2024-05-01T17:30"

    def test_failed_create_keeps_draft_and_skips_reload(self):
        client = RecordingClient()
        client.errors["create"] = ServerStatusError(500)
        manager = VisitorManager(client)
        _fill_draft(manager)

        assert manager.submit() is False
        assert manager.get_state().error == ADD_FAILED
        assert manager.get_state().draft.name == "New"
        assert [c[0] for c in client.calls] == ["create"]

    def test_failed_update_keeps_edit_target(self):
        client = RecordingClient([_visitor(1, "A")])
        manager = VisitorManager(client)
        manager.fetch_visitors()
        manager.start_edit(manager.get_state().visitors[0])
        client.errors["update"] = ApiConnectionError("refused")

        assert manager.submit() is False
        state = manager.get_state()
        assert state.error == UPDATE_FAILED
        assert state.editing_id == 1
        assert state.draft.name == "A"

    def test_missing_required_fields_block_the_request(self):
        client = RecordingClient()
        manager = VisitorManager(client)
        manager.set_field("name", "Only a name")

        assert manager.submit() is False
        assert manager.get_state().error == "Please fill in: Email, Phone, Purpose"
        assert client.calls == []

    def test_submit_clears_previous_error(self):
        client = RecordingClient()
        client.errors["list"] = ApiConnectionError("refused")
        manager = VisitorManager(client)
        manager.fetch_visitors()
        del client.errors["list"]
        _fill_draft(manager)

        manager.submit()
        assert manager.get_state().error is None

    def test_reload_failure_after_create_surfaces_list_error(self):
        client = RecordingClient()
        manager = VisitorManager(client)
        _fill_draft(manager)
        client.errors["list"] = ServerStatusError(502, "Bad gateway")

        assert manager.submit() is True
        state = manager.get_state()
        assert state.error == "Server error (502): Bad gateway"
        assert state.visitors == []
        assert state.draft == VisitorDraft()


class TestEditing:

    def test_set_field_accepts_wire_and_attribute_names(self):
        manager = VisitorManager(RecordingClient())
        manager.set_field("checkInTime", "2024-01-01T08:00")
        manager.set_field("check_out_time", "2024-01-01T09:00")
        draft = manager.get_state().draft
        assert draft.check_in_time == "2024-01-01T08:00"
        assert draft.check_out_time == "2024-01-01T09:00"

    def test_set_field_rejects_unknown_names(self):
        manager = VisitorManager(RecordingClient())
        with pytest.raises(KeyError):
            manager.set_field("id", "5")

    def test_start_edit_copies_editable_fields(self):
        visitor = Visitor(id=9, name="C", email="c@x", phone="1", purpose="Tour",
                          check_in_time="2024-05-01T09:00", check_out_time=None)
        manager = VisitorManager(RecordingClient([visitor]))
        revision = manager.get_state().draft_revision

        manager.start_edit(visitor)
        state = manager.get_state()
        assert state.editing_id == 9
        assert state.draft == VisitorDraft(name="C", email="c@x", phone="1", purpose="Tour",
                                           check_in_time="2024-05-01T09:00", check_out_time="")
        assert state.draft_revision == revision + 1

    def test_cancel_edit_resets_without_remote_calls(self):
        client = RecordingClient([_visitor(1, "A")])
        manager = VisitorManager(client)
        manager.start_edit(client.visitors[0])

        manager.cancel_edit()
        assert manager.get_state().editing_id is None
        assert manager.get_state().draft.is_empty()
        assert client.calls == []

    def test_edit_target_id_zero_still_counts_as_editing(self):
        client = RecordingClient([_visitor(0, "Zero")])
        manager = VisitorManager(client)
        manager.fetch_visitors()
        manager.start_edit(client.visitors[0])

        manager.submit()
        assert client.calls[1][0:2] == ("update", 0)


class TestDelete:

    def test_removes_exactly_that_row_without_refetch(self):
        client = RecordingClient([_visitor(1, "A"), _visitor(2, "B"), _visitor(3, "C")])
        manager = VisitorManager(client)
        manager.fetch_visitors()

        assert manager.delete_visitor(2) is True
        assert [v.id for v in manager.get_state().visitors] == [1, 3]
        assert client.calls == [("list",), ("delete", 2)]

    def test_failure_keeps_list_and_sets_static_error(self):
        client = RecordingClient([_visitor(1, "A")])
        manager = VisitorManager(client)
        manager.fetch_visitors()
        client.errors["delete"] = ServerStatusError(500, "boom")

        assert manager.delete_visitor(1) is False
        state = manager.get_state()
        assert state.error == DELETE_FAILED
        assert [v.id for v in state.visitors] == [1]

    def test_success_clears_error(self):
        client = RecordingClient([_visitor(1, "A")])
        manager = VisitorManager(client)
        manager.fetch_visitors()
        manager.get_state().error = "stale"

        manager.delete_visitor(1)
        assert manager.get_state().error is None

    def test_find_visitor_compares_ids_as_strings(self):
        client = RecordingClient([_visitor(1, "A")])
        manager = VisitorManager(client)
        manager.fetch_visitors()
        assert manager.find_visitor("1").name == "A"
        assert manager.find_visitor("2") is None


class TestOverHttp:

    def test_delete_example_end_to_end(self):
        api = FakeVisitorApi([make_record(1, "A")])
        manager = build_manager(Settings(api_url=API_URL), transport=api.transport)

        manager.fetch_visitors()
        assert [v.name for v in manager.get_state().visitors] == ["A"]

        manager.delete_visitor(1)
        assert api.calls("DELETE") == [("DELETE", "/api/visitors/1")]
        assert manager.get_state().visitors == []
        assert len(api.calls("GET")) == 1

    def test_create_then_update_round_trip(self):
        api = FakeVisitorApi()
        manager = build_manager(Settings(api_url=API_URL), transport=api.transport)
        manager.fetch_visitors()
        _fill_draft(manager, "Dana")
        manager.submit()

        created = manager.get_state().visitors[0]
        manager.start_edit(created)
        manager.set_field("purpose", "Follow-up")
        manager.submit()

        assert [m for m, _ in api.calls()] == ["GET", "POST", "GET", "PUT", "GET"]
        assert api.calls("PUT") == [("PUT", f"/api/visitors/{created.id}")]
        assert manager.get_state().visitors[0].purpose == "Follow-up"

    def test_unreachable_server_message_uses_origin(self):
        import httpx

        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        settings = Settings(api_url="http://localhost:8083/api")
        manager = build_manager(settings, transport=httpx.MockTransport(refuse))
        manager.fetch_visitors()
        assert manager.get_state().error == (
            "Could not connect to the server. "
            "Make sure the backend API is running on http://localhost:8083"
        )

    def test_server_error_message_from_body(self):
        api = FakeVisitorApi()
        api.fail_with["GET"] = 500
        manager = build_manager(Settings(api_url=API_URL), transport=api.transport)
        manager.fetch_visitors()
        assert manager.get_state().error == "Server error (500): GET rejected"

    def test_create_with_text_acknowledgement_still_reloads(self):
        import httpx

        api = FakeVisitorApi([make_record(1, "A")])

        def text_on_post(request):
            response = api.handler(request)
            if request.method == "POST":
                return httpx.Response(201, text="Visitor saved")
            return response

        manager = build_manager(Settings(api_url=API_URL), transport=httpx.MockTransport(text_on_post))
        manager.fetch_visitors()
        _fill_draft(manager, "Eve")

        assert manager.submit() is True
        state = manager.get_state()
        assert state.error is None
        assert [m for m, _ in api.calls()] == ["GET", "POST", "GET"]
        assert [v.name for v in state.visitors] == ["A", "Eve"]
        assert state.draft == VisitorDraft()
