"""
Pytest configuration for the Visitor Entry System tests.

Ensures the project root is on sys.path so tests can import the in-repo
package layout (`src.*`, `ui.*`, `visitor_entry`), and provides an
in-memory visitors REST collection served through `httpx.MockTransport`.
"""

import json
import os
import sys

import httpx
import pytest

# Insert the repository root (one directory up from tests/) at the
# beginning of sys.path to prioritize local modules over site-packages.
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

API_URL = "http://visitors.test:8083/api"


class FakeVisitorApi:
    """Minimal REST collection at `/api/visitors` with request recording.

    Set `fail_with` to a status code to make every request to the given
    method fail, e.g. `api.fail_with["POST"] = 500`.
    """

    def __init__(self, records=None):
        self.records = {r["id"]: dict(r) for r in (records or [])}
        self.next_id = max(self.records, default=0) + 1
        self.requests = []
        self.fail_with = {}

    def calls(self, method=None):
        return [(m, p) for m, p, _ in self.requests if method is None or m == method]

    def handler(self, request: httpx.Request) -> httpx.Response:
        method = request.method
        path = request.url.path
        body = json.loads(request.content) if request.content else None
        self.requests.append((method, path, body))

        if method in self.fail_with:
            status = self.fail_with[method]
            return httpx.Response(status, json={"message": f"{method} rejected"})

        parts = path.strip("/").split("/")
        if parts[:2] != ["api", "visitors"]:
            return httpx.Response(404, json={"message": "Not found"})

        if len(parts) == 2:
            if method == "GET":
                return httpx.Response(200, json=list(self.records.values()))
            if method == "POST":
                record = dict(body, id=self.next_id)
                self.records[self.next_id] = record
                self.next_id += 1
                return httpx.Response(201, json=record)
            return httpx.Response(405)

        visitor_id = int(parts[2])
        if visitor_id not in self.records:
            return httpx.Response(404, json={"message": "Visitor not found"})
        if method == "PUT":
            record = dict(body, id=visitor_id)
            self.records[visitor_id] = record
            return httpx.Response(200, json=record)
        if method == "DELETE":
            del self.records[visitor_id]
            return httpx.Response(204)
        return httpx.Response(405)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def make_record(visitor_id, name, **extra):
    record = {
        "id": visitor_id,
        "name": name,
        "email": f"{name.lower()}@example.com",
        "phone": "555-0100",
        "purpose": "Meeting",
        "checkInTime": "2024-05-01T09:00",
        "checkOutTime": None,
    }
    record.update(extra)
    return record


@pytest.fixture
def fake_api():
    return FakeVisitorApi([make_record(1, "A")])
