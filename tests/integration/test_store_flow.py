# =============================================================================
# tests/integration/test_store_flow.py
# Integration Tests: session, resource stores and dashboard over one client
# =============================================================================

import json
import threading
from urllib.parse import urlparse

import pytest

from livestock_core.config import ClientSettings
from livestock_core.state import AppStore
from livestock_core.storage import LocalStorage, TOKENS_KEY


class FakeBackend:
    """
    In-memory REST backend answering the mocked ``requests.Session``.

    Serves the auth endpoints and CRUD on every collection; access tokens
    listed in ``expired`` are answered with 401.
    """

    def __init__(self, respond):
        self.respond = respond
        self.collections = {name: {} for name in ("animals", "owners", "events", "inventory", "reports")}
        self.next_id = 100
        self.expired = set()
        self.lock = threading.Lock()
        self.refresh_calls = 0

    def seed(self, name, records):
        for record in records:
            self.collections[name][record["id"]] = dict(record)

    def __call__(self, method, url, params=None, headers=None, json=None, data=None, files=None, timeout=None):
        with self.lock:
            return self._dispatch(method, url, headers or {}, json)

    def _dispatch(self, method, url, headers, body):
        path = urlparse(url).path.replace("/api/", "", 1).strip("/")
        parts = path.split("/")

        if parts[0] == "auth":
            return self._auth("/".join(parts[1:]), body)

        token = headers.get("Authorization", "").replace("Bearer ", "")
        if not token or token in self.expired:
            return self.respond(401, {"detail": "Given token not valid for any token type"}, url)

        collection = self.collections[parts[0]]
        if len(parts) == 1:
            if method == "GET":
                return self.respond(200, {"count": len(collection), "results": list(collection.values())}, url)
            self.next_id += 1
            record = dict(body, id=self.next_id)
            collection[record["id"]] = record
            return self.respond(201, record, url)

        entity_id = int(parts[1])
        if entity_id not in collection:
            return self.respond(404, {"detail": "Not found."}, url)
        if method == "GET":
            return self.respond(200, collection[entity_id], url)
        if method == "DELETE":
            del collection[entity_id]
            return self.respond(204, None, url)
        if method == "PUT":
            collection[entity_id] = dict(body, id=entity_id)
        else:
            collection[entity_id] = dict(collection[entity_id], **body)
        return self.respond(200, collection[entity_id], url)

    def _auth(self, endpoint, body):
        if endpoint == "login":
            if body.get("password") != "secret":
                return self.respond(401, {"detail": "No active account found with the given credentials"})
            return self.respond(200, {
                "user": {"id": 1, "email": body["email"]},
                "tokens": {"access": "access-1", "refresh": "refresh-1"},
            })
        if endpoint == "token/refresh":
            self.refresh_calls += 1
            if body.get("refresh") != "refresh-1":
                return self.respond(401, {"detail": "Token is invalid or expired"})
            return self.respond(200, {"access": f"access-{self.refresh_calls + 1}"})
        if endpoint == "logout":
            return self.respond(205, None)
        if endpoint == "user":
            return self.respond(200, {"id": 1, "email": "ana@farm.example"})
        return self.respond(404, {"detail": "Not found."})


@pytest.fixture
def backend(respond, http_session):
    fake = FakeBackend(respond)
    http_session.request.side_effect = fake
    return fake


@pytest.fixture
def app(tmp_path, api_client, backend):
    settings = ClientSettings(base_url="http://testserver/api", storage_dir=str(tmp_path / "session"))
    app = AppStore(settings=settings, client=api_client, storage=LocalStorage(tmp_path / "session"))
    yield app
    app.close()


@pytest.fixture
def signed_in(app):
    assert app.session.login({"email": "ana@farm.example", "password": "secret"})
    return app


class TestAuthenticatedFlow:
    """Test a full session against the fake backend"""

    def test_wrong_password_keeps_anonymous(self, app):
        result = app.session.login({"email": "ana@farm.example", "password": "nope"})

        assert not result
        assert app.session.error == {"detail": "No active account found with the given credentials"}
        assert app.session.is_authenticated is False

    def test_anonymous_list_fails_with_auth_error(self, app):
        result = app.animals.fetch_all()

        assert result.error_code == "AUTH_001"
        assert app.animals.items == []

    def test_crud_round_and_dashboard(self, signed_in, backend, sample_animals, sample_inventory):
        backend.seed("animals", sample_animals)
        backend.seed("inventory", sample_inventory)

        assert signed_in.animals.fetch_all()
        assert signed_in.inventory.fetch_all()
        assert signed_in.reports.dashboard_stats.total_animals == 4

        created = signed_in.animals.create({"tag_id": "G-001", "species": "goat", "health_status": "sick"})
        assert created.data["id"] == 101
        signed_in.animals.partial_update(1, {"health_status": "sick"})
        signed_in.animals.delete(4)

        stats = signed_in.reports.dashboard_stats
        assert [a["id"] for a in signed_in.animals.items] == [1, 2, 3, 101]
        assert stats.under_treatment == 4
        assert stats.healthy_animals == 0
        assert stats.animals_by_species == {"cattle": 2, "sheep": 1, "goat": 1}
        assert stats.low_stock_items == 2

    def test_missing_entity_reports_not_found(self, signed_in):
        result = signed_in.owners.fetch_by_id(999)

        assert result.error_code == "API_404"
        assert signed_in.owners.error == {"detail": "Not found."}

    def test_expired_access_token_is_refreshed_once(self, signed_in, backend, sample_owners):
        backend.seed("owners", sample_owners)
        backend.expired.add("access-1")

        result = signed_in.owners.fetch_all()

        assert result.success
        assert len(signed_in.owners.items) == 2
        assert backend.refresh_calls == 1
        assert signed_in.session.access_token() == "access-2"
        assert signed_in.storage.get_item(TOKENS_KEY)["access"] == "access-2"

    def test_rejected_refresh_ends_session(self, signed_in, backend):
        backend.expired.add("access-1")
        signed_in.session.update_tokens({"access": "access-1", "refresh": "revoked"})

        result = signed_in.events.fetch_all()

        assert result.error_code == "AUTH_001"
        assert signed_in.session.is_authenticated is False
        assert signed_in.storage.keys() == []

    def test_logout_clears_persisted_session(self, signed_in):
        signed_in.session.logout()

        assert signed_in.session.is_authenticated is False
        assert signed_in.storage.keys() == []

    def test_concurrent_submissions(self, signed_in, backend, sample_animals, sample_owners, sample_events):
        backend.seed("animals", sample_animals)
        backend.seed("owners", sample_owners)
        backend.seed("events", sample_events)

        futures = [
            signed_in.animals.submit("fetch_all"),
            signed_in.owners.submit("fetch_all"),
            signed_in.events.submit("fetch_all"),
        ]
        results = [f.result(timeout=5) for f in futures]

        assert all(r.success for r in results)
        signed_in.refresh_dashboard()
        stats = signed_in.reports.dashboard_stats
        assert (stats.total_animals, stats.total_owners, stats.total_events) == (4, 2, 6)
        assert json.loads(json.dumps(stats.to_dict()))["total_events"] == 6
