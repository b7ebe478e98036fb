# =============================================================================
# tests/conftest.py
# Pytest Configuration and Fixtures
# =============================================================================

import json
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from livestock_core.api import APIConfig, ApiClient, AuthGateway, ResourceGateway
from livestock_core.storage import LocalStorage


BASE_URL = "http://testserver/api"


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def sample_animals():
    """Three cattle-herd animals plus one without species"""
    return [
        {"id": 1, "tag_id": "C-001", "name": "Bella", "species": "cattle", "breed": "Angus",
         "gender": "female", "health_status": "healthy", "owner": 1},
        {"id": 2, "tag_id": "C-002", "name": "Duke", "species": "cattle", "breed": "Hereford",
         "gender": "male", "health_status": "sick", "owner": 1},
        {"id": 3, "tag_id": "S-001", "name": "Woolly", "species": "sheep", "breed": "Merino",
         "gender": "female", "health_status": "under_treatment", "owner": 2},
        {"id": 4, "tag_id": "X-001", "name": "Stray", "species": "", "breed": "Mixed",
         "gender": "male", "status": "healthy", "owner": 2},
    ]


@pytest.fixture
def sample_owners():
    return [
        {"id": 1, "first_name": "Ana", "last_name": "Silva", "full_name": "Ana Silva",
         "email": "ana@farm.example", "phone": "555-0101"},
        {"id": 2, "first_name": "Ben", "last_name": "Okoro", "full_name": "Ben Okoro",
         "email": "ben@ranch.example", "phone": "555-0202"},
    ]


@pytest.fixture
def sample_events():
    """Events newest first, as the backend delivers them"""
    return [
        {"id": 16, "event_type": "vaccination", "date": "2024-03-02", "animal": 1, "cost": "45.00"},
        {"id": 15, "event_type": "treatment", "date": "2024-02-20", "animal": 2, "cost": "120.50"},
        {"id": 14, "event_type": "checkup", "date": "2024-02-03", "animal": 3, "cost": None},
        {"id": 13, "event_type": "birth", "date": "2024-01-28", "animal": 1},
        {"id": 12, "event_type": "vaccination", "date": "2024-01-10", "animal": 4, "cost": 30},
        {"id": 11, "event_type": "sale", "date": "2024-01-02", "animal": 2, "cost": "0"},
    ]


@pytest.fixture
def sample_inventory():
    return [
        {"id": 1, "name": "Cattle feed", "category": "feed", "quantity": "10", "unit": "bag",
         "unit_price": "2.5", "reorder_level": "20"},
        {"id": 2, "name": "Antibiotic", "category": "medicine", "quantity": 40, "unit": "bottle",
         "unit_price": 12, "reorder_level": 5, "total_value": "480.00"},
        {"id": 3, "name": "Mineral lick", "category": "supplement", "quantity": 8, "unit": "unit",
         "unit_price": 4, "reorder_level": 2, "is_low_stock": True},
    ]


# =============================================================================
# HTTP FIXTURES
# =============================================================================

def make_response(status: int = 200, body: Any = None, url: str = f"{BASE_URL}/") -> requests.Response:
    """Build a real ``requests.Response`` with the given status and body"""
    response = requests.Response()
    response.status_code = status
    response.url = url
    response.encoding = "utf-8"
    if body is None:
        response._content = b""
    elif isinstance(body, bytes):
        response._content = body
    elif isinstance(body, str):
        response._content = body.encode("utf-8")
        response.headers["Content-Type"] = "text/plain"
    else:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    return response


@pytest.fixture
def http_session():
    """Mocked ``requests.Session``; set ``request.side_effect`` to script responses"""
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return session


@pytest.fixture
def api_client(http_session):
    return ApiClient(APIConfig(base_url=BASE_URL, timeout=5), session=http_session)


@pytest.fixture
def respond():
    """Factory fixture exposing ``make_response`` to test modules"""
    return make_response


# =============================================================================
# MOCK FIXTURES
# =============================================================================

@pytest.fixture
def storage(tmp_path):
    """LocalStorage rooted in a temporary directory"""
    return LocalStorage(tmp_path / "session")


@pytest.fixture
def mock_gateway():
    gateway = MagicMock(spec=ResourceGateway)
    gateway.resource = "animals"
    return gateway


@pytest.fixture
def mock_auth_gateway():
    return MagicMock(spec=AuthGateway)


@pytest.fixture
def login_response():
    return {
        "user": {"id": 7, "email": "ana@farm.example", "first_name": "Ana"},
        "tokens": {"access": "access-1", "refresh": "refresh-1"},
    }

