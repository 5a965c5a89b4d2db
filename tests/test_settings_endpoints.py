import pytest
from fastapi.testclient import TestClient

from src.api.factory import create_api
from src.api.v1.endpoints import settings as settings_endpoints
from src.stores.settings_store import InMemorySettingsStore

BASE = "/api/v1/restaurants/pave46/settings"


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> TestClient:
    monkeypatch.setattr(settings_endpoints, "settings_store", InMemorySettingsStore())
    app = create_api(enable_logfire=False)
    return TestClient(app)


def test_get_settings(client):
    response = client.get(BASE)

    assert response.status_code == 200
    body = response.json()
    assert body["restaurant_id"] == "pave46"
    assert body["settings"]["name"] == "Pavé46"
    assert body["settings"]["monday_closed"] is False
    assert "X-Request-ID" in response.headers


def test_update_settings(client):
    response = client.put(
        BASE, json={"changes": {"phone": "(212) 555-9999", "monday_closed": True}}
    )

    assert response.status_code == 200
    assert response.json()["settings"]["phone"] == "(212) 555-9999"
    assert client.get(BASE).json()["settings"]["monday_closed"] is True


def test_update_rejects_non_editable_field(client):
    response = client.put(
        BASE,
        json={"changes": {"nonExistentField": "value"}},
        headers={"X-Request-ID": "req-1"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"]["code"] == "SETTINGS_FIELD_NOT_EDITABLE"
    assert body["error"]["message"] == "Field nonExistentField is not editable"
    assert body["request_id"] == "req-1"


def test_update_rejects_invalid_value(client):
    response = client.put(BASE, json={"changes": {"zip": "123"}})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["type"] == "FieldValidationException"
    assert error["message"] == "ZIP Code format is invalid"
    assert error["code"] == "VALIDATION_INVALID_FORMAT"
    assert error["details"] == {"field": "zip"}
    assert client.get(BASE).json()["settings"]["zip"] == "10013"


def test_malformed_body_is_422(client):
    response = client.put(BASE, json={"phone": "(212) 555-9999"})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_INVALID_INPUT"


def test_category_routes(client):
    response = client.put(
        f"{BASE}/hours", json={"changes": {"monday_open": "18:00", "name": "Nope"}}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["category"] == "hours"
    assert body["settings"]["monday_open"] == "18:00"
    assert "name" not in body["settings"]

    contact = client.get(f"{BASE}/contact").json()["settings"]
    assert set(contact) == {"phone", "email", "address", "city", "state", "zip"}
    assert client.get(BASE).json()["settings"]["name"] == "Pavé46"


def test_list_fields(client):
    response = client.get(f"{BASE}/fields", params={"category": "contact"})

    assert response.status_code == 200
    fields = {field["id"]: field for field in response.json()}
    assert list(fields) == ["phone", "email", "address", "city", "state", "zip"]
    assert fields["phone"]["validation"]["pattern"] == r"^\(\d{3}\) \d{3}-\d{4}$"
    assert fields["state"]["validation"]["max_length"] == 2


def test_validate_preview(client):
    response = client.post(f"{BASE}/validate", json={"changes": {"phone": "555"}})

    assert response.status_code == 200
    assert response.json() == {
        "valid": False,
        "errors": {"phone": "Phone Number format is invalid"},
    }


def test_hours_display(client):
    client.put(BASE, json={"changes": {"thursday_close": "00:00", "sunday_closed": True}})

    response = client.get(f"{BASE}/hours/display")

    assert response.status_code == 200
    hours = {entry["day"]: entry["hours"] for entry in response.json()["hours"]}
    assert hours["Thursday"] == "5:00 PM - 12:00 AM"
    assert hours["Friday"] == "5:00 PM - 2:00 AM"
    assert hours["Sunday"] == "Closed"


def test_apply_hours(client):
    response = client.post(
        f"{BASE}/hours/apply", json={"source_day": "saturday", "target_days": ["sunday"]}
    )

    assert response.status_code == 200
    assert response.json()["settings"]["sunday_close"] == "02:00"

    bad = client.post(f"{BASE}/hours/apply", json={"source_day": "someday"})
    assert bad.status_code == 400
    assert bad.json()["error"]["code"] == "SETTINGS_UNKNOWN_DAY"


def test_restaurants_are_isolated(client):
    client.put(BASE, json={"changes": {"city": "Brooklyn"}})

    other = client.get("/api/v1/restaurants/noreetuh/settings").json()

    assert other["settings"]["city"] == "New York"


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["components"]["settings_store"]["backend"] == "memory"
