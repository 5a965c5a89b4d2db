import pytest

from main import parse_assignments, parse_value, run_command
from src.services.settings_service import SettingsService
from src.stores.settings_store import InMemorySettingsStore


@pytest.fixture
def service() -> SettingsService:
    return SettingsService(restaurant_id="pave46", store=InMemorySettingsStore())


def test_parse_value_booleans():
    assert parse_value("true") is True
    assert parse_value("False") is False
    assert parse_value("17:00") == "17:00"


def test_parse_assignments_rejects_bare_tokens():
    assert parse_assignments(["city=Brooklyn", "tagline="]) == {
        "city": "Brooklyn",
        "tagline": "",
    }
    with pytest.raises(ValueError):
        parse_assignments(["city"])


def test_set_command_updates(service, capsys):
    assert run_command(service, 'set phone="(212) 555-9999" monday_closed=true') is True

    settings = service.get_settings()
    assert settings["phone"] == "(212) 555-9999"
    assert settings["monday_closed"] is True
    assert "Saved 2 change(s)" in capsys.readouterr().out


def test_set_command_reports_errors(service, capsys):
    run_command(service, "set zip=123")

    assert "ZIP Code format is invalid" in capsys.readouterr().out
    assert service.get_settings()["zip"] == "10013"


def test_set_category_ignores_other_fields(service):
    run_command(service, "set-category hours monday_open=18:00 name=Nope")

    settings = service.get_settings()
    assert settings["monday_open"] == "18:00"
    assert settings["name"] == "Pavé46"


def test_hours_command(service, capsys):
    run_command(service, "hours")

    out = capsys.readouterr().out
    assert "Friday" in out
    assert "5:00 PM - 2:00 AM" in out


def test_exit_stops_console(service):
    assert run_command(service, "quit") is False
    assert run_command(service, "help") is True
