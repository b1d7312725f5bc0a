from datetime import datetime, timezone

import pytest

from fieldcrm.config import Settings, settings
from fieldcrm.errors import UnknownPersonnelError
from fieldcrm.services.clock import creation_stamp, format_timestamp, now_local, today_local
from fieldcrm.services.personnel import list_personnel, resolve_personnel


def test_timestamps_use_business_timezone() -> None:
    moment = datetime(2026, 10, 17, 10, 35, 9, tzinfo=timezone.utc)

    assert format_timestamp(moment) == "17 Oct 2026 04:05:09 PM"
    assert now_local(moment).utcoffset().total_seconds() == 5.5 * 3600


def test_business_day_rolls_over_before_utc() -> None:
    late_utc = datetime(2026, 10, 17, 20, 0, tzinfo=timezone.utc)

    assert today_local(late_utc).isoformat() == "2026-10-18"


def test_naive_reference_is_rejected() -> None:
    with pytest.raises(ValueError):
        now_local(datetime(2026, 10, 17, 10, 0))


def test_personnel_resolution() -> None:
    assert resolve_personnel(None) == settings.default_personnel
    assert resolve_personnel("  ") == settings.default_personnel
    assert resolve_personnel("salil anand") == "Salil Anand"
    assert "Mr. Bharat" in list_personnel()
    assert "Shubham Kumar" in list_personnel()
    with pytest.raises(UnknownPersonnelError):
        resolve_personnel("Mallory")


def test_creation_stamp_has_fixed_precision() -> None:
    moment = datetime(2026, 10, 17, 10, 35, 9, tzinfo=timezone.utc)

    assert creation_stamp(moment) == "2026-10-17T16:05:09.000000+05:30"


def test_settings_read_system_admins_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FIELDCRM_SYSTEM_ADMINS", '["Asha Rao", "Vikram Shah"]')
    monkeypatch.setenv("FIELDCRM_TIMEZONE", "UTC")

    configured = Settings()

    assert configured.system_admins == ("Asha Rao", "Vikram Shah")
    assert configured.timezone == "UTC"
