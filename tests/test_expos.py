from datetime import date

import pytest

from fieldcrm.errors import ExpoNotFoundError, PersistenceError
from fieldcrm.models.domain import Expo, ExpoStatus, ParticipationType
from fieldcrm.persistence.registry import Registry
from fieldcrm.schemas.expos import ExpoPayload
from fieldcrm.services.expos import ExpoFilters, compute_expo_stats, delete_expo, normalize_expo, query_expos, save_expo

STAMP = "17 Oct 2026 04:05:09 PM"
EXPO_SERVICE = "fieldcrm.services.expos.service"


def make_expo(eid: str, name: str, **fields) -> Expo:
    return Expo(id=eid, name=name, start_date=fields.pop("start_date", date(2026, 1, 22)), **fields)


@pytest.fixture
def registry() -> Registry:
    return Registry(
        expos=[
            make_expo("e-1", "IMTEX", city="Bengaluru", zone="South", status=ExpoStatus.LIVE, leads_generated=10),
            make_expo("e-2", "Engimach", city="Gandhinagar", zone="West", hot_leads=4, orders_received=2,
                      participation_type=ParticipationType.EXHIBITOR),
        ]
    )


def test_new_expo_gets_defaults_and_zone() -> None:
    expo = normalize_expo(ExpoPayload(name=" Plastindia ", start_date=date(2026, 2, 5), state="Delhi"), None, "Rohit Verma", STAMP)

    assert expo.id.startswith("e-")
    assert expo.name == "Plastindia"
    assert (expo.industry, expo.region, expo.event_type) == ("Mechanical", "India", "Expo / Trade Fair")
    assert expo.zone == "North"
    assert expo.participation_type is ParticipationType.VISITOR
    assert expo.status is ExpoStatus.UPCOMING
    assert (expo.last_modified_by, expo.updated_at) == ("Rohit Verma", STAMP)


def test_expo_without_location_has_no_zone() -> None:
    expo = normalize_expo(ExpoPayload(name="Online Summit", start_date=date(2026, 2, 5)), None, "Mr. Bharat", STAMP)

    assert expo.zone == ""


def test_zone_override_wins_and_moving_rederives() -> None:
    existing = make_expo("e-1", "IMTEX", city="Bengaluru", zone="South")

    overridden = normalize_expo(ExpoPayload(zone="Central"), existing, "Mr. Bharat", STAMP)
    moved = normalize_expo(ExpoPayload(city="Pune"), overridden, "Mr. Bharat", STAMP)
    untouched = normalize_expo(ExpoPayload(budget="1,00,000"), overridden, "Mr. Bharat", STAMP)

    assert overridden.zone == "Central"
    assert moved.zone == "West"
    assert untouched.zone == "Central"
    assert untouched.budget == 100_000
    assert existing.zone == "South"


@pytest.mark.parametrize(
    "payload",
    [
        ExpoPayload(start_date=date(2026, 1, 1)),
        ExpoPayload(name="   ", start_date=date(2026, 1, 1)),
        ExpoPayload(name="No Date"),
        ExpoPayload(name="Backwards", start_date=date(2026, 1, 5), end_date=date(2026, 1, 1)),
    ],
)
def test_invalid_expo_is_rejected(payload: ExpoPayload) -> None:
    with pytest.raises(ValueError):
        normalize_expo(payload, None, "Mr. Bharat", STAMP)


def test_query_expos_filters(registry: Registry) -> None:
    expos = registry.expos()

    assert [e.id for e in query_expos(expos)] == ["e-1", "e-2"]
    assert [e.id for e in query_expos(expos, ExpoFilters(search="bengal"))] == ["e-1"]
    assert [e.id for e in query_expos(expos, ExpoFilters(zone="West"))] == ["e-2"]
    assert [e.id for e in query_expos(expos, ExpoFilters(zone="All Zones", status="Live"))] == ["e-1"]
    assert [e.id for e in query_expos(expos, ExpoFilters(participation_type="Exhibitor"))] == ["e-2"]


def test_expo_stats(registry: Registry) -> None:
    stats = compute_expo_stats(registry.expos())

    assert (stats["total"], stats["upcoming"], stats["live"]) == (2, 1, 1)
    assert (stats["totalLeads"], stats["hotLeads"], stats["ordersReceived"]) == (10, 4, 2)
    assert stats["statusCounts"]["Cancelled"] == 0


def test_save_expo_prepends_and_edits_in_place(registry: Registry) -> None:
    created = save_expo(ExpoPayload(name="Plastindia", start_date=date(2026, 2, 5)), "Mr. Bharat", registry=registry)
    save_expo(ExpoPayload(status="Completed"), "Mr. Bharat", "e-2", registry=registry)

    assert [e.id for e in registry.expos()] == [created.id, "e-1", "e-2"]
    assert created.created_at is not None
    assert registry.get_expo("e-2").status is ExpoStatus.COMPLETED


def test_failed_expo_save_reverts(registry: Registry, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(f"{EXPO_SERVICE}.save_expo_to_database", lambda expo, is_new: False)

    with pytest.raises(PersistenceError):
        save_expo(ExpoPayload(name="IMTEX 2027"), "Mr. Bharat", "e-1", registry=registry)

    assert registry.get_expo("e-1").name == "IMTEX"


def test_expo_deleted_during_edit_stays_deleted(registry: Registry, monkeypatch: pytest.MonkeyPatch) -> None:
    def delete_then_stamp(*args):
        delete_expo("e-1", "Salil Anand", registry=registry)
        return STAMP

    monkeypatch.setattr(f"{EXPO_SERVICE}.format_timestamp", delete_then_stamp)

    with pytest.raises(ExpoNotFoundError):
        save_expo(ExpoPayload(status="Completed"), "Mr. Bharat", "e-1", registry=registry)

    assert registry.get_expo("e-1") is None


def test_delete_expo(registry: Registry) -> None:
    delete_expo("e-2", "Mr. Bharat", registry=registry)

    assert [e.id for e in registry.expos()] == ["e-1"]
    with pytest.raises(ExpoNotFoundError):
        delete_expo("e-2", "Mr. Bharat", registry=registry)
