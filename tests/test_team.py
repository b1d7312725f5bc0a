import pytest

from fieldcrm.data.team_repository import load_team_seed
from fieldcrm.errors import (
    DuplicateTeamMemberError,
    PersistenceError,
    ProtectedTeamMemberError,
    TeamMemberNotFoundError,
)
from fieldcrm.models.domain import TeamMember
from fieldcrm.persistence.registry import Registry
from fieldcrm.schemas.team import TeamMemberPayload
from fieldcrm.services.personnel import (
    add_team_member,
    list_personnel,
    remove_team_member,
    resolve_personnel,
    update_team_member,
)

PERSONNEL = "fieldcrm.services.personnel"


@pytest.fixture
def registry() -> Registry:
    return Registry(
        team=[
            TeamMember(name="Mr. Bharat", role="System Administrator"),
            TeamMember(name="Salil Anand", role="System Administrator"),
            TeamMember(name="Rohit Verma", role="Growth Lead"),
        ]
    )


def test_bundled_roster() -> None:
    team = load_team_seed()

    assert [member.name for member in team] == [
        "Shreeya Anand",
        "Mr. Bharat",
        "Salil Anand",
        "Rohit Verma",
        "Shubham Kumar",
    ]
    assert all(member.role for member in team)


def test_roster_skips_entries_without_role(tmp_path) -> None:
    source = tmp_path / "team.json"
    source.write_text('[{"name": "Asha"}, {"name": "Vikram", "role": "Analyst"}]', encoding="utf-8")

    assert [member.name for member in load_team_seed(source)] == ["Vikram"]


def test_roster_must_be_a_list(tmp_path) -> None:
    source = tmp_path / "team.json"
    source.write_text('{"name": "Asha"}', encoding="utf-8")

    with pytest.raises(ValueError):
        load_team_seed(source)


def test_default_personnel_is_always_listed() -> None:
    registry = Registry(team=[TeamMember(name="Asha", role="Analyst")])

    assert list_personnel(registry) == ["Mr. Bharat", "Asha"]
    assert resolve_personnel("ASHA", registry) == "Asha"


def test_add_member_appends(registry: Registry) -> None:
    member = add_team_member(TeamMemberPayload(name=" Asha Rao ", role="Analyst"), "Mr. Bharat", registry=registry)

    assert registry.team()[-1] is member
    assert member.name == "Asha Rao"
    assert member.created_at is not None
    assert resolve_personnel("asha rao", registry) == "Asha Rao"


def test_add_member_rejects_duplicates_and_blanks(registry: Registry) -> None:
    with pytest.raises(DuplicateTeamMemberError):
        add_team_member(TeamMemberPayload(name="rohit verma", role="Analyst"), "Mr. Bharat", registry=registry)
    with pytest.raises(ValueError):
        add_team_member(TeamMemberPayload(name="Asha"), "Mr. Bharat", registry=registry)
    assert len(registry.team()) == 3


def test_update_member_keeps_position(registry: Registry) -> None:
    member = update_team_member("rohit verma", TeamMemberPayload(name="Rohit V.", phone=" 98140 "), "Mr. Bharat", registry=registry)

    assert [m.name for m in registry.team()] == ["Mr. Bharat", "Salil Anand", "Rohit V."]
    assert (member.role, member.phone) == ("Growth Lead", "98140")


def test_admins_cannot_be_renamed_or_removed(registry: Registry) -> None:
    with pytest.raises(ProtectedTeamMemberError):
        update_team_member("Salil Anand", TeamMemberPayload(name="Salil"), "Mr. Bharat", registry=registry)
    with pytest.raises(ProtectedTeamMemberError):
        remove_team_member("mr. bharat", "Salil Anand", registry=registry)

    edited = update_team_member("Salil Anand", TeamMemberPayload(bio="Keeps the lights on"), "Mr. Bharat", registry=registry)
    assert edited.bio == "Keeps the lights on"


def test_member_cannot_remove_themselves(registry: Registry) -> None:
    with pytest.raises(ProtectedTeamMemberError):
        remove_team_member("Rohit Verma", "Rohit Verma", registry=registry)

    remove_team_member("Rohit Verma", "Mr. Bharat", registry=registry)
    assert [m.name for m in registry.team()] == ["Mr. Bharat", "Salil Anand"]
    with pytest.raises(TeamMemberNotFoundError):
        remove_team_member("Rohit Verma", "Mr. Bharat", registry=registry)


def test_failed_removal_restores_member(registry: Registry, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(f"{PERSONNEL}.delete_team_member_from_database", lambda name: False)

    with pytest.raises(PersistenceError):
        remove_team_member("Rohit Verma", "Mr. Bharat", registry=registry)

    assert registry.get_member("Rohit Verma") is not None


def test_failed_rename_keeps_previous_name(registry: Registry, monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    monkeypatch.setattr(
        f"{PERSONNEL}.save_team_member_to_database",
        lambda member, previous_name=None: calls.append((member.name, previous_name)) and False,
    )

    with pytest.raises(PersistenceError):
        update_team_member("Rohit Verma", TeamMemberPayload(name="Rohit V."), "Mr. Bharat", registry=registry)

    assert calls == [("Rohit V.", "Rohit Verma")]
    assert registry.get_member("Rohit V.") is None
    assert registry.get_member("Rohit Verma") is not None
