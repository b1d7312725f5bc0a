"""In-memory registry owning the authoritative customer, visit, expo and team collections."""

from __future__ import annotations

import functools
import logging
import threading
from typing import Iterable, NamedTuple, Optional

from ..data.team_repository import load_team_seed
from ..errors import CustomerNotFoundError, ExpoNotFoundError, TeamMemberNotFoundError, VisitNotFoundError
from ..models.domain import Customer, Expo, TeamMember, Visit
from .database import (
    load_customers_from_database,
    load_expos_from_database,
    load_team_from_database,
    load_visits_from_database,
)


class RegistrySnapshot(NamedTuple):
    customers: tuple[Customer, ...]
    visits: tuple[Visit, ...]
    expos: tuple[Expo, ...]
    team: tuple[TeamMember, ...]


class Registry:
    """Ordered collections guarded by a re-entrant lock.

    Entities are replaced wholesale, never patched in place, so snapshots are
    shallow copies of the lists. ``add_*`` puts new entities first; ``replace_*``
    only succeeds while the entity is still present, so an edit racing a purge
    raises instead of bringing the purged record back.
    """

    def __init__(
        self,
        customers: Iterable[Customer] = (),
        visits: Iterable[Visit] = (),
        expos: Iterable[Expo] = (),
        team: Iterable[TeamMember] = (),
    ) -> None:
        self.lock = threading.RLock()
        self._customers: list[Customer] = list(customers)
        self._visits: list[Visit] = list(visits)
        self._expos: list[Expo] = list(expos)
        self._team: list[TeamMember] = list(team)

    def customers(self) -> tuple[Customer, ...]:
        with self.lock:
            return tuple(self._customers)

    def visits(self) -> tuple[Visit, ...]:
        with self.lock:
            return tuple(self._visits)

    def expos(self) -> tuple[Expo, ...]:
        with self.lock:
            return tuple(self._expos)

    def team(self) -> tuple[TeamMember, ...]:
        with self.lock:
            return tuple(self._team)

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        with self.lock:
            return next((c for c in self._customers if c.id == customer_id), None)

    def get_visit(self, visit_id: str) -> Optional[Visit]:
        with self.lock:
            return next((v for v in self._visits if v.id == visit_id), None)

    def get_expo(self, expo_id: str) -> Optional[Expo]:
        with self.lock:
            return next((e for e in self._expos if e.id == expo_id), None)

    def get_member(self, name: str) -> Optional[TeamMember]:
        """Roster lookup by name, case-insensitive."""
        needle = (name or "").strip().lower()
        with self.lock:
            return next((m for m in self._team if m.name.lower() == needle), None)

    def add_customer(self, customer: Customer) -> None:
        with self.lock:
            self._customers = [customer] + self._customers

    def replace_customer(self, customer: Customer) -> None:
        with self.lock:
            self._customers = _replace_existing(self._customers, customer, CustomerNotFoundError)

    def add_visit(self, visit: Visit) -> None:
        with self.lock:
            self._visits = [visit] + self._visits

    def replace_visit(self, visit: Visit) -> None:
        with self.lock:
            self._visits = _replace_existing(self._visits, visit, VisitNotFoundError)

    def add_expo(self, expo: Expo) -> None:
        with self.lock:
            self._expos = [expo] + self._expos

    def replace_expo(self, expo: Expo) -> None:
        with self.lock:
            self._expos = _replace_existing(self._expos, expo, ExpoNotFoundError)

    def add_member(self, member: TeamMember) -> None:
        # the roster keeps joining order
        with self.lock:
            self._team = self._team + [member]

    def replace_member(self, previous_name: str, member: TeamMember) -> None:
        with self.lock:
            current = self.get_member(previous_name)
            if current is None:
                raise TeamMemberNotFoundError(previous_name)
            self._team = [member if m is current else m for m in self._team]

    def remove_customer(self, customer_id: str) -> list[Visit]:
        """Remove a customer and every visit logged against it. Returns the removed visits."""
        with self.lock:
            self._customers = [c for c in self._customers if c.id != customer_id]
            removed = [v for v in self._visits if v.customer_id == customer_id]
            self._visits = [v for v in self._visits if v.customer_id != customer_id]
            return removed

    def remove_visit(self, visit_id: str) -> None:
        with self.lock:
            self._visits = [v for v in self._visits if v.id != visit_id]

    def remove_expo(self, expo_id: str) -> None:
        with self.lock:
            self._expos = [e for e in self._expos if e.id != expo_id]

    def remove_member(self, name: str) -> None:
        with self.lock:
            self._team = [m for m in self._team if m.name.lower() != name.strip().lower()]

    def snapshot(self) -> RegistrySnapshot:
        with self.lock:
            return RegistrySnapshot(tuple(self._customers), tuple(self._visits), tuple(self._expos), tuple(self._team))

    def restore(self, snapshot: RegistrySnapshot) -> None:
        with self.lock:
            self._customers = list(snapshot.customers)
            self._visits = list(snapshot.visits)
            self._expos = list(snapshot.expos)
            self._team = list(snapshot.team)


def _replace_existing(items: list, entity, not_found: type[LookupError]) -> list:
    for index, item in enumerate(items):
        if item.id == entity.id:
            return items[:index] + [entity] + items[index + 1:]
    raise not_found(entity.id)


@functools.lru_cache(maxsize=1)
def get_registry() -> Registry:
    """Process-wide registry, loaded from Supabase when configured.

    The marketing team falls back to the bundled roster when the store has none.
    """

    customers = load_customers_from_database() or ()
    visits = load_visits_from_database() or ()
    expos = load_expos_from_database() or ()
    team = load_team_from_database() or load_team_seed()
    logging.info(
        f"Registry loaded with {len(customers)} customers, {len(visits)} visits, "
        f"{len(expos)} expos and {len(team)} team members"
    )
    return Registry(customers, visits, expos, team)
