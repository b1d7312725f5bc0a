"""Supabase persistence for customers, contacts, visits, expos and the marketing team.

Every writer returns True on success and False when the backing store rejected
the write. When Supabase is not configured the service runs in memory only and
writes succeed trivially.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from ..db.supabase import (
    CONTACTS_TABLE,
    CUSTOMERS_TABLE,
    EXPOS_TABLE,
    ORDER_COLUMN,
    TEAM_TABLE,
    VISITS_TABLE,
    get_supabase_client,
)
from ..models.domain import Customer, Expo, TeamMember, Visit
from .records import (
    contact_to_record,
    customer_to_record,
    expo_to_record,
    record_to_customer,
    record_to_expo,
    record_to_team_member,
    record_to_visit,
    team_member_to_record,
    visit_to_record,
)

T = TypeVar("T")


def _load_rows(
    table: str,
    columns: str,
    convert: Callable[[dict[str, Any]], T],
    *,
    newest_first: bool = True,
) -> tuple[T, ...] | None:
    """Select every row of ``table`` in collection order. Returns None if the database is not available."""
    supabase = get_supabase_client()
    if not supabase:
        return None

    try:
        response = (
            supabase.table(table)
            .select(columns)
            .order(ORDER_COLUMN, desc=newest_first)
            .execute()
        )
    except Exception as e:
        logging.warning(f"Failed to load {table} from database: {e}")
        return None

    items: list[T] = []
    for row in response.data or []:
        try:
            items.append(convert(row))
        except (KeyError, ValueError, TypeError) as e:
            logging.warning(f"Skipping invalid {table} row: {e}")
            continue
    return tuple(items)


def load_customers_from_database() -> tuple[Customer, ...] | None:
    """Load customers with their contacts, newest first."""
    return _load_rows(CUSTOMERS_TABLE, f"*, {CONTACTS_TABLE} (*)", record_to_customer)


def load_visits_from_database() -> tuple[Visit, ...] | None:
    return _load_rows(VISITS_TABLE, "*", record_to_visit)


def load_expos_from_database() -> tuple[Expo, ...] | None:
    return _load_rows(EXPOS_TABLE, "*", record_to_expo)


def load_team_from_database() -> tuple[TeamMember, ...] | None:
    """Team members in the order they joined."""
    return _load_rows(TEAM_TABLE, "*", record_to_team_member, newest_first=False)


def save_customer_to_database(customer: Customer, is_new: bool) -> bool:
    """Insert or update a customer row, then replace its contact rows."""
    supabase = get_supabase_client()
    if not supabase:
        return True

    record = customer_to_record(customer)
    try:
        if is_new:
            supabase.table(CUSTOMERS_TABLE).insert(record).execute()
        else:
            supabase.table(CUSTOMERS_TABLE).update(record).eq("id", customer.id).execute()

        # contacts are replaced wholesale on every save
        supabase.table(CONTACTS_TABLE).delete().eq("customer_id", customer.id).execute()
        if customer.contacts:
            supabase.table(CONTACTS_TABLE).insert(
                [contact_to_record(contact, customer.id) for contact in customer.contacts]
            ).execute()
    except Exception as e:
        logging.error(f"Failed to save customer {customer.id} to database: {e}")
        return False

    logging.info(f"Saved customer {customer.id} ({'inserted' if is_new else 'updated'})")
    return True


def save_customers_to_database(customers: list[Customer]) -> int:
    """Insert a batch of new customers. Returns the number saved."""
    supabase = get_supabase_client()
    if not supabase:
        return len(customers)
    if not customers:
        return 0

    batch_size = 100
    saved = 0
    for i in range(0, len(customers), batch_size):
        batch = customers[i:i + batch_size]
        try:
            supabase.table(CUSTOMERS_TABLE).insert([customer_to_record(c) for c in batch]).execute()
            contact_rows = [contact_to_record(contact, c.id) for c in batch for contact in c.contacts]
            if contact_rows:
                supabase.table(CONTACTS_TABLE).insert(contact_rows).execute()
            saved += len(batch)
        except Exception as e:
            logging.warning(f"Batch insert failed, trying individual inserts: {e}")
            for customer in batch:
                if save_customer_to_database(customer, is_new=True):
                    saved += 1

    logging.info(f"Successfully saved {saved} of {len(customers)} imported customers to database")
    return saved


def delete_customer_from_database(customer_id: str) -> bool:
    """Delete a customer together with its contacts and visits."""
    supabase = get_supabase_client()
    if not supabase:
        return True

    try:
        supabase.table(VISITS_TABLE).delete().eq("customer_id", customer_id).execute()
        supabase.table(CONTACTS_TABLE).delete().eq("customer_id", customer_id).execute()
        supabase.table(CUSTOMERS_TABLE).delete().eq("id", customer_id).execute()
    except Exception as e:
        logging.error(f"Failed to delete customer {customer_id} from database: {e}")
        return False
    return True


def save_visit_to_database(visit: Visit, is_new: bool) -> bool:
    supabase = get_supabase_client()
    if not supabase:
        return True

    record = visit_to_record(visit)
    try:
        if is_new:
            supabase.table(VISITS_TABLE).insert(record).execute()
        else:
            supabase.table(VISITS_TABLE).update(record).eq("id", visit.id).execute()
    except Exception as e:
        logging.error(f"Failed to save visit {visit.id} to database: {e}")
        return False
    return True


def delete_visit_from_database(visit_id: str) -> bool:
    supabase = get_supabase_client()
    if not supabase:
        return True

    try:
        supabase.table(VISITS_TABLE).delete().eq("id", visit_id).execute()
    except Exception as e:
        logging.error(f"Failed to delete visit {visit_id} from database: {e}")
        return False
    return True


def save_expo_to_database(expo: Expo, is_new: bool) -> bool:
    supabase = get_supabase_client()
    if not supabase:
        return True

    record = expo_to_record(expo)
    try:
        if is_new:
            supabase.table(EXPOS_TABLE).insert(record).execute()
        else:
            supabase.table(EXPOS_TABLE).update(record).eq("id", expo.id).execute()
    except Exception as e:
        logging.error(f"Failed to save expo {expo.id} to database: {e}")
        return False
    return True


def delete_expo_from_database(expo_id: str) -> bool:
    supabase = get_supabase_client()
    if not supabase:
        return True

    try:
        supabase.table(EXPOS_TABLE).delete().eq("id", expo_id).execute()
    except Exception as e:
        logging.error(f"Failed to delete expo {expo_id} from database: {e}")
        return False
    return True


def save_team_member_to_database(member: TeamMember, previous_name: str | None = None) -> bool:
    """Insert a new member, or update the row keyed by ``previous_name`` (which may rename it)."""
    supabase = get_supabase_client()
    if not supabase:
        return True

    record = team_member_to_record(member)
    try:
        if previous_name is None:
            supabase.table(TEAM_TABLE).insert(record).execute()
        else:
            supabase.table(TEAM_TABLE).update(record).eq("name", previous_name).execute()
    except Exception as e:
        logging.error(f"Failed to save team member {member.name} to database: {e}")
        return False
    return True


def delete_team_member_from_database(name: str) -> bool:
    supabase = get_supabase_client()
    if not supabase:
        return True

    try:
        supabase.table(TEAM_TABLE).delete().eq("name", name).execute()
    except Exception as e:
        logging.error(f"Failed to delete team member {name} from database: {e}")
        return False
    return True
