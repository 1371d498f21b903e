# practicedesk/core/access.py
"""
Tenant-scoped access guard.

Ownership chain: User -> Customer -> Matter. Every customer or matter
read/write goes through one of the `authorize_*` functions first.

"Does not exist" and "belongs to someone else" raise the same
AccessDeniedError so callers can't tell another tenant's ids from missing ones.
"""

import logging
import uuid

from sqlmodel import Session

from practicedesk.core.errors import AccessDeniedError
from practicedesk.models.customer import Customer
from practicedesk.models.matter import Matter
from practicedesk.repositories.customer_repo import CustomerRepository
from practicedesk.repositories.matter_repo import MatterRepository

logger = logging.getLogger(__name__)

customer_repo = CustomerRepository()
matter_repo = MatterRepository()


# ---- single-hop predicates ----


def owns_customer(user_id: uuid.UUID, customer: Customer | None) -> bool:
    return customer is not None and customer.user_id == user_id


def matter_belongs_to(customer_id: uuid.UUID, matter: Matter | None) -> bool:
    return matter is not None and matter.customer_id == customer_id


# ---- guards ----


def authorize_customer_access(
    session: Session,
    user_id: uuid.UUID,
    customer_id: uuid.UUID,
) -> Customer:
    """
    Return the customer if `user_id` owns it.

    Raises:
        AccessDeniedError: customer missing or not owned by the user.
    """
    customer = customer_repo.get_by_id(session, customer_id)
    if not owns_customer(user_id, customer):
        logger.info(
            "Customer access denied: customer=%s user=%s", customer_id, user_id
        )
        raise AccessDeniedError()
    return customer


def authorize_matter_access(
    session: Session,
    user_id: uuid.UUID,
    customer_id: uuid.UUID,
    matter_id: uuid.UUID,
) -> Matter:
    """
    Return the matter if it sits under `customer_id` and that customer is
    owned by `user_id`.

    Raises:
        AccessDeniedError: either hop fails.
    """
    matter = matter_repo.get_for_customer(session, customer_id, matter_id)
    if not matter_belongs_to(customer_id, matter):
        logger.info(
            "Matter access denied: matter=%s customer=%s user=%s",
            matter_id,
            customer_id,
            user_id,
        )
        raise AccessDeniedError()

    customer = customer_repo.get_by_id(session, matter.customer_id)
    if not owns_customer(user_id, customer):
        logger.info(
            "Matter access denied: matter=%s customer=%s user=%s",
            matter_id,
            customer_id,
            user_id,
        )
        raise AccessDeniedError()
    return matter
