# practicedesk/services/customer_service.py
import logging
import uuid

from sqlmodel import Session

from practicedesk.core.access import authorize_customer_access
from practicedesk.core.errors import (
    AccessDeniedError,
    NotFoundError,
    UnauthenticatedError,
)
from practicedesk.models.customer import Customer
from practicedesk.models.user import utc_now
from practicedesk.repositories.customer_repo import CustomerRepository
from practicedesk.repositories.user_repo import UserRepository
from practicedesk.schemas.customer import CustomerCreate, CustomerUpdate

logger = logging.getLogger(__name__)


class CustomerService:
    """
    Business logic for customers.

    Responsibilities:
      - scope every read/write to the acting user
      - report other tenants' customers as plain 404s
    """

    def __init__(self, customer_repo: CustomerRepository, user_repo: UserRepository):
        self.customer_repo = customer_repo
        self.user_repo = user_repo

    # ---- internal helpers ----

    def _get_owned(
        self,
        session: Session,
        user_id: uuid.UUID,
        customer_id: uuid.UUID,
    ) -> Customer:
        try:
            return authorize_customer_access(session, user_id, customer_id)
        except AccessDeniedError:
            raise NotFoundError("Customer not found")

    # ---- public operations ----

    def create_customer(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: CustomerCreate,
    ) -> Customer:
        """
        Create a customer owned by `user_id`.

        A valid token for a user that no longer exists is treated as
        unauthenticated.
        """
        if not self.user_repo.exists(session, user_id):
            raise UnauthenticatedError("Invalid user")

        customer = Customer(
            user_id=user_id,
            name=payload.name,
            phone_number=payload.phone_number,
            email=payload.email,
        )
        customer = self.customer_repo.create(session, customer)
        logger.info("Customer created: %s for user: %s", customer.id, user_id)
        return customer

    def list_customers(self, session: Session, user_id: uuid.UUID) -> list[Customer]:
        """The user's customers, ordered by name."""
        return self.customer_repo.list_for_user(session, user_id)

    def get_customer(
        self,
        session: Session,
        user_id: uuid.UUID,
        customer_id: uuid.UUID,
    ) -> Customer:
        return self._get_owned(session, user_id, customer_id)

    def update_customer(
        self,
        session: Session,
        user_id: uuid.UUID,
        customer_id: uuid.UUID,
        payload: CustomerUpdate,
    ) -> Customer:
        """Replace name, phone_number and email."""
        customer = self._get_owned(session, user_id, customer_id)

        customer.name = payload.name
        customer.phone_number = payload.phone_number
        customer.email = payload.email
        customer.updated_at = utc_now()

        customer = self.customer_repo.update(session, customer)
        logger.info("Customer updated: %s for user: %s", customer_id, user_id)
        return customer

    def delete_customer(
        self,
        session: Session,
        user_id: uuid.UUID,
        customer_id: uuid.UUID,
    ) -> None:
        """Delete the customer together with its matters."""
        customer = self._get_owned(session, user_id, customer_id)
        self.customer_repo.delete_with_matters(session, customer)
        logger.info("Customer deleted: %s for user: %s", customer_id, user_id)
