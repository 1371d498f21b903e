# practicedesk/services/matter_service.py
import logging
import uuid

from sqlmodel import Session

from practicedesk.core.access import authorize_customer_access, authorize_matter_access
from practicedesk.core.errors import AccessDeniedError, ForbiddenError, NotFoundError
from practicedesk.models.matter import Matter, MatterStatus
from practicedesk.models.user import utc_now
from practicedesk.repositories.matter_repo import MatterRepository
from practicedesk.schemas.matter import (
    MatterCreate,
    MatterRead,
    MatterStatusOption,
    MatterUpdate,
)

logger = logging.getLogger(__name__)

CUSTOMER_DENIED = "Customer not found or access denied"


class MatterService:
    """
    Business logic for matters.

    Responsibilities:
      - check the full ownership chain (user -> customer -> matter)
      - collection routes answer 403 when the customer isn't the user's;
        single-matter routes answer 404
      - attach status display names to responses
    """

    def __init__(self, matter_repo: MatterRepository):
        self.matter_repo = matter_repo

    # ---- internal helpers ----

    def _require_customer(
        self,
        session: Session,
        user_id: uuid.UUID,
        customer_id: uuid.UUID,
    ) -> None:
        try:
            authorize_customer_access(session, user_id, customer_id)
        except AccessDeniedError:
            logger.warning(
                "Matter collection access denied: customer=%s user=%s",
                customer_id,
                user_id,
            )
            raise ForbiddenError(CUSTOMER_DENIED)

    def _get_owned(
        self,
        session: Session,
        user_id: uuid.UUID,
        customer_id: uuid.UUID,
        matter_id: uuid.UUID,
    ) -> Matter:
        try:
            return authorize_matter_access(session, user_id, customer_id, matter_id)
        except AccessDeniedError:
            raise NotFoundError("Matter not found")

    # ---- public operations ----

    def create_matter(
        self,
        session: Session,
        user_id: uuid.UUID,
        customer_id: uuid.UUID,
        payload: MatterCreate,
    ) -> MatterRead:
        self._require_customer(session, user_id, customer_id)

        matter = Matter(
            customer_id=customer_id,
            name=payload.name,
            description=payload.description,
            status=int(payload.status),
            assigned_employee=payload.assigned_employee,
        )
        matter = self.matter_repo.create(session, matter)
        logger.info(
            "Matter created: %s for customer: %s by user: %s",
            matter.id,
            customer_id,
            user_id,
        )
        return MatterRead.from_model(matter)

    def list_matters(
        self,
        session: Session,
        user_id: uuid.UUID,
        customer_id: uuid.UUID,
    ) -> list[MatterRead]:
        """Matters under the customer, ordered by name."""
        self._require_customer(session, user_id, customer_id)
        matters = self.matter_repo.list_for_customer(session, customer_id)
        return [MatterRead.from_model(m) for m in matters]

    def get_matter(
        self,
        session: Session,
        user_id: uuid.UUID,
        customer_id: uuid.UUID,
        matter_id: uuid.UUID,
    ) -> MatterRead:
        matter = self._get_owned(session, user_id, customer_id, matter_id)
        return MatterRead.from_model(matter)

    def update_matter(
        self,
        session: Session,
        user_id: uuid.UUID,
        customer_id: uuid.UUID,
        matter_id: uuid.UUID,
        payload: MatterUpdate,
    ) -> MatterRead:
        """Replace name, description, status and assigned_employee."""
        matter = self._get_owned(session, user_id, customer_id, matter_id)

        matter.name = payload.name
        matter.description = payload.description
        matter.status = int(payload.status)
        matter.assigned_employee = payload.assigned_employee
        matter.updated_at = utc_now()

        matter = self.matter_repo.update(session, matter)
        logger.info(
            "Matter updated: %s for customer: %s by user: %s",
            matter_id,
            customer_id,
            user_id,
        )
        return MatterRead.from_model(matter)

    def delete_matter(
        self,
        session: Session,
        user_id: uuid.UUID,
        customer_id: uuid.UUID,
        matter_id: uuid.UUID,
    ) -> None:
        matter = self._get_owned(session, user_id, customer_id, matter_id)
        self.matter_repo.delete(session, matter)
        logger.info(
            "Matter deleted: %s for customer: %s by user: %s",
            matter_id,
            customer_id,
            user_id,
        )

    # ---- reference data ----

    def list_statuses(self) -> list[MatterStatusOption]:
        return [
            MatterStatusOption(value=s, label=s.display_name)
            for s in MatterStatus.selectable()
        ]
