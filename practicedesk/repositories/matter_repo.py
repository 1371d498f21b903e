# practicedesk/repositories/matter_repo.py
import uuid

from sqlmodel import Session, select

from practicedesk.models.matter import Matter


class MatterRepository:

    def get_for_customer(
        self,
        session: Session,
        customer_id: uuid.UUID,
        matter_id: uuid.UUID,
    ) -> Matter | None:
        """Return the matter only if it sits under `customer_id`."""
        stmt = select(Matter).where(
            Matter.id == matter_id, Matter.customer_id == customer_id
        )
        return session.exec(stmt).first()

    def list_for_customer(
        self,
        session: Session,
        customer_id: uuid.UUID,
    ) -> list[Matter]:
        stmt = (
            select(Matter)
            .where(Matter.customer_id == customer_id)
            .order_by(Matter.name)
        )
        return list(session.exec(stmt).all())

    # CRUD
    def create(self, session: Session, matter: Matter) -> Matter:
        session.add(matter)
        session.commit()
        session.refresh(matter)
        return matter

    def update(self, session: Session, matter: Matter) -> Matter:
        session.add(matter)
        session.commit()
        session.refresh(matter)
        return matter

    def delete(self, session: Session, matter: Matter) -> None:
        session.delete(matter)
        session.commit()
