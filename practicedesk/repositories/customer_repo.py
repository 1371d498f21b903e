# practicedesk/repositories/customer_repo.py
import uuid

from sqlmodel import Session, select

from practicedesk.models.customer import Customer
from practicedesk.models.matter import Matter


class CustomerRepository:
    """
    Data access layer for customers.

    Lookups here are unscoped; ownership checks live in core/access.py.
    """

    def get_by_id(self, session: Session, customer_id: uuid.UUID) -> Customer | None:
        return session.get(Customer, customer_id)

    def list_for_user(self, session: Session, user_id: uuid.UUID) -> list[Customer]:
        stmt = (
            select(Customer)
            .where(Customer.user_id == user_id)
            .order_by(Customer.name)
        )
        return list(session.exec(stmt).all())

    def create(self, session: Session, customer: Customer) -> Customer:
        session.add(customer)
        session.commit()
        session.refresh(customer)
        return customer

    def update(self, session: Session, customer: Customer) -> Customer:
        session.add(customer)
        session.commit()
        session.refresh(customer)
        return customer

    def delete_with_matters(self, session: Session, customer: Customer) -> None:
        """
        Delete a customer and all of its matters in one transaction.

        Matters are removed explicitly so the cascade doesn't depend on the
        database enforcing ON DELETE CASCADE.
        """
        stmt = select(Matter).where(Matter.customer_id == customer.id)
        for row in session.exec(stmt).all():
            session.delete(row)
        session.flush()
        session.delete(customer)
        session.commit()
