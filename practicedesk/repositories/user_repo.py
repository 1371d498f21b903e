# practicedesk/repositories/user_repo.py
import uuid

from sqlmodel import Session, select

from practicedesk.models.user import User


class UserRepository:
    """
    Data access layer for User.

    Responsibilities:
      - Pure DB operations (lookups + insert)
      - No FastAPI, no HTTP, no business logic
    """

    def get_by_id(self, session: Session, user_id: uuid.UUID) -> User | None:
        """Return a User by primary key, or None if not found."""
        return session.get(User, user_id)

    def get_by_email(self, session: Session, email: str) -> User | None:
        """
        Return a User by email, or None if not found.

        Emails are stored lowercased, so callers pass the normalized form.
        """
        stmt = select(User).where(User.email == email)
        return session.exec(stmt).first()

    def exists(self, session: Session, user_id: uuid.UUID) -> bool:
        return self.get_by_id(session, user_id) is not None

    def create(self, session: Session, user: User) -> User:
        """
        Insert a new User and return the persisted row.

        Raises sqlalchemy.exc.IntegrityError on a duplicate email; the
        caller decides how to report it.
        """
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
