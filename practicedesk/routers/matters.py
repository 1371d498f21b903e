# practicedesk/routers/matters.py
import uuid

from fastapi import APIRouter, Depends, Request, Response, status
from sqlmodel import Session

from practicedesk.core.auth import require_user_id
from practicedesk.database import get_session
from practicedesk.repositories.matter_repo import MatterRepository
from practicedesk.schemas.matter import (
    MatterCreate,
    MatterRead,
    MatterStatusOption,
    MatterUpdate,
)
from practicedesk.services.matter_service import MatterService

router = APIRouter(prefix="/customers/{customer_id}/matters", tags=["Matters"])
status_router = APIRouter(prefix="/matter-statuses", tags=["Matters"])

matter_repo = MatterRepository()
service = MatterService(matter_repo)


@router.post(
    "",
    response_model=MatterRead,
    status_code=status.HTTP_201_CREATED,
)
def create_matter(
    customer_id: uuid.UUID,
    payload: MatterCreate,
    request: Request,
    response: Response,
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_user_id),
):
    """
    Open a matter under one of the current user's customers.

    403 if the customer isn't the user's (or doesn't exist).
    """
    matter = service.create_matter(session, user_id, customer_id, payload)
    response.headers["Location"] = str(
        request.url_for(
            "get_matter", customer_id=str(customer_id), matter_id=str(matter.id)
        )
    )
    return matter


@router.get("", response_model=list[MatterRead])
def list_matters(
    customer_id: uuid.UUID,
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_user_id),
):
    """
    List a customer's matters, ordered by name.
    """
    return service.list_matters(session, user_id, customer_id)


@router.get("/{matter_id}", response_model=MatterRead)
def get_matter(
    customer_id: uuid.UUID,
    matter_id: uuid.UUID,
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_user_id),
):
    return service.get_matter(session, user_id, customer_id, matter_id)


@router.put("/{matter_id}", response_model=MatterRead)
def update_matter(
    customer_id: uuid.UUID,
    matter_id: uuid.UUID,
    payload: MatterUpdate,
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_user_id),
):
    """
    Replace a matter's name, description, status and assignee.
    """
    return service.update_matter(session, user_id, customer_id, matter_id, payload)


@router.delete("/{matter_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_matter(
    customer_id: uuid.UUID,
    matter_id: uuid.UUID,
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_user_id),
):
    service.delete_matter(session, user_id, customer_id, matter_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@status_router.get("", response_model=list[MatterStatusOption])
def list_matter_statuses():
    """
    Selectable matter statuses for dropdowns (code + label).
    """
    return service.list_statuses()
