# practicedesk/routers/customers.py
import uuid

from fastapi import APIRouter, Depends, Request, Response, status
from sqlmodel import Session

from practicedesk.core.auth import require_user_id
from practicedesk.database import get_session
from practicedesk.repositories.customer_repo import CustomerRepository
from practicedesk.repositories.user_repo import UserRepository
from practicedesk.schemas.customer import CustomerCreate, CustomerRead, CustomerUpdate
from practicedesk.services.customer_service import CustomerService

router = APIRouter(prefix="/customers", tags=["Customers"])

customer_repo = CustomerRepository()
user_repo = UserRepository()
service = CustomerService(customer_repo, user_repo)


@router.post(
    "",
    response_model=CustomerRead,
    status_code=status.HTTP_201_CREATED,
)
def create_customer(
    payload: CustomerCreate,
    request: Request,
    response: Response,
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_user_id),
):
    """
    Create a customer owned by the current user.
    """
    customer = service.create_customer(session, user_id, payload)
    response.headers["Location"] = str(
        request.url_for("get_customer", customer_id=str(customer.id))
    )
    return customer


@router.get("", response_model=list[CustomerRead])
def list_customers(
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_user_id),
):
    """
    List the current user's customers, ordered by name.
    """
    return service.list_customers(session, user_id)


@router.get("/{customer_id}", response_model=CustomerRead)
def get_customer(
    customer_id: uuid.UUID,
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_user_id),
):
    """
    Get one customer.

    Customers of other users are reported as 404.
    """
    return service.get_customer(session, user_id, customer_id)


@router.put("/{customer_id}", response_model=CustomerRead)
def update_customer(
    customer_id: uuid.UUID,
    payload: CustomerUpdate,
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_user_id),
):
    """
    Replace a customer's name, phone number and email.
    """
    return service.update_customer(session, user_id, customer_id, payload)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(
    customer_id: uuid.UUID,
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_user_id),
):
    """
    Delete a customer and all of its matters.
    """
    service.delete_customer(session, user_id, customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
