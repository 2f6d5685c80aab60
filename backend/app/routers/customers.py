from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Config
from app.db.database import get_session
from app.errors import ErrorType
from app.exceptions import AppException
from app.schemas.common import PagedResponse, IdPath
from app.schemas.customer import CustomerCreate, CustomerUpdate, CustomerResponse
from app.services.customer_service import customer_service, DEFAULT_SORT

router = APIRouter(prefix="/api/customers", tags=["customers"])


def _not_found(customer_id: int) -> AppException:
    return AppException(ErrorType.NOT_FOUND, f"Customer {customer_id} not found")


@router.get("", response_model=PagedResponse[CustomerResponse])
async def list_customers(
    page_number: int = Query(1, alias="pageNumber"),
    page_size: int = Query(Config.DEFAULT_PAGE_SIZE, alias="pageSize"),
    sort_by: str = Query(DEFAULT_SORT, alias="sortBy"),
    is_ascending: bool = Query(True, alias="isAscending"),
    session: AsyncSession = Depends(get_session),
):
    customers, total_count = await customer_service.list_customers(
        session, page_number, page_size, sort_by, is_ascending
    )
    return PagedResponse[CustomerResponse](
        data=[CustomerResponse.model_validate(c) for c in customers],
        page_number=page_number,
        page_size=page_size,
        total_count=total_count,
    )


@router.get("/{customer_id}", response_model=CustomerResponse, name="get_customer")
async def get_customer(customer_id: IdPath, session: AsyncSession = Depends(get_session)):
    customer = await customer_service.get_customer(session, customer_id)
    if customer is None:
        raise _not_found(customer_id)
    return CustomerResponse.model_validate(customer)


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    body: CustomerCreate,
    request: Request,
    response: Response,
    session: AsyncSession = Depends(get_session),
):
    customer = await customer_service.create_customer(session, body)
    response.headers["Location"] = str(request.url_for("get_customer", customer_id=customer.id))
    return CustomerResponse.model_validate(customer)


@router.put("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_customer(customer_id: IdPath, body: CustomerUpdate, session: AsyncSession = Depends(get_session)):
    customer = await customer_service.update_customer(session, customer_id, body)
    if customer is None:
        raise _not_found(customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(customer_id: IdPath, session: AsyncSession = Depends(get_session)):
    if not await customer_service.delete_customer(session, customer_id):
        raise _not_found(customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
