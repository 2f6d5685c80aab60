import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import ErrorType
from app.exceptions import AppException
from app.models import Customer, Sale
from app.schemas.customer import CustomerCreate, CustomerUpdate
from app.services.pagination import resolve_sort, order_clauses, paginate

logger = logging.getLogger(__name__)

DEFAULT_SORT = "CustomerID"
SORT_COLUMNS = {
    "CustomerID": Customer.id,
    "FullName": Customer.full_name,
    "Email": Customer.email,
}

REFERENCED_MESSAGE = "This customer has existing sales and cannot be deleted."


class CustomerService:
    async def list_customers(
        self,
        session: AsyncSession,
        page_number: int,
        page_size: int,
        sort_by: str = DEFAULT_SORT,
        is_ascending: bool = True,
    ) -> tuple[list[Customer], int]:
        column, ascending = resolve_sort(sort_by, SORT_COLUMNS, DEFAULT_SORT, is_ascending)
        return await paginate(
            session,
            select(Customer),
            order_by=order_clauses(column, Customer.id, ascending),
            page_number=page_number,
            page_size=page_size,
        )

    async def get_customer(self, session: AsyncSession, customer_id: int) -> Customer | None:
        return await session.get(Customer, customer_id)

    async def create_customer(self, session: AsyncSession, data: CustomerCreate) -> Customer:
        customer = Customer(full_name=data.full_name, email=data.email)
        session.add(customer)
        await session.commit()
        logger.info(f"Created customer {customer.id}")
        return customer

    async def update_customer(self, session: AsyncSession, customer_id: int, data: CustomerUpdate) -> Customer | None:
        if customer_id != data.id:
            raise AppException(ErrorType.VALIDATION, "ID mismatch")

        customer = await session.get(Customer, customer_id)
        if customer is None:
            return None

        customer.full_name = data.full_name
        customer.email = data.email
        await session.commit()
        logger.info(f"Updated customer {customer_id}")
        return customer

    async def delete_customer(self, session: AsyncSession, customer_id: int) -> bool:
        customer = await session.get(Customer, customer_id)
        if customer is None:
            return False

        referenced = await session.scalar(
            select(Sale.id).where(Sale.customer_id == customer_id).limit(1)
        )
        if referenced is not None:
            logger.warning(f"Refused to delete customer {customer_id}: referenced by sales")
            raise AppException(ErrorType.REFERENCE_CONFLICT, REFERENCED_MESSAGE)

        await session.delete(customer)
        try:
            await session.commit()
        except IntegrityError:
            await session.rollback()
            logger.warning(f"Refused to delete customer {customer_id}: foreign key violation")
            raise AppException(ErrorType.REFERENCE_CONFLICT, REFERENCED_MESSAGE)

        logger.info(f"Deleted customer {customer_id}")
        return True


customer_service = CustomerService()
