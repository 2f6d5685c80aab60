import logging
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from app.errors import ErrorType
from app.exceptions import AppException
from app.models import Customer, Product, Sale
from app.schemas.sale import SaleCreate, SaleUpdate, CENTS
from app.services.pagination import resolve_sort, order_clauses, paginate

logger = logging.getLogger(__name__)

DEFAULT_SORT = "SaleDate"
SORT_COLUMNS = {
    "SaleID": Sale.id,
    "SaleDate": Sale.sale_date,
    "CustomerName": Customer.full_name,
    "ProductName": Product.product_name,
    "Quantity": Sale.quantity,
    "TotalPrice": Sale.quantity * Product.price,
}


def _joined_sales():
    """Sales joined with the customer and product they reference."""
    return (
        select(Sale)
        .join(Sale.customer)
        .join(Sale.product)
    )


_EAGER = (contains_eager(Sale.customer), contains_eager(Sale.product))


class SaleService:
    async def list_sales(
        self,
        session: AsyncSession,
        page_number: int,
        page_size: int,
        sort_by: str = DEFAULT_SORT,
        is_ascending: bool = True,
    ) -> tuple[list[Sale], int]:
        column, ascending = resolve_sort(sort_by, SORT_COLUMNS, DEFAULT_SORT, is_ascending)
        return await paginate(
            session,
            _joined_sales(),
            order_by=order_clauses(column, Sale.id, ascending),
            page_number=page_number,
            page_size=page_size,
            options=_EAGER,
        )

    async def total_revenue(self, session: AsyncSession) -> Decimal:
        """Sum of quantity * unit price over every sale, not just one page."""
        stmt = (
            select(func.sum(Sale.quantity * Product.price))
            .select_from(Sale)
            .join(Product, Sale.product_id == Product.id)
        )
        total = await session.scalar(stmt)
        if total is None:
            return Decimal("0.00")
        return Decimal(str(total)).quantize(CENTS)

    async def get_sale(self, session: AsyncSession, sale_id: int) -> Sale | None:
        result = await session.execute(
            _joined_sales()
            .options(*_EAGER)
            .where(Sale.id == sale_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def _check_references(self, session: AsyncSession, data: SaleCreate):
        if await session.get(Customer, data.customer_id) is None:
            raise AppException(ErrorType.VALIDATION, f"Customer {data.customer_id} does not exist")
        if await session.get(Product, data.product_id) is None:
            raise AppException(ErrorType.VALIDATION, f"Product {data.product_id} does not exist")

    async def _commit(self, session: AsyncSession):
        try:
            await session.commit()
        except IntegrityError:
            # Customer or product removed after the reference check
            await session.rollback()
            raise AppException(ErrorType.VALIDATION, "Sale references a customer or product that does not exist")

    async def create_sale(self, session: AsyncSession, data: SaleCreate) -> Sale:
        await self._check_references(session, data)

        sale = Sale(
            quantity=data.quantity,
            customer_id=data.customer_id,
            product_id=data.product_id,
        )
        if data.sale_date is not None:
            sale.sale_date = data.sale_date
        session.add(sale)
        await self._commit(session)
        logger.info(f"Created sale {sale.id}: customer {sale.customer_id}, product {sale.product_id}, qty {sale.quantity}")

        # Re-read with customer and product for display names
        saved = await self.get_sale(session, sale.id)
        if saved is None:
            logger.error(f"Created sale {sale.id} could not be reloaded")
            raise AppException(ErrorType.INTERNAL_ERROR, "Created sale could not be loaded")
        return saved

    async def update_sale(self, session: AsyncSession, sale_id: int, data: SaleUpdate) -> Sale | None:
        if sale_id != data.id:
            raise AppException(ErrorType.VALIDATION, "ID mismatch")

        sale = await session.get(Sale, sale_id)
        if sale is None:
            return None

        await self._check_references(session, data)
        sale.quantity = data.quantity
        sale.customer_id = data.customer_id
        sale.product_id = data.product_id
        if data.sale_date is not None:
            sale.sale_date = data.sale_date
        await self._commit(session)
        logger.info(f"Updated sale {sale_id}")
        return sale

    async def delete_sale(self, session: AsyncSession, sale_id: int) -> bool:
        sale = await session.get(Sale, sale_id)
        if sale is None:
            return False

        await session.delete(sale)
        await session.commit()
        logger.info(f"Deleted sale {sale_id}")
        return True


sale_service = SaleService()
