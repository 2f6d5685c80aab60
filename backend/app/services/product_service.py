import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import ErrorType
from app.exceptions import AppException
from app.models import Product, Sale
from app.schemas.product import ProductCreate, ProductUpdate
from app.services.pagination import resolve_sort, order_clauses, paginate

logger = logging.getLogger(__name__)

DEFAULT_SORT = "ProductID"
SORT_COLUMNS = {
    "ProductID": Product.id,
    "ProductName": Product.product_name,
    "Price": Product.price,
}

REFERENCED_MESSAGE = "This product has existing sales and cannot be deleted."


class ProductService:
    async def list_products(
        self,
        session: AsyncSession,
        page_number: int,
        page_size: int,
        sort_by: str = DEFAULT_SORT,
        is_ascending: bool = True,
    ) -> tuple[list[Product], int]:
        column, ascending = resolve_sort(sort_by, SORT_COLUMNS, DEFAULT_SORT, is_ascending)
        return await paginate(
            session,
            select(Product),
            order_by=order_clauses(column, Product.id, ascending),
            page_number=page_number,
            page_size=page_size,
        )

    async def get_product(self, session: AsyncSession, product_id: int) -> Product | None:
        return await session.get(Product, product_id)

    async def create_product(self, session: AsyncSession, data: ProductCreate) -> Product:
        product = Product(product_name=data.product_name, price=data.price)
        session.add(product)
        await session.commit()
        logger.info(f"Created product {product.id} ({product.product_name})")
        return product

    async def update_product(self, session: AsyncSession, product_id: int, data: ProductUpdate) -> Product | None:
        if product_id != data.id:
            raise AppException(ErrorType.VALIDATION, "ID mismatch")

        product = await session.get(Product, product_id)
        if product is None:
            return None

        product.product_name = data.product_name
        product.price = data.price
        await session.commit()
        logger.info(f"Updated product {product_id}")
        return product

    async def delete_product(self, session: AsyncSession, product_id: int) -> bool:
        product = await session.get(Product, product_id)
        if product is None:
            return False

        referenced = await session.scalar(
            select(Sale.id).where(Sale.product_id == product_id).limit(1)
        )
        if referenced is not None:
            logger.warning(f"Refused to delete product {product_id}: referenced by sales")
            raise AppException(ErrorType.REFERENCE_CONFLICT, REFERENCED_MESSAGE)

        await session.delete(product)
        try:
            await session.commit()
        except IntegrityError:
            # A sale was recorded between the check and the delete
            await session.rollback()
            logger.warning(f"Refused to delete product {product_id}: foreign key violation")
            raise AppException(ErrorType.REFERENCE_CONFLICT, REFERENCED_MESSAGE)

        logger.info(f"Deleted product {product_id}")
        return True


product_service = ProductService()
