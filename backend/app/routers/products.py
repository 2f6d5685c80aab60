from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Config
from app.db.database import get_session
from app.errors import ErrorType
from app.exceptions import AppException
from app.schemas.common import PagedResponse, IdPath
from app.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from app.services.product_service import product_service, DEFAULT_SORT

router = APIRouter(prefix="/api/products", tags=["products"])


def _not_found(product_id: int) -> AppException:
    return AppException(ErrorType.NOT_FOUND, f"Product {product_id} not found")


@router.get("", response_model=PagedResponse[ProductResponse])
async def list_products(
    page_number: int = Query(1, alias="pageNumber"),
    page_size: int = Query(Config.DEFAULT_PAGE_SIZE, alias="pageSize"),
    sort_by: str = Query(DEFAULT_SORT, alias="sortBy"),
    is_ascending: bool = Query(True, alias="isAscending"),
    session: AsyncSession = Depends(get_session),
):
    products, total_count = await product_service.list_products(
        session, page_number, page_size, sort_by, is_ascending
    )
    return PagedResponse[ProductResponse](
        data=[ProductResponse.model_validate(p) for p in products],
        page_number=page_number,
        page_size=page_size,
        total_count=total_count,
    )


@router.get("/{product_id}", response_model=ProductResponse, name="get_product")
async def get_product(product_id: IdPath, session: AsyncSession = Depends(get_session)):
    product = await product_service.get_product(session, product_id)
    if product is None:
        raise _not_found(product_id)
    return ProductResponse.model_validate(product)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    body: ProductCreate,
    request: Request,
    response: Response,
    session: AsyncSession = Depends(get_session),
):
    product = await product_service.create_product(session, body)
    response.headers["Location"] = str(request.url_for("get_product", product_id=product.id))
    return ProductResponse.model_validate(product)


@router.put("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_product(product_id: IdPath, body: ProductUpdate, session: AsyncSession = Depends(get_session)):
    product = await product_service.update_product(session, product_id, body)
    if product is None:
        raise _not_found(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(product_id: IdPath, session: AsyncSession = Depends(get_session)):
    if not await product_service.delete_product(session, product_id):
        raise _not_found(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
