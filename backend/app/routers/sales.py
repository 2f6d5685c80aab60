from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Config
from app.db.database import get_session
from app.errors import ErrorType
from app.exceptions import AppException
from app.schemas.common import IdPath
from app.schemas.sale import SaleCreate, SaleUpdate, SaleResponse, SalePagedResponse
from app.services.sale_service import sale_service, DEFAULT_SORT

router = APIRouter(prefix="/api/sales", tags=["sales"])


def _not_found(sale_id: int) -> AppException:
    return AppException(ErrorType.NOT_FOUND, f"Sale {sale_id} not found")


@router.get("", response_model=SalePagedResponse)
async def list_sales(
    page_number: int = Query(1, alias="pageNumber"),
    page_size: int = Query(Config.DEFAULT_PAGE_SIZE, alias="pageSize"),
    sort_by: str = Query(DEFAULT_SORT, alias="sortBy"),
    is_ascending: bool = Query(True, alias="isAscending"),
    session: AsyncSession = Depends(get_session),
):
    sales, total_count = await sale_service.list_sales(
        session, page_number, page_size, sort_by, is_ascending
    )
    total_revenue = await sale_service.total_revenue(session)
    return SalePagedResponse(
        data=[SaleResponse.from_sale(s) for s in sales],
        page_number=page_number,
        page_size=page_size,
        total_count=total_count,
        total_revenue=total_revenue,
    )


@router.get("/{sale_id}", response_model=SaleResponse, name="get_sale")
async def get_sale(sale_id: IdPath, session: AsyncSession = Depends(get_session)):
    sale = await sale_service.get_sale(session, sale_id)
    if sale is None:
        raise _not_found(sale_id)
    return SaleResponse.from_sale(sale)


@router.post("", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
async def create_sale(
    body: SaleCreate,
    request: Request,
    response: Response,
    session: AsyncSession = Depends(get_session),
):
    sale = await sale_service.create_sale(session, body)
    response.headers["Location"] = str(request.url_for("get_sale", sale_id=sale.id))
    return SaleResponse.from_sale(sale)


@router.put("/{sale_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_sale(sale_id: IdPath, body: SaleUpdate, session: AsyncSession = Depends(get_session)):
    sale = await sale_service.update_sale(session, sale_id, body)
    if sale is None:
        raise _not_found(sale_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{sale_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sale(sale_id: IdPath, session: AsyncSession = Depends(get_session)):
    if not await sale_service.delete_sale(session, sale_id):
        raise _not_found(sale_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
