from datetime import datetime, timezone
from decimal import Decimal

from pydantic import Field, field_validator

from app.schemas.common import CamelModel, Money, PagedResponse, RowId, INT32_MAX

UNKNOWN_CUSTOMER = "Unknown Customer"
UNKNOWN_PRODUCT = "Unknown Product"
CENTS = Decimal("0.01")


class SaleCreate(CamelModel):
    product_id: RowId = Field(alias="productID")
    customer_id: RowId = Field(alias="customerID")
    quantity: int = Field(ge=1, le=INT32_MAX)
    sale_date: datetime | None = Field(default=None, alias="saleDate")

    @field_validator("sale_date")
    @classmethod
    def naive_utc(cls, value: datetime | None) -> datetime | None:
        """The column stores naive timestamps; aware input is converted to UTC."""
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class SaleUpdate(SaleCreate):
    id: RowId = Field(alias="saleID")


class SaleResponse(CamelModel):
    id: int = Field(alias="saleID")
    sale_date: datetime = Field(alias="saleDate")
    quantity: int
    customer_id: int = Field(alias="customerID")
    product_id: int = Field(alias="productID")
    customer_name: str = Field(alias="customerName")
    product_name: str = Field(alias="productName")
    price: Money
    total: Money

    @classmethod
    def from_sale(cls, sale) -> "SaleResponse":
        """Build the display row; names, unit price and total come from the joined rows."""
        customer = sale.customer
        product = sale.product
        price = product.price if product is not None else Decimal("0")
        return cls(
            id=sale.id,
            sale_date=sale.sale_date,
            quantity=sale.quantity,
            customer_id=sale.customer_id,
            product_id=sale.product_id,
            customer_name=customer.full_name if customer is not None else UNKNOWN_CUSTOMER,
            product_name=product.product_name if product is not None else UNKNOWN_PRODUCT,
            price=price,
            total=(sale.quantity * price).quantize(CENTS),
        )


class SalePagedResponse(PagedResponse[SaleResponse]):
    total_revenue: Money = Field(alias="totalRevenue")
