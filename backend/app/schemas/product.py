from pydantic import Field

from app.schemas.common import CamelModel, Money, RowId


class ProductBase(CamelModel):
    product_name: str = Field(alias="productName", min_length=1, max_length=100)
    price: Money = Field(ge=0, max_digits=10, decimal_places=2)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(ProductBase):
    id: RowId = Field(alias="productID")


class ProductResponse(ProductBase):
    id: RowId = Field(alias="productID")
