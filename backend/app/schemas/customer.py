from pydantic import Field

from app.schemas.common import CamelModel, RowId


class CustomerBase(CamelModel):
    full_name: str = Field(alias="fullName", min_length=1, max_length=100)
    email: str = Field(min_length=1, max_length=255)


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(CustomerBase):
    id: RowId = Field(alias="customerID")


class CustomerResponse(CustomerBase):
    id: RowId = Field(alias="customerID")
