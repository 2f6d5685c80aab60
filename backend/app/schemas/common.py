import math
from decimal import Decimal
from typing import Annotated, Generic, TypeVar

from fastapi import Path
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, computed_field

# Decimal in Python, plain number in JSON
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

# Ids and counts are 32-bit integer columns
INT32_MIN = -2**31
INT32_MAX = 2**31 - 1
RowId = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]
IdPath = Annotated[int, Path(ge=INT32_MIN, le=INT32_MAX)]

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for wire schemas: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


def count_pages(total_count: int, page_size: int) -> int:
    if page_size <= 0:
        return 0
    return math.ceil(total_count / page_size)


class PagedResponse(CamelModel, Generic[T]):
    data: list[T]
    page_number: int = Field(alias="pageNumber")
    page_size: int = Field(alias="pageSize")
    total_count: int = Field(alias="totalCount")

    @computed_field(alias="totalPages")
    @property
    def total_pages(self) -> int:
        return count_pages(self.total_count, self.page_size)
