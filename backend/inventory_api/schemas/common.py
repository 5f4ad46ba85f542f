import math
from datetime import datetime
from typing import Annotated, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, PlainSerializer, computed_field
from pydantic.alias_generators import to_camel

from inventory_api.utils.time_utils import to_utc_z

T = TypeVar("T")

# ids and quantities are 32-bit on the wire
MAX_INT = 2**31 - 1

# stored naive-UTC, sent with an explicit Z
UtcDateTime = Annotated[datetime, PlainSerializer(to_utc_z, return_type=str, when_used="json")]


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python; both accepted on input."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PagedResult(ApiModel, Generic[T]):
    items: List[T]
    total_count: int
    page_number: int
    page_size: int

    @computed_field(alias="totalPages")
    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @computed_field(alias="hasPreviousPage")
    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @computed_field(alias="hasNextPage")
    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages


class PageParams(BaseModel):
    page_number: Optional[int] = None
    page_size: Optional[int] = None

    @property
    def requested(self) -> bool:
        return self.page_number is not None or self.page_size is not None


def to_page(schema, items, total: int, page_number: int, page_size: int) -> PagedResult:
    return PagedResult[schema](
        items=[schema.model_validate(i) for i in items],
        total_count=total,
        page_number=page_number,
        page_size=page_size,
    )
