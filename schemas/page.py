# schemas/page.py
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

ItemT = TypeVar("ItemT")


class PageResponse(BaseModel, Generic[ItemT]):
    """Paginated envelope (docs + totals + neighbour pages)"""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    docs: List[ItemT]
    total_docs: int = Field(alias="totalDocs")
    limit: int
    page: int
    total_pages: int = Field(alias="totalPages")
    has_prev_page: bool = Field(alias="hasPrevPage")
    has_next_page: bool = Field(alias="hasNextPage")
    prev_page: Optional[int] = Field(None, alias="prevPage")
    next_page: Optional[int] = Field(None, alias="nextPage")
