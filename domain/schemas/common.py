from typing import Literal, Optional

from pydantic import BaseModel, Field


class QueryOptions(BaseModel):
    """Pagination and ordering for list queries.

    ``take`` and ``order_by`` fall back to per-query defaults when omitted.
    """

    skip: int = Field(default=0, ge=0)
    take: Optional[int] = Field(default=None, ge=1)
    order_by: Optional[str] = None
    order: Optional[Literal["asc", "desc"]] = None
