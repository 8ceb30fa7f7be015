"""Product search descriptor.

Every field is optional; an empty `ProductSearch` matches the whole catalog.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict

from src.criteria.markers import Operation, QueryPath, QueryRange, QueryTerm, Range


class ProductSearch(BaseModel):
    model_config = ConfigDict(extra="forbid")

    term: Annotated[str | None, QueryTerm("name", "description")] = None
    price_range: Annotated[Range[Decimal] | None, QueryRange("price")] = None
    created: Annotated[Range[datetime] | None, QueryRange("created_at")] = None
    status_list: Annotated[list[str] | None, QueryPath("status")] = None
    category_id: int | None = None
    category_name: Annotated[str | None, QueryPath("category.name", operation=Operation.like)] = None
    department_name: Annotated[str | None, QueryPath("category.department.name")] = None
    manager_name: Annotated[
        str | None, QueryPath("category.department.manager.name", operation=Operation.like)
    ] = None
    rating: Annotated[Range[int] | None, QueryRange("reviews.rating")] = None
