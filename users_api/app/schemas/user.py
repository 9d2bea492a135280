"""
Pydantic models for user data.

Users are open records: besides the well-known ``name`` and ``email``
fields, any additional attributes supplied by the client are kept and
returned as-is.  Timestamps are exposed under their camelCase names
(``createdAt``/``updatedAt``) while Python code uses snake_case
attributes.

The remaining models describe the responses of the query endpoints
(search, pagination, filtering), each of which echoes the parsed
parameters alongside the matching users.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class UserBase(BaseModel):
    name: Optional[str] = Field(None, examples=["Ada Lovelace"])
    email: Optional[str] = Field(None, examples=["ada@example.com"])

    model_config = {
        "extra": "allow",
    }


class UserCreate(UserBase):
    """Schema for creating a user.

    Extra attributes (``role``, ``age``, ``isActive`` ...) are accepted.
    Identifier and timestamp fields are ignored by the store.
    """


class UserUpdate(UserBase):
    """Schema for partially updating a user.

    Only the fields present in the request body are applied.
    """


class User(UserBase):
    """A stored user as returned by the API."""

    id: int
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    model_config = {
        "extra": "allow",
        "populate_by_name": True,
    }

    def get(self, name: str, default: Any = None) -> Any:
        """Return attribute ``name`` by its API name, including extras."""
        if name in ("createdAt", "created_at"):
            return self.created_at
        if name in ("updatedAt", "updated_at"):
            return self.updated_at
        if name in type(self).model_fields:
            return getattr(self, name)
        return (self.model_extra or {}).get(name, default)


class DeleteResult(BaseModel):
    id: int
    message: str


class SearchResult(BaseModel):
    message: str
    query: str
    users: List[User] = []


class Pagination(BaseModel):
    page: int
    limit: int
    sort_by: str = Field(..., alias="sortBy")
    order: str
    total: int

    model_config = {"populate_by_name": True}


class PaginatedResult(BaseModel):
    message: str
    pagination: Pagination
    data: str
    users: List[User] = []


class FilterResult(BaseModel):
    message: str
    filters: Dict[str, Union[str, List[str]]]
    applied_filters: int = Field(..., alias="appliedFilters")
    users: List[User] = []

    model_config = {"populate_by_name": True}


class RolesResult(BaseModel):
    message: str
    roles: List[str]
    count: int
    users: List[User] = []


class ActiveFilters(BaseModel):
    is_active: bool = Field(..., alias="isActive")
    min_age: Optional[int] = Field(None, alias="minAge")
    max_age: Optional[int] = Field(None, alias="maxAge")

    model_config = {"populate_by_name": True}


class ValidFilters(BaseModel):
    has_min_age: bool = Field(..., alias="hasMinAge")
    has_max_age: bool = Field(..., alias="hasMaxAge")

    model_config = {"populate_by_name": True}


class ActiveResult(BaseModel):
    message: str
    filters: ActiveFilters
    valid_filters: ValidFilters = Field(..., alias="validFilters")
    users: List[User] = []

    model_config = {"populate_by_name": True}
