"""
User endpoints for API v1.

CRUD routes for the in-memory user collection plus a handful of query
endpoints (search, pagination, free-form filters, roles and activity)
that echo the parsed query parameters together with the matching
users.

The literal paths (``/search``, ``/paginated`` ...) are declared before
``/{user_id}`` so they are not captured by the id route.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from users_api.app.api.deps import get_user_store
from users_api.app.api.v1 import query_params as qp
from users_api.app.schemas.user import (
    ActiveFilters,
    ActiveResult,
    DeleteResult,
    FilterResult,
    PaginatedResult,
    Pagination,
    RolesResult,
    SearchResult,
    User,
    UserCreate,
    UserUpdate,
    ValidFilters,
)
from users_api.app.services.user_store import UserNotFoundError, UserStore


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED, include_in_schema=False)
@router.post("/", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(user: UserCreate, store: UserStore = Depends(get_user_store)) -> User:
    """Create a user from the supplied attributes."""
    return store.create(user.model_dump(exclude_unset=True))


@router.get("", response_model=List[User], include_in_schema=False)
@router.get("/", response_model=List[User])
async def list_users(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    store: UserStore = Depends(get_user_store),
) -> List[User]:
    """Return all users in insertion order.

    ``search`` narrows the list by name/email; ``page`` and ``limit``
    slice it.  Without any of them the whole collection is returned.
    """
    logger.info("Query parameters received: page=%s limit=%s search=%s", page, limit, search)
    users = store.search(search) if search else store.find_all()
    if page is not None or limit is not None:
        page_num, limit_num = qp.page_bounds(page, limit)
        users = qp.paginate(users, page_num, limit_num)
    return users


@router.get("/search", response_model=SearchResult)
async def search_users(
    q: str = Query("", description="Text matched against name and email"),
    store: UserStore = Depends(get_user_store),
) -> SearchResult:
    logger.info("Search query: %s", q)
    return SearchResult(
        message=f"Searching for users with query: {q}",
        query=q,
        users=store.search(q),
    )


@router.get("/paginated", response_model=PaginatedResult)
async def get_paginated_users(
    page: str = Query("1"),
    limit: str = Query("10"),
    sort_by: str = Query("id", alias="sortBy"),
    order: str = Query("asc"),
    store: UserStore = Depends(get_user_store),
) -> PaginatedResult:
    """Return one page of users sorted by ``sortBy``.

    Unparseable ``page``/``limit`` values fall back to 1 and 10.
    """
    page_num, limit_num = qp.page_bounds(page, limit)
    if order.lower() not in ("asc", "desc"):
        order = "asc"
    users = qp.sort_users(store.find_all(), sort_by, order)
    return PaginatedResult(
        message="Paginated users",
        pagination=Pagination(
            page=page_num,
            limit=limit_num,
            sort_by=sort_by,
            order=order,
            total=len(users),
        ),
        data=f"Users from {(page_num - 1) * limit_num + 1} to {page_num * limit_num}",
        users=qp.paginate(users, page_num, limit_num),
    )


@router.get("/filter", response_model=FilterResult)
async def filter_users(request: Request, store: UserStore = Depends(get_user_store)) -> FilterResult:
    """Match users against every query parameter supplied."""
    filters = qp.collect_filters(request.query_params.multi_items())
    logger.info("All query parameters: %s", filters)
    return FilterResult(
        message="Filtered users",
        filters=filters,
        applied_filters=len(filters),
        users=store.find_where(lambda u: qp.matches_filters(u, filters)),
    )


@router.get("/by-roles", response_model=RolesResult)
async def get_users_by_roles(
    request: Request,
    roles: Optional[List[str]] = Query(None),
    store: UserStore = Depends(get_user_store),
) -> RolesResult:
    """Users whose ``role`` (or any of ``roles``) is in the given list.

    Accepts both ``?roles=a&roles=b`` and ``?roles[]=a&roles[]=b``.
    """
    role_list = qp.as_list(roles) + request.query_params.getlist("roles[]")
    logger.info("Roles query: %s", role_list)
    return RolesResult(
        message="Users filtered by roles",
        roles=role_list,
        count=len(role_list),
        users=store.find_where(lambda u: qp.has_any_role(u, role_list)),
    )


@router.get("/active", response_model=ActiveResult)
async def get_active_users(
    is_active: str = Query("true", alias="isActive"),
    min_age: Optional[str] = Query(None, alias="minAge"),
    max_age: Optional[str] = Query(None, alias="maxAge"),
    store: UserStore = Depends(get_user_store),
) -> ActiveResult:
    active = qp.parse_bool(is_active)
    min_age_num = qp.parse_int(min_age)
    max_age_num = qp.parse_int(max_age)
    users = store.find_where(
        lambda u: qp.is_active(u) == active and qp.age_in_range(u, min_age_num, max_age_num)
    )
    return ActiveResult(
        message="Active users with age filter",
        filters=ActiveFilters(is_active=active, min_age=min_age_num, max_age=max_age_num),
        valid_filters=ValidFilters(
            has_min_age=min_age_num is not None,
            has_max_age=max_age_num is not None,
        ),
        users=users,
    )


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: int, store: UserStore = Depends(get_user_store)) -> User:
    """Retrieve a single user.  Returns HTTP 404 if it does not exist."""
    try:
        return store.find_one(user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch("/{user_id}", response_model=User)
async def update_user(
    user_id: int,
    user: UserUpdate,
    store: UserStore = Depends(get_user_store),
) -> User:
    """Apply the fields present in the body to an existing user."""
    try:
        return store.update(user_id, user.model_dump(exclude_unset=True))
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{user_id}", response_model=DeleteResult)
async def delete_user(user_id: int, store: UserStore = Depends(get_user_store)) -> DeleteResult:
    try:
        return DeleteResult(**store.remove(user_id))
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
