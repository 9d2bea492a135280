"""
Helpers for turning query-string values into filters.

Query parameters arrive as text.  Numbers are read the way browsers'
``parseInt`` reads them (leading integer prefix, everything else
ignored), booleans compare case-insensitively against ``"true"`` and
repeatable parameters are normalised to lists.  The remaining helpers
apply the parsed values to a list of users.
"""

import re
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from users_api.app.schemas.user import User


_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def parse_int(value: Optional[str]) -> Optional[int]:
    """Return the leading integer of ``value`` or ``None``.

    >>> parse_int("42abc")
    42
    >>> parse_int("abc") is None
    True
    """
    if value is None:
        return None
    match = _INT_PREFIX.match(value)
    return int(match.group(1)) if match else None


def parse_bool(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.lower() == "true"


def as_list(value: Union[None, str, Sequence[str]]) -> List[str]:
    """Wrap a single value into a list; ``None`` becomes an empty list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def page_bounds(page: Optional[str], limit: Optional[str]) -> Tuple[int, int]:
    """Parse ``page``/``limit`` falling back to 1 and 10.

    Both are clamped to at least 1 so the echoed bounds always describe
    the slice that ``paginate`` returns.
    """
    page_num = parse_int(page)
    limit_num = parse_int(limit)
    if page_num is None:
        page_num = DEFAULT_PAGE
    if limit_num is None:
        limit_num = DEFAULT_LIMIT
    return max(page_num, 1), max(limit_num, 1)


def paginate(users: Sequence[User], page: int, limit: int) -> List[User]:
    start = (page - 1) * limit
    return list(users[start:start + limit])


def sort_users(users: Iterable[User], sort_by: str, order: str = "asc") -> List[User]:
    """Sort by attribute ``sort_by``; users lacking it come last."""
    reverse = order.lower() == "desc"
    users = list(users)
    present = [u for u in users if u.get(sort_by) is not None]
    missing = [u for u in users if u.get(sort_by) is None]
    try:
        present.sort(key=lambda u: u.get(sort_by), reverse=reverse)
    except TypeError:
        # mixed value types
        present.sort(key=lambda u: str(u.get(sort_by)), reverse=reverse)
    return present + missing


def _as_text(value) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


FilterValue = Union[str, List[str]]


def collect_filters(items: Iterable[Tuple[str, str]]) -> Dict[str, FilterValue]:
    """Group query items by key; repeated keys keep every value as a list.

    >>> collect_filters([("role", "user"), ("role", "admin"), ("age", "17")])
    {'role': ['user', 'admin'], 'age': '17'}
    """
    filters: Dict[str, FilterValue] = {}
    for key, value in items:
        if key not in filters:
            filters[key] = value
        elif isinstance(filters[key], list):
            filters[key].append(value)
        else:
            filters[key] = [filters[key], value]
    return filters


def matches_filters(user: User, filters: Mapping[str, FilterValue]) -> bool:
    """True when every attribute, as text, equals one of its filter values."""
    for name, expected in filters.items():
        value = user.get(name)
        if value is None or _as_text(value) not in as_list(expected):
            return False
    return True


def has_any_role(user: User, roles: Sequence[str]) -> bool:
    wanted = set(roles)
    role = user.get("role")
    if role is not None and _as_text(role) in wanted:
        return True
    user_roles = user.get("roles")
    if isinstance(user_roles, (list, tuple)):
        return any(_as_text(r) in wanted for r in user_roles)
    return False


def is_active(user: User) -> bool:
    """Users without an ``isActive`` attribute count as active."""
    value = user.get("isActive")
    if value is None:
        return True
    if isinstance(value, str):
        return value.lower() == "true"
    return bool(value)


def age_in_range(user: User, min_age: Optional[int], max_age: Optional[int]) -> bool:
    if min_age is None and max_age is None:
        return True
    age = user.get("age")
    if isinstance(age, bool) or not isinstance(age, (int, float)):
        return False
    if min_age is not None and age < min_age:
        return False
    if max_age is not None and age > max_age:
        return False
    return True
