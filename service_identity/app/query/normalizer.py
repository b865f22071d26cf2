"""
Query/filter normalization for read-path callers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

DEFAULT_PAGE = 0
DEFAULT_PAGE_SIZE = 20
DEFAULT_SORT_FIELD = "dueDate"


class SortDirection(str, Enum):
    """Sort directions."""
    ASC = "ASC"
    DESC = "DESC"


@dataclass
class RawFilter:
    """Pagination and sort parameters as supplied by the caller.

    Nothing here is validated; `normalize` decides what to keep.
    """
    page: Any = None
    page_size: Any = None
    sort_by: Any = None
    sort_direction: Any = None

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "RawFilter":
        """Build a filter from query-string style values.

        Accepts ``size`` as an alias of ``page_size`` and ``sort_field`` as an
        alias of ``sort_by``. Numbers that do not parse are left unset.
        """
        return cls(
            page=_parse_int(params.get("page")),
            page_size=_parse_int(params.get("page_size", params.get("size"))),
            sort_by=params.get("sort_by", params.get("sort_field")),
            sort_direction=params.get("sort_direction"),
        )


@dataclass(frozen=True)
class QuerySpec:
    """Canonical, fully populated query specification."""
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    sort_field: str = DEFAULT_SORT_FIELD
    sort_direction: SortDirection = SortDirection.ASC

    @property
    def offset(self) -> int:
        return self.page * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


def normalize(raw: Optional[RawFilter] = None) -> QuerySpec:
    """Normalize a raw filter into a `QuerySpec`.

    Never raises: missing, out-of-range or unrecognized values fall back to
    the defaults.
    """
    if raw is None:
        return QuerySpec()

    page = DEFAULT_PAGE
    page_size = DEFAULT_PAGE_SIZE
    sort_field = DEFAULT_SORT_FIELD
    direction = SortDirection.ASC

    if _is_int(raw.page) and raw.page >= 0:
        page = raw.page

    if _is_int(raw.page_size) and raw.page_size > 0:
        page_size = raw.page_size

    if isinstance(raw.sort_by, str) and raw.sort_by.strip():
        sort_field = raw.sort_by.strip()

    if isinstance(raw.sort_direction, str):
        direction_str = raw.sort_direction.strip().upper()
        if direction_str == SortDirection.DESC.value:
            direction = SortDirection.DESC
        elif direction_str == SortDirection.ASC.value:
            direction = SortDirection.ASC

    return QuerySpec(
        page=page,
        page_size=page_size,
        sort_field=sort_field,
        sort_direction=direction,
    )


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a page number
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_int(value: Any) -> Optional[int]:
    if value is None or _is_int(value):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None
