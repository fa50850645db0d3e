"""List view state: search, filter, sort, paging and load status."""
from dataclasses import dataclass, field

from config import PAGE_SIZE

STATUS_IDLE = "idle"
STATUS_LOADING = "loading"
STATUS_ERROR = "error"
STATUSES = (STATUS_IDLE, STATUS_LOADING, STATUS_ERROR)

SORT_ASC = "asc"
SORT_DESC = "desc"


@dataclass
class SortSpec:
    """Sort column (``None`` = insertion order) and direction."""

    field: str | None = None
    order: str = SORT_ASC

    @property
    def descending(self) -> bool:
        return self.order == SORT_DESC


@dataclass
class ViewState:
    search: str = ""
    category: str | None = None
    sort: SortSpec = field(default_factory=SortSpec)
    page: int = 1
    page_size: int = PAGE_SIZE
    status: str = STATUS_IDLE
    error: str | None = None
