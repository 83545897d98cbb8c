import math
from typing import Any, Dict, List

from libs.result import Error

MAX_PAGE_SIZE = 100


def validate_page(page: int, limit: int, max_limit: int = MAX_PAGE_SIZE):
    """Returns an Error for out-of-range paging arguments, None otherwise"""
    if page < 1:
        return Error("VALIDATION_ERROR", "Page must be 1 or greater")
    if limit < 1 or limit > max_limit:
        return Error("VALIDATION_ERROR", f"Limit must be between 1 and {max_limit}")
    return None


def paginated(items: List[Any], total: int, page: int, limit: int) -> Dict[str, Any]:
    return {
        "items": items,
        "total": total,
        "pages": math.ceil(total / limit) if limit else 0,
        "page": page,
        "limit": limit,
    }
