from __future__ import annotations

from app.admin.types import ADMIN_PAGE_MAX_LIMIT
from app.core.errors import ValidationError


def resolve_page(*, limit: int, offset: int) -> tuple[int, int]:
    if limit < 1 or limit > ADMIN_PAGE_MAX_LIMIT:
        raise ValidationError(f"limit must be between 1 and {ADMIN_PAGE_MAX_LIMIT}.")
    if offset < 0:
        raise ValidationError("offset must not be negative.")
    return limit, offset


def normalize_search(search: str | None) -> str | None:
    if search is None:
        return None
    # LIKE wildcards in user input are matched literally.
    cleaned = search.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return cleaned or None
