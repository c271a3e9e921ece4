"""Pagination window value object and clamping rules."""
import re
from dataclasses import dataclass
from typing import Optional

from geosearch.domain.exceptions import OffsetExceedsMaximum, ParameterParseError

_PAGE_PARAM_RE = re.compile(r"\d+", re.ASCII)


@dataclass(frozen=True)
class PageWindow:
    """Effective page of results after clamping against the result window."""
    limit: int
    offset: int
    max_offset: int


def clamp_pagination(limit: int, offset: int, max_window: int) -> PageWindow:
    """Clamp a requested page so it never reaches past ``max_window``.

    The offset is never altered; the limit shrinks to fit the window.

    Raises:
        OffsetExceedsMaximum: offset is at or beyond max_window
    """
    if offset >= max_window:
        raise OffsetExceedsMaximum(max_window)

    if offset + limit > max_window:
        limit = max_window - offset

    return PageWindow(limit=limit, offset=offset, max_offset=max_window)


def parse_page_param(name: str, raw: Optional[str], default: int) -> int:
    """Parse a limit/offset query parameter, using ``default`` when absent.

    Raises:
        ParameterParseError: raw is present but not a non-negative integer
    """
    if raw is None or raw == "":
        return default
    # plain digits only: no sign, underscores or surrounding spaces
    if not _PAGE_PARAM_RE.fullmatch(raw):
        raise ParameterParseError(name, raw)
    return int(raw)
