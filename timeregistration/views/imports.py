"""
Import Views
============

Readiness and type-of-work resolution for an import.
"""

from __future__ import annotations
from typing import Optional, Sequence

from ..contracts.base import ImportInfo, TypeOfWork, DEFAULT_TYPE_OF_WORK


def is_import_metadata_ready(info: Optional[ImportInfo]) -> bool:
    """
    Both the work location and the type of work have been chosen.

    The work-from-home start date is only required when working from home.
    """
    if info is None:
        return False
    if info.is_work_from_home is None or info.selected_type_of_work_index is None:
        return False
    if info.is_work_from_home:
        return info.work_from_home_start is not None
    return True


def selected_type_of_work_key(
    info: Optional[ImportInfo],
    types_of_work: Optional[Sequence[TypeOfWork]]
) -> str:
    """Catalog key at the chosen index, or the default key."""
    if not types_of_work:
        return DEFAULT_TYPE_OF_WORK

    index = info.selected_type_of_work_index if info is not None else None
    if index is None or index < 0 or index >= len(types_of_work):
        return DEFAULT_TYPE_OF_WORK

    key = types_of_work[index].key
    return key if key is not None else DEFAULT_TYPE_OF_WORK
