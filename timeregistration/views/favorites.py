"""Favorite task projections."""

from __future__ import annotations
from typing import Collection, Iterable, Tuple

from ..contracts.base import FavoriteTask


def favorite_task_ids(favorites: Iterable[FavoriteTask]) -> Tuple[int, ...]:
    return tuple(task.task_number for task in favorites)


def is_task_favorite(favorite_ids: Collection[int], task_id: int) -> bool:
    return task_id in favorite_ids
