"""Aggregate application use cases."""

from .comments import create_comment
from .tasks import create_task, update_task

__all__ = [
    "create_comment",
    "create_task",
    "update_task",
]
