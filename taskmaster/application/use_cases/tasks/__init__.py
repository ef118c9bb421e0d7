"""Use cases for managing tasks."""

from .create_task import create_task
from .update_task import UPDATABLE_FIELDS, update_task

__all__ = ["create_task", "update_task", "UPDATABLE_FIELDS"]
