"""Use cases for task comments."""

from .create_comment import create_comment

__all__ = ["create_comment"]
