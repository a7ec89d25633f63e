"""CLI command modules for apihttp."""

from .config import config
from .request import delete, get, post, put

__all__ = [
    "config",
    "delete",
    "get",
    "post",
    "put",
]
