"""Data binding: JSON Pointer addressing and dynamic value resolution."""

from . import pointer
from .resolver import BindingResolver

join_path = pointer.join

__all__ = ["pointer", "BindingResolver", "join_path"]
