"""Helper utilities for blessed UI rendering and input."""

from .clipboard import read_clipboard
from .terminal import write_at

__all__ = ["read_clipboard", "write_at"]
