"""Presentation helpers used by the UI."""

from src.utils.format import format_bytes, format_date

__all__ = ["format_bytes", "format_date"]
