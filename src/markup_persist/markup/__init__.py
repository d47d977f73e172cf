"""Indentation-aware markup text sink."""

from .writer import MarkupWriter, SELF_CLOSING_TAG_END, TAG_RIGHT_CHAR

__all__ = ["MarkupWriter", "SELF_CLOSING_TAG_END", "TAG_RIGHT_CHAR"]
