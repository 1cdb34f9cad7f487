"""Formatting strategies for the generated document."""

from .base_strategy import OutputStrategy
from .markdown_strategy import MarkdownOutputStrategy

__all__ = ["MarkdownOutputStrategy", "OutputStrategy"]
