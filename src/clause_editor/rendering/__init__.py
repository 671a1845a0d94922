"""Rendering module for the template clause editor."""

from .markdown_lite import render
from .preview_renderer import PreviewRenderer

__all__ = [
    "render",
    "PreviewRenderer",
]
