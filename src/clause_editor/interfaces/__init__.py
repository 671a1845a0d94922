"""Interfaces for the template clause editor."""

from .repository import ITemplateRepository

__all__ = [
    "ITemplateRepository",
]
