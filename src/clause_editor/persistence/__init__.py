"""Persistence module for the template clause editor."""

from .database import DatabaseManager, get_database_url
from .models import Base, TemplateModel
from .template_repository import TemplateRepository

__all__ = [
    "DatabaseManager",
    "get_database_url",
    "Base",
    "TemplateModel",
    "TemplateRepository",
]
