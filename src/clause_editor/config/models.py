"""Data models for editor configuration."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..editor.clause_store import COPY_SUFFIX, DEFAULT_CLAUSE_TITLE
from ..editor.history import DEFAULT_HISTORY_LIMIT
from ..editor.transforms import HEADING_PLACEHOLDER, LIST_PLACEHOLDER


@dataclass
class ClausePreset:
    """
    Reusable clause offered in the "common sections" library.

    Adding a preset to a draft copies its title, required flag and content
    into a new clause with a fresh id.
    """
    id: str
    title: str
    content: str
    required: bool = False
    description: Optional[str] = None

    def to_initial(self) -> Dict[str, Any]:
        """Field overrides for ClauseStore.add_clause."""
        return {
            "title": self.title,
            "required": self.required,
            "content": self.content,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "required": self.required,
            "content": self.content,
            "description": self.description,
        }


DEFAULT_CLAUSE_LIBRARY: List[ClausePreset] = [
    ClausePreset(
        id="confidentiality",
        title="Confidentiality",
        required=True,
        content=(
            "Both parties agree to keep all proprietary information confidential "
            "and to use it solely for the purposes of this Agreement."
        ),
    ),
    ClausePreset(
        id="termination",
        title="Termination",
        required=True,
        content=(
            "Either party may terminate this Agreement upon 30 days written notice "
            "in the event of a material breach not cured within 15 days."
        ),
    ),
    ClausePreset(
        id="indemnification",
        title="Indemnification",
        required=False,
        content=(
            "Each party shall defend, indemnify, and hold the other harmless from "
            "third-party claims arising from its negligence or willful misconduct."
        ),
    ),
    ClausePreset(
        id="governing-law",
        title="Governing Law",
        required=True,
        content=(
            "This Agreement shall be governed by and construed in accordance with "
            "the laws of the State of Delaware."
        ),
    ),
    ClausePreset(
        id="payment-terms",
        title="Payment Terms",
        required=True,
        content=(
            "Invoices are due within thirty (30) days of receipt. Late payments accrue "
            "interest at 1.5% per month or the maximum rate permitted by law."
        ),
    ),
]


@dataclass
class ValidationResult:
    """Result of configuration validation."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add an error message."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another validation result into this one."""
        return ValidationResult(
            is_valid=self.is_valid and other.is_valid,
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings
        )


class ConfigurationError(Exception):
    """Exception raised for configuration errors."""

    def __init__(self, message: str, validation_result: Optional[ValidationResult] = None):
        super().__init__(message)
        self.message = message
        self.validation_result = validation_result


@dataclass
class EditorConfiguration:
    """
    Complete editor configuration.

    Holds the defaults the clause store, transforms and history use,
    plus the library of common clauses.
    """
    history_limit: int = DEFAULT_HISTORY_LIMIT
    default_clause_title: str = DEFAULT_CLAUSE_TITLE
    copy_suffix: str = COPY_SUFFIX
    list_placeholder: str = LIST_PLACEHOLDER
    heading_placeholder: str = HEADING_PLACEHOLDER
    clause_library: List[ClausePreset] = field(
        default_factory=lambda: list(DEFAULT_CLAUSE_LIBRARY)
    )
    version: int = 1
    metadata: Dict[str, Any] = field(default_factory=dict)

    def get_preset(self, preset_id: str) -> Optional[ClausePreset]:
        """Get a clause preset by ID."""
        for preset in self.clause_library:
            if preset.id == preset_id:
                return preset
        return None

    def get_required_presets(self) -> List[ClausePreset]:
        """Presets flagged as required clauses."""
        return [p for p in self.clause_library if p.required]
