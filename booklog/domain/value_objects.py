"""
Value objects for the domain layer.

Value objects are immutable objects that represent descriptive aspects
of the domain with no conceptual identity.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple

from .errors import InvalidArgumentError
from .validation import require_language_code


# Display names for the languages a library is likely to be configured with.
# Codes missing here are displayed by their code.
LANGUAGE_NAMES: Dict[str, str] = {
    "de": "German",
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "it": "Italian",
    "nl": "Dutch",
    "pt": "Portuguese",
}


@dataclass(frozen=True)
class LanguageConfig:
    """
    The fixed set of languages books may be written in.

    Built once at startup and injected into BookManagement and the form
    layer. The first code is the default offered to forms.
    """

    codes: Tuple[str, ...] = ("de", "en")
    """ISO 639-1 codes, in display order"""

    names: Dict[str, str] = field(default_factory=lambda: dict(LANGUAGE_NAMES), compare=False)
    """Display name per code"""

    def __post_init__(self) -> None:
        """Validate and normalise the configured codes."""
        if not self.codes:
            raise InvalidArgumentError("At least one language must be configured")

        normalised = tuple(require_language_code(code) for code in self.codes)
        if len(set(normalised)) != len(normalised):
            raise InvalidArgumentError(f"Duplicate language codes in {normalised}")

        # frozen dataclass: bypass __setattr__ to store the normalised tuple
        object.__setattr__(self, "codes", normalised)

    @staticmethod
    def from_string(value: str) -> "LanguageConfig":
        """
        Build a config from a comma separated list such as "de,en".

        Blank entries are ignored.
        """
        codes = tuple(part.strip() for part in value.split(",") if part.strip())
        return LanguageConfig(codes=codes)

    @property
    def default(self) -> str:
        return self.codes[0]

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.strip().lower() in self.codes

    def require(self, code: str) -> str:
        """
        Return the normalised code if it is configured.

        Raises:
            MissingValueError: If code is None
            InvalidArgumentError: If code is malformed or not configured
        """
        normalised = require_language_code(code)
        if normalised not in self:
            raise InvalidArgumentError(
                f"language must be one of {list(self.codes)}, got '{code}'"
            )
        return normalised

    def display_name(self, code: str) -> str:
        return self.names.get(code, code)

    def choices(self) -> Dict[str, str]:
        """Mapping of code -> display name, in configured order."""
        return {code: self.display_name(code) for code in self.codes}


class ReadingState(str, Enum):
    """The two states of a Reading."""

    IN_PROGRESS = "in_progress"
    FINISHED = "finished"
