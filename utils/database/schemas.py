"""
Record Schemas for Realty Admin
Pydantic shapes for the two admin-managed tables.

The tables are owned by Supabase; these models only describe the columns
the admin panel reads and writes. Unknown columns (created_at etc.) are ignored.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class PropertyCategory(str, Enum):
    """Listing category - closed set."""
    RENT = "rent"
    SALE = "sale"
    PROJECT = "project"


class TableRecord(BaseModel):
    """
    Base for table rows.

    Nullable columns come back as None; an optional field reads None as its
    default so such rows still list, edit and delete. Required fields (id)
    still reject None.
    """

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value, info: ValidationInfo):
        if value is None:
            field = cls.model_fields.get(info.field_name)
            if field is not None and not field.is_required():
                return field.get_default(call_default_factory=True)
        return value


# =============================================================================
# PROPERTIES
# =============================================================================

class PropertyDraft(TableRecord):
    """New property form state (no id until the store assigns one)."""
    model_config = ConfigDict(use_enum_values=True, validate_default=True, extra="ignore")

    title: str = ""
    description: str = ""
    price: float = 0
    location: str = ""
    bedrooms: int = 1
    bathrooms: int = 1
    area: float = 0
    image_url: str = ""
    category: PropertyCategory = PropertyCategory.SALE
    type: str = "apartment"

    def to_row(self) -> dict:
        """Column dict for an insert."""
        return self.model_dump()


class Property(PropertyDraft):
    """Persisted property. id is assigned on insert and never changes."""
    id: int

    @property
    def price_label(self) -> str:
        return f"${self.price:,.0f}"


# =============================================================================
# QUIZ QUESTIONS
# =============================================================================

class QuizQuestionDraft(TableRecord):
    """New quiz question form state."""
    model_config = ConfigDict(extra="ignore")

    question: str = ""
    question_en: str = ""
    options: List[str] = Field(default_factory=lambda: [""])
    options_en: List[str] = Field(default_factory=lambda: [""])
    order_index: int = 0

    def validation_errors(self) -> List[str]:
        """
        Check the bilingual pairing before a write.

        Returns:
            List of human readable problems (empty when the record is writable)
        """
        problems = []
        if not self.question.strip():
            problems.append("Question text is required")
        if not self.question_en.strip():
            problems.append("English question text is required")

        options = clean_options(self.options)
        options_en = clean_options(self.options_en)
        if not options:
            problems.append("At least one option is required")
        if not options_en:
            problems.append("At least one English option is required")
        if options and options_en and len(options) != len(options_en):
            problems.append(
                f"Options and English options must have the same length "
                f"({len(options)} vs {len(options_en)})"
            )
        return problems

    def to_row(self) -> dict:
        row = self.model_dump()
        row['options'] = clean_options(self.options)
        row['options_en'] = clean_options(self.options_en)
        return row


class QuizQuestion(QuizQuestionDraft):
    """Persisted quiz question."""
    id: str


# =============================================================================
# HELPERS
# =============================================================================

def clean_options(options: Optional[List[str]]) -> List[str]:
    """Strip whitespace and drop blank entries, keeping order."""
    return [o.strip() for o in (options or []) if o and o.strip()]


def parse_options(text: str) -> List[str]:
    """Parse a one-option-per-line text area into a list."""
    return clean_options(text.splitlines())
