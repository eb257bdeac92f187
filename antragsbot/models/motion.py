"""
Motion Models

Canonical motion record and the raw field values collected from the form.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from enum import Enum
from typing import List, Optional


class MotionKind(str, Enum):
    """Motion category. Informational only, the transcript layout ignores it."""

    NORMAL = "Normal"
    INFORMATION = "Information"
    MISCELLANEOUS = "Sonstiges"


class Person(BaseModel):
    """Member of the deliberative body as known to the Record Service."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    name: str  # Display name


class Motion(BaseModel):
    """Canonical motion record ("Antrag")."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: Optional[str] = None  # Assigned by the Record Service on creation
    title: str
    body: str  # Stored with the body preamble
    justification: Optional[str] = None
    kind: Optional[MotionKind] = None
    proposers: List[str] = Field(default_factory=list)  # Person ids


class MotionFields(BaseModel):
    """Raw values entered in the motion form."""

    title: str
    body: Optional[str] = None
    justification: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("title must not be empty")
        return value

    @field_validator("body", "justification")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value


class FormDefaults(BaseModel):
    """Values recovered from a thread transcript to pre-fill the edit form."""

    title: str
    body: Optional[str] = None
    justification: Optional[str] = None
