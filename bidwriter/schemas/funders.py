"""
Funder Schemas
Pydantic models for funder definitions, grant schemes and their required sections.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RequiredSection(BaseModel):
    """A section a scheme expects in the proposal."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, description="Section heading")
    required: bool = Field(False, description="Whether the section must be present")
    max_words: Optional[int] = Field(None, ge=0, description="Word limit")
    max_pages: Optional[int] = Field(None, ge=0, description="Page limit")


class FunderScheme(BaseModel):
    """A named grant scheme with award bounds and section requirements."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="Scheme name")
    description: Optional[str] = None
    max_amount: Optional[float] = Field(None, description="Maximum award amount")
    min_amount: Optional[float] = Field(None, description="Minimum award amount")
    max_duration: Optional[float] = Field(None, description="Maximum duration in months")
    min_duration: Optional[float] = Field(None, description="Minimum duration in months")
    sections: List[RequiredSection] = Field(default_factory=list)
    eligibility: Optional[str] = Field(None, description="Free-text eligibility criteria")
    priorities: List[str] = Field(default_factory=list)
    review_criteria: List[str] = Field(default_factory=list)


class Funder(BaseModel):
    """A funding organisation and its schemes."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    full_name: str
    parent: Optional[str] = None
    url: Optional[str] = None
    priorities: List[str] = Field(default_factory=list)
    review_criteria: List[str] = Field(default_factory=list)
    schemes: List[FunderScheme] = Field(default_factory=list)


class FunderSummary(BaseModel):
    """Funder listing entry."""

    id: str
    name: str
    full_name: str
    parent: Optional[str] = None
    schemes_count: int
    priorities: List[str]
