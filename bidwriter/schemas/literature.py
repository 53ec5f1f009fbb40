"""
Literature Search Schemas
Pydantic models for Semantic Scholar paper search results.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PaperAuthor(BaseModel):
    """Author of a paper."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    author_id: Optional[str] = Field(None, alias="authorId")
    name: str = ""


class Paper(BaseModel):
    """A paper returned by the search API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    paper_id: Optional[str] = Field(None, alias="paperId")
    title: str = ""
    authors: List[PaperAuthor] = Field(default_factory=list)
    year: Optional[int] = None
    citation_count: Optional[int] = Field(None, alias="citationCount")
    abstract: Optional[str] = None
    url: Optional[str] = None
    external_ids: Optional[Dict[str, str]] = Field(None, alias="externalIds")


class PaperSearchResponse(BaseModel):
    """A page of paper search results."""

    total: int = 0
    offset: int = 0
    next: Optional[int] = None
    data: List[Paper] = Field(default_factory=list)
