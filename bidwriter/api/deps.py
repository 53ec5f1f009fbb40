"""
FastAPI Dependencies
Shared dependencies for database and service access.
"""
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bidwriter.database import get_db
from bidwriter.services.funder_registry import FunderRegistry, get_funder_registry
from bidwriter.services.literature_search import LiteratureSearchService, get_literature_search
from bidwriter.services.writing_assistant import WritingAssistantService, get_writing_assistant

AsyncSessionDep = Annotated[AsyncSession, Depends(get_db)]
FunderRegistryDep = Annotated[FunderRegistry, Depends(get_funder_registry)]
WritingAssistantDep = Annotated[WritingAssistantService, Depends(get_writing_assistant)]
LiteratureSearchDep = Annotated[LiteratureSearchService, Depends(get_literature_search)]
