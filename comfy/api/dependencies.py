"""Shared FastAPI dependencies for the catalog endpoints."""

from typing import Annotated

from fastapi import BackgroundTasks, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from comfy.catalog.references import ReferenceMaintainer
from comfy.catalog.service import CatalogService
from comfy.infrastructure.database import get_session, get_session_factory


def get_reference_maintainer(
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
) -> ReferenceMaintainer:
    """Get reference maintainer bound to the session factory."""
    return ReferenceMaintainer(session_factory)


def get_catalog_service(
    background_tasks: BackgroundTasks,
    session: Annotated[AsyncSession, Depends(get_session)],
    references: Annotated[ReferenceMaintainer, Depends(get_reference_maintainer)],
) -> CatalogService:
    """Get catalog service for the request.

    Reference maintenance is scheduled as background tasks of the request.
    """
    return CatalogService(session, references, background_tasks=background_tasks)


CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
