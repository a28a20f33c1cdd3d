"""Paper endpoints - list, generate, edit, delete, render."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel, Field

from scholargen.api.dependencies import get_paper_service
from scholargen.errors import ContentGenerationError, PaperNotFoundError
from scholargen.models.blocks import ComposedDocument
from scholargen.models.paper import Paper, PaperRequest
from scholargen.services.papers import PaperService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/papers", tags=["papers"])


class SaveVersionRequest(BaseModel):
    """Request body for POST /papers/{paper_id}/versions."""

    content: str = Field(..., description="Full edited document text")


class SaveVersionResponse(BaseModel):
    """Response for POST /papers/{paper_id}/versions."""

    paper: Paper
    created: bool


def _not_found(e: PaperNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("", response_model=list[Paper])
async def list_papers(
    service: Annotated[PaperService, Depends(get_paper_service)],
) -> list[Paper]:
    """List papers, most recently updated first."""
    return service.list_papers()


@router.post("", response_model=Paper, status_code=status.HTTP_201_CREATED)
async def generate_paper(
    request: PaperRequest,
    service: Annotated[PaperService, Depends(get_paper_service)],
) -> Paper:
    """Generate a new paper from a topic and overview.

    Raises:
        HTTPException: 422 for blank seed, 502 if the text backend fails
    """
    logger.info(f"[POST /papers] topic={request.topic!r}")

    try:
        return await service.generate(request.topic, request.overview)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except ContentGenerationError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="The system encountered an error while generating the paper. Please try again.",
        ) from e


@router.get("/{paper_id}", response_model=Paper)
async def get_paper(
    paper_id: str,
    service: Annotated[PaperService, Depends(get_paper_service)],
) -> Paper:
    """Get a paper with all its versions."""
    try:
        return service.get_paper(paper_id)
    except PaperNotFoundError as e:
        raise _not_found(e) from e


@router.post("/{paper_id}/versions", response_model=SaveVersionResponse)
async def save_version(
    paper_id: str,
    request: SaveVersionRequest,
    service: Annotated[PaperService, Depends(get_paper_service)],
) -> SaveVersionResponse:
    """Save edited content; unchanged content creates no version."""
    try:
        paper, created = service.save_edit(paper_id, request.content)
    except PaperNotFoundError as e:
        raise _not_found(e) from e

    return SaveVersionResponse(paper=paper, created=created)


@router.delete("/{paper_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_paper(
    paper_id: str,
    service: Annotated[PaperService, Depends(get_paper_service)],
) -> Response:
    """Delete a paper and all its versions. Idempotent."""
    service.delete_paper(paper_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{paper_id}/render", response_model=ComposedDocument)
async def render_paper(
    paper_id: str,
    service: Annotated[PaperService, Depends(get_paper_service)],
    version: Annotated[int | None, Query(ge=1)] = None,
) -> ComposedDocument:
    """Compose a paper version (latest by default) with diagrams rendered."""
    try:
        return await service.render(paper_id, version)
    except PaperNotFoundError as e:
        raise _not_found(e) from e
