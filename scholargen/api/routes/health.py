"""Health check endpoints.

- /health: liveness, always 200
- /healthz: checks the paper store backend and reports component status
"""

import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response

from scholargen.api.dependencies import get_paper_store
from scholargen.config import get_settings
from scholargen.db.store import PaperStore

router = APIRouter()


async def check_store(store: PaperStore) -> tuple[bool, str]:
    """Check paper store connectivity.

    Returns:
        (is_ok, status_message)
    """
    try:
        if store.ping():
            return (True, "ok")
        return (False, "unreachable")
    except Exception as e:
        return (False, f"error: {type(e).__name__}")


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz(
    store: Annotated[PaperStore, Depends(get_paper_store)],
) -> dict[str, Any] | Response:
    """Health check endpoint.

    Returns:
        200 with component status if the store is reachable
        503 otherwise
    """
    settings = get_settings()
    store_ok, store_status = await check_store(store)

    response_body = {
        "status": "ok" if store_ok else "degraded",
        "components": {
            "store": store_status,
            "store_backend": settings.storage_backend,
            "diagram_engine": settings.diagram_engine,
        },
    }

    if not store_ok:
        return Response(
            content=json.dumps(response_body),
            status_code=503,
            media_type="application/json",
        )

    return response_body
