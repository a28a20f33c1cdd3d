"""FastAPI dependency providers for the store, generator and renderer."""

from functools import lru_cache

from scholargen.config import get_settings
from scholargen.db.kv import create_kv_store
from scholargen.db.store import PaperStore
from scholargen.diagrams.engines import create_engine_from_settings
from scholargen.diagrams.renderer import DiagramRenderer
from scholargen.llm.client import get_llm_client
from scholargen.services.papers import PaperService


@lru_cache
def get_paper_store() -> PaperStore:
    """Get process-wide paper store built from settings."""
    settings = get_settings()
    return PaperStore(create_kv_store(settings), key=settings.storage_key)


@lru_cache
def get_diagram_renderer() -> DiagramRenderer:
    """Get process-wide diagram renderer built from settings."""
    return DiagramRenderer(create_engine_from_settings(get_settings()))


def get_paper_service() -> PaperService:
    """Build the paper service (overridden in tests)."""
    return PaperService(
        store=get_paper_store(),
        generator=get_llm_client(),
        renderer=get_diagram_renderer(),
    )
