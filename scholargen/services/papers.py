"""Paper service - generation, edit policy and rendering over the store."""

import logging

from scholargen.composer.pipeline import DiagramRenderer, render_document
from scholargen.db.repositories import PaperRepository
from scholargen.errors import ContentGenerationError, PaperNotFoundError
from scholargen.llm.client import PaperGenerator
from scholargen.models.blocks import ComposedDocument
from scholargen.models.paper import Paper, PaperVersion
from scholargen.utils.metrics import paper_generation_total, paper_versions_appended_total

logger = logging.getLogger(__name__)


class PaperService:
    """Application operations on papers."""

    def __init__(
        self,
        store: PaperRepository,
        generator: PaperGenerator,
        renderer: DiagramRenderer,
    ) -> None:
        self._store = store
        self._generator = generator
        self._renderer = renderer

    def list_papers(self) -> list[Paper]:
        return self._store.list_papers()

    def get_paper(self, paper_id: str) -> Paper:
        """Get a paper or raise PaperNotFoundError."""
        paper = self._store.get_paper(paper_id)
        if paper is None:
            raise PaperNotFoundError(paper_id)
        return paper

    def get_version(self, paper_id: str, version_number: int | None = None) -> PaperVersion:
        """Get a version by number, defaulting to the latest."""
        paper = self.get_paper(paper_id)

        if version_number is None:
            return paper.latest_version

        version = paper.get_version(version_number)
        if version is None:
            raise PaperNotFoundError(paper_id, version_number)
        return version

    async def generate(self, topic: str, overview: str) -> Paper:
        """Generate a paper from a seed and store it as version 1.

        Raises:
            ValueError: If topic or overview is blank
            ContentGenerationError: If the backend fails; nothing is stored
        """
        if not topic.strip() or not overview.strip():
            raise ValueError("topic and overview must not be blank")

        try:
            content = await self._generator.generate_paper(topic=topic, overview=overview)
        except ContentGenerationError:
            paper_generation_total.labels(outcome="error").inc()
            raise

        paper_generation_total.labels(outcome="success").inc()
        return self._store.create_paper(topic, overview, content)

    def save_edit(self, paper_id: str, content: str) -> tuple[Paper, bool]:
        """Save edited content as a new version unless it is unchanged.

        Returns:
            (paper, created) where created is False when the content matched
            the latest version and nothing was written

        Raises:
            PaperNotFoundError: If the paper does not exist
        """
        paper = self.get_paper(paper_id)

        if content == paper.latest_version.content:
            logger.debug(f"Edit of paper {paper_id} unchanged, no version created")
            return paper, False

        updated = self._store.append_version(paper_id, content)
        if updated is None:
            # Deleted between the read and the append
            raise PaperNotFoundError(paper_id)

        paper_versions_appended_total.inc()
        return updated, True

    def delete_paper(self, paper_id: str) -> None:
        self._store.delete_paper(paper_id)

    async def render(self, paper_id: str, version_number: int | None = None) -> ComposedDocument:
        """Compose a paper version and render its diagrams."""
        version = self.get_version(paper_id, version_number)
        return await render_document(version.content, self._renderer)
