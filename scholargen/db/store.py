"""Versioned paper store over a single key-value record."""

import logging
import time
import uuid
from collections.abc import Callable

from pydantic import TypeAdapter

from scholargen.db.repositories import KeyValueStore
from scholargen.models.paper import Paper, PaperVersion

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "scholargen_papers_v1"

_papers_adapter = TypeAdapter(list[Paper])


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def new_id() -> str:
    return str(uuid.uuid4())


class PaperStore:
    """PaperRepository persisted as one JSON record under a fixed key.

    The collection is kept in recency order (most recently updated first):
    new papers and papers with a new version move to the front. Every
    mutation reads the whole collection, changes it and writes it back.
    Single writer only; there is no locking.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        key: str = DEFAULT_STORAGE_KEY,
        *,
        clock: Callable[[], int] = now_ms,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self._kv = kv
        self._key = key
        self._clock = clock
        self._id_factory = id_factory

    def _load(self) -> list[Paper]:
        """Read the collection; missing or unreadable data reads as empty."""
        raw = self._kv.get(self._key)
        if raw is None:
            return []

        try:
            return _papers_adapter.validate_json(raw)
        except ValueError as e:
            logger.warning(f"Failed to load papers from {self._key!r}, treating as empty: {e}")
            return []

    def _save(self, papers: list[Paper]) -> None:
        self._kv.set(self._key, _papers_adapter.dump_json(papers, by_alias=True).decode("utf-8"))

    def list_papers(self) -> list[Paper]:
        """List papers, most recently updated first."""
        return self._load()

    def create_paper(self, topic: str, overview: str, content: str) -> Paper:
        """Create a paper with version 1 and put it at the front."""
        papers = self._load()
        timestamp = self._clock()

        paper = Paper(
            id=self._id_factory(),
            topic=topic,
            overview=overview,
            created_at=timestamp,
            updated_at=timestamp,
            versions=[
                PaperVersion(
                    id=self._id_factory(),
                    version_number=1,
                    content=content,
                    created_at=timestamp,
                )
            ],
        )

        papers.insert(0, paper)
        self._save(papers)

        logger.info(f"Created paper {paper.id}")
        return paper

    def append_version(self, paper_id: str, content: str) -> Paper | None:
        """Append version ``len(versions) + 1`` and move the paper to the front.

        No deduplication: identical content still produces a new version.
        Returns None for an unknown paper.
        """
        papers = self._load()
        index = next((i for i, p in enumerate(papers) if p.id == paper_id), None)

        if index is None:
            return None

        paper = papers.pop(index)
        # A clock step backwards must not break updated_at >= created_at
        timestamp = max(self._clock(), paper.updated_at)

        version = PaperVersion(
            id=self._id_factory(),
            version_number=len(paper.versions) + 1,
            content=content,
            created_at=timestamp,
        )
        paper = paper.model_copy(
            update={"versions": [*paper.versions, version], "updated_at": timestamp}
        )

        papers.insert(0, paper)
        self._save(papers)

        logger.info(f"Appended version {version.version_number} to paper {paper.id}")
        return paper

    def get_paper(self, paper_id: str) -> Paper | None:
        """Get paper by ID."""
        return next((p for p in self._load() if p.id == paper_id), None)

    def delete_paper(self, paper_id: str) -> None:
        """Delete a paper with all its versions. Unknown IDs are a no-op."""
        papers = self._load()
        remaining = [p for p in papers if p.id != paper_id]

        if len(remaining) == len(papers):
            return

        self._save(remaining)
        logger.info(f"Deleted paper {paper_id}")

    def ping(self) -> bool:
        """Check that the underlying key-value backend is reachable."""
        return self._kv.ping()
