"""Repository protocol interfaces for data access."""

from typing import Protocol

from scholargen.models.paper import Paper


class KeyValueStore(Protocol):
    """Durable string store addressed by key.

    The paper collection lives under one fixed key; ``set`` replaces the
    whole record.
    """

    def get(self, key: str) -> str | None:
        """Get the stored value.

        Args:
            key: Record key

        Returns:
            Stored string or None if absent
        """
        ...

    def set(self, key: str, value: str) -> None:
        """Replace the stored value.

        Args:
            key: Record key
            value: Serialized record
        """
        ...

    def ping(self) -> bool:
        """Check that the backend is reachable."""
        ...


class PaperRepository(Protocol):
    """Repository for versioned paper operations.

    Assumes a single writer: every mutation reads, modifies and rewrites the
    full collection, so concurrent writers can overwrite each other.
    """

    def list_papers(self) -> list[Paper]:
        """List papers, most recently updated first."""
        ...

    def create_paper(self, topic: str, overview: str, content: str) -> Paper:
        """Create a paper with version 1.

        Args:
            topic: Paper topic
            overview: Seed overview
            content: Full text of version 1

        Returns:
            Created paper
        """
        ...

    def append_version(self, paper_id: str, content: str) -> Paper | None:
        """Append a version and move the paper to the front.

        Args:
            paper_id: Paper ID
            content: Full text of the new version

        Returns:
            Updated paper or None if not found
        """
        ...

    def get_paper(self, paper_id: str) -> Paper | None:
        """Get paper by ID.

        Args:
            paper_id: Paper ID

        Returns:
            Paper or None if not found
        """
        ...

    def delete_paper(self, paper_id: str) -> None:
        """Delete a paper and all its versions; unknown IDs are ignored.

        Args:
            paper_id: Paper ID
        """
        ...
