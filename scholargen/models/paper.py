"""Paper domain models.

Field aliases give the persisted record shape:
``{id, topic, overview, createdAt, updatedAt, versions: [{id, versionNumber, content, createdAt}]}``
with timestamps in epoch milliseconds.
"""

from pydantic import BaseModel, ConfigDict, Field


class PaperVersion(BaseModel):
    """Immutable, numbered snapshot of a paper's full content."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    version_number: int = Field(..., ge=1, alias="versionNumber")
    content: str
    created_at: int = Field(..., alias="createdAt")


class Paper(BaseModel):
    """Paper with its version chain (ordered by ascending version number)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    topic: str
    overview: str
    created_at: int = Field(..., alias="createdAt")
    updated_at: int = Field(..., alias="updatedAt")
    versions: list[PaperVersion] = Field(..., min_length=1)

    @property
    def latest_version(self) -> PaperVersion:
        """Most recently appended version."""
        return self.versions[-1]

    def get_version(self, version_number: int) -> PaperVersion | None:
        """Get a version by its 1-based number."""
        for version in self.versions:
            if version.version_number == version_number:
                return version
        return None


class PaperRequest(BaseModel):
    """Seed for generating a new paper."""

    topic: str = Field(..., min_length=1, max_length=500)
    overview: str = Field(..., min_length=1)
