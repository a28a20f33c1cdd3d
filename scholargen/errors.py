"""Exception taxonomy.

Parsing never raises: malformed markup degrades into best-effort blocks.
Store misses are returned as ``None``. Only the two user-visible failure
kinds (content generation and diagram rendering) have exception types, plus
``PaperNotFoundError`` for callers that choose to surface a miss.
"""


class ScholarGenError(Exception):
    """Base class for application errors."""

    pass


class ContentGenerationError(ScholarGenError):
    """Text generation backend failed or returned nothing usable."""

    pass


class DiagramRenderError(ScholarGenError):
    """Diagram engine rejected the source or failed to render it."""

    pass


class EngineNotAvailableError(DiagramRenderError):
    """Diagram engine could not be reached (binary missing, network down)."""

    pass


class PaperNotFoundError(ScholarGenError):
    """Requested paper or version does not exist."""

    def __init__(self, paper_id: str, version_number: int | None = None) -> None:
        self.paper_id = paper_id
        self.version_number = version_number
        if version_number is None:
            message = f"paper {paper_id} not found"
        else:
            message = f"version {version_number} of paper {paper_id} not found"
        super().__init__(message)
