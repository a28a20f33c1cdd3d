"""Document segmenter - split raw text around fenced mermaid blocks."""

import re

from scholargen.models.blocks import Segment

DIAGRAM_LANGUAGE = "mermaid"

# Opening and closing fences sit on their own lines. An opening fence with
# no closing fence never matches, so it stays in the surrounding text.
# Lines may end in CRLF.
_DIAGRAM_FENCE_RE = re.compile(
    r"^[ \t]*```" + DIAGRAM_LANGUAGE + r"[ \t]*\r?\n(.*?)^[ \t]*```[ \t]*\r?$",
    re.MULTILINE | re.DOTALL,
)


def segment_document(raw: str) -> list[Segment]:
    """Split a raw document into ordered text and diagram segments.

    Text between fences is kept verbatim (zero-length spans are skipped).
    Diagram content is the fence interior with surrounding whitespace
    trimmed. A document without fences is one text segment equal to the
    input.

    Args:
        raw: Full document text

    Returns:
        Segments in original order, indexed from 0
    """
    segments: list[Segment] = []
    last_end = 0

    def emit(kind: str, content: str) -> None:
        segments.append(Segment(kind=kind, content=content, index=len(segments)))

    for match in _DIAGRAM_FENCE_RE.finditer(raw):
        if match.start() > last_end:
            emit("text", raw[last_end : match.start()])
        emit("diagram", match.group(1).strip())
        last_end = match.end()

    if last_end < len(raw):
        emit("text", raw[last_end:])

    return segments
