"""Inline formatter - flat bold/italic runs for a single line."""

import re

from scholargen.models.blocks import StyledRun

# Bold is tried first so "**x**" is never read as two empty italics.
_EMPHASIS_RE = re.compile(r"(\*\*.*?\*\*|\*.*?\*)")


def format_inline(text: str) -> list[StyledRun]:
    """Split text into plain, bold and italic runs.

    Pure and total: never raises. Emphasis does not nest and asterisks are
    not escapable, so an unbalanced marker stays in a plain run verbatim.
    A matched span with nothing between its markers (e.g. a stray ``**``)
    becomes an empty bold or italic run.

    Args:
        text: One line of markup (heading remainder, list item, cell, ...)

    Returns:
        Runs in source order; adjacent plain fragments are merged and empty
        fragments dropped.
    """
    runs: list[StyledRun] = []

    # re.split with a capturing group alternates unmatched/matched fragments
    for position, fragment in enumerate(_EMPHASIS_RE.split(text)):
        if not fragment:
            continue

        matched = position % 2 == 1
        run = _classify_fragment(fragment) if matched else StyledRun(text=fragment)

        if run.kind == "plain" and runs and runs[-1].kind == "plain":
            runs[-1] = StyledRun(text=runs[-1].text + run.text)
        else:
            runs.append(run)

    return runs


def _classify_fragment(fragment: str) -> StyledRun:
    """Turn a matched emphasis span into a run with its markers stripped."""
    if fragment.startswith("**") and fragment.endswith("**"):
        return StyledRun(kind="bold", text=fragment[2:-2])
    if fragment.startswith("*") and fragment.endswith("*"):
        return StyledRun(kind="italic", text=fragment[1:-1])
    return StyledRun(text=fragment)


def plain_text(runs: list[StyledRun]) -> str:
    """Concatenate run texts without markers."""
    return "".join(run.text for run in runs)
