"""Text utilities: grapheme boundaries and terminal column widths.

Cursor positions are indices into a Python ``str``. Grapheme boundaries are
derived from the whole line with :mod:`grapheme` so that a cursor left inside
a cluster (for example after a paste) still finds the right neighbours.
"""

from __future__ import annotations

import functools
import unicodedata

import grapheme
import wcwidth


# ---------------------------------------------------------------------------
# Grapheme boundaries
# ---------------------------------------------------------------------------


def grapheme_boundaries(text: str) -> list[int]:
    """Return every grapheme cluster boundary of *text*, including 0 and ``len(text)``."""
    boundaries = [0]
    offset = 0
    for g in grapheme.graphemes(text):
        offset += len(g)
        boundaries.append(offset)
    return boundaries


def next_grapheme_boundary(text: str, pos: int) -> int | None:
    """Return the first boundary strictly after *pos*, or ``None`` at the end."""
    for boundary in grapheme_boundaries(text):
        if boundary > pos:
            return boundary
    return None


def prev_grapheme_boundary(text: str, pos: int) -> int | None:
    """Return the last boundary strictly before *pos*, or ``None`` at the start."""
    found: int | None = None
    for boundary in grapheme_boundaries(text):
        if boundary >= pos:
            break
        found = boundary
    return found


# ---------------------------------------------------------------------------
# Column width
# ---------------------------------------------------------------------------

# Code points that make a multi-character cluster render as a wide emoji
_EMOJI_MARKERS = (
    (0x200D, 0x200D),  # zero width joiner
    (0xFE0F, 0xFE0F),  # emoji presentation selector
    (0x1F1E6, 0x1F1FF),  # regional indicators (flags)
    (0x1F3FB, 0x1F3FF),  # skin tone modifiers
)


def _is_emoji_cluster(cluster: str) -> bool:
    if ord(cluster[0]) >= 0x1F000:
        return True
    return any(lo <= ord(ch) <= hi for ch in cluster for lo, hi in _EMOJI_MARKERS)


def _cluster_width(cluster: str) -> int:
    if len(cluster) > 1 and _is_emoji_cluster(cluster):
        return 2
    category = unicodedata.category(cluster[0])
    if category in ("Cc", "Cf") or category.startswith("M"):
        return 0
    return max(wcwidth.wcwidth(cluster[0]), 0)


@functools.lru_cache(maxsize=512)
def _measure(text: str) -> int:
    return sum(_cluster_width(cluster) for cluster in grapheme.graphemes(text))


def column_width(text: str) -> int:
    """Return the number of terminal columns *text* occupies."""
    if text.isascii() and text.isprintable():
        return len(text)
    return _measure(text)


def is_whitespace_char(char: str) -> bool:
    return char.isspace()
