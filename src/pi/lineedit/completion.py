"""Tab completion cycling.

Every step is computed from the line as it was when completion started, so
cycling through candidates never stacks one replacement on top of another.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CompletionCandidate:
    """Replace ``line[range.start:range.stop]`` with ``text``."""

    range: range
    text: str


@dataclass
class CompletionState:
    """Candidates offered by the host plus the pre-completion snapshot."""

    candidates: tuple[CompletionCandidate, ...]
    original_line: str
    original_cursor: int
    index: int = field(default=0)

    def __post_init__(self) -> None:
        self.candidates = tuple(self.candidates)
        if not self.candidates:
            raise ValueError("CompletionState requires at least one candidate")
        for candidate in self.candidates:
            r = candidate.range
            if r.step != 1 or not 0 <= r.start <= r.stop <= len(self.original_line):
                raise ValueError(
                    f"Completion range {r!r} is outside line of length {len(self.original_line)}"
                )
        self.index %= len(self.candidates)

    def next(self) -> None:
        """Advance to the next candidate, wrapping around."""
        self.index = (self.index + 1) % len(self.candidates)

    def at(self, index: int) -> tuple[str, int]:
        """Return ``(line, cursor)`` with candidate *index* applied to the snapshot."""
        candidate = self.candidates[index]
        r = candidate.range
        line = self.original_line[: r.start] + candidate.text + self.original_line[r.stop :]
        # "he<TAB>" completing to "hello" replaces "he" with "hello"; the
        # cursor moves by the difference in length.
        cursor = self.original_cursor + len(candidate.text) - len(r)
        return line, max(0, min(cursor, len(line)))

    def current(self) -> tuple[str, int]:
        return self.at(self.index)
