"""Line history and the per-session browsing cursor."""

from __future__ import annotations

from typing import Iterator, Protocol, runtime_checkable


@runtime_checkable
class History(Protocol):
    """Append-only log of accepted lines, addressed by a stable index."""

    def get(self, index: int) -> str | None:
        """Return the entry at *index*, or ``None`` if there is none."""
        ...

    def last(self) -> int | None:
        """Return the index of the most recent entry, or ``None`` when empty."""
        ...


class BasicHistory:
    """In-memory history.

    Adding a line identical to the most recent entry is ignored.
    """

    def __init__(self, entries: list[str] | None = None) -> None:
        self._entries: list[str] = []
        for entry in entries or []:
            self.add(entry)

    def add(self, line: str) -> None:
        if self._entries and self._entries[-1] == line:
            return
        self._entries.append(line)

    def get(self, index: int) -> str | None:
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return None

    def last(self) -> int | None:
        return len(self._entries) - 1 if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)


class HistoryNavigator:
    """Tracks where the user is while browsing history.

    ``bottom_line`` holds the line as it stood before browsing began so that
    moving past the newest entry brings it back.
    """

    def __init__(self) -> None:
        self.history_pos: int | None = None
        self.bottom_line: str | None = None

    @property
    def browsing(self) -> bool:
        return self.history_pos is not None

    def reset(self) -> None:
        self.history_pos = None
        self.bottom_line = None

    def previous(self, history: History, current_line: str) -> str | None:
        """Step to an older entry.

        Returns the line to show, or ``None`` when nothing changes.
        """
        if self.history_pos is not None:
            prior_idx = max(self.history_pos - 1, 0)
            prior = history.get(prior_idx)
            if prior is None:
                return None
            self.history_pos = prior_idx
            return prior

        last = history.last()
        if last is None:
            return None
        entry = history.get(last)
        if entry is None:
            raise LookupError(f"History.last() returned {last} but get({last}) is empty")
        self.bottom_line = current_line
        self.history_pos = last
        return entry

    def next(self, history: History) -> str | None:
        """Step to a newer entry, or back to the stashed line past the newest.

        Returns the line to show, or ``None`` when not browsing.
        """
        if self.history_pos is None:
            return None

        next_idx = self.history_pos + 1
        entry = history.get(next_idx)
        if entry is not None:
            self.history_pos = next_idx
            return entry

        bottom = self.bottom_line if self.bottom_line is not None else ""
        self.reset()
        return bottom
