"""Host callbacks consumed by the line editor.

The host decides how the prompt and line look, which completions exist and
where history lives. :class:`NopLineEditorHost` is a plain default suitable
for headless use and tests.
"""

from __future__ import annotations

from typing import Iterable, Protocol, Sequence, Union, runtime_checkable

from pi.lineedit.completion import CompletionCandidate
from pi.lineedit.history import BasicHistory, History
from pi.lineedit.surface import Attribute, Text
from pi.lineedit.utils import column_width, is_whitespace_char

OutputElement = Union[Text, Attribute]


@runtime_checkable
class LineEditorHost(Protocol):
    """Interface the editor calls back into while reading a line."""

    def render_prompt(self, prompt: str) -> Sequence[OutputElement]:
        """Return the styled elements that make up the prompt."""
        ...

    def highlight_line(self, line: str, cursor: int) -> tuple[Sequence[OutputElement], int]:
        """Return the styled line and the display column of the cursor within it."""
        ...

    def complete(self, line: str, cursor: int) -> Sequence[CompletionCandidate]:
        """Return completion candidates for *line* at *cursor*."""
        ...

    def history(self) -> History:
        ...


class NopLineEditorHost:
    """Unstyled prompt and line, no completion, in-memory history."""

    def __init__(self, history: BasicHistory | None = None) -> None:
        self._history = history if history is not None else BasicHistory()

    def render_prompt(self, prompt: str) -> list[OutputElement]:
        return [Text(prompt)]

    def highlight_line(self, line: str, cursor: int) -> tuple[list[OutputElement], int]:
        return [Text(line)], column_width(line[:cursor])

    def complete(self, line: str, cursor: int) -> list[CompletionCandidate]:
        return []

    def history(self) -> BasicHistory:
        return self._history


class CommandCompletionHost(NopLineEditorHost):
    """Completes the word before the cursor from a fixed vocabulary.

    Candidates are the vocabulary words that start with the partial word,
    in sorted order.
    """

    def __init__(
        self,
        words: Iterable[str],
        history: BasicHistory | None = None,
        *,
        prompt_sgr: str | None = "1",
    ) -> None:
        super().__init__(history)
        self.words: list[str] = sorted(set(words))
        self.prompt_sgr = prompt_sgr

    def render_prompt(self, prompt: str) -> list[OutputElement]:
        if self.prompt_sgr is None:
            return [Text(prompt)]
        return [Attribute(self.prompt_sgr), Text(prompt)]

    def complete(self, line: str, cursor: int) -> list[CompletionCandidate]:
        start = cursor
        while start > 0 and not is_whitespace_char(line[start - 1]):
            start -= 1
        partial = line[start:cursor]
        if not partial:
            return []
        return [
            CompletionCandidate(range(start, cursor), word)
            for word in self.words
            if word.startswith(partial) and word != partial
        ]
