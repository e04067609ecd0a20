"""Append-only storage for the scheme text a ColorScheme has ingested."""

from dataclasses import dataclass
from typing import List, Optional

__all__ = ["SourceSpan", "SourceBuffer"]


@dataclass(frozen=True)
class SourceSpan:
    """Stable reference to a slice of one ingested chunk."""

    chunk: int
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


class SourceBuffer:
    """Sequence of immutable text chunks, one per ingested fragment.

    Chunks are only ever appended. A span handed out for an earlier chunk keeps
    resolving to the same text no matter how much is appended afterwards.
    """

    def __init__(self) -> None:
        self._chunks: List[str] = []
        self._labels: List[Optional[str]] = []

    def append(self, text: str, label: Optional[str] = None) -> SourceSpan:
        """Store a fragment and return the span covering all of it."""
        self._chunks.append(text)
        self._labels.append(label)
        return SourceSpan(len(self._chunks) - 1, 0, len(text))

    def text(self, span: SourceSpan) -> str:
        return self._chunks[span.chunk][span.start : span.end]

    def label(self, index: int) -> Optional[str]:
        return self._labels[index]

    def getvalue(self) -> str:
        """Concatenation of every chunk in ingestion order."""
        return "".join(self._chunks)

    def __len__(self) -> int:
        return len(self._chunks)
