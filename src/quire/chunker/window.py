# src/quire/chunker/window.py
"""Sliding-window chunker that prefers sentence boundaries."""

from quire.chunker.base import Chunker, TextSpan

SENTENCE_TERMINATORS = (".", "?", "!")


class SentenceWindowChunker(Chunker):
    """Chunker that slides a fixed-size window over the text.

    Each window is at most chunk_size characters (plus the terminator when a
    sentence ends exactly on the cut). When the window does not reach the end
    of the text, its end is snapped to just after the right-most sentence
    terminator, provided that terminator lies in the second half of the
    window; otherwise the window is cut hard. The next window starts
    chunk_size - chunk_overlap characters after the previous start, but never
    past the previous end, so consecutive windows leave no gaps.

    Chunks are stripped of surrounding whitespace and empty ones are dropped.
    Offsets refer to the stripped content.

    The output depends only on the text and the two sizes, so re-chunking the
    same text always reproduces the same chunk list.
    """

    def __init__(self, chunk_size: int = 1000, chunk_overlap: int = 200) -> None:
        """Initialize the chunker.

        Args:
            chunk_size: Target window size in characters. Must be positive.
            chunk_overlap: Characters shared by consecutive windows.
                Must satisfy 0 <= chunk_overlap < chunk_size.

        Raises:
            ValueError: If the sizes are out of range.
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if not 0 <= chunk_overlap < chunk_size:
            raise ValueError(
                f"chunk_overlap must be in [0, chunk_size), got {chunk_overlap} "
                f"with chunk_size={chunk_size}"
            )
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    @property
    def stride(self) -> int:
        return self.chunk_size - self.chunk_overlap

    def chunk(self, text: str) -> list[TextSpan]:
        """Split text into ordered, overlapping chunks."""
        spans: list[TextSpan] = []
        length = len(text)
        cursor = 0

        while cursor < length:
            end = min(cursor + self.chunk_size, length)
            if end < length:
                boundary = self._last_terminator(text, cursor, end)
                if boundary > cursor + self.chunk_size // 2:
                    end = boundary + 1

            self._append(spans, text, cursor, end)

            if end >= length:
                break
            cursor = min(cursor + self.stride, end)

        return spans

    @staticmethod
    def _last_terminator(text: str, start: int, end: int) -> int:
        """Position of the right-most terminator in text[start:end + 1], or -1."""
        return max(text.rfind(mark, start, end + 1) for mark in SENTENCE_TERMINATORS)

    @staticmethod
    def _append(spans: list[TextSpan], text: str, start: int, end: int) -> None:
        window = text[start:end]
        content = window.strip()
        if not content:
            return
        leading = len(window) - len(window.lstrip())
        chunk_start = start + leading
        spans.append(
            TextSpan(
                index=len(spans),
                content=content,
                start=chunk_start,
                end=chunk_start + len(content),
            )
        )
