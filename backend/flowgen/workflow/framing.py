"""Reassemble arbitrarily chunked text into complete lines."""

from __future__ import annotations

LINE_SEPARATOR = "\n"


class LineFramer:
    """Buffer text fragments and release them line by line.

    Only the line feed character separates lines; a trailing ``\\r`` is left
    for the decoder to strip.
    """

    def __init__(self) -> None:
        self._buffer = ""

    @property
    def pending(self) -> str:
        return self._buffer

    def feed(self, fragment: str) -> list[str]:
        if not fragment:
            return []
        self._buffer += fragment
        *lines, self._buffer = self._buffer.split(LINE_SEPARATOR)
        return lines

    def flush(self) -> list[str]:
        """Return the residual partial line at end of input, if any."""

        residual, self._buffer = self._buffer, ""
        return [residual] if residual else []
