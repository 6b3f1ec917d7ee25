"""Output sinks for rendered text.

Quiet mode swaps the emitting sink for a discarding one up front; nothing
downstream checks the quiet flag.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Protocol, TextIO


class OutputSink(Protocol):
    """Destination for rendered output lines."""

    def write(self, text: str = "") -> None:
        """Write ``text`` followed by a newline."""
        ...


@dataclass
class StreamSink:
    """Sink writing to a text stream, ``sys.stdout`` by default."""

    stream: TextIO | None = None

    def write(self, text: str = "") -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(f"{text}\n")


class NullSink:
    """Sink that discards everything."""

    def write(self, text: str = "") -> None:
        _ = text


def select_sink(*, quiet: bool, stream: TextIO | None = None) -> OutputSink:
    """Return the discarding sink in quiet mode, otherwise a stream sink."""
    if quiet:
        return NullSink()
    return StreamSink(stream)


__all__ = ["NullSink", "OutputSink", "StreamSink", "select_sink"]
