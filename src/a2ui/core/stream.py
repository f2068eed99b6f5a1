"""Newline-delimited message framing for streamed payloads."""

from dataclasses import dataclass, field


@dataclass
class LineBuffer:
    """Accumulates transport chunks and releases complete lines."""

    max_line_size: int = 1_048_576
    _buffer: bytearray = field(default_factory=bytearray, init=False, repr=False)
    dropped: int = field(default=0, init=False)

    def add(self, chunk: bytes | str) -> list[bytes]:
        """Add a chunk, return every line it completed (blank lines skipped)."""
        if isinstance(chunk, str):
            # lone surrogates survive framing and fail to decode per line
            chunk = chunk.encode("utf-8", "surrogatepass")
        self._buffer.extend(chunk)

        lines: list[bytes] = []
        while (newline := self._buffer.find(b"\n")) != -1:
            line = bytes(self._buffer[:newline]).strip()
            del self._buffer[: newline + 1]
            if line:
                lines.append(line)

        # An unterminated line that outgrows the limit can never decode
        if len(self._buffer) > self.max_line_size:
            self._buffer.clear()
            self.dropped += 1
        return lines

    def flush(self) -> bytes | None:
        """Return the trailing unterminated line, if any."""
        line = bytes(self._buffer).strip()
        self._buffer.clear()
        return line or None

    @property
    def pending(self) -> int:
        """Bytes waiting for a newline."""
        return len(self._buffer)


@dataclass
class StreamCounter:
    """Track framed message statistics."""

    count: int = 0
    size: int = 0

    def track(self, line: bytes) -> None:
        """Record line."""
        self.count += 1
        self.size += len(line)

    def reset(self) -> tuple[int, int]:
        """Reset and return counts."""
        result = (self.count, self.size)
        self.count = 0
        self.size = 0
        return result
