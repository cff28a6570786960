# rawscreen/core/OutputChannel.py
"""OutputChannel.py
========================
A buffered byte sink in front of the real terminal output.

Drawing calls append to an in-memory buffer; nothing is guaranteed to reach the
terminal until `flush()` is called. When the pending data grows past
`buffer_size` it is written through early, so memory stays bounded during very
large paints.
"""

from __future__ import annotations

from typing import BinaryIO

DEFAULT_BUFFER_SIZE = 1024 * 1024


class OutputChannel:
    """Buffered wrapper around a binary stream such as ``sys.stdout.buffer``.

    Attributes:
        stream (BinaryIO): The underlying terminal stream.
        buffer_size (int): Pending-byte threshold that forces an early write.
    """

    def __init__(self, stream: BinaryIO, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        self.stream = stream
        self.buffer_size = max(1, int(buffer_size))
        self._pending = bytearray()
        self._unflushed = False

    @property
    def pending(self) -> int:
        """Number of bytes written but not yet handed to the stream."""
        return len(self._pending)

    def write(self, data: bytes) -> None:
        self._pending += data
        if len(self._pending) >= self.buffer_size:
            self._drain()

    def write_text(self, text: str) -> None:
        self.write(text.encode("utf-8", errors="replace"))

    def flush(self) -> None:
        """Hands pending bytes to the stream and flushes it.

        Flushing with nothing pending touches neither the stream nor the
        terminal, so repeated refreshes produce no extra output.
        """
        if self._pending:
            self._drain()
        if not self._unflushed:
            return
        self.stream.flush()
        self._unflushed = False

    def fileno(self) -> int:
        return self.stream.fileno()

    def _drain(self) -> None:
        data = bytes(self._pending)
        self._pending.clear()
        self.stream.write(data)
        self._unflushed = True
