"""Read a byte stream into memory under a hard size ceiling."""

from typing import BinaryIO, Type

from workrobot.errors import ImageTooLarge, WorkRobotError

MAX_IMAGE_FILE_SIZE = 2 * 1024 * 1024  # 2M


class BoundedReader:
    """Growable buffer ingestion with a hard upper bound.

    The buffer starts at ``ceiling // 16`` bytes and doubles every time it
    fills up, but never grows past ``ceiling + 1`` bytes: holding one byte
    more than the ceiling is enough to prove the stream is too large.

    ``capacity`` and ``filled`` describe the buffer of the read in progress
    and drop back to zero once it returns or fails. On overflow the buffer
    is discarded and ``error`` is raised, so a caller never sees a partial
    result. Errors raised by the stream itself propagate unchanged.

    Streams must be blocking binary file objects: an empty read is end of
    stream. A non-blocking stream with nothing ready (a read returning
    None) raises BlockingIOError rather than ending the read early.
    """

    def __init__(
        self,
        ceiling: int = MAX_IMAGE_FILE_SIZE,
        error: Type[WorkRobotError] = ImageTooLarge,
    ):
        if ceiling < 0:
            raise ValueError("ceiling must not be negative")
        self.ceiling = ceiling
        self.error = error
        self.capacity = 0
        self.filled = 0

    def read(self, stream: BinaryIO) -> bytes:
        buf = bytearray(max(self.ceiling // 16, 1))
        self.capacity, self.filled = len(buf), 0
        try:
            while True:
                n = self._read_into(stream, buf)
                if not n:
                    return bytes(memoryview(buf)[: self.filled])

                self.filled += n
                if self.filled > self.ceiling:
                    break

                if self.filled == self.capacity:
                    grown = bytearray(min(self.capacity * 2, self.ceiling + 1))
                    grown[: self.filled] = memoryview(buf)[: self.filled]
                    buf = grown
                    self.capacity = len(buf)
        finally:
            self.capacity = self.filled = 0

        del buf
        raise self.error(f"stream exceeds {self.ceiling} bytes")

    def _read_into(self, stream: BinaryIO, buf: bytearray) -> int:
        readinto = getattr(stream, "readinto", None)
        if readinto is not None:
            n = readinto(memoryview(buf)[self.filled :])
        else:
            chunk = stream.read(self.capacity - self.filled)
            n = None if chunk is None else _copy_chunk(chunk, buf, self.filled)
        if n is None:
            raise BlockingIOError("stream has no data ready; a blocking stream is required")
        return n


def _copy_chunk(chunk, buf: bytearray, offset: int) -> int:
    if not chunk:
        return 0
    if not isinstance(chunk, (bytes, bytearray)):
        raise TypeError(f"expected a binary stream, got {type(chunk).__name__} data")
    buf[offset : offset + len(chunk)] = chunk
    return len(chunk)


def read_bounded(stream: BinaryIO, ceiling: int = MAX_IMAGE_FILE_SIZE) -> bytes:
    """Read ``stream`` to the end, raising ImageTooLarge past ``ceiling`` bytes."""
    return BoundedReader(ceiling).read(stream)
