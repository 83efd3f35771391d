from typing import Callable, List, Union

from bufparse import Done, Failed, Incomplete

Chunk = Union[bytes, BaseException]


class ChunkReader:
    """File-like object handing out scripted chunks, one per read call."""

    def __init__(self, chunks: List[Chunk]) -> None:
        self.chunks = list(chunks)
        self.reads = 0

    def _next(self, size: int) -> bytes:
        self.reads += 1
        if not self.chunks:
            return b""
        chunk = self.chunks.pop(0)
        if isinstance(chunk, BaseException):
            raise chunk
        if len(chunk) > size:
            self.chunks.insert(0, chunk[size:])
            chunk = chunk[:size]
        return chunk

    def readinto(self, view: memoryview) -> int:
        chunk = self._next(len(view))
        view[: len(chunk)] = chunk
        return len(chunk)


class AsyncChunkReader(ChunkReader):
    """Coroutine-based counterpart of ChunkReader, shaped like a StreamReader."""

    async def read(self, n: int) -> bytes:
        return self._next(n)


def fixed_parser(size: int) -> Callable[[memoryview], object]:
    """Parser for units of exactly `size` bytes."""

    def parse(window: memoryview) -> object:
        if len(window) < size:
            return Incomplete(size - len(window))
        return Done(bytes(window[:size]), size)

    return parse


def token_parser(window: memoryview) -> object:
    """Parser for an upper-case token followed by a single space."""

    data = bytes(window)
    for i, byte in enumerate(data):
        if byte == 0x20:
            if i == 0:
                return Failed("empty token")
            return Done(data[:i].decode("ascii"), i + 1)
        if not 0x41 <= byte <= 0x5A:
            return Failed("unexpected byte 0x%02X at offset %d" % (byte, i))
    return Incomplete()
