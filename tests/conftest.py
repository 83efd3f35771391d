from typing import Callable

import pytest

from bufparse import FileSource, StreamReaderSource
from helpers import AsyncChunkReader, Chunk, ChunkReader


@pytest.fixture
def chunk_source() -> Callable[..., FileSource]:
    def make(*chunks: Chunk) -> FileSource:
        return FileSource(ChunkReader(list(chunks)))

    return make


@pytest.fixture
def async_chunk_source() -> Callable[..., StreamReaderSource]:
    def make(*chunks: Chunk) -> StreamReaderSource:
        return StreamReaderSource(AsyncChunkReader(list(chunks)))

    return make
