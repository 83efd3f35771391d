import asyncio
import socket
from typing import Callable, List

import pytest

from bufparse import (
    AsyncBufferedParser,
    AsyncSocketSource,
    AsyncSource,
    BufparseContractException,
    BufparseEofException,
    BufparseHalException,
    BufparseParserException,
    BufparseSourceException,
    GrowableBuffer,
    ParseStatus,
    StreamReaderSource,
)
from helpers import fixed_parser, token_parser


class GatedSource(AsyncSource):
    """Source that only delivers a chunk once the test releases it."""

    def __init__(self) -> None:
        self.chunks: asyncio.Queue = asyncio.Queue()
        self.reads = 0

    async def fill_more(self, buffer: GrowableBuffer) -> int:
        self.reads += 1
        chunk = await self.chunks.get()
        view = buffer.writable()
        view[: len(chunk)] = chunk
        return len(chunk)


@pytest.mark.asyncio
async def test_token_split_across_reads(async_chunk_source: Callable[..., StreamReaderSource]) -> None:
    source = async_chunk_source(b"GET", b" /x\r\n")
    session = AsyncBufferedParser(source)

    assert await session.parse(token_parser) == "GET"
    assert source.reader.reads == 2
    assert session.buffered == len(b"/x\r\n")


@pytest.mark.asyncio
async def test_eof_while_incomplete(async_chunk_source: Callable[..., StreamReaderSource]) -> None:
    session = AsyncBufferedParser(async_chunk_source(b"AB"))

    with pytest.raises(BufparseEofException) as excinfo:
        await session.parse(fixed_parser(3))

    assert excinfo.value.pending == 2
    assert session.status == ParseStatus.FAILED_EOF


@pytest.mark.asyncio
async def test_parser_failure_is_not_retried(async_chunk_source: Callable[..., StreamReaderSource]) -> None:
    source = async_chunk_source(b"xYZ", b"more")
    session = AsyncBufferedParser(source)

    with pytest.raises(BufparseParserException):
        await session.parse(token_parser)

    assert source.reader.reads == 1


@pytest.mark.asyncio
async def test_back_to_back_units_reuse_buffered_bytes(async_chunk_source: Callable[..., StreamReaderSource]) -> None:
    source = async_chunk_source(b"AABB")
    session = AsyncBufferedParser(source)

    assert await session.parse(fixed_parser(2)) == b"AA"
    assert await session.parse(fixed_parser(2)) == b"BB"
    assert source.reader.reads == 1


@pytest.mark.asyncio
async def test_source_error_is_wrapped(async_chunk_source: Callable[..., StreamReaderSource]) -> None:
    error = BrokenPipeError("gone")
    session = AsyncBufferedParser(async_chunk_source(b"A", error))

    with pytest.raises(BufparseSourceException) as excinfo:
        await session.parse(fixed_parser(2))

    assert excinfo.value.error is error
    assert session.status == ParseStatus.FAILED_IO


@pytest.mark.asyncio
async def test_parse_all(async_chunk_source: Callable[..., StreamReaderSource]) -> None:
    session = AsyncBufferedParser(async_chunk_source(b"G", b"ET PO", b"ST "), initial_capacity=2, read_size=2)
    units = [unit async for unit in session.parse_all(token_parser)]
    assert units == ["GET", "POST"]


@pytest.mark.asyncio
async def test_parse_all_raises_on_truncated_unit(async_chunk_source: Callable[..., StreamReaderSource]) -> None:
    session = AsyncBufferedParser(async_chunk_source(b"GET PO"))
    units: List[str] = []

    with pytest.raises(BufparseEofException) as excinfo:
        async for unit in session.parse_all(token_parser):
            units.append(unit)

    assert units == ["GET"]
    assert excinfo.value.pending == 2


@pytest.mark.asyncio
async def test_cancelled_refill_leaves_session_reusable() -> None:
    source = GatedSource()
    session = AsyncBufferedParser(source)

    source.chunks.put_nowait(b"A")
    task = asyncio.ensure_future(session.parse(fixed_parser(2)))
    while source.reads < 2:
        await asyncio.sleep(0)

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert session.is_parsing is False
    assert session.buffered == 1

    source.chunks.put_nowait(b"B")
    assert await session.parse(fixed_parser(2)) == b"AB"


@pytest.mark.asyncio
async def test_concurrent_parse_is_rejected() -> None:
    source = GatedSource()
    session = AsyncBufferedParser(source)

    first = asyncio.ensure_future(session.parse(fixed_parser(1)))
    while source.reads < 1:
        await asyncio.sleep(0)

    with pytest.raises(BufparseContractException):
        await session.parse(fixed_parser(1))

    source.chunks.put_nowait(b"Z")
    assert await first == b"Z"


@pytest.mark.asyncio
async def test_timeout_belongs_to_caller() -> None:
    source = GatedSource()
    session = AsyncBufferedParser(source)

    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(session.parse(fixed_parser(1)), timeout=0.01)

    assert session.status == ParseStatus.REFILLING
    assert session.is_parsing is False


@pytest.mark.asyncio
async def test_stream_reader_source() -> None:
    reader = asyncio.StreamReader()
    session = AsyncBufferedParser(StreamReaderSource(reader))

    reader.feed_data(b"HEL")
    parsing = asyncio.ensure_future(session.parse(token_parser))
    await asyncio.sleep(0)
    assert not parsing.done()

    reader.feed_data(b"LO WORLD")
    reader.feed_eof()
    assert await parsing == "HELLO"

    with pytest.raises(BufparseEofException) as excinfo:
        await session.parse(token_parser)
    assert excinfo.value.pending == len(b"WORLD")


@pytest.mark.asyncio
async def test_async_socket_source() -> None:
    left, right = socket.socketpair()
    try:
        session = AsyncBufferedParser(AsyncSocketSource(right))
        left.sendall(b"PING PONG ")
        left.shutdown(socket.SHUT_WR)

        units = [unit async for unit in session.parse_all(token_parser)]
        assert units == ["PING", "PONG"]
    finally:
        left.close()
        right.close()


@pytest.mark.asyncio
async def test_base_source_is_a_stub() -> None:
    session = AsyncBufferedParser(AsyncSource())
    with pytest.raises(BufparseHalException):
        await session.parse(fixed_parser(1))
