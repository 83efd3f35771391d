import asyncio
import logging

from .common import *
from .Exceptions import *

logger = logging.getLogger(__name__)

class Source:
    """Base class for blocking byte sources.

    A source knows how to perform exactly one read into the free space at the
    end of a GrowableBuffer. It holds no buffering state of its own; that all
    lives in the buffer owned by the parser session.

    This class should not be used directly, but rather used as a base for child
    classes that wrap specific transports. As a minimum, a child class must
    implement the `fill_more()` method."""

    def __str__(self):
        return "unidentified source"

    def fill_more(self, buffer) -> int:
        """Reads more bytes into the free space of a buffer.

        :param buffer: Buffer to read into, already prepared by `make_room()`
        :type buffer: GrowableBuffer

        :returns: Number of bytes written, or 0 at end of input
        :rtype: int

        Implementations block until at least one byte is available, the source
        is exhausted, or an I/O error occurs. I/O errors propagate unchanged.
        The caller is responsible for calling `buffer.commit_write()` with the
        returned count."""

        # child class must implement
        raise BufparseHalException("Child class has not implemented fill_more() method, cannot use base class stub")

class AsyncSource:
    """Base class for cooperatively-suspending byte sources.

    This is the asyncio counterpart of Source. The contract of `fill_more()`
    is identical, except that it is a coroutine and the calling task is
    suspended (instead of the thread being blocked) while the read is
    pending."""

    def __str__(self):
        return "unidentified async source"

    async def fill_more(self, buffer) -> int:
        """Reads more bytes into the free space of a buffer.

        :param buffer: Buffer to read into, already prepared by `make_room()`
        :type buffer: GrowableBuffer

        :returns: Number of bytes written, or 0 at end of input
        :rtype: int"""

        # child class must implement
        raise BufparseHalException("Child class has not implemented fill_more() method, cannot use base class stub")

class FileSource(Source):
    """Blocking source for file-like objects supporting `readinto()`.

    This covers raw and buffered files, pipes, `io.BytesIO`, and sockets
    wrapped with `makefile("rb")`. Buffered objects are read with
    `readinto1()` when they have it, so that a single read never waits for the
    whole free space to fill up."""

    def __init__(self, fileobj):
        """Creates a new file source.

        :param fileobj: Readable binary file object
        """

        self.fileobj = fileobj

        # these attributes are intended to be private
        self._readinto = getattr(fileobj, "readinto1", None) or fileobj.readinto

    def __str__(self):
        return str(getattr(self.fileobj, "name", "unnamed file"))

    def fill_more(self, buffer) -> int:
        with buffer.writable() as view:
            count = self._readinto(view)

        if count is None:
            # non-blocking file object with nothing to read yet
            raise BlockingIOError("File object %s returned no data without blocking" % self)

        return count

class SocketSource(Source):
    """Blocking source for a connected stream socket."""

    def __init__(self, sock):
        """Creates a new socket source.

        :param sock: Connected socket, in blocking mode (or with a timeout)
        :type sock: socket.socket
        """

        self.sock = sock

    def __str__(self):
        try:
            return "socket %s" % (self.sock.getpeername(),)
        except OSError:
            return "unconnected socket"

    def fill_more(self, buffer) -> int:
        with buffer.writable() as view:
            return self.sock.recv_into(view)

class StreamReaderSource(AsyncSource):
    """Suspending source for an `asyncio.StreamReader`.

    Any object with a coroutine `read(n)` method that returns `b""` at end of
    input works here. Since such readers hand back a new bytes object, the
    chunk is copied into the buffer."""

    def __init__(self, reader):
        """Creates a new stream reader source.

        :param reader: Reader to pull data from
        :type reader: asyncio.StreamReader
        """

        self.reader = reader

    def __str__(self):
        return "stream reader %s" % (self.reader,)

    async def fill_more(self, buffer) -> int:
        with buffer.writable() as view:
            data = await self.reader.read(len(view))
            view[:len(data)] = data

        return len(data)

class AsyncSocketSource(AsyncSource):
    """Suspending source for a non-blocking stream socket.

    Reads go straight into the buffer through the running event loop's
    `sock_recv_into()`, so no copy is made."""

    def __init__(self, sock):
        """Creates a new async socket source.

        :param sock: Connected socket; it is switched to non-blocking mode
        :type sock: socket.socket
        """

        self.sock = sock
        self.sock.setblocking(False)

    def __str__(self):
        try:
            return "async socket %s" % (self.sock.getpeername(),)
        except OSError:
            return "unconnected async socket"

    async def fill_more(self, buffer) -> int:
        loop = asyncio.get_running_loop()
        with buffer.writable() as view:
            return await loop.sock_recv_into(self.sock, view)
