import logging

from .common import *
from .Exceptions import *

logger = logging.getLogger(__name__)

class GrowableBuffer:
    """Contiguous receive buffer with separate filled and consumed boundaries.

    Bytes between offset 0 and `consumed` have already been handed to a
    successful parse. Bytes between `consumed` and `filled` have been read from
    the source but not yet consumed; this range is the window shown to the
    parser. Everything from `filled` up to `capacity` is free space for the
    next read. At all times `0 <= consumed <= filled <= capacity`.

    Views returned by `window()` and `writable()` are only valid until the next
    call to `make_room()`, `commit_write()`, or `discard()`. Growth allocates a
    new backing array, so an old view never blocks it, but it will no longer
    reflect the buffer contents."""

    def __init__(self, capacity=DEFAULT_BUF_SIZE, max_capacity=None):
        """Creates a new empty buffer.

        :param capacity: Initial size of the backing storage in bytes
        :type capacity: int

        :param max_capacity: Upper limit for growth, or None for no limit
        :type max_capacity: int

        The buffer starts empty with both boundaries at zero. If a maximum is
        given, the initial capacity is clamped to it."""

        if max_capacity is not None:
            capacity = min(capacity, max_capacity)

        self.max_capacity = max_capacity

        # these attributes are intended to be private
        self._storage = bytearray(capacity)
        self._filled = 0
        self._consumed = 0
        self._position = 0

    def __len__(self):
        return self._filled - self._consumed

    def __str__(self):
        return "%d/%d" % (len(self), len(self._storage))

    @property
    def filled(self) -> int:
        return self._filled

    @property
    def consumed(self) -> int:
        return self._consumed

    @property
    def capacity(self) -> int:
        return len(self._storage)

    @property
    def position(self) -> int:
        """Total number of bytes consumed over the life of the buffer.

        Unlike `consumed`, which drops back to zero on compaction, this offset
        into the stream only ever increases."""

        return self._position

    def window(self) -> memoryview:
        """Returns a read-only view of the unconsumed bytes.

        :returns: View of the range `[consumed, filled)`
        :rtype: memoryview

        No bytes are copied. Release the view (or let it go) before relying on
        the buffer again; it is invalid after the buffer next changes."""

        return memoryview(self._storage)[self._consumed:self._filled].toreadonly()

    def writable(self) -> memoryview:
        """Returns a writable view of the free space after `filled`.

        :returns: View of the range `[filled, capacity)`
        :rtype: memoryview

        Sources read directly into this view, then the number of bytes written
        is recorded with `commit_write()`."""

        return memoryview(self._storage)[self._filled:]

    def advance(self, n) -> None:
        """Marks bytes at the start of the window as consumed.

        :param n: Number of bytes to retire
        :type n: int

        Advancing past the end of the window means whoever computed `n` (the
        parser) broke its contract, so this raises BufparseContractException
        rather than a normal parse error."""

        if n < 0 or n > self._filled - self._consumed:
            raise BufparseContractException("Cannot advance %d byte(s), only %d unconsumed" % (n, self._filled - self._consumed))

        self._consumed += n
        self._position += n

    def make_room(self, min_extra) -> int:
        """Ensures there is free space after `filled`.

        :param min_extra: Minimum number of free bytes wanted
        :type min_extra: int

        :returns: Number of free bytes now available
        :rtype: int

        Unconsumed bytes are first shifted down to offset 0 if anything has
        been consumed. If that still leaves too little space, the storage is
        reallocated to twice its size, or to exactly the needed size if that is
        larger. With a maximum capacity configured, the request is clamped to
        whatever space the maximum allows, and BufparseBufferFullException is
        raised only if no free space at all can be made."""

        min_extra = max(min_extra, 1)

        if len(self._storage) - self._filled >= min_extra:
            return len(self._storage) - self._filled

        if self._consumed > 0:
            self._compact()

        free = len(self._storage) - self._filled
        if free >= min_extra:
            return free

        needed = self._filled + min_extra
        new_capacity = max(len(self._storage) * 2, needed)
        if self.max_capacity is not None:
            new_capacity = min(new_capacity, self.max_capacity)

        if new_capacity > len(self._storage):
            self._grow(new_capacity)
        elif free == 0:
            raise BufparseBufferFullException(len(self._storage))

        return len(self._storage) - self._filled

    def commit_write(self, n) -> None:
        """Records bytes written into the free space by a source.

        :param n: Number of bytes just written after `filled`
        :type n: int"""

        if n < 0 or self._filled + n > len(self._storage):
            raise BufparseContractException("Cannot commit %d byte(s), only %d writable" % (n, len(self._storage) - self._filled))

        self._filled += n

    def discard(self) -> None:
        """Invalidates all data in the buffer.

        Unconsumed bytes are dropped; capacity is kept."""

        self._consumed = 0
        self._filled = 0

    def _compact(self):
        pending = self._filled - self._consumed
        logger.debug("Compacting buffer: moving %d byte(s) from offset %d", pending, self._consumed)
        self._storage[0:pending] = self._storage[self._consumed:self._filled]
        self._consumed = 0
        self._filled = pending

    def _grow(self, new_capacity):
        logger.debug("Growing buffer from %d to %d byte(s)", len(self._storage), new_capacity)
        storage = bytearray(new_capacity)
        storage[0:self._filled - self._consumed] = self._storage[self._consumed:self._filled]
        self._filled -= self._consumed
        self._consumed = 0
        self._storage = storage
