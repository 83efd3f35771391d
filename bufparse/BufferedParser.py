import logging

from .common import *
from .Exceptions import *
from .Buffer import *
from .ParseOutcome import *

logger = logging.getLogger(__name__)

def _resume(step, arg):
    """Advances a parse generator one step.

    :returns: `(True, value)` once the generator has finished with a parsed
        value, or `(False, None)` while it is waiting for more data
    :rtype: tuple

    Only StopIteration coming out of the generator itself is caught here, so a
    source that happens to raise StopIteration is never mistaken for a
    finished parse."""

    try:
        step(arg)
    except StopIteration as e:
        return True, e.value
    return False, None

class BufferedParserBase:
    """Shared state machine behind BufferedParser and AsyncBufferedParser.

    A session owns exactly one GrowableBuffer and one source. Each call to
    `parse()` runs a caller-supplied parser function against the unconsumed
    window of the buffer, reading more data from the source every time the
    parser reports that the window is incomplete, until the parser either
    succeeds or fails, or the source runs dry or breaks.

    The parser is re-run from the start of the window after every refill, so
    it never needs to remember anything between calls. It is called as
    `parser(window)` with a read-only memoryview, and must return one of
    `Done`, `Incomplete`, or `Failed`. The window is released as soon as the
    parser returns, so anything kept from it must be copied.

    The loop itself lives in `_steps()`, a generator that yields whenever it
    needs more data. Child classes only decide how to satisfy that request:
    by blocking on a Source, or by awaiting an AsyncSource. This class should
    not be used directly."""

    default_capacity = DEFAULT_BUF_SIZE
    default_read_size = DEFAULT_BUF_SIZE

    def __init__(self, source, initial_capacity=None, read_size=None, max_capacity=None):
        """Creates a new parser session around a source.

        :param source: Source of incoming bytes
        :type source: Source or AsyncSource

        :param initial_capacity: Starting buffer size in bytes (defaults to
            the `default_capacity` class attribute)
        :type initial_capacity: int

        :param read_size: Number of free bytes to make room for when the parser
            reports Incomplete without a size hint (defaults to the
            `default_read_size` class attribute)
        :type read_size: int

        :param max_capacity: Largest size the buffer may grow to, or None for
            no limit
        :type max_capacity: int

        The buffer starts empty; nothing is read from the source until the
        first `parse()` call needs it."""

        # these attributes may be updated by the application
        self.source = source
        self.read_size = read_size if read_size is not None else self.default_read_size
        self.on_rx_data = None
        self.on_rx_unit = None
        self.on_rx_error = None

        # these attributes should only be read externally, not written
        self.buffer = GrowableBuffer(
            initial_capacity if initial_capacity is not None else self.default_capacity,
            max_capacity)
        self.status = ParseStatus.IDLE
        self.is_parsing = False

    def __str__(self):
        return "parser on %s [%s, %s]" % (self.source, self.buffer, ParseStatus.NAMES[self.status])

    def __copy__(self):
        raise TypeError("%s owns its buffer and cannot be copied" % type(self).__name__)

    def __deepcopy__(self, memo):
        raise TypeError("%s owns its buffer and cannot be copied" % type(self).__name__)

    @property
    def buffered(self) -> int:
        """Number of bytes read from the source but not yet consumed."""

        return len(self.buffer)

    def _begin(self):
        if self.is_parsing:
            raise BufparseContractException("A parse is already in progress on %s" % self)
        self.is_parsing = True

    def _fail(self, exception, status):
        self.status = status
        logger.debug("Parse failed on %s: %s", self.source, exception)

        if self.on_rx_error is not None:
            # trigger application callback
            self.on_rx_error(exception, self)

        return exception

    def _steps(self, parser):
        """Runs one parse as a generator.

        Each time the parser reports Incomplete, room is made in the buffer and
        the generator yields the number of free bytes it asked for. The driver
        must then perform one source read into the buffer and either `send()`
        the resulting byte count or `throw()` the OSError the read raised. The
        parsed value is delivered through StopIteration, and parse errors are
        raised out of the generator.

        The parser and the callbacks run inside this generator, so a
        StopIteration escaping from one of them reaches the caller as a
        RuntimeError (with the StopIteration as its cause). Every other
        exception they raise propagates unchanged."""

        while True:
            self.status = ParseStatus.SCANNING
            with self.buffer.window() as window:
                available = len(window)
                outcome = parser(window)

            if isinstance(outcome, Done):
                if not 0 <= outcome.consumed <= available:
                    raise BufparseContractException("Parser reported consuming %r byte(s) from a %d-byte window" % (outcome.consumed, available))

                self.buffer.advance(outcome.consumed)
                self.status = ParseStatus.SUCCEEDED
                logger.debug("Parsed unit of %d byte(s) from %s", outcome.consumed, self.source)

                if self.on_rx_unit is not None:
                    # trigger application callback
                    self.on_rx_unit(outcome.value, self)

                return outcome.value

            elif isinstance(outcome, Failed):
                raise self._fail(BufparseParserException(outcome.error, outcome.fatal), ParseStatus.FAILED_PARSE)

            elif isinstance(outcome, Incomplete):
                self.status = ParseStatus.REFILLING
                wanted = outcome.needed if outcome.needed else self.read_size
                try:
                    self.buffer.make_room(wanted)
                except BufparseBufferFullException as e:
                    raise self._fail(e, ParseStatus.FAILED_IO)

                try:
                    count = yield wanted
                except OSError as e:
                    raise self._fail(BufparseSourceException(e), ParseStatus.FAILED_IO) from e

                if count == 0:
                    raise self._fail(BufparseEofException(len(self.buffer)), ParseStatus.FAILED_EOF)

                self.buffer.commit_write(count)
                logger.debug("Read %d byte(s) from %s, %d buffered", count, self.source, len(self.buffer))

                if self.on_rx_data is not None:
                    with self.buffer.window() as window:
                        # trigger application callback
                        self.on_rx_data(bytes(window[-count:]), self)

            else:
                raise BufparseContractException("Parser returned %r, expected Done, Incomplete, or Failed" % (outcome,))

class BufferedParser(BufferedParserBase):
    """Parser session reading from a blocking Source.

    Every refill blocks the calling thread inside the source's `fill_more()`.
    The session is meant for a single thread; there is no locking."""

    def parse(self, parser):
        """Parses the next logical unit from the source.

        :param parser: Function taking a window and returning Done, Incomplete,
            or Failed

        :returns: Value from the parser's Done outcome

        :raises BufparseParserException: The parser returned Failed
        :raises BufparseEofException: The source ended while the parser still
            needed more data
        :raises BufparseSourceException: The source raised an I/O error
        :raises BufparseContractException: The parser or source broke its
            contract, or another parse is in progress

        Bytes left over after a successful parse stay in the buffer for the
        next call."""

        self._begin()
        steps = self._steps(parser)
        try:
            done, value = _resume(steps.send, None)
            while not done:
                try:
                    count = self.source.fill_more(self.buffer)
                except OSError as e:
                    done, value = _resume(steps.throw, e)
                else:
                    done, value = _resume(steps.send, count)
            return value
        finally:
            steps.close()
            self.is_parsing = False

    def parse_all(self, parser):
        """Yields successive logical units until the source ends.

        :param parser: Function taking a window and returning Done, Incomplete,
            or Failed

        Iteration stops quietly if the source ends exactly between two units.
        If it ends in the middle of one, BufparseEofException is raised as
        usual."""

        while True:
            try:
                value = self.parse(parser)
            except BufparseEofException as e:
                if e.pending:
                    raise
                return
            yield value

class AsyncBufferedParser(BufferedParserBase):
    """Parser session reading from an AsyncSource.

    Every refill awaits the source's `fill_more()`, which is the only point
    where `parse()` suspends; the parser function itself always runs to
    completion without yielding. If the awaiting task is cancelled during a
    refill, nothing from that read is committed and the session may be used
    again."""

    async def parse(self, parser):
        """Parses the next logical unit from the source.

        :param parser: Function taking a window and returning Done, Incomplete,
            or Failed

        :returns: Value from the parser's Done outcome

        Raises exactly what BufferedParser.parse raises. No timeout is applied;
        wrap the call in `asyncio.wait_for()` or similar if one is needed."""

        self._begin()
        steps = self._steps(parser)
        try:
            done, value = _resume(steps.send, None)
            while not done:
                try:
                    count = await self.source.fill_more(self.buffer)
                except OSError as e:
                    done, value = _resume(steps.throw, e)
                else:
                    done, value = _resume(steps.send, count)
            return value
        finally:
            steps.close()
            self.is_parsing = False

    async def parse_all(self, parser):
        """Yields successive logical units until the source ends.

        Asynchronous counterpart of BufferedParser.parse_all."""

        while True:
            try:
                value = await self.parse(parser)
            except BufparseEofException as e:
                if e.pending:
                    raise
                return
            yield value
