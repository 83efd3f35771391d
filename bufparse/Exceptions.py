"""Bufparse Exception Definitions

These derived exception classes provide a way for Bufparse code to raise unique
exceptions to be caught (optionally) by application code.
"""

from .common import *

class BufparseException(Exception):
    """Base exception class for any Bufparse-related exception

    This type may be used to catch Bufparse exceptions generally within an
    application, but should not be raised directly. Rather, extend the class
    into something more specific (as in the BufparseParserException) and then
    raise that instead.
    """

    pass

class BufparseHalException(BufparseException):
    """Exception class for source access functions

    Bufparse code raises this type of exception if a base class method is not
    correctly re-implemented in a child class (e.g. `Source.fill_more` vs.
    `FileSource.fill_more`).
    """

    pass

class BufparseContractException(BufparseException):
    """Exception class for broken contracts between bufparse and its callers

    This is raised when a parser function misbehaves (reports consuming more
    bytes than its window held, or returns something other than a parse
    outcome), when a source reports writing more bytes than it was offered, or
    when a second parse is started on a session that is already parsing.

    It is deliberately not a BufparseParseError: handlers written for normal
    parse failures will not catch it.
    """

    pass

class BufparseParseError(BufparseException):
    """Base class for every way a single parse call can fail

    :param message: Human-readable description
    :type message: str

    :param status: Terminal parse status reached by the failing call
    :type status: int
    """

    status = ParseStatus.IDLE

    def __init__(self, message, status=None):
        super().__init__(message)
        if status is not None:
            self.status = status

class BufparseSourceException(BufparseParseError):
    """The underlying source reported an I/O failure

    The original error is kept on the `error` attribute (and is also the
    `__cause__` of this exception). It is never retried internally.
    """

    status = ParseStatus.FAILED_IO

    def __init__(self, error, message=None):
        if message is None:
            message = "Source read failed: %s" % (error,)
        super().__init__(message)
        self.error = error

class BufparseBufferFullException(BufparseSourceException):
    """The buffer reached its maximum capacity while the parser needed more"""

    def __init__(self, capacity):
        super().__init__(None, "Buffer completely filled at %d bytes" % capacity)
        self.capacity = capacity

class BufparseEofException(BufparseParseError):
    """The source closed while the parser still needed more bytes

    :param pending: Number of unconsumed bytes held when the source closed
    :type pending: int

    A `pending` value of zero means the stream ended cleanly between two
    logical units; anything else means a unit was truncated.
    """

    status = ParseStatus.FAILED_EOF

    def __init__(self, pending=0):
        super().__init__("End of input with %d unconsumed byte(s) while parser needed more" % pending)
        self.pending = pending

class BufparseParserException(BufparseParseError):
    """The parser rejected the bytes it was given

    The parser's own error payload is available unchanged on the `error`
    attribute, and `fatal` reflects whether the parser flagged the failure as
    unrecoverable.
    """

    status = ParseStatus.FAILED_PARSE

    def __init__(self, error, fatal=False):
        super().__init__("Parser failed: %s" % (error,))
        self.error = error
        self.fatal = fatal
