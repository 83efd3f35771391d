from ..ParseOutcome import *

def delimited_parser(delimiter=b"\n", max_length=None, trim=b""):
    """Builds a parser for delimiter-terminated records, such as text lines.

    :param delimiter: Byte sequence ending each record
    :type delimiter: bytes

    :param max_length: Longest record allowed (delimiter included), or None
    :type max_length: int

    :param trim: Bytes stripped from the end of each record, e.g. `b"\\r"` for
        CR/LF-terminated text
    :type trim: bytes

    :returns: Parser function producing each record as `bytes`, without the
        delimiter

    The delimiter is consumed along with the record. If `max_length` bytes
    arrive without a delimiter, the parser fails with a ValueError payload
    instead of waiting forever."""

    if not delimiter:
        raise ValueError("Delimiter must not be empty")

    def parse(window):
        data = bytes(window if max_length is None else window[:max_length])
        end = data.find(delimiter)
        if end < 0:
            if max_length is not None and len(data) >= max_length:
                return Failed(ValueError("No %r delimiter within %d byte(s)" % (delimiter, max_length)), fatal=True)
            return Incomplete()

        record = data[:end]
        if trim:
            record = record.rstrip(trim)
        return Done(record, end + len(delimiter))

    return parse
