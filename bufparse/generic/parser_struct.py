import struct

from ..ParseOutcome import *

def struct_parser(fmt):
    """Builds a parser for one fixed-size `struct` record.

    :param fmt: Format string or precompiled `struct.Struct`
    :type fmt: str

    :returns: Parser function producing the unpacked tuple

    The record size is known up front, so an Incomplete outcome always carries
    the exact number of bytes still missing."""

    record = fmt if isinstance(fmt, struct.Struct) else struct.Struct(fmt)

    def parse(window):
        if len(window) < record.size:
            return Incomplete(record.size - len(window))
        return Done(record.unpack_from(window), record.size)

    return parse
