import io

import construct

from ..ParseOutcome import *

def construct_parser(con, **contextkw):
    """Builds a parser from a `construct` definition.

    :param con: Construct to parse each logical unit with
    :type con: construct.Construct

    :param contextkw: Extra context entries passed to `parse_stream()`

    :returns: Parser function producing whatever the construct parses to

    The construct reads from an in-memory copy of the window, and the stream
    position afterwards is the number of bytes consumed. Running off the end of
    the window (`construct.StreamError`) means more data is needed; any other
    construct error means the data is invalid. Constructs that read "everything
    that is left" (such as `GreedyBytes`) will happily succeed on whatever has
    arrived so far, so they should only appear behind a length prefix."""

    def parse(window):
        stream = io.BytesIO(window)
        try:
            value = con.parse_stream(stream, **contextkw)
        except construct.StreamError:
            return Incomplete()
        except construct.ConstructError as e:
            return Failed(e)
        return Done(value, stream.tell())

    return parse
