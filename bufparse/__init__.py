"""
Bufparse drives incremental parsers directly against live byte sources such as
sockets, pipes, files, and serial ports, so that application code never has to
deal with partial reads or "not enough data yet" retries.

A parser is any function that takes a window of bytes and returns one of three
outcomes: `Done` (with a value and a byte count), `Incomplete` (optionally
saying how many more bytes it wants), or `Failed` (with an error). A parser
session owns a growable buffer and a source, and its `parse()` method keeps
reading and re-running the parser until it gets an answer.

Two session types share the same machinery: `BufferedParser` blocks the calling
thread on a `Source`, while `AsyncBufferedParser` suspends an asyncio task on an
`AsyncSource`. Ready-made sources for files, sockets, and asyncio streams live
at the top level, serial ports are in the `hal` submodule, and ready-made
parsers are in the `generic` submodule.
"""

# .py files
from .common import *
from .Exceptions import *

from .ParseOutcome import *
from .Buffer import *
from .Source import *
from .BufferedParser import *

# submodule folders
from . import hal
from . import generic
