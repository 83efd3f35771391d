"""
This module provides ready-made parser functions for common ways of describing
binary data in Python: fixed `struct` records, delimiter-terminated records
such as CR/LF text lines, and `construct` definitions. Each one follows the
Done/Incomplete/Failed contract and can be handed straight to a parser
session's `parse()` method.
"""

# .py files
from .parser_struct import *
from .parser_delimited import *
from .parser_construct import *
