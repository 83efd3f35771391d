class Done:
    """Successful parse outcome.

    :param value: Logical unit produced by the parser
    :param consumed: Number of bytes of the window used to produce it
    :type consumed: int

    Anything in `value` that refers to the window (such as a memoryview slice)
    must be copied first, since the window is invalid once the parser returns.
    """

    __slots__ = ("value", "consumed")

    def __init__(self, value, consumed):
        self.value = value
        self.consumed = consumed

    def __repr__(self):
        return "Done(%r, %d)" % (self.value, self.consumed)

class Incomplete:
    """Parse outcome for a window that ends too early.

    :param needed: Number of additional bytes wanted, if the parser knows
    :type needed: int
    """

    __slots__ = ("needed",)

    def __init__(self, needed=None):
        self.needed = needed

    def __repr__(self):
        return "Incomplete(%r)" % (self.needed,)

class Failed:
    """Parse outcome for bytes that can never become valid.

    :param error: Parser-specific error payload, handed back to the caller
    :param fatal: Whether the parser considers the failure unrecoverable
    :type fatal: bool
    """

    __slots__ = ("error", "fatal")

    def __init__(self, error, fatal=False):
        self.error = error
        self.fatal = fatal

    def __repr__(self):
        return "Failed(%r, fatal=%r)" % (self.error, self.fatal)
