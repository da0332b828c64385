"""Error types for debug-expr.

Everything derived from :class:`DebugExprError` is recoverable: the
console prints it and reads the next command.  :class:`SimulatorPanic`
is not; it ends the debugging session.
"""


class DebugExprError(Exception):
    """Base error for debug-expr."""
    pass


class LexError(DebugExprError):
    """No lexical rule matches at some position of the input.

    Renders as::

        no match at position 2
        1 # 2
          ^
    """

    def __init__(self, text, position, reason='no match'):
        self.text = text
        self.position = position
        self.reason = reason
        super().__init__(self._format())

    def _format(self):
        return (f"{self.reason} at position {self.position}\n"
                f"{self.text}\n"
                f"{' ' * self.position}^")


class TokenOverflowError(LexError):
    """Expression has more tokens than the token buffer holds."""

    def __init__(self, text, position, max_tokens):
        self.max_tokens = max_tokens
        super().__init__(text, position,
                         reason=f"too many tokens (max {max_tokens})")


class ParseError(DebugExprError):
    """Malformed expression: bad parentheses, empty operand, bad literal."""
    pass


class UnresolvedRegisterError(DebugExprError):
    """Register name not known to the register file."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown register '${name}'")


class MemoryAccessError(DebugExprError):
    """Access outside the simulated physical memory."""

    def __init__(self, address, size):
        self.address = address
        self.size = size
        super().__init__(
            f"Address 0x{address:08x} (size {size}) is out of bound")


class SimulatorPanic(Exception):
    """Unrecoverable condition; the session must stop."""
    pass


class DivisionByZeroPanic(SimulatorPanic):
    """Division by zero inside a debugger expression."""

    def __init__(self, msg="Division by zero!!"):
        super().__init__(msg)
