"""Recursive evaluator over token index ranges.

There is no syntax tree: ``eval_range(tokens, p, q)`` reduces the
inclusive range ``tokens[p..q]`` directly.

  - a single token is an atom (number or register);
  - a range fully wrapped by one pair of parentheses is unwrapped;
  - otherwise the range is split at its *split operator*, the top-level
    token with the highest precedence band.  Ties go to the rightmost
    candidate, which becomes the root: ``8-3-2`` groups as ``(8-3)-2``
    and yields 3, the usual left-to-right grouping.

All values are unsigned 32-bit; booleans are 1 / 0.
"""

import logging

from .config import MASK32, MAX_TOKENS, WORD_SIZE
from .errors import (DebugExprError, ParseError, UnresolvedRegisterError,
                     DivisionByZeroPanic)
from .lexer import tokenize
from .tokens import TokenKind, UNARY_KINDS

log = logging.getLogger(__name__)


def check_parentheses(tokens, p, q):
    """Is ``tokens[p..q]`` balanced and wrapped by a single outer pair?

    Returns:
        True if balanced and ``tokens[p]`` / ``tokens[q]`` are a matching
        ``(`` / ``)``; False if balanced but not wrapped (e.g. ``(a)+(b)``).

    Raises:
        ParseError for an empty/inverted range or unbalanced parentheses.
    """
    if p >= q:
        raise ParseError("Bad expression: empty range")
    depth = 0
    closed_early = False   # outer level reached before q
    for i in range(p, q + 1):
        kind = tokens[i].kind
        if kind is TokenKind.LPAREN:
            depth += 1
        elif kind is TokenKind.RPAREN:
            depth -= 1
        if depth < 0:
            raise ParseError("Bad expression: unmatched ')'")
        if depth == 0 and i < q:
            closed_early = True
    if depth != 0:
        raise ParseError("Bad expression: unmatched '('")
    return (tokens[p].kind is TokenKind.LPAREN
            and tokens[q].kind is TokenKind.RPAREN
            and not closed_early)


def find_split_operator(tokens, p, q):
    """Index of the rightmost top-level token with the highest band."""
    op = p
    depth = 0
    best = -1
    for i in range(p, q + 1):
        kind = tokens[i].kind
        if kind is TokenKind.LPAREN:
            depth += 1
        elif kind is TokenKind.RPAREN:
            depth -= 1
        if depth == 0 and tokens[i].precedence >= best:
            best = tokens[i].precedence
            op = i
    return op


def parse_number(text):
    """Parse a decimal or ``0x`` hex literal to an unsigned 32-bit value."""
    try:
        if len(text) > 2 and text[1] in 'xX':
            val = int(text, 16)
        else:
            val = int(text, 10)
    except ValueError:
        raise ParseError(f"Malformed number '{text}'") from None
    if val > MASK32:
        raise ParseError(f"Number '{text}' does not fit in 32 bits")
    return val


class Evaluator:
    """Evaluate token ranges against a register file and a memory.

    *registers* needs ``lookup_register(name) -> (value, ok)``;
    *memory* needs ``read_memory(address, size) -> int``.
    """

    def __init__(self, registers, memory):
        self.registers = registers
        self.memory = memory

    def _atom(self, tok):
        if tok.kind is TokenKind.NUMBER:
            return parse_number(tok.text)
        if tok.kind is TokenKind.REGISTER:
            name = tok.text[1:]
            val, ok = self.registers.lookup_register(name)
            if not ok:
                raise UnresolvedRegisterError(name)
            return val & MASK32
        raise ParseError(f"Bad expression: unexpected '{tok.kind.value}'")

    def eval_range(self, tokens, p, q):
        """Reduce ``tokens[p..q]`` (inclusive) to an unsigned 32-bit value."""
        if p > q:
            raise ParseError("Bad expression: missing operand")
        if p == q:
            return self._atom(tokens[p])
        if check_parentheses(tokens, p, q):
            return self.eval_range(tokens, p + 1, q - 1)

        op = find_split_operator(tokens, p, q)
        kind = tokens[op].kind
        val1 = 0
        if kind not in UNARY_KINDS:
            val1 = self.eval_range(tokens, p, op - 1)
        val2 = self.eval_range(tokens, op + 1, q)
        return self._apply(kind, val1, val2)

    def _apply(self, kind, val1, val2):
        if kind is TokenKind.PLUS:
            return (val1 + val2) & MASK32
        if kind is TokenKind.MINUS:
            return (val1 - val2) & MASK32
        if kind is TokenKind.STAR:
            return (val1 * val2) & MASK32
        if kind is TokenKind.SLASH:
            if val2 == 0:
                raise DivisionByZeroPanic()
            return val1 // val2
        if kind is TokenKind.DEREF:
            return self.memory.read_memory(val2, WORD_SIZE) & MASK32
        if kind is TokenKind.UNARY_MINUS:
            return (-val2) & MASK32
        if kind is TokenKind.EQ:
            return int(val1 == val2)
        if kind is TokenKind.NEQ:
            return int(val1 != val2)
        if kind is TokenKind.AND:
            return int(bool(val1) and bool(val2))
        if kind is TokenKind.OR:
            return int(bool(val1) or bool(val2))
        # Parentheses and atoms never survive to here: their left
        # operand range is always malformed.
        raise AssertionError(f"Unhandled operator {kind!r}")

    def evaluate(self, text, max_tokens=MAX_TOKENS):
        """Evaluate expression *text*.

        Raises:
            DebugExprError subclasses on any recoverable failure.
            DivisionByZeroPanic on division by zero.
        """
        tokens = tokenize(text, max_tokens)
        log.debug("tokens: %r", tokens)
        try:
            return self.eval_range(tokens, 0, len(tokens) - 1)
        except RecursionError:
            raise ParseError("Bad expression: nested too deeply") from None

    def evaluate_expression(self, text, max_tokens=MAX_TOKENS):
        """Evaluate *text*, returning ``(value, ok)``.

        Recoverable errors give ``(0, False)``; panics propagate.
        """
        try:
            return self.evaluate(text, max_tokens), True
        except DebugExprError as e:
            log.debug("evaluation of %r failed: %s", text, e)
            return 0, False


def evaluate(text, registers, memory, max_tokens=MAX_TOKENS):
    """Evaluate *text* with the given collaborators; raises on failure."""
    return Evaluator(registers, memory).evaluate(text, max_tokens)


def evaluate_expression(text, registers, memory, max_tokens=MAX_TOKENS):
    """Evaluate *text* with the given collaborators; returns ``(value, ok)``."""
    return Evaluator(registers, memory).evaluate_expression(text, max_tokens)
