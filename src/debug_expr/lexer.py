"""Rule-table lexer and unary-operator resolution.

The rule table is compiled once, at import.  Lexing is first-match in
table order (not longest match), anchored at the cursor.
"""

import logging
import re

from .config import MAX_TOKENS, TOKEN_TEXT_SIZE
from .errors import LexError, TokenOverflowError
from .tokens import (RULES, LITERAL_KINDS, Token, TokenKind,
                     PREC_DEREF, PREC_UNARY_MINUS)

log = logging.getLogger(__name__)

_COMPILED_RULES = tuple((re.compile(pattern), kind) for pattern, kind in RULES)

# A `*` / `-` following one of these (or at the start) is unary
_UNARY_PREDECESSORS = frozenset((
    TokenKind.LPAREN, TokenKind.PLUS, TokenKind.MINUS, TokenKind.STAR,
    TokenKind.SLASH, TokenKind.UNARY_MINUS, TokenKind.DEREF,
))


def _match_rule(text, pos):
    """Return ``(index, kind, match)`` for the first rule matching at *pos*."""
    for i, (regex, kind) in enumerate(_COMPILED_RULES):
        m = regex.match(text, pos)
        if m and m.end() > pos:
            return i, kind, m
    return None


def lex(text, max_tokens=MAX_TOKENS):
    """Split *text* into a list of :class:`Token`.

    Raises:
        LexError if no rule matches at some position, or a literal is
        longer than ``TOKEN_TEXT_SIZE``.
        TokenOverflowError if more than *max_tokens* tokens are produced.
    """
    tokens = []
    pos = 0
    n = len(text)
    while pos < n:
        found = _match_rule(text, pos)
        if found is None:
            raise LexError(text, pos)
        i, kind, m = found
        substr = m.group()
        log.debug('match rules[%d] = "%s" at position %d with len %d: %s',
                  i, RULES[i][0], pos, len(substr), substr)

        if kind is not TokenKind.NOTYPE:
            if len(tokens) >= max_tokens:
                raise TokenOverflowError(text, pos, max_tokens)
            if kind in LITERAL_KINDS:
                if len(substr) > TOKEN_TEXT_SIZE:
                    raise LexError(text, pos, reason=(
                        f"token longer than {TOKEN_TEXT_SIZE} characters"))
                tokens.append(Token(kind, substr))
            else:
                tokens.append(Token(kind))
        pos = m.end()

    return tokens


def resolve_unary(tokens):
    """Retag `*` / `-` in operand position as dereference / negation.

    Works in place, left to right, so the previous token is always
    already resolved when the current one is examined.
    """
    for i, tok in enumerate(tokens):
        if tok.kind not in (TokenKind.STAR, TokenKind.MINUS):
            continue
        if i > 0 and tokens[i - 1].kind not in _UNARY_PREDECESSORS:
            continue
        if tok.kind is TokenKind.STAR:
            tok.kind = TokenKind.DEREF
            tok.precedence = PREC_DEREF
        else:
            tok.kind = TokenKind.UNARY_MINUS
            tok.precedence = PREC_UNARY_MINUS


def tokenize(text, max_tokens=MAX_TOKENS):
    """Lex *text* and resolve unary operators."""
    tokens = lex(text, max_tokens)
    resolve_unary(tokens)
    return tokens
