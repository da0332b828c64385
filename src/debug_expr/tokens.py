"""Token kinds, precedence bands and the lexical rule table.

Precedence bands follow C operator precedence, scaled by ten.  The
evaluator splits a range at the operator with the *highest* band, so a
larger number means "binds looser, evaluated last".
"""

import enum


class TokenKind(enum.Enum):
    NOTYPE = "NOTYPE"          # whitespace, never stored
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    LPAREN = "("
    RPAREN = ")"
    NUMBER = "NUMBER"
    REGISTER = "REGISTER"
    EQ = "=="
    NEQ = "!="
    AND = "&&"
    OR = "||"
    UNARY_MINUS = "neg"
    DEREF = "deref"


# ── Precedence bands ─────────────────────────────────────────────────

PREC_ATOM = 0           # number, register
PREC_PAREN = 10         # ( )
PREC_UNARY_MINUS = 21   # unary -
PREC_DEREF = 22         # unary *
PREC_MUL = 30           # * /
PREC_ADD = 40           # + -
PREC_EQ = 70            # == !=
PREC_AND = 110          # &&
PREC_OR = 120           # ||

PRECEDENCE = {
    TokenKind.NUMBER: PREC_ATOM,
    TokenKind.REGISTER: PREC_ATOM,
    TokenKind.LPAREN: PREC_PAREN,
    TokenKind.RPAREN: PREC_PAREN,
    TokenKind.UNARY_MINUS: PREC_UNARY_MINUS,
    TokenKind.DEREF: PREC_DEREF,
    TokenKind.STAR: PREC_MUL,
    TokenKind.SLASH: PREC_MUL,
    TokenKind.PLUS: PREC_ADD,
    TokenKind.MINUS: PREC_ADD,
    TokenKind.EQ: PREC_EQ,
    TokenKind.NEQ: PREC_EQ,
    TokenKind.AND: PREC_AND,
    TokenKind.OR: PREC_OR,
}

# Kinds whose matched text is kept in the token
LITERAL_KINDS = frozenset((TokenKind.NUMBER, TokenKind.REGISTER))

UNARY_KINDS = frozenset((TokenKind.UNARY_MINUS, TokenKind.DEREF))


# ── Rule table ───────────────────────────────────────────────────────
#
# Tried in order at every cursor position; the first anchored match
# wins.  Registers and hex literals must come before decimal numbers.

RULES = (
    (r' +', TokenKind.NOTYPE),
    (r'\+', TokenKind.PLUS),
    (r'\-', TokenKind.MINUS),
    (r'\*', TokenKind.STAR),
    (r'/', TokenKind.SLASH),
    (r'\(', TokenKind.LPAREN),
    (r'\)', TokenKind.RPAREN),
    (r'\$[a-zA-Z0-9]+', TokenKind.REGISTER),
    (r'0[xX][0-9a-fA-F]+', TokenKind.NUMBER),
    (r'0|[1-9][0-9]*', TokenKind.NUMBER),
    (r'!=', TokenKind.NEQ),
    (r'&&', TokenKind.AND),
    (r'\|\|', TokenKind.OR),
    (r'==', TokenKind.EQ),
)


class Token:
    """One lexed token.

    ``text`` is only filled for :data:`LITERAL_KINDS`.  ``kind`` and
    ``precedence`` are rewritten once by the unary resolver.
    """
    __slots__ = ('kind', 'text', 'precedence')

    def __init__(self, kind, text='', precedence=None):
        self.kind = kind
        self.text = text
        self.precedence = PRECEDENCE[kind] if precedence is None else precedence

    def __repr__(self):
        if self.text:
            return f"Token({self.kind.name}, {self.text!r})"
        return f"Token({self.kind.name})"
