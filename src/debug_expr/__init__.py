"""debug-expr: expression evaluator for a simulator's debug console.

Supports:
  - Decimal and hex (0x1F) literals
  - Register references ($eax, $al, $pc, ...)
  - Pointer dereference (*addr, 4-byte little-endian read)
  - + - * / with 32-bit unsigned wraparound, unary -
  - == != && || yielding 1 / 0, and parentheses

Architecture:
  lexer      rule table → token list, unary * / - resolution
  evaluator  recursive split at the loosest top-level operator
  console    p / x / info r commands over a register file and memory

Usage as library:
    from debug_expr import Debugger
    value, ok = Debugger().evaluate_expression('(1+2)*3')
"""

from .console import Debugger
from .evaluator import Evaluator, evaluate, evaluate_expression

__version__ = '1.0.0'
