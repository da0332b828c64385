"""Tunables for the expression engine and the debug console.

All of these can be overridden per run from the command line.
"""

MAX_TOKENS = 32          # Token buffer capacity per expression
TOKEN_TEXT_SIZE = 32     # Longest literal / register text kept in a token

MEM_BASE = 0x00000000    # Guest physical address of the first byte
MEM_SIZE = 0x100000      # 1 MiB of simulated memory
WORD_SIZE = 4            # Bytes read by dereference and by `x`

MASK32 = 0xFFFFFFFF

PROMPT = '(sdb) '
