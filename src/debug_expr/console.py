"""Simple debugger console: ``p``, ``x``, ``info r``, ``help``, ``q``.

Commands evaluate expressions through :class:`~debug_expr.evaluator.Evaluator`
against the console's own register file and memory.  Recoverable errors
are printed and the session goes on; a :class:`SimulatorPanic` ends it.
"""

import logging
import sys

from .config import MAX_TOKENS, PROMPT, WORD_SIZE
from .errors import DebugExprError, ParseError, SimulatorPanic
from .evaluator import Evaluator
from .memory import VirtualMemory
from .registers import RegisterFile

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_PANIC = 3


class Debugger:
    """Register file + memory + evaluator, driven by text commands."""

    def __init__(self, registers=None, memory=None, out=None,
                 max_tokens=MAX_TOKENS):
        self.registers = registers if registers is not None else RegisterFile()
        self.memory = memory if memory is not None else VirtualMemory()
        self.out = out if out is not None else sys.stdout
        self.max_tokens = max_tokens
        self.evaluator = Evaluator(self.registers, self.memory)
        self.commands = {
            'help': (self.cmd_help, 'Display information about all supported commands'),
            'p': (self.cmd_p, 'Evaluate an expression: p EXPR'),
            'x': (self.cmd_x, 'Examine memory: x N EXPR'),
            'info': (self.cmd_info, 'Print program state: info r'),
            'q': (self.cmd_q, 'Exit the debugger'),
        }

    def _print(self, text=''):
        print(text, file=self.out)

    # ── Expression interface ─────────────────────────────────────────

    def evaluate(self, text):
        """Evaluate *text*; raises on failure."""
        return self.evaluator.evaluate(text, self.max_tokens)

    def evaluate_expression(self, text):
        """Evaluate *text*; returns ``(value, ok)``."""
        return self.evaluator.evaluate_expression(text, self.max_tokens)

    # ── Commands ─────────────────────────────────────────────────────
    #
    # Each handler returns False to end the session.

    def cmd_help(self, args):
        name = args.strip()
        if not name:
            for cmd, (_, desc) in self.commands.items():
                self._print(f"{cmd} - {desc}")
            return True
        if name not in self.commands:
            raise ParseError(f"Unknown command '{name}'")
        self._print(f"{name} - {self.commands[name][1]}")
        return True

    def cmd_p(self, args):
        if not args.strip():
            raise ParseError("Usage: p EXPR")
        expr = args.strip()
        val = self.evaluate(expr)
        self._print(f"{expr} = {val} (0x{val:08x})")
        return True

    def cmd_x(self, args):
        parts = args.split(None, 1)
        if len(parts) != 2:
            raise ParseError("Usage: x N EXPR")
        try:
            count = int(parts[0], 0)
        except ValueError:
            raise ParseError(f"Bad word count '{parts[0]}'") from None
        if count < 1:
            raise ParseError("Usage: x N EXPR")
        addr = self.evaluate(parts[1].strip())
        for i in range(count):
            a = (addr + i * WORD_SIZE) & 0xFFFFFFFF
            val = self.memory.read_memory(a, WORD_SIZE)
            self._print(f"0x{a:08x}: 0x{val:08x}")
        return True

    def cmd_info(self, args):
        if args.strip() != 'r':
            raise ParseError("Usage: info r")
        for name, val in self.registers.dump():
            self._print(f"{name:<4} 0x{val:08x} {val}")
        return True

    def cmd_q(self, args):
        return False

    # ── Dispatch ─────────────────────────────────────────────────────

    def execute(self, line):
        """Run one command line.

        Returns:
            False when the session should end, True otherwise.

        Raises:
            DebugExprError for recoverable failures, SimulatorPanic for
            fatal ones.
        """
        line = line.strip()
        if not line:
            return True
        cmd, _, args = line.partition(' ')
        entry = self.commands.get(cmd)
        if entry is None:
            raise ParseError(f"Unknown command '{cmd}'")
        log.debug("command %r args %r", cmd, args)
        return entry[0](args)

    def run_command(self, line, err=None):
        """Execute *line*, reporting recoverable errors on *err*.

        Returns ``(keep_going, ok)``.  Panics are not caught here.
        """
        err = err if err is not None else sys.stderr
        try:
            return self.execute(line), True
        except DebugExprError as e:
            print(f"Error: {e}", file=err)
            return True, False

    def mainloop(self, stream=None, interactive=True, err=None):
        """Read commands from *stream* until EOF, ``q`` or a panic.

        Returns an exit status.
        """
        stream = stream if stream is not None else sys.stdin
        err = err if err is not None else sys.stderr
        while True:
            if interactive:
                print(PROMPT, end='', file=self.out, flush=True)
            line = stream.readline()
            if not line:
                if interactive:
                    self._print()
                return EXIT_OK
            try:
                keep_going, _ = self.run_command(line, err)
            except SimulatorPanic as e:
                print(f"panic: {e}", file=err)
                return EXIT_PANIC
            if not keep_going:
                return EXIT_OK
