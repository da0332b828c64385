"""debug-expr CLI: evaluate debugger expressions against a simulated CPU.

Usage:
    debug-expr                                Interactive console
    debug-expr -e '1+2*3'                     Evaluate and print
    debug-expr --reg eax=0x100 -e '$eax+4'    Preset a register
    debug-expr --image prog.bin -c 'x 4 0'    Load memory, run a command

Exit status: 0 ok, 1 evaluation error, 3 panic, 130 interrupted.
"""

import argparse
import logging
import sys

from .config import MAX_TOKENS, MEM_BASE, MEM_SIZE
from .console import Debugger, EXIT_OK, EXIT_ERROR, EXIT_PANIC
from .errors import DebugExprError, SimulatorPanic
from .memory import VirtualMemory
from .registers import RegisterFile


def _parse_reg(spec):
    """``NAME=VALUE`` → (name, int)."""
    name, sep, value = spec.partition('=')
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got '{spec}'")
    try:
        return name.lstrip('$'), int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"bad register value '{value}'") from None


def _int0(text):
    return int(text, 0)


def build_debugger(args, out=None):
    """Create a :class:`Debugger` from parsed command line *args*."""
    registers = RegisterFile()
    for name, value in args.reg:
        registers.set(name, value)
    memory = VirtualMemory(size=args.mem_size, base=args.mem_base)
    if args.image:
        with open(args.image, 'rb') as f:
            memory.load(f.read(), args.load_addr)
    return Debugger(registers, memory, out=out, max_tokens=args.max_tokens)


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='debug-expr',
        description='Evaluate simple-debugger expressions.',
        epilog="""Examples:
  debug-expr -e '(1+2)*3'                   9
  debug-expr --reg eax=0x100 -e '*$eax'     Word at [eax]
  debug-expr -c 'info r'                    Register dump""")

    parser.add_argument('-e', '--expr', action='append', default=[],
                        metavar='EXPR', help='Evaluate EXPR and print the result (repeatable)')
    parser.add_argument('-c', '--command', action='append', default=[],
                        metavar='CMD', help='Run a console command (repeatable)')
    parser.add_argument('--reg', action='append', default=[], type=_parse_reg,
                        metavar='NAME=VALUE', help='Preset a register (repeatable)')
    parser.add_argument('--image', default=None,
                        help='Raw binary image to load into memory')
    parser.add_argument('--load-addr', type=_int0, default=None,
                        help='Load address for --image (default: memory base)')
    parser.add_argument('--mem-base', type=_int0, default=MEM_BASE,
                        help=f'Memory base address (default: 0x{MEM_BASE:x})')
    parser.add_argument('--mem-size', type=_int0, default=MEM_SIZE,
                        help=f'Memory size in bytes (default: 0x{MEM_SIZE:x})')
    parser.add_argument('--max-tokens', type=int, default=MAX_TOKENS,
                        help=f'Token buffer capacity (default: {MAX_TOKENS})')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log lexer matches and dispatched commands')

    args = parser.parse_args(argv)

    if args.max_tokens < 1:
        parser.error(f"--max-tokens must be positive, got {args.max_tokens}")
    if args.mem_size < 1:
        parser.error(f"--mem-size must be positive, got {args.mem_size}")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s')

    try:
        return run(args)
    except DebugExprError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except SimulatorPanic as e:
        print(f"panic: {e}", file=sys.stderr)
        return EXIT_PANIC
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        return 130


def run(args):
    """Batch mode when -e / -c are given, interactive console otherwise."""
    dbg = build_debugger(args)

    if not args.expr and not args.command:
        return dbg.mainloop(interactive=sys.stdin.isatty())

    status = EXIT_OK
    for text in args.expr:
        try:
            val = dbg.evaluate(text)
        except DebugExprError as e:
            print(f"Error: {e}", file=sys.stderr)
            status = EXIT_ERROR
            continue
        print(f"{val} (0x{val:08x})")
    for line in args.command:
        keep_going, ok = dbg.run_command(line)
        if not ok:
            status = EXIT_ERROR
        if not keep_going:
            break
    return status
