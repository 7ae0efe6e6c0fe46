"""Jsish CLI — load a JSON program and run it."""

from __future__ import annotations

import os
import sys

from .emit import to_source
from .errors import JsishArithmeticError, JsishError, JsishIOError, JsishTypeError
from .runtime import interpret
from .serialize import SerializeError, load_program


USAGE: str = """\
jsish [OPTIONS] FILE

Run a Jsish program given as a JSON syntax tree. FILE may be '-' for stdin.

Options:
  --emit             Print the reconstructed source instead of running
  --help             Show this help message
"""

# Loading and evaluation both recurse once per nesting level.
RECURSION_LIMIT = 20000


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    filepath: str = ""
    emit = False
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            return 0
        elif arg == "--emit":
            emit = True
            i += 1
        elif arg.startswith("-") and arg != "-":
            print("jsish: unknown flag '" + arg + "'", file=sys.stderr)
            return 2
        elif filepath == "":
            filepath = arg
            i += 1
        else:
            print("jsish: unexpected argument '" + arg + "'", file=sys.stderr)
            return 2
    if filepath == "":
        print("jsish: missing file argument", file=sys.stderr)
        return 2

    if sys.getrecursionlimit() < RECURSION_LIMIT:
        sys.setrecursionlimit(RECURSION_LIMIT)

    try:
        if filepath == "-":
            raw = sys.stdin.buffer.read()
        else:
            with open(filepath, "rb") as f:
                raw = f.read()
    except FileNotFoundError:
        print("jsish: " + filepath + ": No such file or directory", file=sys.stderr)
        return 1
    except OSError as e:
        print("jsish: " + filepath + ": " + str(e), file=sys.stderr)
        return 1
    try:
        source = raw.decode("utf-8")
    except ValueError:
        print("jsish: " + filepath + ": invalid utf-8", file=sys.stderr)
        return 1

    try:
        program = load_program(source)
    except SerializeError as e:
        print("jsish: invalid program: " + str(e), file=sys.stderr)
        return 1

    if emit:
        try:
            text = to_source(program)
        except RecursionError:
            print("jsish: error: nesting too deep", file=sys.stderr)
            return 1
        try:
            sys.stdout.write(text)
            sys.stdout.flush()
        except OSError as e:
            return _stdout_failed(e)
        return 0

    try:
        interpret(program, sys.stdout)
    except JsishIOError as e:
        return _stdout_failed(e.error)
    except JsishError as e:
        print("jsish: " + _describe(e), file=sys.stderr)
        return 1
    except RecursionError:
        print("jsish: error: nesting too deep", file=sys.stderr)
        return 1
    try:
        sys.stdout.flush()
    except OSError as e:
        return _stdout_failed(e)
    return 0


def _describe(err: JsishError) -> str:
    if isinstance(err, JsishTypeError):
        return "type error: " + str(err)
    if isinstance(err, JsishArithmeticError):
        return "arithmetic error: " + str(err)
    return "error: " + str(err)


def _stdout_failed(e: OSError) -> int:
    print("jsish: io error: " + str(e), file=sys.stderr)
    # Point stdout at devnull so the flush at exit does not fail again.
    try:
        fd = sys.stdout.fileno()
    except (OSError, ValueError):
        return 1
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fd)
    os.close(devnull)
    return 1


if __name__ == "__main__":
    sys.exit(main())
