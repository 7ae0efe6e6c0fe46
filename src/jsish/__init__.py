"""Jsish evaluation core — public API."""

from __future__ import annotations

from .ast import Program
from .emit import to_source
from .errors import (
    JsishArithmeticError as JsishArithmeticError,
    JsishError as JsishError,
    JsishIOError as JsishIOError,
    JsishOverflowError as JsishOverflowError,
    JsishTypeError as JsishTypeError,
    JsishZeroDivisionError as JsishZeroDivisionError,
)
from .runtime import (
    RunResult as RunResult,
    evaluate as evaluate,
    interpret as interpret,
    run as run,
)
from .serialize import SerializeError as SerializeError, load_program


def load(source: str) -> Program:
    """Load a JSON-encoded program."""
    return load_program(source)


def run_source(source: str) -> RunResult:
    """Load a JSON-encoded program and run it with output captured."""
    return run(load_program(source))


def emit(program: Program) -> str:
    """Render a `Program` in the reconstruction format."""
    return to_source(program)
