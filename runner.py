"""Entry points for hosts embedding the language.

``run`` and ``evaluate`` never raise a language error; they hand it back
alongside whatever output was produced before the failure.
"""
from dataclasses import dataclass, field
import math

from errors import MinilangError
from interpreter import Interpreter
from lexer import Lexer
from parser import Parser
import values


def tokenize(text):
    """Lazily yield the tokens of ``text``, ending with the EOF token."""
    return iter(Lexer(text))


def parse(text):
    return Parser(Lexer(text)).parse()


def interpret(program, output=None, trace=None):
    return Interpreter(output=output, trace=trace).interpret(program)


def run(text, output=None, trace=None):
    """Parse and execute ``text``; returns ``(lines, value, error)``.

    ``output`` (optional) also receives each line as it is printed.
    """
    lines = []

    def sink(line):
        lines.append(line)
        if output is not None:
            output(line)

    try:
        program = parse(text)
        value = Interpreter(output=sink, trace=trace).interpret(program)
    except MinilangError as e:
        return lines, None, e
    return lines, value, None


@dataclass
class EvalResult:
    output_lines: list = field(default_factory=list)
    value: object = None
    error: str | None = None
    error_kind: str | None = None

    @property
    def ok(self):
        return self.error is None

    def to_dict(self):
        value = self.value
        # JSON has no NaN or Infinity
        if isinstance(value, float) and not math.isfinite(value):
            value = values.display(value)
        return {
            "output": list(self.output_lines),
            "result": value,
            "error": self.error,
        }


def evaluate(text):
    lines, value, error = run(text)
    if error is not None:
        return EvalResult(lines, None, str(error), error.kind)
    return EvalResult(lines, value)
