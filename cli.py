import dataclasses
import json
import sys
import traceback

from ast_nodes import Expr, Node, Print, Program
from errors import MinilangError
from interpreter import Interpreter
from lexer import Lexer
from parser import Parser
import runner


# Simple AST printer (so you can SEE what the parser built)
def ast_to_dict(node):
    if node is None:
        return None
    if isinstance(node, tuple):
        return [ast_to_dict(item) for item in node]
    if not isinstance(node, Node):
        return node

    d = {"type": node.__class__.__name__}
    for f in dataclasses.fields(node):
        if f.name == "line":
            continue
        d[f.name.rstrip("_")] = ast_to_dict(getattr(node, f.name))
    return d


def pretty(obj, indent=0):
    sp = "  " * indent
    if isinstance(obj, dict):
        lines = []
        for k, v in obj.items():
            if isinstance(v, (dict, list)):
                lines.append(f"{sp}{k}:")
                lines.append(pretty(v, indent + 1))
            else:
                lines.append(f"{sp}{k}: {v}")
        return "\n".join(lines)
    if isinstance(obj, list):
        lines = []
        for item in obj:
            lines.append(f"{sp}-")
            lines.append(pretty(item, indent + 1))
        return "\n".join(lines)
    return f"{sp}{obj}"


def read_source(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def fail(e, debug):
    if debug:
        traceback.print_exc()
    else:
        print(str(e))
    sys.exit(1)


def stderr_trace(line):
    print(line, file=sys.stderr)


def cmd_tokens(path, debug=False):
    try:
        for tok in Lexer(read_source(path)):
            print(f"{tok.line}:{tok.column}  {tok!r}")
    except (OSError, MinilangError) as e:
        fail(e, debug)


def cmd_parse(path, debug=False):
    try:
        program = Parser(Lexer(read_source(path))).parse()
    except (OSError, MinilangError) as e:
        if debug:
            traceback.print_exc()
        else:
            print(f"Parse error: {e}")
        sys.exit(1)

    print(pretty(ast_to_dict(program)))


def cmd_run(path, debug=False, trace=False):
    try:
        code = read_source(path)
        program = Parser(Lexer(code)).parse()
        interpreter = Interpreter(trace=stderr_trace if trace else None)
        interpreter.interpret(program)
    except (OSError, MinilangError) as e:
        fail(e, debug)


def cmd_eval(source):
    result = runner.evaluate(source)
    print(json.dumps(result.to_dict(), allow_nan=False))
    if not result.ok:
        sys.exit(1)


def _count_braces_delta(line: str) -> int:
    # Minimal brace balancer for REPL multiline input.
    # Ignores braces inside "..." strings.
    delta = 0
    in_double = False
    for ch in line:
        if ch == '"':
            in_double = not in_double
        elif not in_double:
            if ch == "{":
                delta += 1
            elif ch == "}":
                delta -= 1
    return delta


def parse_submission(source):
    # First, try parsing as a normal program (statements).
    try:
        program = Parser(Lexer(source)).parse()
    except MinilangError as parse_err:
        # If that fails, try parsing as a single expression (a bare name
        # is not a statement on its own).
        try:
            expr = Parser(Lexer(source)).parse_expression()
        except MinilangError:
            raise parse_err
        program = Program((expr,), line=1)

    # auto-print a trailing expression statement
    if program.statements and isinstance(program.statements[-1], Expr):
        last = program.statements[-1]
        program = Program(program.statements[:-1] + (Print(last, line=last.line),), line=1)
    return program


def cmd_repl(debug: bool = False, trace: bool = False):
    # One interpreter for the whole session so variables persist.
    interpreter = Interpreter(trace=stderr_trace if trace else None)

    print("minilang REPL. Type :q to quit.")

    buffer_lines = []
    brace_depth = 0
    while True:
        prompt = "minilang> " if not buffer_lines else "...> "
        try:
            line = input(prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            break

        stripped = line.strip()
        if not buffer_lines and stripped in (":q", ":quit", "quit", "exit"):
            break

        if not stripped and not buffer_lines:
            continue

        buffer_lines.append(line)
        brace_depth += _count_braces_delta(line)

        # Wait for block completion if braces aren't balanced yet.
        if brace_depth > 0:
            continue

        source = "\n".join(buffer_lines) + "\n"
        buffer_lines = []
        brace_depth = 0

        try:
            interpreter.interpret(parse_submission(source))
        except MinilangError as e:
            if debug:
                traceback.print_exc()
            else:
                print(str(e))


USAGE = """Usage:
  python cli.py tokens <file.mini>
  python cli.py parse <file.mini>
  python cli.py run <file.mini>
  python cli.py eval "<source>"
  python cli.py repl
  (optional) --debug to show Python traceback
  (optional) --trace to log every evaluated node to stderr"""


def main():
    debug = False
    if "--debug" in sys.argv:
        debug = True
        sys.argv.remove("--debug")

    trace = False
    if "--trace" in sys.argv:
        trace = True
        sys.argv.remove("--trace")

    if len(sys.argv) < 2:
        print(USAGE)
        sys.exit(1)

    cmd = sys.argv[1]

    if cmd == "repl":
        if len(sys.argv) != 2:
            print(USAGE)
            sys.exit(1)
        cmd_repl(debug=debug, trace=trace)
        return

    if len(sys.argv) != 3:
        print(USAGE)
        sys.exit(1)

    arg = sys.argv[2]

    if cmd == "tokens":
        cmd_tokens(arg, debug=debug)
    elif cmd == "parse":
        cmd_parse(arg, debug=debug)
    elif cmd == "run":
        cmd_run(arg, debug=debug, trace=trace)
    elif cmd == "eval":
        cmd_eval(arg)
    else:
        print(f"Unknown command: {cmd}")
        sys.exit(1)


if __name__ == "__main__":
    main()
