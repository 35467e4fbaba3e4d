class MinilangError(Exception):
    kind = "Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LexError(MinilangError):
    kind = "LexError"

    def __init__(self, char: str, line: int | None = None, column: int | None = None):
        super().__init__(f"Invalid character: {char}")
        self.char = char
        self.line = line
        self.column = column


class ParseError(MinilangError):
    # reported to users as a SyntaxError
    kind = "SyntaxError"

    def __init__(self, expected: str | None = None, got: str | None = None,
                 line: int | None = None, column: int | None = None):
        message = "Invalid syntax"
        if line is not None:
            message += f" at line {line}, col {column}"
        super().__init__(message)
        self.expected = expected
        self.got = got
        self.line = line
        self.column = column


class UndefinedVariableError(MinilangError):
    kind = "NameError"

    def __init__(self, name: str):
        super().__init__(f"Variable '{name}' is not defined")
        self.name = name


class OperandError(MinilangError):
    kind = "TypeError"

    def __init__(self, op: str, *kinds: str):
        super().__init__(f"Unsupported operand kind(s) for {op}: {', '.join(kinds)}")
        self.op = op
        self.kinds = kinds


class DispatchError(MinilangError):
    kind = "InternalError"

    def __init__(self, node_kind: str):
        super().__init__(f"No visitor for {node_kind}")
        self.node_kind = node_kind


class NestingError(MinilangError):
    kind = "RecursionError"

    def __init__(self):
        super().__init__("Program nests too deeply")
