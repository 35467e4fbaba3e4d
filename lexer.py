import math
from dataclasses import dataclass, field

from errors import LexError


TOKEN_KINDS = frozenset({
    "IF", "ELSE", "WHILE", "FOR", "LET", "PRINT", "RETURN",
    "IDENTIFIER", "NUMBER", "STRING",
    "PLUS", "MINUS", "MULTIPLY", "DIVIDE",
    "ASSIGN", "EQUALS", "NOT_EQUALS",
    "LESS", "GREATER", "LESS_EQUALS", "GREATER_EQUALS",
    "LPAREN", "RPAREN", "LBRACE", "RBRACE",
    "SEMICOLON", "COMMA",
    "EOF",
})

KEYWORDS = {
    "if": "IF",
    "else": "ELSE",
    "while": "WHILE",
    "for": "FOR",
    "let": "LET",
    "print": "PRINT",
    "return": "RETURN",
}

# two-character operators are matched before SYMBOLS
DOUBLE_SYMBOLS = {
    "==": "EQUALS",
    "!=": "NOT_EQUALS",
    "<=": "LESS_EQUALS",
    ">=": "GREATER_EQUALS",
}

SYMBOLS = {
    "=": "ASSIGN",
    "+": "PLUS",
    "-": "MINUS",
    "*": "MULTIPLY",
    "/": "DIVIDE",
    "(": "LPAREN",
    ")": "RPAREN",
    "{": "LBRACE",
    "}": "RBRACE",
    ";": "SEMICOLON",
    "<": "LESS",
    ">": "GREATER",
    ",": "COMMA",
}

WHITESPACE = " \t\n\r\v\f"
IDENT_START = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_"
DIGITS = "0123456789"
IDENT_CHARS = IDENT_START + DIGITS


@dataclass(frozen=True)
class Token:
    type: str
    value: object = None
    line: int = field(default=1, compare=False)
    column: int = field(default=1, compare=False)

    def __repr__(self):
        if self.value is not None:
            return f"{self.type}({self.value!r})"
        return f"{self.type}"


class Lexer:
    def __init__(self, text):
        self.text = text
        self.pos = 0
        self.current_char = text[0] if text else None
        self.line = 1
        self.column = 1

    def __iter__(self):
        while True:
            tok = self.get_next_token()
            yield tok
            if tok.type == "EOF":
                return

    def advance(self):
        # track line/column based on current_char before moving
        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1
        if self.pos >= len(self.text):
            self.current_char = None
        else:
            self.current_char = self.text[self.pos]

    def peek(self):
        nxt = self.pos + 1
        if nxt >= len(self.text):
            return None
        return self.text[nxt]

    def skip_whitespace(self):
        while self.current_char is not None and self.current_char in WHITESPACE:
            self.advance()

    def read_identifier(self):
        start_line, start_col = self.line, self.column
        result = ""
        while self.current_char is not None and self.current_char in IDENT_CHARS:
            result += self.current_char
            self.advance()

        kind = KEYWORDS.get(result, "IDENTIFIER")
        return Token(kind, result, line=start_line, column=start_col)

    def read_number(self):
        start_line, start_col = self.line, self.column
        result = ""
        while self.current_char is not None and self.current_char in DIGITS:
            result += self.current_char
            self.advance()

        if self.current_char != ".":
            # round through a double first; long digit runs become inf
            value = float(result)
            if math.isfinite(value):
                value = int(value)
            return Token("NUMBER", value, line=start_line, column=start_col)

        result += "."
        self.advance()
        while self.current_char is not None and self.current_char in DIGITS:
            result += self.current_char
            self.advance()
        return Token("NUMBER", float(result), line=start_line, column=start_col)

    def read_string(self):
        start_line, start_col = self.line, self.column
        self.advance()  # skip opening quote
        result = ""

        # no escapes; an unterminated string runs to the end of the text
        while self.current_char is not None and self.current_char != '"':
            result += self.current_char
            self.advance()

        if self.current_char == '"':
            self.advance()  # skip closing quote
        return Token("STRING", result, line=start_line, column=start_col)

    def get_next_token(self):
        while self.current_char is not None:

            if self.current_char in WHITESPACE:
                self.skip_whitespace()
                continue

            if self.current_char in IDENT_START:
                return self.read_identifier()

            if self.current_char in DIGITS:
                return self.read_number()

            if self.current_char == '"':
                return self.read_string()

            start_line, start_col = self.line, self.column

            nxt = self.peek()
            if nxt is not None and self.current_char + nxt in DOUBLE_SYMBOLS:
                text = self.current_char + nxt
                self.advance()
                self.advance()
                return Token(DOUBLE_SYMBOLS[text], text, line=start_line, column=start_col)

            if self.current_char in SYMBOLS:
                text = self.current_char
                self.advance()
                return Token(SYMBOLS[text], text, line=start_line, column=start_col)

            raise LexError(self.current_char, line=start_line, column=start_col)

        return Token("EOF", line=self.line, column=self.column)
