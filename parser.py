from ast_nodes import (
    Program, Block, VarDecl, Assign, Var, BinOp, UnaryOp, Num, Str, If, While, Print,
)
from errors import NestingError, ParseError


# expr tier: additive and every comparison share one precedence level
EXPR_OPS = ("PLUS", "MINUS", "EQUALS", "NOT_EQUALS", "LESS", "GREATER", "LESS_EQUALS", "GREATER_EQUALS")
TERM_OPS = ("MULTIPLY", "DIVIDE")


class Parser:
    def __init__(self, lexer):
        self.lexer = lexer
        self.current_token = self.pull()

    # semicolons are lexed but carry no meaning; drop them like whitespace
    def pull(self):
        tok = self.lexer.get_next_token()
        while tok.type == "SEMICOLON":
            tok = self.lexer.get_next_token()
        return tok

    def error(self, expected=None):
        tok = self.current_token
        raise ParseError(expected=expected, got=tok.type, line=tok.line, column=tok.column)

    # move to next token, but only if it matches what we expect
    def eat(self, token_type):
        if self.current_token.type != token_type:
            self.error(expected=token_type)
        tok = self.current_token
        self.current_token = self.pull()
        return tok

    # ---------- TOP LEVEL ----------
    def parse(self):
        try:
            node = self.program()
        except RecursionError:
            raise NestingError() from None
        if self.current_token.type != "EOF":
            self.error(expected="EOF")
        return node

    def parse_expression(self):
        try:
            node = self.expr()
        except RecursionError:
            raise NestingError() from None
        if self.current_token.type != "EOF":
            self.error(expected="EOF")
        return node

    def program(self):
        statements = []
        while self.current_token.type != "EOF":
            statements.append(self.statement())
        return Program(tuple(statements), line=1)

    # ---------- STATEMENTS ----------
    def statement(self):
        kind = self.current_token.type
        if kind == "LBRACE":
            return self.block()
        if kind == "IF":
            return self.if_statement()
        if kind == "WHILE":
            return self.while_statement()
        if kind == "LET":
            return self.var_declaration()
        if kind == "PRINT":
            return self.print_statement()
        # a leading name always means assignment; `x` alone is not a statement
        if kind == "IDENTIFIER":
            return self.assignment_statement()
        return self.expr()

    def block(self):
        tok = self.eat("LBRACE")
        statements = []
        while self.current_token.type != "RBRACE":
            if self.current_token.type == "EOF":
                self.error(expected="RBRACE")
            statements.append(self.statement())
        self.eat("RBRACE")
        return Block(tuple(statements), line=tok.line)

    def if_statement(self):
        tok = self.eat("IF")
        self.eat("LPAREN")
        cond = self.expr()
        self.eat("RPAREN")
        then = self.statement()
        else_ = None
        if self.current_token.type == "ELSE":
            self.eat("ELSE")
            else_ = self.statement()
        return If(cond, then, else_, line=tok.line)

    def while_statement(self):
        tok = self.eat("WHILE")
        self.eat("LPAREN")
        cond = self.expr()
        self.eat("RPAREN")
        body = self.statement()
        return While(cond, body, line=tok.line)

    def var_declaration(self):
        tok = self.eat("LET")
        name = self.eat("IDENTIFIER").value
        self.eat("ASSIGN")
        init = self.expr()
        return VarDecl(name, init, line=tok.line)

    def print_statement(self):
        tok = self.eat("PRINT")
        return Print(self.expr(), line=tok.line)

    def assignment_statement(self):
        name_token = self.eat("IDENTIFIER")
        self.eat("ASSIGN")
        value = self.expr()
        return Assign(name_token.value, value, line=name_token.line)

    # ---------- EXPRESSIONS ----------
    # expr -> term ((+|-|==|!=|<|>|<=|>=) term)*
    def expr(self):
        node = self.term()
        while self.current_token.type in EXPR_OPS:
            op_token = self.eat(self.current_token.type)
            node = BinOp(node, op_token.type, self.term(), line=op_token.line)
        return node

    # term -> factor ((*|/) factor)*
    def term(self):
        node = self.factor()
        while self.current_token.type in TERM_OPS:
            op_token = self.eat(self.current_token.type)
            node = BinOp(node, op_token.type, self.factor(), line=op_token.line)
        return node

    # factor -> (+|-) factor | NUMBER | STRING | IDENTIFIER | (expr)
    def factor(self):
        tok = self.current_token

        if tok.type in ("PLUS", "MINUS"):
            self.eat(tok.type)
            return UnaryOp(tok.type, self.factor(), line=tok.line)

        if tok.type == "NUMBER":
            self.eat("NUMBER")
            return Num(tok.value, line=tok.line)

        if tok.type == "STRING":
            self.eat("STRING")
            return Str(tok.value, line=tok.line)

        if tok.type == "IDENTIFIER":
            self.eat("IDENTIFIER")
            return Var(tok.value, line=tok.line)

        if tok.type == "LPAREN":
            self.eat("LPAREN")
            node = self.expr()
            self.eat("RPAREN")
            return node

        self.error()
