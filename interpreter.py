from ast_nodes import (
    NODE_TYPES,
    Program, Block, VarDecl, Assign, Var, BinOp, UnaryOp, Num, Str, If, While, Print,
)
from errors import DispatchError, NestingError, UndefinedVariableError
import values


class Interpreter:
    """Tree-walking evaluator over one flat global environment.

    ``output`` receives one string per executed ``print``; it defaults to the
    builtin ``print``. ``trace``, when given, receives a ``TRACE ...`` line
    for every node visited.
    """

    def __init__(self, output=None, trace=None):
        self.globals = {}
        self.output = output if output is not None else print
        self.trace = trace
        self.visitors = {
            Program: self.visit_sequence,
            Block: self.visit_sequence,
            VarDecl: self.visit_var_decl,
            Assign: self.visit_assign,
            Var: self.visit_var,
            BinOp: self.visit_binop,
            UnaryOp: self.visit_unary,
            Num: self.visit_num,
            Str: self.visit_literal,
            If: self.visit_if,
            While: self.visit_while,
            Print: self.visit_print,
        }
        missing = [t.__name__ for t in NODE_TYPES if t not in self.visitors]
        if missing:
            raise DispatchError(", ".join(missing))

    def interpret(self, program):
        try:
            return self.visit(program)
        except RecursionError:
            raise NestingError() from None

    def visit(self, node):
        visitor = self.visitors.get(type(node))
        if visitor is None:
            raise DispatchError(type(node).__name__)
        self.trace_node(node)
        return visitor(node)

    def trace_node(self, node):
        if self.trace is not None:
            self.trace(f"TRACE line={node.line} {type(node).__name__}")

    # ---------- STATEMENTS ----------
    def visit_sequence(self, node):
        result = None
        for stmt in node.statements:
            result = self.visit(stmt)
        return result

    def visit_var_decl(self, node):
        # redeclaration silently rebinds
        self.globals[node.name] = self.visit(node.init)

    def visit_assign(self, node):
        if node.name not in self.globals:
            raise UndefinedVariableError(node.name)
        self.globals[node.name] = self.visit(node.value)

    def visit_if(self, node):
        if values.is_truthy(self.visit(node.cond)):
            return self.visit(node.then)
        if node.else_ is not None:
            return self.visit(node.else_)
        return None

    def visit_while(self, node):
        result = None
        while values.is_truthy(self.visit(node.cond)):
            result = self.visit(node.body)
        return result

    def visit_print(self, node):
        value = self.visit(node.expr)
        self.output(values.display(value))
        return value

    # ---------- EXPRESSIONS ----------
    def visit_var(self, node):
        if node.name not in self.globals:
            raise UndefinedVariableError(node.name)
        return self.globals[node.name]

    def visit_binop(self, node):
        # Walk the left spine in a loop so long chains like 1 + 1 + ... + 1
        # do not recurse once per operator. Both sides always run; there is
        # no short-circuiting.
        spine = [node]
        left = node.left
        while isinstance(left, BinOp):
            self.trace_node(left)
            spine.append(left)
            left = left.left

        value = self.visit(left)
        for binop in reversed(spine):
            value = values.binary(binop.op, value, self.visit(binop.right))
        return value

    def visit_unary(self, node):
        return values.unary(node.op, self.visit(node.expr))

    def visit_num(self, node):
        return float(node.value)

    def visit_literal(self, node):
        return node.value
