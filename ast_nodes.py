from dataclasses import dataclass, field


@dataclass(frozen=True)
class Node:
    # Optional source line (1-based). Parser sets this; ignored by ==.
    line: int | None = field(default=None, compare=False, kw_only=True)


@dataclass(frozen=True)
class Expr(Node):
    pass


@dataclass(frozen=True)
class Stmt(Node):
    pass


@dataclass(frozen=True)
class Program(Node):
    statements: tuple = ()


@dataclass(frozen=True)
class Block(Stmt):
    statements: tuple = ()


@dataclass(frozen=True)
class VarDecl(Stmt):
    name: str
    init: Expr


@dataclass(frozen=True)
class Assign(Stmt):
    name: str
    value: Expr


@dataclass(frozen=True)
class Var(Expr):
    name: str


@dataclass(frozen=True)
class BinOp(Expr):
    left: Expr
    op: str  # token kind, e.g. "PLUS"
    right: Expr


@dataclass(frozen=True)
class UnaryOp(Expr):
    op: str
    expr: Expr


@dataclass(frozen=True)
class Num(Expr):
    value: int | float


@dataclass(frozen=True)
class Str(Expr):
    value: str


@dataclass(frozen=True)
class If(Stmt):
    cond: Expr
    then: Node
    else_: Node | None = None


@dataclass(frozen=True)
class While(Stmt):
    cond: Expr
    body: Node


@dataclass(frozen=True)
class Print(Stmt):
    expr: Expr


NODE_TYPES = (Program, Block, VarDecl, Assign, Var, BinOp, UnaryOp, Num, Str, If, While, Print)
