import math

import pytest

from ast_nodes import Node, Num, Program
from errors import DispatchError, NestingError, OperandError, UndefinedVariableError
from interpreter import Interpreter
from lexer import Lexer
from parser import Parser


def execute(text):
    lines = []
    value = Interpreter(output=lines.append).interpret(Parser(Lexer(text)).parse())
    return lines, value


def value_of(text):
    return execute(text)[1]


@pytest.mark.parametrize("text, expected", [
    ("2 + 3", 5),
    ("5 - 2", 3),
    ("3 * 4", 12),
    ("10 / 2", 5),
    ("2 + 3 * 4", 14),
    ("(2 + 3) * 4", 20),
    ("10 - 2 * 3", 4),
    ("10 / 4", 2.5),
    ("-3 + +2", -1),
    ("1 + 1 == 2", True),
    ("2 * 3 != 6", False),
    ("1 < 2 == 1 < 2", True),  # ((1 < 2) == 1) < 2, i.e. false < 2
])
def test_expression_values(text, expected):
    assert value_of(text) == expected


def test_division_is_real_valued():
    result = value_of("7 / 2")
    assert result == 3.5
    assert isinstance(value_of("10 / 2"), float)


def test_empty_program_has_no_value():
    assert execute("") == ([], None)


def test_sum_loop_output():
    text = 'let sum=0; let i=1; while (i<=5) { sum=sum+i; i=i+1; } print "Sum is:"; print sum;'
    lines, _ = execute(text)
    assert lines == ["Sum is:", "15"]


def test_block_does_not_scope_variables():
    text = "let x = 1; while (x < 3) { let y = x; x = x + 1; } print y;"
    lines, _ = execute(text)
    assert lines == ["2"]


def test_if_body_leaks_declarations():
    lines, _ = execute("if (1) { let z = 5 } print z")
    assert lines == ["5"]


def test_redeclaration_rebinds():
    lines, _ = execute("let x = 1; let x = 2; print x;")
    assert lines == ["2"]


def test_assign_to_undefined_variable():
    with pytest.raises(UndefinedVariableError) as info:
        execute("x = 1")
    assert info.value.name == "x"
    assert str(info.value) == "Variable 'x' is not defined"
    assert info.value.kind == "NameError"


def test_read_of_undefined_variable():
    with pytest.raises(UndefinedVariableError) as info:
        execute("print y")
    assert info.value.name == "y"


def test_partial_output_survives_failure():
    lines = []
    interpreter = Interpreter(output=lines.append)
    with pytest.raises(UndefinedVariableError):
        interpreter.interpret(Parser(Lexer('print "before"; print missing; print "after"')).parse())
    assert lines == ["before"]


def test_if_else_branches():
    assert execute('if (0) print "a" else print "b"')[0] == ["b"]
    assert execute('if ("") print "a" else print "b"')[0] == ["b"]
    assert execute('if ("0") print "a" else print "b"')[0] == ["a"]
    assert execute('if (1 == 2) print "a"')[0] == []


def test_while_result_is_last_body_value():
    assert value_of("let i = 0 while (i < 3) i = i + 1") is None
    assert value_of("let i = 0 while (i < 3) { i = i + 1; print i }") == 3


def test_print_returns_value_and_formats():
    lines, value = execute('print 1 < 2; print 4 / 2; print 0.1 + 0.2; print "s"')
    assert lines == ["true", "2", "0.30000000000000004", "s"]
    assert value == "s"


def test_condition_evaluates_each_iteration():
    lines, _ = execute("let n = 3 while (n) { print n n = n - 1 }")
    assert lines == ["3", "2", "1"]


def test_no_short_circuit():
    # both sides run, so the undefined name on the right is always reported
    with pytest.raises(UndefinedVariableError):
        execute("(1 == 2) == missing")


def test_interpreters_do_not_share_state():
    first = Interpreter(output=lambda line: None)
    first.interpret(Parser(Lexer("let shared = 1")).parse())
    second = Interpreter(output=lambda line: None)
    with pytest.raises(UndefinedVariableError):
        second.interpret(Parser(Lexer("print shared")).parse())


def test_environment_persists_across_interpret_calls():
    lines = []
    interpreter = Interpreter(output=lines.append)
    interpreter.interpret(Parser(Lexer("let a = 2")).parse())
    interpreter.interpret(Parser(Lexer("print a * a")).parse())
    assert lines == ["4"]


def test_trace_sink_sees_every_node():
    seen = []
    Interpreter(output=lambda line: None, trace=seen.append).interpret(Program((Num(1, line=4),)))
    assert seen == ["TRACE line=None Program", "TRACE line=4 Num"]


def test_unknown_node_kind_is_internal_error():
    with pytest.raises(DispatchError) as info:
        Interpreter().visit(Node())
    assert str(info.value) == "No visitor for Node"


# Coercion table for mixed operand kinds. These are deliberate choices,
# kept here so any change to them is visible.

@pytest.mark.parametrize("text, expected", [
    ('"Sum: " + 15', "Sum: 15"),
    ('1.5 + "x"', "1.5x"),
    ('"a" + "b"', "ab"),
    ('"flag " + (1 < 2)', "flag true"),
    ("(1 < 2) + 1", 2.0),
    ("(1 < 2) * 3", 3.0),
    ('"abc" < "abd"', True),
    ('"b" >= "a"', True),
    ('1 == "1"', False),
    ('1 != "1"', True),
    ("(1 < 2) == 1", False),
    ("1 == 1.0", True),
    ('+"12"', 12.0),
    ('-"2.5"', -2.5),
    ('+" 1e3 "', 1000.0),
    ('-".5"', -0.5),
    ('+""', 0.0),
    ("-(1 < 2)", -1.0),
])
def test_mixed_kind_operators(text, expected):
    result = value_of(text)
    assert result == expected
    assert type(result) is type(expected)


@pytest.mark.parametrize("text", [
    '"a" - 1',
    '"a" * 2',
    '4 / "2"',
    '"a" < 1',
    '-"abc"',
    '+"1_000"',
    '+"inf"',
    '-"nan"',
    '+"0x10"',
])
def test_unsupported_operand_kinds(text):
    with pytest.raises(OperandError) as info:
        execute(text)
    assert info.value.kind == "TypeError"


def test_division_by_zero_follows_doubles():
    assert value_of("1 / 0") == math.inf
    assert value_of("-1 / 0") == -math.inf
    assert math.isnan(value_of("0 / 0"))
    lines, _ = execute("print 1 / 0; print 0 / 0; if (0 / 0) print 1 else print 2")
    assert lines == ["Infinity", "NaN", "2"]


def test_numbers_are_doubles():
    assert value_of("9007199254740993 == 9007199254740992") is True
    assert isinstance(value_of("2 * 3"), float)
    assert isinstance(value_of("(1 < 2) - (1 < 2)"), float)


def test_huge_literal_is_infinity():
    lines, value = execute("print " + "9" * 5000)
    assert lines == ["Infinity"]
    assert value == math.inf


def test_repeated_growth_overflows_to_infinity():
    text = "let x = 1 let i = 0 while (i < 400) { x = x * 10 i = i + 1 } print x / 3 print x > 0"
    lines, _ = execute(text)
    assert lines == ["Infinity", "true"]


def test_long_operator_chain():
    assert value_of(" + ".join(["1"] * 5000)) == 5000
    assert value_of(" * ".join(["2"] * 10)) == 1024


def test_long_chain_keeps_left_to_right_order():
    lines, value = execute('print "a" + 1 + 2; 10 - 1 - 2 - 3')
    assert lines == ["a12"]
    assert value == 4


def test_deep_nesting_is_a_language_error():
    text = "(" * 5000 + "1" + ")" * 5000
    with pytest.raises(NestingError) as info:
        Interpreter(output=lambda line: None).interpret(Parser(Lexer(text)).parse())
    assert info.value.kind == "RecursionError"


@pytest.mark.parametrize("text, expected", [
    ("print 100", "100"),
    ("print -0", "0"),
    ("print 1 / 8", "0.125"),
    ("print 123.456", "123.456"),
    ("print 100000000000000000000", "100000000000000000000"),
    ("print 1000000000000000000000", "1e+21"),
    ("print 1234567890123456789012345", "1.2345678901234568e+24"),
    ("print 1 / 1000000", "0.000001"),
    ("print 1 / 10000000", "1e-7"),
    ("print 3 / 20000000", "1.5e-7"),
    ("print -2.5", "-2.5"),
])
def test_number_display(text, expected):
    assert execute(text)[0] == [expected]
