import pytest

from ast_nodes import (
    Program, Block, Assign, Print, Pass,
    BinaryOp, IntLiteral, VarRef, Input, IntConvert,
    ADD, SUB, MUL, FLOOR_DIV,
)
from errors import LexError, ParseError
from parser import parse_source


def parse(source):
    return parse_source(source, "t.slpy")


def parse_error(source):
    with pytest.raises(ParseError) as info:
        parse(source)
    return info.value


def only_value(source):
    program = parse(source)
    (stmt,) = program.body.statements
    return stmt.value


def test_program_structure():
    program = parse("x = 1\nprint(x)\npass\n")
    assert isinstance(program, Program)
    assert isinstance(program.body, Block)
    kinds = [type(s) for s in program.body.statements]
    assert kinds == [Assign, Print, Pass]
    assign = program.body.statements[0]
    assert assign.name == "x"
    assert isinstance(assign.value, IntLiteral) and assign.value.value == 1


def test_multiplication_binds_tighter_than_addition():
    expr = only_value("x = 2 + 3 * 4\n")
    assert isinstance(expr, BinaryOp) and expr.op == ADD
    assert isinstance(expr.left, IntLiteral)
    assert isinstance(expr.right, BinaryOp) and expr.right.op == MUL


def test_subtraction_is_left_associative():
    expr = only_value("x = 1 - 2 - 3\n")
    assert expr.op == SUB
    assert isinstance(expr.left, BinaryOp) and expr.left.op == SUB
    assert expr.right.value == 3


def test_floor_division_is_left_associative_with_multiplication():
    expr = only_value("x = a * b // c\n")
    assert expr.op == FLOOR_DIV
    assert expr.left.op == MUL
    assert expr.right.name == "c"


def test_floor_division_binds_tighter_than_subtraction():
    expr = only_value("print(0 - 7 // 2)\n")
    assert expr.op == SUB
    assert expr.right.op == FLOOR_DIV


def test_parentheses_group_without_a_node():
    expr = only_value("x = (1 + 2) * 3\n")
    assert expr.op == MUL
    assert isinstance(expr.left, BinaryOp) and expr.left.op == ADD


def test_int_convert_is_kept_as_a_node():
    expr = only_value("print(int(2 + 2))\n")
    assert isinstance(expr, IntConvert)
    assert isinstance(expr.inner, BinaryOp)


def test_input_prompt_is_decoded():
    expr = only_value('x = input("a\\tb\\n")\n')
    assert isinstance(expr, Input)
    assert expr.prompt == "a\tb\n"


def test_variable_reference():
    expr = only_value("y = x_1\n")
    assert isinstance(expr, VarRef) and expr.name == "x_1"


def test_binary_location_is_the_operator():
    expr = only_value("x = 1 + 2 * 3\n")
    assert (expr.location.row, expr.location.column) == (1, 7)
    assert (expr.right.location.row, expr.right.location.column) == (1, 11)
    assert expr.location.source_name == "t.slpy"


def test_leaf_and_statement_locations():
    program = parse("pass\ny = int(input(\"n\"))\n")
    assign = program.body.statements[1]
    assert (assign.location.row, assign.location.column) == (2, 1)
    assert (assign.value.location.row, assign.value.location.column) == (2, 5)
    assert (assign.value.inner.location.row, assign.value.inner.location.column) == (2, 9)
    assert (program.location.row, program.location.column) == (1, 1)
    assert (program.body.location.row, program.body.location.column) == (1, 1)


def test_indented_statements_are_accepted():
    program = parse("x = 1\n    print(x)\n")
    assert len(program.body.statements) == 2


def test_blank_lines_and_comments_between_statements():
    program = parse("x = 1\n\n# note\n\nprint(x)\n")
    assert len(program.body.statements) == 2


def test_empty_program_is_rejected():
    err = parse_error("")
    assert "expected an identifier" in err.message


def test_comment_only_program_is_rejected():
    parse_error("# nothing here\n")


def test_missing_final_newline_is_rejected():
    err = parse_error("x = 1")
    assert err.message == "Syntax error: expected end-of-line but saw '[EOF]' instead."


def test_unclosed_print():
    err = parse_error("print(1\n")
    assert err.message == "Syntax error: expected ')' but saw '[NEWLINE]' instead."
    assert (err.location.row, err.location.column) == (1, 8)


def test_bad_leaf():
    err = parse_error("x = )\n")
    assert "while parsing a leaf expression" in err.message
    assert (err.location.row, err.location.column) == (1, 5)


def test_input_requires_string_literal():
    err = parse_error("x = input(5)\n")
    assert "a string literal" in err.message


def test_two_statements_on_one_line_are_rejected():
    err = parse_error("x = 1 y = 2\n")
    assert "end-of-line" in err.message


def test_assignment_needs_equals():
    err = parse_error("x 1\n")
    assert "expected '='" in err.message


def test_print_is_not_an_assignable_name():
    parse_error("print = 1\n")


def test_literal_out_of_range():
    err = parse_error("x = 2147483648\n")
    assert "32-bit" in err.message


def test_lex_errors_come_before_any_parsing():
    # the first line is a syntax error, but lexing fails first
    with pytest.raises(LexError):
        parse("x = = 1\ny = 007\n")
