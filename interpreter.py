import re
import sys
from collections import deque

from ast_nodes import (
    Program, Assign, Print, Pass,
    BinaryOp, IntLiteral, VarRef, Input, IntConvert,
    ADD, SUB, MUL, FLOOR_DIV,
)
from errors import UnboundVariable, DivisionByZero, MalformedInput
from lexer import INT_MIN, INT_MAX
from printer import Printer

_INTEGER_RE = re.compile(r"[+-]?[0-9]+\Z")


def wrap32(value: int) -> int:
    # two's complement wraparound to the signed 32-bit range
    return ((value - INT_MIN) % 2 ** 32) + INT_MIN


def divide_toward_zero(left: int, right: int) -> int:
    quotient = abs(left) // abs(right)
    if (left < 0) != (right < 0):
        quotient = -quotient
    return wrap32(quotient)


def apply_operator(op, left: int, right: int) -> int:
    if op == ADD:
        return wrap32(left + right)
    if op == SUB:
        return wrap32(left - right)
    if op == MUL:
        return wrap32(left * right)
    if op == FLOOR_DIV:
        return divide_toward_zero(left, right)
    raise ValueError(f"Unknown operator: {op}")


class Console:
    """Output line sink plus a whitespace-token integer input source."""

    def __init__(self, stdout=None, stdin=None, stderr=None):
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stderr = stderr if stderr is not None else sys.stderr
        self.pending = deque()  # input tokens read but not yet used

    def write(self, text: str):
        self.stdout.write(text)
        self.stdout.flush()

    def write_line(self, text: str):
        self.stdout.write(text + "\n")

    def trace(self, text: str):
        print(text, file=self.stderr)

    def read_token(self):
        while not self.pending:
            line = self.stdin.readline()
            if line == "":
                return None
            self.pending.extend(line.split())
        return self.pending.popleft()

    def read_int(self, location) -> int:
        text = self.read_token()
        if text is None:
            raise MalformedInput(location, "Input ended while reading an integer.")
        if not _INTEGER_RE.match(text):
            raise MalformedInput(location, f"Expected an integer on input but saw '{text}'.")
        value = int(text)
        if value < INT_MIN or value > INT_MAX:
            raise MalformedInput(location, f"Input integer {text} does not fit in a 32-bit integer.")
        return value


class Interpreter:
    def __init__(self, console=None, trace: bool = False):
        self.console = console if console is not None else Console()
        self.trace_enabled = trace
        self.printer = Printer()

    def run(self, program):
        if not isinstance(program, Program):
            raise TypeError("Interpreter expects a Program node at the top")
        env = {}
        self.execute_block(program.body, env)

    def execute_in(self, program, env):
        # used by the REPL to keep bindings alive between entries
        self.execute_block(program.body, env)
        return env

    # -------- statements --------
    def execute_block(self, block, env):
        for stmt in block.statements:
            self.execute(stmt, env)

    def execute(self, stmt, env):
        if self.trace_enabled:
            loc = stmt.location
            where = f"{loc.row}:{loc.column}" if loc is not None else "?"
            self.console.trace(f"TRACE {where} {self.printer.render_statement(stmt).rstrip()}")

        if isinstance(stmt, Assign):
            # value is computed before the name is bound
            value = self.evaluate(stmt.value, env)
            env[stmt.name] = value
            return

        if isinstance(stmt, Print):
            self.console.write_line(str(self.evaluate(stmt.value, env)))
            return

        if isinstance(stmt, Pass):
            return

        raise TypeError(f"Unknown statement node: {type(stmt).__name__}")

    # -------- expressions --------
    def evaluate(self, expr, env) -> int:
        if isinstance(expr, BinaryOp):
            left = self.evaluate(expr.left, env)
            right = self.evaluate(expr.right, env)
            if expr.op == FLOOR_DIV and right == 0:
                raise DivisionByZero(expr.location)
            return apply_operator(expr.op, left, right)

        if isinstance(expr, IntLiteral):
            return expr.value

        if isinstance(expr, VarRef):
            if expr.name not in env:
                raise UnboundVariable(expr.location, expr.name)
            return env[expr.name]

        if isinstance(expr, Input):
            self.console.write(expr.prompt)
            return self.console.read_int(expr.location)

        if isinstance(expr, IntConvert):
            # identity: the value domain is already integers
            return self.evaluate(expr.inner, env)

        raise TypeError(f"Unknown expression node: {type(expr).__name__}")
