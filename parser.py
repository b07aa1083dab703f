from ast_nodes import (
    Program, Block, Assign, Print, Pass,
    BinaryOp, IntLiteral, VarRef, Input, IntConvert,
    SYMBOL_OPERATORS,
)
from errors import ParseError, SourceLocation
from lexer import tokenize


class Parser:
    """Recursive-descent parser, one method per grammar rule.

    Grammar (lowest precedence outermost):

        program        := block
        block          := statement EOLN { statement EOLN }
        statement      := name '=' expr | 'print' '(' expr ')' | 'pass'
        expr           := addition
        addition       := multiplication { ('+' | '-') multiplication }
        multiplication := leaf { ('*' | '//') leaf }
        leaf           := '(' expr ')' | 'input' '(' string ')'
                        | 'int' '(' expr ')' | integer | name

    There is no backtracking and no recovery: the first mismatch raises
    ParseError.
    """

    def __init__(self, stream):
        self.stream = stream

    def location_of(self, tok) -> SourceLocation:
        return SourceLocation(self.stream.source_name, tok.row, tok.column)

    def here(self) -> SourceLocation:
        return self.location_of(self.stream.current())

    # ---------- TOP LEVEL ----------
    def parse(self):
        return self.program()

    def program(self):
        location = self.here()
        body = self.block()
        return Program(body, location)

    def block(self):
        location = self.here()
        statements = []
        while True:
            statements.append(self.statement())
            self.stream.consume_end_of_line()
            if self.stream.is_end_of_stream():
                break
        return Block(statements, location)

    # ---------- STATEMENTS ----------
    def statement(self):
        stream = self.stream
        location = self.here()

        if stream.matches("print"):
            stream.consume("print")
            stream.consume("(")
            value = self.expr()
            stream.consume(")")
            return Print(value, location)

        if stream.matches("pass"):
            stream.consume("pass")
            return Pass(location)

        name = stream.consume_identifier()
        stream.consume("=")
        value = self.expr()
        return Assign(name, value, location)

    # ---------- EXPRESSIONS ----------
    def expr(self):
        return self.addition()

    def addition(self):
        node = self.multiplication()
        while self.stream.matches("+") or self.stream.matches("-"):
            op_tok = self.stream.current()
            self.stream.advance()
            right = self.multiplication()
            node = BinaryOp(SYMBOL_OPERATORS[op_tok.lexeme], node, right, self.location_of(op_tok))
        return node

    def multiplication(self):
        node = self.leaf()
        while self.stream.matches("*") or self.stream.matches("//"):
            op_tok = self.stream.current()
            self.stream.advance()
            right = self.leaf()
            node = BinaryOp(SYMBOL_OPERATORS[op_tok.lexeme], node, right, self.location_of(op_tok))
        return node

    def leaf(self):
        stream = self.stream
        location = self.here()

        if stream.matches("("):
            stream.consume("(")
            node = self.expr()
            stream.consume(")")
            return node

        if stream.matches("input"):
            stream.consume("input")
            stream.consume("(")
            prompt = stream.consume_string_literal()
            stream.consume(")")
            return Input(prompt, location)

        if stream.matches("int"):
            stream.consume("int")
            stream.consume("(")
            inner = self.expr()
            stream.consume(")")
            return IntConvert(inner, location)

        if stream.is_integer_literal():
            return IntLiteral(stream.consume_integer_literal(), location)

        if stream.is_identifier():
            return VarRef(stream.consume_identifier(), location)

        saw = stream.current().describe()
        raise ParseError(location, f"Syntax error: unexpected '{saw}' while parsing a leaf expression.")


def parse_tokens(stream):
    program = Parser(stream).parse()
    if not stream.is_end_of_stream():
        raise ParseError(stream.locate(), "Syntax error: extra input after the end of the program.")
    return program


def parse_source(text, source_name: str = "<input>"):
    # lexing finishes completely before parsing starts
    return parse_tokens(tokenize(text, source_name))
