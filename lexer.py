from dataclasses import dataclass

from errors import LexError, ParseError, SourceLocation
from escapes import ESCAPES, de_escape

# Integer domain of the language: signed 32-bit.
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1

NEWLINE = "\n"
END_OF_STREAM = ""

SINGLE_CHAR_TOKENS = "=+-*()"

# Tokenizer states
LINE_START = "LineStart"                      # at the start of a line, no token seen yet
IN_LINE = "InLine"                            # within a line, at least one token seen
INDENT = "Indent"                             # reading leading spaces/tabs
COMMENT_AT_LINE_START = "CommentAtLineStart"
COMMENT_IN_LINE = "CommentInLine"
NUMBER = "Number"                             # digits of a literal starting with 1-9
ZERO_LITERAL = "ZeroLiteral"
STRING_BODY = "StringBody"
STRING_ESCAPE = "StringEscape"                # just saw a backslash inside a string
SLASH_SEEN = "SlashSeen"                      # first half of //
IDENTIFIER = "Identifier"
HALTED = "Halted"


def is_digit(ch) -> bool:
    return ch is not None and "0" <= ch <= "9"


def is_identifier_start(ch) -> bool:
    return ch is not None and (("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_")


def is_identifier_char(ch) -> bool:
    return is_identifier_start(ch) or is_digit(ch)


def is_name(s: str) -> bool:
    if not s or not is_identifier_start(s[0]):
        return False
    return all(is_identifier_char(ch) for ch in s)


def is_number(s: str) -> bool:
    if s == "0":
        return True
    if not s or not ("1" <= s[0] <= "9"):
        return False
    return all(is_digit(ch) for ch in s)


def is_string(s: str) -> bool:
    return len(s) >= 2 and s[0] == '"' and s[-1] == '"'


def is_indentation(s: str) -> bool:
    return s != "" and s[0] in " \t"


def indentation_width(s: str) -> int:
    # tabs advance to the next multiple of 8
    width = 0
    for ch in s:
        if ch == "\t":
            width += 8 - (width % 8)
        else:
            width += 1
    return width


@dataclass(frozen=True)
class Token:
    lexeme: str
    row: int
    column: int

    def describe(self) -> str:
        if self.lexeme == NEWLINE:
            return "[NEWLINE]"
        if self.lexeme == END_OF_STREAM:
            return "[EOF]"
        if is_indentation(self.lexeme):
            return f"[INDENT-{indentation_width(self.lexeme)}]"
        return self.lexeme

    def __str__(self):
        return f"{self.describe()}:{self.row}:{self.column}"


class TokenStream:
    """Cursor over a finished token sequence.

    The sequence always ends with the end-of-stream token. Indentation
    tokens are kept in the sequence (they show up in token dumps) but the
    cursor steps over them, so the parser never sees them.
    """

    def __init__(self, source_name: str, tokens):
        self.source_name = source_name
        self.tokens = list(tokens)
        if not self.tokens or self.tokens[-1].lexeme != END_OF_STREAM:
            last = self.tokens[-1] if self.tokens else Token(END_OF_STREAM, 1, 1)
            self.tokens.append(Token(END_OF_STREAM, last.row, last.column))
        self.where = 0
        self._skip_indentation()

    def _skip_indentation(self):
        while is_indentation(self.tokens[self.where].lexeme):
            self.where += 1

    def reset(self):
        self.where = 0
        self._skip_indentation()

    def locate(self) -> SourceLocation:
        tok = self.current()
        return SourceLocation(self.source_name, tok.row, tok.column)

    def current(self) -> Token:
        return self.tokens[self.where]

    def advance(self):
        if self.is_end_of_stream():
            raise ParseError(self.locate(), "Syntax error: unexpected end of input.")
        self.where += 1
        self._skip_indentation()

    # ---------- queries ----------
    def matches(self, literal: str) -> bool:
        return self.current().lexeme == literal

    def is_identifier(self) -> bool:
        return is_name(self.current().lexeme)

    def is_integer_literal(self) -> bool:
        return is_number(self.current().lexeme)

    def is_string_literal(self) -> bool:
        return is_string(self.current().lexeme)

    def is_end_of_line(self) -> bool:
        return self.current().lexeme == NEWLINE

    def is_end_of_stream(self) -> bool:
        return self.current().lexeme == END_OF_STREAM

    # ---------- consumers ----------
    def error_here(self, expected: str):
        saw = self.current().describe()
        raise ParseError(self.locate(), f"Syntax error: expected {expected} but saw '{saw}' instead.")

    def consume(self, literal: str) -> Token:
        tok = self.current()
        if tok.lexeme != literal:
            self.error_here(f"'{literal}'")
        self.advance()
        return tok

    def consume_identifier(self) -> str:
        if not self.is_identifier():
            self.error_here("an identifier")
        name = self.current().lexeme
        self.advance()
        return name

    def consume_integer_literal(self) -> int:
        if not self.is_integer_literal():
            self.error_here("an integer constant")
        text = self.current().lexeme
        value = int(text)
        if value > INT_MAX:
            raise ParseError(self.locate(), f"integer literal {text} does not fit in a 32-bit integer")
        self.advance()
        return value

    def consume_string_literal(self) -> str:
        if not self.is_string_literal():
            self.error_here("a string literal")
        raw = self.current().lexeme
        self.advance()
        return de_escape(raw[1:-1])

    def consume_end_of_line(self):
        if not self.is_end_of_line():
            self.error_here("end-of-line")
        self.advance()

    def dump(self):
        return [str(tok) for tok in self.tokens]


class Lexer:
    def __init__(self, text, source_name: str = "<input>"):
        self.text = text
        self.source_name = source_name
        self.pos = 0
        self.current_char = text[0] if text else None
        self.row = 1
        self.column = 1

        self.state = LINE_START
        self.chars = []
        self.start_row = 1
        self.start_column = 1
        self.tokens = []

        self.handlers = {
            LINE_START: self.at_boundary,
            IN_LINE: self.at_boundary,
            INDENT: self.in_indent,
            COMMENT_AT_LINE_START: self.in_comment,
            COMMENT_IN_LINE: self.in_comment,
            NUMBER: self.in_number,
            ZERO_LITERAL: self.in_zero,
            STRING_BODY: self.in_string,
            STRING_ESCAPE: self.in_escape,
            SLASH_SEEN: self.in_slash,
            IDENTIFIER: self.in_identifier,
        }

    # ---------- character cursor ----------
    def advance(self):
        # track row/column based on current_char before moving
        if self.current_char == "\n":
            self.row += 1
            self.column = 1
        elif self.current_char == "\t":
            self.column += 8 - (self.column - 1) % 8
        else:
            self.column += 1
        self.pos += 1
        if self.pos >= len(self.text):
            self.current_char = None
        else:
            self.current_char = self.text[self.pos]

    def start_fresh_token(self):
        self.start_row = self.row
        self.start_column = self.column
        self.chars = []

    def issue_token(self):
        self.tokens.append(Token("".join(self.chars), self.start_row, self.start_column))
        self.start_fresh_token()

    def consume_char(self):
        self.chars.append(self.current_char)
        self.advance()

    def consume_then_issue(self):
        self.consume_char()
        self.issue_token()

    def error_here(self, message: str):
        raise LexError(SourceLocation(self.source_name, self.row, self.column), message)

    # ---------- driver ----------
    def lex(self) -> TokenStream:
        while self.state != HALTED:
            self.handlers[self.state]()
        self.tokens.append(Token(END_OF_STREAM, self.row, self.column))
        return TokenStream(self.source_name, self.tokens)

    # ---------- states ----------
    def at_boundary(self):
        ch = self.current_char

        if ch is None:
            self.state = HALTED

        elif "1" <= ch <= "9":
            self.start_fresh_token()
            self.state = NUMBER

        elif ch == "0":
            self.start_fresh_token()
            self.consume_char()
            self.state = ZERO_LITERAL

        elif ch == '"':
            self.start_fresh_token()
            self.consume_char()
            self.state = STRING_BODY

        elif is_identifier_start(ch):
            self.start_fresh_token()
            self.state = IDENTIFIER

        elif ch == "\n":
            if self.state == IN_LINE:
                self.start_fresh_token()
                self.consume_then_issue()
            else:
                # blank line, nothing to end
                self.advance()
            self.state = LINE_START

        elif ch == "#":
            if self.state == LINE_START:
                self.state = COMMENT_AT_LINE_START
            else:
                self.state = COMMENT_IN_LINE

        elif ch in " \t":
            if self.state == LINE_START:
                self.start_fresh_token()
                self.state = INDENT
            else:
                self.advance()

        elif ch in SINGLE_CHAR_TOKENS:
            self.start_fresh_token()
            self.consume_then_issue()
            self.state = IN_LINE

        elif ch == "/":
            self.start_fresh_token()
            self.consume_char()
            self.state = SLASH_SEEN

        else:
            self.error_here(f"Unexpected character: {ch!r}")

    def in_indent(self):
        ch = self.current_char
        if ch is not None and ch in " \t":
            self.consume_char()
        elif ch is None or ch in "#\n":
            # indentation of a blank or comment-only line
            self.start_fresh_token()
            self.state = LINE_START
        else:
            self.issue_token()
            self.state = IN_LINE

    def in_comment(self):
        ch = self.current_char
        if ch is None or ch == "\n":
            if self.state == COMMENT_AT_LINE_START:
                self.state = LINE_START
            else:
                self.state = IN_LINE
        else:
            self.advance()

    def in_number(self):
        if is_digit(self.current_char):
            self.consume_char()
        else:
            self.issue_token()
            self.state = IN_LINE

    def in_zero(self):
        if is_digit(self.current_char):
            self.error_here("a positive integer literal may not begin with a leading zero")
        self.issue_token()
        self.state = IN_LINE

    def in_string(self):
        ch = self.current_char
        if ch is None:
            self.error_here("Input ended within string literal.")
        elif ch == '"':
            self.consume_then_issue()
            self.state = IN_LINE
        elif ch == "\\":
            self.consume_char()
            self.state = STRING_ESCAPE
        elif ch == "\n":
            self.error_here("Line ended within string literal.")
        elif ch == "\t":
            self.error_here("Tab seen within string literal.")
        else:
            self.consume_char()

    def in_escape(self):
        ch = self.current_char
        if ch is None:
            self.error_here("Input ended within string literal.")
        if ch not in ESCAPES:
            self.error_here(f"Invalid escape sequence '\\{ch}' in string literal.")
        # kept raw; decoded when the parser consumes the literal
        self.consume_char()
        self.state = STRING_BODY

    def in_slash(self):
        if self.current_char == "/":
            self.consume_then_issue()
            self.state = IN_LINE
        else:
            self.error_here("Expected a // operator.")

    def in_identifier(self):
        if is_identifier_char(self.current_char):
            self.consume_char()
        else:
            self.issue_token()
            self.state = IN_LINE


def tokenize(text, source_name: str = "<input>") -> TokenStream:
    return Lexer(text, source_name).lex()
