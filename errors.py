class SourceLocation:
    def __init__(self, source_name: str, row: int, column: int):
        self.source_name = source_name
        self.row = row
        self.column = column

    def known(self) -> bool:
        return self.row > 0 and self.column > 0

    def __eq__(self, other):
        if not isinstance(other, SourceLocation):
            return NotImplemented
        return (self.source_name, self.row, self.column) == (other.source_name, other.row, other.column)

    def __hash__(self):
        return hash((self.source_name, self.row, self.column))

    def __repr__(self):
        return f"SourceLocation({self.source_name!r}, {self.row}, {self.column})"

    def __str__(self):
        if self.known():
            return f"{self.source_name}:{self.row}:{self.column}"
        return self.source_name


class SlpyError(Exception):
    kind = "SlpyError"

    def __init__(self, location: SourceLocation, message: str):
        super().__init__(message)
        self.location = location
        self.message = message

    def format(self, indent: str = "") -> str:
        return f"{indent}{self.location}:\n{indent}\t{self.message}"

    def __str__(self) -> str:
        return self.format()


class LexError(SlpyError):
    kind = "LexError"


class ParseError(SlpyError):
    kind = "ParseError"


class SlpyRuntimeError(SlpyError):
    kind = "RuntimeError"


class UnboundVariable(SlpyRuntimeError):
    kind = "UnboundVariable"

    def __init__(self, location: SourceLocation, name: str):
        super().__init__(location, f"Unbound variable '{name}'.")
        self.name = name


class DivisionByZero(SlpyRuntimeError):
    kind = "DivisionByZero"

    def __init__(self, location: SourceLocation):
        super().__init__(location, "Division by zero.")


class MalformedInput(SlpyRuntimeError):
    kind = "MalformedInput"
