class ASTNode:
    # Source location of the token that introduced this node.
    location = None


class Program(ASTNode):
    def __init__(self, body, location=None):
        self.body = body          # Block
        self.location = location


class Block(ASTNode):
    def __init__(self, statements, location=None):
        self.statements = statements
        self.location = location


# ---------- statements ----------
class Statement(ASTNode):
    pass


class Assign(Statement):
    def __init__(self, name, value, location=None):
        self.name = name          # variable name
        self.value = value        # expression
        self.location = location


class Print(Statement):
    def __init__(self, value, location=None):
        self.value = value
        self.location = location


class Pass(Statement):
    def __init__(self, location=None):
        self.location = location


# ---------- expressions ----------
ADD = "Add"
SUB = "Sub"
MUL = "Mul"
FLOOR_DIV = "FloorDiv"

OPERATOR_SYMBOLS = {
    ADD: "+",
    SUB: "-",
    MUL: "*",
    FLOOR_DIV: "//",
}
SYMBOL_OPERATORS = {sym: op for op, sym in OPERATOR_SYMBOLS.items()}


class Expression(ASTNode):
    pass


class BinaryOp(Expression):
    def __init__(self, op, left, right, location=None):
        self.op = op              # one of ADD, SUB, MUL, FLOOR_DIV
        self.left = left
        self.right = right
        self.location = location  # the operator token


class IntLiteral(Expression):
    def __init__(self, value, location=None):
        self.value = value
        self.location = location


class VarRef(Expression):
    def __init__(self, name, location=None):
        self.name = name
        self.location = location


class Input(Expression):
    def __init__(self, prompt, location=None):
        self.prompt = prompt      # decoded text, escapes already resolved
        self.location = location


class IntConvert(Expression):
    def __init__(self, inner, location=None):
        self.inner = inner
        self.location = location
