from ast_nodes import (
    Program, Block, Assign, Print, Pass,
    BinaryOp, IntLiteral, VarRef, Input, IntConvert,
    OPERATOR_SYMBOLS,
)
from escapes import re_escape


class Printer:
    """Renders syntax trees back to canonical source text.

    Binary expressions are always fully parenthesized, so the output never
    depends on precedence rules to be read back the same way.
    """

    def render(self, node, indent: str = "") -> str:
        if isinstance(node, Program):
            return self.render_block(node.body, indent)
        if isinstance(node, Block):
            return self.render_block(node, indent)
        if isinstance(node, (Assign, Print, Pass)):
            return self.render_statement(node, indent)
        return self.render_expr(node)

    def render_block(self, block, indent: str = "") -> str:
        return "".join(self.render_statement(s, indent) for s in block.statements)

    def render_statement(self, stmt, indent: str = "") -> str:
        if isinstance(stmt, Assign):
            text = f"{stmt.name} = {self.render_expr(stmt.value)}"
        elif isinstance(stmt, Print):
            text = f"print({self.render_expr(stmt.value)})"
        elif isinstance(stmt, Pass):
            text = "pass"
        else:
            raise TypeError(f"Unknown statement node: {type(stmt).__name__}")
        return f"{indent}{text}\n"

    def render_expr(self, expr) -> str:
        if isinstance(expr, BinaryOp):
            left = self.render_expr(expr.left)
            right = self.render_expr(expr.right)
            return f"({left} {OPERATOR_SYMBOLS[expr.op]} {right})"
        if isinstance(expr, IntLiteral):
            return str(expr.value)
        if isinstance(expr, VarRef):
            return expr.name
        if isinstance(expr, Input):
            return f'input("{re_escape(expr.prompt)}")'
        if isinstance(expr, IntConvert):
            return f"int({self.render_expr(expr.inner)})"
        raise TypeError(f"Unknown expression node: {type(expr).__name__}")


def render(node, indent: str = "") -> str:
    return Printer().render(node, indent)
