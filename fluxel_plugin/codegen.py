"""
Code emitter - prints Fluxel syntax trees back as JavaScript.

Items read from source are printed exactly as they were written when the
source text is available; synthesized items are printed from their
structure with two-space indentation and double-quoted strings.
"""

INDENT = "  "


def _escape_string(s: str) -> str:
    """Escape for double-quoted JS string literals."""
    return (
        s.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\b", "\\b")
        .replace("\f", "\\f")
        .replace("\v", "\\v")
        .replace("\x00", "\\x00")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


def _indent(code, level=1):
    prefix = INDENT * level
    return "\n".join(prefix + line if line else line for line in code.split("\n"))


class CodeEmitter:
    """
    Walks a program and returns its source text.

    One ``visit_<NodeType>`` method per node kind; an unknown kind is a
    TypeError. ``source`` is the text the program was parsed from, if any.
    """

    def __init__(self, source=None):
        self.source = source

    def visit(self, node):
        method = getattr(self, f"visit_{type(node).__name__}", None)
        if method is None:
            raise TypeError(f"Cannot emit node of type {type(node).__name__}")
        return method(node)

    # --- Programs ---

    def visit_Module(self, node):
        return self._emit_body(node.body, node.trailing_trivia)

    def visit_Script(self, node):
        return self._emit_body(node.body, node.trailing_trivia)

    def _emit_body(self, items, trailing_trivia):
        out = []
        for item in items:
            if item.leading_trivia is not None:
                out.append(item.leading_trivia)
            elif out:
                out.append("\n")
            out.append(self.emit_item(item))

        if trailing_trivia is not None:
            out.append(trailing_trivia)
        elif out:
            out.append("\n")
        return "".join(out)

    def emit_item(self, item):
        """Print one item, verbatim when it was read from ``self.source``."""
        if self.source is not None and item.span is not None:
            return self.source[item.span.start:item.span.end]
        return self.visit(item)

    # --- Module items ---

    def visit_ExportDefaultDeclaration(self, node):
        return f"export default {self.visit(node.declaration)}"

    def visit_ExportDefaultExpression(self, node):
        return f"export default {self.visit(node.expression)};"

    def visit_OpaqueDeclaration(self, node):
        return node.code

    # --- Statements ---

    def visit_RawStatement(self, node):
        return node.code

    def visit_VariableDeclaration(self, node):
        if node.init is None:
            return f"{node.kind} {self.visit(node.id)};"
        return f"{node.kind} {self.visit(node.id)} = {self.visit(node.init)};"

    def visit_ExpressionStatement(self, node):
        return f"{self.visit(node.expression)};"

    def visit_FunctionDeclaration(self, node):
        parts = []
        if node.is_async:
            parts.append("async ")
        parts.append("function")
        if node.is_generator:
            parts.append("*")
        parts.append(" ")
        if node.id is not None:
            parts.append(node.id.name)
        if node.type_params:
            parts.append(node.type_params)
        parts.append(f"({node.params})")
        if node.return_type:
            parts.append(node.return_type)
        parts.append(f" {{{node.body}}}")
        return "".join(parts)

    def visit_ClassDeclaration(self, node):
        head = f"class {node.id.name}"
        if node.super_class is not None:
            head += f" extends {self._operand(node.super_class)}"
        if not node.body:
            return head + " {}"
        members = "\n".join(_indent(self.visit(member)) for member in node.body)
        return f"{head} {{\n{members}\n}}"

    def visit_Constructor(self, node):
        params = ", ".join(self.visit(p) for p in node.params)
        if not node.body:
            return f"constructor({params}) {{}}"
        statements = "\n".join(_indent(self.visit(s)) for s in node.body)
        return f"constructor({params}) {{\n{statements}\n}}"

    # --- Expressions ---

    def visit_Identifier(self, node):
        return node.name

    def visit_StringLiteral(self, node):
        return f'"{_escape_string(node.value)}"'

    def visit_ThisExpression(self, node):
        return "this"

    def visit_RawExpression(self, node):
        return node.code

    def visit_Property(self, node):
        return f"{self.visit(node.key)}: {self.visit(node.value)}"

    def visit_ObjectExpression(self, node):
        if not node.properties:
            return "{}"
        return "{ " + ", ".join(self.visit(p) for p in node.properties) + " }"

    def visit_MemberExpression(self, node):
        return f"{self._operand(node.object)}.{node.property.name}"

    def visit_CallExpression(self, node):
        args = ", ".join(self.visit(a) for a in node.arguments)
        return f"{self._operand(node.callee)}({args})"

    def _operand(self, node):
        # Source text may be any expression, so it needs parentheses before '.' or '('
        code = self.visit(node)
        if node.type in ("RawExpression", "ObjectExpression"):
            return f"({code})"
        return code


def emit_program(program, source=None):
    """Print a Module or Script. Items with a span are copied from ``source``."""
    return CodeEmitter(source).visit(program)


def emit_statement(statement):
    return CodeEmitter().visit(statement)


def emit_expression(expression):
    return CodeEmitter().visit(expression)
