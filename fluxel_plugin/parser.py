"""
Fluxel module reader - turns JS/TSX source into a Module syntax tree.

The source is parsed with the tree-sitter TSX grammar, which understands
JSX text, type annotations and regular expressions. ModuleBuilder then walks
the top level of the tree:

- default exports become structured nodes
- every other statement becomes a RawStatement holding its exact text
- comments, blank lines and stray ';' stay in the trivia between items
"""
from functools import lru_cache

import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Parser

from fluxel_plugin.errors import FluxelSyntaxError
from fluxel_plugin.nodes import (
    ExportDefaultDeclaration,
    ExportDefaultExpression,
    FunctionDeclaration,
    Identifier,
    Module,
    OpaqueDeclaration,
    RawExpression,
    RawStatement,
    Span,
)

TSX_LANGUAGE = Language(tstypescript.language_tsx())

# Top-level nodes that are trivia, not items
_TRIVIA = frozenset({"comment", "html_comment", "empty_statement"})

_FUNCTIONS = frozenset({
    "function_declaration",
    "generator_function_declaration",
    # `export default function () {}` has no name, so it is an expression
    "function_expression",
    "function",
    "generator_function",
})
_CLASSES = frozenset({"class_declaration", "abstract_class_declaration", "class"})


@lru_cache(maxsize=None)
def build_parser():
    """Create the (shared) tree-sitter parser for Fluxel modules."""
    return Parser(TSX_LANGUAGE)


def _first_error(node):
    """The first ERROR or missing node below `node`, in source order."""
    for child in node.children:
        if child.type == "ERROR" or child.is_missing:
            return child
        if child.has_error:
            found = _first_error(child)
            if found is not None:
                return found
    return None


class ModuleBuilder:
    """
    Builds a Module from a tree-sitter `program` node.

    tree-sitter reports byte offsets; spans and slices use character offsets
    into the original text, so non-ASCII sources get an offset table.
    """

    def __init__(self, source, data):
        self._source = source
        self._offsets = None
        if len(data) != len(source):
            self._offsets = []
            for index, char in enumerate(source):
                self._offsets.extend([index] * len(char.encode("utf-8")))
            self._offsets.append(len(source))

    def _char(self, byte_offset):
        if self._offsets is None:
            return byte_offset
        return self._offsets[byte_offset]

    def _span(self, node):
        start = self._char(node.start_byte)
        return Span(
            start=start,
            end=self._char(node.end_byte),
            line=node.start_point[0] + 1,
            column=start - self._source.rfind("\n", 0, start),
        )

    def _text(self, node):
        return self._source[self._char(node.start_byte):self._char(node.end_byte)]

    def _inner_text(self, node):
        """The text between a node's opening and closing bracket."""
        return self._source[self._char(node.start_byte) + 1:self._char(node.end_byte) - 1]

    def program(self, root):
        """Split the program into items, keeping the text between them as trivia."""
        body = []
        cursor = 0
        for child in root.named_children:
            if child.type in _TRIVIA:
                continue
            item = self.item(child)
            trivia = self._source[cursor:item.span.start]
            body.append(item.model_copy(update={"leading_trivia": trivia}))
            cursor = item.span.end
        return Module(body=body, trailing_trivia=self._source[cursor:])

    def item(self, node):
        if node.type == "export_statement" and any(c.type == "default" for c in node.children):
            return self.export_default(node)
        return RawStatement(code=self._text(node), span=self._span(node))

    def export_default(self, node):
        """`export default <declaration>` or `export default <expression>`"""
        declaration = node.child_by_field_name("declaration")
        value = node.child_by_field_name("value")
        target = declaration if declaration is not None else value

        if target.type in _FUNCTIONS:
            return ExportDefaultDeclaration(declaration=self.function(target), span=self._span(node))
        if target.type in _CLASSES:
            opaque = OpaqueDeclaration(kind="class", code=self._text(target), span=self._span(target))
            return ExportDefaultDeclaration(declaration=opaque, span=self._span(node))
        if declaration is not None:
            # interfaces, overload signatures and the like
            opaque = OpaqueDeclaration(kind=declaration.type, code=self._text(declaration), span=self._span(declaration))
            return ExportDefaultDeclaration(declaration=opaque, span=self._span(node))

        if value.type == "identifier":
            expression = Identifier(name=self._text(value), span=self._span(value))
        else:
            expression = RawExpression(code=self._text(value), span=self._span(value))
        return ExportDefaultExpression(expression=expression, span=self._span(node))

    def function(self, node):
        """`[async] function[*] [Name][<T>](params)[: R] { body }`"""
        name = node.child_by_field_name("name")
        type_params = node.child_by_field_name("type_parameters")
        return_type = node.child_by_field_name("return_type")
        keywords = [child.type for child in node.children if not child.is_named]

        return FunctionDeclaration(
            id=Identifier(name=self._text(name), span=self._span(name)) if name is not None else None,
            is_async="async" in keywords,
            is_generator="*" in keywords,
            type_params=self._text(type_params) if type_params is not None else None,
            params=self._inner_text(node.child_by_field_name("parameters")),
            return_type=self._text(return_type) if return_type is not None else None,
            body=self._inner_text(node.child_by_field_name("body")),
            span=self._span(node),
        )


def parse_module(source):
    """Parse JS/TSX source into a Module.

    Raises FluxelSyntaxError at the first error tree-sitter recovered from.
    """
    data = source.encode("utf-8")
    tree = build_parser().parse(data)
    root = tree.root_node
    if root.has_error:
        raise _syntax_error(root, data)
    return ModuleBuilder(source, data).program(root)


def _syntax_error(root, data):
    error = _first_error(root) or root
    line = error.start_point[0] + 1
    line_start = data.rfind(b"\n", 0, error.start_byte) + 1
    column = len(data[line_start:error.start_byte].decode("utf-8", errors="replace")) + 1

    if error.is_missing:
        message = f"Missing {error.type!r}"
    else:
        text = data[error.start_byte:error.end_byte].decode("utf-8", errors="replace").strip()
        snippet = text.split("\n")[0][:40]
        message = f"Unexpected {snippet!r}" if snippet else "Unexpected end of input"
    return FluxelSyntaxError(message=message, line_number=line, column=column)
