"""
Syntax tree for Fluxel modules.

Every node is an immutable pydantic model with a ``type`` literal, so the
node kinds form closed, discriminated unions:

- Expression: what may appear as a value
- Statement: what may appear in a block or a constructor body
- DefaultDeclaration: what may follow ``export default`` as a declaration
- ModuleItem: what may appear at the top level of a module
- Program: a Module or a Script

Nodes read from source carry a Span. Synthesized nodes have none, which is
how the emitter tells verbatim source apart from generated code.
"""
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Span(BaseModel):
    """Source position of a parsed node (offsets are 0-based, line/column 1-based)."""
    model_config = ConfigDict(frozen=True)

    start: int
    end: int
    line: int
    column: int


class Node(BaseModel):
    model_config = ConfigDict(frozen=True)

    span: Optional[Span] = None


class Item(Node):
    """A node that can stand on its own line in a body.

    ``leading_trivia`` is the exact source text (whitespace, comments) found
    before the item; ``None`` means the item was synthesized.
    """
    leading_trivia: Optional[str] = None


# ==========================================
# Expressions
# ==========================================

class Identifier(Node):
    type: Literal["Identifier"] = "Identifier"
    name: str


class StringLiteral(Node):
    type: Literal["StringLiteral"] = "StringLiteral"
    value: str


class ThisExpression(Node):
    type: Literal["ThisExpression"] = "ThisExpression"


class RawExpression(Node):
    """An expression kept as source text."""
    type: Literal["RawExpression"] = "RawExpression"
    code: str


class Property(Node):
    type: Literal["Property"] = "Property"
    key: Identifier
    value: "Expression"


class ObjectExpression(Node):
    type: Literal["ObjectExpression"] = "ObjectExpression"
    properties: List[Property] = Field(default_factory=list)


class MemberExpression(Node):
    type: Literal["MemberExpression"] = "MemberExpression"
    object: "Expression"
    property: Identifier


class CallExpression(Node):
    type: Literal["CallExpression"] = "CallExpression"
    callee: "Expression"
    arguments: List["Expression"] = Field(default_factory=list)


Expression = Annotated[
    Union[
        Identifier,
        StringLiteral,
        ThisExpression,
        RawExpression,
        ObjectExpression,
        MemberExpression,
        CallExpression,
    ],
    Field(discriminator="type"),
]


# ==========================================
# Statements and declarations
# ==========================================

class RawStatement(Item):
    """A top-level statement kept as source text."""
    type: Literal["RawStatement"] = "RawStatement"
    code: str


class VariableDeclaration(Item):
    type: Literal["VariableDeclaration"] = "VariableDeclaration"
    kind: Literal["const", "let", "var"] = "const"
    id: Identifier
    init: Optional[Expression] = None


class ExpressionStatement(Item):
    type: Literal["ExpressionStatement"] = "ExpressionStatement"
    expression: Expression


class FunctionDeclaration(Item):
    """A function declaration; signature parts and body are source text.

    ``params`` and ``body`` exclude their surrounding brackets,
    ``type_params`` and ``return_type`` are kept as written (e.g. ``<T>``,
    ``: JSX.Element``).
    """
    type: Literal["FunctionDeclaration"] = "FunctionDeclaration"
    id: Optional[Identifier] = None
    is_async: bool = False
    is_generator: bool = False
    type_params: Optional[str] = None
    params: str = ""
    return_type: Optional[str] = None
    body: str = ""


class Constructor(Node):
    type: Literal["Constructor"] = "Constructor"
    params: List[Identifier] = Field(default_factory=list)
    body: List["Statement"] = Field(default_factory=list)


class ClassDeclaration(Item):
    type: Literal["ClassDeclaration"] = "ClassDeclaration"
    id: Identifier
    super_class: Optional[Expression] = None
    body: List[Constructor] = Field(default_factory=list)


class OpaqueDeclaration(Item):
    """A declaration the reader does not model, e.g. a default-exported class."""
    type: Literal["OpaqueDeclaration"] = "OpaqueDeclaration"
    kind: str
    code: str


Statement = Annotated[
    Union[
        RawStatement,
        VariableDeclaration,
        ExpressionStatement,
        FunctionDeclaration,
        ClassDeclaration,
    ],
    Field(discriminator="type"),
]

DefaultDeclaration = Annotated[
    Union[FunctionDeclaration, ClassDeclaration, OpaqueDeclaration],
    Field(discriminator="type"),
]


# ==========================================
# Module items and programs
# ==========================================

class ExportDefaultDeclaration(Item):
    """``export default function ...`` / ``export default class ...``"""
    type: Literal["ExportDefaultDeclaration"] = "ExportDefaultDeclaration"
    declaration: DefaultDeclaration


class ExportDefaultExpression(Item):
    """``export default <expression>``"""
    type: Literal["ExportDefaultExpression"] = "ExportDefaultExpression"
    expression: Expression


ModuleItem = Annotated[
    Union[
        ExportDefaultDeclaration,
        ExportDefaultExpression,
        RawStatement,
        VariableDeclaration,
        ExpressionStatement,
        FunctionDeclaration,
        ClassDeclaration,
    ],
    Field(discriminator="type"),
]


class Module(Node):
    type: Literal["Module"] = "Module"
    body: List[ModuleItem] = Field(default_factory=list)
    trailing_trivia: Optional[str] = None


class Script(Node):
    type: Literal["Script"] = "Script"
    body: List[Statement] = Field(default_factory=list)
    trailing_trivia: Optional[str] = None


Program = Annotated[Union[Module, Script], Field(discriminator="type")]


# Resolve the forward references to the unions defined above
for _model in (
    Property,
    ObjectExpression,
    MemberExpression,
    CallExpression,
    VariableDeclaration,
    ExpressionStatement,
    Constructor,
    ClassDeclaration,
    ExportDefaultDeclaration,
    ExportDefaultExpression,
    Module,
    Script,
):
    _model.model_rebuild()
