"""
Default-export elementizer.

Rewrites a module whose default export is a function component into a
custom element:

    export default function Counter() { ... }

becomes

    class CounterElement extends HTMLElement {
      constructor() {
        super();
        const __props = {};
        const _n = Counter(__props);
        this.attachShadow({ mode: "open" }).appendChild(_n);
      }
    }
    customElements.define("fluxel-counter", CounterElement);
    export default CounterElement;

Modules without an eligible default export are returned unchanged.
"""
from typing import NamedTuple, Optional

from fluxel_plugin.config import ElementizerConfig
from fluxel_plugin.nodes import (
    CallExpression,
    ClassDeclaration,
    Constructor,
    ExportDefaultDeclaration,
    ExportDefaultExpression,
    ExpressionStatement,
    FunctionDeclaration,
    Identifier,
    MemberExpression,
    Module,
    ObjectExpression,
    Property,
    StringLiteral,
    ThisExpression,
    VariableDeclaration,
)

PROPS_BINDING = "__props"
NODE_BINDING = "_n"


def element_tag_name(name, prefix="fluxel-"):
    """camelCase/PascalCase -> prefixed kebab-case.

    Every uppercase character becomes '-' plus its lowercase form; there is
    no special handling of acronyms or digits ("HTTPButton" gives
    "fluxel-h-t-t-p-button").
    """
    kebab = "".join("-" + c.lower() if c.isupper() else c for c in name)
    return prefix + kebab.lstrip("-")


def element_class_name(name, suffix="Element"):
    return name + suffix


class ElementPlan(NamedTuple):
    """What the elementizer will generate for a module."""
    index: int
    component: Identifier
    tag_name: str
    class_name: str

    def as_dict(self):
        return {
            "index": self.index,
            "component": self.component.name,
            "tag_name": self.tag_name,
            "class_name": self.class_name,
        }


def _component_of(item) -> Optional[Identifier]:
    """The component identifier bound by a default export, if it has one."""
    if isinstance(item, ExportDefaultDeclaration):
        declaration = item.declaration
        if isinstance(declaration, FunctionDeclaration):
            return declaration.id  # None for `export default function () {}`
        return None
    if isinstance(item, ExportDefaultExpression):
        if isinstance(item.expression, Identifier):
            return item.expression
        return None
    raise TypeError(f"{type(item).__name__} is not a default export")


class DefaultExportElementizer:
    """
    Turns an eligible default-exported function into a registered custom element.

    The transform is a pure function of its input: the module passed in is
    never modified, and untouched items are shared with the result.
    """

    def __init__(self, config=None):
        self.config = config if config is not None else ElementizerConfig()

    def plan(self, module: Module) -> Optional[ElementPlan]:
        """Find the default export and derive the element names.

        When a module has several default exports the last one wins.
        """
        found = None
        for index, item in enumerate(module.body):
            if isinstance(item, (ExportDefaultDeclaration, ExportDefaultExpression)):
                found = (index, item)

        if found is None:
            return None
        index, item = found
        component = _component_of(item)
        if component is None:
            return None

        return ElementPlan(
            index=index,
            component=component,
            tag_name=element_tag_name(component.name, self.config.tag_prefix),
            class_name=element_class_name(component.name, self.config.class_suffix),
        )

    def transform(self, module: Module) -> Module:
        """Return the rewritten module, or `module` itself when nothing applies."""
        plan = self.plan(module)
        if plan is None:
            return module
        return self.apply(module, plan)

    def apply(self, module: Module, plan: ElementPlan) -> Module:
        """Splice the element for an existing `plan` of `module` into a copy of its body."""
        original = module.body[plan.index]
        class_id = Identifier(name=plan.class_name)

        replacement = [
            self.build_class(plan.component, class_id),
            self.build_registration(plan.tag_name, class_id),
            ExportDefaultExpression(expression=class_id),
        ]
        if self.config.retain_declaration and isinstance(original, ExportDefaultDeclaration):
            replacement.insert(0, original.declaration)

        # The first new item takes the place (and preceding comments) of the export
        replacement[0] = replacement[0].model_copy(update={"leading_trivia": original.leading_trivia})

        body = list(module.body)
        body[plan.index:plan.index + 1] = replacement
        return module.model_copy(update={"body": body})

    def build_class(self, component: Identifier, class_id: Identifier) -> ClassDeclaration:
        """class <Name>Element [extends Base] { constructor() { ... } }"""
        statements = []
        super_class = None
        if self.config.base_class:
            super_class = Identifier(name=self.config.base_class)
            # `this` is unusable before the base constructor has run
            statements.append(ExpressionStatement(expression=CallExpression(callee=Identifier(name="super"))))

        props = Identifier(name=PROPS_BINDING)
        node = Identifier(name=NODE_BINDING)
        shadow_root = CallExpression(
            callee=MemberExpression(object=ThisExpression(), property=Identifier(name="attachShadow")),
            arguments=[
                ObjectExpression(properties=[
                    Property(key=Identifier(name="mode"), value=StringLiteral(value=self.config.shadow_mode)),
                ]),
            ],
        )
        statements += [
            # Placeholder for the attribute -> prop mapping
            VariableDeclaration(kind="const", id=props, init=ObjectExpression()),
            VariableDeclaration(
                kind="const",
                id=node,
                init=CallExpression(callee=Identifier(name=component.name), arguments=[props]),
            ),
            ExpressionStatement(expression=CallExpression(
                callee=MemberExpression(object=shadow_root, property=Identifier(name="appendChild")),
                arguments=[node],
            )),
        ]

        return ClassDeclaration(
            id=class_id,
            super_class=super_class,
            body=[Constructor(body=statements)],
        )

    def build_registration(self, tag_name: str, class_id: Identifier) -> ExpressionStatement:
        """customElements.define("<tag>", <Name>Element);"""
        define = MemberExpression(object=Identifier(name=self.config.registry), property=Identifier(name="define"))
        return ExpressionStatement(expression=CallExpression(
            callee=define,
            arguments=[StringLiteral(value=tag_name), class_id],
        ))
