"""Abstract syntax tree for the sip language. Expressions and statements share one closed family of Node dataclasses;
every node owns its children exclusively (trees never share mutable sub-trees), and nodes are never mutated once the
Parser has built them.
"""

from dataclasses import dataclass, field, fields

from siplang.lang.tokens import Token


@dataclass(frozen=True)
class Node:
    """Superclass of every syntax tree node."""

    @property
    def children(self):
        """(name, value) pairs of this node's fields, in declaration order."""
        return [(f.name, getattr(self, f.name)) for f in fields(self)]

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <Node>(
            <field>=<Token>,
            <field>=<Node>(
                ...
            ),
            <field>=[
                <Node>(...),
            ],
        )
        """
        pad = "    " * indents
        if not self.children:
            return f"{type(self).__name__}()"

        result = f"{type(self).__name__}("
        for name, value in self.children:
            result += f"\n{pad}    {name}={_display(value, indents + 1)},"
        return result + f"\n{pad})"


def _display(value, indents):
    if isinstance(value, Node):
        return value.display(indents)
    elif isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        pad = "    " * indents
        items = "".join(f"\n{pad}    {_display(item, indents + 1)}," for item in value)
        return f"[{items}\n{pad}]"
    return str(value)


@dataclass(frozen=True)
class Null(Node):
    """Absence sentinel, used wherever a production may be omitted."""


@dataclass(frozen=True)
class Identifier(Node):
    name: Token


@dataclass(frozen=True)
class VarStmt(Node):
    """var <name> = <initializer>"""
    name: Token
    initializer: Node = field(default_factory=Null)


@dataclass(frozen=True)
class Assign(Node):
    """<name> = <value>"""
    name: Token
    value: Node


@dataclass(frozen=True)
class IfStmt(Node):
    condition: Node
    then_branch: Node
    else_branch: Node = field(default_factory=Null)


@dataclass(frozen=True)
class Logical(Node):
    """Short-circuiting && and ||."""
    left: Node
    operator: Token
    right: Node


@dataclass(frozen=True)
class Binary(Node):
    """Arithmetic and comparison operators."""
    left: Node
    operator: Token
    right: Node


@dataclass(frozen=True)
class Unary(Node):
    """! or unary -"""
    operator: Token
    operand: Node


@dataclass(frozen=True)
class Literal(Node):
    """Wraps an integer, float, string, bool or null token."""
    token: Token


@dataclass(frozen=True)
class Group(Node):
    """Parenthesized expression."""
    inner: Node


@dataclass(frozen=True)
class ExpressionStmt(Node):
    inner: Node


@dataclass(frozen=True)
class Block(Node):
    statements: tuple = ()


@dataclass(frozen=True)
class Return(Node):
    value: Node = field(default_factory=Null)


@dataclass
class Program:
    """Ordered top-level statements; order is evaluation order."""
    statements: list = field(default_factory=list)

    def display(self):
        return _display(self.statements, 0)
