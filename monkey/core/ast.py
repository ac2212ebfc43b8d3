"""Abstract syntax tree for the Monkey language.

The tree is built once by the parser and never mutated afterwards: every node is a frozen dataclass, and sequences of
children are stored as tuples. Each node keeps the Token it originated from, and renders to a canonical, fully
parenthesized source form:

```
5 + 5 * 2;                  ->  (5 + (5 * 2))
-a * b;                     ->  ((-a) * b)
let add = fn(x, y) { x + y; };  ->  let add = fn(x, y) { (x + y) }
if (a < b) { a } else { b }    ->  if ((a < b)) { a } else { b }
```

Parsing the canonical form of a program again yields a program with the same canonical form.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import Optional, Tuple

from monkey.core.token import Token


class Node(ABC):
    """Superclass of every AST node."""

    def token_literal(self):
        """Literal text of the token this node was built from."""
        return self.token.literal

    def children(self):
        """Yields the direct child nodes, in source order."""
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, Node):
                yield value
            elif isinstance(value, tuple):
                yield from (item for item in value if isinstance(item, Node))

    def display(self, indents=0):
        """Recursively displays the tree in a readable format.

        Format:
        <Node>('<canonical form>', nodes=[
            <Node>('<canonical form>', nodes=[
                ...
                <Node>('<canonical form>')  # <-- if there are no children
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}('{self}'"
        children = list(self.children())
        if children:
            result += ", nodes=["
            for child in children:
                result += "\n" + child.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    @abstractmethod
    def __str__(self):
        """Canonical source form of this node."""


class Statement(Node):
    """A construct evaluated for its effect: let, return, block or a bare expression."""


class Expression(Node):
    """A construct that produces a value."""


def _join_statements(statements):
    return "; ".join(str(statement) for statement in statements)


@dataclass(frozen=True)
class Program(Node):
    """Root of the tree. statements is empty, never None, for empty input."""
    statements: Tuple[Statement, ...] = ()

    def token_literal(self):
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self):
        return _join_statements(self.statements)


# Expressions

@dataclass(frozen=True)
class Identifier(Expression):
    token: Token
    value: str

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    token: Token
    value: int

    def __str__(self):
        return self.token.literal


@dataclass(frozen=True)
class Boolean(Expression):
    token: Token
    value: bool

    def __str__(self):
        return self.token.literal


@dataclass(frozen=True)
class PrefixExpression(Expression):
    token: Token
    operator: str
    right: Expression

    def __str__(self):
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    token: Token
    left: Expression
    operator: str
    right: Expression

    def __str__(self):
        return f"({self.left} {self.operator} {self.right})"


# Statements

@dataclass(frozen=True)
class LetStatement(Statement):
    token: Token
    name: Identifier
    value: Expression

    def __str__(self):
        return f"{self.token_literal()} {self.name} = {self.value}"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    token: Token
    value: Expression

    def __str__(self):
        return f"{self.token_literal()} {self.value}"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    token: Token  # first token of the expression
    expression: Expression

    def __str__(self):
        return str(self.expression)


@dataclass(frozen=True)
class BlockStatement(Statement):
    token: Token  # the opening "{"
    statements: Tuple[Statement, ...] = ()

    def __str__(self):
        if not self.statements:
            return "{ }"
        return f"{{ {_join_statements(self.statements)} }}"


# Compound expressions (these own BlockStatements, so they are defined after them)

@dataclass(frozen=True)
class IfExpression(Expression):
    token: Token
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self):
        result = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            result += f" else {self.alternative}"
        return result


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    token: Token
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


@dataclass(frozen=True)
class CallExpression(Expression):
    token: Token  # the "(" that opens the argument list
    function: Expression  # Identifier or FunctionLiteral, or any expression producing a function
    arguments: Tuple[Expression, ...] = ()

    def __str__(self):
        args = ", ".join(str(arg) for arg in self.arguments)
        return f"{self.function}({args})"
