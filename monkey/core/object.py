"""Runtime values produced by evaluating Monkey programs.

Booleans and null are process-wide singletons (TRUE, FALSE and NULL), so truthiness and equality checks on them are
identity checks. Errors are ordinary values: the evaluator returns them instead of raising, and every operation that
receives one hands back that same Error.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class ObjectType(Enum):
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    RETURN_VALUE = "RETURN_VALUE"
    ERROR = "ERROR"
    FUNCTION = "FUNCTION"

    def __str__(self):
        return self.value


class Object(ABC):
    """Superclass of every runtime value."""

    @property
    @abstractmethod
    def type(self):
        """ObjectType tag of this value."""

    @abstractmethod
    def inspect(self):
        """Human-readable representation of this value."""

    def __str__(self):
        return self.inspect()


@dataclass(frozen=True)
class Integer(Object):
    value: int

    @property
    def type(self):
        return ObjectType.INTEGER

    def inspect(self):
        return str(self.value)


class Boolean(Object):
    """Only ever instantiated for TRUE and FALSE: use native_bool_to_boolean to get one."""

    def __init__(self, value):
        self.value = value

    @property
    def type(self):
        return ObjectType.BOOLEAN

    def inspect(self):
        return "true" if self.value else "false"

    def __repr__(self):
        return f"Boolean({self.value})"


class Null(Object):
    """Absence of a value. NULL is the only instance."""

    @property
    def type(self):
        return ObjectType.NULL

    def inspect(self):
        return "null"

    def __repr__(self):
        return "Null()"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool_to_boolean(value):
    return TRUE if value else FALSE


@dataclass(frozen=True)
class ReturnValue(Object):
    """Wraps the value of a return statement while it travels up to the enclosing function call (or the program)."""
    value: Object

    @property
    def type(self):
        return ObjectType.RETURN_VALUE

    def inspect(self):
        return self.value.inspect()


@dataclass(frozen=True, eq=False)
class Error(Object):
    message: str

    @property
    def type(self):
        return ObjectType.ERROR

    def inspect(self):
        return f"ERROR: {self.message}"


@dataclass(frozen=True, eq=False, repr=False)
class Function(Object):
    """Closure: parameters and body of a function literal, plus the environment it was defined in."""
    parameters: Tuple  # of ast.Identifier
    body: object  # ast.BlockStatement
    env: object  # environment.Environment

    @property
    def type(self):
        return ObjectType.FUNCTION

    def inspect(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"fn({params}) {self.body}"

    def __repr__(self):
        return f"Function('{self.inspect()}')"


def is_error(obj):
    return obj is not None and obj.type is ObjectType.ERROR
