"""Runtime objects produced by the Evaluator. Objects are immutable: every operation produces a new one.

Class, ClassInstance, Function, Print and Error are placeholders for language features the evaluator does not execute
yet; they can be built and displayed but nothing produces them.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Object:
    """Superclass of every runtime value."""

    def inspect(self):
        """Display form of this object, e.g. 'integer: 100'."""
        raise NotImplementedError()

    def __str__(self):
        return self.inspect()


@dataclass(frozen=True)
class Integer(Object):
    value: int

    def inspect(self):
        return f"integer: {self.value}"


@dataclass(frozen=True)
class Float(Object):
    value: float

    def inspect(self):
        return f"float: {self.value}"


@dataclass(frozen=True)
class Number(Object):
    """Result of every arithmetic operation, whatever the kinds of its operands."""
    value: float

    def inspect(self):
        return f"number: {self.value}"


@dataclass(frozen=True)
class Bool(Object):
    value: bool

    def inspect(self):
        return f"bool: {str(self.value).lower()}"


@dataclass(frozen=True)
class SString(Object):
    value: str

    def inspect(self):
        return f"string: {self.value}"


@dataclass(frozen=True)
class Return(Object):
    value: Object

    def inspect(self):
        return f"return: {self.value.inspect()}"


@dataclass(frozen=True)
class Null(Object):

    def inspect(self):
        return "null"


@dataclass(frozen=True)
class Class(Object):
    name: str

    def inspect(self):
        return f"class: {self.name}"


@dataclass(frozen=True)
class ClassInstance(Object):
    name: str

    def inspect(self):
        return f"instance: {self.name}"


@dataclass(frozen=True)
class Function(Object):
    name: str

    def inspect(self):
        return f"function: {self.name}"


@dataclass(frozen=True)
class Print(Object):
    values: tuple = ()

    def inspect(self):
        return "print: " + ", ".join(value.inspect() for value in self.values)


@dataclass(frozen=True)
class Error(Object):
    message: str

    def inspect(self):
        return f"error: {self.message}"


NUMERIC = (Integer, Float, Number)
