"""Tree-walking evaluator for the sip language. Executes a Program directly by recursive traversal against a single
Environment, which persists across calls (this is how the interactive shell accumulates bindings line by line).

Arithmetic deliberately normalizes: + - * / always produce a Number, whatever the kinds of their operands. Block
folding does not unwind on Return: a Return only wraps its value.
"""

import operator

from siplang.lang import ast, objects
from siplang.lang.environment import Environment
from siplang.lang.error import (DifferObjectToCompare, DivideByZero, EmptyNode, NotIdent, NotLiteral, NotNumber,
                                NotNumberOrStr, NotSupportedOperator, NotTruthCond, TkIsNotIdent, UnknownNode)
from siplang.lang.tokens import TokenKind


ARITHMETIC = {
    TokenKind.PLUS: operator.add,
    TokenKind.MINUS: operator.sub,
    TokenKind.STAR: operator.mul,
    TokenKind.SLASH: operator.truediv,
}

COMPARISON = {
    TokenKind.LT: operator.lt,
    TokenKind.LT_EQ: operator.le,
    TokenKind.GT: operator.gt,
    TokenKind.GT_EQ: operator.ge,
    TokenKind.EQ: operator.eq,
    TokenKind.BANG_EQ: operator.ne,
}


class Evaluator:
    """Evaluates sip syntax trees. Every eval_* method takes a node of the matching class and returns an Object."""

    def __init__(self):
        self.env = Environment()
        self._dispatch = {
            ast.Literal: self.eval_literal,
            ast.Unary: self.eval_unary,
            ast.VarStmt: self.eval_var,
            ast.Assign: self.eval_assign,
            ast.Identifier: self.eval_identifier,
            ast.IfStmt: self.eval_if,
            ast.Block: self.eval_block,
            ast.Binary: self.eval_binary,
            ast.Logical: self.eval_logical,
            ast.Return: self.eval_return,
            ast.Group: lambda node: self.eval(node.inner),
            ast.ExpressionStmt: lambda node: self.eval(node.inner),
            ast.Null: lambda node: objects.Null(),
        }

    def eval_program(self, program):
        """Evaluates program's statements in order and returns the value of the last one (Null if there is none)."""
        result = objects.Null()
        for stmt in program.statements:
            result = self.eval(stmt)
        return result

    def eval(self, node):
        if node is None:
            raise EmptyNode()

        method = self._dispatch.get(type(node))
        if method is None:
            raise UnknownNode(node)
        return method(node)

    def eval_literal(self, node):
        token = node.token
        if token.kind is TokenKind.INTEGER:
            return objects.Integer(token.value)
        elif token.kind is TokenKind.FLOAT:
            return objects.Float(token.value)
        elif token.kind is TokenKind.STRING:
            return objects.SString(token.value)
        elif token.kind in (TokenKind.TRUE, TokenKind.FALSE):
            return objects.Bool(token.kind is TokenKind.TRUE)
        elif token.kind is TokenKind.NULL:
            return objects.Null()
        raise NotLiteral(token)

    def eval_unary(self, node):
        operand = self.eval(node.operand)

        if node.operator.kind is TokenKind.BANG:
            if not isinstance(operand, objects.Bool):
                raise NotLiteral(node.operator)
            return objects.Bool(not operand.value)

        elif node.operator.kind is TokenKind.MINUS:
            if not isinstance(operand, objects.NUMERIC):
                raise NotNumber(operand)
            return type(operand)(-operand.value)  # negation keeps the operand's kind

        raise NotSupportedOperator(node.operator)

    def eval_var(self, node):
        if node.name.kind is not TokenKind.IDENT:
            raise NotIdent(node.name)
        return self.env.define(node.name.value, self.eval(node.initializer))

    def eval_assign(self, node):
        if node.name.kind is not TokenKind.IDENT:
            raise TkIsNotIdent(node.name)
        return self.env.define(node.name.value, self.eval(node.value))

    def eval_identifier(self, node):
        if node.name.kind is not TokenKind.IDENT:
            raise TkIsNotIdent(node.name)
        return self.env.get(node.name.value)

    def eval_if(self, node):
        condition = self.eval(node.condition)
        if not isinstance(condition, objects.Bool):
            raise NotTruthCond(condition)

        return self.eval(node.then_branch if condition.value else node.else_branch)

    def eval_block(self, node):
        """Evaluates every statement in node, in the session's only scope."""
        result = objects.Null()
        for stmt in node.statements:
            result = self.eval(stmt)
        return result

    def eval_binary(self, node):
        left, right = self.eval(node.left), self.eval(node.right)
        kind = node.operator.kind

        if kind in ARITHMETIC:
            lhs, rhs = _to_float(left), _to_float(right)
            if kind is TokenKind.SLASH and rhs == 0:
                raise DivideByZero()
            return objects.Number(ARITHMETIC[kind](lhs, rhs))

        elif kind in COMPARISON:
            for obj in (left, right):
                if not isinstance(obj, (*objects.NUMERIC, objects.SString)):
                    raise NotNumberOrStr(obj)

            if isinstance(left, objects.SString) != isinstance(right, objects.SString):
                raise DifferObjectToCompare(left, right)
            elif isinstance(left, objects.SString):
                return objects.Bool(COMPARISON[kind](left.value, right.value))
            return objects.Bool(COMPARISON[kind](float(left.value), float(right.value)))

        raise NotSupportedOperator(node.operator)

    def eval_logical(self, node):
        """&& and || short-circuit: the right operand is only evaluated if the left one does not decide the result."""
        if node.operator.kind not in (TokenKind.AND, TokenKind.OR):
            raise NotSupportedOperator(node.operator)

        left = self.eval(node.left)
        if not isinstance(left, objects.Bool):
            raise NotTruthCond(left)

        if left.value == (node.operator.kind is TokenKind.OR):
            return left

        right = self.eval(node.right)
        if not isinstance(right, objects.Bool):
            raise NotTruthCond(right)
        return right

    def eval_return(self, node):
        return objects.Return(self.eval(node.value))


def _to_float(obj):
    if not isinstance(obj, objects.NUMERIC):
        raise NotNumber(obj)
    return float(obj.value)
