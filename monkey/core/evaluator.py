"""Tree-walking evaluator for the Monkey language. Walks the AST top-down, evaluating children before combining their
values, and produces runtime Objects (see object.py).

Semantics worth knowing:
    - the value of a program or block is the value of its last statement; an empty program is null
    - false and null are falsy, everything else (including 0) is truthy
    - integer division truncates toward zero
    - type errors, unknown operators, unbound identifiers and bad calls produce Error values, never Python exceptions;
      an Error used as an operand is returned as-is, so the first error is the one that surfaces
    - return wraps its value in a ReturnValue, which blocks pass upward untouched and which is unwrapped at the
      function call (or program) it returns from
"""

from monkey.core import ast
from monkey.core.environment import Environment
from monkey.core.object import (
    FALSE, NULL, Error, Function, Integer, ObjectType, ReturnValue, is_error, native_bool_to_boolean
)


class Evaluator:
    """Evaluates AST nodes against an Environment. step_limit, if given, bounds the number of nodes visited across the
    lifetime of this Evaluator.
    """

    def __init__(self, step_limit=None):
        self.step_limit = step_limit
        self.steps = 0

    def evaluate(self, node, env):
        """Evaluates node in env. Python stack exhaustion (runaway recursion in the program) is reported as an Error."""
        try:
            return self.eval(node, env)
        except RecursionError:
            return Error("maximum recursion depth exceeded")

    def eval(self, node, env):
        self.steps += 1
        if self.step_limit is not None and self.steps > self.step_limit:
            return Error(f"step limit exceeded: {self.step_limit}")

        # statements
        if isinstance(node, ast.Program):
            return self.eval_program(node, env)

        elif isinstance(node, ast.ExpressionStatement):
            return self.eval(node.expression, env)

        elif isinstance(node, ast.BlockStatement):
            return self.eval_block_statement(node, env)

        elif isinstance(node, ast.ReturnStatement):
            value = self.eval(node.value, env)
            if is_error(value):
                return value
            return ReturnValue(value)

        elif isinstance(node, ast.LetStatement):
            value = self.eval(node.value, env)
            if is_error(value):
                return value
            env.set(node.name.value, value)
            return NULL

        # expressions
        elif isinstance(node, ast.IntegerLiteral):
            return Integer(node.value)

        elif isinstance(node, ast.Boolean):
            return native_bool_to_boolean(node.value)

        elif isinstance(node, ast.Identifier):
            return self.eval_identifier(node, env)

        elif isinstance(node, ast.PrefixExpression):
            right = self.eval(node.right, env)
            if is_error(right):
                return right
            return eval_prefix_expression(node.operator, right)

        elif isinstance(node, ast.InfixExpression):
            left = self.eval(node.left, env)
            if is_error(left):
                return left
            right = self.eval(node.right, env)
            if is_error(right):
                return right
            return eval_infix_expression(node.operator, left, right)

        elif isinstance(node, ast.IfExpression):
            return self.eval_if_expression(node, env)

        elif isinstance(node, ast.FunctionLiteral):
            return Function(node.parameters, node.body, env)

        elif isinstance(node, ast.CallExpression):
            function = self.eval(node.function, env)
            if is_error(function):
                return function

            args = []
            for argument in node.arguments:
                value = self.eval(argument, env)
                if is_error(value):
                    return value
                args.append(value)

            return self.apply_function(function, args)

        return Error(f"cannot evaluate node: {type(node).__name__}")

    def eval_program(self, program, env):
        result = NULL
        for statement in program.statements:
            result = self.eval(statement, env)

            if isinstance(result, ReturnValue):
                return result.value
            elif is_error(result):
                return result
        return result

    def eval_block_statement(self, block, env):
        """Like eval_program, but a ReturnValue is passed up still wrapped so the enclosing blocks stop as well."""
        result = NULL
        for statement in block.statements:
            result = self.eval(statement, env)

            if result.type in (ObjectType.RETURN_VALUE, ObjectType.ERROR):
                return result
        return result

    def eval_identifier(self, node, env):
        value = env.get(node.value)
        if value is None:
            return Error(f"identifier not found: {node.value}")
        return value

    def eval_if_expression(self, node, env):
        condition = self.eval(node.condition, env)
        if is_error(condition):
            return condition

        if is_truthy(condition):
            return self.eval(node.consequence, env)
        elif node.alternative is not None:
            return self.eval(node.alternative, env)
        return NULL

    def apply_function(self, function, args):
        if not isinstance(function, Function):
            return Error(f"not a function: {function.type}")

        if len(args) != len(function.parameters):
            return Error(f"wrong number of arguments: want={len(function.parameters)}, got={len(args)}")

        env = Environment.enclosed(function.env)
        for param, arg in zip(function.parameters, args):
            env.set(param.value, arg)

        result = self.eval(function.body, env)
        if isinstance(result, ReturnValue):
            return result.value
        return result


def is_truthy(obj):
    return obj is not FALSE and obj is not NULL


def eval_prefix_expression(operator, right):
    if operator == "!":
        return eval_bang_operator(right)
    elif operator == "-":
        return eval_minus_prefix_operator(right)
    return Error(f"unknown operator: {operator}{right.type}")


def eval_bang_operator(right):
    return native_bool_to_boolean(not is_truthy(right))


def eval_minus_prefix_operator(right):
    if right.type is not ObjectType.INTEGER:
        return Error(f"unknown operator: -{right.type}")
    return Integer(-right.value)


def eval_infix_expression(operator, left, right):
    if left.type is ObjectType.INTEGER and right.type is ObjectType.INTEGER:
        return eval_integer_infix_expression(operator, left, right)
    elif operator == "==":
        return native_bool_to_boolean(left is right)
    elif operator == "!=":
        return native_bool_to_boolean(left is not right)
    elif left.type is not right.type:
        return Error(f"type mismatch: {left.type} {operator} {right.type}")
    return Error(f"unknown operator: {left.type} {operator} {right.type}")


def eval_integer_infix_expression(operator, left, right):
    a, b = left.value, right.value

    if operator == "+":
        return Integer(a + b)
    elif operator == "-":
        return Integer(a - b)
    elif operator == "*":
        return Integer(a * b)
    elif operator == "/":
        if b == 0:
            return Error(f"division by zero: {a} / {b}")
        quotient = abs(a) // abs(b)
        return Integer(quotient if (a < 0) == (b < 0) else -quotient)
    elif operator == "<":
        return native_bool_to_boolean(a < b)
    elif operator == ">":
        return native_bool_to_boolean(a > b)
    elif operator == "==":
        return native_bool_to_boolean(a == b)
    elif operator == "!=":
        return native_bool_to_boolean(a != b)
    return Error(f"unknown operator: {left.type} {operator} {right.type}")


def evaluate(node, env=None, step_limit=None):
    """Evaluates node with a fresh Evaluator. A new top-level Environment is used when env is not given."""
    if env is None:
        env = Environment()
    return Evaluator(step_limit).evaluate(node, env)
