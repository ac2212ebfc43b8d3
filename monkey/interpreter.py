"""Monkey interpreter.

Program flow is strictly linear:
    1. Lexer (core/lexer.py): source text -> tokens, one at a time; unknown characters become ILLEGAL tokens
    2. Parser (core/parser.py): tokens -> AST (core/ast.py), Pratt parsing for expressions; errors are collected, not
       raised
    3. Evaluator (core/evaluator.py): AST -> runtime Object (core/object.py), walking the tree directly; runtime errors
       are Error values

The lang/ directory wraps this pipeline for command-line use (sessions, the interactive shell, colored errors).
"""

from monkey.core.environment import Environment
from monkey.core.evaluator import Evaluator
from monkey.core.lexer import Lexer
from monkey.core.parser import parse
from monkey.lang.error import ParseError


def parse_source(source):
    """Parses source text into a Program, raising ParseError if the parser reported anything."""
    program, errors = parse(Lexer(source))
    if errors:
        raise ParseError(errors, source)
    return program


def interpret(source, env=None, step_limit=None):
    """Parses and evaluates source text, returning the resulting Object. Runtime errors are returned as Error objects;
    parse errors raise ParseError.
    """
    if env is None:
        env = Environment()
    return Evaluator(step_limit).evaluate(parse_source(source), env)
