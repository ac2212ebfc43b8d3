"""Recursive-descent parser for the Monkey language, using operator-precedence ("Pratt") parsing for expressions.

Grammar, loosely:

```
<program>     ::= <statement>*
<statement>   ::= "let" <ident> "=" <expr> [";"]
                | "return" <expr> [";"]
                | <expr> [";"]
<block>       ::= "{" <statement>* "}"
<expr>        ::= <prefix-op> <expr>                    ; "-" or "!"
                | <expr> <infix-op> <expr>              ; precedence climbing, left-associative
                | <expr> "(" [<expr> ("," <expr>)*] ")" ; call
                | "(" <expr> ")"
                | "if" "(" <expr> ")" <block> ["else" <block>]
                | "fn" "(" [<ident> ("," <ident>)*] ")" <block>
                | <ident> | <int> | "true" | "false"
```

Each token kind maps to an optional prefix rule and an optional infix rule; infix rules carry the precedence of their
operator (see PRECEDENCES). The parser never raises on malformed input: it records a message, drops the offending
statement and carries on with the next one, so callers must check errors after parse_program returns.
"""

from enum import IntEnum

from monkey.core import ast
from monkey.core.token import TokenType


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # == !=
    LESSGREATER = 3  # < >
    SUM = 4          # + -
    PRODUCT = 5      # * /
    PREFIX = 6       # -x !x
    CALL = 7         # f(x)


PRECEDENCES = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
}


class Parser:
    """Builds a Program from any token source exposing next_token(), keeping two tokens of lookahead."""

    def __init__(self, token_source):
        self.token_source = token_source
        self.errors = []
        self.block_depth = 0  # blocks currently being parsed

        self.current = None
        self.peek = None

        self.prefix_parse_fns = {
            TokenType.IDENT: self.parse_identifier,
            TokenType.INT: self.parse_integer_literal,
            TokenType.TRUE: self.parse_boolean,
            TokenType.FALSE: self.parse_boolean,
            TokenType.BANG: self.parse_prefix_expression,
            TokenType.MINUS: self.parse_prefix_expression,
            TokenType.LPAREN: self.parse_grouped_expression,
            TokenType.IF: self.parse_if_expression,
            TokenType.FUNCTION: self.parse_function_literal,
        }
        self.infix_parse_fns = {
            TokenType.PLUS: self.parse_infix_expression,
            TokenType.MINUS: self.parse_infix_expression,
            TokenType.ASTERISK: self.parse_infix_expression,
            TokenType.SLASH: self.parse_infix_expression,
            TokenType.EQ: self.parse_infix_expression,
            TokenType.NOT_EQ: self.parse_infix_expression,
            TokenType.LT: self.parse_infix_expression,
            TokenType.GT: self.parse_infix_expression,
            TokenType.LPAREN: self.parse_call_expression,
        }

        # read two tokens so that current and peek are both set
        self.next_token()
        self.next_token()

    # token cursor

    def next_token(self):
        self.current = self.peek
        self.peek = self.token_source.next_token()

    def current_is(self, kind):
        return self.current.kind is kind

    def peek_is(self, kind):
        return self.peek.kind is kind

    def expect_peek(self, kind):
        """Advances if the peek token is of the given kind. Otherwise records an error and stays put."""
        if self.peek_is(kind):
            self.next_token()
            return True
        self.peek_error(kind)
        return False

    def peek_precedence(self):
        return PRECEDENCES.get(self.peek.kind, Precedence.LOWEST)

    def current_precedence(self):
        return PRECEDENCES.get(self.current.kind, Precedence.LOWEST)

    # errors

    def peek_error(self, kind):
        self.errors.append(f"expected next token to be {kind}, got {self.peek.kind} instead")

    def no_prefix_parse_fn_error(self, kind):
        self.errors.append(f"no prefix parse function for {kind} found")

    def synchronize(self):
        """Skips the rest of a malformed statement. Leaves current on the first token after its ";", or on the "}"
        closing the enclosing block.
        """
        depth = 0  # braces opened while skipping
        while not self.current_is(TokenType.EOF):
            if self.current_is(TokenType.LBRACE):
                depth += 1
            elif self.current_is(TokenType.RBRACE):
                if depth == 0 and self.block_depth > 0:
                    return
                depth = max(depth - 1, 0)
            elif self.current_is(TokenType.SEMICOLON) and depth == 0:
                self.next_token()
                return
            self.next_token()

    # statements

    def parse_program(self):
        """Parses statements until EOF. Statements that fail to parse are left out of the returned Program."""
        return ast.Program(tuple(self._parse_statements(TokenType.EOF)))

    def _parse_statements(self, terminator):
        statements = []
        while not self.current_is(terminator) and not self.current_is(TokenType.EOF):
            block_depth = self.block_depth
            try:
                statement = self.parse_statement()
            except RecursionError:
                # unwind to the outermost statement, then skip it
                if block_depth > 0:
                    raise
                self.errors.append("maximum nesting depth exceeded")
                self.block_depth = block_depth
                statement = None

            if statement is not None:
                statements.append(statement)
                self.next_token()
            else:
                self.synchronize()
        return statements

    def parse_statement(self):
        if self.current_is(TokenType.LET):
            return self.parse_let_statement()
        elif self.current_is(TokenType.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self):
        token = self.current

        if not self.expect_peek(TokenType.IDENT):
            return None
        name = ast.Identifier(self.current, self.current.literal)

        if not self.expect_peek(TokenType.ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self.peek_is(TokenType.SEMICOLON):
            self.next_token()
        return ast.LetStatement(token, name, value)

    def parse_return_statement(self):
        token = self.current

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self.peek_is(TokenType.SEMICOLON):
            self.next_token()
        return ast.ReturnStatement(token, value)

    def parse_expression_statement(self):
        token = self.current

        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        if self.peek_is(TokenType.SEMICOLON):
            self.next_token()
        return ast.ExpressionStatement(token, expression)

    def parse_block_statement(self):
        """Parses "{" <statement>* "}". Expects current to be the opening brace; leaves current on the closing one."""
        token = self.current
        self.next_token()

        self.block_depth += 1
        statements = self._parse_statements(TokenType.RBRACE)
        self.block_depth -= 1
        if not self.current_is(TokenType.RBRACE):
            self.errors.append(f"expected {TokenType.RBRACE} to close block, got {self.current.kind} instead")
            return None
        return ast.BlockStatement(token, tuple(statements))

    # expressions

    def parse_expression(self, precedence):
        """Parses one prefix term, then folds in infix operators that bind tighter than precedence."""
        prefix = self.prefix_parse_fns.get(self.current.kind)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.current.kind)
            return None
        left = prefix()

        while left is not None and not self.peek_is(TokenType.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns[self.peek.kind]
            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self):
        return ast.Identifier(self.current, self.current.literal)

    def parse_integer_literal(self):
        try:
            value = int(self.current.literal)
        except ValueError:
            self.errors.append(f"could not parse {self.current.literal!r} as integer")
            return None
        return ast.IntegerLiteral(self.current, value)

    def parse_boolean(self):
        return ast.Boolean(self.current, self.current_is(TokenType.TRUE))

    def parse_prefix_expression(self):
        token = self.current

        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return ast.PrefixExpression(token, token.literal, right)

    def parse_infix_expression(self, left):
        token = self.current

        precedence = self.current_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return ast.InfixExpression(token, left, token.literal, right)

    def parse_grouped_expression(self):
        self.next_token()

        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None or not self.expect_peek(TokenType.RPAREN):
            return None
        return expression

    def parse_if_expression(self):
        token = self.current

        if not self.expect_peek(TokenType.LPAREN):
            return None

        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None

        if not self.expect_peek(TokenType.RPAREN) or not self.expect_peek(TokenType.LBRACE):
            return None

        consequence = self.parse_block_statement()
        if consequence is None:
            return None

        alternative = None
        if self.peek_is(TokenType.ELSE):
            self.next_token()

            if not self.expect_peek(TokenType.LBRACE):
                return None

            alternative = self.parse_block_statement()
            if alternative is None:
                return None

        return ast.IfExpression(token, condition, consequence, alternative)

    def parse_function_literal(self):
        token = self.current

        if not self.expect_peek(TokenType.LPAREN):
            return None

        parameters = self.parse_function_parameters()
        if parameters is None or not self.expect_peek(TokenType.LBRACE):
            return None

        body = self.parse_block_statement()
        if body is None:
            return None
        return ast.FunctionLiteral(token, parameters, body)

    def parse_function_parameters(self):
        """Parses a comma separated identifier list. Expects current to be "(" and leaves current on ")"."""
        parameters = []

        if self.peek_is(TokenType.RPAREN):
            self.next_token()
            return tuple(parameters)

        if not self.expect_peek(TokenType.IDENT):
            return None
        parameters.append(ast.Identifier(self.current, self.current.literal))

        while self.peek_is(TokenType.COMMA):
            self.next_token()
            if not self.expect_peek(TokenType.IDENT):
                return None
            parameters.append(ast.Identifier(self.current, self.current.literal))

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return tuple(parameters)

    def parse_call_expression(self, function):
        token = self.current

        arguments = self.parse_call_arguments()
        if arguments is None:
            return None
        return ast.CallExpression(token, function, arguments)

    def parse_call_arguments(self):
        """Parses a comma separated expression list. Expects current to be "(" and leaves current on ")"."""
        arguments = []

        if self.peek_is(TokenType.RPAREN):
            self.next_token()
            return tuple(arguments)

        self.next_token()
        argument = self.parse_expression(Precedence.LOWEST)
        if argument is None:
            return None
        arguments.append(argument)

        while self.peek_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            argument = self.parse_expression(Precedence.LOWEST)
            if argument is None:
                return None
            arguments.append(argument)

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return tuple(arguments)


def parse(token_source):
    """Parses everything token_source produces. Returns (Program, list of error messages)."""
    parser = Parser(token_source)
    program = parser.parse_program()
    return program, parser.errors
