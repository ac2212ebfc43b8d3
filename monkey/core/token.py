"""Token model for the Monkey language. A token is the smallest lexical unit: a kind drawn from a closed set and the
literal text it was scanned from.

```
<ident>   ::= (<letter> | "_")+          ; ASCII letters only, checked against KEYWORDS
<int>     ::= <digit>+                   ; kept as text, converted to a number by the parser
<op>      ::= "=" | "+" | "-" | "!" | "*" | "/" | "<" | ">" | "==" | "!="
<delim>   ::= "," | ";" | "(" | ")" | "{" | "}"
```
"""

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Closed set of lexical categories. Values are the text used when a kind shows up in a message."""
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # identifiers and literals
    IDENT = "IDENT"
    INT = "INT"

    # operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    # delimiters
    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    # keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Token:
    kind: TokenType
    literal: str

    def __str__(self):
        return f"{self.kind}({self.literal!r})"


KEYWORDS = {
    "fn": TokenType.FUNCTION,
    "let": TokenType.LET,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
}


def lookup_ident(ident):
    """Returns the keyword kind for ident, or IDENT if ident is not reserved."""
    return KEYWORDS.get(ident, TokenType.IDENT)
