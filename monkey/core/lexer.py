"""Lexical scanner for the Monkey language. Converts source text into a stream of Tokens, one per call to next_token.

The lexer never fails: characters it does not recognize become ILLEGAL tokens and are left to the parser to reject.
Once the input is exhausted, every further call returns an EOF token.
"""

from monkey.core.token import Token, TokenType, lookup_ident


class Lexer:
    """Single-pass scanner over an in-memory string. Not restartable: construct a new Lexer to scan the text again."""
    WHITESPACE = " \t\n\r"
    LETTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_"
    DIGITS = "0123456789"

    SINGLE_CHAR = {
        "=": TokenType.ASSIGN,
        "+": TokenType.PLUS,
        "-": TokenType.MINUS,
        "!": TokenType.BANG,
        "*": TokenType.ASTERISK,
        "/": TokenType.SLASH,
        "<": TokenType.LT,
        ">": TokenType.GT,
        ",": TokenType.COMMA,
        ";": TokenType.SEMICOLON,
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        "{": TokenType.LBRACE,
        "}": TokenType.RBRACE,
    }
    DOUBLE_CHAR = {
        "==": TokenType.EQ,
        "!=": TokenType.NOT_EQ,
    }

    def __init__(self, text):
        self.text = text
        self.position = 0  # index of the next unread character

    def next_token(self):
        """Returns the next Token in the input, advancing past it."""
        self._skip_whitespace()

        if self.position >= len(self.text):
            return Token(TokenType.EOF, "")

        char = self.text[self.position]

        pair = self.text[self.position:self.position + 2]
        if pair in Lexer.DOUBLE_CHAR:
            self.position += 2
            return Token(Lexer.DOUBLE_CHAR[pair], pair)

        if char in Lexer.SINGLE_CHAR:
            self.position += 1
            return Token(Lexer.SINGLE_CHAR[char], char)

        if char in Lexer.LETTERS:
            ident = self._read_run(Lexer.LETTERS)
            return Token(lookup_ident(ident), ident)

        if char in Lexer.DIGITS:
            return Token(TokenType.INT, self._read_run(Lexer.DIGITS))

        self.position += 1
        return Token(TokenType.ILLEGAL, char)

    def _skip_whitespace(self):
        while self.position < len(self.text) and self.text[self.position] in Lexer.WHITESPACE:
            self.position += 1

    def _read_run(self, charset):
        """Consumes the maximal run of characters in charset starting at the cursor and returns it."""
        start = self.position
        while self.position < len(self.text) and self.text[self.position] in charset:
            self.position += 1
        return self.text[start:self.position]

    def __iter__(self):
        """Yields tokens up to and including the first EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenType.EOF:
                return
