"""Lexical analysis for the sip language: converts raw source text into an ordered list of Tokens in a single pass,
with one character of lookahead. Lexemes are loosely defined as follows:

```
<whitespace> ::= " " | "\\t" | "\\r" | "\\n"             ; discarded
<integer>    ::= <digit>+                              ; must fit in a signed 64-bit integer
<float>      ::= <digit>+ "." <digit>*                 ; at most one "."
<string>     ::= "\\"" <char>* "\\""                     ; verbatim, no escape sequences
<name>       ::= <letter> (<letter> | <digit>)*    ; keyword if found in KEYWORDS, otherwise identifier
<operator>   ::= "(" | ")" | "{" | "}" | "[" | "]" | "+" | "-" | "*" | "/"
               | "=" | "==" | "!" | "!=" | "<" | "<=" | ">" | ">=" | "|" | "||" | "&" | "&&"
```

<digit> and <letter> are ASCII only; any other character is an invalid token.

The first invalid lexeme aborts the whole scan: no partial token list is ever returned.
"""

import string

from siplang.lang.error import InvalidNum, InvalidString, InvalidToken
from siplang.lang.tokens import KEYWORDS, OPERATORS, PUNCTUATION, Token, TokenKind


I64_MIN, I64_MAX = -2 ** 63, 2 ** 63 - 1
WHITESPACE = " \t\r\n"
DIGITS = frozenset(string.digits)
LETTERS = frozenset(string.ascii_letters)


class Lexer:
    """Converts sip source text into a token stream."""

    def __init__(self, source):
        self.source = source
        self.lines = source.split("\n")  # used for error messages

        self.index = 0
        self.line = 1
        self.column = 1

    def scan(self):
        """Tokenizes the full source and returns the token list, terminated by an EOF token."""
        tokens = []

        while not self._is_at_end():
            char = self._peek()

            if char in WHITESPACE:
                self._advance()
            elif char in DIGITS:
                tokens.append(self._numeral())
            elif char == "\"":
                tokens.append(self._string())
            elif char in LETTERS:
                tokens.append(self._name())
            elif char in PUNCTUATION:
                tokens.append(Token(PUNCTUATION[char], None, self.line, self.column))
                self._advance()
            elif char in OPERATORS:
                tokens.append(self._operator())
            else:
                raise InvalidToken(char, self._line_text(self.line), self.column - 1, self.line)

        tokens.append(Token(TokenKind.EOF, line=self.line, column=self.column))
        return tokens

    def _operator(self):
        line, column = self.line, self.column
        alone, second, paired = OPERATORS[self._advance()]

        if self._peek() == second:
            self._advance()
            return Token(paired, None, line, column)
        return Token(alone, None, line, column)

    def _numeral(self):
        line, column = self.line, self.column

        numeral = ""
        while self._peek() in DIGITS or (self._peek() == "." and "." not in numeral):
            numeral += self._advance()

        try:
            if "." in numeral:
                return Token(TokenKind.FLOAT, float(numeral), line, column)

            value = int(numeral)
            if not I64_MIN <= value <= I64_MAX:
                raise ValueError("number too large to fit in a 64-bit integer")
            return Token(TokenKind.INTEGER, value, line, column)

        except ValueError as error:
            raise InvalidNum(str(error), numeral, self._line_text(line), column - 1, line)

    def _string(self):
        line, column = self.line, self.column
        self._advance()  # opening quote

        content = ""
        while not self._is_at_end():
            char = self._advance()
            if char == "\"":
                return Token(TokenKind.STRING, content, line, column)
            content += char

        raise InvalidString(content, self._line_text(line), column - 1, line)

    def _name(self):
        line, column = self.line, self.column

        name = ""
        while self._peek() in LETTERS or self._peek() in DIGITS:
            name += self._advance()

        kind = KEYWORDS.get(name, TokenKind.IDENT)
        if kind is TokenKind.IDENT:
            return Token(kind, name, line, column)
        elif kind in (TokenKind.TRUE, TokenKind.FALSE):
            return Token(kind, kind is TokenKind.TRUE, line, column)
        return Token(kind, None, line, column)

    def _line_text(self, line):
        return self.lines[line - 1] if line <= len(self.lines) else ""

    def _peek(self):
        """Returns the current character without consuming it, or "" at end of input."""
        return self.source[self.index] if not self._is_at_end() else ""

    def _advance(self):
        char = self.source[self.index]
        self.index += 1

        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def _is_at_end(self):
        return self.index >= len(self.source)


def scan(source):
    """Shorthand for Lexer(source).scan()."""
    return Lexer(source).scan()
