"""Token definitions for sip lexical analysis. Tokens are immutable and compare structurally: two tokens are equal iff
their kind and payload match, regardless of where in the source they were found.
"""

from dataclasses import dataclass, field
from enum import Enum, auto


class TokenKind(Enum):
    """Closed set of lexical categories."""
    EOF = auto()

    IDENT = auto()
    INTEGER = auto()
    FLOAT = auto()
    STRING = auto()
    TRUE = auto()
    FALSE = auto()
    NULL = auto()

    VAR = auto()
    IF = auto()
    ELSE = auto()
    FOR = auto()
    WHILE = auto()
    RETURN = auto()
    PRINT = auto()
    DEF = auto()

    LPAREN = auto()    # (
    RPAREN = auto()    # )
    LBRACE = auto()    # {
    RBRACE = auto()    # }
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]
    BANG = auto()      # !
    BANG_EQ = auto()   # !=

    ASSIGN = auto()    # =
    EQ = auto()        # ==
    LT = auto()
    LT_EQ = auto()
    GT = auto()
    GT_EQ = auto()
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PIPE = auto()      # |
    OR = auto()        # ||
    AMP = auto()       # &
    AND = auto()       # &&


KEYWORDS = {
    "var": TokenKind.VAR,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "null": TokenKind.NULL,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "for": TokenKind.FOR,
    "while": TokenKind.WHILE,
    "return": TokenKind.RETURN,
    "print": TokenKind.PRINT,
    "def": TokenKind.DEF,
}

PUNCTUATION = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
}

# first char: (kind if alone, second char, kind if followed by second char)
OPERATORS = {
    "=": (TokenKind.ASSIGN, "=", TokenKind.EQ),
    "!": (TokenKind.BANG, "=", TokenKind.BANG_EQ),
    "<": (TokenKind.LT, "=", TokenKind.LT_EQ),
    ">": (TokenKind.GT, "=", TokenKind.GT_EQ),
    "|": (TokenKind.PIPE, "|", TokenKind.OR),
    "&": (TokenKind.AMP, "&", TokenKind.AND),
}

_LEXEMES = {kind: lexeme for lexeme, kind in {**KEYWORDS, **PUNCTUATION}.items()}
_LEXEMES.update({alone: first for first, (alone, __, __) in OPERATORS.items()})
_LEXEMES.update({paired: first + second for first, (__, second, paired) in OPERATORS.items()})


@dataclass(frozen=True)
class Token:
    """A single lexical token. value holds the literal payload (name, number, string or bool) and is None for
    keywords, punctuation and operators, which are fully described by their kind.
    """
    kind: TokenKind
    value: object = None
    line: int = field(default=1, compare=False)
    column: int = field(default=1, compare=False)

    @property
    def lexeme(self):
        """The token rendered back as source text."""
        if self.kind is TokenKind.EOF:
            return "<eof>"
        elif self.kind is TokenKind.STRING:
            return f"\"{self.value}\""
        elif self.kind in (TokenKind.IDENT, TokenKind.INTEGER, TokenKind.FLOAT):
            return str(self.value)
        return _LEXEMES[self.kind]

    def __str__(self):
        if self.value is None or self.kind in (TokenKind.TRUE, TokenKind.FALSE):
            return self.kind.name
        return f"{self.kind.name}({self.value!r})"
