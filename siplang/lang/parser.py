"""Recursive-descent parser for the sip language. Consumes a token list exactly once, left to right, and builds a
Program. Each precedence level delegates to the next and associates to the left unless noted:

```
program     ::= declaration* EOF
declaration ::= "var" IDENT ("=" expression)? | statement
statement   ::= ifStmt | forStmt | whileStmt | returnStmt | block | expression
ifStmt      ::= "if" "(" expression ")" statement ("else" statement)?
returnStmt  ::= "return" expression?
block       ::= "{" declaration* "}"
expression  ::= assignment
assignment  ::= logic_or ("=" assignment)?                 ; right-associative, target must be an identifier
logic_or    ::= logic_and ("||" logic_and)*
logic_and   ::= equality ("&&" equality)*
equality    ::= comparison (("==" | "!=") comparison)*
comparison  ::= term (("<" | "<=" | ">" | ">=") term)*
term        ::= factor (("+" | "-") factor)*
factor      ::= unary (("*" | "/") unary)*
unary       ::= ("!" | "-") unary | primary
primary     ::= INTEGER | FLOAT | STRING | "true" | "false" | "null" | IDENT | "(" expression ")"
```

`for` and `while` are recognized but not lowered to executable nodes yet: only the keyword is consumed and a Null
placeholder takes its place. There is no error recovery: the first error aborts parsing.
"""

from siplang.lang import ast
from siplang.lang.error import ExpectedTokenNotFound, NotSupportedToken
from siplang.lang.tokens import Token, TokenKind


LITERALS = (TokenKind.INTEGER, TokenKind.FLOAT, TokenKind.STRING, TokenKind.TRUE, TokenKind.FALSE, TokenKind.NULL)


class Parser:
    """Builds a Program from tokens. source, if given, is only used to quote the offending line in errors."""

    def __init__(self, tokens, source=None):
        self.tokens = list(tokens)
        self.lines = source.split("\n") if source is not None else []
        self.current = 0

    def parse(self):
        """Parses every declaration up to EOF into a Program."""
        statements = []
        while not self._is_at_end():
            statements.append(self._declaration())
        return ast.Program(statements)

    # --- statements --------------------------------------------------------------------------------------------------

    def _declaration(self):
        if self._match(TokenKind.VAR):
            return self._var_declaration()
        return self._statement()

    def _var_declaration(self):
        name = self._consume(TokenKind.IDENT, "expect identifier after 'var'")

        initializer = ast.Null()
        if self._match(TokenKind.ASSIGN):
            initializer = self.expression()

        return ast.VarStmt(name, initializer)

    def _statement(self):
        if self._match(TokenKind.IF):
            return self._if_statement()
        elif self._match(TokenKind.FOR, TokenKind.WHILE):
            return ast.Null()
        elif self._match(TokenKind.RETURN):
            return self._return_statement()
        elif self._match(TokenKind.LBRACE):
            return self._block()
        return self.expression()

    def _if_statement(self):
        self._consume(TokenKind.LPAREN, "expect '(' after 'if'")
        condition = self.expression()
        self._consume(TokenKind.RPAREN, "expect ')' after if condition")

        then_branch = self._statement()

        else_branch = ast.Null()
        if self._match(TokenKind.ELSE):
            else_branch = self._statement()

        return ast.IfStmt(condition, then_branch, else_branch)

    def _return_statement(self):
        if self._is_at_end() or self._check(TokenKind.RBRACE):
            return ast.Return(ast.Null())
        return ast.Return(self.expression())

    def _block(self):
        statements = []
        while not self._is_at_end() and not self._check(TokenKind.RBRACE):
            statements.append(self._declaration())

        self._consume(TokenKind.RBRACE, "expect '}' after block")
        return ast.Block(tuple(statements))

    # --- expressions -------------------------------------------------------------------------------------------------

    def expression(self):
        """Parses a single expression starting at the current token."""
        return self._assignment()

    def _assignment(self):
        target = self._logic_or()

        if self._match(TokenKind.ASSIGN):
            equals = self._previous()
            value = self._assignment()

            if isinstance(target, ast.Identifier):
                return ast.Assign(target.name, value)
            raise self._unsupported(equals)

        return target

    def _logic_or(self):
        return self._left_assoc(self._logic_and, ast.Logical, TokenKind.OR)

    def _logic_and(self):
        return self._left_assoc(self._equality, ast.Logical, TokenKind.AND)

    def _equality(self):
        return self._left_assoc(self._comparison, ast.Binary, TokenKind.EQ, TokenKind.BANG_EQ)

    def _comparison(self):
        kinds = (TokenKind.LT, TokenKind.LT_EQ, TokenKind.GT, TokenKind.GT_EQ)
        return self._left_assoc(self._term, ast.Binary, *kinds)

    def _term(self):
        return self._left_assoc(self._factor, ast.Binary, TokenKind.PLUS, TokenKind.MINUS)

    def _factor(self):
        return self._left_assoc(self._unary, ast.Binary, TokenKind.STAR, TokenKind.SLASH)

    def _left_assoc(self, operand, node_cls, *kinds):
        """operand (op operand)*, folded to the left into node_cls nodes."""
        expr = operand()
        while self._match(*kinds):
            operator = self._previous()
            expr = node_cls(expr, operator, operand())
        return expr

    def _unary(self):
        if self._match(TokenKind.BANG, TokenKind.MINUS):
            operator = self._previous()
            return ast.Unary(operator, self._unary())
        return self._primary()

    def _primary(self):
        if self._match(*LITERALS):
            return ast.Literal(self._previous())

        elif self._match(TokenKind.IDENT):
            return ast.Identifier(self._previous())

        elif self._match(TokenKind.LPAREN):
            inner = self.expression()
            self._consume(TokenKind.RPAREN, "expect ')' after expression")
            return ast.Group(inner)

        raise self._unsupported(self._peek())

    # --- cursor ------------------------------------------------------------------------------------------------------

    def _match(self, *kinds):
        """Consumes the current token if it is of one of kinds."""
        for kind in kinds:
            if self._check(kind):
                self._advance()
                return True
        return False

    def _consume(self, kind, description):
        if self._check(kind):
            return self._advance()

        token = self._peek()
        raise ExpectedTokenNotFound(description, self._line_text(token), token.column - 1, self._line_of(token))

    def _check(self, kind):
        return not self._is_at_end() and self._peek().kind is kind

    def _advance(self):
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self):
        return self._peek().kind is TokenKind.EOF

    def _peek(self):
        """Current token. Running off the end of the list behaves as if it was terminated by EOF."""
        if self.current < len(self.tokens):
            return self.tokens[self.current]

        last = self.tokens[-1] if self.tokens else Token(TokenKind.EOF)
        return Token(TokenKind.EOF, line=last.line, column=last.column)

    def _previous(self):
        return self.tokens[self.current - 1]

    # --- errors ------------------------------------------------------------------------------------------------------

    def _line_text(self, token):
        return self.lines[token.line - 1] if token.line <= len(self.lines) else ""

    def _line_of(self, token):
        return token.line if self.lines else None

    def _unsupported(self, token):
        return NotSupportedToken(token, self._line_text(token), self._line_of(token))


def parse(tokens, source=None):
    """Shorthand for Parser(tokens, source).parse()."""
    return Parser(tokens, source).parse()
