"""Recursive descent evaluation of ecalc expressions. Parsing and evaluation are fused: every grammar rule consumes its
tokens and returns the Value they compute, so no syntax tree is ever built.

```
<factor> ::= INTEGER | FLOAT | "nil" | IDENTIFIER | "(" <expr> ")"
<term>   ::= <factor> (("*" | "/" | "**") <factor>)*   ; left associative, "**" included: 2 ** 3 ** 2 = 64
<expr>   ::= <term> (("+" | "-") <term>)*               ; left associative
```
"""

from ecalc.lang.error import EvaluationError, GenericException, ParseError
from ecalc.pure.lexical import TokenKind
from ecalc.pure.values import NIL, apply


TERM_OPS = {TokenKind.STAR: "*", TokenKind.SLASH: "/", TokenKind.POWER: "**"}
EXPR_OPS = {TokenKind.PLUS: "+", TokenKind.MINUS: "-"}


class Evaluator:
    """Evaluates expressions from lexer's token stream, reading variables from environment. The lexer's current token
    must be the first token of the expression.
    """

    def __init__(self, lexer, environment):
        self.lexer = lexer
        self.environment = environment

    @property
    def current(self):
        return self.lexer.current

    def error(self, cls, msg, exprs, token):
        """Returns exception of type cls located at token."""
        return cls(msg, exprs).locate(self.lexer.source, token.start, max(token.end, token.start + 1))

    def eat(self, kind):
        """Advance if current token is of the expected kind and return it. Otherwise raise a ParseError."""
        token = self.current
        if token.kind is not kind:
            raise self.error(ParseError, "expected {} but got {}", (kind, token.kind), token)
        self.lexer.advance()
        return token

    def factor(self):
        token = self.current

        if token.kind in (TokenKind.INTEGER, TokenKind.FLOAT):
            self.eat(token.kind)
            return token.literal

        elif token.kind is TokenKind.NIL:
            self.eat(TokenKind.NIL)
            return NIL

        elif token.kind is TokenKind.IDENTIFIER:
            try:
                value = self.environment.lookup(token.identifier)
            except GenericException as error:
                raise error.locate(self.lexer.source, token.start, token.end)
            self.eat(TokenKind.IDENTIFIER)
            return value

        elif token.kind is TokenKind.LPAREN:
            self.eat(TokenKind.LPAREN)
            value = self.expr()
            self.eat(TokenKind.RPAREN)
            return value

        raise self.error(ParseError, "expected primary expression but got {}", token.kind, token)

    def _binary(self, operand, ops):
        """Left-associative chain of operand separated by any operator in ops, applied as it is read."""
        result = operand()
        while self.current.kind in ops:
            token = self.eat(self.current.kind)
            right = operand()
            try:
                result = apply(ops[token.kind], result, right)
            except EvaluationError as error:
                raise error.locate(self.lexer.source, token.start, token.end)
        return result

    def term(self):
        return self._binary(self.factor, TERM_OPS)

    def expr(self):
        return self._binary(self.term, EXPR_OPS)
