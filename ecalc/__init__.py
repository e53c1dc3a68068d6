"""ecalc: line-oriented expression interpreter.

Basic program flow for each statement:
    1. Lexer: pulls tokens from the statement one at a time (see ecalc/pure/lexical.py)
    2. Evaluator: recursive descent over the tokens, computing values as rules are matched (see ecalc/lang/grammar.py)
    3. Session: dispatches on the first token to print, assign or alias (see ecalc/lang/session.py)
"""

from ecalc.lang.error import (ErrorHandler, EvaluationError, GenericException, LexError, ParseError,
                              UndefinedVariableError)
from ecalc.lang.session import Session

__all__ = [
    "ErrorHandler",
    "EvaluationError",
    "GenericException",
    "LexError",
    "ParseError",
    "Session",
    "UndefinedVariableError",
]
