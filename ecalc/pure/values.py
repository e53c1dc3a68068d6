"""Tagged values for the ecalc language and the arithmetic defined over them.

The `pure` directory contains the building blocks of the language (values and tokens), independent of any session
state. Faults are still raised as the language's own errors from `ecalc.lang.error`.

Every value carries a `kind` tag and a payload that is only ever read through `Value.unwrap`, which checks the tag:

```
<value> ::= Nil                ; renders as "nil", absorbs every arithmetic operation
          | Integer(<i64>)     ; signed 64-bit, "/" truncates toward zero, "**" is integer power
          | Float(<f64>)       ; finite; any operation involving a Float produces a Float
          | Boolean(<bool>)    ; reserved: no literal or operator produces one yet
          | Alias(<name>)      ; read-through view of another variable, resolved by Environment
```

Promotion rules for binary operators (`apply`):
    1. Nil with anything yields Nil
    2. Integer with Integer yields Integer
    3. Integer with Float (either order) widens the Integer and yields Float
"""

import math
import operator
from dataclasses import dataclass
from enum import Enum

from ecalc.lang.error import EvaluationError


I64_MIN = -2 ** 63
I64_MAX = 2 ** 63 - 1


class Kind(Enum):
    """Tags of the value union."""
    NIL = "Nil"
    INTEGER = "Integer"
    FLOAT = "Float"
    BOOLEAN = "Boolean"

    def __str__(self):
        return self.value


class Value:
    """Superclass of every ecalc value. Subclasses set kind and store their payload in `payload`."""
    kind = None
    is_alias = False

    def unwrap(self, kind):
        """Returns payload if this value is tagged with kind, else raises EvaluationError. The only way arithmetic
        reads a payload.
        """
        if self.is_alias or kind is not self.kind:
            raise EvaluationError("expected {} value, got {}", (kind, self.kind))
        return self.payload

    @property
    def is_numeric(self):
        return not self.is_alias and self.kind in (Kind.INTEGER, Kind.FLOAT)


@dataclass(frozen=True)
class Nil(Value):
    kind = Kind.NIL

    @property
    def payload(self):
        return None

    def __str__(self):
        return "nil"


@dataclass(frozen=True)
class Integer(Value):
    payload: int
    kind = Kind.INTEGER

    def __post_init__(self):
        if not I64_MIN <= self.payload <= I64_MAX:
            raise EvaluationError("integer overflow: '{}' does not fit in 64 bits", str(self.payload))

    def __str__(self):
        return str(self.payload)


@dataclass(frozen=True)
class Float(Value):
    payload: float
    kind = Kind.FLOAT

    def __post_init__(self):
        if not math.isfinite(self.payload):
            raise EvaluationError("floating point overflow")

    def __str__(self):
        return repr(self.payload)


@dataclass(frozen=True)
class Boolean(Value):
    payload: bool
    kind = Kind.BOOLEAN

    def __str__(self):
        return "true" if self.payload else "false"


@dataclass(frozen=True)
class Alias(Value):
    """Alias to the variable named target. kind records the referent's kind when the alias was created; the alias owns
    no payload and must be resolved by name through an Environment.
    """
    target: str
    kind: Kind
    is_alias = True

    @property
    def payload(self):
        raise EvaluationError("alias to '{}' has no payload of its own", self.target)

    def __str__(self):
        return f"-> {self.target}"


NIL = Nil()


def _truncating_div(left, right):
    """Integer division rounding toward zero (unlike //, which floors)."""
    if right == 0:
        raise ZeroDivisionError
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def _integer_pow(base, exponent):
    """Integer power. Negative exponents truncate the fractional result toward zero."""
    if exponent < 0:
        if base == 0:
            raise ZeroDivisionError
        if base == 1:
            return 1
        if base == -1:
            return -1 if exponent % 2 else 1
        return 0
    if abs(base) > 1 and exponent >= 64:  # |base| ** 64 never fits in 64 bits
        raise OverflowError
    return base ** exponent


def _float_pow(base, exponent):
    result = base ** exponent
    if isinstance(result, complex):
        raise ValueError
    return result


INTEGER_OPS = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _truncating_div,
    "**": _integer_pow,
}

FLOAT_OPS = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "**": _float_pow,
}


def apply(op, left, right):
    """Applies binary operator op ('+', '-', '*', '/' or '**') to two concrete values. See module docstring for the
    promotion rules. Raises EvaluationError on numeric faults.
    """
    if left.kind is Kind.NIL or right.kind is Kind.NIL:
        return NIL

    for operand in (left, right):
        if not operand.is_numeric:
            raise EvaluationError("unsupported operand type for '{}': {}", (op, operand.kind))

    try:
        if left.kind is Kind.INTEGER and right.kind is Kind.INTEGER:
            return Integer(INTEGER_OPS[op](left.unwrap(Kind.INTEGER), right.unwrap(Kind.INTEGER)))
        return Float(FLOAT_OPS[op](widen(left), widen(right)))
    except ZeroDivisionError:
        raise EvaluationError("division by zero")
    except OverflowError:
        raise EvaluationError("overflow in '{}'", op)
    except ValueError:
        raise EvaluationError("'{}' has no real result for {} and {}", (op, left, right))


def widen(value):
    """Returns the payload of a numeric value as a float."""
    if value.kind is Kind.INTEGER:
        return float(value.unwrap(Kind.INTEGER))
    return value.unwrap(Kind.FLOAT)


def render(value):
    """Textual representation of value, as produced by a print statement."""
    return str(value)
