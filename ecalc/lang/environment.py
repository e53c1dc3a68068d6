"""Variable storage for an ecalc session.

Aliases never hold a reference into the storage of another entry. They hold the referent's name and are re-resolved
through the Environment on every read, so an alias always sees the referent's current value.
"""

from ecalc.lang.error import EvaluationError, UndefinedVariableError
from ecalc.pure.values import Alias


class Environment:
    """Mapping of identifier: Value. Entries are created/overwritten by assign and alias, and are never deleted."""

    def __init__(self):
        self.variables = {}

    def get(self, name):
        """Returns the Value stored under name, which may be an Alias."""
        try:
            return self.variables[name]
        except KeyError:
            raise UndefinedVariableError("variable '{}' is not defined", name)

    def lookup(self, name):
        """Returns the concrete Value of name, resolving aliases by name. An alias whose referent no longer holds a
        value of the kind the alias was created for is an EvaluationError.
        """
        value = self.get(name)
        while value.is_alias:
            referent = self.get(value.target)
            if referent.kind is not value.kind:
                msg = "alias '{}' expects {} but '{}' now holds {}"
                raise EvaluationError(msg, (name, value.kind, value.target, referent.kind))
            value = referent
        return value

    def assign(self, name, value):
        """Stores a concrete value under name, replacing any previous value or alias."""
        if value.is_alias:
            raise EvaluationError("cannot assign alias '{}' as a value", str(value))
        self.variables[name] = value

    def alias(self, name, target):
        """Makes name an alias of target. If target is itself an alias, name aliases the variable target ultimately
        refers to, so every alias points at a concrete entry when created (no alias cycles can form).
        """
        referent = self.lookup(target)  # validates the whole chain

        while self.variables[target].is_alias:
            target = self.variables[target].target

        if target == name:
            raise EvaluationError("'{}' cannot be an alias of itself", name)

        self.variables[name] = Alias(target, referent.kind)
        return self.variables[name]

    def __contains__(self, name):
        return name in self.variables

    def __len__(self):
        return len(self.variables)
