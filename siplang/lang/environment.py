"""Variable bindings for a sip session. There is exactly one, global, scope: blocks do not introduce new bindings
tables, and nothing is ever removed once bound.
"""

from siplang.lang.error import IdentNotFound


class Environment:
    """Mapping of identifier name: runtime object, owned by a single Evaluator."""

    def __init__(self):
        self.values = {}

    def define(self, name, value):
        """Binds name to value, overwriting any previous binding."""
        self.values[name] = value
        return value

    def get(self, name):
        try:
            return self.values[name]
        except KeyError:
            raise IdentNotFound(name)

    def names(self):
        return sorted(self.values)

    def __contains__(self, name):
        return name in self.values

    def __len__(self):
        return len(self.values)

    def __repr__(self):
        return f"Environment({', '.join(f'{name}={value!r}' for name, value in self.values.items())})"
