"""Lexical scopes for the evaluator. Each function call gets a fresh Environment chained to the one its function was
defined in, which is what makes closures work.
"""


class Environment:
    """Mapping of names to Objects, with an optional enclosing scope consulted on lookup misses."""

    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer

    @classmethod
    def enclosed(cls, outer):
        """Returns a new, empty scope whose lookups fall back to outer."""
        return cls(outer)

    def get(self, name):
        """Returns the Object bound to name in this scope or the nearest enclosing one, None if unbound."""
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name, value):
        """Binds name in this scope (shadowing any outer binding) and returns value."""
        self.store[name] = value
        return value

    def __contains__(self, name):
        return self.get(name) is not None

    def __repr__(self):
        return f"Environment({list(self.store)}, outer={self.outer!r})"
