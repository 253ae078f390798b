"""
Result type returned by ``try_compile_source``.

``Ok`` carries the compiled RootNode, ``Err`` the SprigCompileError that
stopped compilation.
"""


class Result:
    """Either Ok(value) or Err(error)."""

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return False

    def unwrap(self):
        raise NotImplementedError

    def unwrap_or(self, default):
        raise NotImplementedError


class Ok(Result):
    def __init__(self, value):
        self.value = value

    def is_ok(self) -> bool:
        return True

    def unwrap(self):
        return self.value

    def unwrap_or(self, default):
        return self.value

    def __repr__(self):
        return f"Ok({self.value!r})"


class Err(Result):
    def __init__(self, error):
        self.error = error

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        """Raise the carried compile error."""
        raise self.error

    def unwrap_or(self, default):
        return default

    def __repr__(self):
        return f"Err({type(self.error).__name__})"

    def __str__(self):
        return str(self.error)
