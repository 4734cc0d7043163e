"""Errors raised by PQ-Gram extraction and comparison."""


class PQGramError(ValueError):
    """Base class for PQ-Gram errors."""


class InvalidConfiguration(PQGramError):
    """p or q is not a positive integer."""

    def __init__(self, p, q):
        self.p = p
        self.q = q
        super().__init__(f"p and q must be integers >= 1, got p={p!r}, q={q!r}")


class ConfigurationMismatch(PQGramError):
    """Two profiles built with different (p, q) were compared."""

    def __init__(self, left, right):
        self.left = left
        self.right = right
        super().__init__(
            f"Cannot compare profiles built with (p, q)={left} and (p, q)={right}"
        )
