class DimensionMismatchError(ValueError):
    """Raised when vector or matrix operands disagree in shape."""

    def __init__(self, expected: tuple[int, ...], received: tuple[int, ...], what: str = "operand"):
        super().__init__(
            f"{what} must have shape {expected}; received shape {received}"
        )
        self.expected = expected
        self.received = received


class DegenerateGeometryError(ArithmeticError):
    """Raised when a geometric quantity is undefined (zero-length vectors, cusps)."""
