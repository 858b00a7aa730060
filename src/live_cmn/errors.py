"""Errors raised by the live CMN normalizer."""


class DimensionMismatch(ValueError):
    """A feature vector's length differs from the normalizer's established dimension."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Data length ({actual}) not equal sum array length ({expected})"
        )
