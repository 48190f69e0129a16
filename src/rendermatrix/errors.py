"""Exceptions raised by rendermatrix."""


class RenderMatrixError(Exception):
    """Base class for all rendermatrix errors."""


class DimensionMismatchError(RenderMatrixError, ValueError):
    """A matrix of incompatible dimensionality was given as an operand.

    Raised for example when a 2D matrix is asked to `set()` itself from a 3D
    matrix, which it has no room to store.
    """


class UnsupportedDimensionError(RenderMatrixError, ValueError):
    """The operation cannot be represented by a matrix of this dimensionality."""


class MatrixStackError(RenderMatrixError, RuntimeError):
    """Unbalanced push/pop on a matrix stack."""
