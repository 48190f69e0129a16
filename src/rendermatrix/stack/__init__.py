"""Save and restore of the current transformation matrix."""

from .matrix_stack import MATRIX_STACK_DEPTH, MatrixStack

__all__ = [
    "MATRIX_STACK_DEPTH",
    "MatrixStack",
]
