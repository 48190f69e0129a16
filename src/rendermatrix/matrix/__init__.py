"""2D and 3D transformation matrices."""

from .base import Matrix
from .matrix_2d import Matrix2D
from .matrix_3d import Matrix3D

__all__ = [
    "Matrix",
    "Matrix2D",
    "Matrix3D",
]
