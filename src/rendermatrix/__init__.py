"""Affine transformation matrices for 2D and 3D rendering."""

from importlib.metadata import PackageNotFoundError, version

from .errors import (
    DimensionMismatchError,
    MatrixStackError,
    RenderMatrixError,
    UnsupportedDimensionError,
)
from .matrix import Matrix, Matrix2D, Matrix3D
from .stack import MatrixStack

__all__ = [
    "DimensionMismatchError",
    "Matrix",
    "Matrix2D",
    "Matrix3D",
    "MatrixStack",
    "MatrixStackError",
    "RenderMatrixError",
    "UnsupportedDimensionError",
]

try:
    __version__ = version("rendermatrix")
except PackageNotFoundError:
    __version__ = "uninstalled"
