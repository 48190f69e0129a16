"""Common interface of the 2D and 3D transformation matrices."""

import abc
from typing import Sequence

import torch
from rich.console import Console

from rendermatrix.utils import format_matrix

# smallest normal positive float64, determinants at or below it are singular
EPSILON = torch.finfo(torch.float64).tiny


def entry(row: int, column: int) -> property:
    """Read-only property exposing one stored matrix entry as a float."""

    def _get(self: "Matrix") -> float:
        return float(self._m[row, column])

    return property(_get, doc=f"Entry at row {row}, column {column}.")


class Matrix(abc.ABC):
    """A matrix used to define graphical transformations.

    A matrix is a grid of numbers which can be multiplied by a vector to give
    another vector: translating, rotating, scaling or shearing it, or any
    combination of these. Multiplying matrices combines their effects, see
    `apply` and `pre_apply`.

    Both concrete matrices expose the same set of operations. Operations a
    matrix cannot represent raise `UnsupportedDimensionError` instead of being
    left out, so code driving a transform stack can treat both alike.

    All operations mutate the matrix in place and only ever write its own
    storage; operands are read in full first, so `m.apply(m)` is safe.
    """

    dimensions: int
    size: int  # number of stored entries

    def __init__(self, *values):
        self.reset()
        if values:
            self.set(*values)

    @property
    def values(self) -> torch.Tensor:
        """A copy of the stored entries, `(2, 3)` for 2D and `(4, 4)` for 3D."""
        return self._m.clone()

    def get(self, target: torch.Tensor | None = None):
        """Return a copy of this matrix, or its entries if `target` is given.

        With a `target` the entries are written to it in row-major order when it
        is a tensor holding exactly `size` elements and the target is returned;
        otherwise a new `float64` tensor with the entries is returned.
        """
        if target is None:
            outgoing = type(self)()
            outgoing._m = self._m.clone()
            return outgoing
        flat = self._m.flatten()
        if isinstance(target, torch.Tensor) and target.numel() == self.size:
            target.copy_(flat.reshape(target.shape))
            return target
        return flat

    def print(self, console: Console | None = None) -> None:
        """Print the matrix as aligned rows, followed by an empty line."""
        console = console or Console()
        console.print(str(self), highlight=False, markup=False)
        console.print()

    def __str__(self) -> str:
        return format_matrix(self._m)

    def __repr__(self) -> str:
        values = ", ".join(f"{value:g}" for value in self._m.flatten().tolist())
        return f"{type(self).__name__}({values})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.dimensions == other.dimensions and torch.equal(self._m, other._m)

    __hash__ = None  # mutable

    @abc.abstractmethod
    def reset(self) -> None:
        """Make this an identity matrix. Multiplying by it has no effect."""

    @abc.abstractmethod
    def set(self, *values) -> None:
        """Copy another matrix, a flat sequence of entries, or 6/16 entries."""

    @abc.abstractmethod
    def translate(self, *offsets: float) -> None:
        """Translate by 2 (or, in 3D, 3) offsets in the current local frame."""

    @abc.abstractmethod
    def rotate(self, angle: float, *axis: float) -> None:
        """Rotate by `angle` radians around Z, or around an `(x, y, z)` axis."""

    @abc.abstractmethod
    def rotate_x(self, angle: float) -> None:
        """Rotate by `angle` radians around the X-axis."""

    @abc.abstractmethod
    def rotate_y(self, angle: float) -> None:
        """Rotate by `angle` radians around the Y-axis."""

    def rotate_z(self, angle: float) -> None:
        """Rotate by `angle` radians around the Z-axis."""
        self.rotate(angle)

    @abc.abstractmethod
    def scale(self, *factors: float) -> None:
        """Scale uniformly by one factor, or per axis by 2 (or 3) factors."""

    @abc.abstractmethod
    def shear_x(self, angle: float) -> None:
        """Shear along X by `angle` radians."""

    @abc.abstractmethod
    def shear_y(self, angle: float) -> None:
        """Shear along Y by `angle` radians."""

    @abc.abstractmethod
    def apply(self, *source) -> None:
        """Multiply this matrix by another one from the right (local frame)."""

    @abc.abstractmethod
    def pre_apply(self, *left) -> None:
        """Multiply this matrix by another one from the left (world frame)."""

    @abc.abstractmethod
    def mult(
        self,
        source: Sequence[float] | torch.Tensor,
        target: torch.Tensor | None = None,
    ) -> torch.Tensor:
        """Multiply a vector by this matrix.

        The result is written to `target` if it is a tensor of the right size,
        which saves allocations when transforming many vertices; otherwise a
        new tensor is returned.
        """

    @abc.abstractmethod
    def transpose(self) -> None:
        """Transpose this matrix; rows become columns and columns rows."""

    @abc.abstractmethod
    def invert(self) -> bool:
        """Invert this matrix in place.

        Not every matrix can be inverted, as some map more than one point to
        the same image point. In that case the matrix is left unchanged.

        Returns
        -------
        success: bool
            `True` if the matrix was inverted.
        """

    @abc.abstractmethod
    def determinant(self) -> float:
        """Determinant of the matrix."""

    @abc.abstractmethod
    def to_homogeneous(self) -> torch.Tensor:
        """Copy of this matrix as a square homogeneous `float64` tensor."""

    def is_identity(self) -> bool:
        identity = torch.eye(self.dimensions + 1, dtype=torch.float64)
        return torch.equal(self.to_homogeneous(), identity)

    @abc.abstractmethod
    def is_warped(self) -> bool:
        """Whether the linear part differs from the identity."""
