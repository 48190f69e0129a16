"""2x3 affine matrix for 2D transformations."""

import logging
import math
from typing import Sequence

import torch

from rendermatrix.errors import DimensionMismatchError, UnsupportedDimensionError
from rendermatrix.transformations import R_2d, S_2d, T_2d
from rendermatrix.utils import (
    as_values,
    homogenise_coordinates,
    homogenise_matrix,
    is_planar,
    planar_part,
)

from .base import EPSILON, Matrix, entry

log = logging.getLogger(__name__)


class Matrix2D(Matrix):
    """2x3 affine matrix.

    The matrix looks like the following when multiplying a vector `(x, y)` in
    `mult()`::

        [m00 m01 m02][x]   [m00*x + m01*y + m02*1]   [x']
        [m10 m11 m12][y] = [m10*x + m11*y + m12*1] = [y']
        [ 0   0   1 ][1]   [ 0*x  +  0*y  +  1*1 ]   [ 1]

    Only the top two rows are stored, the bottom row is implicit and can not
    be changed. Operations that need a third dimension raise
    `UnsupportedDimensionError`.
    """

    dimensions = 2
    size = 6

    m00 = entry(0, 0)
    m01 = entry(0, 1)
    m02 = entry(0, 2)
    m10 = entry(1, 0)
    m11 = entry(1, 1)
    m12 = entry(1, 2)

    def reset(self) -> None:
        self._m = torch.eye(2, 3, dtype=torch.float64)

    def set(self, *values) -> None:
        """Set the matrix content.

        Accepts another `Matrix2D`, a flat sequence (or tensor) of 6 entries in
        the order `m00, m01, m02, m10, m11, m12`, or those 6 entries as
        arguments. A `Matrix3D` raises `DimensionMismatchError`, 16 entries
        raise `UnsupportedDimensionError`.
        """
        if len(values) == 1 and isinstance(values[0], Matrix):
            source = values[0]
            if source.dimensions != self.dimensions:
                raise DimensionMismatchError(
                    f"Matrix2D.set() only accepts Matrix2D objects, "
                    f"got {type(source).__name__}."
                )
            self._m = source.values
            return
        self._m = self._entries(values, "set")

    def _entries(self, values: tuple, method: str) -> torch.Tensor:
        """`(2, 3)` tensor of a flat sequence or of 6 entries."""
        if len(values) == 1:
            values = as_values(values[0])
        elif len(values) in (6, 16):
            values = as_values(values)
        else:
            raise TypeError(
                f"{method}() takes a matrix, a sequence or 6 values "
                f"({len(values)} given)"
            )
        if values.numel() == 16:
            raise UnsupportedDimensionError(
                f"Cannot use {method}() with 16 values on a Matrix2D."
            )
        if values.numel() != self.size:
            raise ValueError(f"Matrix2D needs 6 values, got {values.numel()}.")
        return values.reshape(2, 3).clone()

    def translate(self, *offsets: float) -> None:
        if len(offsets) == 3:
            raise UnsupportedDimensionError(
                "Cannot use translate(x, y, z) on a Matrix2D."
            )
        if len(offsets) != 2:
            raise TypeError(f"translate() takes 2 offsets ({len(offsets)} given)")
        # the offset is expressed in the current frame
        self.apply(T_2d(as_values(offsets))[:2])

    def rotate(self, angle: float, *axis: float) -> None:
        if axis:
            raise UnsupportedDimensionError(
                "Cannot use rotate(angle, x, y, z) on a Matrix2D."
            )
        self._m[:, :2] = self._m[:, :2] @ R_2d(angle)[:2, :2]

    def rotate_x(self, angle: float) -> None:
        raise UnsupportedDimensionError("Cannot use rotate_x() on a Matrix2D.")

    def rotate_y(self, angle: float) -> None:
        raise UnsupportedDimensionError("Cannot use rotate_y() on a Matrix2D.")

    def scale(self, *factors: float) -> None:
        if len(factors) == 1:
            factors = factors * 2
        elif len(factors) == 3:
            raise UnsupportedDimensionError(
                "Cannot use scale(x, y, z) on a Matrix2D."
            )
        elif len(factors) != 2:
            raise TypeError(f"scale() takes 1 or 2 factors ({len(factors)} given)")
        self.apply(S_2d(as_values(factors))[:2])

    def shear_x(self, angle: float) -> None:
        """Compose `apply(1, 0, 1, tan(angle), 0, 0)`."""
        self.apply(1, 0, 1, math.tan(angle), 0, 0)

    def shear_y(self, angle: float) -> None:
        """Compose `apply(1, 0, 1, 0, tan(angle), 0)`."""
        self.apply(1, 0, 1, 0, math.tan(angle), 0)

    def _operand(self, values: tuple, method: str) -> torch.Tensor:
        """Homogeneous `(3, 3)` tensor of another matrix, a sequence or 6 entries."""
        if len(values) == 1 and isinstance(values[0], Matrix):
            source = values[0]
            if source.dimensions == self.dimensions:
                return source.to_homogeneous()
            if not is_planar(source.values):
                raise UnsupportedDimensionError(
                    f"Cannot use {method}() with a non-planar "
                    f"{type(source).__name__} on a Matrix2D."
                )
            return homogenise_matrix(planar_part(source.values))
        return homogenise_matrix(self._entries(values, method))

    def apply(self, *source) -> None:
        """Multiply this matrix by another one from the right.

        The other transform takes effect in the frame established so far,
        e.g. after `translate` it happens around the translated origin.
        """
        n = self._operand(source, "apply")
        self._m = (self.to_homogeneous() @ n)[:2]

    def pre_apply(self, *left) -> None:
        """Multiply this matrix by another one from the left.

        The other transform happens in world space, before everything
        accumulated so far.
        """
        n = self._operand(left, "pre_apply")
        self._m = (n @ self.to_homogeneous())[:2]

    def mult(
        self,
        source: Sequence[float] | torch.Tensor,
        target: torch.Tensor | None = None,
    ) -> torch.Tensor:
        """Multiply a 2 element vector by this matrix.

        A third element, such as a z coordinate, is ignored. The result always
        has 2 elements; `target` is reused if it holds exactly 2 elements and
        may be the same tensor as `source`.
        """
        vector = as_values(source)
        if vector.numel() not in (2, 3):
            raise ValueError(
                f"Matrix2D.mult() needs 2 or 3 coordinates, got {vector.numel()}."
            )
        result = self._m @ homogenise_coordinates(vector[:2])
        if isinstance(target, torch.Tensor) and target.numel() == 2:
            target.copy_(result.reshape(target.shape))
            return target
        return result

    def mult_x(self, x: float, y: float) -> float:
        """x-coordinate of the point `(x, y)` multiplied by this matrix."""
        return self.m00 * x + self.m01 * y + self.m02

    def mult_y(self, x: float, y: float) -> float:
        """y-coordinate of the point `(x, y)` multiplied by this matrix."""
        return self.m10 * x + self.m11 * y + self.m12

    def transpose(self) -> None:
        """Unavailable in 2D, a 2x3 affine matrix has no affine transpose."""
        raise UnsupportedDimensionError("Cannot use transpose() on a Matrix2D.")

    def invert(self) -> bool:
        determinant = self.determinant()
        if abs(determinant) <= EPSILON:
            log.debug("Matrix2D not inverted, determinant is %g", determinant)
            return False
        (m00, m01, m02), (m10, m11, m12) = self._m.tolist()
        self._m = torch.tensor(
            [
                [m11, -m01, m01 * m12 - m11 * m02],
                [-m10, m00, m10 * m02 - m00 * m12],
            ],
            dtype=torch.float64,
        ) / determinant
        return True

    def determinant(self) -> float:
        return self.m00 * self.m11 - self.m01 * self.m10

    def to_homogeneous(self) -> torch.Tensor:
        return homogenise_matrix(self._m)

    def is_warped(self) -> bool:
        return not torch.equal(self._m[:, :2], torch.eye(2, dtype=torch.float64))
