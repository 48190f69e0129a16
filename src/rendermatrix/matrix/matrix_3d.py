"""4x4 homogeneous matrix for 3D transformations."""

import logging
from typing import Sequence

import torch

from rendermatrix.transformations import Hx, Hy, R_axis, Rx, Ry, Rz, S, T
from rendermatrix.utils import as_values, embed_affine_2d, homogenise_coordinates

from .base import EPSILON, Matrix, entry

log = logging.getLogger(__name__)

# squared axis lengths below this can not be normalised into a rotation axis
AXIS_EPSILON = 1e-4


class Matrix3D(Matrix):
    """4x4 matrix acting on `xyzw` homogeneous coordinates.

    2D content, either a `Matrix2D` or 6 entries, is accepted everywhere and
    embedded as the upper-left block with z passing through unchanged.
    """

    dimensions = 3
    size = 16

    m00, m01, m02, m03 = (entry(0, j) for j in range(4))
    m10, m11, m12, m13 = (entry(1, j) for j in range(4))
    m20, m21, m22, m23 = (entry(2, j) for j in range(4))
    m30, m31, m32, m33 = (entry(3, j) for j in range(4))

    def reset(self) -> None:
        self._m = torch.eye(4, dtype=torch.float64)

    def _operand(self, values: tuple, method: str) -> torch.Tensor:
        """`(4, 4)` tensor of a matrix, a flat sequence, or 6/16 entries."""
        if len(values) == 1 and isinstance(values[0], Matrix):
            source = values[0]
            if source.dimensions == 2:
                return embed_affine_2d(source.values)
            return source.values
        if len(values) == 1:
            values = as_values(values[0])
        elif len(values) in (6, 16):
            values = as_values(values)
        else:
            raise TypeError(
                f"{method}() takes a matrix, a sequence, 6 or 16 values "
                f"({len(values)} given)"
            )
        if values.numel() == 6:
            return embed_affine_2d(values.reshape(2, 3))
        if values.numel() != self.size:
            raise ValueError(f"Matrix3D needs 6 or 16 values, got {values.numel()}.")
        return values.reshape(4, 4).clone()

    def set(self, *values) -> None:
        """Set the matrix content.

        Accepts another matrix, a flat sequence (or tensor) of 6 or 16 entries
        in row-major order, or those entries as arguments.
        """
        self._m = self._operand(values, "set")

    def translate(self, *offsets: float) -> None:
        if len(offsets) == 2:
            offsets = (*offsets, 0.0)
        elif len(offsets) != 3:
            raise TypeError(f"translate() takes 2 or 3 offsets ({len(offsets)} given)")
        self.apply(T(as_values(offsets)))

    def rotate(self, angle: float, *axis: float) -> None:
        if not axis:
            self.rotate_z(angle)
            return
        if len(axis) != 3:
            raise TypeError(f"rotate() takes an axis of 3 values ({len(axis)} given)")
        axis = as_values(axis)
        norm2 = float(axis @ axis)
        if norm2 < AXIS_EPSILON:
            log.debug("Zero-length rotation axis %s, rotation skipped", axis.tolist())
            return
        self.apply(R_axis(angle, axis))

    def rotate_x(self, angle: float) -> None:
        self.apply(Rx(angle))

    def rotate_y(self, angle: float) -> None:
        self.apply(Ry(angle))

    def rotate_z(self, angle: float) -> None:
        self.apply(Rz(angle))

    def scale(self, *factors: float) -> None:
        if len(factors) == 1:
            factors = factors * 3
        elif len(factors) == 2:
            factors = (*factors, 1.0)
        elif len(factors) != 3:
            raise TypeError(f"scale() takes 1 to 3 factors ({len(factors)} given)")
        self.apply(S(as_values(factors)))

    def shear_x(self, angle: float) -> None:
        self.apply(Hx(angle))

    def shear_y(self, angle: float) -> None:
        self.apply(Hy(angle))

    def apply(self, *source) -> None:
        n = self._operand(source, "apply")
        self._m = self._m @ n

    def pre_apply(self, *left) -> None:
        n = self._operand(left, "pre_apply")
        self._m = n @ self._m

    def mult(
        self,
        source: Sequence[float] | torch.Tensor,
        target: torch.Tensor | None = None,
    ) -> torch.Tensor:
        """Multiply a 2, 3 or 4 element vector by this matrix.

        2 and 3 element vectors are points (missing z is 0, w is 1) and give 3
        elements, the bottom row is not used. 4 element vectors are multiplied
        by the full matrix and give 4 elements. `target` is reused if it holds
        exactly as many elements as the result.
        """
        vector = as_values(source)
        if vector.numel() == 2:
            vector = torch.cat([vector, vector.new_zeros(1)])
        if vector.numel() == 3:
            result = self._m[:3] @ homogenise_coordinates(vector)
        elif vector.numel() == 4:
            result = self._m @ vector
        else:
            raise ValueError(
                f"Matrix3D.mult() needs 2, 3 or 4 coordinates, got {vector.numel()}."
            )
        if isinstance(target, torch.Tensor) and target.numel() == result.numel():
            target.copy_(result.reshape(target.shape))
            return target
        return result

    def mult_x(self, x: float, y: float, z: float = 0.0, w: float = 1.0) -> float:
        return self.m00 * x + self.m01 * y + self.m02 * z + self.m03 * w

    def mult_y(self, x: float, y: float, z: float = 0.0, w: float = 1.0) -> float:
        return self.m10 * x + self.m11 * y + self.m12 * z + self.m13 * w

    def mult_z(self, x: float, y: float, z: float = 0.0, w: float = 1.0) -> float:
        return self.m20 * x + self.m21 * y + self.m22 * z + self.m23 * w

    def mult_w(self, x: float, y: float, z: float = 0.0, w: float = 1.0) -> float:
        return self.m30 * x + self.m31 * y + self.m32 * z + self.m33 * w

    def transpose(self) -> None:
        """Swap rows and columns of the linear 3x3 part.

        The translation column and the bottom row are left in place.
        """
        self._m[:3, :3] = self._m[:3, :3].T.clone()

    def invert(self) -> bool:
        determinant = self.determinant()
        if abs(determinant) <= EPSILON:
            log.debug("Matrix3D not inverted, determinant is %g", determinant)
            return False
        self._m = torch.linalg.inv(self._m)
        return True

    def determinant(self) -> float:
        return float(torch.linalg.det(self._m))

    def to_homogeneous(self) -> torch.Tensor:
        return self._m.clone()

    def is_warped(self) -> bool:
        return not torch.equal(self._m[:3, :3], torch.eye(3, dtype=torch.float64))
