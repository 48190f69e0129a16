"""Transform stack driving the current matrix of a renderer."""

import logging
from typing import Sequence

import torch
from rich.console import Console

from rendermatrix.errors import MatrixStackError, UnsupportedDimensionError
from rendermatrix.matrix import Matrix, Matrix2D, Matrix3D

log = logging.getLogger(__name__)

MATRIX_STACK_DEPTH = 32


class MatrixStack:
    """Current transformation matrix of a renderer plus its saved copies.

    Drawing calls compose into `matrix` with `translate`, `rotate`, `scale`
    and friends, `push` and `pop` checkpoint and restore it, and `transform`
    maps vertices through it.

    A 2D stack degrades gracefully: calls that need a third dimension log a
    warning (once per method) and leave the matrix unchanged, instead of
    raising `UnsupportedDimensionError` into drawing code.

    Parameters
    ----------
    dimensions: int
        2 for a `Matrix2D`, 3 for a `Matrix3D`.
    max_depth: int
        Maximum number of nested `push` calls.
    console: Console | None
        rich console used by `print_matrix`.
    """

    def __init__(
        self,
        dimensions: int = 2,
        max_depth: int = MATRIX_STACK_DEPTH,
        console: Console | None = None,
    ):
        if dimensions == 2:
            self.matrix: Matrix = Matrix2D()
        elif dimensions == 3:
            self.matrix = Matrix3D()
        else:
            raise ValueError(f"dimensions must be 2 or 3, got {dimensions}")
        self.max_depth = max_depth
        self.console = console
        self._saved: list[Matrix] = []
        self._warned: set[str] = set()

    @property
    def dimensions(self) -> int:
        return self.matrix.dimensions

    @property
    def depth(self) -> int:
        """Number of saved matrices."""
        return len(self._saved)

    def push(self) -> None:
        if len(self._saved) >= self.max_depth:
            raise MatrixStackError(
                f"Too many calls to push(), the stack holds {self.max_depth} matrices."
            )
        self._saved.append(self.matrix.get())

    def pop(self) -> None:
        if not self._saved:
            raise MatrixStackError("Too many calls to pop(), and not enough to push().")
        self.matrix.set(self._saved.pop())

    def reset(self) -> None:
        self.matrix.reset()

    def translate(self, *offsets: float) -> None:
        self._compose("translate", *offsets)

    def rotate(self, angle: float, *axis: float) -> None:
        self._compose("rotate", angle, *axis)

    def rotate_x(self, angle: float) -> None:
        self._compose("rotate_x", angle)

    def rotate_y(self, angle: float) -> None:
        self._compose("rotate_y", angle)

    def rotate_z(self, angle: float) -> None:
        self._compose("rotate_z", angle)

    def scale(self, *factors: float) -> None:
        self._compose("scale", *factors)

    def shear_x(self, angle: float) -> None:
        self._compose("shear_x", angle)

    def shear_y(self, angle: float) -> None:
        self._compose("shear_y", angle)

    def apply_matrix(self, *source) -> None:
        self._compose("apply", *source)

    def get_matrix(self, target: torch.Tensor | None = None):
        """Copy of the current matrix, or its entries written to `target`."""
        return self.matrix.get(target)

    def set_matrix(self, source: Matrix) -> None:
        """Replace the current matrix by `source`.

        On a 2D stack a `Matrix3D` is only taken if it is planar.
        """
        self.matrix.reset()
        self.apply_matrix(source)

    def transform(
        self,
        vertex: Sequence[float] | torch.Tensor,
        target: torch.Tensor | None = None,
    ) -> torch.Tensor:
        """Map a vertex from object space through the current matrix."""
        return self.matrix.mult(vertex, target)

    def print_matrix(self) -> None:
        self.matrix.print(console=self.console)

    def _compose(self, method: str, *args) -> None:
        try:
            getattr(self.matrix, method)(*args)
        except UnsupportedDimensionError:
            if self.dimensions != 2:
                raise
            self._warn_once(method)

    def _warn_once(self, method: str) -> None:
        if method in self._warned:
            return
        self._warned.add(method)
        log.warning(
            "%s() with these arguments needs a 3D matrix and is ignored by a "
            "2D matrix stack",
            method,
        )
