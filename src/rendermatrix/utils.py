"""Utility functions for rendermatrix."""

import math
from typing import Sequence

import torch
import torch.nn.functional as F

PRINT_DECIMALS = 4

# rounding left in the z row and column by products of rotations about z
PLANAR_TOLERANCE = 1e-10


def as_values(values: Sequence[float] | torch.Tensor) -> torch.Tensor:
    """Flatten numbers, a sequence of numbers or a tensor to a 1D float64 tensor."""
    if isinstance(values, torch.Tensor):
        return values.detach().to(dtype=torch.float64, device="cpu").flatten()
    return torch.as_tensor(values, dtype=torch.float64).flatten()


def homogenise_coordinates(coords: torch.Tensor) -> torch.Tensor:
    """Coordinates to homogeneous coordinates with ones in the last column.

    Parameters
    ----------
    coords: torch.Tensor
        `(..., d)` array of d-dimensional coordinates

    Returns
    -------
    output: torch.Tensor
        `(..., d + 1)` array of homogeneous coordinates
    """
    return F.pad(torch.as_tensor(coords), pad=(0, 1), mode="constant", value=1)


def homogenise_matrix(matrix: torch.Tensor) -> torch.Tensor:
    """Append the affine bottom row `[0, ..., 0, 1]` to a `(d, d + 1)` matrix."""
    bottom = F.pad(
        matrix.new_zeros((1, matrix.shape[-1] - 1)), pad=(0, 1), value=1
    )
    return torch.cat([matrix, bottom], dim=-2)


def embed_affine_2d(matrix: torch.Tensor) -> torch.Tensor:
    """Embed a `(2, 3)` 2D affine matrix in a `(4, 4)` 3D one.

    The 2x2 linear part becomes the upper-left block, the translation goes to
    the x and y rows of the last column and z passes through unchanged.
    """
    embedded = torch.eye(4, dtype=torch.float64)
    embedded[:2, :2] = matrix[:, :2]
    embedded[:2, 3] = matrix[:, 2]
    return embedded


def is_planar(matrix: torch.Tensor) -> bool:
    """Whether a `(4, 4)` matrix acts on the xy-plane only.

    True when the z row and column are those of the identity and the bottom
    row is `[0, 0, 0, 1]`, up to `PLANAR_TOLERANCE`, i.e. the matrix is an
    embedded 2D affine matrix.
    """
    identity = torch.eye(4, dtype=matrix.dtype)

    def _close(a: torch.Tensor, b: torch.Tensor) -> bool:
        return torch.allclose(a, b, rtol=0, atol=PLANAR_TOLERANCE)

    return bool(
        _close(matrix[2], identity[2])
        and _close(matrix[:, 2], identity[:, 2])
        and _close(matrix[3], identity[3])
    )


def planar_part(matrix: torch.Tensor) -> torch.Tensor:
    """Inverse of `embed_affine_2d`: the `(2, 3)` xy affine part of a 4x4 matrix."""
    return torch.cat([matrix[:2, :2], matrix[:2, 3:]], dim=-1).clone()


def format_matrix(matrix: torch.Tensor, decimals: int = PRINT_DECIMALS) -> str:
    """Format matrix entries as aligned rows of text.

    Every entry gets a sign column, as many integer digits as the largest
    absolute entry has (zero padded) and `decimals` decimals. If any entry is
    not finite the integer width falls back to 5.
    """
    rows = matrix.tolist()
    entries = [value for row in rows for value in row]
    if all(math.isfinite(value) for value in entries):
        digits = len(str(int(max(abs(value) for value in entries))))
    else:
        digits = 5
    width = digits + decimals + 2  # sign and decimal point

    def _format(value: float) -> str:
        if math.isfinite(value):
            text = f"{value:+0{width}.{decimals}f}"
        else:
            text = f"{value:+{width}.{decimals}f}"
        return text.replace("+", " ")

    return "\n".join(" ".join(_format(value) for value in row) for row in rows)
