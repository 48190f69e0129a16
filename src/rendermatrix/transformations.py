"""Homogeneous matrices for elementary rotations, translations, scales and shears.

Functions in this module generate matrices which left-multiply column vectors
containing `xyzw` (4x4) or `xyw` (3x3) homogeneous coordinates. Angles are in
radians and all matrices are `torch.float64`.
"""

import einops
import torch
import torch.nn.functional as F


def _as_float64(values: torch.Tensor | float) -> torch.Tensor:
    return torch.as_tensor(values, dtype=torch.float64)


def Rx(angles: torch.Tensor | float) -> torch.Tensor:
    """4x4 matrices for a rotation of homogeneous coordinates around the X-axis.

    Parameters
    ----------
    angles: torch.Tensor | float
        `(..., )` array of angles in radians

    Returns
    -------
    matrices: `(..., 4, 4)` array of 4x4 rotation matrices.
    """
    angles_packed, ps = einops.pack([_as_float64(angles)], pattern="*")  # to 1d
    n = angles_packed.shape[0]
    c = torch.cos(angles_packed)
    s = torch.sin(angles_packed)
    matrices = einops.repeat(
        torch.eye(4, dtype=torch.float64), "i j -> n i j", n=n
    ).clone()
    matrices[:, 1, 1] = c
    matrices[:, 1, 2] = -s
    matrices[:, 2, 1] = s
    matrices[:, 2, 2] = c
    [matrices] = einops.unpack(matrices, packed_shapes=ps, pattern="* i j")
    return matrices


def Ry(angles: torch.Tensor | float) -> torch.Tensor:
    """4x4 matrices for a rotation of homogeneous coordinates around the Y-axis.

    Parameters
    ----------
    angles: torch.Tensor | float
        `(..., )` array of angles in radians

    Returns
    -------
    matrices: `(..., 4, 4)` array of 4x4 rotation matrices.
    """
    angles_packed, ps = einops.pack([_as_float64(angles)], pattern="*")  # to 1d
    n = angles_packed.shape[0]
    c = torch.cos(angles_packed)
    s = torch.sin(angles_packed)
    matrices = einops.repeat(
        torch.eye(4, dtype=torch.float64), "i j -> n i j", n=n
    ).clone()
    matrices[:, 0, 0] = c
    matrices[:, 0, 2] = s
    matrices[:, 2, 0] = -s
    matrices[:, 2, 2] = c
    [matrices] = einops.unpack(matrices, packed_shapes=ps, pattern="* i j")
    return matrices


def Rz(angles: torch.Tensor | float) -> torch.Tensor:
    """4x4 matrices for a rotation of homogeneous coordinates around the Z-axis.

    Parameters
    ----------
    angles: torch.Tensor | float
        `(..., )` array of angles in radians

    Returns
    -------
    matrices: `(..., 4, 4)` array of 4x4 rotation matrices.
    """
    angles_packed, ps = einops.pack([_as_float64(angles)], pattern="*")  # to 1d
    n = angles_packed.shape[0]
    c = torch.cos(angles_packed)
    s = torch.sin(angles_packed)
    matrices = einops.repeat(
        torch.eye(4, dtype=torch.float64), "i j -> n i j", n=n
    ).clone()
    matrices[:, 0, 0] = c
    matrices[:, 0, 1] = -s
    matrices[:, 1, 0] = s
    matrices[:, 1, 1] = c
    [matrices] = einops.unpack(matrices, packed_shapes=ps, pattern="* i j")
    return matrices


def R_axis(angles: torch.Tensor | float, axes: torch.Tensor) -> torch.Tensor:
    """4x4 matrices for a rotation around an arbitrary axis (Rodrigues' formula).

    Parameters
    ----------
    angles: torch.Tensor | float
        `(..., )` array of angles in radians
    axes: torch.Tensor
        `(..., 3)` array of rotation axes, broadcastable against `angles`. Axes
        are normalised here; a zero-length axis is not a rotation and has to be
        caught by the caller.

    Returns
    -------
    matrices: `(..., 4, 4)` array of 4x4 rotation matrices.
    """
    angles_packed, ps = einops.pack([_as_float64(angles)], pattern="*")  # to 1d
    axes_packed, _ = einops.pack([_as_float64(axes)], pattern="* coords")  # to 2d
    n = angles_packed.shape[0]
    axes_packed = torch.broadcast_to(F.normalize(axes_packed, dim=-1), (n, 3))
    x, y, z = axes_packed.unbind(dim=-1)
    c = torch.cos(angles_packed)
    s = torch.sin(angles_packed)
    t = 1 - c
    matrices = einops.repeat(
        torch.eye(4, dtype=torch.float64), "i j -> n i j", n=n
    ).clone()
    matrices[:, 0, 0] = t * x * x + c
    matrices[:, 0, 1] = t * x * y - s * z
    matrices[:, 0, 2] = t * x * z + s * y
    matrices[:, 1, 0] = t * x * y + s * z
    matrices[:, 1, 1] = t * y * y + c
    matrices[:, 1, 2] = t * y * z - s * x
    matrices[:, 2, 0] = t * x * z - s * y
    matrices[:, 2, 1] = t * y * z + s * x
    matrices[:, 2, 2] = t * z * z + c
    [matrices] = einops.unpack(matrices, packed_shapes=ps, pattern="* i j")
    return matrices


def T(shifts: torch.Tensor) -> torch.Tensor:
    """4x4 matrices for translations.

    Parameters
    ----------
    shifts: torch.Tensor
        `(..., 3)` array of shifts.

    Returns
    -------
    matrices: torch.Tensor
        `(..., 4, 4)` array of 4x4 shift matrices.
    """
    shifts, ps = einops.pack([_as_float64(shifts)], pattern="* coords")  # to 2d
    n = shifts.shape[0]
    matrices = einops.repeat(
        torch.eye(4, dtype=torch.float64), "i j -> n i j", n=n
    ).clone()
    matrices[:, :3, 3] = shifts
    [matrices] = einops.unpack(matrices, packed_shapes=ps, pattern="* i j")
    return matrices


def S(scale_factors: torch.Tensor) -> torch.Tensor:
    """4x4 matrices for scaling.

    Parameters
    ----------
    scale_factors: torch.Tensor
        `(..., 3)` array of scale factors.

    Returns
    -------
    matrices: torch.Tensor
        `(..., 4, 4)` array of 4x4 scale matrices.
    """
    scale_factors, ps = einops.pack(
        [_as_float64(scale_factors)], pattern="* coords"
    )  # to 2d
    n = scale_factors.shape[0]
    matrices = einops.repeat(
        torch.eye(4, dtype=torch.float64), "i j -> n i j", n=n
    ).clone()
    matrices[:, [0, 1, 2], [0, 1, 2]] = scale_factors
    [matrices] = einops.unpack(matrices, packed_shapes=ps, pattern="* i j")
    return matrices


def Hx(angles: torch.Tensor | float) -> torch.Tensor:
    """4x4 matrices shearing x proportionally to y by `tan(angle)`."""
    angles_packed, ps = einops.pack([_as_float64(angles)], pattern="*")  # to 1d
    n = angles_packed.shape[0]
    matrices = einops.repeat(
        torch.eye(4, dtype=torch.float64), "i j -> n i j", n=n
    ).clone()
    matrices[:, 0, 1] = torch.tan(angles_packed)
    [matrices] = einops.unpack(matrices, packed_shapes=ps, pattern="* i j")
    return matrices


def Hy(angles: torch.Tensor | float) -> torch.Tensor:
    """4x4 matrices shearing y proportionally to x by `tan(angle)`."""
    angles_packed, ps = einops.pack([_as_float64(angles)], pattern="*")  # to 1d
    n = angles_packed.shape[0]
    matrices = einops.repeat(
        torch.eye(4, dtype=torch.float64), "i j -> n i j", n=n
    ).clone()
    matrices[:, 1, 0] = torch.tan(angles_packed)
    [matrices] = einops.unpack(matrices, packed_shapes=ps, pattern="* i j")
    return matrices


# Matrices for 2D transformations


def R_2d(angles: torch.Tensor | float) -> torch.Tensor:
    """3x3 matrices for a rotation of homogeneous coordinates around the Z-axis.

    Parameters
    ----------
    angles: torch.Tensor | float
        `(..., )` array of angles in radians

    Returns
    -------
    matrices: `(..., 3, 3)` array of 3x3 rotation matrices.
    """
    angles_packed, ps = einops.pack([_as_float64(angles)], pattern="*")  # to 1d
    n = angles_packed.shape[0]
    c = torch.cos(angles_packed)
    s = torch.sin(angles_packed)
    matrices = einops.repeat(
        torch.eye(3, dtype=torch.float64), "i j -> n i j", n=n
    ).clone()
    matrices[:, 0, 0] = c
    matrices[:, 0, 1] = -s
    matrices[:, 1, 0] = s
    matrices[:, 1, 1] = c
    [matrices] = einops.unpack(matrices, packed_shapes=ps, pattern="* i j")
    return matrices


def T_2d(shifts: torch.Tensor) -> torch.Tensor:
    """3x3 matrices for translations.

    Parameters
    ----------
    shifts: torch.Tensor
        `(..., 2)` array of shifts.

    Returns
    -------
    matrices: torch.Tensor
        `(..., 3, 3)` array of 3x3 shift matrices.
    """
    shifts, ps = einops.pack([_as_float64(shifts)], pattern="* coords")  # to 2d
    n = shifts.shape[0]
    matrices = einops.repeat(
        torch.eye(3, dtype=torch.float64), "i j -> n i j", n=n
    ).clone()
    matrices[:, :2, 2] = shifts
    [matrices] = einops.unpack(matrices, packed_shapes=ps, pattern="* i j")
    return matrices


def S_2d(scale_factors: torch.Tensor) -> torch.Tensor:
    """3x3 matrices for scaling.

    Parameters
    ----------
    scale_factors: torch.Tensor
        `(..., 2)` array of scale factors.

    Returns
    -------
    matrices: torch.Tensor
        `(..., 3, 3)` array of 3x3 scale matrices.
    """
    scale_factors, ps = einops.pack(
        [_as_float64(scale_factors)], pattern="* coords"
    )  # to 2d
    n = scale_factors.shape[0]
    matrices = einops.repeat(
        torch.eye(3, dtype=torch.float64), "i j -> n i j", n=n
    ).clone()
    matrices[:, [0, 1], [0, 1]] = scale_factors
    [matrices] = einops.unpack(matrices, packed_shapes=ps, pattern="* i j")
    return matrices
