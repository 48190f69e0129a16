import math

import torch

from rendermatrix.utils import (
    as_values,
    embed_affine_2d,
    format_matrix,
    homogenise_coordinates,
    homogenise_matrix,
    is_planar,
    planar_part,
)


def test_as_values():
    values = as_values([[1, 2], [3, 4]])
    assert values.dtype == torch.float64
    assert values.shape == (4,)
    assert as_values(torch.ones(2, 3, dtype=torch.float32)).dtype == torch.float64


def test_homogenise():
    coords = homogenise_coordinates(torch.zeros(5, 3))
    assert coords.shape == (5, 4)
    assert torch.all(coords[:, 3] == 1)
    matrix = homogenise_matrix(torch.zeros(2, 3, dtype=torch.float64))
    assert torch.equal(matrix[2], torch.tensor([0.0, 0.0, 1.0], dtype=torch.float64))


def test_embed_and_project():
    matrix = torch.tensor([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]], dtype=torch.float64)
    embedded = embed_affine_2d(matrix)
    assert is_planar(embedded)
    assert torch.equal(planar_part(embedded), matrix)
    embedded[2, 3] = 1  # z translation
    assert not is_planar(embedded)


def test_is_planar_tolerates_rounding():
    matrix = torch.eye(4, dtype=torch.float64)
    matrix[2, 2] = 0.9999999999999999
    assert is_planar(matrix)
    matrix[2, 2] = 0.999
    assert not is_planar(matrix)


def test_format_matrix():
    matrix = torch.tensor([[0.5, -123.25], [0.0, 1.0]], dtype=torch.float64)
    assert format_matrix(matrix) == " 000.5000 -123.2500\n 000.0000  001.0000"


def test_format_matrix_non_finite():
    matrix = torch.tensor([[math.nan, 1.0]], dtype=torch.float64)
    assert format_matrix(matrix) == " " * 8 + "nan" + "  00001.0000"
