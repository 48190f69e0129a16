import logging
import math

import pytest
import torch

from rendermatrix import (
    DimensionMismatchError,
    Matrix2D,
    Matrix3D,
    MatrixStack,
    MatrixStackError,
    UnsupportedDimensionError,
)


def test_push_pop():
    stack = MatrixStack()
    stack.translate(10, 5)
    stack.push()
    assert stack.depth == 1
    stack.rotate(math.pi / 2)
    assert torch.allclose(
        stack.transform((1, 0)), torch.tensor([10.0, 6.0], dtype=torch.float64)
    )
    stack.pop()
    assert stack.depth == 0
    assert torch.allclose(
        stack.transform((1, 0)), torch.tensor([11.0, 5.0], dtype=torch.float64)
    )


def test_saved_matrices_are_copies():
    stack = MatrixStack(dimensions=3)
    stack.push()
    stack.scale(2)
    saved = stack.get_matrix()
    stack.pop()
    assert stack.matrix.is_identity()
    assert saved.determinant() == pytest.approx(8)


def test_unbalanced_push_pop():
    stack = MatrixStack(max_depth=2)
    with pytest.raises(MatrixStackError):
        stack.pop()
    stack.push()
    stack.push()
    with pytest.raises(MatrixStackError):
        stack.push()


def test_invalid_dimensions():
    with pytest.raises(ValueError):
        MatrixStack(dimensions=4)


def test_2d_stack_ignores_3d_calls(caplog):
    stack = MatrixStack()
    stack.translate(1, 2)
    expected = stack.get_matrix()
    with caplog.at_level(logging.WARNING):
        stack.rotate_x(1.0)
        stack.rotate_x(2.0)
        stack.rotate_y(1.0)
        stack.rotate(1.0, 0, 1, 0)
        stack.translate(1, 2, 3)
        stack.scale(1, 2, 3)
        stack.apply_matrix(*range(16))
    assert stack.matrix == expected
    rotate_x_warnings = [r for r in caplog.records if "rotate_x()" in r.getMessage()]
    assert len(rotate_x_warnings) == 1
    assert len(caplog.records) == 6


def test_2d_stack_set_matrix():
    stack = MatrixStack()
    planar = Matrix3D()
    planar.translate(3, 4)
    stack.set_matrix(planar)
    assert stack.matrix == Matrix2D(1, 0, 3, 0, 1, 4)
    spatial = Matrix3D()
    spatial.rotate_y(0.5)
    stack.set_matrix(spatial)
    assert stack.matrix.is_identity()
    rotation = Matrix3D()
    rotation.rotate(1.58, 0, 0, 1)
    stack.set_matrix(rotation)
    assert stack.matrix.m10 == pytest.approx(math.sin(1.58))


def test_3d_stack_composes():
    stack = MatrixStack(dimensions=3)
    assert stack.dimensions == 3
    stack.translate(1, 2, 3)
    stack.rotate_x(math.pi / 2)
    stack.rotate_z(0.0)
    stack.shear_x(0.0)
    stack.apply_matrix(Matrix2D())
    assert torch.allclose(
        stack.transform((0, 1, 0)), torch.tensor([1.0, 2.0, 4.0], dtype=torch.float64)
    )
    entries = stack.get_matrix(torch.empty(16, dtype=torch.float64))
    assert entries[3] == 1


def test_other_errors_propagate():
    stack = MatrixStack()
    with pytest.raises(TypeError):
        stack.scale(1, 2, 3, 4)
    with pytest.raises(UnsupportedDimensionError):
        stack.matrix.rotate_x(0.1)
    stack.push()
    with pytest.raises(DimensionMismatchError):
        stack.matrix.set(Matrix3D())


def test_print_matrix(capsys):
    stack = MatrixStack()
    stack.translate(2, 0)
    stack.print_matrix()
    captured = capsys.readouterr()
    assert captured.out.splitlines()[0] == " 1.0000  0.0000  2.0000"
