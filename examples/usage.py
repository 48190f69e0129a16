"""Example of rendermatrix.MatrixStack usage while drawing a small scene."""

import math

import torch
from rich.console import Console

from rendermatrix import Matrix2D, MatrixStack

console = Console()

# unit square, drawn three times around the origin
SQUARE = torch.tensor([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=torch.float64)

stack = MatrixStack(dimensions=2, console=console)
stack.translate(100, 50)

for i in range(3):
    stack.push()
    stack.rotate(i * 2 * math.pi / 3)
    stack.translate(20, 0)
    stack.scale(10)
    screen = torch.stack([stack.transform(vertex) for vertex in SQUARE])
    console.print(f"=== square {i}: {screen.round(decimals=2).tolist()}")
    stack.pop()

# 3D-only calls are ignored with a warning by a 2D stack
stack.rotate_x(math.pi / 4)

# map a screen position back to object space
inverse = stack.get_matrix()
if inverse.invert():
    console.print(f"=== (100, 50) in object space: {inverse.mult((100, 50)).tolist()}")

stack.print_matrix()

# pre_apply places a transform in world space, before the accumulated ones
world = Matrix2D()
world.translate(5, 5)
local = stack.get_matrix()
local.pre_apply(world)
local.print(console=console)
