import math

import numpy as np
import pytest

from maze import Maze, MazeBuilder
from renderer3d import Raycaster, RayHit, WallSide, cast_ray


def box_maze():
    """Single open cell at (1, 1) surrounded by walls"""
    return Maze([[1, 1, 1], [1, 0, 1], [1, 1, 1]], start=(1, 1), exit=(1, 0))


def corridor_maze(length=12):
    """One-row corridor, open from x=0 up to a wall at x=length-1"""
    cells = np.zeros((1, length), dtype=np.uint8)
    cells[0, length - 1] = 1
    return Maze(cells, start=(0, 0), exit=(0, 0))


def open_room_with_exit():
    """9x9 with the whole interior open and the exit at (4, 8)"""
    builder = MazeBuilder(9, 9)
    for y in range(1, 8):
        for x in range(1, 8):
            builder.carve(x, y)
    builder.carve(4, 8)
    return builder.build(start=(1, 1), exit=(4, 8))


def straight_corridor_with_exit():
    """Vertical corridor x=4, y=1..7, leading to the exit at (4, 8)"""
    builder = MazeBuilder(9, 9)
    for y in range(1, 9):
        builder.carve(4, y)
    return builder.build(start=(4, 1), exit=(4, 8))


@pytest.mark.parametrize(
    "angle,side",
    [
        (0.0, WallSide.EAST),
        (math.pi / 2, WallSide.SOUTH),
        (math.pi, WallSide.WEST),
        (3 * math.pi / 2, WallSide.NORTH),
    ],
)
def test_axis_rays_hit_adjacent_wall(angle, side) -> None:
    hit = cast_ray(1.5, 1.5, angle, box_maze())

    assert hit.distance == pytest.approx(0.5)
    assert hit.wall_side == side
    assert not hit.passed_exit
    assert hit.exit_threshold_distance is None


def test_due_east_hit_point() -> None:
    hit = cast_ray(1.5, 1.5, 0.0, box_maze())
    assert hit.hit_x == pytest.approx(2.0)
    assert hit.hit_y == pytest.approx(1.5)


def test_distance_is_exact_along_corridor() -> None:
    maze = corridor_maze(12)
    previous = None
    for x in [0.5, 1.5, 2.25, 5.0, 8.75, 10.5]:
        hit = cast_ray(x, 0.5, 0.0, maze)
        assert hit.distance == pytest.approx(11.0 - x)
        assert hit.wall_side == WallSide.EAST
        if previous is not None:
            assert hit.distance < previous
        previous = hit.distance


def test_distance_is_capped() -> None:
    hit = cast_ray(0.5, 0.5, 0.0, corridor_maze(12), max_distance=3.0)
    assert hit.distance == pytest.approx(3.0)


def test_leaving_grid_without_exit_reports_max_distance() -> None:
    cells = np.zeros((1, 5), dtype=np.uint8)
    maze = Maze(cells, start=(0, 0), exit=(4, 0))

    hit = cast_ray(0.5, 0.5, 0.0, maze, max_distance=20.0)

    assert hit.distance == pytest.approx(20.0)
    assert not hit.passed_exit


def test_diagonal_ray_through_exit() -> None:
    maze = open_room_with_exit()
    ex, ey = maze.exit_point
    angle = math.atan2(ey - 1.5, ex - 1.5)

    hit = cast_ray(1.5, 1.5, angle, maze, 20.0, ex, ey)

    assert hit.passed_exit
    assert hit.exit_threshold_distance == pytest.approx(math.hypot(3.0, 7.0), abs=0.05)
    assert hit.distance == pytest.approx(hit.exit_threshold_distance)


def test_straight_corridor_through_exit() -> None:
    maze = straight_corridor_with_exit()

    hit = cast_ray(4.5, 1.5, math.pi / 2, maze, 20.0, 4.5, 8.5)

    assert hit.passed_exit
    assert hit.exit_threshold_distance == pytest.approx(7.0, abs=0.05)
    assert hit.distance == pytest.approx(7.0, abs=0.05)


def test_exit_cell_is_open_even_when_marked_wall() -> None:
    # Corridor stops at y=7; the exit cell (4, 8) is still solid in the grid
    builder = MazeBuilder(9, 9)
    for y in range(1, 8):
        builder.carve(4, y)
    maze = builder.build(start=(4, 1), exit=(4, 8))
    assert maze.is_wall(4, 8)

    hit = cast_ray(4.5, 1.5, math.pi / 2, maze, 20.0, 4.5, 8.5)

    assert hit.passed_exit
    assert hit.exit_threshold_distance == pytest.approx(7.0)
    assert hit.distance == pytest.approx(7.0)
    assert hit.wall_side == WallSide.NORTH

    # Without the exit point the same cell stops the ray
    blocked = cast_ray(4.5, 1.5, math.pi / 2, maze, 20.0)
    assert blocked.distance == pytest.approx(6.5)
    assert blocked.wall_side == WallSide.SOUTH


def test_exit_not_tracked_without_exit_point() -> None:
    maze = straight_corridor_with_exit()

    hit = cast_ray(4.5, 1.5, math.pi / 2, maze, 20.0)

    assert not hit.passed_exit
    assert hit.exit_threshold_distance is None
    assert hit.distance == pytest.approx(20.0)


def test_ray_away_from_exit_ignores_it() -> None:
    maze = straight_corridor_with_exit()

    hit = cast_ray(4.5, 1.5, 0.0, maze, 20.0, 4.5, 8.5)

    assert not hit.passed_exit
    assert hit.exit_threshold_distance is None
    assert hit.distance == pytest.approx(0.5)
    assert hit.wall_side == WallSide.EAST


def test_cast_all_rays_matches_single_rays() -> None:
    maze = open_room_with_exit()
    raycaster = Raycaster()
    exit_point = maze.exit_point
    angle = 1.1

    results = raycaster.cast_all_rays(maze, 2.5, 3.5, angle, 16, exit_point)

    assert results.shape == (16, 6)
    for column in (0, 5, 15):
        expected = raycaster.cast_ray(maze, 2.5, 3.5, raycaster.column_angle(angle, column, 16),
                                      exit_point)
        got = RayHit.from_row(results[column])
        assert got.distance == pytest.approx(expected.distance)
        assert got.wall_side == expected.wall_side
        assert got.passed_exit == expected.passed_exit


def test_column_angles_span_the_field_of_view() -> None:
    raycaster = Raycaster(fov=math.pi / 2)
    assert raycaster.column_angle(0.0, 0, 10) == pytest.approx(-math.pi / 4)
    assert raycaster.column_angle(0.0, 5, 10) == pytest.approx(0.0)
    assert raycaster.column_angle(0.0, 10, 10) == pytest.approx(math.pi / 4)


def test_wall_texture_coordinate() -> None:
    assert Raycaster.get_wall_texture_x(2.0, 1.25, WallSide.EAST) == pytest.approx(0.25)
    assert Raycaster.get_wall_texture_x(3.75, 1.0, WallSide.NORTH) == pytest.approx(0.75)
