from __future__ import annotations

import random
import unittest

import numpy as np

from _testutil import ensure_repo_on_path, line_maze

ensure_repo_on_path()

from world.maze import AXES, Maze, MazeError, unit_axis  # noqa: E402


class TestGenerate(unittest.TestCase):
    def setUp(self) -> None:
        self.maze = Maze((3, 3, 2, 2))
        self.maze.generate(random.Random(11))

    def test_spanning_tree_has_one_fewer_passage_than_cells(self) -> None:
        opened = sum(int(p.sum()) for p in self.maze.passages)
        self.assertEqual(opened, self.maze.cell_count - 1)

    def test_every_cell_reachable_from_start(self) -> None:
        for cell in self.maze.cells():
            path = self.maze.shortest_path(self.maze.start, cell)
            self.assertEqual(path[0], self.maze.start)
            self.assertEqual(path[-1], cell)

    def test_no_passage_leaves_the_far_face(self) -> None:
        for axis in range(AXES):
            far_face = np.take(self.maze.passages[axis], -1, axis=axis)
            self.assertFalse(far_face.any(), f"axis {axis}")

    def test_same_seed_same_maze(self) -> None:
        other = Maze((3, 3, 2, 2))
        other.generate(random.Random(11))
        for mine, theirs in zip(self.maze.passages, other.passages):
            self.assertTrue(np.array_equal(mine, theirs))

    def test_regenerate_clears_old_walls(self) -> None:
        self.maze.generate(random.Random(99))
        opened = sum(int(p.sum()) for p in self.maze.passages)
        self.assertEqual(opened, self.maze.cell_count - 1)

    def test_moves_are_symmetric(self) -> None:
        for cell in self.maze.cells():
            for nxt in self.maze.neighbours(cell):
                self.assertIn(cell, self.maze.neighbours(nxt))


class TestGeometry(unittest.TestCase):
    def test_rejects_bad_dimensions(self) -> None:
        for dims in ((3, 3, 3), (3, 0, 1, 1), (2, 2, 2, -1)):
            with self.subTest(dims=dims), self.assertRaises(MazeError):
                Maze(dims)

    def test_start_exit_and_count(self) -> None:
        maze = Maze((5, 5, 3, 3))
        self.assertEqual(maze.start, (0, 0, 0, 0))
        self.assertEqual(maze.exit, (4, 4, 2, 2))
        self.assertEqual(maze.cell_count, 225)
        self.assertEqual(len(list(maze.cells())), 225)

    def test_unit_axis(self) -> None:
        self.assertEqual(unit_axis((0, 0, -1, 0)), (2, -1))
        for delta in ((1, 1, 0, 0), (2, 0, 0, 0), (0, 0, 0, 0), (1, 0, 0)):
            with self.subTest(delta=delta), self.assertRaises(ValueError):
                unit_axis(delta)

    def test_can_move_in_corridor(self) -> None:
        maze = line_maze(3)
        self.assertTrue(maze.can_move((0, 0, 0, 0), (1, 0, 0, 0)))
        self.assertTrue(maze.can_move((2, 0, 0, 0), (-1, 0, 0, 0)))
        self.assertFalse(maze.can_move((0, 0, 0, 0), (-1, 0, 0, 0)))
        self.assertFalse(maze.can_move((2, 0, 0, 0), (1, 0, 0, 0)))
        self.assertFalse(maze.can_move((1, 0, 0, 0), (0, 0, 0, 1)))
        self.assertFalse(maze.can_move((7, 0, 0, 0), (-1, 0, 0, 0)))

    def test_closed_wall_blocks_both_sides(self) -> None:
        maze = line_maze(3)
        maze.passages[0][1, 0, 0, 0] = False
        self.assertFalse(maze.can_move((1, 0, 0, 0), (1, 0, 0, 0)))
        self.assertFalse(maze.can_move((2, 0, 0, 0), (-1, 0, 0, 0)))


class TestShortestPath(unittest.TestCase):
    def test_corridor(self) -> None:
        maze = line_maze(4)
        path = maze.shortest_path((3, 0, 0, 0), (0, 0, 0, 0))
        self.assertEqual(path, [(3, 0, 0, 0), (2, 0, 0, 0), (1, 0, 0, 0), (0, 0, 0, 0)])

    def test_same_cell(self) -> None:
        maze = line_maze(2)
        self.assertEqual(maze.shortest_path((1, 0, 0, 0), (1, 0, 0, 0)), [(1, 0, 0, 0)])

    def test_unreachable(self) -> None:
        maze = line_maze(3)
        maze.passages[0][1, 0, 0, 0] = False
        with self.assertRaises(MazeError):
            maze.shortest_path((0, 0, 0, 0), (2, 0, 0, 0))

    def test_out_of_bounds(self) -> None:
        with self.assertRaises(MazeError):
            line_maze(3).shortest_path((0, 0, 0, 0), (3, 0, 0, 0))

    def test_path_steps_through_open_walls_across_axes(self) -> None:
        maze = Maze((2, 2, 2, 2))
        maze.generate(random.Random(3))
        path = maze.shortest_path(maze.start, maze.exit)
        for here, there in zip(path, path[1:]):
            delta = tuple(b - a for a, b in zip(here, there))
            self.assertTrue(maze.can_move(here, delta))


class TestContents(unittest.TestCase):
    def test_food_place_take(self) -> None:
        maze = line_maze(3)
        maze.place_food((2, 0, 0, 0))
        self.assertTrue(maze.has_food((2, 0, 0, 0)))
        self.assertEqual(maze.food_cells(), [(2, 0, 0, 0)])
        self.assertTrue(maze.take_food((2, 0, 0, 0)))
        self.assertFalse(maze.take_food((2, 0, 0, 0)))
        self.assertEqual(maze.food_cells(), [])

    def test_place_food_out_of_bounds(self) -> None:
        with self.assertRaises(MazeError):
            line_maze(2).place_food((5, 0, 0, 0))

    def test_random_empty_cell_skips_excluded_and_occupied(self) -> None:
        maze = line_maze(3)
        maze.place_food((1, 0, 0, 0))
        rng = random.Random(0)
        for _ in range(20):
            self.assertEqual(maze.random_empty_cell(rng, exclude=[(0, 0, 0, 0)]), (2, 0, 0, 0))

    def test_random_empty_cell_when_full(self) -> None:
        maze = line_maze(2)
        maze.place_food((1, 0, 0, 0))
        with self.assertRaises(MazeError):
            maze.random_empty_cell(random.Random(0), exclude=[maze.start])


if __name__ == "__main__":
    unittest.main()
