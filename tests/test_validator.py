import unittest

from tetracube.engine.grid import CubeGrid
from tetracube.engine.validator import TilingValidator, find_voids, is_integral

from tiling_fixtures import block_all_except, tile_layers


class VoidIntegrityTests(unittest.TestCase):
    def test_empty_grid_is_integral(self) -> None:
        self.assertTrue(is_integral(CubeGrid(4)))

    def test_full_grid_is_integral(self) -> None:
        grid = CubeGrid(4)
        tile_layers(grid, range(4))
        self.assertTrue(is_integral(grid))
        self.assertEqual(find_voids(grid), [])

    def test_single_enclosed_cell_is_rejected(self) -> None:
        grid = CubeGrid(4)
        block_all_except(grid, (1, 2, 1))
        self.assertFalse(is_integral(grid))
        self.assertEqual(find_voids(grid), [(1, 2, 1)])

    def test_corner_cell_sealed_by_walls_is_rejected(self) -> None:
        grid = CubeGrid(4)
        grid.cells[1, 0, 0] = 5
        grid.cells[0, 1, 0] = 5
        grid.cells[0, 0, 1] = 5
        self.assertFalse(is_integral(grid))
        self.assertEqual(find_voids(grid), [(0, 0, 0)])

    def test_isolated_pair_is_rejected(self) -> None:
        grid = CubeGrid(4)
        block_all_except(grid, (2, 2, 2), (2, 3, 2))
        self.assertFalse(is_integral(grid))
        self.assertEqual(sorted(find_voids(grid)), [(2, 2, 2), (2, 3, 2)])

    def test_isolated_triple_is_reported_at_middle_cell(self) -> None:
        grid = CubeGrid(4)
        block_all_except(grid, (0, 0, 0), (1, 0, 0), (1, 1, 0))
        self.assertFalse(is_integral(grid))
        self.assertEqual(find_voids(grid), [(1, 0, 0)])

    def test_straight_triple_is_rejected(self) -> None:
        grid = CubeGrid(4)
        block_all_except(grid, (3, 3, 0), (3, 3, 1), (3, 3, 2))
        self.assertFalse(is_integral(grid))
        self.assertEqual(find_voids(grid), [(3, 3, 1)])

    def test_square_of_four_is_integral(self) -> None:
        grid = CubeGrid(4)
        block_all_except(grid, (0, 0, 3), (0, 1, 3), (1, 0, 3), (1, 1, 3))
        self.assertTrue(is_integral(grid))

    def test_line_of_four_is_integral(self) -> None:
        grid = CubeGrid(4)
        block_all_except(grid, (0, 2, 1), (1, 2, 1), (2, 2, 1), (3, 2, 1))
        self.assertTrue(is_integral(grid))

    def test_enclosed_region_of_five_is_not_inspected(self) -> None:
        # Five cells in a row can never hold a T piece, but the check is local.
        grid = CubeGrid(6)
        block_all_except(grid, *[(x, 0, 0) for x in range(5)])
        self.assertTrue(is_integral(grid))

    def test_two_separate_pockets_are_both_reported(self) -> None:
        grid = CubeGrid(4)
        block_all_except(grid, (0, 0, 0), (3, 3, 3), (3, 2, 3))
        self.assertEqual(sorted(find_voids(grid)), [(0, 0, 0), (3, 2, 3), (3, 3, 3)])


class TilingValidatorTests(unittest.TestCase):
    def test_complete_tiling_passes(self) -> None:
        grid = CubeGrid(4)
        tile_layers(grid, range(4))
        result = TilingValidator().validate(grid)
        self.assertTrue(result.ok)
        self.assertEqual(result.messages, [])

    def test_incomplete_tiling_fails_only_when_required(self) -> None:
        grid = CubeGrid(4)
        tile_layers(grid, range(2))
        self.assertTrue(TilingValidator(require_complete=False).validate(grid).ok)
        result = TilingValidator().validate(grid)
        self.assertFalse(result.ok)
        self.assertIn("8/16", result.messages[0])

    def test_orphan_cells_are_reported(self) -> None:
        grid = CubeGrid(4)
        tile_layers(grid, range(1))
        grid.cells[3, 3, 3] = 77
        result = TilingValidator(require_complete=False).validate(grid)
        self.assertFalse(result.ok)
        self.assertIn("77", result.messages[0])

    def test_cell_overwritten_by_other_piece_is_reported(self) -> None:
        grid = CubeGrid(4)
        pieces = tile_layers(grid, range(1))
        x, y, z = pieces[0].cells[0]
        grid.cells[x, y, z] = pieces[1].identity
        result = TilingValidator(require_complete=False).validate(grid)
        self.assertFalse(result.ok)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
