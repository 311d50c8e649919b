import unittest

import numpy as np

from rubik_motion.facelets import Color
from rubik_motion.moves import Move, rotation_matrix
from rubik_motion.piece import Piece, RotationInconsistency

G, Y, R, N = Color.GREEN, Color.YELLOW, Color.RED, Color.NONE


class TestPieceRotate(unittest.TestCase):
    def test_corner_swaps_the_two_moving_slots(self):
        p = Piece((1, 1, 1), (G, Y, R))
        prev, new = p.rotate(Move.R.matrix)
        self.assertEqual(prev, (1, 1, 1))
        self.assertEqual(new, (1, 1, -1))
        self.assertEqual(p.position, (1, 1, -1))
        self.assertEqual(p.colors, (G, R, Y))

    def test_edge_carries_interior_slot_along(self):
        p = Piece((1, 1, 0), (G, Y, N))
        p.rotate(Move.R.matrix)
        self.assertEqual(p.position, (1, 0, -1))
        self.assertEqual(p.colors, (G, N, Y))

    def test_face_center_is_noop(self):
        p = Piece((1, 0, 0), (G, N, N))
        prev, new = p.rotate(Move.R.matrix)
        self.assertEqual(prev, new)
        self.assertEqual(p.position, (1, 0, 0))
        self.assertEqual(p.colors, (G, N, N))

    def test_core_is_noop(self):
        p = Piece((0, 0, 0), (N, N, N))
        self.assertEqual(p.rotate(Move.U.matrix), ((0, 0, 0), (0, 0, 0)))

    def test_four_quarter_turns_restore(self):
        for mv in (Move.R, Move.UP, Move.F):
            p = Piece((1, 1, 1), (G, Y, R))
            for _ in range(4):
                p.rotate(mv.matrix)
            self.assertEqual(p.position, (1, 1, 1))
            self.assertEqual(p.colors, (G, Y, R))

    def test_accepts_float_matrix(self):
        p = Piece((1, 1, 1), (G, Y, R))
        p.rotate(Move.R.transform(1.0)[:3, :3])
        self.assertEqual(p.position, (1, 1, -1))

    def test_inconsistent_matrix_raises_without_mutating(self):
        p = Piece((1, 1, 1), (G, Y, R))
        with self.assertRaises(RotationInconsistency) as ctx:
            p.rotate(2 * np.eye(3, dtype=np.int64))
        self.assertEqual(ctx.exception.position, (1, 1, 1))
        self.assertEqual(ctx.exception.new_position, (2, 2, 2))
        self.assertEqual(p.position, (1, 1, 1))
        self.assertEqual(p.colors, (G, Y, R))

    def test_half_turn_matrix_on_edge_is_rejected(self):
        p = Piece((1, 1, 0), (G, Y, N))
        with self.assertRaises(RotationInconsistency):
            p.rotate(Move.R.matrix @ Move.R.matrix)


class TestPieceTransforms(unittest.TestCase):
    def test_world_matrix_at_rest(self):
        p = Piece((1, -1, 0), (G, Y, N))
        m = p.world_matrix()
        self.assertTrue(np.allclose(m[:3, 3], (1.0, -1.0, 0.0)))
        self.assertTrue(np.allclose(m[:3, :3], 0.5 * np.eye(3)))

    def test_spacing_scales_placement(self):
        p = Piece((1, 1, 1), (G, Y, R), spacing=1.1)
        self.assertTrue(np.allclose(p.world_matrix()[:3, 3], (1.1, 1.1, 1.1)))

    def test_blend_then_commit(self):
        p = Piece((1, 1, 1), (G, Y, R))
        p.blend(rotation_matrix("x", -np.pi / 4))
        mid = p.world_matrix()[:3, 3]
        self.assertTrue(np.allclose(mid, (1.0, np.sqrt(2.0), 0.0)))

        p.commit(Move.R.full_turn())
        p.rotate(Move.R.matrix)
        self.assertTrue(np.array_equal(p.local_transform, np.eye(4)))
        self.assertTrue(np.allclose(p.world_matrix()[:3, 3], p.position))

    def test_global_transform_applies_last(self):
        p = Piece((1, 0, 0), (G, N, N))
        p.global_transform = rotation_matrix("z", np.pi / 2)
        self.assertTrue(np.allclose(p.world_matrix()[:3, 3], (0.0, 1.0, 0.0)))

    def test_surface_colors_fixed_at_creation(self):
        p = Piece((1, 1, 1), (G, Y, R))
        before = p.surface_colors()
        p.rotate(Move.R.matrix)
        self.assertEqual(p.surface_colors(), before)
        self.assertEqual(p.face_colors(), (N, R, N, N, G, Y))


if __name__ == "__main__":
    unittest.main()
