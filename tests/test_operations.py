"""
Unit tests for move application.
"""

import random
import unittest
import numpy as np
from concurrent.futures import ThreadPoolExecutor

from cubesim.cube import CubeState, Cubie, create_solved_cube
from cubesim.exceptions import CorruptState, InvalidMoveToken
from cubesim.facelets import color_counts, is_solved, to_facelet_string
from cubesim.moves import PrimitiveTurn, parse_move
from cubesim.operations import apply_move, apply_moves, apply_turn, snap

BASE_LETTERS = "UDLRFBMES"


class TestApplyTurn(unittest.TestCase):
    """Test cases for single quarter turns."""

    def setUp(self):
        """Set up test fixtures."""
        self.cube = create_solved_cube()

    def test_returns_new_state(self):
        """Test that the input state is left untouched."""
        result = apply_turn(self.cube, PrimitiveTurn("x", 1, -1))
        self.assertIsInstance(result, CubeState)
        self.assertEqual(self.cube, create_solved_cube())
        self.assertNotEqual(result, self.cube)

    def test_unselected_cubies_are_shared(self):
        """Test that cubies outside the layer are reused as is."""
        result = apply_turn(self.cube, PrimitiveTurn("x", 1, -1))
        for before, after in zip(self.cube, result):
            if before.position[0] != 1:
                self.assertIs(before, after)

    def test_r_moves_front_to_up(self):
        """Test the direction of R on the up-front edge."""
        edge = self.cube.cubie_at((1, 0, 1))
        result = apply_move(self.cube, "R")
        self.assertEqual(result.by_id(edge.id).position, (1, 1, 0))

    def test_u_moves_front_to_left(self):
        """Test the direction of U."""
        edge = self.cube.cubie_at((0, 1, 1))
        result = apply_move(self.cube, "U")
        self.assertEqual(result.by_id(edge.id).position, (-1, 1, 0))

    def test_f_moves_up_to_right(self):
        """Test the direction of F."""
        edge = self.cube.cubie_at((0, 1, 1))
        result = apply_move(self.cube, "F")
        self.assertEqual(result.by_id(edge.id).position, (1, 0, 1))

    def test_slices_follow_their_faces(self):
        """Test that M turns like L, E like D and S like F."""
        pairs = [("M", "L", 0, -1), ("E", "D", 1, -1), ("S", "F", 2, 1)]
        for slice_letter, face_letter, axis, layer in pairs:
            slice_result = apply_move(self.cube, slice_letter)
            face_result = apply_move(self.cube, face_letter)
            for cubie in self.cube:
                if cubie.position[axis] != 0:
                    continue
                twin_position = list(cubie.position)
                twin_position[axis] = layer
                twin = self.cube.cubie_at(tuple(twin_position))

                moved = list(slice_result.by_id(cubie.id).position)
                twin_moved = list(face_result.by_id(twin.id).position)
                del moved[axis], twin_moved[axis]
                self.assertEqual(moved, twin_moved, msg=slice_letter)

    def test_positions_stay_on_lattice(self):
        """Test that positions are integers after a turn."""
        result = apply_move(self.cube, "F")
        for cubie in result:
            self.assertTrue(all(isinstance(c, int) for c in cubie.position))

    def test_facelets_never_change(self):
        """Test that a move only touches position and orientation."""
        result = apply_moves(self.cube, ["R", "u'", "M2", "F"])
        for before, after in zip(self.cube, result):
            self.assertEqual(before.id, after.id)
            self.assertEqual(before.facelets, after.facelets)

    def test_orientation_is_unit(self):
        """Test that orientations stay normalized."""
        result = apply_moves(self.cube, ["R", "U", "F'", "S"])
        for cubie in result:
            self.assertAlmostEqual(float(np.linalg.norm(cubie.orientation)), 1.0, places=12)

    def test_layer_not_nine_cubies(self):
        """Test that an impossible layer is reported as corruption."""
        with self.assertRaises(CorruptState):
            apply_turn(self.cube, PrimitiveTurn("x", 5, 1))

    def test_snap(self):
        """Test lattice snapping."""
        self.assertEqual(snap([0.9999999, -1e-9, -1.0000002]), (1, 0, -1))
        with self.assertRaises(CorruptState):
            snap([2.0, 0.0, 0.0])


class TestApplyMove(unittest.TestCase):
    """Test cases for token application and the algebraic properties."""

    def setUp(self):
        """Set up test fixtures."""
        self.cube = create_solved_cube()

    def test_identity_round_trip(self):
        """Test X then X' and X2 then X2 for every base letter."""
        for letter in BASE_LETTERS:
            self.assertEqual(apply_moves(self.cube, [letter, letter + "'"]), self.cube, msg=letter)
            self.assertEqual(apply_moves(self.cube, [letter + "2", letter + "2"]), self.cube, msg=letter)

    def test_four_quarter_turns(self):
        """Test that four turns of any layer return to the start."""
        start = apply_moves(self.cube, ["R", "U", "F"])
        for letter in BASE_LETTERS:
            self.assertEqual(apply_moves(start, [letter] * 4), start, msg=letter)

    def test_single_turn_is_not_identity(self):
        """Test that one quarter turn changes the cube."""
        for letter in BASE_LETTERS:
            self.assertNotEqual(apply_move(self.cube, letter), self.cube, msg=letter)

    def test_double_equals_two_quarters(self):
        """Test that X2 is X applied twice."""
        for letter in BASE_LETTERS:
            self.assertEqual(
                apply_move(self.cube, letter + "2"),
                apply_moves(self.cube, [letter, letter]),
                msg=letter
            )

    def test_wide_equivalence(self):
        """Test every wide move against its face and slice partner."""
        partners = {
            "u": ["U", "E'"],
            "d": ["D", "E"],
            "l": ["L", "M"],
            "r": ["R", "M'"],
            "f": ["F", "S"],
            "b": ["B", "S'"],
        }
        for wide, parts in partners.items():
            self.assertEqual(apply_move(self.cube, wide), apply_moves(self.cube, parts), msg=wide)

    def test_wide_double_slice_direction(self):
        """Test that a wide double lands where the face double and inverted slice double do."""
        for wide, parts in {"u2": ["U2", "E'", "E'"], "r2": ["R2", "M'", "M'"], "b2": ["B2", "S'", "S'"]}.items():
            self.assertEqual(apply_move(self.cube, wide), apply_moves(self.cube, parts), msg=wide)

    def test_wide_turns_two_layers(self):
        """Test that a wide move leaves the far layer alone."""
        result = apply_move(self.cube, "r")
        for before, after in zip(self.cube, result):
            if before.position[0] == -1:
                self.assertIs(before, after)
            elif before.position[1:] != (0, 0):
                self.assertNotEqual(before.position, after.position)

    def test_wide_round_trip(self):
        """Test that a wide move and its inverse cancel."""
        for wide in "udlrfb":
            self.assertEqual(apply_moves(self.cube, [wide, wide + "'"]), self.cube, msg=wide)

    def test_sexy_move_order(self):
        """Test that (R U R' U') has order 6."""
        sexy = ["R", "U", "R'", "U'"]
        state = self.cube
        for _ in range(5):
            state = apply_moves(state, sexy)
            self.assertNotEqual(state, self.cube)
        state = apply_moves(state, sexy)
        self.assertEqual(state, self.cube)

    def test_accepts_tokens_and_turns(self):
        """Test every accepted move form."""
        expected = apply_move(self.cube, "R'")
        self.assertEqual(apply_move(self.cube, parse_move("R'")), expected)
        self.assertEqual(apply_move(self.cube, PrimitiveTurn("x", 1, 1)), expected)

    def test_invalid_token(self):
        """Test that an invalid token raises before anything is applied."""
        with self.assertRaises(InvalidMoveToken):
            apply_move(self.cube, "Q")
        with self.assertRaises(InvalidMoveToken):
            apply_moves(self.cube, ["R", "U", "nope"])
        self.assertEqual(self.cube, create_solved_cube())

    def test_color_conservation(self):
        """Test that every sequence keeps nine stickers of each color."""
        rng = random.Random(7)
        tokens = [rng.choice("UDLRFBMESudlrfb") + rng.choice(["", "'", "2"]) for _ in range(60)]
        state = apply_moves(self.cube, tokens)
        counts = color_counts(state)
        self.assertEqual(sorted(counts.values()), [9] * 6)
        self.assertEqual(len(to_facelet_string(state)), 54)

    def test_drift_stays_bounded(self):
        """Test thousands of random turns followed by their inverse."""
        rng = random.Random(2024)
        letters = list(BASE_LETTERS)
        turns = [rng.choice(letters) + rng.choice(["", "'"]) for _ in range(3000)]

        state = apply_moves(self.cube, turns)
        for cubie in state:
            self.assertAlmostEqual(float(np.linalg.norm(cubie.orientation)), 1.0, places=9)
            self.assertTrue(all(c in (-1, 0, 1) for c in cubie.position))
        self.assertEqual(sorted(color_counts(state).values()), [9] * 6)

        inverse = [t[0] if t.endswith("'") else t + "'" for t in reversed(turns)]
        restored = apply_moves(state, inverse)
        self.assertEqual(restored, self.cube)
        self.assertTrue(is_solved(restored))

    def test_orientation_stays_axis_aligned(self):
        """Test that orientations are still one of the 24 cube rotations."""
        rng = random.Random(11)
        state = apply_moves(self.cube, [rng.choice(BASE_LETTERS) for _ in range(500)])
        allowed = {0.0, 0.5, round(np.sqrt(0.5), 6), 1.0}
        for cubie in state:
            for component in cubie.orientation:
                self.assertIn(round(abs(component), 6), allowed)

    def test_concurrent_purity(self):
        """Test that concurrent calls on a shared state do not interfere."""
        start = apply_moves(self.cube, ["R", "U"])
        sequence = ["F", "r'", "M2", "D", "b"]
        expected = apply_moves(start, sequence)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: apply_moves(start, sequence), range(32)))

        for result in results:
            self.assertEqual(result, expected)
        self.assertEqual(start, apply_moves(self.cube, ["R", "U"]))
        self.assertEqual(len({id(result) for result in results}), 32)

    def test_orientation_by_id_unchanged_for_core(self):
        """Test that the core never moves."""
        state = apply_moves(self.cube, ["M", "E", "S", "r", "u"])
        core = state.by_id(13)
        self.assertEqual(core.position, (0, 0, 0))
        self.assertIsInstance(core, Cubie)


if __name__ == '__main__':
    unittest.main()
