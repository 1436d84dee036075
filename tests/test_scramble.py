"""
Unit tests for scramble generation.
"""

import random
import unittest

from cubesim.moves import OuterFace, Suffix
from cubesim.scramble import DEFAULT_SCRAMBLE_LENGTH, generate_scramble


class TestScramble(unittest.TestCase):
    """Test cases for generate_scramble."""

    def test_default_length(self):
        """Test the default scramble length."""
        self.assertEqual(len(generate_scramble()), DEFAULT_SCRAMBLE_LENGTH)
        self.assertEqual(DEFAULT_SCRAMBLE_LENGTH, 20)

    def test_custom_length(self):
        """Test explicit lengths, zero included."""
        self.assertEqual(len(generate_scramble(5, rng=1)), 5)
        self.assertEqual(generate_scramble(0, rng=1), [])

    def test_negative_length(self):
        """Test that a negative length is rejected."""
        with self.assertRaises(ValueError):
            generate_scramble(-1)

    def test_outer_faces_only(self):
        """Test that scrambles only use outer-face turns."""
        for move in generate_scramble(200, rng=5):
            self.assertIsInstance(move, OuterFace)
            self.assertIn(move.letter, "UDLRFB")

    def test_no_face_repeated(self):
        """Test that no face is drawn twice in a row."""
        for seed in range(50):
            moves = generate_scramble(40, rng=seed)
            for previous, current in zip(moves, moves[1:]):
                self.assertNotEqual(previous.letter, current.letter, msg=f"seed {seed}")

    def test_seed_is_reproducible(self):
        """Test that the same seed gives the same scramble."""
        self.assertEqual(generate_scramble(20, rng=42), generate_scramble(20, rng=42))
        self.assertNotEqual(generate_scramble(20, rng=42), generate_scramble(20, rng=43))

    def test_random_instance(self):
        """Test that a Random instance is used as given."""
        rng = random.Random(9)
        first = generate_scramble(10, rng)
        second = generate_scramble(10, rng)
        self.assertNotEqual(first, second)
        self.assertEqual(first, generate_scramble(10, random.Random(9)))

    def test_suffix_variety(self):
        """Test that all three suffixes show up."""
        suffixes = {move.suffix for move in generate_scramble(300, rng=0)}
        self.assertEqual(suffixes, {Suffix.NONE, Suffix.PRIME, Suffix.DOUBLE})


if __name__ == '__main__':
    unittest.main()
