import unittest

from game import LoadedDice, make_rng, parse_rolls
from ludo_core.dice import roll_face


class TestDice(unittest.TestCase):
    def test_given_scripted_rolls_when_drawing_then_replayed_then_seeded(self):
        dice = LoadedDice([6, 1], seed=9)
        self.assertEqual(dice.remaining, 2)
        self.assertEqual([dice.randint(1, 6), dice.randint(1, 6)], [6, 1])
        self.assertEqual(dice.remaining, 0)
        self.assertEqual(dice.randint(1, 6), make_rng(9).randint(1, 6))
        self.assertIn(dice.choice([3, 4]), (3, 4))

    def test_given_either_source_when_rolling_face_then_same_draw_for_same_seed(self):
        self.assertEqual(roll_face(LoadedDice(seed=5)), roll_face(make_rng(5)))
        self.assertEqual(roll_face(LoadedDice([2], seed=5)), 2)

    def test_given_bad_faces_when_loading_then_value_error(self):
        with self.assertRaises(ValueError):
            LoadedDice([0])
        with self.assertRaises(ValueError):
            LoadedDice([7])

    def test_given_text_when_parsing_rolls_then_faces_or_error(self):
        self.assertEqual(parse_rolls('6,3 1'), [6, 3, 1])
        self.assertEqual(parse_rolls(''), [])
        with self.assertRaises(ValueError):
            parse_rolls('6,x')
        with self.assertRaises(ValueError):
            parse_rolls('8')


if __name__ == '__main__':
    unittest.main(verbosity=2)
