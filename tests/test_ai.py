import unittest
from dataclasses import replace

from game import (
    AT_HOME,
    AT_START,
    SEATS,
    LoadedDice,
    capturing_moves,
    choose_move,
    create_initial_state,
    get_valid_moves,
    make_rng,
    move_token,
    roll_dice,
    take_computer_turn,
)


def make_state(positions=None, active='red', dice=None, bonus=False, moved=False):
    s = create_initial_state()
    for seat, tokens in (positions or {}).items():
        s = s.with_tokens(seat, tokens)
    return replace(
        s,
        active_seat_index=SEATS.index(active),
        dice_value=dice,
        dice_rolled=dice is not None,
        bonus_turn=bonus,
        token_moved=moved,
    )


class TestChooseMove(unittest.TestCase):
    def test_given_no_moves_when_choosing_then_none(self):
        self.assertIsNone(choose_move(make_state(dice=3), []))

    def test_given_single_move_when_choosing_then_that_move(self):
        s = make_state({'red': [AT_HOME, 12, AT_START, AT_START]}, dice=2)
        self.assertEqual(choose_move(s, get_valid_moves(s)), 1)

    def test_given_capture_available_when_choosing_then_capture_beats_progress(self):
        s = make_state(
            {'red': [10, 30, AT_START, AT_START], 'green': [0, AT_START, AT_START, AT_START]},
            dice=3,
        )
        moves = get_valid_moves(s)
        self.assertEqual(moves, (0, 1))
        self.assertEqual(capturing_moves(s, moves), [0])
        for seed in range(5):
            self.assertEqual(choose_move(s, moves, make_rng(seed)), 0)

    def test_given_several_captures_when_choosing_then_one_of_them(self):
        # yellow 0 and 3 sit on red 26 and red 29
        s = make_state(
            {'red': [23, 26, 40, AT_START], 'yellow': [0, 3, AT_START, AT_START]},
            dice=3,
        )
        moves = get_valid_moves(s)
        self.assertEqual(capturing_moves(s, moves), [0, 1])
        picks = {choose_move(s, moves, make_rng(seed)) for seed in range(20)}
        self.assertTrue(picks <= {0, 1})

    def test_given_entry_cell_occupied_when_six_then_entering_token_captures(self):
        s = make_state(
            {'red': [AT_START, 20, AT_START, AT_START], 'blue': [13, AT_START, AT_START, AT_START]},
            dice=6,
            bonus=True,
        )
        moves = get_valid_moves(s)
        self.assertEqual(capturing_moves(s, moves), [0, 2, 3])
        self.assertIn(choose_move(s, moves, make_rng(1)), {0, 2, 3})

    def test_given_no_capture_when_choosing_then_furthest_token_on_track(self):
        s = make_state({'red': [10, 30, 5, AT_START]}, dice=2)
        self.assertEqual(choose_move(s, get_valid_moves(s)), 1)

    def test_given_home_stretch_token_when_choosing_then_counts_as_furthest(self):
        s = make_state({'red': [53, 40, AT_START, AT_START]}, dice=3)
        self.assertEqual(choose_move(s, get_valid_moves(s)), 0)

    def test_given_equal_offsets_when_choosing_then_first_seen(self):
        s = make_state({'red': [20, 20, AT_START, AT_START]}, dice=2)
        self.assertEqual(choose_move(s, get_valid_moves(s)), 0)

    def test_given_six_with_token_out_when_choosing_then_prefers_track_over_entry(self):
        s = make_state({'red': [10, AT_START, AT_START, AT_START]}, dice=6, bonus=True)
        self.assertEqual(choose_move(s, get_valid_moves(s), make_rng(3)), 0)

    def test_given_only_entries_when_choosing_then_seeded_random_entry(self):
        s = make_state(dice=6, bonus=True)
        moves = get_valid_moves(s)
        a = choose_move(s, moves, make_rng(11))
        b = choose_move(s, moves, make_rng(11))
        self.assertEqual(a, b)
        self.assertIn(a, moves)


class TestTakeComputerTurn(unittest.TestCase):
    def test_given_not_rolled_when_stepping_then_rolls(self):
        s = take_computer_turn(create_initial_state(), LoadedDice([4]))
        self.assertEqual(s.dice_value, 4)
        self.assertEqual(s.active_seat, 'red')

    def test_given_rolled_with_moves_when_stepping_then_moves(self):
        s = make_state({'red': [10, AT_START, AT_START, AT_START]}, dice=4)
        s2 = take_computer_turn(s, make_rng(0))
        self.assertEqual(s2.tokens_of('red')[0], 14)
        self.assertEqual(s2.active_seat, 'green')

    def test_given_moved_after_six_when_stepping_then_rolls_again(self):
        s = move_token(roll_dice(create_initial_state(), LoadedDice([6])), 0)
        s2 = take_computer_turn(s, LoadedDice([5]))
        self.assertEqual(s2.dice_value, 5)
        self.assertEqual(s2.tokens_of('red'), (0, AT_START, AT_START, AT_START))

    def test_given_six_without_moves_when_stepping_then_rolls_again(self):
        s = make_state({'red': [AT_HOME, AT_HOME, 55, 56]}, dice=6, bonus=True)
        s2 = take_computer_turn(s, LoadedDice([1]))
        self.assertEqual(s2.dice_value, 1)
        self.assertFalse(s2.bonus_turn)

    def test_given_blocked_turn_when_stepping_then_unchanged(self):
        s = make_state(dice=3)
        self.assertIs(take_computer_turn(s, make_rng(0)), s)

    def test_given_finished_game_when_stepping_then_unchanged(self):
        s = make_state({'red': [AT_HOME] * 4})
        s = replace(s, status='finished', winner='red')
        self.assertIs(take_computer_turn(s, make_rng(0)), s)


if __name__ == '__main__':
    unittest.main(verbosity=2)
