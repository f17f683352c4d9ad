import io
import unittest
from contextlib import redirect_stdout

from game import AT_HOME, AT_START, create_initial_state
from ludo_core.cli import build_parser, describe_position, format_tokens, human_seats, run


def scripted_input(*answers):
    it = iter(answers)

    def read(prompt):
        return next(it)
    return read


class TestCli(unittest.TestCase):
    def test_given_flags_when_parsing_then_humans_resolved(self):
        p = build_parser()
        self.assertEqual(human_seats(p.parse_args([])), ['red'])
        self.assertEqual(human_seats(p.parse_args(['--human', 'blue', '--human', 'blue', '--human', 'red'])), ['blue', 'red'])
        self.assertEqual(human_seats(p.parse_args(['--watch', '--human', 'green'])), [])

    def test_given_positions_when_describing_then_readable(self):
        self.assertEqual(describe_position('red', AT_START), 'start')
        self.assertEqual(describe_position('red', AT_HOME), 'home')
        self.assertEqual(describe_position('green', 0), '0@1,8')
        text = format_tokens(create_initial_state())
        self.assertIn('> red', text)
        self.assertEqual(len(text.splitlines()), 4)

    def test_given_watch_mode_when_running_then_game_finishes(self):
        out = io.StringIO()
        with redirect_stdout(out):
            code = run(['--watch', '--seed', '3'])
        self.assertEqual(code, 0)
        self.assertIn('wins!', out.getvalue())
        self.assertIn('has won the game!', out.getvalue())

    def test_given_human_rolls_then_quits_when_running_then_clean_exit(self):
        out = io.StringIO()
        with redirect_stdout(out):
            code = run(['--rolls', '4', '--seed', '1'], read=scripted_input('r', 'q'))
        self.assertEqual(code, 0)
        text = out.getvalue()
        self.assertIn('Red rolled a 4.', text)
        self.assertIn("It's Green's turn.", text)
        self.assertIn('Bye.', text)

    def test_given_human_enters_token_when_running_then_move_applied(self):
        out = io.StringIO()
        with redirect_stdout(out):
            code = run(['--rolls', '6,2', '--seed', '1'], read=scripted_input('r', 'x', '3', 'q'))
        self.assertEqual(code, 0)
        text = out.getvalue()
        self.assertIn('Could not parse. Try again.', text)
        self.assertIn('Red moved token 3.', text)

    def test_given_bad_rolls_when_running_then_error_code(self):
        out = io.StringIO()
        with redirect_stdout(out):
            code = run(['--rolls', '9'])
        self.assertEqual(code, 2)
        self.assertIn('error:', out.getvalue())


if __name__ == '__main__':
    unittest.main(verbosity=2)
