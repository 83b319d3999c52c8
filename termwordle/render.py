import curses
import sys
from typing import List, Optional, TextIO

from .game import Outcome, Phase, RoundView, SessionStats
from .word import LetterState, Word

# --- Constants ---
KEYBOARD_ROWS = ["QWERTYUIOP", "ASDFGHJKL", "ZXCVBNM"]
KEYBOARD_KEYS = "".join(KEYBOARD_ROWS)

STATE_COLORS = {
    LetterState.GREEN: "green",
    LetterState.YELLOW: "yellow",
    LetterState.RED: "red",
    LetterState.UNKNOWN: None,
}


def colored(st, color: Optional[str], background=False): return f"\u001b[{10*background+60*(color.upper() == color)+30+['black', 'red', 'green', 'yellow', 'blue', 'magenta', 'cyan', 'white'].index(color.lower())}m{st}\u001b[0m" if color is not None else st


def colored_word(word: Word) -> str:
    return "".join(colored(l.char, STATE_COLORS[l.state]) for l in word)


# --- Text-based UI Class ---
class TextUI:
    """Line-oriented output for test and interactive modes."""

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self.feedback_char_map = {
            LetterState.GREEN: "G", LetterState.YELLOW: "Y", LetterState.RED: "X", LetterState.UNKNOWN: " "
        }

    def print_line(self, *parts, error=False):
        print(*parts, file=self.err if error else self.out)

    def print_welcome(self, difficult: bool = False):
        self.print_line(colored("Wordle!", "cyan"))
        self.print_line(f"Guess the 5-letter word in 6 tries{' (difficult mode)' if difficult else ''}.")
        self.print_line(f"Feedback: {colored('green', 'green')} correct, {colored('yellow', 'yellow')} present, {colored('red', 'red')} absent.")
        self.print_line("-" * 50)

    def prompt_guess(self, view: RoundView) -> str:
        return colored(f"Please enter the 5-letter word for your attempt #{view.tries + 1} ({view.max_tries - view.tries} left):", "green")

    def prompt_target(self) -> str:
        return colored("Please enter the secret word:", "blue")

    def prompt_restart(self) -> str:
        return "New game? Type `y` to continue, anything else to finish."

    # --- test mode ---
    def keyboard_states(self, view: RoundView) -> str:
        return "".join(view.letter_state(key).symbol for key in KEYBOARD_KEYS)

    def test_line(self, view: RoundView) -> str:
        # "<guess states> <26 keyboard states>", e.g. "RRYRG XXXXXXX..."
        last = view.history[-1]
        return f"{''.join(s.symbol for s in last.states)} {self.keyboard_states(view)}"

    # --- interactive mode ---
    def board_lines(self, view: RoundView) -> List[str]:
        return [colored_word(word) for word in view.history]

    def violation_lines(self, view: RoundView) -> List[str]:
        if not view.difficult:
            return []
        return view.violations.messages()

    def print_board(self, view: RoundView):
        for line in self.board_lines(view):
            self.print_line(line)
        for line in self.violation_lines(view):
            self.print_line(colored(line, "yellow"))

    def print_invalid(self, message: Optional[str] = None):
        self.print_line("INVALID" if not message else f"INVALID: {message}", error=True)

    def print_game_over(self, view: RoundView, test_mode: bool = False):
        if test_mode:
            if view.outcome is Outcome.SUCCESS:
                self.print_line(f"CORRECT {view.tries}")
            else:
                self.print_line(f"FAILED {view.target}")
            return
        self.print_line("\n" + "=" * 50)
        if view.outcome is Outcome.SUCCESS:
            self.print_line(colored(f"CORRECT! You guessed '{view.target}' in {view.tries} tries.", "green"))
        else:
            self.print_line(colored(f"FAILED! The secret word was: {view.target}", "red"))
        self.print_line("=" * 50)

    def print_stats(self, stats: SessionStats):
        self.print_line(f"{stats.wins} {stats.fails} {stats.average_tries:.2f}")
        top = stats.top_guesses()
        if top:
            self.print_line(" ".join(f"{word} {count}" for word, count in top))

    # --- agent observations ---
    def get_text_observation(self, view: RoundView, status: Optional[str] = None) -> str:
        status_message = f"Invalid Guess: {status}\n\n" if status else ""
        return f"{status_message}{self._get_board_string(view)}\n{self._get_letters_string(view)}"

    def _get_board_string(self, view: RoundView) -> str:
        lines = ["======="]
        # board will have at most max_tries rows
        for i in range(view.max_tries):
            if i < len(view.history):
                word = view.history[i]
                lines.append(f"|{word.text}|")
                lines.append(f"|{''.join(self.feedback_char_map[s] for s in word.states)}|")
            else:
                lines.append("|     |")
                lines.append("|     |")
            if i < view.max_tries - 1:
                lines.append("-------")
        lines.append("=======")
        return "\n".join(lines)

    def _get_letters_string(self, view: RoundView) -> str:
        by_state = {state: [] for state in LetterState}
        for key in sorted(KEYBOARD_KEYS):
            by_state[view.letter_state(key)].append(key)

        lines = ["\nLetters:"]
        lines.append(f"  Correct: {' '.join(by_state[LetterState.GREEN])}")
        lines.append(f"  Present: {' '.join(by_state[LetterState.YELLOW])}")
        lines.append(f"  Absent:  {' '.join(by_state[LetterState.RED])}")
        lines.append(f"  Unused:  {' '.join(by_state[LetterState.UNKNOWN])}")
        return "\n".join(lines)


# --- Curses rendering ---
COLOR_TITLE = 1
COLOR_GREEN = 2
COLOR_YELLOW = 3
COLOR_RED = 4
COLOR_EMPTY = 5
COLOR_INPUT = 6
COLOR_MESSAGE = 7


class CursesRenderer:
    """Draws a RoundView on a curses window. Owns no game state."""

    def __init__(self, window):
        self.window = window
        self.colors = False

    def init_colors(self):
        if not curses.has_colors():
            return
        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(COLOR_TITLE, curses.COLOR_CYAN, -1)
        curses.init_pair(COLOR_GREEN, curses.COLOR_WHITE, curses.COLOR_GREEN)
        curses.init_pair(COLOR_YELLOW, curses.COLOR_WHITE, curses.COLOR_YELLOW)
        curses.init_pair(COLOR_RED, curses.COLOR_WHITE, curses.COLOR_RED)
        curses.init_pair(COLOR_EMPTY, curses.COLOR_WHITE, -1)
        curses.init_pair(COLOR_INPUT, curses.COLOR_CYAN, -1)
        curses.init_pair(COLOR_MESSAGE, curses.COLOR_YELLOW, -1)
        self.colors = True

    def _attr(self, pair: int, bold: bool = False) -> int:
        attr = curses.color_pair(pair) if self.colors else 0
        return attr | curses.A_BOLD if bold else attr

    def _state_attr(self, state: LetterState) -> int:
        pair = {
            LetterState.GREEN: COLOR_GREEN,
            LetterState.YELLOW: COLOR_YELLOW,
            LetterState.RED: COLOR_RED,
        }.get(state, COLOR_EMPTY)
        return self._attr(pair, bold=state is not LetterState.UNKNOWN)

    def safe_addstr(self, y, x, text, attr=0):
        # writing past the window edge raises, a clipped frame is fine
        try:
            self.window.addstr(y, x, text, attr)
        except curses.error:
            pass

    def draw(self, view: RoundView):
        self.window.erase()
        height, width = self.window.getmaxyx()

        title = " WORDLE (difficult) " if view.difficult else " WORDLE "
        self.safe_addstr(0, max(0, (width - len(title)) // 2), title, self._attr(COLOR_TITLE, bold=True))

        grid_x = max(0, (width - Word.MAX_LENGTH * 4) // 2)
        if view.phase is Phase.AWAITING_TARGET:
            self.safe_addstr(2, max(0, (width - 24) // 2), "Enter the secret word:", self._attr(COLOR_MESSAGE))
            self._draw_row(4, grid_x, view.current, editing=True)
            kb_y = 6
        else:
            self._draw_grid(2, grid_x, view)
            kb_y = 2 + view.max_tries * 2 + 1
        self._draw_keyboard(kb_y, max(0, (width - 40) // 2), view)

        message = self._status(view)
        if message:
            self.safe_addstr(height - 3, max(0, (width - len(message)) // 2), message, self._attr(COLOR_MESSAGE, bold=True))
        self.safe_addstr(height - 1, 0, " a-z=Type  Enter=Submit  Bksp=Delete  Esc=Quit ", self._attr(COLOR_EMPTY))
        self.window.refresh()

    def _status(self, view: RoundView) -> Optional[str]:
        if view.phase is Phase.ROUND_OVER:
            if view.outcome is Outcome.SUCCESS:
                return f"CORRECT in {view.tries}! Enter: new game"
            return f"FAILED, the word was {view.target}. Enter: new game"
        if view.phase is Phase.DIFFICULT_VIOLATION:
            return "; ".join(view.violations.messages()) + " (Enter)"
        return view.message

    def _draw_row(self, y, x, word: Word, editing: bool = False):
        for col in range(Word.MAX_LENGTH):
            cx = x + col * 4
            if col < len(word):
                letter = word[col]
                attr = self._attr(COLOR_INPUT, bold=True) if editing else self._state_attr(letter.state)
                self.safe_addstr(y, cx, f" {letter.char} ", attr)
            else:
                self.safe_addstr(y, cx, " _ " if editing else " . ", self._attr(COLOR_EMPTY))

    def _draw_grid(self, y, x, view: RoundView):
        for row in range(view.max_tries):
            if row < len(view.history):
                self._draw_row(y + row * 2, x, view.history[row])
            elif row == len(view.history) and view.target is None:
                self._draw_row(y + row * 2, x, view.current, editing=True)
            else:
                self._draw_row(y + row * 2, x, Word.blank())

    def _draw_keyboard(self, y, x, view: RoundView):
        for ri, row in enumerate(KEYBOARD_ROWS):
            for ci, key in enumerate(row):
                self.safe_addstr(y + ri * 2, x + ri * 2 + ci * 4, f" {key} ", self._state_attr(view.letter_state(key)))
