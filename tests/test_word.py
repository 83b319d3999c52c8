import pytest

from termwordle.errors import InvalidWordError
from termwordle.word import Letter, LetterState, Word


def test_parse_upper_cases_and_strips():
    word = Word.parse("  crane\n")
    assert word.text == "CRANE"
    assert word.is_full()
    assert all(l.state == LetterState.UNKNOWN for l in word)


@pytest.mark.parametrize("text", ["", "cran", "cranes", "cr4ne", "cr ne", "straß", "crâne"])
def test_parse_rejects_bad_words(text):
    with pytest.raises(InvalidWordError):
        Word.parse(text)


def test_push_stops_at_five_letters():
    word = Word.blank()
    for ch in "abcdefg":
        word.push(ch)
    assert word.text == "ABCDE"
    assert word.is_full()


def test_push_ignores_non_letters():
    word = Word.blank()
    word.push("1")
    word.push(" ")
    word.push("ß")
    word.push("é")
    assert word.is_empty()


@pytest.mark.parametrize("char", ["ß", "é", "ab", "", "1"])
def test_letter_only_takes_a_to_z(char):
    with pytest.raises(InvalidWordError):
        Letter(char)


def test_pop_on_empty_word_is_a_noop():
    word = Word.blank()
    word.pop()
    assert word.is_empty()
    word.push("a")
    word.pop()
    assert word.is_empty()


def test_word_equality_ignores_states():
    plain = Word.parse("crane")
    scored = Word([Letter(ch, LetterState.GREEN) for ch in "CRANE"])
    assert plain == scored
    assert plain != Word.parse("slate")


def test_letters_dedupe_by_character():
    letters = {Letter("a", LetterState.GREEN), Letter("A", LetterState.RED), Letter("b")}
    assert len(letters) == 2
    assert Letter("c", LetterState.YELLOW) in [Letter("a"), Letter("C")]


def test_severity_ordering():
    assert LetterState.GREEN < LetterState.YELLOW < LetterState.RED < LetterState.UNKNOWN
    assert min([LetterState.RED, LetterState.GREEN, LetterState.UNKNOWN]) == LetterState.GREEN


def test_copy_is_independent():
    word = Word.parse("crane")
    copy = word.copy()
    copy.pop()
    assert word.is_full()
    assert copy.text == "CRAN"
