"""Text to Unicode Braille transliteration (Grade 1 and Grade 2)."""

from __future__ import annotations

from types import MappingProxyType
from typing import Final, Mapping

from .const import DEFAULT_CELLS_PER_LINE, MAX_CONTRACTION_LENGTH, MIN_CONTRACTION_LENGTH
from .models import BrailleDocument, BrailleGrade

__all__ = [
    "GRADE1_CELLS",
    "GRADE2_CONTRACTIONS",
    "NUMBER_SIGN",
    "braille_encode",
    "encode",
    "format_lines",
    "transliterate",
]

NUMBER_SIGN: Final = "⠼"

_LETTERS: Final = {
    "a": "⠁", "b": "⠃", "c": "⠉", "d": "⠙", "e": "⠑", "f": "⠋", "g": "⠛",
    "h": "⠓", "i": "⠊", "j": "⠚", "k": "⠅", "l": "⠇", "m": "⠍", "n": "⠝",
    "o": "⠕", "p": "⠏", "q": "⠟", "r": "⠗", "s": "⠎", "t": "⠞", "u": "⠥",
    "v": "⠧", "w": "⠺", "x": "⠭", "y": "⠽", "z": "⠵",
}

# Digits reuse the cells of a-j behind the number sign.
_DIGITS: Final = {
    digit: NUMBER_SIGN + _LETTERS[letter] for digit, letter in zip("1234567890", "abcdefghij")
}

_PUNCTUATION: Final = {
    " ": "⠀", ".": "⠲", ",": "⠂", "!": "⠖", "?": "⠦", ":": "⠒", ";": "⠆",
    "-": "⠤", "(": "⠶", ")": "⠶", '"': "⠦", "'": "⠄", "/": "⠌", "\\": "⠡",
}

GRADE1_CELLS: Final[Mapping[str, str]] = MappingProxyType({**_LETTERS, **_DIGITS, **_PUNCTUATION})

GRADE2_CONTRACTIONS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "and": "⠯", "for": "⠿", "of": "⠷", "the": "⠮", "with": "⠾",
        "you": "⠽", "as": "⠵", "but": "⠃", "can": "⠉", "do": "⠙",
        "every": "⠑", "from": "⠋", "go": "⠛", "have": "⠓", "just": "⠚",
        "knowledge": "⠅", "like": "⠇", "more": "⠍", "not": "⠝", "people": "⠏",
        "quite": "⠟", "rather": "⠗", "so": "⠎", "that": "⠞", "us": "⠥",
        "very": "⠧", "will": "⠺", "it": "⠭", "were": "⠽", "his": "⠵",
    }
)


def transliterate(text: str, grade: BrailleGrade = BrailleGrade.GRADE1) -> str:
    """Return ``text`` as a single string of Braille cells.

    Grade 2 contractions are only applied to whole words: a candidate must
    start at the beginning of a word and end where the word ends, so "and"
    contracts in "salt and pepper" but not in "sand".
    """

    lowered = "".join(_lower(char) for char in text)
    contract = BrailleGrade(grade) is BrailleGrade.GRADE2
    cells: list[str] = []
    index = 0
    length = len(lowered)

    while index < length:
        if contract and _starts_word(lowered, index):
            word = _match_contraction(lowered, index)
            if word is not None:
                cells.append(GRADE2_CONTRACTIONS[word])
                index += len(word)
                continue

        char = lowered[index]
        cells.append(GRADE1_CELLS.get(char, char))
        index += 1

    return "".join(cells)


def format_lines(cells: str, cells_per_line: int) -> list[str]:
    """Split ``cells`` into fixed-width lines without regard for words."""

    if cells_per_line < 1:
        raise ValueError("cells_per_line must be at least 1")
    return [cells[start : start + cells_per_line] for start in range(0, len(cells), cells_per_line)]


def encode(
    text: str,
    grade: BrailleGrade = BrailleGrade.GRADE1,
    cells_per_line: int = DEFAULT_CELLS_PER_LINE,
) -> BrailleDocument:
    """Render ``text`` into a :class:`BrailleDocument`."""

    grade = BrailleGrade(grade)
    lines = format_lines(transliterate(text, grade), cells_per_line)
    return BrailleDocument(
        text=text,
        grade=grade,
        cells_per_line=cells_per_line,
        lines=tuple(lines),
    )


def braille_encode(
    text: str,
    grade: BrailleGrade = BrailleGrade.GRADE1,
    cells_per_line: int = DEFAULT_CELLS_PER_LINE,
) -> list[str]:
    """Return only the rendered lines for ``text``."""

    return list(encode(text, grade, cells_per_line).lines)


def _is_word_char(char: str) -> bool:
    return char.isalnum()


def _starts_word(text: str, index: int) -> bool:
    return index == 0 or not _is_word_char(text[index - 1])


def _match_contraction(text: str, index: int) -> str | None:
    longest = min(MAX_CONTRACTION_LENGTH, len(text) - index)
    for size in range(longest, MIN_CONTRACTION_LENGTH - 1, -1):
        end = index + size
        candidate = text[index:end]
        if candidate not in GRADE2_CONTRACTIONS:
            continue
        if end == len(text) or not _is_word_char(text[end]):
            return candidate
    return None


def _lower(char: str) -> str:
    # Keep characters whose lower case spans several code points, e.g. "İ".
    lowered = char.lower()
    return lowered if len(lowered) == 1 else char
