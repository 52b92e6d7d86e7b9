"""Tests for Braille transliteration and line formatting."""

from __future__ import annotations

import pytest

from accessicinema.braille import (
    GRADE2_CONTRACTIONS,
    braille_encode,
    encode,
    format_lines,
    transliterate,
)
from accessicinema.models import BrailleGrade


def test_grade1_letters_and_space() -> None:
    assert transliterate("Hi there") == "⠓⠊⠀⠞⠓⠑⠗⠑"


def test_grade1_punctuation() -> None:
    assert transliterate("Wow, ok?!") == "⠺⠕⠺⠂⠀⠕⠅⠦⠖"


def test_digits_are_prefixed_with_number_sign() -> None:
    assert transliterate("a1") == "⠁⠼⠁"
    assert transliterate("0") == "⠼⠚"


def test_unknown_characters_pass_through() -> None:
    assert transliterate("é#") == "é#"


def test_grade1_is_one_cell_per_character() -> None:
    text = "Audio described films, for everyone!"

    lines = braille_encode(text, BrailleGrade.GRADE1, 7)

    assert len("".join(lines)) == len(text)


def test_grade2_contracts_whole_words() -> None:
    assert transliterate("salt and pepper", BrailleGrade.GRADE2) == "⠎⠁⠇⠞⠀⠯⠀⠏⠑⠏⠏⠑⠗"


def test_grade2_ignores_contractions_inside_words() -> None:
    assert transliterate("sand", BrailleGrade.GRADE2) == transliterate("sand")
    assert transliterate("theory", BrailleGrade.GRADE2) == transliterate("theory")


def test_grade2_respects_punctuation_boundaries() -> None:
    assert transliterate("you, the people.", BrailleGrade.GRADE2) == "⠽⠂⠀⠮⠀⠏⠲"


def test_grade2_contraction_cells() -> None:
    assert GRADE2_CONTRACTIONS["were"] == "⠽"
    assert GRADE2_CONTRACTIONS["his"] == "⠵"
    assert len(GRADE2_CONTRACTIONS) == 30


def test_format_lines_splits_without_word_wrapping() -> None:
    assert format_lines("⠁⠃⠉⠙⠑", 2) == ["⠁⠃", "⠉⠙", "⠑"]
    assert format_lines("", 4) == []


def test_format_lines_rejects_non_positive_width() -> None:
    with pytest.raises(ValueError):
        format_lines("⠁", 0)


def test_encode_returns_document() -> None:
    document = encode("abc", BrailleGrade.GRADE1, 2)

    assert document.text == "abc"
    assert document.grade is BrailleGrade.GRADE1
    assert document.lines == ("⠁⠃", "⠉")


def test_encoding_is_deterministic() -> None:
    text = "Have you seen the film with captions?"

    assert braille_encode(text, BrailleGrade.GRADE2, 10) == braille_encode(
        text, BrailleGrade.GRADE2, 10
    )


def test_empty_text_has_no_lines() -> None:
    assert braille_encode("") == []


def test_characters_with_multi_character_lower_case_keep_one_cell() -> None:
    text = "İa"

    assert transliterate(text) == "İ⠁"
    assert len("".join(braille_encode(text))) == len(text)
