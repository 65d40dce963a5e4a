"""
Glyph Tables - the alphabet the rain is drawn from and the hidden phrases.

Half-width Katakana, ASCII digits and a small symbol set. All entries are
single terminal cells wide.
"""

from typing import List

# Half-width Katakana ｦ (U+FF66) through ﾝ (U+FF9D)
KATAKANA: List[str] = [chr(code) for code in range(0xFF66, 0xFF9E)]

DIGITS: List[str] = list("0123456789")

SYMBOLS: List[str] = [
    ':', '.', '"', '=', '*', '+', '-', '<', '>', '|',
    '¦', '╌', '┊', '∞', '≡', '±', '∓', '∴', '∵', '⊕',
]

MATRIX_CHARS: List[str] = KATAKANA + DIGITS + SYMBOLS

# Hidden messages: shown as full-screen flashes or spelled down a stream
EASTER_EGG_PHRASES: List[str] = [
    "WAKE UP NEO",
    "FOLLOW THE WHITE RABBIT",
    "THERE IS NO SPOON",
    "THERE IS NO SPOON ONLY ZUUL",
    "THE ONE",
    "KNOCK KNOCK",
    "FREE YOUR MIND",
    "RED PILL",
    "BLUE PILL",
    "MORPHEUS",
    "TRINITY",
    "ZION",
    "WHOA",
    "I KNOW KUNG FU",
    "DEJA VU",
    "RABBIT HOLE",
    "MR ANDERSON",
    "THE MATRIX HAS YOU",
    "CHOICE IS AN ILLUSION",
    "NOT LIKE THIS",
    "DODGE THIS",
    "GUNS LOTS OF GUNS",
    "WELCOME TO THE DESERT OF THE REAL",
    "WHAT IS REAL",
    "BELIEVE",
    "SYSTEM FAILURE",
    "HE IS THE ONE",
    "DO NOT TRY TO BEND THE SPOON",
    "TAKE THE RED PILL",
    "42",
    "HELLO WORLD",
    "COGITO ERGO SUM",
    "WHY DO MY EYES HURT",
    "BECAUSE YOUVE NEVER USED THEM BEFORE",
    "THE CAKE IS A LIE",
    "WERE YOU LISTENING OR LOOKING AT THE WOMAN IN THE RED DRESS",
    "IM GOING TO SHOW THEM A WORLD WITHOUT RULES",
]


def phrase_glyphs(phrase: str) -> str:
    """Letters of a phrase as they are spelled down a stream (no spaces)."""
    return "".join(phrase.split())
