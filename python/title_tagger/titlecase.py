"""Title-casing for song titles captured from filenames."""

import unicodedata

# Accented Greek vowels (tonos) and their plain forms
ACCENTED_VOWELS = "άέήίόύώΆΈΉΊΌΎΏ"
PLAIN_VOWELS = "αεηιουωΑΕΗΙΟΥΩ"

_ACCENT_MAP = str.maketrans(ACCENTED_VOWELS, PLAIN_VOWELS)


def _is_mark(ch: str) -> bool:
    return unicodedata.category(ch).startswith("M")


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "'"


def _to_upper(ch: str) -> str:
    upper = ch.upper()
    if len(upper) == 1:
        return upper
    # 'ᾳ'.upper() == 'ΑΙ' but 'ᾳ'.title() == 'ᾼ'; 'ß' has neither
    title = ch.title()
    return title if len(title) == 1 else ch


def _to_lower(ch: str) -> str:
    # 'İ'.lower() expands to 'i' + combining dot
    return ch.lower()[:1]


def format_to_title(text: str) -> str:
    """
    Format a raw filename fragment as a song title.

    Accented Greek vowels lose their accent, the first character of every
    word is uppercased and the rest of the word is lowercased. Whether a
    character starts a word is decided by the previous character of the
    output: letters, digits and apostrophes continue a word, anything else
    ends it. Combining marks (e.g. the iota subscript of decomposed Greek)
    belong to the character they follow.

    Args:
        text: Raw title, e.g. the ``title`` group of a filename regex

    Returns:
        Formatted title with the same number of characters as ``text``

    Example:
        >>> format_to_title("η Βάθρα του Φονιά")
        'Η Βαθρα Του Φονια'
        >>> format_to_title("don't stop (re-recorded)")
        "Don't Stop (Re-Recorded)"
    """
    out = []
    in_word = False
    for ch in text.translate(_ACCENT_MAP):
        out.append(_to_lower(ch) if in_word else _to_upper(ch))
        if not _is_mark(ch):
            in_word = _is_word_char(out[-1])
    return "".join(out)
