"""
Digit codec for the geohash base-32 number system.

Each geohash character carries 5 bits. The alphabet is the standard one
shared by every geohash implementation, so it must match bit for bit:
digits 0-9 followed by the lowercase letters without a, i, l and o.
"""

ALPHABET = "0123456789bcdefghjkmnpqrstuvwxyz"
MAX_DIGIT = len(ALPHABET) - 1

_DIGIT_VALUES = {char: value for value, char in enumerate(ALPHABET)}


def encode_digit(number: int) -> str:
    """
    Return the geohash character for a number between 0 and 31.

    Args:
        number: Digit value in [0, 31]

    Returns:
        Single geohash character
    """
    if not 0 <= number <= MAX_DIGIT:
        raise ValueError(f"Geohash digit out of range: {number}")
    return ALPHABET[number]


def decode_digit(digit: str) -> int:
    """
    Return the value between 0 and 31 of a geohash character.

    Args:
        digit: Single geohash character

    Returns:
        Digit value in [0, 31]
    """
    try:
        return _DIGIT_VALUES[digit]
    except KeyError:
        raise ValueError(f"Invalid geohash character: {digit!r}") from None


def check_geohash(geohash: str) -> None:
    """
    Raise ValueError if any character of geohash is outside the alphabet.

    Args:
        geohash: Geohash string, possibly empty
    """
    for char in geohash:
        decode_digit(char)
