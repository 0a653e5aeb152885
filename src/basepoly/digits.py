"""Digit codec and based-integer decoding for bases 2..62.

Digit alphabet, in value order: '0'..'9' -> 0..9, 'a'..'z' -> 10..35,
'A'..'Z' -> 36..61. Lower case takes the conventional hex/base-36 range;
upper case is only valid in bases above 36.
"""

import re
import string

from basepoly.errors import InvalidBase, EmptyValue, InvalidDigit, DigitOutOfRange

MIN_BASE = 2
MAX_BASE = 62

DIGITS = string.digits + string.ascii_lowercase + string.ascii_uppercase

_BASE_RE = re.compile(r'[0-9]+')


def digit_value(ch) -> int:
    """Map a single character to its digit value in [0, 61]."""
    if not isinstance(ch, str) or len(ch) != 1:
        raise InvalidDigit(f"Invalid digit {ch!r}", char=ch)
    if '0' <= ch <= '9':
        return ord(ch) - ord('0')
    if 'a' <= ch <= 'z':
        return 10 + ord(ch) - ord('a')
    if 'A' <= ch <= 'Z':
        return 36 + ord(ch) - ord('A')
    raise InvalidDigit(f"Unsupported digit character {ch!r}", char=ch)


def parse_base(base) -> int:
    """Normalise a declared base (int or integer string) and range-check it."""
    if isinstance(base, bool):
        raise InvalidBase(f"Base must be an integer in {MIN_BASE}..{MAX_BASE}, got {base!r}")
    if isinstance(base, str):
        s = base.strip()
        if not _BASE_RE.fullmatch(s):
            raise InvalidBase(
                f"Base must be an integer in {MIN_BASE}..{MAX_BASE}, got {base!r}"
            )
        if len(s.lstrip('0')) > 2:
            raise InvalidBase(f"Base must be in range {MIN_BASE}..{MAX_BASE}, got {base!r}")
        value = int(s)
    elif isinstance(base, int):
        value = base
    else:
        raise InvalidBase(f"Base must be an integer in {MIN_BASE}..{MAX_BASE}, got {base!r}")

    if not (MIN_BASE <= value <= MAX_BASE):
        raise InvalidBase(
            f"Base must be in range {MIN_BASE}..{MAX_BASE}, got {to_decimal(value)}"
        )
    return value


def decode(digits: str, base) -> int:
    """Convert a digit string in the given base to a non-negative int.

    Args:
        digits: Non-empty string over the 62-symbol alphabet.
        base: Radix 2..62, as an int or a decimal string.

    Returns:
        The positional value, exact for any length.
    """
    b = parse_base(base)
    if not isinstance(digits, str) or not digits:
        raise EmptyValue("Empty value string")

    result = 0
    for pos, ch in enumerate(digits):
        try:
            d = digit_value(ch)
        except InvalidDigit as e:
            raise InvalidDigit(f"{e} at position {pos}", char=ch, position=pos) from None
        if d >= b:
            raise DigitOutOfRange(
                f"Digit {ch!r} at position {pos} invalid for base {b}",
                char=ch, position=pos,
            )
        result = result * b + d
    return result


def encode(value: int, base) -> str:
    """Render a non-negative int in the given base. Inverse of decode()."""
    b = parse_base(base)
    if value < 0:
        raise ValueError("Cannot encode a negative value")
    if value == 0:
        return DIGITS[0]
    out = []
    while value:
        value, d = divmod(value, b)
        out.append(DIGITS[d])
    return ''.join(reversed(out))


def to_decimal(value: int) -> str:
    """Signed decimal string of any int.

    Unlike str(), not subject to the interpreter's int-to-str digit limit.
    """
    if value < 0:
        return '-' + encode(-value, 10)
    return encode(value, 10)
