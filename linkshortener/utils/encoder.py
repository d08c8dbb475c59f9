"""Short code encoding utility

This module turns allocated counters into compact base62 short codes.
The encoding is positional, so the alphabet order is part of the format:
changing it would remap every short code already handed out.

Functions:
    encode_counter(counter) -> str:
        Encode a non-negative integer as a base62 short code.
    decode_shortcode(shortcode) -> int:
        Inverse of encode_counter() for codes it produces.

Example:
    >>> from linkshortener.utils import encode_counter
    >>> encode_counter(1)
    'b'
    >>> encode_counter(62)
    'ba'
"""

import string


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits


def encode_counter(counter: int) -> str:
    """Encode a counter into a base62 short code.

    Digits are produced least significant first and prepended, so the most
    significant digit leads. Counters are allocated from 1 upwards; a counter
    of 0 still yields a single-character code instead of an empty string.

    Args:
        counter (int):
            Non-negative integer to encode.

    Returns:
        str: Base62 short code, at least one character long.

    Raises:
        TypeError: If counter is not an integer.
        ValueError: If counter is negative.

    Example:
        >>> encode_counter(12345)
        'dnh'
    """
    if not isinstance(counter, int) or isinstance(counter, bool):
        raise TypeError(f'Counter must be of type integer (given type: {type(counter)}).')
    if counter < 0:
        raise ValueError(f'Counter must be a non-negative integer (given value: {counter}).')

    shortcode = ''
    while counter > 0:
        counter, remainder = divmod(counter, BASE)
        shortcode = ALPHABET[remainder] + shortcode

    return shortcode or ALPHABET[0]


def decode_shortcode(shortcode: str) -> int:
    """Decode a base62 short code back into its counter.

    Args:
        shortcode (str): Short code made of ALPHABET characters.

    Returns:
        int: The counter the short code encodes.

    Raises:
        ValueError: If the short code is empty or contains foreign characters.
    """
    if not shortcode:
        raise ValueError('Short code must be a non-empty string.')

    counter = 0
    for char in shortcode:
        digit = ALPHABET.find(char)
        if digit < 0:
            raise ValueError(f"Invalid character {char!r} in short code '{shortcode}'.")
        counter = counter * BASE + digit
    return counter
