import re


# http(s) scheme, a host that doesn't start with whitespace or `$.?#`, no whitespace anywhere
URL_PATTERN = re.compile(r'^(http|https)://[^\s$.?#].[^\s]*$')


def is_valid_url(url: object) -> bool:
    """Check that `url` is a syntactically well-formed http(s) URL string.

    Example:
        >>> is_valid_url('https://example.com/a')
        True
        >>> is_valid_url('not-a-url')
        False
    """
    return isinstance(url, str) and URL_PATTERN.fullmatch(url) is not None
