"""Escape handling for the bodies of Turtle-family IRI references and
quoted literals.

Two independent escape vocabularies are decoded here:

* numeric Unicode escapes (`\\uXXXX` and `\\UXXXXXXXX`), allowed in both
  IRIs and literals
* the short character escapes (`\\t \\b \\n \\r \\f \\" \\' \\\\`), allowed
  only in literals

The Unicode pass always runs first, so a backslash produced by a numeric
escape is visible to the short pass.
"""

import logging
import re

from n3core.exceptions import MalformedEscape, MalformedIRI, MalformedLiteral

logger = logging.getLogger(__name__)

UCHAR_INTRODUCER = re.compile(r'\\([uU])')
HEX_DIGITS = re.compile(r'[0-9A-Fa-f]+')
UCHAR_WIDTH = {'u': 4, 'U': 8}

ECHAR = re.compile(r'\\([tbnrf"\'\\])')
ECHAR_TABLE = {
    't': '\t',
    'b': '\b',
    'n': '\n',
    'r': '\r',
    'f': '\f',
    '"': '"',
    "'": "'",
    '\\': '\\',
}

# longest delimiters first, so that `"""` is not mistaken for `"`
LITERAL_DELIMITERS = ('"""', "'''", '"', "'")

STRING_ESCAPES = {
    '\\': '\\\\',
    '"': '\\"',
    '\t': '\\t',
    '\b': '\\b',
    '\n': '\\n',
    '\r': '\\r',
    '\f': '\\f',
}
IRI_FORBIDDEN = '<>"{}|^`\\'


def _read_uchar(value: str, start: int) -> tuple[int, int]:
    """Read the hex digits of the escape whose backslash is at `start`.
    Returns the code point and the index just past the escape."""
    form = value[start + 1]
    digits_start = start + 2
    end = digits_start + UCHAR_WIDTH[form]
    if end > len(value):
        raise MalformedEscape(value, start, len(value), f'Truncated \\{form} escape')
    digits = value[digits_start:end]
    if not HEX_DIGITS.fullmatch(digits):
        raise MalformedEscape(value, start, end, f'Invalid hex digits "{digits}" in \\{form} escape')
    return int(digits, 16), end


def _decode_uchar(value: str, start: int) -> tuple[str, int]:
    codepoint, end = _read_uchar(value, start)
    if 0xD800 <= codepoint <= 0xDBFF and value[start + 1] == 'u' and value.startswith('\\u', end):
        # a UTF-16 surrogate pair written as two consecutive \u escapes
        low, pair_end = _read_uchar(value, end)
        if 0xDC00 <= low <= 0xDFFF:
            return chr(0x10000 + ((codepoint - 0xD800) << 10) + (low - 0xDC00)), pair_end
    if 0xD800 <= codepoint <= 0xDFFF:
        raise MalformedEscape(value, start, end, f'Lone surrogate U+{codepoint:04X}')
    if codepoint > 0x10FFFF:
        raise MalformedEscape(value, start, end, f'Code point U+{codepoint:X} is out of range')
    return chr(codepoint), end


def unescape_uchar(value: str, rescan: bool = False) -> str:
    """Replace every `\\uXXXX` and `\\UXXXXXXXX` escape in `value` with the
    character it denotes.

    By default, scanning continues after each substituted character, so a
    decoded backslash never starts a new escape:

    ```pycon
    >>> unescape_uchar('Hello\\\\u0041')
    'HelloA'

    >>> unescape_uchar('\\\\u005Cu0041')
    '\\\\u0041'
    ```

    With `rescan=True`, the text is scanned again after each substitution,
    starting one character before it. A decoded backslash, or a decoded `u`
    after a literal backslash, then starts a new escape:

    ```pycon
    >>> unescape_uchar('\\\\u005Cu0041', rescan=True)
    'A'

    >>> unescape_uchar('\\\\\\\\u00750041', rescan=True)
    'A'
    ```

    Raises `MalformedEscape` for truncated escapes, non-hex digits, lone
    surrogates, and values above U+10FFFF.
    """
    if rescan:
        pos = 0
        while True:
            match = UCHAR_INTRODUCER.search(value, pos)
            if match is None:
                return value
            char, end = _decode_uchar(value, match.start())
            value = value[:match.start()] + char + value[end:]
            # a decoded `u` or `U` can join a backslash just before it
            pos = max(0, match.start() - 1)

    parts = []
    pos = 0
    while True:
        match = UCHAR_INTRODUCER.search(value, pos)
        if match is None:
            break
        char, end = _decode_uchar(value, match.start())
        parts.append(value[pos:match.start()])
        parts.append(char)
        pos = end
    parts.append(value[pos:])
    return ''.join(parts)


def unescape_echar(value: str) -> str:
    """Replace the short escapes `\\t \\b \\n \\r \\f \\" \\' \\\\` with the
    characters they denote. Any other backslash sequence is left as is.

    The string is scanned once from left to right, so an escaped backslash
    also consumes the character after it:

    ```pycon
    >>> unescape_echar('a\\\\tb')
    'a\\tb'

    >>> unescape_echar('\\\\\\\\n')
    '\\\\n'
    ```
    """
    return ECHAR.sub(lambda m: ECHAR_TABLE[m.group(1)], value)


def strip_quotes(token: str) -> str:
    """Remove the outer `"`, `'`, `\"\"\"`, or `'''` delimiters from a raw
    literal token. A token that opens with a triple quote must close with
    the same triple quote."""
    for delimiter in LITERAL_DELIMITERS:
        if token.startswith(delimiter):
            size = len(delimiter)
            if len(token) >= 2 * size and token.endswith(delimiter):
                return token[size:-size]
            break
    raise MalformedLiteral(token, 'not wrapped in matching quotes')


def lexical_form(token: str) -> str:
    """Decode a raw quoted literal token into its lexical form. The choice
    of delimiter only affects stripping; `'a'`, `"a"`, `'''a'''`, and
    `\"\"\"a\"\"\"` all decode to `a`."""
    body = strip_quotes(token)
    try:
        return unescape_echar(unescape_uchar(body))
    except MalformedEscape:
        logger.debug(f'Unable to decode literal token {token!r}')
        raise


def iri_body(token: str) -> str:
    """Decode the body of an IRI reference, with or without its angle
    brackets. Only Unicode escapes are decoded; short escapes are not
    allowed inside IRIs."""
    if token.startswith('<'):
        if not token.endswith('>'):
            raise MalformedIRI(token, 'unterminated IRI reference')
        token = token[1:-1]
    return unescape_uchar(token)


def escape_string(value: str) -> str:
    """Escape a lexical form for use between double quotes in N-Triples."""
    out = []
    for char in value:
        codepoint = ord(char)
        if char in STRING_ESCAPES:
            out.append(STRING_ESCAPES[char])
        elif codepoint < 0x20 or codepoint in (0x7F, 0xFFFE, 0xFFFF):
            out.append(f'\\u{codepoint:04X}')
        else:
            out.append(char)
    return ''.join(out)


def escape_iri(value: str) -> str:
    """Escape the characters that may not appear literally in an N-Triples
    IRI reference."""
    out = []
    for char in value:
        if char in IRI_FORBIDDEN or ord(char) <= 0x20:
            out.append(f'\\u{ord(char):04X}')
        else:
            out.append(char)
    return ''.join(out)
