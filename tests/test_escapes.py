import pytest

from n3core.escapes import (
    unescape_uchar, unescape_echar, lexical_form, iri_body, strip_quotes, escape_string, escape_iri,
)
from n3core.exceptions import MalformedEscape, MalformedIRI, MalformedLiteral

NO_UCHAR_STRINGS = [
    '',
    'plain',
    'caf\u00e9',
    r'a\tb\n',
    r'C:\\path\\to',
    r'\x41',
]


@pytest.mark.parametrize('value', NO_UCHAR_STRINGS)
def test_unescape_uchar_without_escapes_is_unchanged(value):
    assert unescape_uchar(value) == value


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        (r'Hello\u0041', 'HelloA'),
        (r'caf\u00E9', 'caf\u00e9'),
        (r'caf\u00e9', 'caf\u00e9'),
        (r'\U0001F600!', '\U0001F600!'),
        (r'\u0041\u0042\u0043', 'ABC'),
        # the earlier escape is decoded first, whatever its form
        (r'\U00000042\u0041', 'BA'),
        # a UTF-16 surrogate pair is combined
        (r'\uD83D\uDE00', '\U0001F600'),
    ]
)
def test_unescape_uchar(value, expected):
    assert unescape_uchar(value) == expected


@pytest.mark.parametrize(
    'codepoint',
    [0x0, 0x20, 0x41, 0xE9, 0x7FF, 0xD7FF, 0xE000, 0xFFFD, 0xFFFF, 0x10000, 0x1F600, 0x10FFFF]
)
def test_unescape_uchar_scalar_values(codepoint):
    assert unescape_uchar(f'\\U{codepoint:08X}') == chr(codepoint)
    if codepoint <= 0xFFFF:
        assert unescape_uchar(f'\\u{codepoint:04X}') == chr(codepoint)


@pytest.mark.parametrize(
    ('value', 'start', 'end'),
    [
        # truncated at end of input
        (r'\u', 0, 2),
        (r'abc\u00', 3, 7),
        (r'\U0041', 0, 6),
        (r'x\U0001F60', 1, 10),
        # non-hex digits
        (r'\u00G1xyz', 0, 6),
        (r'ab\U0001F60Z', 2, 12),
        (r'\u+041', 0, 6),
        # lone surrogates
        (r'\uDE00', 0, 6),
        (r'\uD83Dx', 0, 6),
        (r'\uD83D\u0041', 0, 6),
        (r'\U0000D83D', 0, 10),
        # beyond the Unicode range
        (r'\U00110000', 0, 10),
    ]
)
def test_unescape_uchar_malformed(value, start, end):
    with pytest.raises(MalformedEscape) as exc_info:
        unescape_uchar(value)
    assert exc_info.value.value == value
    assert exc_info.value.start == start
    assert exc_info.value.end == end


def test_unescape_uchar_advances_past_substitution():
    # \u005C is a backslash; the "u0041" after it is not a new escape
    assert unescape_uchar(r'\u005Cu0041') == r'\u0041'


def test_unescape_uchar_rescan():
    assert unescape_uchar(r'\u005Cu0041', rescan=True) == 'A'
    assert unescape_uchar(r'x\u005Cu005Cu0041y', rescan=True) == 'xAy'
    assert unescape_uchar(r'Hello\u0041', rescan=True) == 'HelloA'
    # the decoded `u` joins the literal backslash before it
    assert unescape_uchar(r'\\u00750041', rescan=True) == 'A'
    assert unescape_uchar(r'\\u00750041') == r'\u0041'


def test_unescape_uchar_is_idempotent_on_decoded_output():
    once = unescape_uchar(r'caf\u00E9 \U0001F600')
    assert unescape_uchar(once) == once


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        (r'\t', '\t'),
        (r'\b', '\b'),
        (r'\n', '\n'),
        (r'\r', '\r'),
        (r'\f', '\f'),
        (r'\"', '"'),
        (r"\'", "'"),
        (r'\\', '\\'),
        (r'line1\nline2', 'line1\nline2'),
        (r'say \"hi\"', 'say "hi"'),
        # unknown escapes are left alone
        (r'\q', r'\q'),
        (r'\u0041', r'\u0041'),
    ]
)
def test_unescape_echar(value, expected):
    assert unescape_echar(value) == expected


@pytest.mark.parametrize('value', ['', 'plain', 'tab\there', r'\q\z', 'back\\'])
def test_unescape_echar_without_escapes_is_unchanged(value):
    assert unescape_echar(value) == value


def test_unescape_echar_escaped_backslash_consumes_next_char():
    once = unescape_echar(r'\\n')
    assert once == r'\n'
    # applying it again does decode the newline
    assert unescape_echar(once) == '\n'


def test_unescape_echar_is_idempotent_without_backslashes():
    once = unescape_echar(r'a\tb\nc')
    assert unescape_echar(once) == once


@pytest.mark.parametrize(
    ('token', 'expected'),
    [
        (r'"Hello\u0041"', 'HelloA'),
        (r'"line1\nline2"', 'line1\nline2'),
        (r'"""a\\b"""', 'a\\b'),
        ('"""say "hi"\nok"""', 'say "hi"\nok'),
        (r"'it\'s'", "it's"),
        ('""', ''),
        ('""""""', ''),
        # the Unicode pass runs first, so an encoded backslash starts a short escape
        (r'"\u005Cn"', '\n'),
    ]
)
def test_lexical_form(token, expected):
    assert lexical_form(token) == expected


@pytest.mark.parametrize('token', [r'"x\ty"', r"'x\ty'", r'"""x\ty"""', r"'''x\ty'''"])
def test_lexical_form_ignores_delimiter_choice(token):
    assert lexical_form(token) == 'x\ty'


@pytest.mark.parametrize('token', ['', 'abc', '"abc', '"abc\'', '"', '"""a"', "'''abc'", '""""'])
def test_strip_quotes_without_matching_delimiters(token):
    with pytest.raises(MalformedLiteral) as exc_info:
        strip_quotes(token)
    assert exc_info.value.token == token


def test_lexical_form_malformed_escape():
    with pytest.raises(MalformedEscape):
        lexical_form(r'"\u12"')


@pytest.mark.parametrize(
    ('token', 'expected'),
    [
        ('<http://example.org/s>', 'http://example.org/s'),
        ('http://example.org/s', 'http://example.org/s'),
        (r'<http://example.org/caf\u00E9>', 'http://example.org/caf\u00e9'),
        # short escapes are not decoded inside IRIs
        (r'<http://example.org/\t>', r'http://example.org/\t'),
        ('<>', ''),
    ]
)
def test_iri_body(token, expected):
    assert iri_body(token) == expected


def test_iri_body_unterminated():
    with pytest.raises(MalformedIRI):
        iri_body('<http://example.org/s')


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        ('plain', 'plain'),
        ('a"b', r'a\"b'),
        ('back\\slash', r'back\\slash'),
        ('line1\nline2\r\n', r'line1\nline2\r\n'),
        ('\t\b\f', r'\t\b\f'),
        ('\x00\x1f\x7f', r'\u0000\u001F\u007F'),
        ("it's caf\u00e9", "it's caf\u00e9"),
    ]
)
def test_escape_string(value, expected):
    assert escape_string(value) == expected


@pytest.mark.parametrize('value', ['plain', 'a"b', 'line1\nline2', '\x00\t', 'caf\u00e9 \U0001F600'])
def test_escape_string_decodes_back(value):
    assert unescape_echar(unescape_uchar(escape_string(value))) == value


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        ('http://example.org/s', 'http://example.org/s'),
        ('http://example.org/a b', r'http://example.org/a\u0020b'),
        ('http://example.org/<x>', r'http://example.org/\u003Cx\u003E'),
        ('http://example.org/{x}|^`"\\', r'http://example.org/\u007Bx\u007D\u007C\u005E\u0060\u0022\u005C'),
        ('http://example.org/caf\u00e9', 'http://example.org/caf\u00e9'),
    ]
)
def test_escape_iri(value, expected):
    assert escape_iri(value) == expected
