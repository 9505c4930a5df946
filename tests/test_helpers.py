import ast

import pytest

from atcmd.helpers import lossy_str


def test_escapes_line_endings():
    assert lossy_str(b"AT\r\n") == '"AT\\r\\n"'


def test_invalid_utf8_shows_bytes():
    assert lossy_str(b"\xff\x00") == "[255, 0]"


def test_quotes_are_escaped():
    assert lossy_str(b'say "hi"') == '"say \\"hi\\""'


@pytest.mark.parametrize(
    "text",
    ["OK", "+CIEV: 7,1", "tab\there", 'q"u\\o', "\r\n+UUSORD: 0,5\r\n", ""],
)
def test_output_is_a_quoted_literal_of_the_input(text):
    shown = lossy_str(text.encode())
    assert shown.startswith('"') and shown.endswith('"')
    assert ast.literal_eval(shown) == text


def test_plain_text_is_only_quoted():
    text = "AT+USORD=3,16"
    assert lossy_str(text.encode()) == '"' + text + '"'


def test_accepts_bytearray():
    assert lossy_str(bytearray(b"OK")) == lossy_str(b"OK")