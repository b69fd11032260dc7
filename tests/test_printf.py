import io

import pytest

from xvtools.printf import format, fprintf, printf


@pytest.mark.parametrize("n", [0, 7, -42, 2147483647, -2147483648])
def test_decimal_round_trip(n):
    assert int(format("%d", n)) == n


def test_decimal_negative():
    assert format("%d", -42) == "-42"


def test_hex_upper_case():
    assert format("%x", 255) == "FF"


def test_hex_negative_is_unsigned():
    assert format("%x", -1) == "FFFFFFFF"


def test_pointer_is_sixteen_digits():
    assert format("%p", 0) == "0x0000000000000000"
    assert int(format("%p", 0xDEADBEEF), 16) == 0xDEADBEEF


def test_long_goes_through_32_bits():
    assert format("%l", 2**32 + 7) == format("%l", 7)


def test_string_and_null():
    assert format("[%s]", "abc") == "[abc]"
    assert format("%s", None) == "(null)"


def test_char():
    assert format("%c%c", 65, "b") == "Ab"


def test_percent_and_unknown():
    assert format("100%%") == "100%"
    assert format("%q") == "%q"


def test_trailing_percent_dropped():
    assert format("abc%") == "abc"


def test_missing_argument():
    with pytest.raises(TypeError):
        format("%d")


def test_fprintf_writes_stream():
    stream = io.StringIO()
    fprintf(stream, "%s=%d\n", "x", 3)
    assert stream.getvalue() == "x=3\n"


def test_printf_writes_stdout(capsys):
    printf("hi %s\n", "there")
    assert capsys.readouterr().out == "hi there\n"