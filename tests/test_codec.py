import pytest

from permshell.errors import InvalidInputError
from permshell.permission.codec import (
    DEFAULT_MODE,
    classify,
    encode_numeric,
    encode_triplet,
    has_write_bit,
    is_symbolic,
)


@pytest.mark.parametrize("digit,expected", [
    (7, "rwx"),
    (6, "rw-"),
    (5, "r-x"),
    (4, "r--"),
    (0, "---"),
])
def test_encode_triplet(digit, expected):
    assert encode_triplet(digit) == expected


def test_encode_triplet_type_char():
    assert encode_triplet(7, is_directory=True) == "drwx"
    assert encode_triplet(7, is_directory=False) == "-rwx"


def test_encode_triplet_rejects_out_of_range():
    with pytest.raises(ValueError):
        encode_triplet(8)


def test_encode_numeric_file_and_directory():
    assert encode_numeric("755", is_directory=True) == "drwxr-xr-x"
    assert encode_numeric("400", is_directory=False) == "-r--------"
    assert encode_numeric("000", is_directory=True) == "d---------"


@pytest.mark.parametrize("code", ["", "75", "7555", "abc", "789", "7 5"])
def test_encode_numeric_rejects_malformed_codes(code):
    with pytest.raises(InvalidInputError) as exc:
        encode_numeric(code, is_directory=False)
    assert exc.value.message == "Use format like 755."


def test_classify_reads_owner_bits_only():
    flags = classify("-r---w--w-")
    assert not flags.is_directory
    assert flags.is_readable
    assert not flags.is_writable

    flags = classify("drwx------")
    assert flags.is_directory and flags.is_readable and flags.is_writable


def test_default_mode_is_readable_and_writable():
    flags = classify(DEFAULT_MODE)
    assert flags.is_readable and flags.is_writable and not flags.is_directory


def test_is_symbolic():
    assert is_symbolic("drwxr-xr-x")
    assert is_symbolic("----------")
    assert not is_symbolic("rwxr-xr-x")
    assert not is_symbolic("-rw-r--r--x")
    assert not is_symbolic("-rw-r--r-q")
    assert not is_symbolic("-rw-r--r--\n")


def test_has_write_bit_checks_every_triplet():
    assert has_write_bit("-r---w----")
    assert not has_write_bit("-r--r--r--")
