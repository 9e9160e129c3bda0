import pytest

from rdfxmlio.names import is_name, is_name_char, is_name_start_char, is_nc_name


@pytest.mark.parametrize("c", [":", "_", "A", "z", "\u00c0", "\u0370", "\U00013000"])
def test_name_start_chars(c):
    assert is_name_start_char(c)
    assert is_name_char(c)


@pytest.mark.parametrize("c", ["-", ".", "0", "9", "\u00b7", "\u0300", "\u203f"])
def test_name_chars_that_cannot_start(c):
    assert is_name_char(c)
    assert not is_name_start_char(c)


@pytest.mark.parametrize("c", [" ", "/", "#", "\u00d7", "\u00f7", "%", "<"])
def test_non_name_chars(c):
    assert not is_name_char(c)
    assert not is_name_start_char(c)


def test_every_start_char_is_a_name_char():
    for code in range(0, 0x3100):
        c = chr(code)
        if is_name_start_char(c):
            assert is_name_char(c)


@pytest.mark.parametrize("name", ["foo", "Person", "_a1", "a-b.c", "p"])
def test_valid_names(name):
    assert is_name(name)
    assert is_nc_name(name)


@pytest.mark.parametrize("name", ["", "1foo", "-a", "a b", "a/b"])
def test_invalid_names(name):
    assert not is_name(name)
    assert not is_nc_name(name)


def test_colon_allowed_in_name_but_not_nc_name():
    assert is_name("rdf:type")
    assert not is_nc_name("rdf:type")
    assert is_name(":x")
    assert not is_nc_name(":x")