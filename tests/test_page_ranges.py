import pytest

from fileconvertzz.errors import ValidationError
from fileconvertzz.services.page_ranges import parse_exclusions


def test_pages_and_ranges():
    assert parse_exclusions("1,4-6", 10) == {0, 3, 4, 5}


def test_reversed_range_is_the_same_range():
    assert parse_exclusions("6-4", 10) == {3, 4, 5}
    assert parse_exclusions("6-4", 10) == parse_exclusions("4-6", 10)


def test_empty_spec_excludes_nothing():
    assert parse_exclusions("", 5) == frozenset()
    assert parse_exclusions(" , ,", 5) == frozenset()


def test_whitespace_and_blank_tokens_are_ignored():
    assert parse_exclusions(" 1 , , 3 ", 5) == {0, 2}
    assert parse_exclusions("2 - 4", 5) == {1, 2, 3}


def test_duplicates_collapse():
    assert parse_exclusions("2,2,1-2", 5) == {0, 1}


def test_out_of_range_numbers_are_dropped():
    assert parse_exclusions("0, 11, 3", 10) == {2}
    assert parse_exclusions("8-15", 10) == {7, 8, 9}
    assert parse_exclusions("20-30", 10) == frozenset()


def test_huge_range_is_clamped():
    assert parse_exclusions("2-999999999999", 4) == {1, 2, 3}


@pytest.mark.parametrize("spec", ["1,2,3", "1-3", "3-1", "1, 2-3, 9"])
def test_excluding_every_page_is_rejected(spec):
    with pytest.raises(ValidationError, match="cannot exclude all pages"):
        parse_exclusions(spec, 3)


@pytest.mark.parametrize("spec", ["abc", "1,x", "1.5", "+2"])
def test_malformed_page_number(spec):
    with pytest.raises(ValidationError, match="malformed page number"):
        parse_exclusions(spec, 5)


@pytest.mark.parametrize("spec", ["1-x", "a-b", "-3", "4-", "1-2-3"])
def test_malformed_range(spec):
    with pytest.raises(ValidationError, match="malformed range"):
        parse_exclusions(spec, 5)


@pytest.mark.parametrize(
    "spec,total",
    [("1,4-6", 10), ("0-10", 50), ("0-100", 200), ("7, 3-1, 12", 8), ("5", 1), ("2-2", 3)],
)
def test_indices_always_within_document(spec, total):
    result = parse_exclusions(spec, total)
    assert all(0 <= i < total for i in result)
    assert len(result) < total


def test_zero_page_document_cannot_be_split():
    with pytest.raises(ValidationError, match="cannot exclude all pages"):
        parse_exclusions("", 0)
    with pytest.raises(ValidationError, match="cannot exclude all pages"):
        parse_exclusions("1", 0)
