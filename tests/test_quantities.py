import pytest

from rugqc.exceptions import QuantityParseError
from rugqc.utils.quantities import parse_quantity


@pytest.mark.parametrize('text, expected', [('12', 12), ('  40 ', 40), ('0', 0), (7, 7)])
def test_parses_whole_numbers(text, expected):
    assert parse_quantity(text) == expected


@pytest.mark.parametrize('text', ['abc', '12.5', '1e3', '5 pcs'])
def test_rejects_non_integer_text(text):
    with pytest.raises(QuantityParseError):
        parse_quantity(text, field='sample_size')


def test_rejects_negative():
    with pytest.raises(QuantityParseError) as exc:
        parse_quantity('-3', field='rejected_qty')
    assert exc.value.field == 'rejected_qty'
    assert exc.value.errors == [{'field': 'rejected_qty', 'message': 'rejected_qty cannot be negative'}]


def test_rejects_bool():
    with pytest.raises(QuantityParseError):
        parse_quantity(True)


def test_empty_requires_explicit_default():
    with pytest.raises(QuantityParseError):
        parse_quantity('   ')
    assert parse_quantity('', empty=0) == 0
    assert parse_quantity(None, empty=0) == 0


def test_is_a_value_error():
    with pytest.raises(ValueError):
        parse_quantity('x')
