from rugqc.exceptions import QuantityParseError

_REQUIRED = object()


def parse_quantity(text, field=None, empty=_REQUIRED):
    """Parse a non-negative whole-number quantity from form text.

    Empty input is an error unless the caller passes ``empty``, the value to
    use instead. Integers pass through unchanged after the range check.
    """
    if text is None or (isinstance(text, str) and not text.strip()):
        if empty is _REQUIRED:
            raise QuantityParseError(f'{field or "Quantity"} is required', field=field, value=text)
        return empty

    if isinstance(text, bool):
        raise QuantityParseError(f'{field or "Quantity"} must be a whole number', field=field, value=text)

    if isinstance(text, int):
        value = text
    else:
        raw = str(text).strip()
        try:
            value = int(raw)
        except ValueError:
            raise QuantityParseError(f'{field or "Quantity"} must be a whole number', field=field, value=text)

    if value < 0:
        raise QuantityParseError(f'{field or "Quantity"} cannot be negative', field=field, value=text)
    return value
