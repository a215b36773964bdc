import html
import re
from datetime import date

import bleach


def sanitize_string(value):
    """Strip HTML tags and trim whitespace from string inputs."""
    if value is None:
        return None
    if not isinstance(value, str):
        return value
    # bleach entity-escapes "&"; output is escaped again at render time
    cleaned = html.unescape(bleach.clean(str(value), tags=[], strip=True))
    return cleaned.strip()


EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')

# YYYY-MM-DD as posted by a date input
ISO_DATE_REGEX = re.compile(r'^\d{4}-\d{2}-\d{2}$')

# Customer code: letter, hyphen, digits (A-01)
CUSTOMER_CODE_REGEX = re.compile(r'^[A-Za-z0-9\-]+$')


def validate_email(value):
    """Basic email format validation."""
    if not value:
        return None
    if not EMAIL_REGEX.match(value.strip()):
        return 'Invalid email format'
    return None


def validate_iso_date(value):
    if not value:
        return None
    value = str(value).strip()
    if not ISO_DATE_REGEX.match(value):
        return 'Invalid date. Expected: YYYY-MM-DD'
    try:
        date.fromisoformat(value)
    except ValueError:
        return 'Invalid date. Expected: YYYY-MM-DD'
    return None
