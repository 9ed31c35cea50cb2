"""
Input validation helper functions.
Provides validation for common input types and for the unit, client and
reservation payloads accepted by the API.
"""

import re

from utils.datetime_helpers import get_today, parse_date
from utils.exceptions import ValidationError

RESERVATION_STATUSES = ('active', 'completed', 'cancelled')

MIN_UNIT_YEAR = 2000


def validate_email(email: str) -> bool:
    """
    Validate email format.

    Args:
        email: Email address to validate

    Returns:
        True if valid email format
    """
    if not email:
        return False

    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(pattern, email))


def validate_phone(phone: str, min_length: int = 6) -> bool:
    """
    Validate phone number format.
    Accepts digits with an optional leading + and common separators.

    Args:
        phone: Phone number to validate
        min_length: Minimum number of characters

    Returns:
        True if valid phone format
    """
    if not phone or len(phone.strip()) < min_length:
        return False

    cleaned = re.sub(r'[\s\-\(\)\.]', '', phone)
    return bool(re.match(r'^\+?[0-9]+$', cleaned))


def sanitize_input(text: str, max_length: int = None) -> str:
    """
    Sanitize text input by trimming and limiting length.

    Args:
        text: Text to sanitize
        max_length: Maximum length (optional)

    Returns:
        Sanitized text
    """
    if not text:
        return ''

    sanitized = str(text).strip()

    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized


# =============================================================================
# PAYLOAD VALIDATION
# =============================================================================

def _require_text(data: dict, field: str, errors: dict, cleaned: dict,
                  min_length: int = 1, max_length: int = 200) -> None:
    value = sanitize_input(data.get(field), max_length)
    if len(value) < min_length:
        if min_length > 1:
            errors[field] = f'Must be at least {min_length} characters'
        else:
            errors[field] = 'This field is required'
        return
    cleaned[field] = value


def _date_field(data: dict, field: str, errors: dict, cleaned: dict,
                required: bool = False) -> None:
    # Stored dates are always zero-padded YYYY-MM-DD
    value = data.get(field)
    if value in (None, ''):
        if required:
            errors[field] = 'This field is required'
        else:
            cleaned[field] = None
        return
    try:
        cleaned[field] = parse_date(str(value), field).isoformat()
    except ValidationError as e:
        errors[field] = e.errors[field]


def _required_int(data: dict, field: str, errors: dict, cleaned: dict) -> None:
    value = data.get(field)
    if isinstance(value, bool):
        errors[field] = 'Must be an integer'
        return
    try:
        cleaned[field] = int(value)
    except (TypeError, ValueError):
        errors[field] = 'Must be an integer' if value not in (None, '') else 'This field is required'


def validate_unit_data(data: dict, partial: bool = False) -> dict:
    """
    Validate a unit (wheelchair) payload.

    Args:
        data: Raw request payload
        partial: If True, only validate the fields present (updates)

    Returns:
        dict: Cleaned fields

    Raises:
        ValidationError with per-field errors
    """
    data = data or {}
    errors = {}
    cleaned = {}

    for field in ('model', 'brand', 'motor', 'wheel_size'):
        if not partial or field in data:
            _require_text(data, field, errors, cleaned)

    if not partial or 'year' in data:
        _required_int(data, 'year', errors, cleaned)
        year = cleaned.get('year')
        max_year = get_today().year
        if year is not None and not MIN_UNIT_YEAR <= year <= max_year:
            errors['year'] = f'Year must be between {MIN_UNIT_YEAR} and {max_year}'
            cleaned.pop('year')

    if 'last_service' in data or not partial:
        _date_field(data, 'last_service', errors, cleaned)

    if errors:
        raise ValidationError('Invalid wheelchair data', errors=errors)
    return cleaned


def validate_client_data(data: dict, partial: bool = False) -> dict:
    """
    Validate a client payload.

    register_date is only read on creation; updates never carry it.

    Args:
        data: Raw request payload
        partial: If True, only validate the fields present (updates)

    Returns:
        dict: Cleaned fields

    Raises:
        ValidationError with per-field errors
    """
    data = data or {}
    errors = {}
    cleaned = {}

    for field in ('first_name', 'last_name', 'address', 'city', 'country'):
        if not partial or field in data:
            _require_text(data, field, errors, cleaned)

    if not partial or 'dni' in data:
        _require_text(data, 'dni', errors, cleaned, min_length=6, max_length=30)

    if not partial or 'phone' in data:
        phone = sanitize_input(data.get('phone'), 30)
        if validate_phone(phone):
            cleaned['phone'] = phone
        else:
            errors['phone'] = 'Must be a phone number of at least 6 characters'

    if not partial or 'email' in data:
        email = sanitize_input(data.get('email'), 254)
        if validate_email(email):
            cleaned['email'] = email
        else:
            errors['email'] = 'Invalid email format'

    if not partial:
        _date_field(data, 'register_date', errors, cleaned)
        if cleaned.get('register_date') is None:
            cleaned.pop('register_date', None)

    if errors:
        raise ValidationError('Invalid client data', errors=errors)
    return cleaned


def validate_reservation_data(data: dict, partial: bool = False) -> dict:
    """
    Validate a reservation payload.

    On creation client_id, unit_id, start_date and end_date are required.
    On update only unit_id, start_date, end_date, status and notes are
    accepted. Range ordering is checked by the lifecycle manager, which
    knows the stored values a partial patch falls back to.

    Args:
        data: Raw request payload
        partial: If True, validate an update patch

    Returns:
        dict: Cleaned fields

    Raises:
        ValidationError with per-field errors
    """
    data = data or {}
    errors = {}
    cleaned = {}

    id_fields = ('unit_id',) if partial else ('client_id', 'unit_id')
    for field in id_fields:
        if not partial or field in data:
            _required_int(data, field, errors, cleaned)

    for field in ('start_date', 'end_date'):
        if not partial or field in data:
            _date_field(data, field, errors, cleaned, required=True)

    if partial and 'status' in data:
        if data['status'] in RESERVATION_STATUSES:
            cleaned['status'] = data['status']
        else:
            errors['status'] = f'Must be one of: {", ".join(RESERVATION_STATUSES)}'

    if 'notes' in data:
        cleaned['notes'] = sanitize_input(data.get('notes'), 2000) or None

    if errors:
        raise ValidationError('Invalid reservation data', errors=errors)
    return cleaned
