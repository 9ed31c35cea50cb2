"""
Miscellaneous utility helper functions.
Provides common request handling used across the API routes.
"""

from flask import request

from utils.exceptions import ValidationError
from utils.messages import get_message


def get_json_body() -> dict:
    """
    Get the request JSON object.

    Returns:
        dict: Parsed JSON body

    Raises:
        ValidationError if the body is missing or not a JSON object
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError(get_message('json_required'))
    return data


def get_bool_arg(name: str, default: bool = False) -> bool:
    """
    Read a boolean query string argument ('1', 'true', 'yes').

    Args:
        name: Argument name
        default: Value when the argument is absent

    Returns:
        bool
    """
    value = request.args.get(name)
    if value is None:
        return default
    return value.lower() in ('1', 'true', 'yes')


def get_first_arg(*names: str) -> str:
    """
    Get the first non-empty query string argument among several aliases.

    Returns:
        str or None
    """
    for name in names:
        value = request.args.get(name)
        if value:
            return value
    return None
