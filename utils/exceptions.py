"""
Domain exceptions for the rental engine.

Every expected failure of a store, availability, or lifecycle operation is
raised as a RentalError subclass. Each one knows the HTTP status and the
error_type the API layer reports, plus any extra context for the caller.

    NotFoundError      404  referenced client/unit/reservation does not exist
    InvalidRangeError  400  start date not strictly before end date
    ValidationError    400  malformed field values
    ConflictError      409  unit already booked, duplicate key, entity in use,
                            or a rejected integrity constraint
    StoreError         503  database unreachable or write failed (retryable)
"""

from utils.messages import get_message


class RentalError(Exception):
    """Base class for all rental engine errors."""

    status_code = 400
    error_type = 'error'
    retryable = False

    def __init__(self, message: str, **details):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Extra fields to merge into an API error response."""
        data = {'error_type': self.error_type}
        if self.retryable:
            data['retryable'] = True
        data.update(self.details)
        return data


class NotFoundError(RentalError, LookupError):
    status_code = 404
    error_type = 'not_found'

    def __init__(self, entity: str, entity_id, message: str = None):
        super().__init__(
            message or f'{entity.capitalize()} {entity_id} not found',
            entity=entity,
            entity_id=entity_id
        )
        self.entity = entity
        self.entity_id = entity_id


class InvalidRangeError(RentalError, ValueError):
    status_code = 400
    error_type = 'invalid_range'

    def __init__(self, start_date, end_date, message: str = None):
        super().__init__(
            message or get_message('invalid_date_range'),
            start_date=str(start_date),
            end_date=str(end_date)
        )


class ValidationError(RentalError, ValueError):
    status_code = 400
    error_type = 'validation_error'

    def __init__(self, message: str, errors: dict = None):
        super().__init__(message, errors=errors or {})
        self.errors = errors or {}


class ConflictError(RentalError):
    status_code = 409
    error_type = 'conflict'


class StoreError(RentalError):
    status_code = 503
    error_type = 'store_error'
    retryable = True
