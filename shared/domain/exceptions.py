"""
Domain Errors

Business-level failures raised by services and command handlers.
All of them are recoverable at the caller boundary; the API layer maps
them to client-visible responses (see shared.infrastructure.exception_handler).

Infrastructure failures (database unreachable, broker down) are NOT part of
this hierarchy and must propagate untouched.
"""


class DomainError(Exception):
    """Base class for all business errors"""

    status_code = 400
    default_code = 'error'
    default_detail = 'Request could not be processed.'

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(DomainError):
    """Malformed or out-of-range input (start > end, non-positive price...)"""

    status_code = 400
    default_code = 'validation_error'
    default_detail = 'Invalid input.'


class NotFound(DomainError):
    """Unknown room, override, payment or room set"""

    status_code = 404
    default_code = 'not_found'
    default_detail = 'Not found.'


class Forbidden(DomainError):
    """Actor lacks the ownership or role required"""

    status_code = 403
    default_code = 'forbidden'
    default_detail = 'You do not have permission to perform this action.'


class OverlapConflict(DomainError):
    """Interval overlaps an existing non-deleted interval of the same room"""

    status_code = 409
    default_code = 'overlap_conflict'
    default_detail = 'Interval overlaps an existing one.'


class InvalidState(DomainError):
    """Payment transition attempted from a state that does not allow it"""

    status_code = 409
    default_code = 'invalid_state'
    default_detail = 'Operation is not allowed in the current state.'
