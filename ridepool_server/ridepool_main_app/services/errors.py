"""Service error taxonomy

Business conditions are carried inside a ServiceResult; only StoreError is
raised out of the public service operations.
"""


class ServiceError(Exception):
    """Base class for every error a service can report"""
    code = 'error'
    http_status = 400
    default_message = 'Request could not be completed'

    def __init__(self, message=None, **details):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def as_dict(self):
        payload = {'error': self.code, 'message': self.message}
        payload.update(self.details)
        return payload


class ValidationError(ServiceError):
    """Malformed or missing input, rejected before touching the store"""
    code = 'validation_error'
    default_message = 'Invalid request'


class DurationExceededError(ValidationError):
    code = 'duration_exceeded'
    default_message = 'Requested duration exceeds the maximum rental period'


class SelfRatingError(ValidationError):
    code = 'self_rating'
    default_message = 'Users cannot rate themselves'


class NotFoundError(ServiceError):
    code = 'not_found'
    http_status = 404
    default_message = 'Not found'


class CapacityError(ServiceError):
    code = 'capacity_error'
    http_status = 409
    default_message = 'Not enough capacity'


class InsufficientCapacityError(CapacityError):
    code = 'insufficient_capacity'
    default_message = 'Not enough seats available'


class TripFullError(InsufficientCapacityError):
    code = 'full'
    default_message = 'This trip is fully booked'


class OverlapError(CapacityError):
    code = 'overlap'
    default_message = 'Vehicle is already booked for the requested dates'


class OwnershipError(ServiceError):
    code = 'ownership_error'
    http_status = 403
    default_message = 'You do not have permission to perform this action'


class NotOwnerError(OwnershipError):
    code = 'not_owner'
    default_message = 'Only the owner can perform this action'


class ConflictError(ServiceError):
    code = 'conflict'
    http_status = 409
    default_message = 'Request conflicts with the current state'


class DuplicateRatingError(ConflictError):
    code = 'duplicate_rating'
    default_message = 'You have already rated this user'


class AlreadyCancelledError(ConflictError):
    code = 'already_cancelled'
    default_message = 'Booking already cancelled'


class InvalidTransitionError(ConflictError):
    code = 'invalid_transition'
    default_message = 'Status change not allowed'


class TripNotBookableError(ConflictError):
    code = 'trip_not_bookable'
    default_message = 'Only active trips can be booked'


class StoreError(ServiceError):
    """Transaction failure or timeout in the entity store"""
    code = 'store_error'
    http_status = 503
    default_message = 'Storage temporarily unavailable'

    def __init__(self, message=None, retryable=False, **details):
        super().__init__(message, retryable=retryable, **details)
        self.retryable = retryable
