"""Errors raised by the like services and mapped to HTTP responses by the app."""


class LikeError(Exception):
    status_code = 500
    default_message = 'Like operation failed'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(LikeError):
    status_code = 401
    default_message = 'Authentication required'


class Forbidden(LikeError):
    status_code = 400
    default_message = 'Operation not allowed'


class IdentityMismatch(Forbidden):
    """Caller tried to read another user's data"""
    status_code = 403
    default_message = 'Forbidden access'


class NotFound(LikeError):
    status_code = 404
    default_message = 'Room not found'


class Conflict(LikeError):
    status_code = 400
    default_message = 'Conflicting like state'


class StorageFailure(LikeError):
    status_code = 500
    default_message = 'Storage operation failed'
