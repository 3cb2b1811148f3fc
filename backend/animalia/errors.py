class AnimaliaError(Exception):
    """Base error; carries the HTTP status its JSON response should use."""
    status_code = 500
    default_message = 'Something went wrong.'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(AnimaliaError):
    status_code = 404
    default_message = 'Room not found.'


class Duplicate(AnimaliaError):
    status_code = 400
    default_message = 'Room already exists.'


class ValidationFailure(AnimaliaError):
    status_code = 400
    default_message = 'Invalid request data.'


class StoreFailure(AnimaliaError):
    status_code = 500
    default_message = 'The database is unavailable, please try again later.'
