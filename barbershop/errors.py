# barbershop/errors.py


class BookingError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFound(BookingError):
    status_code = 404


class Conflict(BookingError):
    """The requested time is no longer free; pick another slot."""
    status_code = 409


class Forbidden(BookingError):
    status_code = 403


class InvalidTransition(BookingError):
    status_code = 409


class InvalidInput(BookingError):
    status_code = 422


class StorageUnavailable(BookingError):
    status_code = 503
