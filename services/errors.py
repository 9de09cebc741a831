class ServiceError(Exception):
    """Base error raised by the service layer; status_code drives the HTTP answer."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(ServiceError):
    status_code = 404


class ReferenceNotFound(ServiceError):
    """A referenced entity (person, offering, enrolment ...) does not exist."""

    status_code = 400


class InvalidRequest(ServiceError):
    status_code = 400


class Forbidden(ServiceError):
    status_code = 403


class Conflict(ServiceError):
    status_code = 409
