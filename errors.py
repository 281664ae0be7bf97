"""Error taxonomy shared by the store, the gateway, sharing and the API."""


class MeetingNotesError(Exception):
    status_code = 500
    code = "internal_error"

    def __init__(self, message: str, **extra):
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message, **self.extra}


class ValidationFailed(MeetingNotesError):
    """Missing or malformed input, rejected before touching the store."""

    status_code = 400
    code = "validation_error"


class NotFound(MeetingNotesError):
    status_code = 404
    code = "not_found"


class GenerationFailed(MeetingNotesError):
    """The summary service could not produce a summary."""

    status_code = 500
    code = "generation_failed"


class DeliveryFailed(MeetingNotesError):
    status_code = 500
    code = "delivery_failed"
