class PersonalizationError(Exception):
    """A personalization strategy could not produce output for a batch."""


class CompletionError(PersonalizationError):
    """The text-completion service failed (transport, HTTP status, refusal or empty output)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
