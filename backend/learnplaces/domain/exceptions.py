class LearnplacesError(Exception):
    """Base class for all errors raised by the learnplaces domain."""


class ValidationError(LearnplacesError):
    """
    Submitted data failed validation.

    ``fields`` maps field names to error messages, ``values`` keeps the
    submitted input so the client can redisplay the form unchanged.
    """

    def __init__(self, message, *, fields=None, values=None):
        super().__init__(message)
        self.fields = fields or {}
        self.values = values or {}


class NotFoundError(LearnplacesError):
    """A referenced learnplace or block does not exist or is out of reach."""


class AccessDenied(LearnplacesError):
    pass


class InvariantViolation(LearnplacesError):
    pass
