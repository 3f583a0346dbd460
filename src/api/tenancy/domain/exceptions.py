"""Domain exceptions for the Tenancy bounded context."""


class InvalidLimitError(ValueError):
    """Raised when a quota limit value is not a positive integer.

    Vehicle, fleet and customer limits must always be positive.
    The monthly invoice limit may additionally be unset (None).
    """

    def __init__(self, field_name: str, value: object):
        super().__init__(f"{field_name} must be a positive integer, got {value!r}")
        self.field_name = field_name
        self.value = value
