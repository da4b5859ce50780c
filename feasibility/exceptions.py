class InvalidInputError(ValueError):
    """Raised when an input value cannot be interpreted (bad date, bad duration, unknown cadence)."""

    pass


class InvalidDateError(InvalidInputError):
    """Raised when a date string is not an ISO-8601 calendar date."""

    pass


class InvalidTimeError(InvalidInputError):
    """Raised when a time-of-day string is not HH:MM."""

    pass
