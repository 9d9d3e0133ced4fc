"""Input errors raised by the record store."""


class RecordError(ValueError):
    """Base class for rejected oil change input."""


class InvalidInput(RecordError):
    """Input text was blank or not a whole number."""

    BLANK = "blank"
    NOT_A_NUMBER = "not_a_number"

    def __init__(self, text, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid input {text!r}: {reason}")

    @property
    def is_blank(self) -> bool:
        return self.reason == self.BLANK


class BelowMinimum(RecordError):
    """Oil change interval under the allowed floor."""

    def __init__(self, value: int, minimum: int):
        self.value = value
        self.minimum = minimum
        super().__init__(f"Interval {value} is below the minimum of {minimum}")
