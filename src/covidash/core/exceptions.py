class CovidashError(Exception):
    """Base exception for errors raised by covidash itself.

    Failures of operations run under retry are never wrapped in this type;
    they propagate unchanged.
    """


class RetryCancelledError(CovidashError):
    """Raised when a retry sequence is cancelled before its next attempt.

    Attributes:
        attempts_made: Number of attempts that ran before cancellation
    """
    def __init__(self, attempts_made: int):
        self.attempts_made = attempts_made
        super().__init__(f"Retry cancelled after {attempts_made} attempt(s)")
