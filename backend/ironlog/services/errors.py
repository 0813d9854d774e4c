class WorkoutRejected(ValueError):
    """
    A session operation violated a precondition. Raised before any state is
    touched, so callers can show ``message`` and carry on.
    """

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def as_detail(self) -> dict:
        return {"code": self.code, "message": self.message}


EMPTY_SET = "empty_set"
NO_SETS = "no_sets"
NO_EXERCISES = "no_exercises"
NO_EXERCISE = "no_exercise"
INVALID_STATE = "invalid_state"
