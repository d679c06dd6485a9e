class ClubdeskError(Exception):
    """Base class for workflow errors raised by the service layer."""
    status_code = 500

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        payload = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationRefusal(ClubdeskError):
    """The operation was refused before anything was written."""
    status_code = 409


class MonthFinalizedError(ValidationRefusal):
    def __init__(self, month):
        super().__init__(f"Attendance for {month} is finalized and can no longer be changed")
        self.month = month


class NothingToCollectError(ValidationRefusal):
    def __init__(self, student_name, month):
        super().__init__(f"Nothing to collect from {student_name} for {month}")
        self.month = month


class StoreError(ClubdeskError):
    """A read or write against the database failed; the session was rolled back."""
    status_code = 500
