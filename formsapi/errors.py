from typing import Optional


class FormsError(Exception):
    """Base class for errors the transport layer maps onto a response."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.message)
        self.detail = detail


class SchemaNotFound(FormsError):
    status_code = 404
    message = "Schema not found"

    def __init__(self, name: str):
        super().__init__("No form schema found with the provided name")
        self.name = name


class SubmissionNotFound(FormsError):
    status_code = 404
    message = "Submission not found"

    def __init__(self, submission_id: str):
        super().__init__("No submission found with the provided ID")
        self.submission_id = submission_id


class DuplicateSubmission(FormsError):
    status_code = 409
    message = "Duplicate submission detected"

    def __init__(self, existing_id: Optional[str] = None):
        super().__init__("This form has already been submitted with the same data")
        self.existing_id = existing_id


class PersistenceFailure(FormsError):
    status_code = 500
    message = "Internal server error"


class MalformedPattern(FormsError):
    status_code = 400
    message = "Validation failed"

    def __init__(self, field: str, pattern: str):
        super().__init__(f"Invalid validation pattern for field '{field}'")
        self.field = field
        self.pattern = pattern
