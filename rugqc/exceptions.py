"""Domain errors raised by the inspection services.

Each error carries the HTTP status the error handler answers with, so
routes can let them propagate instead of translating them one by one.
"""


class InspectionError(Exception):
    status_code = 500
    default_message = 'Inspection processing failed'

    def __init__(self, message=None, errors=None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)


class FormValidationError(InspectionError):
    """Submission blocked: mandatory fields empty or enumerations invalid."""
    status_code = 400
    default_message = 'Validation failed'


class QuantityParseError(InspectionError, ValueError):
    status_code = 400
    default_message = 'Quantity must be a non-negative whole number'

    def __init__(self, message=None, field=None, value=None):
        self.field = field
        self.value = value
        errors = [{'field': field, 'message': message or self.default_message}] if field else None
        super().__init__(message, errors)


class UploadError(InspectionError):
    """A photo could not be stored. The whole submission is aborted."""
    status_code = 502
    default_message = 'Photo upload failed. Please resubmit the inspection.'


class ReportGenerationError(InspectionError):
    status_code = 500
    default_message = 'Could not generate the inspection report PDF'


class DeliveryError(InspectionError):
    status_code = 502
    default_message = 'Failed to send inspection report email'
