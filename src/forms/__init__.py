from src.forms.guard import SubmissionGuard, SubmissionInProgressError
from src.forms.handlers import FormOutcome, LeadFormSubmitter, build_quote_lead
from src.forms.validation import FormValidationError, validate_contact_form, validate_quote_form

__all__ = [
    "FormOutcome",
    "LeadFormSubmitter",
    "build_quote_lead",
    "FormValidationError",
    "validate_contact_form",
    "validate_quote_form",
    "SubmissionGuard",
    "SubmissionInProgressError",
]
