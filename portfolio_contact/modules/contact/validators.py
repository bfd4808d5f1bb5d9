# portfolio_contact/modules/contact/validators.py

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from email_validator import EmailNotValidError, validate_email

from portfolio_contact.modules.contact.schemas import ContactSubmission, ValidationIssue


class ContactValidationError(Exception):
    def __init__(self, issues: List[ValidationIssue]):
        self.issues = issues
        super().__init__("; ".join(issue.message for issue in issues))

    @property
    def messages(self) -> List[str]:
        return [issue.message for issue in self.issues]


def text_length(value: str) -> int:
    """Length in UTF-16 code units, the way browsers count form input."""
    return len(value.encode("utf-16-le", errors="surrogatepass")) // 2


def is_valid_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


@dataclass(frozen=True)
class FieldRules:
    """Declarative constraints for one string field of the contact form."""
    field: str
    type_message: str
    empty_message: str
    trim: bool = True
    min_length: Optional[int] = None
    min_message: str = ""
    max_length: Optional[int] = None
    max_message: str = ""
    is_well_formed: Optional[Callable[[str], bool]] = None
    format_message: str = ""

    @property
    def required_message(self) -> str:
        return f'"{self.field}" is a required field'

    def evaluate(self, payload: Dict[str, Any]) -> List[ValidationIssue]:
        if self.field not in payload:
            return [self._issue("required", self.required_message)]

        value = payload[self.field]
        if not isinstance(value, str):
            return [self._issue("type", self.type_message)]

        if self.trim:
            value = value.strip()
        if not value:
            return [self._issue("empty", self.empty_message)]

        issues = []
        length = text_length(value)
        if self.min_length is not None and length < self.min_length:
            issues.append(self._issue("min-length", self.min_message))
        if self.max_length is not None and length > self.max_length:
            issues.append(self._issue("max-length", self.max_message))
        if self.is_well_formed is not None and not self.is_well_formed(value):
            issues.append(self._issue("format", self.format_message))
        return issues

    def clean(self, value: str) -> str:
        return value.strip() if self.trim else value

    def _issue(self, kind: str, message: str) -> ValidationIssue:
        return ValidationIssue(field=self.field, kind=kind, message=message)


CONTACT_FORM_RULES = (
    FieldRules(
        field="name",
        type_message="\"name\" should be a type of 'text'",
        empty_message='"name" cannot be an empty field',
        min_length=2,
        min_message='"name" should have a minimum length of 2 characters',
        max_length=50,
        max_message='"name" length must be less than or equal to 50 characters long',
    ),
    FieldRules(
        field="email",
        type_message='"email" must be a string',
        empty_message='"email" is not allowed to be empty',
        trim=False,
        is_well_formed=is_valid_email,
        format_message='"email" must be a valid email address',
    ),
    FieldRules(
        field="message",
        type_message='"message" must be a string',
        empty_message='"message" is not allowed to be empty',
        min_length=10,
        min_message='"message" should have a minimum length of 10 characters',
        max_length=1000,
        max_message='"message" length must be less than or equal to 1000 characters long',
    ),
)


def collect_issues(payload: Dict[str, Any]) -> List[ValidationIssue]:
    """Run every rule against the payload and return all violations in field order."""
    issues: List[ValidationIssue] = []
    for rules in CONTACT_FORM_RULES:
        issues.extend(rules.evaluate(payload))

    known_fields = {rules.field for rules in CONTACT_FORM_RULES}
    for key in payload:
        if key not in known_fields:
            issues.append(ValidationIssue(field=str(key), kind="unknown", message=f'"{key}" is not allowed'))
    return issues


def validate_contact_form(payload: Dict[str, Any]) -> ContactSubmission:
    """
    Validate a decoded request body.

    Args:
        payload (Dict[str, Any]): The JSON object sent by the client.

    Returns:
        ContactSubmission: Trimmed name and message, email as submitted.

    Raises:
        ContactValidationError: With every violated rule, never just the first.
    """
    issues = collect_issues(payload)
    if issues:
        raise ContactValidationError(issues)

    return ContactSubmission(**{rules.field: rules.clean(payload[rules.field]) for rules in CONTACT_FORM_RULES})
