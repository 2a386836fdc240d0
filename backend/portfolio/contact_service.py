"""Contact form validation.

No mail is sent: an accepted submission is written to the log. Submissions
with a filled-in honeypot field are dropped without logging their content
and reported back as accepted, so bots get no signal.
"""

import logging
import re
from datetime import datetime, timezone

from portfolio.errors import ContactValidationError
from portfolio.models import ContactResponse, ContactSubmission

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_MESSAGE_LENGTH = 10

SUCCESS_MESSAGE = "Message received successfully"


def is_spam(submission: ContactSubmission) -> bool:
    """True when the hidden honeypot field has been filled in."""
    return bool(submission.honeypot.strip())


def validate_submission(submission: ContactSubmission) -> None:
    """Check a submission against the form rules.

    Raises:
        ContactValidationError: with an English ``detail`` and a message
            key ``code`` for the first rule that fails.
    """
    if not (submission.name.strip() and submission.email.strip() and submission.message.strip()):
        raise ContactValidationError("Missing required fields", "contact.errors.missing_fields")

    if not EMAIL_PATTERN.match(submission.email.strip()):
        raise ContactValidationError("Invalid email address", "contact.errors.invalid_email")

    if len(submission.message.strip()) < MIN_MESSAGE_LENGTH:
        raise ContactValidationError(
            f"Message too short (minimum {MIN_MESSAGE_LENGTH} characters)",
            "contact.errors.message_too_short",
        )


def submit(submission: ContactSubmission) -> ContactResponse:
    """Validate and record a contact submission.

    Raises:
        ContactValidationError: if the submission is not spam and fails
            validation.
    """
    if is_spam(submission):
        logger.info("Discarded contact submission with filled honeypot field.")
        return ContactResponse(success=True, message=SUCCESS_MESSAGE)

    validate_submission(submission)

    logger.info(
        "Contact form submission: name=%r email=%r message=%r timestamp=%s",
        submission.name.strip(),
        submission.email.strip(),
        submission.message.strip(),
        datetime.now(tz=timezone.utc).isoformat(),
    )
    return ContactResponse(success=True, message=SUCCESS_MESSAGE)
