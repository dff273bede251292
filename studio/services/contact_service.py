"""Stores contact enquiries and forwards them to the studio."""

from flask import current_app

from .. import db
from ..metrics import CONTACT_SUBMISSIONS_TOTAL
from ..models import ContactSubmission
from ..utils.email_utils import send_contact_notification

CONTACT_FIELDS = ('full_name', 'email', 'company_name', 'phone_number', 'project_type',
                  'budget', 'timeline', 'project_description', 'referral_source')


def submit_contact(data: dict, profile=None, source='website') -> ContactSubmission:
    """
    Creates a ContactSubmission from already-validated form data and emails
    the studio about it.

    Args:
        data: The contact fields (see CONTACT_FIELDS); blanks are stored as NULL.
        profile: The signed-in Profile that sent it, if any.
        source: Label for metrics ('website', 'portal' or 'api').
    """
    submission = ContactSubmission(**{key: (data.get(key) or None) for key in CONTACT_FIELDS})
    if profile is not None:
        submission.profile_id = profile.id

    db.session.add(submission)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.error(f"Database error storing contact enquiry from {data.get('email')}", exc_info=True)
        raise

    CONTACT_SUBMISSIONS_TOTAL.labels(source=source).inc()
    current_app.logger.info(f"Contact enquiry {submission.id} received from {submission.email} via {source}")
    send_contact_notification(submission)
    return submission
