# studio/utils/email_utils.py

from flask import current_app
from flask_mail import Message
from .. import mail

def send_contact_notification(submission):
    """Forwards a new contact enquiry to the studio inbox. Returns True when a mail was sent."""
    recipient = current_app.config.get('CONTACT_RECIPIENT')
    if not recipient:
        current_app.logger.info(f"CONTACT_RECIPIENT not set; enquiry {submission.id} stored without notification.")
        return False

    subject = f"New project enquiry from {submission.full_name}"
    body = "\n".join([
        f"Name: {submission.full_name}",
        f"Email: {submission.email}",
        f"Company: {submission.company_name or '-'}",
        f"Phone: {submission.phone_number or '-'}",
        f"Project type: {submission.project_type}",
        f"Budget: {submission.budget or '-'}",
        f"Timeline: {submission.timeline or '-'}",
        f"Heard about us: {submission.referral_source or '-'}",
        "",
        submission.project_description,
    ])

    msg = Message(subject=subject, recipients=[recipient], reply_to=submission.email, body=body)

    try:
        mail.send(msg)
        current_app.logger.info(f"Contact enquiry {submission.id} forwarded to {recipient}")
        return True
    except Exception as e:
        current_app.logger.error(f"Failed to forward contact enquiry {submission.id}: {e}")
        return False
