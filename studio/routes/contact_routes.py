# studio/routes/contact_routes.py
# Contact page for signed-in visitors with the plain 'user' role.

from flask import Blueprint, render_template, redirect, url_for, flash, current_app
from flask_login import current_user

from .. import limiter
from ..forms import ContactForm
from ..services.contact_service import submit_contact

contact_bp = Blueprint('contact', __name__)

@contact_bp.route('/user-contact-page', methods=['GET', 'POST'])
@limiter.limit(lambda: current_app.config['CONTACT_RATE_LIMIT'], methods=['POST'])
def user_contact_page():
    form = ContactForm()
    if not form.is_submitted():
        # Prefill from the profile
        form.full_name.data = current_user.full_name
        form.email.data = current_user.email
        form.company_name.data = current_user.company_name

    if form.validate_on_submit():
        try:
            submit_contact(form.data, profile=current_user, source='portal')
            flash("Thank you! Your message has been sent. We'll be in touch soon.", "success")
            return redirect(url_for('contact.user_contact_page'))
        except Exception:
            flash("Something went wrong while sending your message. Please try again.", "danger")

    return render_template('main/user_contact.html', title="Start a Project", form=form)
