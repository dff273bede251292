# studio/forms.py

from flask_wtf import FlaskForm
from wtforms import (Form, StringField, PasswordField, SubmitField, SelectField, TextAreaField,
                     IntegerField, BooleanField, DateField, FieldList, FormField, HiddenField, EmailField)
from wtforms.validators import DataRequired, Email, EqualTo, Length, NumberRange, Optional, URL

from .utils.constants import (Roles, ProjectStatus, DeliverableType, PROJECT_TYPE_CHOICES,
                              BUDGET_CHOICES, TIMELINE_CHOICES)

STATUS_CHOICES = [(status, status) for status in ProjectStatus.ALL]

# --- Authentication ---

class SignupForm(FlaskForm):
    full_name = StringField('Full Name', validators=[DataRequired(), Length(min=2, max=150)])
    email = EmailField('Email', validators=[DataRequired(), Email(), Length(max=255)])
    password = PasswordField('Password', validators=[DataRequired(), Length(min=6, message="Password must be at least 6 characters long.")])
    confirm_password = PasswordField('Confirm Password',
                                     validators=[DataRequired(), EqualTo('password', message="Passwords must match.")])
    submit = SubmitField('Create Account')

class LoginForm(FlaskForm):
    email = EmailField('Email', validators=[DataRequired(), Email()])
    password = PasswordField('Password', validators=[DataRequired()])
    submit = SubmitField('Log In')

class ForgotPasswordForm(FlaskForm):
    email = EmailField('Email', validators=[DataRequired(), Email()])
    submit = SubmitField('Send Reset Link')

class ResetPasswordForm(FlaskForm):
    password = PasswordField('New Password', validators=[DataRequired(), Length(min=6, message="Password must be at least 6 characters long.")])
    confirm_password = PasswordField('Confirm New Password',
                                     validators=[DataRequired(), EqualTo('password', message="Passwords must match.")])
    submit = SubmitField('Update Password')

class ResendVerificationForm(FlaskForm):
    email = EmailField('Email', validators=[DataRequired(), Email()])
    submit = SubmitField('Resend Verification Email')

# --- Contact ---

class ContactForm(FlaskForm):
    full_name = StringField('Full Name', validators=[DataRequired(), Length(max=150)])
    email = EmailField('Email', validators=[DataRequired(), Email(), Length(max=255)])
    company_name = StringField('Company Name', validators=[Optional(), Length(max=150)])
    phone_number = StringField('Phone Number', validators=[Optional(), Length(max=50)])
    project_type = SelectField('Project Type', choices=PROJECT_TYPE_CHOICES, validators=[DataRequired()])
    budget = SelectField('Budget', choices=BUDGET_CHOICES, validators=[Optional()])
    timeline = SelectField('Timeline', choices=TIMELINE_CHOICES, validators=[Optional()])
    project_description = TextAreaField('Project Description', validators=[DataRequired(), Length(max=5000)])
    referral_source = StringField('How did you hear about us?', validators=[Optional(), Length(max=150)])
    submit = SubmitField('Send Message')

# --- Profile ---

class ProfileSettingsForm(FlaskForm):
    full_name = StringField('Full Name', validators=[DataRequired(), Length(max=150)])
    company_name = StringField('Company Name', validators=[Optional(), Length(max=150)])
    avatar_url = StringField('Avatar URL', validators=[Optional(), URL(), Length(max=500)])
    submit = SubmitField('Save Changes')

class RoleForm(FlaskForm):
    role = SelectField('Role', choices=[(role, role.capitalize()) for role in Roles.ALL], validators=[DataRequired()])
    submit = SubmitField('Update Role')

class DeleteForm(FlaskForm):
    """Empty form so destructive POSTs still carry a CSRF token."""
    submit = SubmitField('Delete')

# --- Project editor (nested) ---
# Sub-forms derive from wtforms.Form so only the outer form carries a CSRF token.

class DeliverableForm(Form):
    name = StringField('Deliverable Name', validators=[DataRequired(), Length(max=200)])
    type = SelectField('Type', choices=[(t, t) for t in DeliverableType.ALL], default=DeliverableType.DOCUMENT)
    url = StringField('URL', validators=[Optional(), URL(), Length(max=500)])
    description = TextAreaField('Description', validators=[Optional()])
    remove = BooleanField('Remove')

class PhaseForm(Form):
    name = StringField('Phase Name', validators=[DataRequired(), Length(max=200)])
    status = SelectField('Status', choices=STATUS_CHOICES, default=ProjectStatus.NOT_STARTED)
    description = TextAreaField('Description', validators=[Optional()])
    completed_date = DateField('Completed On', validators=[Optional()])
    order_index = IntegerField('Order', validators=[Optional(), NumberRange(min=0)])
    deliverables = FieldList(FormField(DeliverableForm), min_entries=0)
    remove = BooleanField('Remove phase')

class ProjectForm(FlaskForm):
    id = HiddenField()
    name = StringField('Project Name', validators=[DataRequired(), Length(max=200)])
    description = TextAreaField('Description', validators=[Optional()])
    client = StringField('Client Name', validators=[Optional(), Length(max=200)])
    client_id = SelectField('Client Account', choices=[], validate_choice=False)
    type = StringField('Project Type', validators=[Optional(), Length(max=50)])
    status = SelectField('Status', choices=STATUS_CHOICES, default=ProjectStatus.NOT_STARTED)
    start_date = DateField('Start Date', validators=[Optional()])
    due_date = DateField('Due Date', validators=[Optional()])
    progress = IntegerField('Progress (%)', validators=[Optional(), NumberRange(min=0, max=100)])
    auto_progress = BooleanField('Calculate progress from completed phases')
    is_public = BooleanField('Show in public portfolio')
    phases = FieldList(FormField(PhaseForm), min_entries=0)
    add_phase = SubmitField('Add Phase')
    submit = SubmitField('Save Project')

    def set_client_choices(self, clients):
        self.client_id.choices = [('', 'No client account')] + [
            (c.id, c.full_name or c.email or c.id) for c in clients
        ]

    def to_project_data(self):
        """Flattens the submitted form into the dict the project service saves."""
        phases = []
        kept_phases = [entry.form for entry in self.phases.entries if not entry.form.remove.data]
        for position, phase in enumerate(kept_phases):
            phases.append({
                "name": phase.name.data,
                "status": phase.status.data,
                "description": phase.description.data,
                "completed_date": phase.completed_date.data,
                "order_index": phase.order_index.data if phase.order_index.data is not None else position,
                "deliverables": [
                    {
                        "name": d.form.name.data,
                        "type": d.form.type.data,
                        "url": d.form.url.data,
                        "description": d.form.description.data,
                    }
                    for d in phase.deliverables.entries
                    if not d.form.remove.data
                ],
            })

        return {
            "id": self.id.data or "",
            "name": self.name.data,
            "description": self.description.data,
            "client": self.client.data,
            "client_id": self.client_id.data or None,
            "type": self.type.data,
            "status": self.status.data,
            "start_date": self.start_date.data,
            "due_date": self.due_date.data,
            # None lets the service derive progress from the phases
            "progress": None if self.auto_progress.data else (self.progress.data or 0),
            "is_public": self.is_public.data,
            "phases": phases,
        }
