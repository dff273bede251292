# studio/models.py

import uuid
from datetime import datetime
from flask_login import UserMixin
from . import db # Import the db object defined in studio/__init__.py
from .utils.constants import Roles, ProjectStatus, DeliverableType


def _new_uuid():
    return str(uuid.uuid4())


class Profile(UserMixin, db.Model):
    """
    One row per Supabase auth user. The primary key is the auth user id,
    so the profile and the hosted account always share an identity.
    """
    __tablename__ = 'profiles'

    id = db.Column(db.String(36), primary_key=True)
    full_name = db.Column(db.String(150), nullable=True)
    avatar_url = db.Column(db.String(500), nullable=True)

    # Possible values: 'admin', 'client', 'user'
    role = db.Column(db.String(20), nullable=False, default=Roles.USER, index=True)
    email = db.Column(db.String(255), nullable=True, index=True)
    company_name = db.Column(db.String(150), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # --- Relationships ---
    projects = db.relationship('Project', back_populates='client_profile', lazy='dynamic')

    @property
    def is_admin(self):
        return self.role == Roles.ADMIN

    @property
    def display_name(self):
        return self.full_name or self.email or f"User {self.id[:8]}"

    def __repr__(self):
        return f'<Profile {self.email} ({self.role})>'


class Project(db.Model):
    __tablename__ = 'projects'

    id = db.Column(db.String(36), primary_key=True, default=_new_uuid)
    name = db.Column(db.String(200), nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)

    # Free-text client name shown on the project, plus the owning client account (if any)
    client = db.Column(db.String(200), nullable=True, index=True)
    client_id = db.Column(db.String(36), db.ForeignKey('profiles.id', ondelete='SET NULL'), nullable=True, index=True)

    type = db.Column(db.String(50), nullable=True)
    status = db.Column(db.String(30), nullable=False, default=ProjectStatus.NOT_STARTED, index=True)
    start_date = db.Column(db.Date, nullable=True)
    due_date = db.Column(db.Date, nullable=True)
    progress = db.Column(db.Integer, nullable=False, default=0)
    is_public = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # --- Relationships ---
    client_profile = db.relationship('Profile', back_populates='projects')
    phases = db.relationship(
        'ProjectPhase',
        back_populates='project',
        order_by='ProjectPhase.order_index',
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f'<Project {self.id} {self.name!r} Status:{self.status}>'


class ProjectPhase(db.Model):
    __tablename__ = 'project_phases'

    id = db.Column(db.String(36), primary_key=True, default=_new_uuid)
    project_id = db.Column(db.String(36), db.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    status = db.Column(db.String(30), nullable=False, default=ProjectStatus.NOT_STARTED)
    description = db.Column(db.Text, nullable=True)
    completed_date = db.Column(db.Date, nullable=True)
    order_index = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    project = db.relationship('Project', back_populates='phases')
    deliverables = db.relationship(
        'Deliverable',
        back_populates='phase',
        order_by='Deliverable.created_at',
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f'<ProjectPhase {self.order_index}:{self.name!r} Project:{self.project_id}>'


class Deliverable(db.Model):
    __tablename__ = 'deliverables'

    id = db.Column(db.String(36), primary_key=True, default=_new_uuid)
    phase_id = db.Column(db.String(36), db.ForeignKey('project_phases.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    # Possible values: 'Document', 'Design', 'Code', 'Other'
    type = db.Column(db.String(20), nullable=False, default=DeliverableType.DOCUMENT)
    url = db.Column(db.String(500), nullable=True)
    description = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    phase = db.relationship('ProjectPhase', back_populates='deliverables')

    def __repr__(self):
        return f'<Deliverable {self.name!r} ({self.type}) Phase:{self.phase_id}>'


class ContactSubmission(db.Model):
    """Enquiries sent from the public contact form and the user contact page."""
    __tablename__ = 'contacts'

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(150), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    company_name = db.Column(db.String(150), nullable=True)
    phone_number = db.Column(db.String(50), nullable=True)
    project_type = db.Column(db.String(50), nullable=False)
    budget = db.Column(db.String(50), nullable=True)
    timeline = db.Column(db.String(50), nullable=True)
    project_description = db.Column(db.Text, nullable=False)
    referral_source = db.Column(db.String(150), nullable=True)

    # Set when a signed-in user sent the enquiry
    profile_id = db.Column(db.String(36), db.ForeignKey('profiles.id', ondelete='SET NULL'), nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    profile = db.relationship('Profile')

    def __repr__(self):
        return f'<ContactSubmission {self.id} from {self.email}>'
