"""
Profile Service
---------------
Keeps the local ``profiles`` table in step with Supabase auth users and holds
the role and client management used by the admin portal.
"""

from datetime import datetime

from flask import current_app

from .. import db
from ..models import Profile
from ..utils.constants import Roles


class ProfileNotFound(Exception):
    pass


class InvalidRole(ValueError):
    pass


def default_role_for_email(email):
    """New accounts on the studio's own domain are admins; everyone else starts as a user."""
    domain = current_app.config.get('ADMIN_EMAIL_DOMAIN')
    if domain and email and email.lower().endswith(f"@{domain.lower()}"):
        return Roles.ADMIN
    return Roles.USER


def _full_name_from_metadata(auth_user):
    metadata = auth_user.get('user_metadata') or {}
    return metadata.get('full_name') or metadata.get('name')


def _avatar_from_metadata(auth_user):
    metadata = auth_user.get('user_metadata') or {}
    return metadata.get('avatar_url') or metadata.get('picture')


def sync_profile_from_auth_user(auth_user: dict) -> Profile:
    """
    Creates the profile for a Supabase auth user, or refreshes the name,
    avatar and email of an existing one. An existing role is never changed here.

    Args:
        auth_user: The ``user`` object returned by Supabase Auth.

    Returns:
        The persisted Profile.
    """
    user_id = auth_user['id']
    email = auth_user.get('email')
    full_name = _full_name_from_metadata(auth_user)
    avatar_url = _avatar_from_metadata(auth_user)

    profile = db.session.get(Profile, user_id)
    if profile:
        profile.full_name = full_name or profile.full_name
        profile.avatar_url = avatar_url or profile.avatar_url
        profile.email = email or profile.email
        profile.updated_at = datetime.utcnow()
    else:
        profile = Profile(
            id=user_id,
            email=email,
            role=default_role_for_email(email),
            full_name=full_name or f"User {user_id[:8]}",
            avatar_url=avatar_url,
        )
        db.session.add(profile)

    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.error(f"DB error syncing profile for auth user {user_id}", exc_info=True)
        raise

    current_app.logger.info(f"Profile {profile.id} ({profile.email}) synced with role '{profile.role}'")
    return profile


def get_profile(profile_id):
    return db.session.get(Profile, profile_id)


def list_clients():
    """All client profiles, alphabetical by name."""
    return Profile.query.filter_by(role=Roles.CLIENT).order_by(Profile.full_name.asc()).all()


def list_profiles():
    """All profiles, newest first."""
    return Profile.query.order_by(Profile.created_at.desc()).all()


def set_role(profile_id, role, acting_profile=None) -> Profile:
    if role not in Roles.ALL:
        raise InvalidRole("Invalid role")

    profile = db.session.get(Profile, profile_id)
    if not profile:
        raise ProfileNotFound("User not found")

    old_role = profile.role
    profile.role = role
    profile.updated_at = datetime.utcnow()
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.error(f"Error assigning role '{role}' to {profile_id}", exc_info=True)
        raise

    actor = acting_profile.email if acting_profile else 'system'
    current_app.logger.info(f"Profile {profile.email} (ID: {profile.id}) role changed from {old_role} to {role} by {actor}")
    return profile


def update_profile(profile, fields: dict) -> Profile:
    for key in ('full_name', 'company_name', 'avatar_url'):
        if key in fields:
            setattr(profile, key, fields[key] or None)
    profile.updated_at = datetime.utcnow()
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.error(f"Error updating profile {profile.id}", exc_info=True)
        raise
    return profile
