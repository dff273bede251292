# studio/utils/access.py

from urllib.parse import urlencode

from flask import redirect, request
from flask_login import current_user

from .constants import Roles, ROLE_HOME

# Each protected area of the portal belongs to exactly one role
PROTECTED_AREAS = {
    '/dashboard': Roles.ADMIN,
    '/profile': Roles.CLIENT,
    '/user-contact-page': Roles.USER,
}

LOGIN_PATH = '/login'


def area_for_path(path):
    """Returns the protected area prefix containing ``path``, or None for open pages."""
    for prefix in PROTECTED_AREAS:
        if path == prefix or path.startswith(prefix + '/'):
            return prefix
    return None


def home_for_role(role):
    return ROLE_HOME.get(role, '/')


def resolve_access(path, role=None, is_authenticated=False):
    """
    Decides where a request for ``path`` should go.

    Returns:
        None when the request may proceed, otherwise the path to redirect to:
        the login page for anonymous visitors, or the role's own home when
        the area belongs to another role.
    """
    area = area_for_path(path)
    if area is None:
        return None

    if not is_authenticated:
        return f"{LOGIN_PATH}?{urlencode({'redirectedFrom': path})}"

    if PROTECTED_AREAS[area] == role:
        return None
    return home_for_role(role)


def enforce_area_access():
    """before_request hook applying resolve_access to the current request."""
    role = current_user.role if current_user.is_authenticated else None
    target = resolve_access(request.path, role, current_user.is_authenticated)
    if target is None:
        return None
    return redirect(target)


def init_access_rules(app):
    app.before_request(enforce_area_access)
