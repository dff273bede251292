"""Summary figures for the admin dashboard and the client profile page."""

from ..models import Project, Profile
from ..utils.constants import ProjectStatus, Roles, DASHBOARD_RECENT_LIMIT


def get_dashboard_data():
    """Totals and most recent records shown on the admin dashboard."""
    return {
        "total_projects": Project.query.count(),
        "pending_projects": Project.query.filter_by(status=ProjectStatus.IN_PROGRESS).count(),
        "completed_projects": Project.query.filter_by(status=ProjectStatus.COMPLETED).count(),
        "total_clients": Profile.query.filter_by(role=Roles.CLIENT).count(),
        "last_projects": Project.query.order_by(Project.created_at.desc()).limit(DASHBOARD_RECENT_LIMIT).all(),
        "last_client_profiles": (Profile.query.filter_by(role=Roles.CLIENT)
                                 .order_by(Profile.created_at.desc()).limit(DASHBOARD_RECENT_LIMIT).all()),
        "last_admin_profiles": (Profile.query.filter_by(role=Roles.ADMIN)
                                .order_by(Profile.created_at.desc()).limit(DASHBOARD_RECENT_LIMIT).all()),
    }


def get_client_data(profile_id):
    """Counts and latest projects for one client's profile page."""
    own = Project.query.filter_by(client_id=profile_id)
    return {
        "active_projects": own.filter_by(status=ProjectStatus.IN_PROGRESS).count(),
        "pending_projects": own.filter_by(status=ProjectStatus.NOT_STARTED).count(),
        "completed_projects": own.filter_by(status=ProjectStatus.COMPLETED).count(),
        "last_projects": own.order_by(Project.created_at.desc()).limit(DASHBOARD_RECENT_LIMIT).all(),
    }
