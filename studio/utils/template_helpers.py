# studio/utils/template_helpers.py

import datetime

from flask_login import current_user

from .access import home_for_role
from .time_utils import format_date_internal

STATUS_BADGES = {
    'Not Started': 'secondary',
    'In Progress': 'primary',
    'Completed': 'success',
    'On Hold': 'warning',
}

def project_to_form_data(project):
    """Turns a Project (with phases and deliverables) into the nested dict the project editor form loads."""
    if not project:
        return {}

    return {
        'id': project.id,
        'name': project.name,
        'description': project.description,
        'client': project.client,
        'client_id': project.client_id or '',
        'type': project.type,
        'status': project.status,
        'start_date': project.start_date,
        'due_date': project.due_date,
        'progress': project.progress,
        'auto_progress': False,
        'is_public': project.is_public,
        'phases': [
            {
                'name': phase.name,
                'status': phase.status,
                'description': phase.description,
                'completed_date': phase.completed_date,
                'order_index': phase.order_index,
                'deliverables': [
                    {
                        'name': d.name,
                        'type': d.type,
                        'url': d.url,
                        'description': d.description,
                    }
                    for d in phase.deliverables
                ],
            }
            for phase in project.phases
        ],
    }

def init_template_helpers(app):

    @app.template_filter('date')
    def date_filter(value):
        return format_date_internal(value) or '-'

    @app.template_filter('status_badge')
    def status_badge_filter(status):
        return STATUS_BADGES.get(status, 'secondary')

    @app.context_processor
    def inject_portal_links():
        role = current_user.role if current_user.is_authenticated else None
        return {
            'portal_home': home_for_role(role) if role else None,
            'current_year': datetime.date.today().year,
        }
