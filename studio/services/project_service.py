"""
Project Service
---------------
Business logic for projects and their nested phases and deliverables.

Saving a project is a nested operation: the project row is inserted or
updated, every existing phase (and, by cascade, every deliverable) is removed,
and the submitted phases and deliverables are inserted again in order. The
whole save runs in one transaction, so a failure part-way leaves the stored
project untouched.
"""

from datetime import datetime

from flask import current_app
from sqlalchemy import or_

from .. import db
from ..metrics import PROJECT_SAVES_TOTAL, PROJECT_DELETES_TOTAL
from ..models import Project, ProjectPhase, Deliverable
from ..utils.constants import ProjectStatus, DeliverableType, NEW_PROJECT_DUE_DAYS, Roles
from ..utils.time_utils import parse_date_internal, days_from_today
from ..utils.validators import is_valid_uuid

# Scalar columns a caller may set directly on a project
PROJECT_FIELDS = ('name', 'description', 'client', 'client_id', 'type', 'status',
                  'start_date', 'due_date', 'progress', 'is_public')


class ProjectNotFound(Exception):
    pass


class ProjectSaveError(Exception):
    pass


# --- Reads ---

def get_project(project_id):
    """Returns the project with its ordered phases and deliverables, or None."""
    if not project_id:
        return None
    return db.session.get(Project, project_id)


def list_projects(search=None, statuses=None, page=1, page_size=10, viewer=None):
    """
    Returns a page of projects, newest first.

    Args:
        search: Case-insensitive text matched against name and description.
        statuses: Optional list of statuses to keep.
        page: 1-based page number.
        page_size: Number of projects per page.
        viewer: The Profile asking. Admins see everything; anyone else sees
                the projects they own plus public ones.

    Returns:
        A (projects, total) tuple.
    """
    query = Project.query

    if viewer is not None and viewer.role != Roles.ADMIN:
        query = query.filter(or_(Project.client_id == viewer.id, Project.is_public.is_(True)))

    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(Project.name.ilike(pattern), Project.description.ilike(pattern)))

    if statuses:
        query = query.filter(Project.status.in_(statuses))

    pagination = query.order_by(Project.created_at.desc()).paginate(
        page=max(page, 1), per_page=max(page_size, 1), error_out=False
    )
    return pagination.items, pagination.total


def get_client_projects(profile_id):
    """A client's projects, most recently updated first."""
    return (Project.query
            .filter_by(client_id=profile_id)
            .order_by(Project.updated_at.desc())
            .all())


def find_project_by_name_and_client(name, client):
    """Latest project with this name for this client (a blank client matches projects without one)."""
    query = Project.query.filter(Project.name == name)
    if client:
        query = query.filter(Project.client == client)
    else:
        query = query.filter(or_(Project.client.is_(None), Project.client == ''))
    return query.order_by(Project.created_at.desc()).first()


# --- Helpers for the editor ---

def calculate_project_progress(phases):
    """Share of completed phases as a rounded percentage; 0 when there are no phases."""
    if not phases:
        return 0
    completed = sum(1 for phase in phases if _value(phase, 'status') == ProjectStatus.COMPLETED)
    return round(completed / len(phases) * 100)


def new_project_template():
    return {
        "id": "",
        "name": "",
        "description": "",
        "client": "",
        "client_id": None,
        "type": "",
        "status": ProjectStatus.NOT_STARTED,
        "start_date": days_from_today(0),
        "due_date": days_from_today(NEW_PROJECT_DUE_DAYS),
        "progress": 0,
        "is_public": False,
        "phases": [],
    }


def new_phase_template(project_id, order):
    return {
        "id": "",
        "project_id": project_id,
        "name": "",
        "status": ProjectStatus.NOT_STARTED,
        "description": "",
        "completed_date": None,
        "order_index": order,
        "deliverables": [],
    }


def new_deliverable_template(phase_id):
    return {
        "id": "",
        "phase_id": phase_id,
        "name": "",
        "type": DeliverableType.DOCUMENT,
        "url": "",
        "description": "",
    }


# --- Writes ---

def _value(item, key, default=None):
    if isinstance(item, dict):
        return item.get(key, default)
    return getattr(item, key, default)


def _normalize_project_data(data):
    """Accepts both camelCase and snake_case date keys, as the editor and API send either."""
    normalized = dict(data)
    normalized['start_date'] = parse_date_internal(data.get('start_date') or data.get('startDate'))
    normalized['due_date'] = parse_date_internal(data.get('due_date') or data.get('dueDate'))
    normalized['phases'] = list(data.get('phases') or [])
    return normalized


def _project_columns(data):
    progress = data.get('progress')
    if progress is None:
        progress = calculate_project_progress(data['phases'])
    return {
        "name": data.get('name'),
        "description": data.get('description') or None,
        "client": data.get('client') or None,
        "client_id": data.get('client_id') or None,
        "type": data.get('type') or None,
        "status": data.get('status') or ProjectStatus.NOT_STARTED,
        "start_date": data.get('start_date'),
        "due_date": data.get('due_date'),
        "progress": max(0, min(100, int(progress))),
        "is_public": bool(data.get('is_public', False)),
    }


def _resolve_target(data):
    """
    Picks the project row a save writes to.

    Returns:
        A (project, is_new) tuple. ``project`` is None when a new row is needed.
    """
    project_id = data.get('id')
    if project_id and is_valid_uuid(project_id):
        existing = db.session.get(Project, project_id)
        if existing:
            current_app.logger.info(f"Updating existing project with ID: {project_id}")
            return existing, False
        current_app.logger.info(f"Project {project_id} not found, creating new project")
        return None, True

    existing = find_project_by_name_and_client(data.get('name'), data.get('client'))
    if existing:
        current_app.logger.info(f"Updating existing project (found by name/client) with ID: {existing.id}")
        return existing, False
    return None, True


def _build_phase(phase_data, position):
    order_index = _value(phase_data, 'order_index')
    phase = ProjectPhase(
        name=_value(phase_data, 'name'),
        status=_value(phase_data, 'status') or ProjectStatus.NOT_STARTED,
        description=_value(phase_data, 'description') or None,
        completed_date=parse_date_internal(_value(phase_data, 'completed_date')),
        order_index=position if order_index is None else int(order_index),
    )
    for deliverable_data in _value(phase_data, 'deliverables') or []:
        phase.deliverables.append(Deliverable(
            name=_value(deliverable_data, 'name'),
            type=_value(deliverable_data, 'type') or DeliverableType.DOCUMENT,
            url=_value(deliverable_data, 'url') or None,
            description=_value(deliverable_data, 'description') or None,
        ))
    return phase


def save_project(data: dict) -> Project:
    """
    Inserts or updates a project together with its phases and deliverables.

    Args:
        data: Project fields plus a ``phases`` list, each phase carrying a
              ``deliverables`` list. ``id`` may be blank for a new project.

    Returns:
        The saved Project, re-read from the database.

    Raises:
        ProjectSaveError: if validation or any database write fails. Nothing
                          is persisted in that case.
    """
    data = _normalize_project_data(data)
    if not data.get('name'):
        raise ProjectSaveError("Failed to save project: Project name is required")

    try:
        project, is_new = _resolve_target(data)
        columns = _project_columns(data)

        if is_new:
            project = Project(**columns)
            db.session.add(project)
        else:
            for key, value in columns.items():
                setattr(project, key, value)
            project.updated_at = datetime.utcnow()
            # Drop every existing phase; deliverables go with them
            current_app.logger.info(f"Deleting existing phases for project: {project.id}")
            project.phases = []
            db.session.flush()

        for position, phase_data in enumerate(data['phases']):
            project.phases.append(_build_phase(phase_data, position))

        db.session.commit()
    except Exception as e:
        db.session.rollback()
        PROJECT_SAVES_TOTAL.labels(result='failure').inc()
        current_app.logger.error(f"Error in save_project: {e}", exc_info=True)
        raise ProjectSaveError(f"Failed to save project: {e}") from e

    PROJECT_SAVES_TOTAL.labels(result='created' if is_new else 'updated').inc()
    current_app.logger.info(f"Project saved successfully: {project.id}")
    db.session.expire(project)
    return get_project(project.id)


def update_project_fields(project_id, fields: dict) -> Project:
    """
    Partially updates a project. Scalar fields are written in place; when
    ``phases`` is present the full nested save is used instead.
    """
    project = get_project(project_id)
    if not project:
        raise ProjectNotFound(f"Project with ID {project_id} not found")

    if 'phases' in fields:
        merged = {key: getattr(project, key) for key in PROJECT_FIELDS}
        merged.update(fields)
        merged['id'] = project.id
        return save_project(merged)

    for key, value in fields.items():
        if key not in PROJECT_FIELDS:
            continue
        if key in ('start_date', 'due_date'):
            value = parse_date_internal(value)
        elif key == 'progress':
            if value is None:
                value = calculate_project_progress(project.phases)
            value = max(0, min(100, int(value)))
        elif key == 'status':
            value = value or ProjectStatus.NOT_STARTED
        elif key == 'is_public':
            value = bool(value)
        setattr(project, key, value)
    project.updated_at = datetime.utcnow()

    try:
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error updating project {project_id}: {e}", exc_info=True)
        raise ProjectSaveError(f"Failed to update project: {e}") from e
    return project


def delete_project(project_id):
    """
    Deletes a project and, by cascade, its phases and deliverables.
    An id that is not a UUID is treated as a project name.
    """
    if is_valid_uuid(project_id):
        project = db.session.get(Project, project_id)
    else:
        project = Project.query.filter_by(name=project_id).order_by(Project.created_at.desc()).first()

    if not project:
        raise ProjectNotFound(f"Project with ID {project_id} not found")

    deleted_id = project.id
    db.session.delete(project)
    try:
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error deleting project {deleted_id}: {e}", exc_info=True)
        raise

    PROJECT_DELETES_TOTAL.inc()
    current_app.logger.info(f"Project deleted: {deleted_id}")
    return deleted_id
