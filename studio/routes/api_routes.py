# studio/routes/api_routes.py

import math

from flask import current_app, g
from flask_smorest import Blueprint, abort
from prometheus_client import generate_latest
from webargs import fields
from webargs.flaskparser import use_args

from .. import limiter
from ..schemas import (ProjectSchema, ProjectInputSchema, ProjectListArgsSchema, ProjectListSchema,
                       ProfileSummarySchema, ContactSchema, SuccessSchema, MessageSchema)
from ..services import project_service, profile_service
from ..services.contact_service import submit_contact
from ..utils.auth import jwt_required, jwt_optional, role_required
from ..utils.constants import Roles

api_bp = Blueprint('API', __name__, url_prefix='/api', description="Projects, clients and contact enquiries.")

@api_bp.route('/metrics')
def metrics():
    return generate_latest(), 200, {'Content-Type': 'text/plain; version=0.0.4; charset=utf-8'}

def _can_view(profile, project):
    return profile.role == Roles.ADMIN or project.is_public or project.client_id == profile.id

# --- Projects ---

@api_bp.route('/projects', methods=['GET'])
@jwt_required
@api_bp.arguments(ProjectListArgsSchema, location='query')
@api_bp.response(200, ProjectListSchema, description="A page of projects, newest first.")
def list_projects(args):
    page = max(args['page'], 1)
    page_size = args['page_size'] or current_app.config.get('PROJECTS_PAGE_SIZE', 10)
    page_size = max(page_size, 1)

    items, total = project_service.list_projects(
        search=args.get('search'),
        statuses=args.get('status'),
        page=page,
        page_size=page_size,
        viewer=g.user,
    )
    return {
        "data": items,
        "pagination": {
            "page": page,
            "page_size": page_size,
            "total": total,
            "total_pages": math.ceil(total / page_size),
        },
    }

@api_bp.route('/projects', methods=['POST'])
@role_required(Roles.ADMIN)
@api_bp.arguments(ProjectInputSchema)
@api_bp.response(201, ProjectSchema, description="Project created.")
@api_bp.alt_response(400, schema=MessageSchema, description="Bad Request - Name is required.")
def create_project(args):
    if not args.get('name'):
        abort(400, message="Name is required")

    try:
        project = project_service.save_project(args)
    except project_service.ProjectSaveError as e:
        abort(500, message=str(e))

    current_app.logger.info(f"Project {project.id} created via API by {g.user.email}")
    return project

@api_bp.route('/projects/<project_id>', methods=['GET'])
@jwt_required
@api_bp.response(200, ProjectSchema)
@api_bp.alt_response(404, schema=MessageSchema, description="Project not found.")
def get_project(project_id):
    project = project_service.get_project(project_id)
    if not project or not _can_view(g.user, project):
        abort(404, message="Project not found")
    return project

@api_bp.route('/projects/<project_id>', methods=['PATCH'])
@role_required(Roles.ADMIN)
@api_bp.arguments(ProjectInputSchema(partial=True))
@api_bp.response(200, ProjectSchema, description="Project updated.")
@api_bp.alt_response(400, schema=MessageSchema, description="Bad Request - Name is required.")
@api_bp.alt_response(404, schema=MessageSchema, description="Project not found.")
def update_project(args, project_id):
    args.pop('id', None)
    if 'name' in args and not (args['name'] or '').strip():
        abort(400, message="Name is required")

    try:
        return project_service.update_project_fields(project_id, args)
    except project_service.ProjectNotFound:
        abort(404, message="Project not found")
    except project_service.ProjectSaveError as e:
        abort(500, message=str(e))

@api_bp.route('/projects/<project_id>', methods=['DELETE'])
@role_required(Roles.ADMIN)
@api_bp.response(200, SuccessSchema, description="Project deleted.")
@api_bp.alt_response(404, schema=MessageSchema, description="Project not found.")
def delete_project(project_id):
    try:
        deleted_id = project_service.delete_project(project_id)
    except project_service.ProjectNotFound:
        abort(404, message="Project not found")
    except Exception:
        abort(500, message="Failed to delete project due to a server error.")
    return {"success": True, "id": deleted_id}

# --- Users & clients ---

@api_bp.route('/users/<user_id>/role', methods=['PATCH'])
@role_required(Roles.ADMIN)
@use_args({"role": fields.String(required=True)}, location="json")
@api_bp.response(200, ProfileSummarySchema, description="Role updated.")
@api_bp.alt_response(400, schema=MessageSchema, description="Invalid role.")
@api_bp.alt_response(404, schema=MessageSchema, description="User not found.")
def update_user_role(args, user_id):
    role = args['role']
    if user_id == g.user.id and role != Roles.ADMIN:
        abort(400, message="Admins cannot remove their own admin role.")

    try:
        return profile_service.set_role(user_id, role, acting_profile=g.user)
    except profile_service.InvalidRole:
        abort(400, message="Invalid role")
    except profile_service.ProfileNotFound:
        abort(404, message="User not found")
    except Exception:
        abort(500, message="Failed to assign role due to a server error.")

@api_bp.route('/clients', methods=['GET'])
@role_required(Roles.ADMIN)
@api_bp.response(200, ProfileSummarySchema(many=True))
def list_clients():
    return profile_service.list_clients()

# --- Contact ---

@api_bp.route('/contact', methods=['POST'])
@limiter.limit(lambda: current_app.config['CONTACT_RATE_LIMIT'])
@jwt_optional
@api_bp.arguments(ContactSchema)
@api_bp.response(200, SuccessSchema, description="Enquiry stored.")
def contact(args):
    try:
        submission = submit_contact(args, profile=g.user, source='api')
    except Exception:
        abort(500, message="Failed to store your message. Please try again.")
    return {"success": True, "id": str(submission.id)}
