# studio/routes/dashboard_routes.py
# Admin portal. Access to everything under /dashboard is limited to admins by the access rules.

import math

from flask import Blueprint, render_template, redirect, url_for, flash, request, current_app, abort
from flask_login import current_user

from ..forms import ProjectForm, DeleteForm, RoleForm, ProfileSettingsForm
from ..services import project_service, profile_service
from ..services.dashboard_service import get_dashboard_data
from ..utils.constants import ProjectStatus, Roles
from ..utils.template_helpers import project_to_form_data

dashboard_bp = Blueprint('dashboard', __name__)

@dashboard_bp.route('/')
def index():
    return render_template('dashboard/index.html', title="Dashboard", data=get_dashboard_data())

# --- Projects ---

@dashboard_bp.route('/projects')
def projects():
    search = request.args.get('search', '').strip()
    statuses = [s for s in request.args.getlist('status') if s in ProjectStatus.ALL]
    page = request.args.get('page', 1, type=int)
    page_size = current_app.config.get('PROJECTS_PAGE_SIZE', 10)

    items, total = project_service.list_projects(
        search=search or None,
        statuses=statuses,
        page=page,
        page_size=page_size,
        viewer=current_user,
    )
    return render_template('dashboard/projects.html',
                           title="Projects",
                           projects=items,
                           total=total,
                           page=page,
                           total_pages=max(1, math.ceil(total / page_size)),
                           search=search,
                           selected_statuses=statuses,
                           all_statuses=ProjectStatus.ALL)

def _render_editor(form, project=None):
    title = f"Edit {project.name}" if project else "New Project"
    return render_template('dashboard/project_form.html', title=title, form=form, project=project)

def _handle_editor_post(form, project=None):
    """
    Handles a POST of the nested project editor. The "add phase" and
    "add deliverable" buttons re-render the form with one more blank entry;
    the save button runs the nested save.
    """
    if form.add_phase.data:
        form.phases.append_entry(project_service.new_phase_template(form.id.data, len(form.phases.entries)))
        return _render_editor(form, project)

    add_to = request.form.get('add_deliverable_to', '')
    if add_to.isdigit() and int(add_to) < len(form.phases.entries):
        phase_form = form.phases.entries[int(add_to)].form
        phase_form.deliverables.append_entry(project_service.new_deliverable_template(''))
        return _render_editor(form, project)

    if not form.validate():
        flash("Please correct the errors below.", "danger")
        return _render_editor(form, project)

    try:
        saved = project_service.save_project(form.to_project_data())
    except project_service.ProjectSaveError as e:
        flash(str(e), "danger")
        return _render_editor(form, project)

    flash(f"Project '{saved.name}' saved successfully.", "success")
    return redirect(url_for('dashboard.project_detail', project_id=saved.id))

@dashboard_bp.route('/projects/new', methods=['GET', 'POST'])
def new_project():
    if request.method == 'POST':
        form = ProjectForm()
    else:
        form = ProjectForm(data=project_service.new_project_template())
    form.set_client_choices(profile_service.list_clients())

    if request.method == 'POST':
        return _handle_editor_post(form)
    return _render_editor(form)

@dashboard_bp.route('/projects/<project_id>')
def project_detail(project_id):
    project = project_service.get_project(project_id)
    if not project:
        abort(404)
    return render_template('dashboard/project_detail.html',
                           title=project.name,
                           project=project,
                           delete_form=DeleteForm())

@dashboard_bp.route('/projects/<project_id>/edit', methods=['GET', 'POST'])
def edit_project(project_id):
    project = project_service.get_project(project_id)
    if not project:
        abort(404)

    if request.method == 'POST':
        form = ProjectForm()
        # The URL decides which project is written, not the hidden field
        form.id.data = project.id
    else:
        form = ProjectForm(data=project_to_form_data(project))
    form.set_client_choices(profile_service.list_clients())

    if request.method == 'POST':
        return _handle_editor_post(form, project)
    return _render_editor(form, project)

@dashboard_bp.route('/projects/<project_id>/delete', methods=['POST'])
def delete_project(project_id):
    form = DeleteForm()
    if not form.validate_on_submit():
        flash("Invalid delete request.", "danger")
        return redirect(url_for('dashboard.project_detail', project_id=project_id))

    try:
        project_service.delete_project(project_id)
    except project_service.ProjectNotFound:
        abort(404)
    except Exception:
        flash("Failed to delete project. Please try again.", "danger")
        return redirect(url_for('dashboard.project_detail', project_id=project_id))

    flash("Project deleted.", "success")
    return redirect(url_for('dashboard.projects'))

# --- Clients & users ---

@dashboard_bp.route('/clients')
def clients():
    return render_template('dashboard/clients.html', title="Clients", clients=profile_service.list_clients())

@dashboard_bp.route('/users')
def users():
    return render_template('dashboard/users.html',
                           title="Users",
                           users=profile_service.list_profiles(),
                           role_form=RoleForm())

@dashboard_bp.route('/users/<user_id>/role', methods=['POST'])
def update_user_role(user_id):
    form = RoleForm()
    if not form.validate_on_submit():
        flash("Invalid role.", "danger")
        return redirect(url_for('dashboard.users'))

    if user_id == current_user.id and form.role.data != Roles.ADMIN:
        flash("You cannot remove your own admin role.", "danger")
        return redirect(url_for('dashboard.users'))

    try:
        profile = profile_service.set_role(user_id, form.role.data, acting_profile=current_user)
        flash(f"{profile.display_name} is now {profile.role}.", "success")
    except profile_service.ProfileNotFound:
        abort(404)
    except profile_service.InvalidRole as e:
        flash(str(e), "danger")
    except Exception:
        flash("Failed to update role due to a server error.", "danger")
    return redirect(url_for('dashboard.users'))

@dashboard_bp.route('/settings', methods=['GET', 'POST'])
def settings():
    form = ProfileSettingsForm(obj=current_user)
    if form.validate_on_submit():
        try:
            profile_service.update_profile(current_user, form.data)
            flash("Settings saved.", "success")
            return redirect(url_for('dashboard.settings'))
        except Exception:
            flash("Failed to save settings. Please try again.", "danger")
    return render_template('dashboard/settings.html', title="Settings", form=form)
