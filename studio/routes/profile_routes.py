# studio/routes/profile_routes.py
# Client area. The access rules keep everyone but clients out of /profile.

from flask import Blueprint, render_template, redirect, url_for, flash
from flask_login import current_user

from ..forms import ProfileSettingsForm
from ..services.dashboard_service import get_client_data
from ..services.profile_service import update_profile
from ..services.project_service import get_client_projects

profile_bp = Blueprint('profile', __name__)

@profile_bp.route('/')
def index():
    return render_template('profile/index.html', title="My Profile", data=get_client_data(current_user.id))

@profile_bp.route('/projects')
def projects():
    return render_template('profile/projects.html', title="My Projects", projects=get_client_projects(current_user.id))

@profile_bp.route('/settings', methods=['GET', 'POST'])
def settings():
    form = ProfileSettingsForm(obj=current_user)
    if form.validate_on_submit():
        try:
            update_profile(current_user, form.data)
            flash("Your profile has been updated.", "success")
            return redirect(url_for('profile.settings'))
        except Exception:
            flash("Failed to update your profile. Please try again.", "danger")
    return render_template('profile/settings.html', title="Account Settings", form=form)
