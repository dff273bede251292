# tests/test_project_service.py

import datetime

import pytest
from freezegun import freeze_time

from studio import db
from studio.models import Project, ProjectPhase, Deliverable
from studio.services import project_service
from studio.services.project_service import (
    ProjectNotFound, ProjectSaveError, calculate_project_progress, save_project,
    new_project_template, new_phase_template, new_deliverable_template,
)
from studio.utils.constants import ProjectStatus, DeliverableType
from conftest import CLIENT_ID

def _phases(*statuses):
    return [{"name": f"Phase {i}", "status": s, "deliverables": []} for i, s in enumerate(statuses)]

# --- Progress ---

def test_progress_with_no_phases_is_zero():
    assert calculate_project_progress([]) == 0
    assert calculate_project_progress(None) == 0

def test_progress_rounds_share_of_completed_phases():
    phases = _phases(ProjectStatus.COMPLETED, ProjectStatus.IN_PROGRESS, ProjectStatus.NOT_STARTED)
    assert calculate_project_progress(phases) == 33

    phases = _phases(ProjectStatus.COMPLETED, ProjectStatus.COMPLETED, ProjectStatus.ON_HOLD)
    assert calculate_project_progress(phases) == 67

def test_progress_all_completed():
    assert calculate_project_progress(_phases(ProjectStatus.COMPLETED, ProjectStatus.COMPLETED)) == 100

# --- Templates for the editor ---

@freeze_time("2025-02-10")
def test_new_project_template_defaults():
    template = new_project_template()
    assert template["status"] == ProjectStatus.NOT_STARTED
    assert template["progress"] == 0
    assert template["start_date"] == datetime.date(2025, 2, 10)
    assert template["due_date"] == datetime.date(2025, 3, 12)
    assert template["phases"] == []

def test_new_phase_and_deliverable_templates():
    phase = new_phase_template('project-1', 3)
    assert phase["order_index"] == 3
    assert phase["project_id"] == 'project-1'
    assert phase["status"] == ProjectStatus.NOT_STARTED

    deliverable = new_deliverable_template('phase-1')
    assert deliverable["phase_id"] == 'phase-1'
    assert deliverable["type"] == DeliverableType.DOCUMENT

# --- Nested save ---

def test_save_creates_project_with_ordered_phases_and_deliverables(app_ctx, client_profile):
    project = save_project({
        "id": "",
        "name": "Launch Site",
        "client": "Acme",
        "client_id": CLIENT_ID,
        "status": ProjectStatus.IN_PROGRESS,
        "startDate": "2025-04-01",
        "dueDate": "2025-06-30",
        "progress": None,
        "phases": [
            {"name": "Discovery", "status": ProjectStatus.COMPLETED,
             "deliverables": [{"name": "Sitemap", "type": DeliverableType.DOCUMENT}]},
            {"name": "Build", "status": ProjectStatus.IN_PROGRESS, "deliverables": []},
        ],
    })

    assert project.id
    assert project.start_date == datetime.date(2025, 4, 1)
    assert project.due_date == datetime.date(2025, 6, 30)
    assert project.progress == 50
    assert [p.name for p in project.phases] == ["Discovery", "Build"]
    assert [p.order_index for p in project.phases] == [0, 1]
    assert project.phases[0].deliverables[0].name == "Sitemap"
    assert project.client_profile.id == CLIENT_ID

def test_save_with_existing_id_replaces_all_phases(app_ctx, sample_project):
    saved = save_project({
        "id": sample_project,
        "name": "Acme Rebrand v2",
        "client": "Acme",
        "status": ProjectStatus.IN_PROGRESS,
        "progress": 10,
        "phases": [{"name": "Strategy", "status": ProjectStatus.NOT_STARTED,
                    "deliverables": [{"name": "Deck", "type": DeliverableType.DESIGN}]}],
    })

    assert saved.id == sample_project
    assert saved.name == "Acme Rebrand v2"
    assert saved.progress == 10
    assert [p.name for p in saved.phases] == ["Strategy"]
    # Old phases and their deliverables are gone
    assert ProjectPhase.query.count() == 1
    assert Deliverable.query.count() == 1
    assert Deliverable.query.first().name == "Deck"

def test_save_with_unknown_uuid_creates_new_project(app_ctx, sample_project):
    missing_id = "3f1c2b4a-5d6e-4f70-8a91-b2c3d4e5f607"
    saved = save_project({"id": missing_id, "name": "Fresh Project", "phases": []})
    assert saved.id != sample_project
    assert Project.query.count() == 2

def test_save_without_uuid_updates_latest_project_with_same_name_and_client(app_ctx, sample_project):
    saved = save_project({"id": "temp-123", "name": "Acme Rebrand", "client": "Acme",
                          "status": ProjectStatus.COMPLETED, "phases": []})
    assert saved.id == sample_project
    assert saved.status == ProjectStatus.COMPLETED
    assert Project.query.count() == 1
    assert ProjectPhase.query.count() == 0

def test_save_without_name_fails_and_writes_nothing(app_ctx):
    with pytest.raises(ProjectSaveError, match="Project name is required"):
        save_project({"id": "", "name": "", "phases": []})
    assert Project.query.count() == 0

def test_failed_save_rolls_back_the_whole_project(app_ctx, sample_project):
    # A phase without a name violates NOT NULL part-way through the save
    with pytest.raises(ProjectSaveError, match="Failed to save project"):
        save_project({
            "id": sample_project,
            "name": "Renamed",
            "client": "Acme",
            "phases": [{"name": "Good"}, {"name": None}],
        })

    db.session.expire_all()
    project = db.session.get(Project, sample_project)
    assert project.name == "Acme Rebrand"
    assert [p.name for p in project.phases] == ["Discovery", "Design"]
    assert len(project.phases[0].deliverables) == 1

def test_progress_is_clamped(app_ctx):
    saved = save_project({"name": "Over", "progress": 140, "phases": []})
    assert saved.progress == 100

# --- Partial update & delete ---

def test_update_project_fields_sets_scalars(app_ctx, sample_project):
    updated = project_service.update_project_fields(sample_project, {"status": ProjectStatus.ON_HOLD,
                                                                      "due_date": "2025-05-01",
                                                                      "not_a_column": "ignored"})
    assert updated.status == ProjectStatus.ON_HOLD
    assert updated.due_date == datetime.date(2025, 5, 1)
    assert len(updated.phases) == 2

def test_update_project_fields_clamps_progress(app_ctx, sample_project):
    assert project_service.update_project_fields(sample_project, {"progress": 150}).progress == 100
    assert project_service.update_project_fields(sample_project, {"progress": -5}).progress == 0
    # No value means progress follows the phases again
    assert project_service.update_project_fields(sample_project, {"progress": None}).progress == 50

def test_update_project_fields_defaults_null_status(app_ctx, sample_project):
    updated = project_service.update_project_fields(sample_project, {"status": None})
    assert updated.status == ProjectStatus.NOT_STARTED

def test_update_project_fields_with_phases_runs_nested_save(app_ctx, sample_project):
    updated = project_service.update_project_fields(sample_project, {"phases": [{"name": "Only"}]})
    assert [p.name for p in updated.phases] == ["Only"]
    assert updated.name == "Acme Rebrand"

def test_update_missing_project_raises(app_ctx):
    with pytest.raises(ProjectNotFound):
        project_service.update_project_fields("3f1c2b4a-5d6e-4f70-8a91-b2c3d4e5f607", {"status": "Completed"})

def test_delete_project_cascades_to_phases_and_deliverables(app_ctx, sample_project):
    assert project_service.delete_project(sample_project) == sample_project
    assert Project.query.count() == 0
    assert ProjectPhase.query.count() == 0
    assert Deliverable.query.count() == 0

def test_delete_by_name_when_id_is_not_a_uuid(app_ctx, sample_project):
    assert project_service.delete_project("Acme Rebrand") == sample_project
    assert Project.query.count() == 0

def test_delete_unknown_project_raises(app_ctx):
    with pytest.raises(ProjectNotFound):
        project_service.delete_project("3f1c2b4a-5d6e-4f70-8a91-b2c3d4e5f607")

# --- Listing ---

def test_list_projects_search_status_and_pagination(app_ctx, sample_project):
    save_project({"name": "Mobile App", "description": "fitness tracker", "status": ProjectStatus.NOT_STARTED, "phases": []})
    save_project({"name": "Poster Series", "status": ProjectStatus.COMPLETED, "phases": []})

    items, total = project_service.list_projects(search="FITNESS")
    assert total == 1 and items[0].name == "Mobile App"

    items, total = project_service.list_projects(statuses=[ProjectStatus.COMPLETED, ProjectStatus.IN_PROGRESS])
    assert {p.name for p in items} == {"Poster Series", "Acme Rebrand"}

    items, total = project_service.list_projects(page=2, page_size=2)
    assert total == 3
    assert len(items) == 1

def test_non_admin_viewer_sees_own_and_public_projects(app_ctx, sample_project, other_client_profile):
    from studio.models import Profile
    save_project({"name": "Public Showcase", "is_public": True, "phases": []})
    save_project({"name": "Someone Else's", "client_id": "7e2f3a4b-8c9d-4e0f-a112-3b4c5d6e7f82", "phases": []})

    viewer = db.session.get(Profile, CLIENT_ID)
    items, total = project_service.list_projects(viewer=viewer)
    assert {p.name for p in items} == {"Acme Rebrand", "Public Showcase"}
    assert total == 2

def test_get_client_projects_only_returns_own(app_ctx, sample_project, other_client_profile):
    save_project({"name": "Globex Site", "client_id": "7e2f3a4b-8c9d-4e0f-a112-3b4c5d6e7f82", "phases": []})
    projects = project_service.get_client_projects(CLIENT_ID)
    assert [p.id for p in projects] == [sample_project]
