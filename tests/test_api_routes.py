# tests/test_api_routes.py

from studio import db, mail
from studio.models import Project, Profile, ContactSubmission
from studio.utils.constants import Roles, ProjectStatus
from conftest import create_test_token, CLIENT_ID, OTHER_CLIENT_ID, USER_ID, ADMIN_ID

MISSING_ID = "3f1c2b4a-5d6e-4f70-8a91-b2c3d4e5f607"

# --- Authentication ---

def test_projects_require_a_token(test_client):
    response = test_client.get('/api/projects')
    assert response.status_code == 401
    assert response.get_json() == {"error": "Unauthorized"}

def test_expired_token_is_rejected(test_client, admin_profile):
    headers = create_test_token(ADMIN_ID, 'ada@creativestudio.com', expires_in=-60)
    response = test_client.get('/api/projects', headers=headers)
    assert response.status_code == 401
    assert response.get_json()["error"] == "Token has expired!"

def test_first_api_call_creates_profile_from_token(test_client, app):
    headers = create_test_token(USER_ID, 'uma@example.com', user_metadata={"full_name": "Uma User"})
    response = test_client.get('/api/projects', headers=headers)
    assert response.status_code == 200

    with app.app_context():
        profile = db.session.get(Profile, USER_ID)
        assert profile.role == Roles.USER
        assert profile.full_name == "Uma User"

# --- Listing ---

def test_list_projects_returns_page_and_pagination(test_client, admin_headers, sample_project):
    response = test_client.get('/api/projects?page=1&pageSize=5', headers=admin_headers)
    assert response.status_code == 200

    body = response.get_json()
    assert body["pagination"] == {"page": 1, "pageSize": 5, "total": 1, "totalPages": 1}
    project = body["data"][0]
    assert project["id"] == sample_project
    assert project["name"] == "Acme Rebrand"
    assert [p["name"] for p in project["phases"]] == ["Discovery", "Design"]
    assert project["phases"][0]["deliverables"][0]["name"] == "Brand brief"
    assert project["client_profile"]["company_name"] == "Acme"

def test_list_projects_filters_by_status_and_search(test_client, admin_headers, sample_project):
    response = test_client.get('/api/projects?status=Completed', headers=admin_headers)
    assert response.get_json()["pagination"]["total"] == 0

    response = test_client.get('/api/projects?search=identity&status=In%20Progress', headers=admin_headers)
    assert [p["id"] for p in response.get_json()["data"]] == [sample_project]

def test_client_only_lists_own_projects(test_client, sample_project, other_client_profile):
    headers = create_test_token(OTHER_CLIENT_ID, 'otto@globex.com')
    response = test_client.get('/api/projects', headers=headers)
    assert response.status_code == 200
    assert response.get_json()["data"] == []

# --- Create ---

def test_create_project_with_phases(test_client, admin_headers, client_profile, app):
    payload = {
        "name": "Podcast Branding",
        "client": "Acme",
        "clientId": CLIENT_ID,
        "status": ProjectStatus.NOT_STARTED,
        "startDate": "2025-05-01",
        "dueDate": "2025-07-01",
        "phases": [
            {"name": "Research", "status": ProjectStatus.COMPLETED,
             "deliverables": [{"name": "Audience report", "type": "Document"}]},
            {"name": "Artwork", "orderIndex": 1},
        ],
    }
    response = test_client.post('/api/projects', json=payload, headers=admin_headers)
    assert response.status_code == 201

    body = response.get_json()
    assert body["name"] == "Podcast Branding"
    assert body["client_id"] == CLIENT_ID
    assert body["start_date"] == "2025-05-01"
    assert body["progress"] == 50
    assert [p["name"] for p in body["phases"]] == ["Research", "Artwork"]

    with app.app_context():
        assert Project.query.count() == 1

def test_create_project_without_name_is_400(test_client, admin_headers):
    response = test_client.post('/api/projects', json={"client": "Acme"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.get_json()["message"] == "Name is required"

def test_create_project_no_client_placeholder_is_cleared(test_client, admin_headers):
    response = test_client.post('/api/projects', json={"name": "Internal", "clientId": "no_client"},
                                headers=admin_headers)
    assert response.status_code == 201
    assert response.get_json()["client_id"] is None

def test_non_admin_cannot_create(test_client, client_headers):
    response = test_client.post('/api/projects', json={"name": "Sneaky"}, headers=client_headers)
    assert response.status_code == 403
    assert response.get_json() == {"error": "Insufficient permissions"}

# --- Read one ---

def test_owner_can_read_project(test_client, client_headers, sample_project):
    response = test_client.get(f'/api/projects/{sample_project}', headers=client_headers)
    assert response.status_code == 200
    assert response.get_json()["id"] == sample_project

def test_other_client_gets_404_for_private_project(test_client, sample_project, other_client_profile):
    headers = create_test_token(OTHER_CLIENT_ID, 'otto@globex.com')
    response = test_client.get(f'/api/projects/{sample_project}', headers=headers)
    assert response.status_code == 404

def test_public_project_is_readable_by_anyone_signed_in(test_client, app, sample_project, other_client_profile):
    with app.app_context():
        db.session.get(Project, sample_project).is_public = True
        db.session.commit()

    headers = create_test_token(OTHER_CLIENT_ID, 'otto@globex.com')
    response = test_client.get(f'/api/projects/{sample_project}', headers=headers)
    assert response.status_code == 200

def test_missing_project_is_404(test_client, admin_headers):
    response = test_client.get(f'/api/projects/{MISSING_ID}', headers=admin_headers)
    assert response.status_code == 404

# --- Update & delete ---

def test_patch_updates_only_given_fields(test_client, admin_headers, sample_project):
    response = test_client.patch(f'/api/projects/{sample_project}', json={"status": ProjectStatus.ON_HOLD},
                                 headers=admin_headers)
    assert response.status_code == 200

    body = response.get_json()
    assert body["status"] == ProjectStatus.ON_HOLD
    assert body["name"] == "Acme Rebrand"
    assert len(body["phases"]) == 2

def test_patch_missing_project_is_404(test_client, admin_headers):
    response = test_client.patch(f'/api/projects/{MISSING_ID}', json={"status": "Completed"}, headers=admin_headers)
    assert response.status_code == 404

def test_patch_rejects_progress_out_of_range(test_client, admin_headers, sample_project, app):
    response = test_client.patch(f'/api/projects/{sample_project}', json={"progress": 150}, headers=admin_headers)
    assert response.status_code == 422

    with app.app_context():
        assert db.session.get(Project, sample_project).progress <= 100

def test_patch_rejects_unknown_status(test_client, admin_headers, sample_project, app):
    response = test_client.patch(f'/api/projects/{sample_project}', json={"status": "Bogus"}, headers=admin_headers)
    assert response.status_code == 422

    with app.app_context():
        assert db.session.get(Project, sample_project).status == ProjectStatus.IN_PROGRESS

def test_create_rejects_unknown_phase_status_and_deliverable_type(test_client, admin_headers, app):
    response = test_client.post('/api/projects', json={"name": "X", "phases": [{"name": "P", "status": "Nope"}]},
                                headers=admin_headers)
    assert response.status_code == 422

    response = test_client.post('/api/projects', json={
        "name": "X",
        "phases": [{"name": "P", "deliverables": [{"name": "D", "type": "Sculpture"}]}],
    }, headers=admin_headers)
    assert response.status_code == 422

    with app.app_context():
        assert Project.query.count() == 0

def test_patch_rejects_null_or_blank_name(test_client, admin_headers, sample_project, app):
    for name in (None, "", "   "):
        response = test_client.patch(f'/api/projects/{sample_project}', json={"name": name}, headers=admin_headers)
        assert response.status_code == 400
        assert response.get_json()["message"] == "Name is required"

    with app.app_context():
        assert db.session.get(Project, sample_project).name == "Acme Rebrand"

def test_delete_project(test_client, admin_headers, sample_project, app):
    response = test_client.delete(f'/api/projects/{sample_project}', headers=admin_headers)
    assert response.status_code == 200
    assert response.get_json() == {"success": True, "id": sample_project}

    with app.app_context():
        assert db.session.get(Project, sample_project) is None

def test_delete_missing_project_is_404(test_client, admin_headers):
    response = test_client.delete(f'/api/projects/{MISSING_ID}', headers=admin_headers)
    assert response.status_code == 404

# --- Roles & clients ---

def test_admin_assigns_role(test_client, admin_headers, user_profile, app):
    response = test_client.patch(f'/api/users/{USER_ID}/role', json={"role": Roles.CLIENT}, headers=admin_headers)
    assert response.status_code == 200
    assert response.get_json()["role"] == Roles.CLIENT

    with app.app_context():
        assert db.session.get(Profile, USER_ID).role == Roles.CLIENT

def test_invalid_role_is_400(test_client, admin_headers, user_profile):
    response = test_client.patch(f'/api/users/{USER_ID}/role', json={"role": "owner"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.get_json()["message"] == "Invalid role"

def test_role_for_unknown_user_is_404(test_client, admin_headers):
    response = test_client.patch(f'/api/users/{MISSING_ID}/role', json={"role": Roles.CLIENT}, headers=admin_headers)
    assert response.status_code == 404
    assert response.get_json()["message"] == "User not found"

def test_admin_cannot_demote_self(test_client, admin_headers):
    response = test_client.patch(f'/api/users/{ADMIN_ID}/role', json={"role": Roles.USER}, headers=admin_headers)
    assert response.status_code == 400

def test_list_clients(test_client, admin_headers, client_profile, user_profile):
    response = test_client.get('/api/clients', headers=admin_headers)
    assert response.status_code == 200
    assert [c["id"] for c in response.get_json()] == [CLIENT_ID]

# --- Contact & metrics ---

def test_contact_api_stores_enquiry_and_notifies_studio(test_client, app):
    payload = {
        "fullName": "Rita Reader",
        "email": "rita@example.org",
        "companyName": "Reader Co",
        "projectType": "web",
        "budget": "10k-25k",
        "projectDescription": "A new website for our bookshop.",
    }
    with mail.record_messages() as outbox:
        response = test_client.post('/api/contact', json=payload)

    assert response.status_code == 200
    body = response.get_json()
    assert body["success"] is True

    assert len(outbox) == 1
    assert outbox[0].recipients == ['hello@creativestudio.com']
    assert "Rita Reader" in outbox[0].subject

    with app.app_context():
        submission = db.session.get(ContactSubmission, int(body["id"]))
        assert submission.company_name == "Reader Co"
        assert submission.profile_id is None

def test_contact_api_links_signed_in_sender(test_client, client_headers, app):
    payload = {"fullName": "Cleo", "email": "cleo@acme.com", "projectType": "branding",
               "projectDescription": "Follow-up work."}
    response = test_client.post('/api/contact', json=payload, headers=client_headers)
    assert response.status_code == 200

    with app.app_context():
        assert ContactSubmission.query.one().profile_id == CLIENT_ID

def test_contact_api_validates_payload(test_client):
    response = test_client.post('/api/contact', json={"fullName": "No Email"})
    assert response.status_code == 422

def test_metrics_endpoint(test_client):
    response = test_client.get('/api/metrics')
    assert response.status_code == 200
    assert b'studio_' in response.data
