# tests/conftest.py

import time
import datetime

import jwt
from unittest.mock import patch, MagicMock
import pytest

from studio import create_app, db as _db
from studio.models import Profile, Project, ProjectPhase, Deliverable
from studio.utils.constants import Roles, ProjectStatus, DeliverableType

# Same value as TestingConfig.SUPABASE_JWT_SECRET, so tokens signed here validate with HS256
TEST_SECRET_KEY = "your-super-secret-and-long-enough-test-key-for-hs256"

ADMIN_ID = "0b7f3c1e-4d2a-4c6b-9f10-1a2b3c4d5e60"
CLIENT_ID = "5d1e2f3a-6b7c-4d8e-9f01-2a3b4c5d6e71"
OTHER_CLIENT_ID = "7e2f3a4b-8c9d-4e0f-a112-3b4c5d6e7f82"
USER_ID = "9f3a4b5c-0d1e-4f2a-b223-4c5d6e7f8093"

@pytest.fixture(scope='session')
def app():
    """Session-wide application for testing."""
    return create_app('testing')

@pytest.fixture(scope='function')
def db(app):
    """
    Function-level database setup. Tables are created and dropped around each test.
    The app context is not kept pushed, so every test request gets a fresh `g`.
    """
    with app.app_context():
        _db.create_all()

    yield _db

    with app.app_context():
        _db.session.remove()
        _db.drop_all()

@pytest.fixture(scope='function')
def test_client(app, db):
    """A test client for the app, ensuring the DB is initialized."""
    return app.test_client()

@pytest.fixture(scope='function')
def app_ctx(app, db):
    """Pushes an app context for tests that call services directly."""
    with app.app_context():
        yield

def _add_profile(app, profile_id, email, role, full_name, company_name=None):
    with app.app_context():
        _db.session.add(Profile(id=profile_id, email=email, role=role, full_name=full_name, company_name=company_name))
        _db.session.commit()
    return profile_id

@pytest.fixture(scope='function')
def admin_profile(app, db):
    return _add_profile(app, ADMIN_ID, 'ada@creativestudio.com', Roles.ADMIN, 'Ada Admin')

@pytest.fixture(scope='function')
def client_profile(app, db):
    return _add_profile(app, CLIENT_ID, 'cleo@acme.com', Roles.CLIENT, 'Cleo Client', company_name='Acme')

@pytest.fixture(scope='function')
def other_client_profile(app, db):
    return _add_profile(app, OTHER_CLIENT_ID, 'otto@globex.com', Roles.CLIENT, 'Otto Other', company_name='Globex')

@pytest.fixture(scope='function')
def user_profile(app, db):
    return _add_profile(app, USER_ID, 'uma@example.com', Roles.USER, 'Uma User')

def login_as(client, profile_id):
    """Marks the test client's session as signed in through Flask-Login."""
    with client.session_transaction() as sess:
        sess['_user_id'] = profile_id
        sess['_fresh'] = True

def create_test_token(user_id, email, expires_in=3600, user_metadata=None):
    """Helper to create a Supabase-style access token using HS256."""
    payload = {
        'sub': user_id,
        'role': 'authenticated',
        'email': email,
        'aud': 'authenticated',
        'exp': int(time.time()) + expires_in,
        'iat': int(time.time()),
        'user_metadata': user_metadata or {},
    }
    token = jwt.encode(payload, TEST_SECRET_KEY, algorithm="HS256")
    return {'Authorization': f'Bearer {token}'}

@pytest.fixture(scope='function')
def admin_headers(admin_profile):
    return create_test_token(ADMIN_ID, 'ada@creativestudio.com')

@pytest.fixture(scope='function')
def client_headers(client_profile):
    return create_test_token(CLIENT_ID, 'cleo@acme.com')

@pytest.fixture(scope='function')
def sample_project(app, db, client_profile):
    """A private project owned by the client, with two phases and one deliverable. Returns its id."""
    with app.app_context():
        project = Project(
            name='Acme Rebrand',
            description='New identity and website',
            client='Acme',
            client_id=CLIENT_ID,
            type='branding',
            status=ProjectStatus.IN_PROGRESS,
            start_date=datetime.date(2025, 1, 6),
            due_date=datetime.date(2025, 3, 31),
            progress=50,
        )
        discovery = ProjectPhase(name='Discovery', status=ProjectStatus.COMPLETED, order_index=0)
        discovery.deliverables.append(Deliverable(name='Brand brief', type=DeliverableType.DOCUMENT,
                                                  url='https://example.com/brief.pdf'))
        project.phases.append(discovery)
        project.phases.append(ProjectPhase(name='Design', status=ProjectStatus.IN_PROGRESS, order_index=1))
        _db.session.add(project)
        _db.session.commit()
        return project.id

@pytest.fixture(scope='function')
def mock_auth_client():
    """Replaces the Supabase Auth adapter used by the auth pages."""
    client = MagicMock()
    client.authorize_url.return_value = 'https://studio-test.supabase.co/auth/v1/authorize?provider=google'
    with patch('studio.routes.auth_routes.get_auth_client', return_value=client):
        yield client
