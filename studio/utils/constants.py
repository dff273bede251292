# studio/utils/constants.py

class Roles:
    """
    Defines the role names stored on each profile.
    Keeping them in one place avoids typos in the access rules and forms.
    """
    ADMIN = 'admin'
    CLIENT = 'client'
    USER = 'user'

    ALL = (ADMIN, CLIENT, USER)


class ProjectStatus:
    NOT_STARTED = 'Not Started'
    IN_PROGRESS = 'In Progress'
    COMPLETED = 'Completed'
    ON_HOLD = 'On Hold'

    ALL = (NOT_STARTED, IN_PROGRESS, COMPLETED, ON_HOLD)


# Phases share the project lifecycle
PhaseStatus = ProjectStatus


class DeliverableType:
    DOCUMENT = 'Document'
    DESIGN = 'Design'
    CODE = 'Code'
    OTHER = 'Other'

    ALL = (DOCUMENT, DESIGN, CODE, OTHER)


# Home page of each role; also the area of the portal that role owns
ROLE_HOME = {
    Roles.ADMIN: '/dashboard',
    Roles.CLIENT: '/profile',
    Roles.USER: '/user-contact-page',
}

NEW_PROJECT_DUE_DAYS = 30
DASHBOARD_RECENT_LIMIT = 3

PROJECT_TYPE_CHOICES = [
    ('web', 'Website'),
    ('app', 'Mobile App'),
    ('graphic', 'Graphic Design'),
    ('ui/ux', 'UI/UX Design'),
    ('branding', 'Branding'),
    ('other', 'Other'),
]

BUDGET_CHOICES = [
    ('', 'Select budget range'),
    ('<5k', 'Less than $5,000'),
    ('5k-10k', '$5,000 - $10,000'),
    ('10k-25k', '$10,000 - $25,000'),
    ('25k-50k', '$25,000 - $50,000'),
    ('>50k', 'More than $50,000'),
]

TIMELINE_CHOICES = [
    ('', 'Select timeline'),
    ('urgent', 'Less than 1 month'),
    ('1-3months', '1-3 months'),
    ('3-6months', '3-6 months'),
    ('flexible', 'Flexible'),
]
