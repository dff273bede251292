# studio/metrics.py

from prometheus_client import Counter, Histogram

# Define Prometheus metrics

# Hosted auth provider calls
AUTH_REQUESTS_TOTAL = Counter('studio_auth_requests_total', 'Total calls to the Supabase Auth API', ['operation', 'status'])
AUTH_REQUEST_DURATION_SECONDS = Histogram('studio_auth_request_duration_seconds', 'Supabase Auth API call duration in seconds', ['operation'])

# Portal activity
PROJECT_SAVES_TOTAL = Counter('studio_project_saves_total', 'Nested project saves', ['result'])
PROJECT_DELETES_TOTAL = Counter('studio_project_deletes_total', 'Project deletions')
CONTACT_SUBMISSIONS_TOTAL = Counter('studio_contact_submissions_total', 'Contact form submissions', ['source'])
