# studio/utils/validators.py

import re
from urllib.parse import urlparse

# UUID versions 1-5 in canonical form, as generated by Postgres and uuid.uuid4()
UUID_PATTERN = re.compile(r'^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$', re.IGNORECASE)


def is_valid_uuid(value):
    return bool(value) and isinstance(value, str) and bool(UUID_PATTERN.match(value))


def is_safe_redirect_path(target):
    """Only same-site absolute paths are allowed as post-login destinations."""
    if not target or not target.startswith('/') or target.startswith('//') or '\\' in target:
        return False
    parsed = urlparse(target)
    return not parsed.scheme and not parsed.netloc
