# studio/extensions.py

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# SQLAlchemy extension (tables live in the Supabase Postgres database)
db = SQLAlchemy()

# Migrate extension (for DB migrations)
migrate = Migrate()

# Limiter extension (rate limiting); per-route limits come from config
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["500 per day", "100 per hour"]
)
