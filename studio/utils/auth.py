# studio/utils/auth.py
import time
from functools import wraps

import jwt
from jwt import PyJWKClient
from flask import request, jsonify, current_app, g

from .. import db
from ..models import Profile

# Simple in-memory cache for JWKS
jwks_cache = {
    "keys": None,
    "expiry": 0
}

def get_jwks_client():
    """Fetches and caches the Supabase JWKS client."""
    global jwks_cache
    if jwks_cache["keys"] and jwks_cache["expiry"] > time.time():
        return jwks_cache["keys"]

    try:
        supabase_url = current_app.config.get('SUPABASE_URL')
        if not supabase_url:
            current_app.logger.error("SUPABASE_URL is not configured.")
            return None

        jwks_url = f"{supabase_url}/auth/v1/.well-known/jwks.json"
        jwks_client = PyJWKClient(jwks_url)
        jwks_cache["keys"] = jwks_client
        jwks_cache["expiry"] = time.time() + 3600 # Cache for 1 hour
        current_app.logger.info("Successfully fetched and cached JWKS from Supabase.")
        return jwks_client
    except Exception as e:
        current_app.logger.error(f"Failed to fetch JWKS: {e}", exc_info=True)
        return None

def decode_access_token(token):
    """
    Validates a Supabase access token and returns its payload.
    Projects with a shared JWT secret use HS256; otherwise the JWKS keys are used.
    Raises jwt.InvalidTokenError (or a subclass) on failure.
    """
    secret = current_app.config.get('SUPABASE_JWT_SECRET')
    if secret:
        return jwt.decode(token, secret, algorithms=["HS256"], audience="authenticated")

    jwks_client = get_jwks_client()
    if not jwks_client:
        raise LookupError("Authentication service is currently unavailable.")

    signing_key = jwks_client.get_signing_key_from_jwt(token)
    supabase_url = current_app.config.get('SUPABASE_URL')
    return jwt.decode(
        token,
        signing_key.key,
        algorithms=["RS256", "ES256"],
        audience="authenticated",
        issuer=f"{supabase_url}/auth/v1"
    )

def _get_or_create_profile_from_jwt(payload):
    """
    Finds the profile for the token's subject, creating it from the token
    claims the first time an API caller is seen.
    """
    user_id = payload.get("sub")
    if not user_id:
        return None

    profile = db.session.get(Profile, user_id)
    if profile:
        return profile

    from ..services.profile_service import sync_profile_from_auth_user
    try:
        return sync_profile_from_auth_user({
            "id": user_id,
            "email": payload.get("email"),
            "user_metadata": payload.get("user_metadata") or {},
        })
    except Exception as e:
        current_app.logger.error(f"DB error creating profile for sub {user_id}: {e}", exc_info=True)
        return None

def _validate_token_and_get_user():
    """Helper function to validate the bearer token and set g.user. Returns (success, error)."""
    token = None
    auth_header = request.headers.get("authorization")
    if auth_header and auth_header.startswith("Bearer "):
        token = auth_header.split(" ")[1]

    if not token:
        return False, ("Unauthorized", 401)

    try:
        payload = decode_access_token(token)
        profile = _get_or_create_profile_from_jwt(payload)
        if not profile:
            return False, ("Could not identify or create user profile.", 404)
        g.user = profile
        return True, None
    except jwt.ExpiredSignatureError:
        return False, ("Token has expired!", 401)
    except jwt.InvalidTokenError:
        return False, ("Invalid authentication token!", 401)
    except LookupError as e:
        return False, (str(e), 503)
    except Exception as e:
        current_app.logger.error(f"Internal server error during token validation: {e}", exc_info=True)
        return False, ("Internal server error during authentication.", 500)

def jwt_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        success, error = _validate_token_and_get_user()
        if not success:
            message, code = error
            return jsonify({"error": message}), code
        return f(*args, **kwargs)
    return decorated_function

def jwt_optional(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        g.user = None
        auth_header = request.headers.get("authorization")
        if auth_header:
            success, _ = _validate_token_and_get_user() # Attempt to validate, result sets g.user or not
            if not success:
                g.user = None
        return f(*args, **kwargs)
    return decorated_function

def role_required(*roles):
    def decorator(f):
        @wraps(f)
        @jwt_required
        def decorated_function(*args, **kwargs):
            if g.user.role not in roles:
                return jsonify({"error": "Insufficient permissions"}), 403
            return f(*args, **kwargs)
        return decorated_function
    return decorator
