# studio/routes/auth_routes.py

from urllib.parse import urlencode

from flask import Blueprint, render_template, redirect, url_for, flash, request, current_app, session, abort
from flask_login import login_user, logout_user, login_required, current_user

from .. import limiter
from ..forms import SignupForm, LoginForm, ForgotPasswordForm, ResetPasswordForm, ResendVerificationForm
from ..services.supabase_auth import AuthProviderError, generate_pkce_pair, get_auth_client
from ..services.profile_service import sync_profile_from_auth_user
from ..utils.access import home_for_role, LOGIN_PATH
from ..utils.validators import is_safe_redirect_path

auth_bp = Blueprint('auth', __name__)

# Session keys
ACCESS_TOKEN_KEY = 'sb_access_token'
REFRESH_TOKEN_KEY = 'sb_refresh_token'
PKCE_VERIFIER_KEY = 'sb_pkce_verifier'
PENDING_EMAIL_KEY = 'pending_verification_email'

EXPIRED_LINK_MESSAGE = "Email verification link has expired. Please request a new one."

def _auth_rate_limit():
    return current_app.config['AUTH_RATE_LIMIT']

def _login_redirect(**params):
    return redirect(f"{LOGIN_PATH}?{urlencode(params)}")

def _start_pkce():
    """Keeps a fresh PKCE verifier in the session and returns the matching challenge."""
    verifier, challenge = generate_pkce_pair()
    session[PKCE_VERIFIER_KEY] = verifier
    return challenge

def _callback_url(next_path=None):
    if next_path:
        return url_for('auth.callback', next=next_path, _external=True)
    return url_for('auth.callback', _external=True)

def _establish_session(auth_response):
    """
    Signs the Supabase user into this app: their profile is created or refreshed,
    Flask-Login remembers them and the provider tokens are kept for later calls.
    """
    profile = sync_profile_from_auth_user(auth_response['user'])
    login_user(profile, remember=True)
    session[ACCESS_TOKEN_KEY] = auth_response.get('access_token')
    session[REFRESH_TOKEN_KEY] = auth_response.get('refresh_token')
    current_app.logger.info(f"User {profile.email} signed in with role '{profile.role}'")
    return profile

def _clear_auth_session():
    for key in (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, PKCE_VERIFIER_KEY):
        session.pop(key, None)

def _update_user_with_refresh(attributes):
    """
    Updates the signed-in provider user. An expired access token is swapped
    once for a new one using the stored refresh token.
    """
    client = get_auth_client()
    try:
        return client.update_user(session.get(ACCESS_TOKEN_KEY), attributes)
    except AuthProviderError as e:
        refresh_token = session.get(REFRESH_TOKEN_KEY)
        if e.status_code != 401 or not refresh_token:
            raise
        current_app.logger.info("Access token rejected, refreshing the provider session")
        refreshed = client.refresh_session(refresh_token)
        session[ACCESS_TOKEN_KEY] = refreshed.get('access_token')
        session[REFRESH_TOKEN_KEY] = refreshed.get('refresh_token') or refresh_token
        return client.update_user(session[ACCESS_TOKEN_KEY], attributes)

def _destination_for(profile, requested=None):
    if requested and is_safe_redirect_path(requested):
        return requested
    return home_for_role(profile.role)

# --- Sign in / sign up ---

@auth_bp.route('/login', methods=['GET', 'POST'])
@limiter.limit(_auth_rate_limit, methods=['POST'])
def login():
    redirected_from = request.args.get('redirectedFrom')
    if current_user.is_authenticated:
        return redirect(_destination_for(current_user, redirected_from))

    form = LoginForm()
    if form.validate_on_submit():
        email = form.email.data.strip().lower()
        try:
            auth_response = get_auth_client().sign_in_with_password(email, form.password.data)
            profile = _establish_session(auth_response)
            return redirect(_destination_for(profile, redirected_from))
        except AuthProviderError as e:
            if e.is_email_not_confirmed:
                session[PENDING_EMAIL_KEY] = email
                flash("Please verify your email before logging in.", "warning")
                return redirect(url_for('auth.verify_email'))
            current_app.logger.warning(f"Failed sign-in for {email}: {e.message}")
            flash(e.message, "danger")
        except Exception as e:
            current_app.logger.error(f"Unexpected error signing in {email}: {e}", exc_info=True)
            flash("An unexpected error occurred. Please try again.", "danger")

    return render_template('auth/login.html',
                           title='Log In',
                           form=form,
                           error=request.args.get('error'),
                           error_description=request.args.get('error_description'),
                           message=request.args.get('message'),
                           redirected_from=redirected_from,
                           oauth_providers=current_app.config.get('OAUTH_PROVIDERS', []))

@auth_bp.route('/signup', methods=['GET', 'POST'])
@limiter.limit(_auth_rate_limit, methods=['POST'])
def signup():
    if current_user.is_authenticated:
        return redirect(home_for_role(current_user.role))

    form = SignupForm()
    if form.validate_on_submit():
        email = form.email.data.strip().lower()
        try:
            auth_response = get_auth_client().sign_up(
                email,
                form.password.data,
                full_name=form.full_name.data.strip(),
                redirect_to=_callback_url(),
                code_challenge=_start_pkce(),
            )
        except AuthProviderError as e:
            current_app.logger.warning(f"Sign-up rejected for {email}: {e.message}")
            flash(e.message, "danger")
            return render_template('auth/signup.html', title='Sign Up', form=form)

        # With email confirmation off the provider signs the user in straight away
        if auth_response.get('access_token') and auth_response.get('user'):
            profile = _establish_session(auth_response)
            flash("Your account has been created.", "success")
            return redirect(home_for_role(profile.role))

        auth_user = auth_response.get('user') or auth_response
        if auth_user.get('id'):
            try:
                sync_profile_from_auth_user(auth_user)
            except Exception:
                # The callback creates the profile on first sign-in anyway
                current_app.logger.warning(f"Could not create profile at sign-up for {email}; it will be created on first sign-in.")

        session[PENDING_EMAIL_KEY] = email
        current_app.logger.info(f"New sign-up pending email verification: {email}")
        flash("Account created! Please check your email to verify your account.", "success")
        return redirect(url_for('auth.verify_email'))

    return render_template('auth/signup.html', title='Sign Up', form=form)

@auth_bp.route('/logout')
def logout():
    access_token = session.get(ACCESS_TOKEN_KEY)
    if access_token:
        try:
            get_auth_client().sign_out(access_token)
        except AuthProviderError as e:
            current_app.logger.warning(f"Provider sign-out failed, clearing local session anyway: {e.message}")

    if current_user.is_authenticated:
        current_app.logger.info(f"User {current_user.email} signed out")
    logout_user()
    _clear_auth_session()
    flash("You have been logged out.", "info")
    return redirect(url_for('main.index'))

# --- OAuth ---

@auth_bp.route('/auth/oauth/<provider>')
@limiter.limit(_auth_rate_limit)
def oauth(provider):
    if provider not in current_app.config.get('OAUTH_PROVIDERS', []):
        abort(404)

    next_path = request.args.get('redirectedFrom')
    if not is_safe_redirect_path(next_path):
        next_path = None

    try:
        client = get_auth_client()
    except AuthProviderError as e:
        return _login_redirect(error=e.message)

    current_app.logger.info(f"Starting {provider} OAuth sign-in")
    return redirect(client.authorize_url(provider, _callback_url(next_path), _start_pkce()))

@auth_bp.route('/api/auth/callback')
def callback():
    """Landing point for OAuth, email confirmation and password recovery links."""
    error = request.args.get('error')
    if error:
        error_description = request.args.get('error_description', '')
        current_app.logger.error(f"Auth error: {error} {error_description}")
        if request.args.get('error_code') == 'otp_expired':
            return redirect(url_for('auth.expired', **request.args))
        return _login_redirect(error=error, error_description=error_description)

    code = request.args.get('code')
    if not code:
        return _login_redirect(error='no_code_provided')

    verifier = session.pop(PKCE_VERIFIER_KEY, None)
    try:
        auth_response = get_auth_client().exchange_code_for_session(code, verifier)
    except AuthProviderError as e:
        current_app.logger.error(f"Error exchanging code for session: {e.message}")
        return _login_redirect(error=e.message)

    auth_user = auth_response.get('user')
    if not auth_user:
        current_app.logger.error("No user data returned from session exchange")
        return _login_redirect(error='no_user_data')
    if not auth_user.get('email'):
        current_app.logger.error("No email found in user data")
        return _login_redirect(error='no_email_found')

    try:
        profile = _establish_session(auth_response)
    except Exception as e:
        current_app.logger.error(f"Exception in auth callback: {e}", exc_info=True)
        return _login_redirect(error='server_error')

    return redirect(_destination_for(profile, request.args.get('next')))

@auth_bp.route('/api/auth/expired')
def expired():
    if request.args.get('error_code') == 'otp_expired':
        message = EXPIRED_LINK_MESSAGE
    else:
        message = request.args.get('error_description') or request.args.get('error') or "Authentication error"
    return _login_redirect(error=message)

# --- Password recovery ---

@auth_bp.route('/forgot-password', methods=['GET', 'POST'])
@limiter.limit(_auth_rate_limit, methods=['POST'])
def forgot_password():
    form = ForgotPasswordForm()
    if form.validate_on_submit():
        email = form.email.data.strip().lower()
        try:
            get_auth_client().reset_password_for_email(
                email,
                redirect_to=_callback_url(url_for('auth.reset_password')),
                code_challenge=_start_pkce(),
            )
            current_app.logger.info(f"Password reset requested for {email}")
            flash("Check your email for a password reset link.", "success")
            return redirect(url_for('auth.forgot_password'))
        except AuthProviderError as e:
            flash(e.message, "danger")

    return render_template('auth/forgot_password.html', title='Forgot Password', form=form)

@auth_bp.route('/reset-password', methods=['GET', 'POST'])
@login_required
def reset_password():
    form = ResetPasswordForm()
    if form.validate_on_submit():
        if not session.get(ACCESS_TOKEN_KEY) and not session.get(REFRESH_TOKEN_KEY):
            flash("Your reset session has expired. Please request a new link.", "danger")
            return redirect(url_for('auth.forgot_password'))
        try:
            _update_user_with_refresh({"password": form.password.data})
        except AuthProviderError as e:
            flash(e.message, "danger")
            return render_template('auth/reset_password.html', title='Reset Password', form=form)

        current_app.logger.info(f"Password updated for {current_user.email}")
        logout_user()
        _clear_auth_session()
        return _login_redirect(message="Password updated successfully. Please log in with your new password.")

    return render_template('auth/reset_password.html', title='Reset Password', form=form)

# --- Email verification ---

@auth_bp.route('/verify-email', methods=['GET', 'POST'])
@limiter.limit(_auth_rate_limit, methods=['POST'])
def verify_email():
    pending_email = session.get(PENDING_EMAIL_KEY) or request.args.get('email', '')
    form = ResendVerificationForm(email=pending_email)
    if form.validate_on_submit():
        email = form.email.data.strip().lower()
        try:
            get_auth_client().resend_signup(email, redirect_to=_callback_url())
            session[PENDING_EMAIL_KEY] = email
            flash("Verification email sent! Please check your inbox.", "success")
        except AuthProviderError as e:
            flash(e.message, "danger")
        return redirect(url_for('auth.verify_email'))

    return render_template('auth/verify_email.html', title='Verify Email', form=form, email=pending_email)
