import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration
from flask_mail import Mail
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect

# Import extensions from the central extensions file
from .extensions import db, migrate, limiter
import logging
from flask import Flask
from flask_cors import CORS
from flask_smorest import Api

# Declare extensions that are not in the extensions file
login_manager = LoginManager()
csrf = CSRFProtect()
mail = Mail()
cors = CORS()
api = Api() # Flask-Smorest API for the JSON endpoints

login_manager.login_view = 'auth.login'
login_manager.login_message_category = 'info'
login_manager.login_message = "Please log in to access this page."

def create_app(config_name):
    """
    Flask Application Factory function.
    """
    app = Flask(__name__,
                instance_relative_config=False,
                static_folder='static',
                template_folder='templates')

    # 1. Load Config
    from config import config_by_name
    config_obj = config_by_name.get(config_name, config_by_name['default'])
    if hasattr(config_obj, 'validate'):
        config_obj.validate()
    app.config.from_object(config_obj)
    app.logger.info(f"App configured with: {config_obj.__name__}")

    # Flask-Smorest API documentation configuration
    app.config["API_TITLE"] = "Creative Studio API"
    app.config["API_VERSION"] = "v1"
    app.config["OPENAPI_VERSION"] = "3.0.2"
    app.config["OPENAPI_URL_PREFIX"] = "/api/docs"
    app.config["OPENAPI_SWAGGER_UI_PATH"] = "/swagger-ui"
    app.config["OPENAPI_SWAGGER_UI_URL"] = "https://cdn.jsdelivr.net/npm/swagger-ui-dist/"

    # 2. Sentry SDK initialization - for error and performance tracking
    if app.config.get('SENTRY_DSN'):
        sentry_sdk.init(
            dsn=app.config['SENTRY_DSN'],
            integrations=[FlaskIntegration()],
            send_default_pii=True,
            traces_sample_rate=1.0
        )
        app.logger.info("Sentry initialized for error tracking.")

    # 3. Check Supabase settings
    if not app.config.get('SUPABASE_URL') or not app.config.get('SUPABASE_ANON_KEY'):
        app.logger.warning("SUPABASE_URL / SUPABASE_ANON_KEY not set. Sign-in pages will report the auth service as unavailable.")

    # 4. Initialize Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)
    cors.init_app(app, resources={r"/api/*": {"origins": "*"}})

    # 5. Mail (SMTP settings come from the config class)
    if not app.config.get('MAIL_USERNAME') and not app.testing:
        app.logger.warning("MAIL_USERNAME not set. Contact enquiries will be stored but may not be forwarded.")
    mail.init_app(app)

    # 6. Initialize Rate Limiter
    limiter.init_app(app)

    # 7. Initialize Flask-Smorest API
    api.init_app(app)

    # 8. Define user loader for Flask-Login
    from .models import Profile
    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(Profile, user_id)

    # 9. Register Blueprints in app context
    with app.app_context():
        from .routes.main_routes import main_bp
        from .routes.auth_routes import auth_bp
        from .routes.dashboard_routes import dashboard_bp
        from .routes.profile_routes import profile_bp
        from .routes.contact_routes import contact_bp
        from .routes.api_routes import api_bp

        app.register_blueprint(main_bp)
        app.register_blueprint(auth_bp)
        app.register_blueprint(dashboard_bp, url_prefix='/dashboard')
        app.register_blueprint(profile_bp, url_prefix='/profile')
        app.register_blueprint(contact_bp)

        # The JSON API authenticates with bearer tokens, not cookies
        csrf.exempt(api_bp)
        api.register_blueprint(api_bp, url_prefix='/api')

        # 10. Role-based access to the portal areas
        from .utils.access import init_access_rules
        init_access_rules(app)

        from .utils.template_helpers import init_template_helpers
        init_template_helpers(app)

        # 11. Set up Logging
        log_level_str = app.config.get('LOG_LEVEL', 'INFO').upper()
        log_level = getattr(logging, log_level_str, logging.INFO)
        app.logger.setLevel(log_level)

        app.logger.info(f"Application initialized with environment: {config_name}, Debug: {app.config.get('DEBUG')}")

    # 12. Finally, return the app
    return app
