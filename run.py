import os
from studio import create_app, db
from config import config_by_name

# Step 1: Determine the config name
config_name = os.environ.get('FLASK_CONFIG') or 'default'
if config_name not in config_by_name:
    print(f"Warning: Config name '{config_name}' not found. Using 'default' config.")
    config_name = 'default'

# Step 2: Create the app (Flask-Migrate is initialized inside the factory)
app = create_app(config_name)

# Step 3: Database Migrations
# Tables are managed with Flask-Migrate:
# 1. flask --app run db migrate -m "Your migration message"
# 2. flask --app run db upgrade

# Step 4: Shell context for `flask shell`
@app.shell_context_processor
def make_shell_context():
    from studio.models import Profile, Project, ProjectPhase, Deliverable, ContactSubmission
    return dict(db=db, Profile=Profile, Project=Project, ProjectPhase=ProjectPhase,
                Deliverable=Deliverable, ContactSubmission=ContactSubmission)

# Step 5: Run the app
if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    app.logger.info(f"Starting application with '{config_name}' configuration...")
    app.logger.info(f"Debug mode is: {'ON' if app.config.get('DEBUG') else 'OFF'}")
    app.logger.info(f"Application will run on host 0.0.0.0 and port {port}")
    app.run(host='0.0.0.0', port=port)
