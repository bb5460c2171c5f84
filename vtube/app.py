import os
import secrets
from logging.config import dictConfig
from flask import Flask
from flask.cli import load_dotenv
from flask_login import LoginManager

from vtube.errors import Unauthorized, error_response, register_error_handlers
from vtube.models import db
from vtube.models_auth import User
from vtube.routes import (
    auth_bp,
    dashboard_bp,
    healthcheck_bp,
    likes_bp,
    playlists_bp,
    subscriptions_bp,
    tweets_bp,
    videos_bp,
)
from vtube.services.media import MediaStorage

login_manager = LoginManager()


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, user_id)


@login_manager.unauthorized_handler
def unauthorized():
    return error_response(Unauthorized("Please log in to access this resource"))


def configure_logging():
    dictConfig({
        'version': 1,
        'formatters': {'default': {
            'format': '[%(asctime)s] %(levelname)s in %(module)s: %(message)s',
        }},
        'handlers': {'wsgi': {
            'class': 'logging.StreamHandler',
            'stream': 'ext://flask.logging.wsgi_errors_stream',
            'formatter': 'default'
        }},
        'root': {
            'level': 'INFO',
            'handlers': ['wsgi']
        }
    })


def create_app(test_config=None, media_storage=None):
    configure_logging()
    load_dotenv()
    app = Flask(__name__, instance_relative_config=True)

    # Check if running in test mode (from environment or test_config)
    is_testing = (
        os.environ.get("TESTING", "").lower() in ("true", "1", "yes")
        or (test_config and test_config.get("TESTING"))
    )

    # Secret key for session security (generate if not set)
    app.config["SECRET_KEY"] = os.environ.get("VTUBE_SECRET_KEY") or secrets.token_hex(32)

    # Session security settings
    app.config["SESSION_COOKIE_SECURE"] = os.environ.get("VTUBE_HTTPS", "").lower() in ("true", "1", "yes")
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"

    # Database configuration
    if is_testing:
        app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///:memory:"
        app.config["TESTING"] = True
    else:
        app.config["SQLALCHEMY_DATABASE_URI"] = os.environ.get("VTUBE_DATABASE_URL") or "sqlite:///vtube.db"

    # Incoming files are kept here until they are pushed to Cloudinary
    app.config["UPLOAD_FOLDER"] = os.environ.get("VTUBE_UPLOAD_FOLDER") or os.path.join(app.instance_path, "uploads")
    app.config["MAX_CONTENT_LENGTH"] = 1024 * 1024 * 1024  # 1 GB max

    # Media storage credentials
    app.config["CLOUDINARY_CLOUD_NAME"] = os.environ.get("CLOUDINARY_CLOUD_NAME")
    app.config["CLOUDINARY_API_KEY"] = os.environ.get("CLOUDINARY_API_KEY")
    app.config["CLOUDINARY_API_SECRET"] = os.environ.get("CLOUDINARY_API_SECRET")
    app.config["CLOUDINARY_FOLDER"] = os.environ.get("CLOUDINARY_FOLDER")

    # Apply additional test configuration if provided
    if test_config:
        app.config.update(test_config)

    os.makedirs(app.config["UPLOAD_FOLDER"], exist_ok=True)

    # Initialize database
    db.init_app(app)

    # Initialize Flask-Login
    login_manager.init_app(app)

    app.extensions["media_storage"] = media_storage or MediaStorage.from_config(app.config)

    with app.app_context():
        db.create_all()

    # Register blueprints
    app.register_blueprint(healthcheck_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(videos_bp)
    app.register_blueprint(playlists_bp)
    app.register_blueprint(tweets_bp)
    app.register_blueprint(likes_bp)
    app.register_blueprint(subscriptions_bp)
    app.register_blueprint(dashboard_bp)

    register_error_handlers(app)

    return app
