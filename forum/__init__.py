# forum/__init__.py

# =====================================================================================
# 1. Environment variables (loaded before anything reads them)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. Module imports
# =====================================================================================
import os
import logging
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
from flask_jwt_extended import JWTManager

# - Configuration and errors
from forum.core.config import config_by_name
from forum.core.errors import ForumError, Unauthenticated

# - API blueprints
from forum.api.auth.routes import auth_bp
from forum.api.users.routes import users_bp
from forum.api.courses.routes import courses_bp
from forum.api.topics.routes import topics_bp
from forum.api.comments.routes import comments_bp
from forum.api.replies.routes import replies_bp

# - Services
from forum.api.users.services import UserService
from forum.api.courses.services import CourseService
from forum.api.topics.services import TopicService
from forum.api.comments.services import CommentService
from forum.api.replies.services import ReplyService

# - Store adapters and CLI
from forum.store import MemoryStore
from forum.cli import register_commands


def _build_store(app: Flask):
    """Creates the document store selected by FORUM_STORE."""
    backend = app.config['FORUM_STORE']
    if backend == 'memory':
        logging.info("Using in-memory document store")
        return MemoryStore()
    if backend == 'firestore':
        import firebase_admin
        from firebase_admin import credentials
        from forum.store.firestore_store import FirestoreStore

        if not firebase_admin._apps:
            cred_path = app.config['FIREBASE_CREDENTIALS_PATH']
            if not cred_path or not os.path.exists(cred_path):
                raise FileNotFoundError(f"Firebase credentials file not found: {cred_path}")
            firebase_admin.initialize_app(credentials.Certificate(cred_path))
        return FirestoreStore(timeout=app.config['STORE_TIMEOUT_SECONDS'])
    raise ValueError(f"Unknown FORUM_STORE backend: {backend}")


def create_app(config_name=None, store=None, clock=None, mailer=None):
    """
    Flask application factory.

    `store`, `clock` and `mailer` may be injected (tests, scripts); otherwise
    they are built from the configuration.
    """
    # =====================================================================================
    # 3. Flask app and configuration
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    if not app.debug and not app.testing:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    # =====================================================================================
    # 4. Extensions and external collaborators
    # =====================================================================================
    jwt = JWTManager(app)

    @jwt.unauthorized_loader
    def handle_missing_token(reason):
        return jsonify(Unauthenticated(reason).to_dict()), 401

    @jwt.invalid_token_loader
    def handle_invalid_token(reason):
        return jsonify(Unauthenticated(reason).to_dict()), 401

    @jwt.expired_token_loader
    def handle_expired_token(jwt_header, jwt_payload):
        return jsonify(Unauthenticated("Token has expired").to_dict()), 401

    if store is None:
        try:
            store = _build_store(app)
        except Exception as e:
            logging.error(f"Failed to initialize document store: {e}")
            raise
    app.store = store

    # =====================================================================================
    # 5. Service instances, stored in 'app.services' (dependency injection)
    # =====================================================================================
    common = dict(
        clock=clock,
        default_page_size=app.config['DEFAULT_PAGE_SIZE'],
        max_page_size=app.config['MAX_PAGE_SIZE']
    )
    app.services = {
        'users': UserService(store, mailer=mailer, reset_ttl_minutes=app.config['PASSWORD_RESET_TTL_MINUTES'], **common),
        'courses': CourseService(store, **common),
        'topics': TopicService(store, **common),
        'comments': CommentService(store, **common),
        'replies': ReplyService(store, **common),
    }
    logging.info("Forum services initialized successfully")

    # =====================================================================================
    # 6. Blueprints and CLI
    # =====================================================================================
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(users_bp, url_prefix='/api/users')
    app.register_blueprint(courses_bp, url_prefix='/api/courses')
    app.register_blueprint(topics_bp, url_prefix='/api/topics')
    app.register_blueprint(comments_bp, url_prefix='/api/comments')
    app.register_blueprint(replies_bp, url_prefix='/api/replies')

    register_commands(app)

    # =====================================================================================
    # 7. Global error handlers
    # =====================================================================================
    @app.errorhandler(ForumError)
    def handle_forum_error(err):
        if err.status_code >= 500:
            logging.error(f"{err.error_code}: {err.message}", exc_info=True)
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {"error_code": "VALIDATION_ERROR", "details": err.messages}
        return jsonify(response), 400

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # anything not handled above
        if isinstance(err, HTTPException):
            return err
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"error_code": "INTERNAL_SERVER_ERROR", "message": "An unexpected server error occurred."}
        return jsonify(response), 500

    logging.info(f"Flask app created for '{config_name}' environment.")
    return app
