import os
import logging
from flask import Flask, Blueprint, send_from_directory
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_bcrypt import Bcrypt
from flask_migrate import Migrate
from flask_restx import Api
from marketplace.config import Config

logger = logging.getLogger(__name__)

migrate = Migrate()
db = SQLAlchemy()
bcrypt = Bcrypt()

api_bp = Blueprint('api', __name__)

api = Api(
    api_bp,
    title='Campus Marketplace API',
    version='1.0',
    description='Buy and sell items between students on campus',
    doc='/docs'
)


def _register_namespaces():
    from .errors import register_error_handlers
    from .routes.auth_routes import auth_ns
    from .routes.product_routes import product_ns
    from .routes.user_routes import users_ns
    from .routes.conversation_routes import conversation_ns, message_ns
    from .routes.payment_routes import payment_ns
    from .routes.transaction_routes import transaction_ns
    from .routes.report_routes import report_ns
    from .routes.admin_routes import admin_ns
    from .routes.upload_routes import upload_ns

    register_error_handlers(api)

    api.add_namespace(auth_ns)
    api.add_namespace(product_ns)
    api.add_namespace(users_ns)
    api.add_namespace(conversation_ns)
    api.add_namespace(message_ns)
    api.add_namespace(payment_ns)
    api.add_namespace(transaction_ns)
    api.add_namespace(report_ns)
    api.add_namespace(admin_ns)
    api.add_namespace(upload_ns)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    db.init_app(app)
    migrate.init_app(app, db)
    bcrypt.init_app(app)

    app.register_blueprint(api_bp)

    upload_folder = os.path.abspath(app.config['UPLOAD_FOLDER'])
    os.makedirs(upload_folder, exist_ok=True)

    # Route for serving uploaded images
    @app.route('/uploads/<path:filename>')
    def uploaded_file(filename):
        return send_from_directory(os.path.abspath(app.config['UPLOAD_FOLDER']), filename)

    # Enable CORS
    CORS(app, resources={r"/*": {"origins": app.config.get('CORS_ORIGINS', '*')}},
         supports_credentials=app.config.get('CORS_SUPPORTS_CREDENTIALS', True),
         allow_headers=app.config.get('CORS_ALLOW_HEADERS', ["Content-Type"]),
         methods=app.config.get('CORS_METHODS', ["GET", "POST", "PATCH", "DELETE", "OPTIONS"]))

    from . import models  # noqa: F401

    with app.app_context():
        db.create_all()

    logger.info(f"Application created with {config_class.__name__}")
    return app


# Namespaces must be attached before the blueprint is first registered
_register_namespaces()
