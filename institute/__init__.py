import logging.config
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from .extensions import db, migrate, login_manager

def configure_logging(app):
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": "[%(asctime)s] %(levelname)s in %(name)s: %(message)s"},
        },
        "handlers": {
            "wsgi": {
                "class": "logging.StreamHandler",
                "stream": "ext://flask.logging.wsgi_errors_stream",
                "formatter": "default",
            },
        },
        "loggers": {
            "institute": {"level": app.config.get("LOG_LEVEL", "INFO"), "handlers": ["wsgi"]},
        },
    })

def register_error_handlers(app):
    from .deletion.errors import DeletionError

    @app.errorhandler(DeletionError)
    def handle_deletion_error(exc):
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify(error=exc.description), exc.code

def create_app(config_object="config.Config"):
    app = Flask(__name__)
    app.config.from_object(config_object)
    configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    from . import models
    from .models.user import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify(error="Authentication required"), 401

    from .blueprints.auth import bp as auth_bp
    from .blueprints.students import bp as students_bp
    from .blueprints.teachers import bp as teachers_bp
    from .blueprints.finance import bp as finance_bp
    from .blueprints.archive import bp as archive_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(students_bp, url_prefix="/api/students")
    app.register_blueprint(teachers_bp, url_prefix="/api/teachers")
    app.register_blueprint(finance_bp, url_prefix="/api/finance")
    app.register_blueprint(archive_bp, url_prefix="/api/archive")
    register_error_handlers(app)

    from .cli import register_commands
    register_commands(app)

    app.logger.info("Application started with %s", config_object)
    return app
