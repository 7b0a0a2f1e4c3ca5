"""
Flask application factory.
"""
import logging
import os
from typing import Optional

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from tzdiff.config_loader import AppSettings, load_settings

CONFIG_CLASSES = {
    'development': 'flask_app.config.DevelopmentConfig',
    'production': 'flask_app.config.ProductionConfig',
    'testing': 'flask_app.config.TestingConfig',
}


def create_app(config_name='development', settings: Optional[AppSettings] = None):
    """Create and configure the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    # config.ini [App] section, or TZDIFF_* environment variables
    if settings is None:
        settings = load_settings()
    app.extensions['tzdiff_settings'] = settings

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    # Load configuration
    app.config.from_object(CONFIG_CLASSES.get(config_name, CONFIG_CLASSES['development']))

    if settings.trust_proxy:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1)

    # Ensure instance folder exists
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        pass

    # Initialize extensions
    from flask_app.models import db
    db.init_app(app)

    # Register blueprints
    from flask_app.routes.api import api_bp

    app.register_blueprint(api_bp, url_prefix='/api')

    # Create database tables
    with app.app_context():
        db.create_all()

    return app
