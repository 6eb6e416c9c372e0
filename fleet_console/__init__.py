# fleet_console/__init__.py
import os
from flask import Flask
from fleet_console.config import Config
from fleet_console.routes import register_blueprints
from fleet_console.services.record_source import RecordSource
from fleet_console.utils.logger import setup_logging
from dotenv import load_dotenv

load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), '.env'))


def create_app(test_config=None):
    basedir = os.path.abspath(os.path.dirname(__file__))
    template_path = os.path.join(basedir, 'templates')
    app = Flask(__name__, template_folder=template_path)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)
    app.secret_key = app.config["SECRET_KEY"]

    setup_logging(app)

    # Swappable in tests via app.extensions["record_source"]
    app.extensions["record_source"] = RecordSource(
        base_url=app.config["FLEET_API_BASE_URL"],
        token=app.config.get("FLEET_API_TOKEN"),
        timeout=app.config["FLEET_API_TIMEOUT"],
    )

    register_blueprints(app)

    return app
