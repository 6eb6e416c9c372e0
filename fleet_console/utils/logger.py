import logging
from logging.handlers import RotatingFileHandler

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging(app):
    log_file_path = app.config.get("LOG_FILE")
    formatter = logging.Formatter(LOG_FORMAT)

    try:
        if log_file_path and not app.config.get("TESTING"):
            file_handler = RotatingFileHandler(log_file_path, maxBytes=10000, backupCount=3)
            file_handler.setLevel(logging.INFO)
            file_handler.setFormatter(formatter)
            app.logger.addHandler(file_handler)
    except OSError as e:
        app.logger.warning("Could not open log file %s: %s", log_file_path, e)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    app.logger.addHandler(console_handler)
    app.logger.setLevel(logging.INFO)

    app.logger.info("Logging setup complete")
