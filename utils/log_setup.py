import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_MARK = "_login_api_handler"


def configure_logging(app) -> None:
    """
    Console + optional file output on the root logger, so every module's
    logging.getLogger(__name__) ends up in the same sink.
    """
    root = logging.getLogger()
    level = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    root.setLevel(level)

    # Re-running create_app (tests) must not stack duplicate handlers
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            root.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler()]

    log_file = app.config.get("LOG_FILE")
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_MARK, True)
        root.addHandler(handler)
