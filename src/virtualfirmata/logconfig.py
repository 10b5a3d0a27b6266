import logging
from logging.config import dictConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(debug=False):
    """Send all package logging to stderr; DEBUG also logs every frame."""
    level_name = "DEBUG" if debug else "INFO"
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "plain": {"format": LOG_FORMAT},
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "level": level_name,
                    "formatter": "plain",
                },
            },
            "loggers": {
                # pyserial's reader thread is chatty at DEBUG
                "serial": {"level": "WARNING"},
            },
            "root": {
                "level": level_name,
                "handlers": ["stderr"],
            },
        }
    )
    logging.getLogger("virtualfirmata").info("Logging configured at level %s", level_name)
