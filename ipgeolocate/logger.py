import copy
from logging import config, getLevelName, getLogger

from ipgeolocate.config import LOG_LEVEL as LOG_LEVEL_NAME

LOGGER_NAME = "ipgeolocate"
LOG_LEVEL = getLevelName(LOG_LEVEL_NAME)

log_config = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "access": {
            "()": "uvicorn.logging.AccessFormatter",
            "fmt": '%(levelprefix)s %(asctime)s - %(client_addr)s - "%(request_line)s" %(status_code)s',
            "datefmt": "%Y-%m-%d %H:%M:%S",
            "use_colors": True,
        },
        "default": {
            "()": "uvicorn.logging.DefaultFormatter",
            "fmt": "%(levelprefix)s %(asctime)s - %(name)s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
            "use_colors": True,
        },
    },
    "handlers": {
        "access": {"class": "logging.StreamHandler", "formatter": "access", "stream": "ext://sys.stdout"},
        "default": {
            "formatter": "default",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        LOGGER_NAME: {"handlers": ["default"], "level": LOG_LEVEL, "propagate": False},
        "uvicorn": {"handlers": ["default"], "level": LOG_LEVEL, "propagate": True},
        "uvicorn.access": {"handlers": ["access"], "level": LOG_LEVEL, "propagate": False},
        "uvicorn.error": {"level": LOG_LEVEL, "propagate": False},
    },
}


def configure_logging(level: str | None = None) -> None:
    """Apply the logging configuration.

    Called by the HTTP service and the CLI; importing the library alone leaves
    the host application's logging untouched.
    """
    settings = copy.deepcopy(log_config)
    if level is not None:
        resolved = getLevelName(level.upper())
        for logger_config in settings["loggers"].values():
            logger_config["level"] = resolved
    config.dictConfig(settings)


# Package logger; child modules log through it.
logger = getLogger(LOGGER_NAME)
