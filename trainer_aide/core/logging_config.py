"""Logging setup for the API process."""

import logging.config


def configure_logging(level: str = "INFO") -> None:
    """Route app and uvicorn loggers to stderr with one format."""
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                "trainer_aide": {"handlers": ["console"], "level": level.upper(), "propagate": False},
                "sqlalchemy.engine": {"level": "WARNING"},
            },
            "root": {"handlers": ["console"], "level": "WARNING"},
        }
    )
