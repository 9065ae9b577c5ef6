"""Logging de l'annuaire.

main.py appelle configure_logging(settings) une fois au démarrage; les modules
se contentent de get_logger(__name__).
"""
from __future__ import annotations

import logging

from core.config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
# requests/urllib3 sont trop bavards en DEBUG
NOISY_LOGGERS = ("urllib3",)


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
