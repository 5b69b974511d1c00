# smallfsm/plugins/logging_logger.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging
from typing import Optional

DEFAULT_LOGGER_NAME = "smallfsm.transitions"


class LoggingTransitionLogger:
    """
    StateMachineLogger that writes each transition to a standard library
    logger as ``[event] from -> to``. Handlers and formatting are left to the
    application's logging configuration.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO) -> None:
        """
        :param logger: Target logger; defaults to ``smallfsm.transitions``.
        :param level: Level the records are emitted at.
        """
        self._logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self._level = level

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def log_transition(self, event: str, from_state: str, to_state: str) -> None:
        self._logger.log(self._level, "[%s] %s -> %s", event, from_state, to_state)
