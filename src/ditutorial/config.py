import logging
import os
from dataclasses import dataclass
from typing import Mapping, Self

DATABASE_VARIABLE = "DITUTORIAL_DATABASE"
SENDER_VARIABLE = "DITUTORIAL_SENDER"
LOG_LEVEL_VARIABLE = "DITUTORIAL_LOG_LEVEL"


@dataclass(kw_only=True, frozen=True, slots=True, weakref_slot=True)
class TutorialConfig:
    database_path: str = ":memory:"
    """
    Where ``SqliteOrderRepository`` keeps orders. ``":memory:"`` gives every
    connection its own throwaway database.
    """

    sms_sender: str = "ORDERS"
    """
    The sender name shown to customers receiving order confirmations.
    """

    log_level: str = "INFO"
    """
    Name of a :mod:`logging` level, used by the ``ditutorial`` command.
    """

    def __post_init__(self) -> None:
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")
        if not self.sms_sender:
            raise ValueError("sms_sender must not be empty")

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> Self:
        if environ is None:
            environ = os.environ
        defaults = cls()
        return cls(
            database_path=environ.get(DATABASE_VARIABLE, defaults.database_path),
            sms_sender=environ.get(SENDER_VARIABLE, defaults.sms_sender),
            log_level=environ.get(LOG_LEVEL_VARIABLE, defaults.log_level),
        )

    @property
    def numeric_log_level(self) -> int:
        return logging.getLevelName(self.log_level.upper())
