"""
Evaluation-date context.

Every date-relative computation reads the evaluation date from a
``Settings`` object. Term structures and helpers take an explicit
``settings=`` argument and fall back to the process default returned by
``get_settings()``; they observe it, so moving the evaluation date
re-anchors floating curves and rebuilds date-relative helpers.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from ficcore.patterns.observable import Observable
from ficcore.time.date import Date, DateLike

logger = logging.getLogger(__name__)


class Settings(Observable):
    """Holds the evaluation date and event-inclusion flag.

    Args:
        evaluation_date: Fixed evaluation date; today's date when omitted
        include_reference_date_events: Whether cash flows falling on the
            reference date count as not yet occurred
    """

    def __init__(
        self,
        evaluation_date: Optional[DateLike] = None,
        include_reference_date_events: bool = False,
    ):
        self._evaluation_date = Date.coerce(evaluation_date) if evaluation_date is not None else None
        self.include_reference_date_events = include_reference_date_events

    @property
    def evaluation_date(self) -> Date:
        if self._evaluation_date is None:
            return Date.todays_date()
        return self._evaluation_date

    @evaluation_date.setter
    def evaluation_date(self, value: Optional[DateLike]) -> None:
        new_date = Date.coerce(value) if value is not None else None
        if new_date == self._evaluation_date:
            return
        logger.debug("Evaluation date moved from %s to %s", self._evaluation_date, new_date)
        self._evaluation_date = new_date
        self.notify_observers()

    def reset_evaluation_date(self) -> None:
        """Go back to tracking today's date."""
        self.evaluation_date = None

    def __repr__(self) -> str:
        return f"Settings(evaluation_date={self.evaluation_date})"


_default_settings = Settings()


def get_settings() -> Settings:
    """Process-wide default settings."""
    return _default_settings


@contextmanager
def saved_settings(settings: Optional[Settings] = None) -> Iterator[Settings]:
    """Restore the evaluation date and flags of ``settings`` on exit."""
    settings = settings if settings is not None else get_settings()
    evaluation_date = settings._evaluation_date
    include_events = settings.include_reference_date_events
    try:
        yield settings
    finally:
        settings.evaluation_date = evaluation_date
        settings.include_reference_date_events = include_events
