"""Locale-dependent rendering of instants for the summary.

A renderer is picked by locale identifier. "cs-CZ" has a fixed
"DD. MM. YYYY HH:MM" renderer; every other identifier goes through Babel.
All instants are shown in the host's local timezone.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from babel import Locale, UnknownLocaleError
from babel.dates import format_datetime, format_time

from .errors import InvalidConfigurationError

DEFAULT_LOCALE = "cs-CZ"


class DateRenderer(ABC):
    """Renders instants for display in a summary."""

    @abstractmethod
    def render_datetime(self, dt: datetime) -> str:
        """Render date and time of day."""
        pass

    @abstractmethod
    def render_time(self, dt: datetime) -> str:
        """Render time of day only."""
        pass


class FixedDateRenderer(DateRenderer):
    """Fixed "DD. MM. YYYY HH:MM" style."""

    date_format = "%d. %m. %Y"
    time_format = "%H:%M"

    def render_date(self, dt: datetime) -> str:
        return dt.astimezone().strftime(self.date_format)

    def render_time(self, dt: datetime) -> str:
        return dt.astimezone().strftime(self.time_format)

    def render_datetime(self, dt: datetime) -> str:
        return f"{self.render_date(dt)} {self.render_time(dt)}"


class BabelDateRenderer(DateRenderer):
    """Locale-aware rendering using the CLDR data shipped with Babel."""

    def __init__(self, locale_id: str) -> None:
        try:
            self.locale = Locale.parse(locale_id.replace("-", "_"))
        except (ValueError, UnknownLocaleError) as e:
            raise InvalidConfigurationError(f"Unknown locale: {locale_id!r}") from e

    def render_datetime(self, dt: datetime) -> str:
        return format_datetime(dt.astimezone(), format="medium", locale=self.locale)

    def render_time(self, dt: datetime) -> str:
        return format_time(dt.astimezone(), format="medium", locale=self.locale)


RENDERERS: dict[str, type[DateRenderer]] = {
    DEFAULT_LOCALE: FixedDateRenderer,
}


def get_date_renderer(locale_id: str) -> DateRenderer:
    """Return the renderer registered for locale_id, or a Babel renderer for it."""
    renderer_class = RENDERERS.get(locale_id)
    if renderer_class is not None:
        return renderer_class()
    return BabelDateRenderer(locale_id)


def same_local_day(first: datetime, second: datetime) -> bool:
    """Whether two instants fall on the same calendar day in local time."""
    return first.astimezone().date() == second.astimezone().date()
