"""Static map image centred on the entity's location."""

from __future__ import annotations

from typing import Any

from avatarcache.config.schema import LocationSettings
from avatarcache.strategies.base import Strategy
from avatarcache.types import AvatarRecord, FetchTarget, Location, StrategyName
from avatarcache.utils.paths import is_present, resolve_path

# (sub-path setting, default-value setting) for each Location field
_FIELDS: dict[str, tuple[str, str]] = {
    "latitude": ("latitude_path", "latitude"),
    "longitude": ("longitude_path", "longitude"),
    "zoom": ("zoom_path", "zoom"),
    "bearing": ("bearing_path", "bearing"),
    "style": ("style_path", "style"),
    "style_subtype": ("style_subtype_path", "style_subtype"),
}


class LocationStrategy(Strategy):
    name = StrategyName.LOCATION

    def __init__(self, settings: LocationSettings, access_token: str | None = None) -> None:
        self._settings = settings
        self._access_token = access_token

    def attempt(self, entity: Any, record: AvatarRecord) -> FetchTarget | None:
        located = resolve_path(entity, self._settings.path)
        if not is_present(located):
            return None

        location = self.build_location(located)
        return FetchTarget(
            url=self.map_url(location, record.width, record.height),
            params={"access_token": self._access_token} if self._access_token else None,
        )

    def build_location(self, located: Any) -> Location:
        """Read each field under ``located``, falling back to its default."""
        values: dict[str, Any] = {}
        for field, (path_setting, default_setting) in _FIELDS.items():
            value = resolve_path(located, getattr(self._settings, path_setting))
            if not is_present(value):
                value = getattr(self._settings, default_setting)
            values[field] = value
        return Location(**values)

    def map_url(self, location: Location, width: int, height: int) -> str:
        base_url = self._settings.base_url.rstrip("/")
        position = ",".join(
            _format_number(n)
            for n in (location.longitude, location.latitude, location.zoom, location.bearing)
        )
        return (
            f"{base_url}/{location.style}/{location.style_subtype}"
            f"/static/{position}/{width}x{height}"
        )


def _format_number(value: float) -> str:
    """Render 13.0 as "13" and 42.36 as "42.36"."""
    return str(int(value)) if float(value).is_integer() else repr(float(value))
