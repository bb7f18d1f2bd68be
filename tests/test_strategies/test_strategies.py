"""Tests for the individual avatar strategies."""

import hashlib
from pathlib import Path

from avatarcache.config.schema import GravatarSettings, LocationSettings, UrlSettings
from avatarcache.strategies.fallback import FallbackStrategy
from avatarcache.strategies.gravatar import GravatarStrategy, gravatar_hash
from avatarcache.strategies.location import LocationStrategy
from avatarcache.strategies.url import UrlStrategy
from avatarcache.types import AvatarRecord


def _record(width: int = 200, height: int = 200) -> AvatarRecord:
    return AvatarRecord(
        identity="u1",
        width=width,
        height=height,
        cache_path=Path("/tmp/u1.png"),
    )


class TestUrlStrategy:
    def test_match(self):
        strategy = UrlStrategy(UrlSettings())
        target = strategy.attempt({"avatar": "https://img/x.png"}, _record())
        assert target.url == "https://img/x.png"
        assert target.params is None

    def test_empty_value(self):
        strategy = UrlStrategy(UrlSettings())
        assert strategy.attempt({"avatar": ""}, _record()) is None
        assert strategy.attempt({}, _record()) is None

    def test_custom_path(self):
        strategy = UrlStrategy(UrlSettings(path="profile.picture"))
        target = strategy.attempt({"profile": {"picture": "https://p"}}, _record())
        assert target.url == "https://p"


class TestGravatarStrategy:
    def test_hash_url_and_params(self):
        strategy = GravatarStrategy(GravatarSettings(style="identicon"))
        target = strategy.attempt({"email": "a@b.com"}, _record(120, 80))
        digest = hashlib.md5(b"a@b.com").hexdigest()
        assert target.url == f"https://gravatar.com/avatar/{digest}"
        assert target.params == {"size": 120, "d": "identicon"}

    def test_size_is_max_dimension(self):
        strategy = GravatarStrategy(GravatarSettings())
        target = strategy.attempt({"email": "a@b.com"}, _record(40, 90))
        assert target.params["size"] == 90

    def test_hash_of_string_form(self):
        assert gravatar_hash(12345) == hashlib.md5(b"12345").hexdigest()

    def test_missing_email(self):
        strategy = GravatarStrategy(GravatarSettings())
        assert strategy.attempt({"email": None}, _record()) is None

    def test_custom_base_url(self):
        strategy = GravatarStrategy(GravatarSettings(base_url="https://seccdn.libravatar.org/avatar/"))
        target = strategy.attempt({"email": "a@b.com"}, _record())
        assert target.url.startswith("https://seccdn.libravatar.org/avatar/")
        assert "//" not in target.url.removeprefix("https://")


class TestLocationStrategy:
    def test_full_location(self):
        strategy = LocationStrategy(LocationSettings(), access_token="pk.abc")
        entity = {
            "location": {
                "lat": 42.36,
                "lng": -71.09,
                "zoom": 10,
                "bearing": 45,
                "style": "acme",
                "style_subtype": "dark-v10",
            }
        }
        target = strategy.attempt(entity, _record(300, 150))
        assert target.url == (
            "https://api.mapbox.com/styles/v1/acme/dark-v10/static/-71.09,42.36,10,45/300x150"
        )
        assert target.params == {"access_token": "pk.abc"}

    def test_defaults_fill_missing_fields(self):
        strategy = LocationStrategy(LocationSettings(zoom=8), access_token="pk.abc")
        target = strategy.attempt({"location": {"lat": 1.5, "lng": 2.5}}, _record())
        assert target.url.endswith("/mapbox/streets-v11/static/2.5,1.5,8,0/200x200")

    def test_zero_coordinates_are_used(self):
        strategy = LocationStrategy(LocationSettings(latitude=10, longitude=20))
        location = strategy.build_location({"lat": 0, "lng": 0})
        assert (location.latitude, location.longitude) == (0, 0)

    def test_custom_sub_paths(self):
        settings = LocationSettings(
            path="home", latitude_path="coords.0", longitude_path="coords.1"
        )
        strategy = LocationStrategy(settings)
        location = strategy.build_location({"coords": [51.5, -0.12]})
        assert location.latitude == 51.5
        assert location.longitude == -0.12

    def test_no_location(self):
        strategy = LocationStrategy(LocationSettings())
        assert strategy.attempt({"email": "a@b.com"}, _record()) is None

    def test_no_token_no_params(self):
        strategy = LocationStrategy(LocationSettings())
        target = strategy.attempt({"location": {"lat": 1, "lng": 2}}, _record())
        assert target.params is None


class TestFallbackStrategy:
    def test_match(self):
        target = FallbackStrategy("https://example.com/d.png").attempt({}, _record())
        assert target.url == "https://example.com/d.png"

    def test_empty(self):
        assert FallbackStrategy("").attempt({}, _record()) is None
