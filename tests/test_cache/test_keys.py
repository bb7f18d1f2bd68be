"""Tests for cache key derivation."""

from pathlib import Path
from types import SimpleNamespace

import pytest
from starlette.requests import Request

from avatarcache.cache.keys import cache_path_for, derive_cache_key, resolve_dimensions
from avatarcache.config.schema import build_config
from avatarcache.errors.exceptions import ConfigurationError


class TestDeriveCacheKey:
    def test_path_layout(self, tmp_path):
        config = build_config(cache_root=tmp_path)
        record = derive_cache_key({"id": 42}, None, config)
        assert record.identity == "42"
        assert record.cache_path == tmp_path / "42-200x200.png"

    def test_deterministic(self, tmp_path):
        config = build_config(cache_root=tmp_path, size=64)
        a = derive_cache_key({"id": "alice", "email": "a@b.com"}, None, config)
        b = derive_cache_key({"id": "alice", "avatar": "https://x/y.png"}, None, config)
        assert a.cache_path == b.cache_path

    def test_different_sizes_differ(self, tmp_path):
        small = derive_cache_key({"id": 1}, None, build_config(cache_root=tmp_path, size=32))
        large = derive_cache_key({"id": 1}, None, build_config(cache_root=tmp_path, size=64))
        assert small.cache_path != large.cache_path

    def test_missing_identity_is_empty(self, tmp_path):
        record = derive_cache_key({}, None, build_config(cache_root=tmp_path))
        assert record.identity == ""
        assert record.cache_path.name == "-200x200.png"

    def test_custom_entity_id_path(self, tmp_path):
        config = build_config(cache_root=tmp_path, entity_id="profile.handle")
        record = derive_cache_key({"profile": {"handle": "bob"}}, None, config)
        assert record.identity == "bob"

    def test_numeric_size_wins(self, tmp_path):
        config = build_config(cache_root=tmp_path, size=200, width=400, height=400)
        record = derive_cache_key({"id": "u1"}, None, config)
        assert (record.width, record.height) == (200, 200)
        assert record.cache_path.name.endswith("-200x200.png")


class TestResolveDimensions:
    def test_width_height_without_size(self):
        config = build_config(width=120, height=80)
        assert resolve_dimensions({}, None, config) == (120, 80)

    def test_size_path_from_entity(self):
        config = build_config(size="entity.avatar_size")
        assert resolve_dimensions({"avatar_size": 48}, None, config) == (48, 48)

    def test_size_path_from_request(self):
        request = SimpleNamespace(query_params={"s": "96"})
        config = build_config(size="request.query_params.s")
        assert resolve_dimensions({}, request, config) == (96, 96)

    def test_unresolved_size_path_keeps_literals(self):
        config = build_config(size="entity.avatar_size", width=30, height=40)
        assert resolve_dimensions({}, None, config) == (30, 40)

    def test_non_numeric_size_value(self):
        config = build_config(size="entity.avatar_size")
        with pytest.raises(ConfigurationError, match="non-numeric"):
            resolve_dimensions({"avatar_size": "huge"}, None, config)

    def test_non_positive_size_value(self):
        config = build_config(size="entity.avatar_size")
        with pytest.raises(ConfigurationError):
            resolve_dimensions({"avatar_size": 0}, None, config)

    def test_malformed_size_setting(self):
        config = build_config().model_copy(update={"size": [64]})
        with pytest.raises(ConfigurationError, match="size"):
            resolve_dimensions({}, None, config)

    def test_float_size_sets_both(self, tmp_path):
        config = build_config(cache_root=tmp_path, size=150.0)
        record = derive_cache_key({"id": "u1"}, None, config)
        assert (record.width, record.height) == (150, 150)
        assert record.cache_path.name == "u1-150x150.png"

    def test_fractional_size_truncated(self):
        config = build_config(size=64.7)
        assert resolve_dimensions({}, None, config) == (64, 64)

    def test_unvalidated_float_size(self):
        config = build_config().model_copy(update={"size": 32.0})
        assert resolve_dimensions({}, None, config) == (32, 32)

    def test_size_path_from_starlette_request(self):
        request = Request(
            {"type": "http", "method": "GET", "path": "/", "query_string": b"s=72", "headers": []}
        )
        config = build_config(size="request.query_params.s")
        assert resolve_dimensions({}, request, config) == (72, 72)


class TestCachePathFor:
    def test_plain_identity(self):
        assert cache_path_for(Path("/c"), "alice", 10, 20) == Path("/c/alice-10x20.png")

    def test_email_identity_kept(self):
        assert cache_path_for(Path("/c"), "a@b.com", 1, 1).name == "a@b.com-1x1.png"

    def test_separators_cannot_escape_root(self):
        path = cache_path_for(Path("/c"), "../../etc/passwd", 1, 1)
        assert path.parent == Path("/c")
