"""Tests for the on-disk avatar store."""

from avatarcache.cache.store import AvatarStore


class TestAvatarStore:
    async def test_prepare_creates_root(self, tmp_path):
        store = AvatarStore(tmp_path / "a" / "b")
        await store.prepare()
        assert (tmp_path / "a" / "b").is_dir()

    async def test_prepare_existing_root(self, tmp_path):
        store = AvatarStore(tmp_path)
        await store.prepare()
        await store.prepare()
        assert tmp_path.is_dir()

    async def test_prepare_failure_swallowed(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a dir")
        store = AvatarStore(blocker / "avatars")
        await store.prepare()
        assert not (blocker / "avatars").exists()

    async def test_contains(self, tmp_path, sample_image_bytes):
        store = AvatarStore(tmp_path)
        path = tmp_path / "1-10x10.png"
        assert await store.contains(path) is False
        path.write_bytes(sample_image_bytes)
        assert await store.contains(path) is True

    async def test_directory_is_not_a_hit(self, tmp_path):
        store = AvatarStore(tmp_path)
        (tmp_path / "odd-1x1.png").mkdir()
        assert await store.contains(tmp_path / "odd-1x1.png") is False

    def test_stats(self, tmp_path, sample_image_bytes):
        store = AvatarStore(tmp_path)
        (tmp_path / "1-10x10.png").write_bytes(sample_image_bytes)
        (tmp_path / "2-10x10.png").write_bytes(sample_image_bytes)
        (tmp_path / "notes.txt").write_text("ignored")
        stats = store.stats()
        assert stats.entries == 2
        assert stats.size_bytes == 2 * len(sample_image_bytes)
        assert stats.size_mb > 0

    def test_stats_missing_root(self, tmp_path):
        stats = AvatarStore(tmp_path / "missing").stats()
        assert stats.entries == 0
        assert stats.size_bytes == 0
