"""Tests for the image resource cache."""

import logging
import threading

import pytest

from mdproof.media import ResourceCache


class TestResourceCache:
    def test_dimensions_in_points(self, sample_image):
        cache = ResourceCache(sample_image.parent)

        assert cache.image_dimensions("picture.png") == pytest.approx((144.0, 72.0))

    def test_dpi_changes_size(self, sample_image):
        cache = ResourceCache(sample_image.parent, dpi=72.0)

        assert cache.image_dimensions("picture.png") == pytest.approx((600.0, 300.0))

    def test_missing_image(self, temp_dir):
        cache = ResourceCache(temp_dir)

        assert cache.image_dimensions("nope.png") is None
        assert cache.missing == {"nope.png"}
        assert cache.image_path("nope.png") is None

    def test_missing_image_is_logged_at_debug(self, temp_dir, caplog):
        cache = ResourceCache(temp_dir)

        with caplog.at_level(logging.DEBUG, logger="mdproof"):
            cache.image_dimensions("nope.png")

        assert [record.levelno for record in caplog.records] == [logging.DEBUG]

    def test_unreadable_image(self, temp_dir):
        (temp_dir / "broken.png").write_bytes(b"not an image")
        cache = ResourceCache(temp_dir)

        assert cache.image_dimensions("broken.png") is None
        assert "broken.png" in cache.missing

    def test_remote_uri_is_not_fetched(self, temp_dir):
        cache = ResourceCache(temp_dir)

        assert cache.image_dimensions("https://example.com/pic.png") is None

    def test_file_uri_and_absolute_path(self, sample_image):
        cache = ResourceCache()

        assert cache.image_dimensions(sample_image.as_uri()) == pytest.approx((144.0, 72.0))
        assert cache.image_dimensions(str(sample_image)) == pytest.approx((144.0, 72.0))

    def test_results_are_memoised(self, sample_image):
        cache = ResourceCache(sample_image.parent)
        first = cache.image_dimensions("picture.png")

        sample_image.unlink()

        assert cache.image_dimensions("picture.png") == first
        assert cache.image_path("picture.png") == sample_image

    def test_preload(self, sample_image):
        cache = ResourceCache(sample_image.parent)

        cache.preload(["picture.png", "missing.png"])

        assert cache.missing == {"missing.png"}

    def test_shared_between_threads(self, sample_image):
        cache = ResourceCache(sample_image.parent)
        results = []

        def lookup():
            results.append(cache.image_dimensions("picture.png"))

        threads = [threading.Thread(target=lookup) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 8
        assert all(result == pytest.approx((144.0, 72.0)) for result in results)
