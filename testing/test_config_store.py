"""Tracked URL persistence and validation."""

import pytest

from iframe_relay import ValidationError
from iframe_relay.utils import ConfigStore

from conftest import TRACKED_URL, read_json, write_json


def test_missing_file_defaults_to_empty(config):
    assert config.get_tracked_url() == ""
    assert config.load() == {"defaultVideoUrl": ""}


def test_set_then_get(config):
    assert config.set_tracked_url(TRACKED_URL) == TRACKED_URL
    assert config.get_tracked_url() == TRACKED_URL
    assert read_json(config.config_file) == {"defaultVideoUrl": TRACKED_URL}


def test_set_preserves_other_keys(config):
    write_json(config.config_file, {"defaultVideoUrl": "", "note": "keep me"})

    config.set_tracked_url(TRACKED_URL)

    assert read_json(config.config_file) == {"defaultVideoUrl": TRACKED_URL, "note": "keep me"}


@pytest.mark.parametrize("bad", [
    "http://evil.com",
    "",
    None,
    42,
    "http://yandex.ru/video/preview/123",
    "https://yandex.ru/video/search?text=cats",
    " https://yandex.ru/video/preview/123",
])
def test_rejected_urls_leave_config_unchanged(config, bad):
    config.set_tracked_url(TRACKED_URL)
    before = read_json(config.config_file)

    with pytest.raises(ValidationError):
        config.set_tracked_url(bad)

    assert read_json(config.config_file) == before


def test_rejected_url_does_not_create_file(config, tmp_path):
    with pytest.raises(ValidationError):
        config.set_tracked_url("http://evil.com")
    assert not (tmp_path / "config.json").exists()


def test_corrupt_file_reads_as_default(config):
    with open(config.config_file, "w", encoding="utf-8") as f:
        f.write("{{{")
    assert config.get_tracked_url() == ""


def test_non_string_value_reads_as_empty(config):
    write_json(config.config_file, {"defaultVideoUrl": 123})
    assert config.get_tracked_url() == ""


def test_custom_prefix(tmp_path):
    store = ConfigStore(str(tmp_path / "config.json"), prefix="https://example.com/watch/")
    store.set_tracked_url("https://example.com/watch/1")
    with pytest.raises(ValidationError):
        store.set_tracked_url(TRACKED_URL)
