from iframe_relay.utils import display_host, iframe_selector, is_allowed_tracked_url


def test_allowed_tracked_url():
    assert is_allowed_tracked_url("https://yandex.ru/video/preview/1234567890")
    assert is_allowed_tracked_url("https://yandex.ru/video/preview/123?text=cats&path=yandex")


def test_disallowed_tracked_url():
    assert not is_allowed_tracked_url("http://evil.com")
    assert not is_allowed_tracked_url("")
    assert not is_allowed_tracked_url(None)
    assert not is_allowed_tracked_url(["https://yandex.ru/video/preview/1"])


def test_spaces_must_be_percent_encoded():
    assert not is_allowed_tracked_url("https://yandex.ru/video/preview/123?text=cute cats")
    assert is_allowed_tracked_url("https://yandex.ru/video/preview/123?text=cute%20cats")


def test_iframe_selector():
    assert iframe_selector() == 'iframe[src*="rutube"]'


def test_display_host():
    assert display_host("https://www.yandex.ru/video/preview/1") == "yandex.ru"
    assert display_host("not a url") == "not a url"
