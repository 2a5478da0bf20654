from webp_pictures.cdn import build_cdn_url

URL = 'https://cdn.example.com/wp-content/uploads/photo.jpg'


def test_empty_params_leave_url_untouched():
    assert build_cdn_url(URL, {}) == URL
    assert build_cdn_url(URL + '?ver=2&x', {}) == URL + '?ver=2&x'
    assert build_cdn_url(URL + '?ver=2', None) == URL + '?ver=2'


def test_null_and_empty_values_are_dropped():
    assert build_cdn_url(URL, {'width': None, 'quality': ''}) == URL
    assert build_cdn_url(URL, {'format': 'webp', 'width': None}) == URL + '?format=webp'


def test_params_appended_in_order():
    result = build_cdn_url(URL, {'format': 'webp', 'quality': 80, 'width': 300})
    assert result == URL + '?format=webp&quality=80&width=300'


def test_existing_params_are_replaced_not_duplicated():
    result = build_cdn_url(URL + '?width=300&ver=2', {'width': 600})
    assert result == URL + '?ver=2&width=600'


def test_applying_twice_keeps_only_last_width():
    once = build_cdn_url(URL, {'width': 300})
    twice = build_cdn_url(once, {'width': 600})
    assert twice == URL + '?width=600'
    assert twice.count('width=') == 1


def test_fragment_stays_after_query():
    assert build_cdn_url(URL + '#top', {'width': 10}) == URL + '?width=10#top'


def test_relative_urls_are_supported():
    assert build_cdn_url('a.jpg', {'width': 400}) == 'a.jpg?width=400'
