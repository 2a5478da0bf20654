import pytest

from webp_pictures.classifier import DEFAULT_SIZE_CLASSES
from webp_pictures.config import RewriterConfig, describe, sanitize_quality


@pytest.mark.parametrize('value, expected', [
    ('70', 70),
    (1, 1),
    (100, 100),
    (150, 100),
    (0, 80),
    (-5, 80),
    ('abc', 80),
    (None, 80),
])
def test_sanitize_quality(value, expected):
    assert sanitize_quality(value) == expected


def test_defaults():
    config = RewriterConfig.from_settings({})
    assert config.enabled and config.enhanced
    assert not config.debug
    assert config.quality == 80
    assert config.size_classes == DEFAULT_SIZE_CLASSES


def test_from_settings():
    config = RewriterConfig.from_settings({
        'WEBP_PICTURES_QUALITY': 500,
        'WEBP_PICTURES_ENHANCED': False,
        'WEBP_PICTURES_SIZE_CLASSES': ['hero'],
    })
    assert config.quality == 100
    assert not config.enhanced
    assert config.size_classes == ('hero',)
    assert config.size_class_pattern.search('size-hero')


def test_from_env():
    config = RewriterConfig.from_env({
        'WEBP_PICTURES_DEBUG': 'yes',
        'WEBP_PICTURES_ENABLED': '0',
        'WEBP_PICTURES_QUALITY': '65',
        'WEBP_PICTURES_SIZE_CLASSES': 'hero, banner',
    })
    assert config.debug
    assert not config.enabled
    assert config.quality == 65
    assert config.size_classes == ('hero', 'banner')


def test_describe():
    assert describe(RewriterConfig(enhanced=False, quality=70)) == [
        ('Current Status', 'Enabled'),
        ('Mode', 'Basic'),
        ('Debug Mode', 'Disabled'),
        ('Quality Setting', '70%'),
    ]
