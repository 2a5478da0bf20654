from webp_pictures.attributes import (
    extract_attachment_id,
    extract_dimensions,
    extract_hints,
    extract_sizes_attribute,
    extract_size_slug,
    extract_srcset,
)
from webp_pictures.models import Dimensions

ATTRS = ' class="wp-image-42 size-medium" width="300" height="200"  alt="A mountain"'


def test_attachment_id():
    assert extract_attachment_id(ATTRS) == 42
    assert extract_attachment_id(' class="logo"') is None


def test_size_slug():
    assert extract_size_slug(ATTRS) == 'medium'
    assert extract_size_slug(' class="size-medium_large"') == 'medium_large'
    assert extract_size_slug(' class="logo"') is None


def test_dimensions_are_independent():
    assert extract_dimensions(ATTRS) == Dimensions(300, 200)
    assert extract_dimensions(" width='640'") == Dimensions(640, None)
    assert extract_dimensions(' data-width="900" height="10"') == Dimensions(None, 10)
    assert extract_dimensions(' width="auto"') == Dimensions()


def test_srcset():
    assert extract_srcset(' srcset="a.jpg 1x, b.jpg 2x" alt=""') == 'a.jpg 1x, b.jpg 2x'
    assert extract_srcset(' data-srcset="a.jpg 1x"') is None


def test_sizes_attribute_priority():
    attrs = ' sizes="100vw" data-sizes="50vw" data-lazy-sizes="auto"'
    assert extract_sizes_attribute(attrs) == ' data-lazy-sizes="auto"'
    assert extract_sizes_attribute(' sizes="100vw" data-sizes="50vw"') == ' data-sizes="50vw"'
    assert extract_sizes_attribute(" sizes='(max-width: 300px) 100vw'") == ' sizes="(max-width: 300px) 100vw"'
    assert extract_sizes_attribute(' alt="x"') == ''


def test_hints_bundle():
    hints = extract_hints(ATTRS)
    assert hints.attachment_id == 42
    assert hints.size_slug == 'medium'
    assert hints.dimensions == Dimensions(300, 200)
    assert hints.srcset is None
    assert hints.sizes_attr == ''
