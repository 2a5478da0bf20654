from webp_pictures.descriptors import (
    SrcsetEntry,
    build_srcset_with_params,
    parse_srcset,
    width_from_descriptor,
)


def test_width_descriptor():
    assert width_from_descriptor('800w') == 800
    assert width_from_descriptor('800w', 400) == 800


def test_density_descriptor_needs_base_width():
    assert width_from_descriptor('2x', 400) == 800
    assert width_from_descriptor('2x') is None
    assert width_from_descriptor('1.5x', 333) == 500


def test_missing_descriptor():
    assert width_from_descriptor('') is None
    assert width_from_descriptor('', 300) is None


def test_parse_srcset_keeps_order_and_skips_blanks():
    entries = parse_srcset(' a.jpg 400w ,, b.jpg   800w, c.jpg ')
    assert entries == [
        SrcsetEntry('a.jpg', '400w'),
        SrcsetEntry('b.jpg', '800w'),
        SrcsetEntry('c.jpg', ''),
    ]
    assert parse_srcset('') == []
    assert parse_srcset(None) == []


def test_each_entry_gets_its_own_width():
    result = build_srcset_with_params('a.jpg 400w, a.jpg 800w', {'format': 'webp', 'quality': 80})
    assert result == 'a.jpg?format=webp&quality=80&width=400 400w, a.jpg?format=webp&quality=80&width=800 800w'


def test_density_entries_scale_base_width():
    result = build_srcset_with_params('a.jpg 1x, a.jpg 2x', {'width': 300}, base_width=300)
    assert result == 'a.jpg?width=300 1x, a.jpg?width=600 2x'


def test_undeterminable_width_drops_the_param_but_keeps_the_entry():
    result = build_srcset_with_params('a.jpg 2x, b.jpg', {'format': 'webp', 'width': 300})
    assert result == 'a.jpg?format=webp 2x, b.jpg?format=webp'


def test_empty_srcset():
    assert build_srcset_with_params('', {'width': 300}) == ''
