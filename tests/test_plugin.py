import json
import logging
from types import SimpleNamespace

import pytest
from pelican import signals

import webp_pictures
from webp_pictures import init_rewriter, register, rewrite_written_file

from conftest import PHOTO_METADATA

IMG = '<img class="wp-image-42 size-medium" src="https://cdn.example.com/wp-content/uploads/photo.jpg">'


def write_page(tmp_path, body=IMG, name='index.html'):
    page = tmp_path / name
    page.write_text(f'<html><body>{body}</body></html>', encoding='utf-8')
    return page


def test_written_page_is_rewritten_with_metadata(tmp_path):
    export = tmp_path / 'attachments.json'
    export.write_text(json.dumps({'42': PHOTO_METADATA}), encoding='utf-8')
    init_rewriter(SimpleNamespace(settings={
        'WEBP_PICTURES_QUALITY': 60,
        'WEBP_PICTURES_METADATA': str(export),
    }))
    page = write_page(tmp_path)

    rewrite_written_file(str(page), context={})

    html = page.read_text(encoding='utf-8')
    assert '<picture><source srcset="https://cdn.example.com/wp-content/uploads/photo.jpg?format=webp&quality=60&width=300"' in html
    assert 'photo.jpg?width=300"' in html


def test_context_settings_used_without_initialisation(tmp_path):
    page = write_page(tmp_path)
    rewrite_written_file(page, context={'WEBP_PICTURES_DEBUG': True})
    assert '<!-- WebP Enhanced Conversion:' in page.read_text(encoding='utf-8')


def test_non_html_output_is_ignored(tmp_path):
    feed = write_page(tmp_path, name='all.atom.xml')
    before = feed.read_text(encoding='utf-8')
    rewrite_written_file(feed, context={})
    assert feed.read_text(encoding='utf-8') == before


def test_disabled_plugin_leaves_pages_alone(tmp_path):
    init_rewriter(SimpleNamespace(settings={'WEBP_PICTURES_ENABLED': False}))
    page = write_page(tmp_path)
    before = page.read_text(encoding='utf-8')
    rewrite_written_file(page, context={})
    assert page.read_text(encoding='utf-8') == before


def test_broken_metadata_export_disables_rewriting(tmp_path, caplog):
    export = tmp_path / 'attachments.json'
    export.write_text('{broken', encoding='utf-8')
    with caplog.at_level(logging.ERROR):
        init_rewriter(SimpleNamespace(settings={'WEBP_PICTURES_METADATA': str(export)}))
    assert 'webp_pictures disabled' in caplog.text
    assert not webp_pictures._active['rewriter'].config.enabled


def test_missing_page_is_logged_not_raised(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        rewrite_written_file(tmp_path / 'gone.html', context={})
    assert 'could not read' in caplog.text


@pytest.fixture
def registered():
    register()
    yield
    signals.initialized.disconnect(init_rewriter)
    signals.content_written.disconnect(rewrite_written_file)


def test_register_connects_content_written(tmp_path, registered):
    page = write_page(tmp_path)
    signals.content_written.send(str(page), context={})
    assert '<picture>' in page.read_text(encoding='utf-8')
