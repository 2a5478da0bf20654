import pytest

import webp_pictures
from webp_pictures.models import SizeMetadata

PHOTO_METADATA = {
    'width': 1200,
    'height': 800,
    'sizes': {
        'thumbnail': {'width': 150, 'height': 150, 'file': 'photo-150x150.jpg'},
        'medium': {'width': 300, 'height': 200, 'file': 'photo-300x200.jpg'},
        'medium_large': {'width': 768, 'height': 512, 'file': 'photo-768x512.jpg'},
    },
}


@pytest.fixture
def photo_metadata():
    return SizeMetadata.from_dict(PHOTO_METADATA)


@pytest.fixture
def lookup(photo_metadata):
    def _lookup(attachment_id):
        return photo_metadata if attachment_id == 42 else None

    return _lookup


@pytest.fixture(autouse=True)
def reset_plugin_state():
    webp_pictures._active.clear()
    yield
    webp_pictures._active.clear()
