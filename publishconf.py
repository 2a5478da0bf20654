import os, sys
sys.path.insert(0, os.path.dirname(__file__))
from pelicanconf import *  # noqa

SITEURL = os.environ.get('SITEURL', 'https://www.example.com')
RELATIVE_URLS = False

FEED_ALL_ATOM = 'feeds/all.atom.xml'
CATEGORY_FEED_ATOM = 'feeds/{slug}.atom.xml'
DELETE_OUTPUT_DIRECTORY = True

# Production settings overrides
WEBP_PICTURES_DEBUG = False
WEBP_PICTURES_QUALITY = int(os.environ.get('WEBP_PICTURES_QUALITY', '80'))
WEBP_PICTURES_MEDIA_ENDPOINT = os.environ.get('WEBP_PICTURES_MEDIA_ENDPOINT') or None
