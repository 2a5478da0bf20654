# --- Site Information ---
SITENAME = 'Example Journal'
SITEURL = ''
SITESUBTITLE = 'imported from WordPress, served from the CDN'

# --- Paths ---
PATH = 'content'
ARTICLE_PATHS = ['articles']
PAGE_PATHS = ['pages']
STATIC_PATHS = ['extra']

# --- Content Settings ---
TIMEZONE = 'UTC'
DEFAULT_LANG = 'en'
ARTICLE_SAVE_AS = 'blog/{slug}.html'
ARTICLE_URL = 'blog/{slug}.html'
PAGE_SAVE_AS = '{slug}.html'
PAGE_URL = '{slug}.html'
DELETE_OUTPUT_DIRECTORY = True

# --- Feed Settings (disabled for development) ---
FEED_ALL_ATOM = None
CATEGORY_FEED_ATOM = None
TRANSLATION_FEED_ATOM = None
AUTHOR_FEED_ATOM = None
AUTHOR_FEED_RSS = None

# --- Pagination ---
DEFAULT_PAGINATION = 10

# --- Plugins ---
PLUGIN_PATHS = ['pelican-plugins']
PLUGINS = ['webp_pictures']

# --- WebP Pictures ---
WEBP_PICTURES_ENABLED = True
WEBP_PICTURES_ENHANCED = True   # also rewrite srcset candidates
WEBP_PICTURES_DEBUG = True      # HTML comment before every converted image
WEBP_PICTURES_QUALITY = 80
WEBP_PICTURES_SIZE_CLASSES = (
    'thumbnail',
    'medium',
    'large',
    'full',
    'miniature-article',
    'contenu-alterné',
    'carré',
    'témoignage',
)
# Attachment sizes: an exported JSON file, or the live REST endpoint.
WEBP_PICTURES_METADATA = None
WEBP_PICTURES_MEDIA_ENDPOINT = None

# --- URL Settings ---
RELATIVE_URLS = True
