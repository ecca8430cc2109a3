"""Application-wide constants.

This module centralizes all magic numbers and configuration constants
to ensure a single source of truth and easier maintenance.
"""

# =============================================================================
# Fetch Configuration
# =============================================================================

# Default timeout for the single scrape request (seconds)
DEFAULT_HTTP_TIMEOUT_SECONDS = 15.0

# Maximum number of redirect hops followed before giving up
DEFAULT_MAX_REDIRECTS = 5

# Scheme assumed when the caller passes a bare host
DEFAULT_URL_SCHEME = "https://"

# =============================================================================
# Content Budgets
# =============================================================================

# Body text stored on the document is truncated to this many characters
CONTENT_MAX_CHARS = 10000

# Average reading speed used for reading time (words per minute)
READING_WORDS_PER_MINUTE = 200

# Fallback when no <title>, og:title or <h1> is present
UNKNOWN_TITLE = "Unknown Title"

# Fallback when <html lang> is missing
DEFAULT_LANGUAGE = "en"

# =============================================================================
# Collection Caps (applied after deduplication, at assembly time)
# =============================================================================

MAX_HEADINGS = 30
MAX_PARAGRAPHS = 20
MAX_LIST_ITEMS = 50
MAX_FEATURES = 20
MAX_BENEFITS = 15
MAX_PRICING = 10
MAX_TESTIMONIALS = 10
MAX_IMAGES = 20
MAX_VIDEOS = 10
MAX_DOCUMENTS = 10
MAX_SOCIAL_LINKS = 15
MAX_CONTACT_ENTRIES = 5
MAX_KEYWORDS = 20
MAX_NAVIGATION_LINKS = 20
MAX_FOOTER_LINKS = 20

# =============================================================================
# Text Length Windows (inclusive)
# =============================================================================

MIN_HEADING_CHARS = 3
MIN_PARAGRAPH_CHARS = 21
LIST_ITEM_CHARS = (5, 300)
FEATURE_CHARS = (10, 200)
TESTIMONIAL_CHARS = (20, 500)
LINK_TEXT_CHARS = (1, 50)
KEYWORD_CHARS = (4, 14)

# =============================================================================
# Quality Scoring
# =============================================================================

SEO_SCORE_MAX = 100

# Completeness starts here and gains COMPLETENESS_BONUS per signal found
COMPLETENESS_BASE = 0.5
COMPLETENESS_BONUS = 0.1

# Share of the SEO score blended into scrape quality
SEO_QUALITY_WEIGHT = 0.3

# =============================================================================
# Rate Limiting (HTTP surface)
# =============================================================================

# Maximum scrapes per client per window
MAX_SCRAPES_PER_CLIENT = 10

# Rate limit window in seconds
RATE_LIMIT_WINDOW_SECONDS = 60

# =============================================================================
# Product Profile
# =============================================================================

# Tagline derived from the scraped description is cut to this length
TAGLINE_MAX_CHARS = 100
