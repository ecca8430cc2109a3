"""Declarative heuristic tables used by the extractors.

Every fixed list the pipeline relies on lives here as data: selectors,
substring fingerprints, lexicons and ordered rule chains. Rule chains are
ordered ``(tokens, label)`` pairs evaluated first-match-wins.
"""

import re
from typing import Iterable, List, Optional, Sequence, Tuple

Rule = Tuple[Tuple[str, ...], str]

# =============================================================================
# Selectors
# =============================================================================

HEADING_SELECTOR = "h1, h2, h3, h4, h5, h6"
LIST_ITEM_SELECTOR = "ul li, ol li"

# (selector, is_benefit) in scan order
FEATURE_SELECTORS: Tuple[Tuple[str, bool], ...] = (
    (".features li", False),
    (".feature-list li", False),
    ('[class*="feature"] li', False),
    (".benefits li", True),
    (".advantages li", True),
    (".capabilities li", False),
)

TESTIMONIAL_SELECTORS = (
    ".testimonial",
    ".review",
    ".quote",
    ".customer-quote",
    '[class*="testimonial"]',
    '[class*="review"]',
)

PRICING_SELECTORS = (
    '[class*="price"]',
    '[class*="pricing"]',
    '[class*="cost"]',
    '[id*="price"]',
    '[id*="pricing"]',
    ".plan",
    ".tier",
)

# Currency symbol, ISO code or any digit
PRICE_PATTERN = re.compile(r"[$€£₹]|USD|EUR|GBP|[0-9]")

VIDEO_SELECTOR = 'video source, iframe[src*="youtube"], iframe[src*="vimeo"]'
DOCUMENT_SELECTOR = 'a[href$=".pdf"], a[href$=".doc"], a[href$=".docx"]'

# Priority order; the first selector with any match decides the logo
LOGO_SELECTORS = (
    ".logo img",
    "#logo img",
    '[class*="logo"] img',
    'img[alt*="logo"]',
    'img[class*="logo"]',
)

FAVICON_SELECTOR = 'link[rel="icon"], link[rel="shortcut icon"]'

NAVIGATION_SELECTOR = "nav a, .nav a, .menu a, header a"
FOOTER_SELECTOR = "footer a"

# Image sources containing this are skipped
IMAGE_PLACEHOLDER_TOKEN = "placeholder"

# =============================================================================
# Social platforms (domain substring -> platform), first match wins
# =============================================================================

SOCIAL_PLATFORMS: Tuple[Tuple[str, str], ...] = (
    ("twitter.com", "Twitter"),
    ("x.com", "Twitter"),
    ("facebook.com", "Facebook"),
    ("linkedin.com", "LinkedIn"),
    ("instagram.com", "Instagram"),
    ("youtube.com", "YouTube"),
    ("github.com", "GitHub"),
    ("discord.com", "Discord"),
    ("tiktok.com", "TikTok"),
    ("pinterest.com", "Pinterest"),
)

# =============================================================================
# Contact patterns
# =============================================================================

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_PATTERN = re.compile(r"(?:\+\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")

# =============================================================================
# Raw-HTML fingerprints (case-sensitive substring checks)
# =============================================================================

TECHNOLOGY_FINGERPRINTS: Tuple[Rule, ...] = (
    (("react",), "React"),
    (("vue",), "Vue.js"),
    (("angular",), "Angular"),
    (("next",), "Next.js"),
    (("gatsby",), "Gatsby"),
    (("wordpress",), "WordPress"),
    (("shopify",), "Shopify"),
    (("stripe",), "Stripe"),
    (("paypal",), "PayPal"),
)

PAYMENT_FINGERPRINTS: Tuple[Rule, ...] = (
    (("visa",), "Visa"),
    (("mastercard",), "Mastercard"),
    (("paypal",), "PayPal"),
    (("stripe",), "Stripe"),
    (("apple pay",), "Apple Pay"),
    (("google pay",), "Google Pay"),
)

ANALYTICS_FINGERPRINTS: Tuple[Rule, ...] = (
    (("google-analytics", "gtag"), "Google Analytics"),
    (("mixpanel",), "Mixpanel"),
    (("amplitude",), "Amplitude"),
    (("hotjar",), "Hotjar"),
    (("intercom",), "Intercom"),
)

# =============================================================================
# Text analysis lexicons
# =============================================================================

STOP_WORDS = frozenset(
    (
        "this", "that", "with", "have", "will", "your", "from", "they",
        "know", "want", "been", "good", "much", "some", "time", "very",
        "when", "come", "here", "just", "like", "long", "make", "many",
        "over", "such", "take", "than", "them", "well", "were",
    )
)

POSITIVE_WORDS = (
    "great", "excellent", "amazing", "fantastic", "wonderful", "love",
    "perfect", "best", "awesome", "incredible", "outstanding", "brilliant",
    "superb", "exceptional", "remarkable",
)

NEGATIVE_WORDS = (
    "bad", "terrible", "awful", "horrible", "worst", "hate",
    "disappointing", "poor", "fail", "broken", "useless", "frustrating",
    "annoying", "difficult",
)

# =============================================================================
# Classification rule chains (lower-cased substring checks, first match wins)
# =============================================================================

BUSINESS_MODEL_RULES: Tuple[Rule, ...] = (
    (("subscription", "monthly", "annually"), "subscription"),
    (("freemium", "free trial"), "freemium"),
    (("marketplace", "commission"), "marketplace"),
    (("advertising", "sponsored"), "advertising"),
    (("one-time", "purchase"), "one-time-purchase"),
    (("enterprise", "custom pricing"), "enterprise"),
)

INDUSTRY_RULES: Tuple[Rule, ...] = (
    (("saas", "software"), "SaaS"),
    (("ecommerce", "e-commerce", "store"), "E-commerce"),
    (("finance", "fintech", "payment"), "Finance"),
    (("health", "medical", "fitness"), "Healthcare"),
    (("education", "learning", "course"), "Education"),
    (("marketing", "analytics", "advertising"), "Marketing"),
    (("productivity", "project management", "collaboration"), "Productivity"),
    (("design", "creative", "graphics"), "Design"),
    (("developer", "coding", "api"), "Developer Tools"),
    (("social", "community", "networking"), "Social"),
    (("game", "gaming", "entertainment"), "Gaming"),
    (("ai", "artificial intelligence", "machine learning"), "AI/ML"),
)


def rule_matches(rule: Rule, haystack: str) -> bool:
    """True if any token of the rule is a substring of ``haystack``."""
    tokens, _ = rule
    return any(token in haystack for token in tokens)


def first_match(rules: Iterable[Rule], haystack: str) -> Optional[str]:
    """Label of the first rule matching ``haystack``, or None."""
    for rule in rules:
        if rule_matches(rule, haystack):
            return rule[1]
    return None


def all_matches(rules: Sequence[Rule], haystack: str) -> List[str]:
    """Labels of every rule matching ``haystack``, in table order."""
    return [rule[1] for rule in rules if rule_matches(rule, haystack)]
