"""
Fixed catalogue rules.

Header names are matched case-insensitively; everything else here is a
default that the environment can override (see config.py).
"""

import re

# Recognized source headers
TITLE_HEADER = "Title"
SUMMARY_HEADER = "Summary"
COST_HEADER = "CostLKR"  # kept as display text, never parsed
CATEGORY_HEADER = "Category"
PDF_HEADER = "PDF"
THUMBNAIL_HEADER = "Thumbnail"

DEFAULT_PDF_BASE_PATH = "/assets/pdfs/"
DEFAULT_THUMB_BASE_PATH = "/assets/thumbs/"
DEFAULT_FETCH_TIMEOUT = 15.0

CACHE_BUSTER_PARAM = "t"
ALL_CATEGORIES = "All categories"

ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)
COST_FLAGGED = re.compile(r"^cost\s*=", re.IGNORECASE)
COST_UNAVAILABLE = re.compile(r"^no\s+costing\s+available$", re.IGNORECASE)

# Same unreserved set as JavaScript's encodeURIComponent
URI_COMPONENT_SAFE = "-_.!~*'()"
