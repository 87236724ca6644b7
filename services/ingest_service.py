"""Turn pasted text into idea drafts. Nothing here touches the database."""

import re
from urllib.parse import urlparse

URL_PATTERN = re.compile(r"https?://[^\s]+")
TEXT_TITLE_MAX_CHARS = 60


def extract_urls(text):
    """Unique URLs in order of first appearance."""
    urls = []
    seen = set()
    for match in URL_PATTERN.findall(text or ""):
        if match not in seen:
            seen.add(match)
            urls.append(match)
    return urls


def source_from_url(url):
    hostname = (urlparse(url).hostname or "").lower()
    if "tiktok.com" in hostname:
        return "TIKTOK"
    if "instagram.com" in hostname:
        return "INSTAGRAM"
    return "OTHER"


def text_draft(text):
    truncated = len(text) > TEXT_TITLE_MAX_CHARS
    return {
        "title": text[:TEXT_TITLE_MAX_CHARS] + ("..." if truncated else ""),
        "description": text if truncated else None,
        "url": None,
        "source": "TEXT",
        "image_url": None,
        "raw_text": text,
    }


def url_draft(url, raw_text):
    return {
        "title": urlparse(url).hostname or url,
        "description": None,
        "url": url,
        "source": source_from_url(url),
        "image_url": None,
        "raw_text": raw_text,
    }


def build_drafts(text):
    """One draft per URL found, or a single text draft when there are none."""
    urls = extract_urls(text)
    if not urls:
        return [text_draft(text)]
    return [url_draft(url, text) for url in urls]
