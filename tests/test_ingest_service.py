from services.ingest_service import build_drafts, extract_urls, source_from_url


def test_extract_urls_unique_in_order():
    text = "see https://b.com/x and http://a.com then https://b.com/x again"
    assert extract_urls(text) == ["https://b.com/x", "http://a.com"]


def test_source_from_url():
    assert source_from_url("https://www.tiktok.com/@a/video/1") == "TIKTOK"
    assert source_from_url("https://instagram.com/p/abc") == "INSTAGRAM"
    assert source_from_url("https://example.org") == "OTHER"


def test_short_text_draft():
    drafts = build_drafts("Sunset picnic")
    assert drafts == [{
        "title": "Sunset picnic",
        "description": None,
        "url": None,
        "source": "TEXT",
        "image_url": None,
        "raw_text": "Sunset picnic",
    }]


def test_long_text_draft_is_truncated():
    text = "x" * 75
    draft = build_drafts(text)[0]
    assert draft["title"] == "x" * 60 + "..."
    assert draft["description"] == text


def test_url_drafts_use_hostname_as_title():
    text = "try https://www.instagram.com/p/abc and https://food.example.com/menu"
    drafts = build_drafts(text)
    assert [d["title"] for d in drafts] == ["www.instagram.com", "food.example.com"]
    assert [d["source"] for d in drafts] == ["INSTAGRAM", "OTHER"]
    assert all(d["raw_text"] == text for d in drafts)
