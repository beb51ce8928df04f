# File: tests/test_link_extractor.py
import pytest

from audit_scout.crawler.link_extractor import (
    extract_links,
    find_linkedin,
    normalize_url,
    origin_of,
    same_origin,
)
from audit_scout.crawler.policy import should_skip_url


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("https://a.com/x/", "https://a.com/x"),
        ("https://a.com/x", "https://a.com/x"),
        ("https://a.com/", "https://a.com"),
        ("https://a.com", "https://a.com"),
        ("HTTPS://A.COM/Path/?q=1#top", "https://a.com/Path"),
        ("https://a.com:443/x", "https://a.com/x"),
        ("http://a.com:8080/x//", "http://a.com:8080/x"),
        ("https://user:pw@a.com/x", "https://a.com/x"),
    ],
)
def test_normalize_url(raw, expected):
    assert normalize_url(raw) == expected


@pytest.mark.parametrize(
    "url", ["https://a.com/x/", "http://a.com:8080/", "https://a.com/a/b/c//"]
)
def test_normalize_url_is_idempotent(url):
    once = normalize_url(url)
    assert normalize_url(once) == once


def test_trailing_slash_variants_collapse():
    assert len({normalize_url("https://a.com/x/"), normalize_url("https://a.com/x")}) == 1


def test_origin_requires_host():
    with pytest.raises(ValueError):
        origin_of("/relative/path")


def test_same_origin_compares_scheme_host_and_port():
    assert same_origin("https://a.com/x", "https://A.com:443/y")
    assert not same_origin("https://a.com/x", "http://a.com/x")
    assert not same_origin("https://a.com/x", "https://a.com:8443/x")
    assert not same_origin("https://a.com/x", "https://b.a.com/x")


PAGE_URL = "https://a.com/blog/post"

LINKS_HTML = """
<html><body>
  <a href="/about/">About</a>
  <a href="team">Team</a>
  <a href="https://a.com/services?ref=nav#top">Services</a>
  <a href="https://a.com/about">About again</a>
  <a href="#section">Jump</a>
  <a href="javascript:void(0)">JS</a>
  <a href="mailto:hi@a.com">Mail</a>
  <a href="tel:+123456">Call</a>
  <a href="https://external.com/page">External</a>
  <a href="http://a.com/insecure">Other scheme</a>
  <a href="https://a.com:8443/port">Other port</a>
  <a href="/wp-admin/options.php">Admin</a>
  <a href="/files/brochure.pdf">PDF</a>
  <a href="/blog/page/2/">Page 2</a>
  <a href="/cart/">Cart</a>
  <a href="ftp://a.com/file">FTP</a>
  <area href="/contact" alt="map">
</body></html>
"""


def test_extract_links_keeps_same_origin_pages_in_order():
    assert extract_links(LINKS_HTML, PAGE_URL) == [
        "https://a.com/about",
        "https://a.com/blog/team",
        "https://a.com/services",
        "https://a.com/contact",
    ]


def test_extract_links_never_returns_excluded_urls():
    links = extract_links(LINKS_HTML, PAGE_URL)
    for link in links:
        assert link.startswith("https://a.com/")
        assert not link.startswith(("mailto:", "tel:", "javascript:", "#"))
        assert not should_skip_url(link)
        assert "#" not in link and "?" not in link


def test_extract_links_handles_pages_without_anchors():
    assert extract_links("<html><body><p>nothing</p></body></html>", PAGE_URL) == []


@pytest.mark.parametrize(
    "url",
    [
        "https://a.com/wp-json/wp/v2/posts",
        "https://a.com/wp-content/uploads/2024/logo.png",
        "https://a.com/feed",
        "https://a.com/blog/comments/feed/",
        "https://a.com/xmlrpc.php",
        "https://a.com/wp-login.php",
        "https://a.com/checkout",
        "https://a.com/my-account/",
        "https://a.com/shop?add-to-cart=12",
        "https://a.com/post?replytocom=4",
        "https://a.com/news/page/3",
        "https://a.com/docs/report.DOCX",
    ],
)
def test_skip_patterns(url):
    assert should_skip_url(url)


@pytest.mark.parametrize("url", ["https://a.com/about", "https://a.com/pages/team", "https://a.com/cartography"])
def test_content_urls_are_not_skipped(url):
    assert not should_skip_url(url)


def test_find_linkedin_returns_first_company_page():
    html = """
    <a href="https://www.linkedin.com/in/someone">Person</a>
    <a href="https://www.linkedin.com/company/acme-widgets/">Acme</a>
    <a href="https://linkedin.com/company/other">Other</a>
    """
    assert find_linkedin(html) == "https://www.linkedin.com/company/acme-widgets/"


def test_find_linkedin_absent():
    assert find_linkedin('<a href="https://twitter.com/acme">tw</a>') is None
