# audit_scout/crawler/policy.py
"""
Static crawl policy: paths seeded ahead of organic discovery and URL patterns
that never hold useful content.
"""
from __future__ import annotations

import re
from typing import Pattern, Sequence, Tuple

PRIORITY_PATHS: Tuple[str, ...] = (
    "/about", "/about-us", "/who-we-are",
    "/services", "/capabilities", "/what-we-do",
    "/contact", "/contact-us",
    "/case-studies", "/projects", "/portfolio", "/work",
    "/testimonials", "/clients", "/customers",
    "/team", "/leadership", "/our-team",
    "/why-us", "/why-choose-us",
    "/process", "/how-we-work",
)

SKIP_PATTERNS: Tuple[Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"/wp-json(/|$)",
        r"/wp-admin(/|$)",
        r"/wp-content/uploads(/|$)",
        r"/wp-includes(/|$)",
        r"/feed/?$",
        r"/comments/feed/?$",
        r"/trackback/?$",
        r"/xmlrpc\.php",
        r"/wp-login\.php",
        r"/cart/?$",
        r"/checkout/?$",
        r"/my-account/?$",
        r"/add-to-cart",
        r"\?add-to-cart=",
        r"\?replytocom=",
        r"/page/\d+/?$",
        r"\.(pdf|jpg|jpeg|png|gif|svg|webp|mp4|mp3|zip|doc|docx|xls|xlsx)$",
    )
)


def should_skip_url(url: str, patterns: Sequence[Pattern[str]] = SKIP_PATTERNS) -> bool:
    """True if *url* matches one of the junk patterns."""
    return any(p.search(url) for p in patterns)


__all__ = ["PRIORITY_PATHS", "SKIP_PATTERNS", "should_skip_url"]
