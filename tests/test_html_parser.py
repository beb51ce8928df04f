# File: tests/test_html_parser.py
from audit_scout.crawler.models import PageMeta
from audit_scout.parser.html_parser import (
    UNTITLED,
    extract_footer_text,
    extract_h1,
    extract_meta,
    extract_og_site_name,
    extract_text,
    extract_title,
)


def test_extract_text_drops_boilerplate_and_collapses_whitespace():
    html = """
    <html><head><title>T</title><style>body { color: red }</style></head>
    <body>
      <header>Logo Menu</header>
      <nav><a href="/">Home</a></nav>
      <script>var tracking = "secret";</script>
      <main><h2>Our   work</h2>
        <p>Fish &amp; chips &lt;daily&gt;&nbsp;special &quot;fresh&quot; &#39;hot&#39;</p>
      </main>
      <footer>© 2024 Acme</footer>
    </body></html>
    """
    text = extract_text(html)
    assert "Our work" in text
    assert "Fish & chips <daily> special \"fresh\" 'hot'" in text
    for noise in ("Logo Menu", "Home", "tracking", "color: red", "© 2024"):
        assert noise not in text
    assert "  " not in text
    assert text == text.strip()


def test_extract_title_prefers_title_tag():
    assert extract_title("<title>  Acme | Widgets </title><h1>Big</h1>") == "Acme | Widgets"


def test_extract_title_falls_back_to_h1_then_placeholder():
    assert extract_title("<html><body><h1>Hello World</h1></body></html>") == "Hello World"
    assert extract_title("<html><body><p>no headings</p></body></html>") == UNTITLED


def test_extract_h1_ignores_chrome_headlines():
    html = """
    <header><h1>Acme navigation bar headline text</h1></header>
    <main><h1>We build <em>reliable</em> machines</h1></main>
    """
    assert extract_h1(html) == "We build reliable machines"


def test_extract_h1_skips_navigation_words():
    html = "<h1>About us</h1><h1>Precision parts for aerospace</h1>"
    assert extract_h1(html) == "Precision parts for aerospace"


def test_extract_h1_falls_back_to_longest_candidate():
    html = "<h1>Menu</h1><h1>Contact us</h1><h1>Hi</h1>"
    assert extract_h1(html) == "Contact us"


def test_extract_h1_uses_chrome_headlines_when_nothing_else_exists():
    html = "<header><h1>Industrial automation experts</h1></header><p>body</p>"
    assert extract_h1(html) == "Industrial automation experts"


def test_extract_h1_absent():
    assert extract_h1("<p>No headline</p>") is None
    assert extract_h1("<h1>   </h1>") is None


def test_extract_meta_any_attribute_order():
    html = """
    <meta name="description" content="We make widgets">
    <meta content="Acme Widgets" property="og:title">
    <meta property="OG:DESCRIPTION" content="Widgets for everyone">
    """
    assert extract_meta(html) == PageMeta(
        description="We make widgets",
        og_title="Acme Widgets",
        og_description="Widgets for everyone",
    )


def test_extract_meta_missing_fields():
    assert extract_meta('<meta name="description" content="">') == PageMeta()


def test_extract_og_site_name():
    assert extract_og_site_name('<meta content="Acme Corp" property="og:site_name">') == "Acme Corp"
    assert extract_og_site_name("<title>x</title>") is None


def test_extract_footer_text_from_footer_element():
    html = "<footer><script>x()</script><p>© 2024 Acme Widgets. All rights reserved.</p></footer>"
    assert extract_footer_text(html) == "© 2024 Acme Widgets. All rights reserved."


def test_extract_footer_text_falls_back_to_copyright_notice():
    html = "<div class='bottom'><span>Copyright &copy; 2023 Blue Fern LLC</span></div>"
    assert extract_footer_text(html) == "© 2023 Blue Fern LLC"


def test_extract_footer_text_absent():
    assert extract_footer_text("<p>nothing here</p>") is None
