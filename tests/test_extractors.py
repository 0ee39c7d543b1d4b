"""Unit tests for noise classification and content-item extraction."""

from __future__ import annotations

from bs4 import BeautifulSoup

from pagedistill.extractors.main_content import (
    extract_items,
    resolve_image_src,
    select_main_container,
)
from pagedistill.extractors.noise import has_noisy_ancestor, is_noise
from pagedistill.items import ImageItem, TextItem

BASE = "https://example.com/blog/bread-starter"


def _tag(html: str, name: str):
    return BeautifulSoup(html, "lxml").find(name)


def _values(items) -> list[str]:
    return [i.content if isinstance(i, TextItem) else i.src for i in items]


# ---------------------------------------------------------------------------
# Noise classifier
# ---------------------------------------------------------------------------

class TestNoiseClassifier:
    def test_structural_tags_are_noise(self):
        for name in ("script", "style", "iframe", "svg", "nav", "footer",
                     "header", "aside", "form", "button", "input", "select", "textarea"):
            html = f"<html><body><{name}></{name}></body></html>"
            assert is_noise(_tag(html, name)), name

    def test_content_tags_are_not_noise(self):
        for name in ("div", "section", "p", "h2", "img", "article", "main"):
            assert not is_noise(_tag(f"<html><body><{name}></{name}></body></html>", name)), name

    def test_class_keyword(self):
        assert is_noise(_tag('<div class="cookie-banner"></div>', "div"))

    def test_id_keyword(self):
        assert is_noise(_tag('<div id="newsletter-signup"></div>', "div"))

    def test_keyword_is_case_insensitive(self):
        assert is_noise(_tag('<div class="SocialLinks"></div>', "div"))

    def test_keyword_in_any_class(self):
        assert is_noise(_tag('<div class="box wide promo"></div>', "div"))

    def test_keyword_matches_as_substring(self):
        # "ad" is part of the lexicon and matches inside longer names
        assert is_noise(_tag('<div class="top-ads-slot"></div>', "div"))
        assert is_noise(_tag('<div class="masthead"></div>', "div"))

    def test_plain_div_not_noise(self):
        assert not is_noise(_tag('<div class="story wrapper" id="body-text"></div>', "div"))

    def test_noisy_ancestor(self):
        soup = BeautifulSoup(
            '<div class="modal"><section><article id="x"></article></section></div>', "lxml",
        )
        assert has_noisy_ancestor(soup.find("article"))
        assert not has_noisy_ancestor(soup.find("div"))


# ---------------------------------------------------------------------------
# Main container selection
# ---------------------------------------------------------------------------

class TestContainerSelection:
    def test_longer_candidate_wins(self):
        html = """<html><body>
        <article id="first"><p>Short article body text here.</p></article>
        <article id="second"><p>A much longer article body that clearly has more text in it.</p></article>
        </body></html>"""
        soup = BeautifulSoup(html, "lxml")
        assert select_main_container(soup)["id"] == "second"

    def test_tie_goes_to_first_in_document_order(self):
        html = """<html><body>
        <article id="first"><p>Exactly the same text.</p></article>
        <article id="second"><p>Exactly the same text.</p></article>
        </body></html>"""
        soup = BeautifulSoup(html, "lxml")
        assert select_main_container(soup)["id"] == "first"

    def test_tie_across_different_selectors(self):
        html = """<html><body>
        <div class="post-content" id="first"><p>Same length text.</p></div>
        <main id="second"><p>Same length text.</p></main>
        </body></html>"""
        soup = BeautifulSoup(html, "lxml")
        assert select_main_container(soup)["id"] == "first"

    def test_noisy_candidate_discarded(self):
        html = """<html><body>
        <article class="sponsored-promo"><p>A very long promotional article that would otherwise win easily.</p></article>
        <article id="real"><p>The real article.</p></article>
        </body></html>"""
        soup = BeautifulSoup(html, "lxml")
        assert select_main_container(soup)["id"] == "real"

    def test_candidate_inside_noisy_region_discarded(self):
        html = """<html><body>
        <aside><article id="teaser"><p>A long teaser article inside the sidebar region.</p></article></aside>
        <div class="post" id="real"><p>Real post.</p></div>
        </body></html>"""
        soup = BeautifulSoup(html, "lxml")
        assert select_main_container(soup)["id"] == "real"

    def test_falls_back_to_body(self, no_container_html):
        soup = BeautifulSoup(no_container_html, "lxml")
        assert select_main_container(soup).name == "body"

    def test_all_candidates_noisy_falls_back_to_body(self):
        soup = BeautifulSoup('<html><body><main class="popup"><p>x</p></main></body></html>', "lxml")
        assert select_main_container(soup).name == "body"


# ---------------------------------------------------------------------------
# Image resolution
# ---------------------------------------------------------------------------

class TestResolveImageSrc:
    def test_relative_path(self):
        img = _tag('<img src="images/a.png">', "img")
        assert resolve_image_src(img, BASE) == "https://example.com/blog/images/a.png"

    def test_root_relative_path(self):
        img = _tag('<img src="/a.png">', "img")
        assert resolve_image_src(img, BASE) == "https://example.com/a.png"

    def test_protocol_relative(self):
        img = _tag('<img src="//cdn.example.net/a.png">', "img")
        assert resolve_image_src(img, BASE) == "https://cdn.example.net/a.png"

    def test_absolute_kept(self):
        img = _tag('<img src="http://other.org/x.jpg">', "img")
        assert resolve_image_src(img, BASE) == "http://other.org/x.jpg"

    def test_lazy_load_fallback(self):
        img = _tag('<img data-src="/lazy.jpg">', "img")
        assert resolve_image_src(img, BASE) == "https://example.com/lazy.jpg"

    def test_src_preferred_over_lazy(self):
        img = _tag('<img src="/real.jpg" data-src="/lazy.jpg">', "img")
        assert resolve_image_src(img, BASE) == "https://example.com/real.jpg"

    def test_lazy_preferred_over_data_placeholder(self):
        img = _tag('<img src="data:image/gif;base64,R0lGOD" data-src="/lazy.jpg">', "img")
        assert resolve_image_src(img, BASE) == "https://example.com/lazy.jpg"

    def test_missing_src(self):
        assert resolve_image_src(_tag("<img alt='x'>", "img"), BASE) is None

    def test_relative_without_base(self):
        assert resolve_image_src(_tag('<img src="a.png">', "img"), "") is None

    def test_non_http_scheme_skipped(self):
        img = _tag('<img src="data:image/png;base64,AAAA">', "img")
        assert resolve_image_src(img, BASE) is None


# ---------------------------------------------------------------------------
# Full extraction
# ---------------------------------------------------------------------------

class TestExtractItems:
    def test_article_fixture(self, article_html):
        items = extract_items(article_html, base_url=BASE)
        assert _values(items) == [
            "Building a Better Bread Starter",
            "https://example.com/images/starter.jpg",
            "A healthy starter is the foundation of every good sourdough loaf.",
            "https://example.com/blog/images/crumb.jpg",
            "Feeding schedule",
            "Feed the starter twice a day with equal weights of flour and water.",
            "Once it doubles within six hours, it is ready to bake with.",
        ]

    def test_item_types(self, article_html):
        items = extract_items(article_html, base_url=BASE)
        assert isinstance(items[0], TextItem)
        assert isinstance(items[1], ImageItem)

    def test_noise_outside_container_excluded(self, article_html):
        joined = " ".join(_values(extract_items(article_html, base_url=BASE)))
        assert "cookies" not in joined
        assert "Copyright" not in joined
        assert "Popular posts" not in joined

    def test_noisy_subtree_excluded(self):
        html = """<html><body><article>
        <h1>Title</h1>
        <div class="cookie-banner">
          <h2>Cookie heading</h2>
          <p>We use cookies for a great many purposes, honestly.</p>
          <img src="https://example.com/cookie.png">
        </div>
        </article></body></html>"""
        assert _values(extract_items(html, base_url=BASE)) == ["Title"]

    def test_paragraph_threshold(self):
        twenty = "x" * 20
        twenty_one = "y" * 21
        html = f"<html><body><article><p>  {twenty}  </p><p> {twenty_one} </p></article></body></html>"
        assert _values(extract_items(html)) == [twenty_one]

    def test_paragraph_text_is_trimmed_exactly(self):
        html = "<html><body><article><p>\n   Hello there, <b>bold</b> world of bread!  \n</p></article></body></html>"
        assert _values(extract_items(html)) == ["Hello there, bold world of bread!"]

    def test_heading_is_leaf(self):
        html = '<html><body><article><h2>Intro <img src="/x.png"></h2></article></body></html>'
        assert _values(extract_items(html, base_url=BASE)) == ["Intro"]

    def test_empty_heading_skipped(self):
        html = "<html><body><article><h1>  </h1><h2>Real</h2></article></body></html>"
        assert _values(extract_items(html)) == ["Real"]

    def test_paragraph_is_leaf(self):
        html = (
            '<html><body><article><p>A caption-free paragraph with an image '
            '<img src="/inline.png"> inside it.</p></article></body></html>'
        )
        items = extract_items(html, base_url=BASE)
        assert all(isinstance(i, TextItem) for i in items)

    def test_unresolvable_image_skipped(self):
        html = '<html><body><article><img src="rel.png"><h1>T</h1></article></body></html>'
        assert _values(extract_items(html, base_url="")) == ["T"]

    def test_root_fallback_extracts_body(self, no_container_html):
        items = extract_items(no_container_html, base_url="https://example.com/docs/page")
        assert _values(items) == [
            "Plain page title",
            "This page has no semantic content container at all.",
            "https://example.com/docs/pic.png",
        ]

    def test_empty_document_yields_empty_list(self):
        assert extract_items("") == []
        assert extract_items("<html><body><nav>Menu</nav></body></html>") == []

    def test_deeply_nested_document(self):
        depth = 3000
        html = (
            "<html><body>" + "<div>" * depth
            + "<h2>Deep heading</h2><p>" + "x" * 30 + "</p>"
            + "</div>" * depth + "<p>" + "y" * 30 + "</p></body></html>"
        )
        assert _values(extract_items(html)) == ["Deep heading", "x" * 30, "y" * 30]

    def test_accepts_parsed_soup(self, article_html):
        soup = BeautifulSoup(article_html, "lxml")
        assert extract_items(soup, base_url=BASE) == extract_items(article_html, base_url=BASE)
