from __future__ import annotations

import pytest
from bs4 import BeautifulSoup, CData

from pagetext.config import ExtractorConfig
from pagetext.extractor import TextExtractor, extract_from_html
from pagetext.scope import SelectorSyntaxError


def _text(html: str, **cfg) -> str:
    return extract_from_html(html, ExtractorConfig(**cfg))


def test_line_break_becomes_space() -> None:
    assert _text("<body>Hello<br>World</body>") == "Hello World"


def test_unmatched_pattern_extracts_whole_document() -> None:
    html = '<div id="y">A</div><p>B</p>'
    assert _text(html, include_patterns=("DIV#x",)) == "A B"


def test_excluded_tag_is_dropped() -> None:
    html = "<div>Keep<script>drop()</script>More</div>"
    assert _text(html, exclude_tags=frozenset({"script"})) == "Keep More"


def test_excluded_subtree_keeps_siblings() -> None:
    html = "<div>Keep<nav>Menu <b>bold</b></nav>More</div><p>Tail</p>"
    assert _text(html, exclude_tags=frozenset({"nav"})) == "Keep More Tail"


def test_nested_excluded_tags_end_with_outer_one() -> None:
    html = "<aside>a<aside>b</aside>c</aside>d"
    assert _text(html, exclude_tags=frozenset({"aside"})) == "d"


def test_size_cap_truncates_output() -> None:
    text = _text("<p>Hello World</p>", max_text_size=5)
    assert len(text) <= 5
    assert text == "Hello"


def test_size_cap_stops_early_across_blocks() -> None:
    html = "<p>aaaa</p><p>bbbb</p><p>cccc</p>"
    assert _text(html, max_text_size=6) == "aaaa b"


def test_block_followed_by_text_gets_a_space() -> None:
    assert _text("<div>One</div>Two") == "One Two"


def test_no_text_flag_suppresses_everything() -> None:
    html = "<article><p>Some real content</p></article>"
    cfg = dict(no_text=True, include_patterns=("article",), max_text_size=100)
    assert _text(html, **cfg) == ""


def test_first_match_scoping_ignores_rest_of_document() -> None:
    html = "<header>Top</header><div class='main'>Body <b>text</b></div><footer>Foot</footer>"
    assert _text(html, include_patterns=("article", "div.main")) == "Body text"


def test_region_newline_counts_as_boundary_whitespace() -> None:
    # the newline closing one region already separates it from the next block, no extra space
    html = "<ul><li>One</li><li>Two</li></ul>"
    assert _text(html, include_patterns=("li",)) == "One\nTwo"


def test_nested_blocks_produce_single_space() -> None:
    html = "<div><div><p>One</p></div></div><div><p>Two</p></div>"
    assert _text(html) == "One Two"


def test_result_has_no_edge_whitespace() -> None:
    html = "  <div>  <p>  x  </p>  </div>  <br> "
    text = _text(html)
    assert text == "x"


def test_inline_markup_does_not_add_spaces() -> None:
    assert _text("<p>con<b>cat</b>enated</p>") == "concatenated"


def test_whitespace_is_collapsed_outside_pre() -> None:
    assert _text("<p>a   lot \n of\t space</p>") == "a lot of space"


def test_preformatted_text_is_kept() -> None:
    assert _text("<div>x</div><pre>  a\n  b</pre>") == "x   a\n  b"


def test_comments_and_scripts_are_not_text() -> None:
    assert _text("<div>a<!-- hidden -->b</div>") == "ab"
    assert _text("<div>a<script>var x;</script>b</div>") == "a b"


def test_cdata_is_verbatim() -> None:
    soup = BeautifulSoup("<div></div>", "html.parser")
    soup.div.append(CData("  a   b  "))
    assert TextExtractor().extract(soup) == "a   b"


def test_non_element_root_yields_empty_text() -> None:
    soup = BeautifulSoup("<p>x</p>", "html.parser")
    extractor = TextExtractor()
    assert extractor.extract(None) == ""
    assert extractor.extract(soup.p.string) == ""


def test_text_is_an_alias_of_extract() -> None:
    soup = BeautifulSoup("<p>x</p>", "html.parser")
    assert TextExtractor().text(soup) == "x"


def test_extractor_is_reusable_across_documents() -> None:
    extractor = TextExtractor(ExtractorConfig(exclude_tags=frozenset({"nav"})))
    first = BeautifulSoup("<nav>skip</nav><p>one</p>", "html.parser")
    second = BeautifulSoup("<p>two</p><nav>skip", "html.parser")
    assert extractor.extract(first) == "one"
    assert extractor.extract(second) == "two"


def test_custom_selector_is_used_for_scoping() -> None:
    soup = BeautifulSoup("<p>a</p><p>b</p>", "html.parser")

    def last_paragraph(root, pattern):
        return root.find_all("p")[-1:]

    extractor = TextExtractor(ExtractorConfig(include_patterns=("anything",)), selector=last_paragraph)
    assert extractor.extract(soup) == "b"


def test_malformed_include_pattern_raises() -> None:
    with pytest.raises(SelectorSyntaxError):
        _text("<p>x</p>", include_patterns=("p[",))
