import re

import pytest

from core.sanitizer import ELLIPSIS, strip_html, truncate_preview

ENTITY_RE = re.compile(r"&(nbsp|amp|lt|gt|quot|#39);")
TAG_RE = re.compile(r"<[^>]*>")


def test_strips_nested_tags():
    html = "<div><p>Reset your <strong><em>password</em></strong> here.</p></div>"
    assert strip_html(html) == "Reset your password here."


def test_decodes_the_six_entities():
    html = "Tom&nbsp;&amp;&nbsp;Jerry &quot;quoted&quot; it&#39;s 1 &lt; 2 &gt; 0"
    assert strip_html(html) == "Tom & Jerry \"quoted\" it's 1 < 2 > 0"


def test_other_entities_pass_through():
    assert strip_html("caf&eacute; &#8217;") == "caf&eacute; &#8217;"


def test_collapses_whitespace_and_trims():
    html = "\n  <p>First\tline</p>\n\n<p>Second   line</p>  "
    assert strip_html(html) == "First line Second line"


@pytest.mark.parametrize("value", ["", None])
def test_empty_input_yields_empty_string(value):
    assert strip_html(value) == ""


def test_only_markup_yields_empty_string():
    assert strip_html("<br/><hr>   <img src='x.png'>") == ""


@pytest.mark.parametrize(
    "html",
    [
        "<ul><li>One&nbsp;item</li><li>Two &amp; three</li></ul>",
        "<p>  spaced\n\n out &quot;text&quot; </p>",
        "<h1>Title</h1><div><span>it&#39;s <b>bold</b></span></div>",
    ],
)
def test_output_has_no_markup_or_entities_and_is_idempotent(html):
    once = strip_html(html)
    assert not TAG_RE.search(once)
    assert not ENTITY_RE.search(once)
    assert strip_html(once) == once


def test_truncate_preview_cuts_to_exact_limit():
    text = "a" * 250
    assert truncate_preview(text, 200) == "a" * 200 + ELLIPSIS


def test_truncate_preview_sanitizes_before_cutting():
    html = "<p>" + "b" * 150 + "</p><p>" + "c" * 200 + "</p>"
    preview = truncate_preview(html, 300)
    assert preview.startswith("b" * 150 + " ")
    assert len(preview) == 300 + len(ELLIPSIS)


def test_truncate_preview_short_text_keeps_marker():
    assert truncate_preview("<p>Short</p>", 200) == "Short..."
