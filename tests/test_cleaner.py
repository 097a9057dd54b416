"""Tests for wx_html_cleaner.cleaner module."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from wx_html_cleaner.cleaner import clean
from wx_html_cleaner.document import Document, SyntheticDocument
from wx_html_cleaner.string_mode import clean_string

from .conftest import PROSE_WITH_ONE_KEYWORD, SAMPLE_HTML, SCENARIO_HTML

TIDE_SENTENCE = "The tide came in slowly over the flats and the boats lifted off the mud one by one. "


def _assert_no_noise(result: str) -> None:
    assert "<style" not in result.lower()
    assert "<script" not in result.lower()
    assert "style=" not in result.lower()


class TestScenario:
    def test_scenario_document(self):
        result = clean(SCENARIO_HTML)
        assert "<h1>Title Text Here</h1>" in result
        assert "<p>Some <strong>important</strong> text content that is long enough.</p>" in result
        assert '<img src="http://x/1.jpg" alt="">' in result
        assert "style" not in result
        assert "color:red" not in result

    def test_output_is_a_complete_document(self):
        result = clean(SCENARIO_HTML)
        assert result.startswith("<!DOCTYPE html>")
        assert result.count("<head>") == 1
        assert result.count("<body>") == 1
        assert result.count('<meta charset="utf-8">') == 1


class TestSampleArticle:
    def test_keeps_article_content(self):
        result = clean(SAMPLE_HTML)
        assert "The river town kept its old stone bridges" in result
        assert "<strong>Every spring</strong> the markets moved uphill for a week." in result
        assert '<img src="https://mmbiz.qpic.cn/bridge.jpg" alt="bridge">' in result
        assert "Granite piers" in result
        assert "Timber rails" in result
        assert "<ul>" in result

    def test_removes_noise(self):
        result = clean(SAMPLE_HTML)
        _assert_no_noise(result)
        assert "font-size" not in result
        assert "MzA5" not in result
        assert "Copyright" not in result
        assert "首页" not in result
        assert "微信扫一扫" not in result
        assert "editor marker" not in result
        assert "mpvoice" not in result
        assert "class=" not in result
        assert "data-tools" not in result

    def test_rebuilds_head(self):
        result = clean(SAMPLE_HTML)
        assert "<title>旧城的桥 | Stone Bridges</title>" in result
        assert 'name="viewport"' in result
        assert "og:title" not in result
        assert "keywords" not in result
        assert "page.css" not in result
        assert result.count('<meta charset="utf-8">') == 1

    def test_reduces_size(self):
        assert len(clean(SAMPLE_HTML)) < len(SAMPLE_HTML)


class TestProperties:
    @pytest.mark.parametrize(
        "html_text",
        [
            SCENARIO_HTML,
            SAMPLE_HTML,
            "<html><body><span>Free span text number one</span>"
            "<div>Second block of plain text</div></body></html>",
            f'<html><body><div id="js_content"><div>{TIDE_SENTENCE * 3}</div>'
            "<p>Closing paragraph for the story.</p></div></body></html>",
            "<html><body><ul><li>Item text here</li><li><p>Second item</p></li></ul></body></html>",
        ],
    )
    def test_idempotent(self, html_text):
        once = clean(html_text)
        twice = clean(once)
        _assert_no_noise(twice)
        assert twice.count("<div>") == once.count("<div>")
        assert twice.count("<p>") == once.count("<p>")
        assert twice == once

    def test_span_and_block_merged_on_first_pass(self):
        once = clean(
            "<html><body><span>Free span text number one</span>"
            "<div>Second block of plain text</div></body></html>"
        )
        assert "<div>Free span text number one Second block of plain text</div>" in once

    def test_long_region_block_stays_whole(self):
        html_text = (
            f'<html><body><div id="js_content"><div>{TIDE_SENTENCE * 3}</div>'
            "<p>Closing paragraph for the story.</p></div></body></html>"
        )
        once = clean(html_text)
        assert f"<div>{(TIDE_SENTENCE * 3).strip()}</div>" in clean(once)

    def test_list_item_text_wrapped_in_div(self):
        result = clean("<ul><li>Item text here</li></ul>")
        assert "<ul><li><div>Item text here</div></li></ul>" in result

    def test_line_break_keeps_words_apart(self):
        result = clean("<html><body><div>Line one words<br>line two words</div></body></html>")
        assert "<div>Line one words line two words</div>" in result

    @pytest.mark.parametrize(
        "html_text",
        [
            "",
            "   ",
            "plain text, no markup at all",
            "<<<>>><<",
            "<div><p>unclosed <b>tags",
            "\x00\x01\x02binary��garbage\x7f",
            "<html><head><title>x</title></head></html>",
            "</body></html><body>",
            "<!-- only a comment -->",
        ],
    )
    def test_never_raises(self, html_text):
        result = clean(html_text)
        assert isinstance(result, str)

    def test_style_and_script_text_never_survives(self):
        html_text = (
            "<html><head><style>p.secret { color: #abcdef; }</style></head><body>"
            "<script>window.trackingPixel = 42;</script>"
            "<p>Visible paragraph text for readers.</p>"
            "<STYLE type='text/css'>h1 { margin: 0 }</STYLE></body></html>"
        )
        result = clean(html_text)
        assert "#abcdef" not in result
        assert "trackingPixel" not in result
        assert "margin: 0" not in result
        assert "Visible paragraph text for readers." in result

    def test_image_in_content_region_survives(self):
        filler = "This paragraph is long enough to make the region count as content. " * 3
        html_text = (
            "<html><body><div id='js_content'>"
            f"<p>{filler}</p><img src=\"a.jpg\" alt=\"x\">"
            "</div></body></html>"
        )
        result = clean(html_text)
        assert '<img src="a.jpg" alt="x">' in result

    def test_empty_elements_removed(self):
        html_text = "<html><body><div></div><span></span><p>Real text here.</p></body></html>"
        result = clean(html_text)
        assert "<div></div>" not in result
        assert "<span></span>" not in result
        assert "<p>Real text here.</p>" in result

    def test_adjacent_divs_merged_once(self):
        html_text = (
            "<html><body>"
            "<div>The harbour at dawn, photographed</div>"
            "<div>Taken on the northern pier in 2019</div>"
            "</body></html>"
        )
        result = clean(html_text)
        assert "<div>The harbour at dawn, photographed Taken on the northern pier in 2019</div>" in result
        assert result.count("Taken on the northern pier") == 1

    def test_ui_text_filtered_but_prose_kept(self):
        html_text = (
            "<html><body>"
            f"<div>{'点击' * 20}</div>"
            "<p>A paragraph keeps the extraction non-empty.</p>"
            f"<div>{PROSE_WITH_ONE_KEYWORD}</div>"
            "</body></html>"
        )
        result = clean(html_text)
        assert "点击点击" not in result
        assert "farmers read the sky" in result


class TestFallbacks:
    def test_synthetic_document_uses_string_mode(self):
        synthetic = Document(
            tree=SyntheticDocument.from_text(SCENARIO_HTML),
            is_real_tree=False,
            raw=SCENARIO_HTML,
        )
        with patch("wx_html_cleaner.cleaner.acquire", return_value=synthetic):
            result = clean(SCENARIO_HTML)
        assert result == clean_string(SCENARIO_HTML)
        _assert_no_noise(result)

    def test_tree_failure_falls_back_to_string_mode(self):
        with patch("wx_html_cleaner.cleaner.clean_tree", side_effect=RuntimeError("boom")):
            result = clean(SCENARIO_HTML)
        assert result == clean_string(SCENARIO_HTML)

    def test_total_failure_returns_input(self):
        with patch("wx_html_cleaner.cleaner.clean_tree", side_effect=RuntimeError("boom")), \
             patch("wx_html_cleaner.cleaner.clean_string", side_effect=RuntimeError("boom")):
            result = clean(SCENARIO_HTML)
        assert result == SCENARIO_HTML

    def test_html_parser_builder(self):
        result = clean(SCENARIO_HTML, parser="html.parser")
        assert "<h1>Title Text Here</h1>" in result
        assert '<img src="http://x/1.jpg" alt="">' in result

    def test_fragment_without_body_tag(self):
        result = clean("<div>Hello there, world</div>", parser="html.parser")
        assert "Hello there, world" in result
        assert result.count("<body>") == 1
