"""Shared fixtures for wx-html-cleaner tests."""

from __future__ import annotations

import pytest

from wx_html_cleaner.config import Settings


@pytest.fixture()
def settings(tmp_path) -> Settings:
    """Settings writing into a temporary output directory."""
    return Settings(output_dir=str(tmp_path / "out"))


SCENARIO_HTML = (
    "<html><head><style>.a{color:red}</style></head><body>"
    '<div id="js_content"><h1>Title Text Here</h1>'
    "<p>Some <strong>important</strong> text content that is long enough.</p>"
    '<img src="http://x/1.jpg"></div></body></html>'
)

SAMPLE_HTML = """\
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width">
    <meta property="og:title" content="旧城的桥">
    <meta name="keywords" content="travel">
    <title>旧城的桥 | Stone Bridges</title>
    <link rel="stylesheet" href="https://res.wx.qq.com/page.css">
    <style>.rich_media_title { font-size: 22px; }</style>
    <script>var biz = "MzA5"; window.__report = true;</script>
</head>
<body id="activity-detail" class="zh_CN">
    <div class="top-nav"><a href="/">首页</a><a href="/more">More</a></div>
    <div id="page-content" class="rich_media_area_primary">
        <h1 class="rich_media_title" id="activity-name">旧城的桥 Stone Bridges</h1>
        <div id="meta_content" class="rich_media_meta_list"><span id="js_author_name">Author Li</span></div>
        <div class="rich_media_content" id="js_content" style="visibility: hidden;">
            <section style="margin: 0 8px;" data-tools="135editor">
                <p style="text-align: justify;"><span style="color: #333;">The river town kept its old stone bridges through three centuries of floods.</span></p>
                <p><strong style="color: red;">Every spring</strong> the markets moved uphill for a week.</p>
            </section>
            <section><img data-src="https://mmbiz.qpic.cn/bridge.jpg" data-alt="bridge" class="rich_pages" style="width: 100%;"></section>
            <mpvoice voice_encode_fileid="abc" name="interview"></mpvoice>
            <ul class="list-paddingleft-2"><li><p>Granite piers</p></li><li><p>Timber rails</p></li></ul>
            <p><br></p>
            <!-- editor marker -->
        </div>
    </div>
    <div class="qr_code_pc"><p>微信扫一扫关注该公众号</p></div>
    <footer>Copyright 2024</footer>
</body>
</html>
"""

# Over 50 characters, mentions a UI keyword exactly once.
PROSE_WITH_ONE_KEYWORD = (
    "The river town kept its old stone bridges through three centuries of floods, "
    "and the people who lived there learned to read the water the way farmers read "
    "the sky. 点击 Every spring the markets moved uphill for a week and came back down."
)
