"""共享测试 fixtures 和配置。"""

from __future__ import annotations

from pathlib import Path

import pytest

from novel_sources.config import AppConfig, HttpConfig
from novel_sources.fetchers.base import BaseFetcher, FetchError
from novel_sources.fetchers.document import Document

# ============================================================
# 测试用 Fetcher
# ============================================================


class StaticFetcher(BaseFetcher):
    """按 URL 返回预置 HTML 的 Fetcher，值为异常实例时抛出该异常。"""

    def __init__(self, pages: dict[str, str | Exception]) -> None:
        self.pages = pages
        self.calls: list[tuple[str, dict[str, object]]] = []

    async def fetch(
        self,
        url: str,
        *,
        user_agent: str | None = None,
        accept_non_html: bool = False,
        ignore_http_errors: bool = False,
    ) -> Document:
        self.calls.append((url, {"accept_non_html": accept_non_html, "user_agent": user_agent}))
        page = self.pages.get(url)
        if page is None:
            raise FetchError(f"HTTP 404: {url}", url=url, status_code=404)
        if isinstance(page, Exception):
            raise page
        return Document(page, url)

    @property
    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]


@pytest.fixture
def make_fetcher() -> type[StaticFetcher]:
    """返回 StaticFetcher 类，测试内按需构造。"""
    return StaticFetcher


# ============================================================
# 配置相关 Fixtures
# ============================================================


@pytest.fixture
def sample_http_config() -> HttpConfig:
    """创建测试用 HTTP 配置。"""
    return HttpConfig(user_agent="TestAgent/1.0", timeout=5, verify_ssl=True)


@pytest.fixture
def sample_app_config(sample_http_config: HttpConfig) -> AppConfig:
    """创建完整的测试用应用配置。"""
    return AppConfig(http=sample_http_config)


@pytest.fixture
def sample_config_path(tmp_path: Path) -> Path:
    """创建临时测试配置文件并返回路径。"""
    config_content = """
http:
  user_agent: "TestAgent/2.0"
  timeout: 12
  verify_ssl: false
"""
    config_path = tmp_path / "test_config.yaml"
    config_path.write_text(config_content, encoding="utf-8")
    return config_path


# ============================================================
# NovelBin 页面 Fixtures
# ============================================================


@pytest.fixture
def novelbin_listing_html() -> str:
    """NovelBin 目录页：三个条目，其中第二个缺少标题链接。"""
    return """
<html><body>
<div class="list list-novel col-xs-12">
  <div class="row">
    <div class="col-xs-3"><img class="cover" data-src="https://images.novelbin.me/shadow-slave.jpg" src="/img/blank.png"></div>
    <div class="col-xs-7">
      <h3 class="novel-title"><a href="https://novelbin.me/novel-book/shadow-slave">Shadow Slave</a></h3>
      <span class="author">Guiltythree</span>
    </div>
    <div class="col-xs-2 text-info"><a href="#"><span class="chapter-title">Chapter 2100 Dawn</span></a></div>
  </div>
  <div class="row">
    <div class="col-xs-7"><h3 class="novel-title">Missing link</h3></div>
  </div>
  <div class="row">
    <div class="col-xs-3"><img class="cover" src="/covers/lord-of-mysteries.jpg"></div>
    <div class="col-xs-7">
      <h3 class="novel-title"><a href="/novel-book/lord-of-mysteries">Lord of the Mysteries</a></h3>
    </div>
  </div>
</div>
</body></html>
"""


@pytest.fixture
def novelbin_detail_html() -> str:
    return """
<html><head>
<meta property="og:url" content="https://novelbin.me/novel-book/shadow-slave/">
<meta itemprop="image" content="https://images.novelbin.me/shadow-slave-large.jpg">
</head><body>
<div class="book"><img class="lazy" data-src="https://images.novelbin.me/fallback.jpg"></div>
<h3 class="title" itemprop="name">Shadow Slave</h3>
<span itemprop="author"><meta itemprop="name" content="Guiltythree"></span>
<ul class="info info-meta">
  <li><h3>Author:</h3><a href="/a/guiltythree">Guiltythree (list)</a></li>
  <li><h3>Genre:</h3><a href="/genre/action">Action</a>, <a href="/genre/fantasy">Fantasy</a>, <a href="/genre/mystery">Mystery</a></li>
  <li><h3>Status:</h3><a href="/status/ongoing">Ongoing</a></li>
</ul>
<div class="desc-text" itemprop="description">
  <p>Growing up in poverty, Sunny never expected anything good from life.</p>
</div>
</body></html>
"""


@pytest.fixture
def novelbin_chapter_archive_html() -> str:
    return """
<div class="panel-body"><ul class="list-chapter">
  <li><a href="https://novelbin.me/novel-book/shadow-slave/chapter-1"><span class="chapter-title">Chapter 1 Nightmare Begins</span></a></li>
  <li><a href="/novel-book/shadow-slave/chapter-2"><span class="chapter-title">Chapter 2 Aspiration</span></a></li>
  <li><a><span>Locked</span></a></li>
</ul></div>
"""


@pytest.fixture
def novelbin_chapter_html() -> str:
    return (
        "<html><body><div id=\"chr-content\"><p>First paragraph.</p>"
        "<script>loadAds();</script><div id=\"pf-1234\">advert</div>"
        "<style>.x{color:red}</style><p>Second paragraph.</p></div></body></html>"
    )


# ============================================================
# Royal Road 页面 Fixtures
# ============================================================


@pytest.fixture
def royalroad_listing_html() -> str:
    return """
<html><body>
<div class="fiction-list">
  <div class="row fiction-list-item">
    <figure class="col-sm-2"><img data-type="cover" src="https://www.royalroadcdn.com/public/covers-large/21220.jpg"></figure>
    <div class="col-sm-10">
      <h2 class="fiction-title"><a href="/fiction/21220/mother-of-learning">Mother of Learning</a></h2>
      <span class="author">nobody103</span>
      <span class="tags"><a class="fiction-tag">Fantasy</a><a class="fiction-tag"> Time Loop </a></span>
      <div class="fiction-description">  Zorian is a teenage mage of humble birth.  </div>
    </div>
  </div>
  <div class="row fiction-list-item">
    <div class="col-sm-10"><h2 class="fiction-title">No anchor here</h2></div>
  </div>
  <div class="row fiction-list-item">
    <div class="col-sm-10"><h2 class="fiction-title"><a href="/fiction/999/tiny-story">Tiny Story</a></h2></div>
  </div>
</div>
</body></html>
"""


@pytest.fixture
def royalroad_detail_html() -> str:
    return """
<html><head>
<meta name="twitter:title" content="Mother of Learning | Royal Road">
<meta property="books:author" content="nobody103">
<meta name="twitter:creator" content="@nobody103">
<meta property="og:image" content="https://www.royalroadcdn.com/public/covers-large/21220.jpg">
<meta name="description" content="Meta description">
</head><body>
<h1 class="profile-title">Mother of Learning</h1>
<div class="description"><div class="hidden-content">
  <p>Zorian is a teenage mage of humble birth and slightly below-average skill.</p>
  <p>  Then, on the eve of the Summer Festival, he is killed.  </p>
</div></div>
<span class="tags"><a class="fiction-tag">Fantasy</a><a class="fiction-tag">Magic</a></span>
<script>
  window.fictionId = 21220;
  window.chapters = [{"id":301778,"volumeId":null,"title":"1. Good Morning Brother","slug":"1-good-morning-brother","date":"2014-12-04T20:48:52Z","order":0,"visible":1,"subscriptionTiers":[{"tier":1,"name":"Patron"}],"doesNotRollOver":false,"isUnlocked":true,"url":"/fiction/21220/mother-of-learning/chapter/301778/1-good-morning-brother"},{"id":301779,"volumeId":12,"title":"2. Life Goes On","slug":"2-life-goes-on","date":"2014-12-04T20:52:11Z","order":1,"visible":1,"subscriptionTiers":null,"doesNotRollOver":false,"isUnlocked":true,"url":"/fiction/21220/mother-of-learning/chapter/301779/2-life-goes-on","extraField":"ignored"}];
  window.volumes = [];
</script>
</body></html>
"""


@pytest.fixture
def royalroad_chapter_html() -> str:
    return (
        "<html><body><div class=\"chapter-inner chapter-content\">"
        "<p>Zorian's eyes abruptly shot open.</p><script>track();</script></div></body></html>"
    )


# ============================================================
# Pytest Hooks
# ============================================================


def pytest_addoption(parser: pytest.Parser) -> None:
    """注册 --run-functional 选项，用于控制真实功能测试执行。"""
    parser.addoption(
        "--run-functional",
        action="store_true",
        default=False,
        help="运行带 functional 标记的真实功能测试，默认跳过以避免访问外部站点",
    )


def pytest_configure(config: pytest.Config) -> None:
    """注册 pytest 标记。"""
    config.addinivalue_line(
        "markers",
        "functional: 需要访问真实小说站点的功能测试",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """默认跳过 functional 测试，除非显式传入 --run-functional。"""
    if config.getoption("--run-functional"):
        return

    skip_marker = pytest.mark.skip(reason="缺少 --run-functional，因此跳过真实功能测试")
    for item in items:
        if "functional" in item.keywords:
            item.add_marker(skip_marker)
