from __future__ import annotations

import pytest

from novel_sources.config import HttpConfig
from novel_sources.fetchers.requests_fetcher import RequestsFetcher
from novel_sources.sources import (
    NovelBinAdapter,
    RoyalRoadAdapter,
    SourceAdapter,
    UnknownSourceError,
    available_sources,
    resolve,
    resolve_class,
)


def test_available_sources_order() -> None:
    """注册顺序固定，即匹配优先级。"""
    assert available_sources() == ["royalroad", "novelbin"]


def test_identifier_with_both_domains_prefers_royalroad() -> None:
    """同时包含两个域名片段时按注册顺序归 Royal Road。"""
    identifier = "https://www.royalroad.com/fiction/1/x?ref=novelbin.me"

    assert resolve_class(identifier) is RoyalRoadAdapter


@pytest.mark.parametrize(
    ("identifier", "expected"),
    [
        ("https://www.royalroad.com/fictions/123", RoyalRoadAdapter),
        ("royalroad", RoyalRoadAdapter),
        ("RoyalRoad", RoyalRoadAdapter),
        ("HTTPS://WWW.ROYALROAD.COM/fiction/1/x", RoyalRoadAdapter),
        ("https://novelbin.me/novel-book/shadow-slave/chapter-1", NovelBinAdapter),
        ("NovelBin", NovelBinAdapter),
    ],
)
def test_resolve_matches(identifier: str, expected: type[SourceAdapter]) -> None:
    adapter = resolve(identifier)

    assert type(adapter) is expected
    assert resolve_class(identifier) is expected


def test_url_and_short_name_resolve_to_same_variant() -> None:
    assert type(resolve("https://www.royalroad.com/fictions/123")) is type(resolve("royalroad"))


@pytest.mark.parametrize("identifier", ["unknown-domain.example", "", "royalroad-fan", "https://novelbin.com/x"])
def test_resolve_unknown_raises(identifier: str) -> None:
    """无匹配时抛出 UnknownSourceError，不会退化为默认适配器。"""
    with pytest.raises(UnknownSourceError):
        resolve(identifier)


def test_unknown_source_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        resolve("nowhere")


def test_resolve_with_config_builds_fetcher(sample_http_config: HttpConfig) -> None:
    """提供配置时按配置构造 RequestsFetcher。"""
    adapter = resolve("novelbin", sample_http_config)

    fetcher = adapter._fetcher
    assert isinstance(fetcher, RequestsFetcher)
    assert fetcher.user_agent == "TestAgent/1.0"
    assert fetcher.timeout == 5


def test_resolve_with_explicit_fetcher(make_fetcher) -> None:
    fetcher = make_fetcher({})

    adapter = resolve("royalroad", fetcher=fetcher)

    assert adapter._fetcher is fetcher
