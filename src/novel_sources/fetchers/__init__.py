"""Fetchers 包 - 页面抓取与文档查询。

所有 Source Adapter 共享同一个抓取接口::

    from novel_sources.fetchers import RequestsFetcher

    fetcher = RequestsFetcher()
    doc = await fetcher.fetch("https://example.com")
    links = [a.absolute_url("href") for a in doc.select("a")]
"""

from __future__ import annotations

from .base import DEFAULT_TIMEOUT, BaseFetcher, FetchError, RateLimitedError
from .document import Document, Element
from .html_headers import DEFAULT_HEADERS, DEFAULT_USER_AGENT
from .requests_fetcher import RequestsFetcher

__all__ = [
    "DEFAULT_HEADERS",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "BaseFetcher",
    "Document",
    "Element",
    "FetchError",
    "RateLimitedError",
    "RequestsFetcher",
]
