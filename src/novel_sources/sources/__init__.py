"""Source Adapter 包。

推荐用法::

    from novel_sources.sources import resolve

    adapter = resolve("https://www.royalroad.com/fiction/12345/some-title")
    novel = await adapter.fetch_novel_details("https://www.royalroad.com/fiction/12345/some-title")
    chapters = await adapter.fetch_novel_chapters(novel.url)
"""

from __future__ import annotations

from .base import SourceAdapter
from .factory import UnknownSourceError, available_sources, register_source, resolve, resolve_class

# 导入具体实现以触发注册，顺序即匹配优先级：同时包含两个域名片段的标识归 Royal Road
from .royalroad import RoyalRoadAdapter  # isort: skip
from .novelbin import NovelBinAdapter  # isort: skip

__all__ = [
    "NovelBinAdapter",
    "RoyalRoadAdapter",
    "SourceAdapter",
    "UnknownSourceError",
    "available_sources",
    "register_source",
    "resolve",
    "resolve_class",
]
