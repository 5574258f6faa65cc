"""novel-sources - 小说站点抓取与规范化核心。"""

from __future__ import annotations

from .fetchers import FetchError, RateLimitedError
from .models import CatalogFilters, Chapter, Novel, RankMode
from .sources import SourceAdapter, UnknownSourceError, available_sources, resolve

__version__ = "0.1.0"

__all__ = [
    "CatalogFilters",
    "Chapter",
    "FetchError",
    "Novel",
    "RankMode",
    "RateLimitedError",
    "SourceAdapter",
    "UnknownSourceError",
    "available_sources",
    "resolve",
]
