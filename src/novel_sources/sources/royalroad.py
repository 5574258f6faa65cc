"""Royal Road (royalroad.com) 适配器。

目录支持“最新更新”“评分最高”两种排序、按类型过滤以及“已完结”列表；
章节列表内嵌在详情页源码的 ``window.chapters`` 数组中，无需额外请求。
"""

from __future__ import annotations

import logging
from urllib.parse import urlencode, urljoin

from novel_sources.fetchers.document import Document, Element
from novel_sources.models import CatalogFilters, Chapter, Novel, RankMode

from .base import SourceAdapter
from .embedded import decode_chapter_entries, extract_window_array
from .factory import register_source
from .normalize import (
    UNKNOWN_AUTHOR,
    UNKNOWN_TITLE,
    derive_novel_id,
    first_match,
    join_paragraphs,
    select_attr,
    select_text,
    select_texts,
)

logger = logging.getLogger(__name__)

BASE_URL = "https://www.royalroad.com"

_LISTING_PATHS = {
    RankMode.LATEST: "/fictions/latest-updates",
    RankMode.BEST_RATED: "/fictions/best-rated",
}
# 已完结列表是独立页面，不区分排序方式
_COMPLETED_PATH = "/fictions/complete"

SEARCH_URL = f"{BASE_URL}/fictions/search"

_TITLE_LOOKUPS = (
    ("h1.profile-title", None),
    ('meta[name="twitter:title"]', "content"),
)
_AUTHOR_LOOKUPS = (
    ('meta[property="books:author"]', "content"),
    ('meta[name="twitter:creator"]', "content"),
)
_COVER_LOOKUPS = (('meta[property="og:image"]', "content"),)
_DESCRIPTION_META_LOOKUPS = (
    ('meta[name="description"]', "content"),
    ('meta[property="og:description"]', "content"),
)


@register_source
class RoyalRoadAdapter(SourceAdapter):
    source_id = "royalroad"
    name = "Royal Road"
    domains = ("royalroad.com",)

    supported_ranks = frozenset({RankMode.LATEST, RankMode.BEST_RATED})
    supports_genre = True

    item_selector = ".fiction-list-item"
    content_selectors = ("#chapter-content", ".chapter-content", ".chapter-inner")

    def catalog_url(self, page: int, filters: CatalogFilters) -> str:
        path = _COMPLETED_PATH if filters.completed else _LISTING_PATHS[filters.rank]
        params: dict[str, str | int] = {}
        if filters.genre:
            params["genre"] = filters.genre
        params["page"] = page
        return f"{BASE_URL}{path}?{urlencode(params)}"

    def search_url(self, query: str, page: int) -> str:
        params = {"title": query, "globalFilters": "true", "page": page}
        return f"{SEARCH_URL}?{urlencode(params)}"

    def parse_list_item(self, item: Element) -> Novel | None:
        anchor = item.select_first(".fiction-title > a")
        if anchor is None:
            return None

        title = anchor.text()
        url = anchor.absolute_url("href")

        return Novel(
            id=derive_novel_id(url, title),
            title=title,
            author=select_text(item, ".author") or UNKNOWN_AUTHOR,
            description=select_text(item, ".fiction-description") or "",
            url=url,
            tags=select_texts(item, "span.tags a.fiction-tag"),
            source_id=self.source_id,
            cover_url=select_attr(item, "figure img[data-type=cover]", "src"),
        )

    def parse_details(self, doc: Document, novel_url: str) -> Novel:
        title = first_match(doc, _TITLE_LOOKUPS) or UNKNOWN_TITLE

        paragraphs = [p.text() for p in doc.select(".description .hidden-content p")]
        description = join_paragraphs(paragraphs) or first_match(doc, _DESCRIPTION_META_LOOKUPS) or ""

        return Novel(
            id=derive_novel_id(novel_url, title),
            title=title,
            author=first_match(doc, _AUTHOR_LOOKUPS) or UNKNOWN_AUTHOR,
            description=description,
            url=novel_url,
            tags=select_texts(doc, ".tags a.fiction-tag"),
            source_id=self.source_id,
            cover_url=first_match(doc, _COVER_LOOKUPS),
        )

    async def _collect_chapters(self, novel_url: str) -> list[Chapter]:
        doc = await self._fetcher.fetch(novel_url)

        items = extract_window_array(doc.raw, "chapters")
        if items is None:
            logger.warning("[%s] 页面中没有章节数据: %s", self.source_id, novel_url)
            return []

        chapters: list[Chapter] = []
        for entry in decode_chapter_entries(items):
            if not entry.url:
                continue
            chapters.append(Chapter(title=entry.title, url=urljoin(doc.url, entry.url), novel_url=novel_url))
        return chapters
