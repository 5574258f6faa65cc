"""NovelBin (novelbin.me) 适配器。

目录支持“最新更新”与“热门”两种排序以及“已完结”过滤；
章节列表需要先从详情页的 og:url 得到小说 key，再请求 AJAX 章节归档接口。
"""

from __future__ import annotations

import logging
from urllib.parse import urlencode

from novel_sources.fetchers.document import Document, Element
from novel_sources.models import CatalogFilters, Chapter, Novel, RankMode

from .base import SourceAdapter
from .factory import register_source
from .normalize import (
    UNKNOWN_AUTHOR,
    UNKNOWN_TITLE,
    derive_novel_id,
    first_match,
    first_non_empty,
    select_attr,
    select_text,
    select_texts,
)

logger = logging.getLogger(__name__)

BASE_URL = "https://novelbin.me"

_SORT_PATHS = {
    RankMode.LATEST: "/sort/novelbin-daily-update",
    RankMode.POPULAR: "/sort/novelbin-popular",
}
_COMPLETED_SUFFIX = "/completed"

SEARCH_URL = f"{BASE_URL}/search"
CHAPTER_ARCHIVE_URL = f"{BASE_URL}/ajax/chapter-archive"

# 详情页字段的兜底链，顺序即优先级
_TITLE_LOOKUPS = (("h3.title[itemprop=name]", None),)
_AUTHOR_LOOKUPS = (
    ("span[itemprop=author] meta[itemprop=name]", "content"),
    ('ul.info.info-meta li:-soup-contains("Author") a', None),
)
_COVER_LOOKUPS = (
    ("meta[itemprop=image]", "content"),
    (".book img.lazy", "data-src"),
)
_DESCRIPTION_LOOKUPS = (("div.desc-text[itemprop=description]", None),)
_GENRE_SELECTOR = 'ul.info.info-meta li:has(h3:-soup-contains("Genre")) a'
_STATUS_SELECTOR = 'ul.info.info-meta li:has(h3:-soup-contains("Status")) a'


@register_source
class NovelBinAdapter(SourceAdapter):
    source_id = "novelbin"
    name = "NovelBin"
    domains = ("novelbin.me",)

    supported_ranks = frozenset({RankMode.LATEST, RankMode.POPULAR})
    supports_genre = False

    item_selector = ".list-novel .row"
    content_selectors = ("div#chr-content",)
    content_strip = 'div[id^="pf-"]'

    def catalog_url(self, page: int, filters: CatalogFilters) -> str:
        path = _SORT_PATHS[filters.rank]
        if filters.completed:
            path += _COMPLETED_SUFFIX
        return f"{BASE_URL}{path}?{urlencode({'page': page})}"

    def search_url(self, query: str, page: int) -> str:
        return f"{SEARCH_URL}?{urlencode({'keyword': query, 'page': page})}"

    def parse_list_item(self, item: Element) -> Novel | None:
        anchor = item.select_first(".novel-title a")
        if anchor is None:
            return None

        title = anchor.text()
        url = anchor.absolute_url("href")
        latest_chapter = select_text(item, ".col-xs-2 .chapter-title") or ""
        cover_url = first_non_empty(
            select_attr(item, "img.cover", "data-src"),
            select_attr(item, "img.cover", "src"),
        )

        return Novel(
            id=derive_novel_id(url, title),
            title=title,
            author=select_text(item, ".author") or UNKNOWN_AUTHOR,
            description=f"Latest: {latest_chapter}",
            url=url,
            tags=(),
            source_id=self.source_id,
            cover_url=cover_url,
        )

    def parse_details(self, doc: Document, novel_url: str) -> Novel:
        title = first_match(doc, _TITLE_LOOKUPS) or UNKNOWN_TITLE
        return Novel(
            id=derive_novel_id(novel_url, title),
            title=title,
            author=first_match(doc, _AUTHOR_LOOKUPS) or UNKNOWN_AUTHOR,
            description=first_match(doc, _DESCRIPTION_LOOKUPS) or "",
            url=novel_url,
            tags=select_texts(doc, _GENRE_SELECTOR),
            status=select_text(doc, _STATUS_SELECTOR),
            source_id=self.source_id,
            cover_url=first_match(doc, _COVER_LOOKUPS),
        )

    async def _collect_chapters(self, novel_url: str) -> list[Chapter]:
        detail = await self._fetcher.fetch(novel_url)

        og_url = select_attr(detail, 'meta[property="og:url"]', "content")
        if not og_url:
            logger.warning("[%s] 详情页缺少 og:url，无法定位章节归档: %s", self.source_id, novel_url)
            return []

        novel_key = og_url.rstrip("/").rsplit("/", 1)[-1]
        archive_url = f"{CHAPTER_ARCHIVE_URL}?{urlencode({'novelId': novel_key})}"
        logger.info("[%s] 请求章节归档: %s", self.source_id, archive_url)

        archive = await self._fetcher.fetch(archive_url, accept_non_html=True)
        chapters: list[Chapter] = []
        for anchor in archive.select("li a"):
            url = anchor.absolute_url("href")
            if not url:
                continue
            chapters.append(Chapter(title=anchor.text(), url=url, novel_url=novel_url))
        return chapters
