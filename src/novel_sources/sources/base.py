"""Source Adapter 抽象基类。

每个站点实现一个子类，对外提供统一的异步接口：

- ``fetch_catalog_page`` / ``fetch_novels``: 分页目录
- ``search``: 站内搜索
- ``fetch_novel_details``: 详情页元数据
- ``fetch_novel_chapters``: 章节列表
- ``fetch_chapter_content``: 章节正文 HTML

错误策略：批量类操作（目录、搜索、章节列表）吞掉抓取异常并返回空列表；
单项操作（详情、正文）向上传播 FetchError，但 429 限流始终被吞掉。
适配器实例不保存任何调用级可变状态，可被多个任务并发使用。
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

from novel_sources.fetchers.base import BaseFetcher, FetchError, RateLimitedError
from novel_sources.fetchers.document import Document, Element
from novel_sources.fetchers.requests_fetcher import RequestsFetcher
from novel_sources.models import CatalogFilters, Chapter, Novel, RankMode

logger = logging.getLogger(__name__)

# 正文容器中始终移除的非正文节点
_BASE_CONTENT_STRIP = "script, style"


class SourceAdapter(ABC):
    """站点适配器基类。

    子类需要声明:
        source_id: 写入 Novel.source_id 的常量，也是工厂匹配用的短名
        domains: 工厂用于匹配 URL 的域名片段
        item_selector: 目录/搜索页中单个条目的选择器
        content_selectors: 章节正文容器的候选选择器，按优先级排列
    """

    source_id: ClassVar[str] = ""
    name: ClassVar[str] = ""
    domains: ClassVar[tuple[str, ...]] = ()

    supported_ranks: ClassVar[frozenset[RankMode]] = frozenset({RankMode.LATEST})
    supports_genre: ClassVar[bool] = False

    item_selector: ClassVar[str] = ""
    content_selectors: ClassVar[tuple[str, ...]] = ()
    # 站点特有的广告/占位节点，追加在 script/style 之后移除
    content_strip: ClassVar[str] = ""

    def __init__(self, fetcher: BaseFetcher | None = None) -> None:
        self._fetcher = fetcher or RequestsFetcher()

    @classmethod
    def can_handle(cls, identifier: str) -> bool:
        """identifier 包含任一域名片段，或与短名相同（均不区分大小写）。"""
        lowered = identifier.strip().lower()
        if not lowered:
            return False
        if any(domain in lowered for domain in cls.domains):
            return True
        return lowered == cls.source_id.lower()

    # ------------------------------------------------------------------
    # 目录与搜索
    # ------------------------------------------------------------------

    async def fetch_novels(self) -> list[Novel]:
        """默认目录的第一页。"""
        return await self.fetch_catalog_page(1)

    async def fetch_catalog_page(self, page: int = 1, filters: CatalogFilters | None = None) -> list[Novel]:
        filters = filters or CatalogFilters()
        self._validate_filters(page, filters)
        url = self.catalog_url(page, filters)
        logger.info("[%s] 抓取目录第 %d 页: %s", self.source_id, page, url)
        return await self._fetch_listing(url)

    async def search(self, query: str, page: int = 1) -> list[Novel]:
        if page < 1:
            raise ValueError(f"page 必须 >= 1: {page}")
        url = self.search_url(query, page)
        logger.info("[%s] 搜索 %r 第 %d 页: %s", self.source_id, query, page, url)
        return await self._fetch_listing(url)

    def _validate_filters(self, page: int, filters: CatalogFilters) -> None:
        if page < 1:
            raise ValueError(f"page 必须 >= 1: {page}")
        if filters.rank not in self.supported_ranks:
            supported = ", ".join(sorted(rank.value for rank in self.supported_ranks))
            raise ValueError(f"{self.source_id} 不支持排序方式 {filters.rank.value}（可用: {supported}）")
        if filters.genre and not self.supports_genre:
            raise ValueError(f"{self.source_id} 不支持按类型过滤")

    async def _fetch_listing(self, url: str) -> list[Novel]:
        try:
            doc = await self._fetcher.fetch(url)
        except RateLimitedError:
            logger.warning("[%s] 目录请求被限流，返回空结果: %s", self.source_id, url)
            return []
        except FetchError as exc:
            logger.warning("[%s] 目录抓取失败，返回空结果: %s", self.source_id, exc)
            return []

        try:
            novels = self._parse_listing(doc)
        except Exception:  # noqa: BLE001 - 整页解析失败不应影响调用方
            logger.exception("[%s] 目录页解析失败，返回空结果: %s", self.source_id, url)
            return []

        logger.info("[%s] 解析到 %d 部小说: %s", self.source_id, len(novels), url)
        return novels

    def _parse_listing(self, doc: Document) -> list[Novel]:
        novels: list[Novel] = []
        for index, item in enumerate(doc.select(self.item_selector)):
            novel = self.parse_list_item(item)
            if novel is None:
                logger.debug("[%s] 第 %d 个条目缺少标题链接，已跳过", self.source_id, index)
                continue
            novels.append(novel)
        return novels

    # ------------------------------------------------------------------
    # 详情
    # ------------------------------------------------------------------

    async def fetch_novel_details(self, novel_url: str) -> Novel:
        """抓取详情页。网络错误向上传播；限流时返回仅含默认值的 Novel。"""
        logger.info("[%s] 抓取详情: %s", self.source_id, novel_url)
        try:
            doc = await self._fetcher.fetch(novel_url)
        except RateLimitedError:
            logger.warning("[%s] 详情请求被限流，返回默认值: %s", self.source_id, novel_url)
            doc = Document.empty(novel_url)
        return self.parse_details(doc, novel_url)

    # ------------------------------------------------------------------
    # 章节
    # ------------------------------------------------------------------

    async def fetch_novel_chapters(self, novel_url: str) -> list[Chapter]:
        """抓取章节列表，任何抓取失败都退化为空列表。"""
        logger.info("[%s] 抓取章节列表: %s", self.source_id, novel_url)
        try:
            chapters = await self._collect_chapters(novel_url)
        except RateLimitedError:
            logger.warning("[%s] 章节列表请求被限流，返回空列表: %s", self.source_id, novel_url)
            return []
        except FetchError as exc:
            logger.warning("[%s] 章节列表抓取失败，返回空列表: %s", self.source_id, exc)
            return []

        logger.info("[%s] 获取到 %d 个章节: %s", self.source_id, len(chapters), novel_url)
        return chapters

    async def fetch_chapter_content(self, chapter_url: str) -> str:
        """返回正文容器的内部 HTML。限流时返回空字符串，其他抓取错误向上传播。"""
        try:
            doc = await self._fetcher.fetch(chapter_url)
        except RateLimitedError:
            logger.warning("[%s] 正文请求被限流: %s", self.source_id, chapter_url)
            return ""

        container = self._find_content(doc)
        if container is None:
            logger.debug("[%s] 未找到正文容器: %s", self.source_id, chapter_url)
            return ""

        strip = ", ".join(s for s in (_BASE_CONTENT_STRIP, self.content_strip) if s)
        container.remove(strip)
        content = container.html()
        logger.debug("[%s] 正文长度: %d", self.source_id, len(content))
        return content

    def _find_content(self, doc: Document) -> Element | None:
        for selector in self.content_selectors:
            container = doc.select_first(selector)
            if container is not None:
                return container
        return None

    # ------------------------------------------------------------------
    # 子类实现
    # ------------------------------------------------------------------

    @abstractmethod
    def catalog_url(self, page: int, filters: CatalogFilters) -> str:
        """根据页码与过滤条件构造目录 URL。"""

    @abstractmethod
    def search_url(self, query: str, page: int) -> str:
        """构造搜索 URL，query 需经过 URL 编码。"""

    @abstractmethod
    def parse_list_item(self, item: Element) -> Novel | None:
        """解析目录/搜索中的单个条目；缺少标题链接时返回 None。"""

    @abstractmethod
    def parse_details(self, doc: Document, novel_url: str) -> Novel:
        """从详情页抽取完整元数据，所有字段都有兜底值。"""

    @abstractmethod
    async def _collect_chapters(self, novel_url: str) -> list[Chapter]:
        """站点特定的章节列表抓取策略。"""
