"""通用数据结构定义。

Novel / Chapter 为不可变值对象，每次抓取都重新构造；
核心层不持有任何长期存储，缓存由调用方负责。
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, ValidatorFunctionWrapHandler, field_validator
from pydantic.alias_generators import to_camel


class RankMode(str, Enum):
    """目录页排序方式。"""

    LATEST = "latest"
    POPULAR = "popular"
    BEST_RATED = "best_rated"


class Novel(BaseModel):
    """一部小说的规范化元数据。

    Attributes:
        id: 站内标识，取自详情页 URL 的最后一个路径段（无路径时退化为标题）
        title: 标题
        author: 作者，缺失时为 "Unknown Author"
        description: 简介或最新章节摘要，可为空
        url: 详情页绝对 URL，与 id 一起作为站内去重键
        tags: 标签，保持文档顺序
        status: 连载状态，仅当详情页提供时存在
        source_id: 产生该记录的 Source Adapter 标识
        cover_url: 封面图片 URL
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    author: str
    description: str = ""
    url: str
    tags: tuple[str, ...] = ()
    status: str | None = None
    source_id: str
    cover_url: str | None = None


class Chapter(BaseModel):
    """章节。content 仅在单独抓取正文时填充，列表阶段始终为 None。"""

    model_config = ConfigDict(frozen=True)

    url: str
    title: str
    content: str | None = None
    novel_url: str


class CatalogFilters(BaseModel):
    """目录页过滤条件。"""

    model_config = ConfigDict(frozen=True)

    genre: str | None = None
    completed: bool = False
    rank: RankMode = RankMode.LATEST


class ChapterEntry(BaseModel):
    """页面内嵌章节数组中的单条记录（如 ``window.chapters``）。

    下游只使用 title 与 url，其余字段缺失或类型异常时解码为 None 而不是报错；
    subscription_tiers 的结构未知，按原始 JSON 值保留。
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    id: int | None = None
    volume_id: int | None = None
    title: str = ""
    slug: str | None = None
    date: str | None = None
    order: int | None = None
    visible: int | None = None
    subscription_tiers: Any = None
    does_not_roll_over: bool | None = None
    is_unlocked: bool | None = None
    url: str | None = None

    @field_validator(
        "id",
        "volume_id",
        "slug",
        "date",
        "order",
        "visible",
        "does_not_roll_over",
        "is_unlocked",
        mode="wrap",
    )
    @classmethod
    def _tolerate_unexpected_shape(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return None

    @field_validator("title", mode="before")
    @classmethod
    def _title_as_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

