"""标识符到 Source Adapter 的路由与注册中心。

提供 `register_source` 装饰器用于注册具体的适配器实现，
提供 `resolve` 函数作为统一入口。
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

from novel_sources.fetchers.requests_fetcher import RequestsFetcher

if TYPE_CHECKING:
    from novel_sources.config import HttpConfig
    from novel_sources.fetchers.base import BaseFetcher

    from .base import SourceAdapter

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="type[SourceAdapter]")


class UnknownSourceError(ValueError):
    """没有任何适配器能处理给定的 URL 或来源标识。"""


class SourceRegistry:
    """适配器注册中心，按注册顺序匹配。"""

    _registry: list[type[SourceAdapter]] = []

    @classmethod
    def register(cls, adapter_cls: T) -> T:
        if not adapter_cls.source_id:
            raise ValueError(f"{adapter_cls.__name__} 未声明 source_id")
        if adapter_cls not in cls._registry:
            cls._registry.append(adapter_cls)
            logger.debug("已注册 Source Adapter: %s (%s)", adapter_cls.__name__, adapter_cls.source_id)
        return adapter_cls

    @classmethod
    def get_sources(cls) -> list[type[SourceAdapter]]:
        """获取所有已注册的适配器类，保持注册顺序。"""
        return list(cls._registry)


# 公开装饰器
register_source = SourceRegistry.register


def available_sources() -> list[str]:
    return [adapter_cls.source_id for adapter_cls in SourceRegistry.get_sources()]


def resolve_class(identifier: str) -> type[SourceAdapter]:
    """按注册顺序返回第一个能处理 identifier 的适配器类。

    Raises:
        UnknownSourceError: 没有匹配的适配器时。不会退化为任意默认适配器。
    """
    for adapter_cls in SourceRegistry.get_sources():
        if adapter_cls.can_handle(identifier):
            logger.debug("标识 '%s' 匹配到 %s", identifier, adapter_cls.__name__)
            return adapter_cls

    raise UnknownSourceError(f"没有可处理该 URL 或来源标识的适配器: {identifier}")


def resolve(
    identifier: str,
    config: HttpConfig | None = None,
    fetcher: BaseFetcher | None = None,
) -> SourceAdapter:
    """根据来源标识或 URL 构造适配器实例。

    Args:
        identifier: 短名（如 ``royalroad``）或包含站点域名的 URL
        config: HTTP 配置，未提供 fetcher 时用于构造 RequestsFetcher
        fetcher: 直接指定抓取器，优先于 config
    """
    adapter_cls = resolve_class(identifier)
    if fetcher is None and config is not None:
        fetcher = RequestsFetcher.from_config(config)
    return adapter_cls(fetcher)
