"""Fetcher 基类和抓取异常。"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .document import Document

logger = logging.getLogger(__name__)

# 网络请求默认超时（秒）
DEFAULT_TIMEOUT = 30


class FetchError(RuntimeError):
    """抓取过程中出现的异常（网络错误、非 2xx 状态码或无法处理的响应）。"""

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class RateLimitedError(FetchError):
    """站点返回 HTTP 429，调用方通常应吞掉该异常并返回空结果。"""


class BaseFetcher(ABC):
    """Fetcher 抽象基类。

    所有具体的 Fetcher 实现都应继承此类并实现 fetch 方法。
    实现不得在调用之间保存可变状态，以便同一实例被并发使用。
    """

    @abstractmethod
    async def fetch(
        self,
        url: str,
        *,
        user_agent: str | None = None,
        accept_non_html: bool = False,
        ignore_http_errors: bool = False,
    ) -> Document:
        """抓取并解析页面。

        Args:
            url: 要抓取的 URL
            user_agent: 覆盖本次请求的 User-Agent
            accept_non_html: 是否接受非 HTML 响应（如 JSON 或 HTML 片段接口）
            ignore_http_errors: 是否容忍非 2xx 状态码（429 除外）

        Returns:
            可查询的 Document

        Raises:
            RateLimitedError: 返回 429 时
            FetchError: 其他抓取失败
        """
        ...
