"""基于 requests 的 HTML 抓取器。"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import requests

from .base import DEFAULT_TIMEOUT, BaseFetcher, FetchError, RateLimitedError
from .document import Document
from .html_headers import DEFAULT_USER_AGENT, build_headers

if TYPE_CHECKING:  # pragma: no cover - 类型辅助
    from requests import Response

    from novel_sources.config import HttpConfig

logger = logging.getLogger(__name__)

# 视为可解析文档的 Content-Type 片段
_DOCUMENT_CONTENT_TYPES = ("text/", "html", "xml")


class RequestsFetcher(BaseFetcher):
    """使用 requests 获取页面并用 BeautifulSoup 解析。

    阻塞的网络调用通过 ``asyncio.to_thread`` 在线程中执行，
    等待期间不会阻塞事件循环。每次调用独立发起请求，不做缓存或去重。
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        verify_ssl: bool = True,
    ) -> None:
        self.user_agent = user_agent
        self.timeout = timeout
        self.verify_ssl = verify_ssl

    @classmethod
    def from_config(cls, config: HttpConfig) -> RequestsFetcher:
        return cls(user_agent=config.user_agent, timeout=config.timeout, verify_ssl=config.verify_ssl)

    async def fetch(
        self,
        url: str,
        *,
        user_agent: str | None = None,
        accept_non_html: bool = False,
        ignore_http_errors: bool = False,
    ) -> Document:
        return await asyncio.to_thread(
            self._fetch_sync,
            url,
            user_agent or self.user_agent,
            accept_non_html,
            ignore_http_errors,
        )

    def _fetch_sync(
        self,
        url: str,
        user_agent: str,
        accept_non_html: bool,
        ignore_http_errors: bool,
    ) -> Document:
        logger.info("抓取 URL: %s (timeout=%s, verify_ssl=%s)", url, self.timeout, self.verify_ssl)

        try:
            resp: Response = requests.get(
                url,
                timeout=self.timeout,
                verify=self.verify_ssl,
                headers=build_headers(user_agent),
            )
        except requests.RequestException as exc:
            raise FetchError(f"请求失败: {url}: {exc}", url=url) from exc

        if resp.status_code == 429:
            raise RateLimitedError(f"请求被限流 (HTTP 429): {url}", url=url, status_code=429)

        if not ignore_http_errors:
            try:
                resp.raise_for_status()
            except requests.HTTPError as exc:
                raise FetchError(
                    f"HTTP {resp.status_code}: {url}",
                    url=url,
                    status_code=resp.status_code,
                ) from exc

        content_type = resp.headers.get("Content-Type", "").lower()
        if not accept_non_html and content_type and not any(t in content_type for t in _DOCUMENT_CONTENT_TYPES):
            raise FetchError(
                f"不支持的响应类型 {content_type}: {url}",
                url=url,
                status_code=resp.status_code,
            )

        # 响应头未声明字符集时 requests 会按 ISO-8859-1 解码 text/*，需自行判断
        if "charset=" not in content_type:
            resp.encoding = _sniff_encoding(resp)

        logger.info(
            "抓取完成, 状态码: %d, 最终 URL: %s, 编码: %s, 内容长度: %d",
            resp.status_code,
            resp.url,
            resp.encoding,
            len(resp.text),
        )
        return Document(resp.text, resp.url or url)


def _sniff_encoding(resp: Response) -> str:
    """优先按 UTF-8 解码，失败时使用 requests 推测的编码。"""
    try:
        resp.content.decode("utf-8")
    except UnicodeDecodeError:
        return resp.apparent_encoding or "utf-8"
    return "utf-8"
