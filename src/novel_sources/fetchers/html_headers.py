"""抓取请求使用的默认 HTTP 头。"""

from __future__ import annotations

# 模拟桌面浏览器；缺少该头时部分站点会拒绝请求或返回降级页面
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)

DEFAULT_HEADERS: dict[str, str] = {
    "User-Agent": DEFAULT_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


def build_headers(user_agent: str | None = None) -> dict[str, str]:
    """返回默认请求头的副本，可覆盖 User-Agent。"""
    headers = dict(DEFAULT_HEADERS)
    if user_agent:
        headers["User-Agent"] = user_agent
    return headers
