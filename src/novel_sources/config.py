from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from novel_sources.fetchers.base import DEFAULT_TIMEOUT
from novel_sources.fetchers.html_headers import DEFAULT_USER_AGENT


@dataclass
class HttpConfig:
    # 所有请求携带的 User-Agent；站点会拒绝默认的 python-requests 标识
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    # 控制抓取网页时是否校验证书；正常情况下应保持为 True
    verify_ssl: bool = True


@dataclass
class AppConfig:
    http: HttpConfig = field(default_factory=HttpConfig)


def _build_http_config(http_raw: dict[str, Any]) -> HttpConfig:
    user_agent = http_raw.get("user_agent") or DEFAULT_USER_AGENT
    if not isinstance(user_agent, str):
        raise ValueError("http.user_agent 必须为字符串")

    timeout = http_raw.get("timeout", DEFAULT_TIMEOUT)
    try:
        timeout = float(timeout)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"http.timeout 必须为数字: {timeout!r}") from exc
    if timeout <= 0:
        raise ValueError("http.timeout 必须 > 0")

    return HttpConfig(
        user_agent=user_agent.strip(),
        timeout=timeout,
        verify_ssl=bool(http_raw.get("verify_ssl", True)),
    )


def load_config(path: str | Path) -> AppConfig:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"配置文件不存在: {path}")

    with path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"配置文件格式错误，顶层应为映射: {path}")

    http_raw = raw.get("http", {}) or {}
    if not isinstance(http_raw, dict):
        raise ValueError("http 配置段必须为映射")

    return AppConfig(http=_build_http_config(http_raw))
