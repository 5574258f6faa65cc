"""从页面源码中提取内嵌的 JS 数据（如 ``window.chapters = [...]``）。"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from novel_sources.models import ChapterEntry

logger = logging.getLogger(__name__)

_DECODER = json.JSONDecoder()


def extract_window_array(raw: str, name: str) -> list[Any] | None:
    """定位 ``window.<name> = [`` 赋值并解码紧随其后的 JSON 数组。

    Returns:
        解码后的列表；未找到赋值或内容不是合法 JSON 数组时返回 None。
    """
    pattern = re.compile(rf"window\.{re.escape(name)}\s*=\s*(?=\[)")
    match = pattern.search(raw)
    if match is None:
        logger.debug("页面中未找到 window.%s 赋值", name)
        return None

    try:
        value, _ = _DECODER.raw_decode(raw, match.end())
    except json.JSONDecodeError as exc:
        logger.warning("window.%s 内容无法解析为 JSON: %s", name, exc)
        return None

    if not isinstance(value, list):
        return None
    return value


def decode_chapter_entries(items: list[Any]) -> list[ChapterEntry]:
    """将原始 JSON 列表逐条解码为 ChapterEntry，无法解码的条目被跳过。"""
    entries: list[ChapterEntry] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            logger.debug("跳过第 %d 条章节记录: 不是对象", index)
            continue
        try:
            entries.append(ChapterEntry.model_validate(item))
        except ValidationError as exc:
            logger.debug("跳过第 %d 条章节记录: %s", index, exc)
    return entries
