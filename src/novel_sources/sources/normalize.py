"""原始页面到 Novel / Chapter 的通用规范化规则。

抽取均为尽力而为：选择器未命中时返回 None 或空值，由调用方决定默认值，
任何一步都不会因标记缺失而抛出异常。
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from urllib.parse import urlparse

from novel_sources.fetchers.document import Element

UNKNOWN_AUTHOR = "Unknown Author"
UNKNOWN_TITLE = "Unknown Title"

# (选择器, 属性名)；属性名为 None 时取节点文本
Lookup = tuple[str, str | None]


def first_non_empty(*candidates: str | None) -> str | None:
    """返回第一个去除空白后非空的候选值。"""
    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate.strip()
    return None


def select_text(element: Element, selector: str) -> str | None:
    node = element.select_first(selector)
    if node is None:
        return None
    return node.text() or None


def select_attr(element: Element, selector: str, attr: str) -> str | None:
    node = element.select_first(selector)
    if node is None:
        return None
    return node.attr(attr).strip() or None


def first_match(element: Element, lookups: Sequence[Lookup]) -> str | None:
    """按优先级依次尝试 lookups，返回第一个非空结果。"""
    for selector, attr in lookups:
        value = select_text(element, selector) if attr is None else select_attr(element, selector, attr)
        if value:
            return value
    return None


def select_texts(element: Element, selector: str) -> tuple[str, ...]:
    """收集所有匹配节点的非空文本，保持文档顺序。"""
    return tuple(text for text in (node.text() for node in element.select(selector)) if text)


def derive_novel_id(url: str, title: str) -> str:
    """从小说 URL 的最后一个路径段推导 ID，无路径段时退化为标题。

    >>> derive_novel_id("https://site/x/novel-slug-123", "Title")
    'novel-slug-123'
    >>> derive_novel_id("https://site", "Title")
    'Title'
    """
    segments = [segment for segment in urlparse(url).path.split("/") if segment]
    return segments[-1] if segments else title


def join_paragraphs(paragraphs: Iterable[str]) -> str:
    return "\n\n".join(p.strip() for p in paragraphs if p.strip())
