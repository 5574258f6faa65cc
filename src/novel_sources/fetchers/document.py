"""可用 CSS 选择器查询的文档树封装。

基于 BeautifulSoup (soupsieve) 实现，对外只暴露抓取逻辑需要的少量操作，
使各 Source Adapter 不直接依赖 bs4 的 API 细节。
"""

from __future__ import annotations

from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag


class Element:
    """文档中的一个节点。"""

    def __init__(self, tag: Tag, base_url: str) -> None:
        self._tag = tag
        self._base_url = base_url

    def select(self, selector: str) -> list[Element]:
        """返回匹配选择器的所有后代节点（保持文档顺序）。"""
        return [Element(tag, self._base_url) for tag in self._tag.select(selector)]

    def select_first(self, selector: str) -> Element | None:
        """返回第一个匹配的后代节点，不存在时返回 None。"""
        tag = self._tag.select_one(selector)
        if tag is None:
            return None
        return Element(tag, self._base_url)

    def text(self) -> str:
        """节点的纯文本，连续空白折叠为单个空格并去除首尾空白。"""
        return " ".join(self._tag.get_text().split())

    def attr(self, name: str) -> str:
        """读取属性值，不存在时返回空字符串。"""
        value = self._tag.get(name)
        if value is None:
            return ""
        # class 等多值属性以列表形式返回
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def absolute_url(self, name: str) -> str:
        """将属性中的 URL 解析为绝对地址，属性缺失时返回空字符串。"""
        value = self.attr(name).strip()
        if not value:
            return ""
        return urljoin(self._base_url, value)

    def html(self) -> str:
        """节点的内部 HTML。"""
        return "".join(str(child) for child in self._tag.contents)

    def remove(self, selector: str) -> int:
        """移除所有匹配选择器的后代节点，返回移除数量。"""
        tags = self._tag.select(selector)
        for tag in tags:
            tag.decompose()
        return len(tags)


class Document(Element):
    """一次抓取得到的完整文档。

    Attributes:
        url: 文档的最终 URL（经过重定向后），用于解析相对链接
        raw: 原始响应文本，供正则匹配内嵌脚本数据使用
    """

    def __init__(self, raw: str, url: str) -> None:
        soup = BeautifulSoup(raw, "html.parser")
        super().__init__(soup, url)
        self.url = url
        self.raw = raw

    @classmethod
    def empty(cls, url: str) -> Document:
        """构造一个空文档，所有选择器都不会命中。"""
        return cls("", url)
