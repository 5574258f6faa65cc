"""命令行入口：驱动 Source Adapter 并以 JSON 输出结果。"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from novel_sources.config import AppConfig, load_config
from novel_sources.fetchers import FetchError
from novel_sources.models import CatalogFilters, RankMode
from novel_sources.sources import UnknownSourceError, resolve
from novel_sources.sources.factory import SourceRegistry

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="novel-sources", description="抓取小说站点目录、详情、章节与正文")
    parser.add_argument("--config", type=str, default=None, help="YAML 配置文件路径（可选）")
    parser.add_argument("-v", "--verbose", action="store_true", help="输出 DEBUG 日志")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("sources", help="列出已注册的来源")

    choices = ", ".join(f"{cls.source_id} ({cls.name})" for cls in SourceRegistry.get_sources())
    list_cmd = sub.add_parser("list", help="抓取目录页")
    list_cmd.add_argument("source", help=f"来源标识或 URL（可用: {choices}）")
    list_cmd.add_argument("--page", type=int, default=1)
    list_cmd.add_argument("--rank", choices=[mode.value for mode in RankMode], default=RankMode.LATEST.value)
    list_cmd.add_argument("--genre", default=None)
    list_cmd.add_argument("--completed", action="store_true", help="只看已完结作品")

    search_cmd = sub.add_parser("search", help="站内搜索")
    search_cmd.add_argument("source")
    search_cmd.add_argument("query")
    search_cmd.add_argument("--page", type=int, default=1)

    details_cmd = sub.add_parser("details", help="抓取小说详情")
    details_cmd.add_argument("url")

    chapters_cmd = sub.add_parser("chapters", help="抓取章节列表（多个 URL 并发抓取）")
    chapters_cmd.add_argument("urls", nargs="+")

    content_cmd = sub.add_parser("content", help="抓取章节正文 HTML")
    content_cmd.add_argument("url")

    return parser


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_to_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {key: _to_jsonable(item) for key, item in value.items()}
    return value


def _describe_sources() -> list[dict[str, Any]]:
    return [
        {"id": cls.source_id, "name": cls.name, "domains": list(cls.domains)}
        for cls in SourceRegistry.get_sources()
    ]


async def _run(args: argparse.Namespace, config: AppConfig) -> Any:
    if args.command == "sources":
        return _describe_sources()

    if args.command == "list":
        adapter = resolve(args.source, config.http)
        filters = CatalogFilters(genre=args.genre, completed=args.completed, rank=RankMode(args.rank))
        return await adapter.fetch_catalog_page(args.page, filters)

    if args.command == "search":
        adapter = resolve(args.source, config.http)
        return await adapter.search(args.query, args.page)

    if args.command == "details":
        return await resolve(args.url, config.http).fetch_novel_details(args.url)

    if args.command == "chapters":
        adapters = [resolve(url, config.http) for url in args.urls]
        results = await asyncio.gather(
            *(adapter.fetch_novel_chapters(url) for adapter, url in zip(adapters, args.urls))
        )
        return dict(zip(args.urls, results))

    if args.command == "content":
        return {"url": args.url, "content": await resolve(args.url, config.http).fetch_chapter_content(args.url)}

    raise ValueError(f"未知命令: {args.command}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        stream=sys.stderr,
    )

    # 面向用户的错误统一写到 stderr，详细过程见日志
    try:
        config = load_config(Path(args.config)) if args.config else AppConfig()
        result = asyncio.run(_run(args, config))
    except (UnknownSourceError, FileNotFoundError) as exc:
        print(f"错误: {exc}", file=sys.stderr)
        return 1
    except FetchError as exc:
        logger.debug("抓取失败详情", exc_info=exc)
        print(f"抓取失败: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"参数错误: {exc}", file=sys.stderr)
        return 2

    json.dump(_to_jsonable(result), sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
