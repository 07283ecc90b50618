"""批量上传编排工具类."""

import logging
import time
from collections.abc import Iterator, Mapping
from typing import Any

from elasticsearch import Elasticsearch

from ..typing import ActionLine, DumpsFunc
from .collector import collect_errors
from .encoder import compact_dumps, encode, render_action
from .exceptions import EncodingError
from .models import IndexUploadConfig, UploadResult
from .pager import build_pages
from .submitter import BulkSubmitter

logger = logging.getLogger(__name__)


class BulkUploader:
    """把一个或多个数据源的全部记录流式上传到同一个索引.

    每个数据源在其 store 的事务中处理：读取记录、编码、分页、逐页提交并收集错误。
    错误列表贯穿所有页和所有数据源，单个文档或单页的失败不会中断上传；
    store 事务抛出的异常会直接向上传播并终止整个上传。

    Args:
        es_client: Elasticsearch 客户端实例
        dumps: JSON 编码函数，默认输出紧凑 JSON

    Example:
        >>> uploader = BulkUploader(es_client)
        >>> config = IndexUploadConfig(
        ...     index_name="posts-v2", store=store, sources=["posts"], page_size=1000
        ... )
        >>> result = uploader.upload(config)
        >>> if not result.ok:
        ...     print(result.get_error_summary())
    """

    def __init__(self, es_client: Elasticsearch, dumps: DumpsFunc | None = None):
        self.es_client = es_client
        self.dumps = dumps or compact_dumps

    def upload(self, config: IndexUploadConfig) -> UploadResult:
        """按顺序上传 config.sources 中的每个数据源.

        Returns:
            UploadResult，没有任何错误时 ok 为 True
        """
        result = UploadResult()
        start_time = time.time()
        errors: list[Any] = []

        logger.info(
            f"开始上传索引 '{config.index_name}': sources={len(config.sources)}, "
            f"page_size={config.page_size}, pace_ms={config.pace_ms}"
        )

        for source in config.sources:
            logger.info(f"开始处理数据源 {source!r}")
            before = len(errors)
            errors = config.store.transaction(
                lambda source=source, errors=errors: self._upload_source(
                    config, source, errors, result
                )
            )
            logger.info(
                f"数据源 {source!r} 处理完成，新增错误 {len(errors) - before} 个"
            )

        result.errors = errors
        result.ok = not errors
        result.took = time.time() - start_time

        if result.ok:
            logger.info(
                f"索引 '{config.index_name}' 上传完成: "
                f"{result.documents} 个文档, {result.pages} 页"
            )
        else:
            logger.warning(
                f"索引 '{config.index_name}' 上传完成，但有 {len(errors)} 个错误"
            )
        return result

    def _upload_source(
        self,
        config: IndexUploadConfig,
        source: Any,
        errors: list[Any],
        result: UploadResult,
    ) -> list[Any]:
        """在事务内处理单个数据源，返回更新后的错误列表."""
        submitter = BulkSubmitter(self.es_client, config.index_name)
        encoding_errors: list[EncodingError] = []

        def actions() -> Iterator[ActionLine]:
            for record in config.store.stream(source):
                encoded = encode(record, config.index_name, self.dumps)
                if isinstance(encoded, EncodingError):
                    logger.warning(f"数据源 {source!r} 中的记录编码失败: {encoded}")
                    encoding_errors.append(encoded)
                    continue
                yield render_action(*encoded)

        for item in build_pages(actions(), config.page_size, config.pace_ms):
            # 先折叠构建本页时产生的编码错误
            while encoding_errors:
                errors = collect_errors(encoding_errors.pop(0), errors)

            outcome = submitter.put_page(item)
            if outcome is None:
                continue

            result.pages += 1
            result.documents += len(item)
            before = len(errors)
            errors = collect_errors(outcome, errors)
            if len(errors) > before:
                logger.warning(
                    f"第 {result.pages} 页: {len(item)} 个动作, "
                    f"新增错误 {len(errors) - before} 个"
                )
            else:
                logger.info(f"第 {result.pages} 页: 全部成功 ({len(item)})")

        while encoding_errors:
            errors = collect_errors(encoding_errors.pop(0), errors)

        return errors


def upload(
    es_client: Elasticsearch,
    index_name: str,
    settings: Mapping[str, Any],
    dumps: DumpsFunc | None = None,
) -> UploadResult:
    """上传入口函数.

    Args:
        es_client: Elasticsearch 客户端实例
        index_name: 目标索引名称
        settings: 包含 store、sources，以及可选 page_size/bulk_page_size、
            pace_ms/bulk_wait_interval 的配置字典

    Returns:
        UploadResult

    Example:
        >>> result = upload(
        ...     es_client,
        ...     "posts",
        ...     {"store": store, "sources": ["posts", "comments"], "bulk_page_size": 500},
        ... )
    """
    config = IndexUploadConfig.from_settings(index_name, settings)
    return BulkUploader(es_client, dumps=dumps).upload(config)
