"""批量请求提交模块."""

import logging
import time
from typing import Any

from elasticsearch import Elasticsearch
from elasticsearch.exceptions import ApiError, SerializationError, TransportError

from ..typing import Page, PageItem
from .exceptions import BulkTransportError
from .models import SubmissionResult

logger = logging.getLogger(__name__)


class BulkSubmitter:
    """把一页动作作为一次 _bulk 请求发送到指定索引.

    不做任何重试：传输层失败以 BulkTransportError 值的形式返回，由调用方收集。

    Args:
        es_client: Elasticsearch 客户端实例
        index_name: 目标索引名称
    """

    def __init__(self, es_client: Elasticsearch, index_name: str):
        self.es_client = es_client
        self.index_name = index_name

    def submit(self, page: Page) -> SubmissionResult | BulkTransportError:
        """提交一页动作.

        页中每个元素都已经以换行结尾，请求体即所有元素按顺序拼接的结果。

        Args:
            page: 编码后的动作列表

        Returns:
            解析后的 SubmissionResult，传输失败时为 BulkTransportError
        """
        try:
            response = self.es_client.bulk(index=self.index_name, operations=page)
        except (ApiError, TransportError, SerializationError) as e:
            logger.error(f"索引 '{self.index_name}' 批量请求失败: {str(e)}")
            error = BulkTransportError(self.index_name, len(page), str(e))
            error.__cause__ = e
            return error

        try:
            return parse_response(response)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"索引 '{self.index_name}' 批量响应无法解析: {str(e)}")
            error = BulkTransportError(
                self.index_name, len(page), f"无法解析的响应: {str(e)}"
            )
            error.__cause__ = e
            return error

    def wait(self, pace_ms: int) -> None:
        """阻塞 pace_ms 毫秒，仅用于降低目标集群压力."""
        if pace_ms <= 0:
            return
        logger.debug(f"批量页之间暂停 {pace_ms}ms")
        time.sleep(pace_ms / 1000)

    def put_page(self, item: PageItem) -> SubmissionResult | BulkTransportError | None:
        """处理页构建器产出的一个元素：节流标记则等待，页则提交."""
        if isinstance(item, int):
            self.wait(item)
            return None
        return self.submit(item)


def parse_response(response: Any) -> SubmissionResult:
    """把 _bulk 响应解析为 SubmissionResult.

    同时支持 ObjectApiResponse 与普通字典。

    Raises:
        KeyError: 响应缺少 errors 或 items 字段
        TypeError: 响应结构不合法
    """
    body = getattr(response, "body", response)
    if not isinstance(body, dict):
        raise TypeError(f"期望 JSON 对象，实际为 {type(body).__name__}")

    items = body["items"]
    if not isinstance(items, list):
        raise TypeError(f"items 必须是列表，实际为 {type(items).__name__}")
    for position, item in enumerate(items):
        if not isinstance(item, dict):
            raise TypeError(
                f"items[{position}] 必须是 JSON 对象，实际为 {type(item).__name__}"
            )

    return SubmissionResult(
        has_errors=bool(body["errors"]),
        items=items,
        took=body.get("took", 0),
    )
