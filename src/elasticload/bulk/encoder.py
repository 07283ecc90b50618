"""批量动作编码模块.

将一条领域记录编码为 _bulk 请求中的一对行：

    {"index":{"_index":"my-index","_id":"42"}}
    {"title":"x"}
"""

import json
from typing import Any

from ..document import document_fields, document_id, document_routing
from ..typing import ActionLine, DumpsFunc
from .exceptions import EncodingError
from .models import BulkAction, BulkOperation


def compact_dumps(value: Any) -> str:
    """默认 JSON 编码函数，输出无多余空白的紧凑格式，拒绝 NaN 与 Infinity."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def build_operation(
    document: Any,
    index_name: str,
) -> BulkOperation:
    """通过 Document 能力从记录构建批量动作.

    Raises:
        EncodingError: 记录未实现 Document 能力或提取字段时出错
    """
    try:
        doc_id = document_id(document)
        routing = document_routing(document)
        source = document_fields(document)
    except Exception as e:
        raise EncodingError(document, str(e)) from e

    return BulkOperation(
        action=BulkAction.INDEX,
        index_name=index_name,
        doc_id=doc_id,
        source=source,
        routing=routing,
    )


def encode_strict(
    document: Any,
    index_name: str,
    dumps: DumpsFunc = compact_dumps,
) -> tuple[str, str]:
    """编码记录，失败时抛出异常.

    值为 None 的字段会显式编码为 null，而不是省略。

    Args:
        document: 实现了 Document 能力的记录
        index_name: 目标索引名称
        dumps: JSON 编码函数

    Returns:
        (header 行, body 行)，均不含换行符

    Raises:
        EncodingError: 记录无法编码时抛出

    Example:
        >>> encode_strict(post, "my-index")
        ('{"index":{"_index":"my-index","_id":"42"}}', '{"title":"x"}')
    """
    operation = build_operation(document, index_name)
    try:
        header_line = dumps(operation.header())
        body_line = dumps(dict(operation.source))
    except (TypeError, ValueError) as e:
        raise EncodingError(document, f"JSON 编码失败: {e}") from e
    return header_line, body_line


def encode(
    document: Any,
    index_name: str,
    dumps: DumpsFunc = compact_dumps,
) -> tuple[str, str] | EncodingError:
    """编码记录，失败时返回 EncodingError 而不是抛出.

    Returns:
        成功时为 (header 行, body 行)，失败时为 EncodingError 实例
    """
    try:
        return encode_strict(document, index_name, dumps)
    except EncodingError as e:
        return e


def render_action(header_line: str, body_line: str) -> ActionLine:
    """拼接为以换行结尾的两行文本."""
    return f"{header_line}\n{body_line}\n"
