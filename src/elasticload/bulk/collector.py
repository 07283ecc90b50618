"""批量错误收集模块.

把每一页的提交结果折叠进贯穿整个上传过程的错误列表。
新收集的错误放在已有错误之前；同一页内的条目错误保持响应中的顺序。
"""

from typing import Any

from .models import BulkAction, BulkErrorItem, SubmissionResult


def error_from_item(item: dict[str, Any]) -> BulkErrorItem:
    """从 _bulk 响应的单个条目构建错误项.

    Args:
        item: 形如 {"index": {"_index": ..., "_id": ..., "status": ..., "error": {...}}}

    Returns:
        BulkErrorItem 实例
    """
    op_type, fragment = next(iter(item.items()))
    error_info = fragment.get("error") or {}
    if isinstance(error_info, str):
        error_info = {"reason": error_info}

    # 提取根本原因
    caused_by = None
    if "caused_by" in error_info:
        caused_by_info = error_info["caused_by"]
        caused_by = f"{caused_by_info.get('type', '')}: {caused_by_info.get('reason', '')}"

    try:
        operation = BulkAction(op_type)
    except ValueError:
        operation = None

    return BulkErrorItem(
        index_name=fragment.get("_index", ""),
        doc_id=fragment.get("_id"),
        error_type=error_info.get("type", "unknown"),
        error_reason=error_info.get("reason", "unknown error"),
        status=fragment.get("status", 0),
        caused_by=caused_by,
        operation=operation,
    )


def _has_error(item: dict[str, Any]) -> bool:
    return any(
        isinstance(fragment, dict) and fragment.get("error") is not None
        for fragment in item.values()
    )


def collect_errors(outcome: Any, errors: list[Any]) -> list[Any]:
    """把一次提交的结果折叠进错误列表.

    - 无错误的 SubmissionResult：原样返回
    - has_errors 为 True 的 SubmissionResult：每个带 error 的条目生成一个 BulkErrorItem
    - 异常值（传输错误、编码错误）：作为单个条目加入
    - 其他值（例如节流标记对应的 None）：原样返回

    不修改传入的列表。
    """
    if isinstance(outcome, SubmissionResult):
        if not outcome.has_errors:
            return errors
        new_errors = [error_from_item(item) for item in outcome.items if _has_error(item)]
        return new_errors + errors

    if isinstance(outcome, Exception):
        return [outcome] + errors

    return errors
