"""批量上传数据模型定义模块."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .exceptions import UploadConfigError

DEFAULT_PAGE_SIZE = 5000
DEFAULT_PACE_MS = 0


class BulkAction(Enum):
    """批量操作类型枚举."""

    INDEX = "index"


@dataclass
class BulkOperation:
    """批量动作数据类.

    Attributes:
        action: 操作类型
        index_name: 索引名称
        doc_id: 文档ID
        source: 文档字段（即 body 行内容）
        routing: 路由信息（可选）
    """

    action: BulkAction
    index_name: str
    doc_id: str
    source: Mapping[str, Any] = field(default_factory=dict)
    routing: str | None = None

    def header(self) -> dict[str, dict[str, Any]]:
        """构建动作 header，无路由时不包含 _routing 键."""
        attrs: dict[str, Any] = {"_index": self.index_name, "_id": self.doc_id}
        if self.routing is not None:
            attrs["_routing"] = self.routing
        return {self.action.value: attrs}


@dataclass
class BulkErrorItem:
    """批量操作错误项数据类.

    Attributes:
        index_name: 索引名称
        doc_id: 文档ID
        error_type: 错误类型
        error_reason: 错误原因
        status: HTTP状态码
        caused_by: 根本原因
        operation: 失败的操作类型
    """

    index_name: str
    doc_id: str | None
    error_type: str
    error_reason: str
    status: int
    caused_by: str | None = None
    operation: BulkAction | None = None

    def __str__(self) -> str:
        op = self.operation.value if self.operation else "unknown"
        return (
            f"[{op}] Index: {self.index_name}, DocID: {self.doc_id}, "
            f"Status: {self.status}, Reason: {self.error_type}: {self.error_reason}"
        )


@dataclass
class SubmissionResult:
    """单页批量请求的解析结果.

    Attributes:
        has_errors: 响应顶层的 errors 标志
        items: 与请求动作按位置一一对应的条目列表
        took: ES 报告的耗时（毫秒）
    """

    has_errors: bool
    items: list[dict[str, Any]] = field(default_factory=list)
    took: int = 0


@dataclass(frozen=True)
class IndexUploadConfig:
    """单次上传的配置，上传期间不可变.

    Attributes:
        index_name: 目标索引名称
        store: 提供记录与事务能力的存储
        sources: 按顺序处理的数据源描述列表
        page_size: 每页动作数，必须 > 0
        pace_ms: 两页之间的等待毫秒数，必须 >= 0
    """

    index_name: str
    store: Any
    sources: tuple = ()
    page_size: int = DEFAULT_PAGE_SIZE
    pace_ms: int = DEFAULT_PACE_MS

    def __post_init__(self) -> None:
        """校验上传配置参数合法性."""
        if not self.index_name:
            raise UploadConfigError("index_name 不能为空")
        if self.store is None:
            raise UploadConfigError(f"索引 '{self.index_name}' 未配置 store")
        if isinstance(self.page_size, bool) or not isinstance(self.page_size, int):
            raise UploadConfigError(f"page_size 必须是整数，当前值: {self.page_size!r}")
        if self.page_size < 1:
            raise UploadConfigError(f"page_size 必须 >= 1，当前值: {self.page_size}")
        if isinstance(self.pace_ms, bool) or not isinstance(self.pace_ms, int):
            raise UploadConfigError(f"pace_ms 必须是整数，当前值: {self.pace_ms!r}")
        if self.pace_ms < 0:
            raise UploadConfigError(f"pace_ms 必须 >= 0，当前值: {self.pace_ms}")
        # 允许传入任意可迭代对象，统一冻结为元组
        object.__setattr__(self, "sources", tuple(self.sources))

    @classmethod
    def from_settings(
        cls, index_name: str, settings: Mapping[str, Any]
    ) -> "IndexUploadConfig":
        """从配置字典创建上传配置.

        同时接受 page_size/pace_ms 与 bulk_page_size/bulk_wait_interval 两种键名，
        未设置时分别默认为 5000 和 0。

        Args:
            index_name: 目标索引名称
            settings: 包含 store、sources 等键的配置字典

        Raises:
            UploadConfigError: 缺少 store 或参数不合法时抛出
        """
        if "store" not in settings:
            raise UploadConfigError(f"索引 '{index_name}' 的配置中缺少 store")

        page_size = _first_set(settings, "page_size", "bulk_page_size")
        pace_ms = _first_set(settings, "pace_ms", "bulk_wait_interval")
        sources: Iterable = settings.get("sources") or ()

        return cls(
            index_name=index_name,
            store=settings["store"],
            sources=tuple(sources),
            page_size=DEFAULT_PAGE_SIZE if page_size is None else page_size,
            pace_ms=DEFAULT_PACE_MS if pace_ms is None else pace_ms,
        )


def _first_set(settings: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if settings.get(key) is not None:
            return settings[key]
    return None


@dataclass
class UploadResult:
    """上传结果数据类.

    Attributes:
        ok: 所有数据源均无错误时为 True
        errors: 累积的错误列表，最新的错误在前
        pages: 已提交的页数
        documents: 已提交的动作数
        took: 总耗时（秒）
    """

    ok: bool = True
    errors: list[Any] = field(default_factory=list)
    pages: int = 0
    documents: int = 0
    took: float = 0.0

    def get_error_summary(self) -> str:
        """获取错误摘要."""
        if not self.errors:
            return "No errors"
        summary = f"Total errors: {len(self.errors)}\n"
        for i, error in enumerate(self.errors[:10], 1):  # 只显示前10个错误
            summary += f"{i}. {error}\n"
        if len(self.errors) > 10:
            summary += f"... and {len(self.errors) - 10} more errors\n"
        return summary
