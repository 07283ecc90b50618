"""批量上传编排单元测试."""

import time
import unittest
from unittest.mock import MagicMock, patch

import pytest
from elasticsearch import Elasticsearch
from elasticsearch.exceptions import ConnectionError as ESConnectionError

from elasticload.bulk import (
    BulkErrorItem,
    BulkTransportError,
    BulkUploader,
    EncodingError,
    IndexUploadConfig,
    UploadConfigError,
    upload,
)
from elasticload.store import IterableStore


class Post:
    """测试用文档类型."""

    def __init__(self, id, title=None):
        self.id = id
        self.title = title

    def doc_id(self) -> str:
        return str(self.id)

    def routing(self) -> str | None:
        return None

    def to_fields(self) -> dict:
        return {"title": self.title}


def _posts(start: int, stop: int) -> list[Post]:
    return [Post(i, f"post {i}") for i in range(start, stop)]


def _bulk_ok(index=None, operations=None):
    """模拟全部成功的 _bulk 响应."""
    items = [{"index": {"_index": index, "status": 201}} for _ in operations]
    return {"errors": False, "items": items}


def _bulk_failing(*failing_ids: str):
    """模拟指定文档失败的 _bulk 响应."""

    def bulk(index=None, operations=None):
        items = []
        for action in operations:
            doc_id = action.split('"_id":"')[1].split('"')[0]
            item = {"_index": index, "_id": doc_id, "status": 201}
            if doc_id in failing_ids:
                item["status"] = 400
                item["error"] = {"type": "mapper_parsing_exception", "reason": "bad"}
            items.append({"index": item})
        return {"errors": any("error" in i["index"] for i in items), "items": items}

    return bulk


class RecordingStore(IterableStore):
    """记录事务调用顺序的存储."""

    def __init__(self, sources):
        super().__init__(sources)
        self.events: list = []

    def transaction(self, fn):
        self.events.append("begin")
        try:
            return fn()
        finally:
            self.events.append("end")


class TestBulkUploader(unittest.TestCase):
    """BulkUploader 类单元测试."""

    def setUp(self):
        """设置测试环境."""
        self.es_client = MagicMock(spec=Elasticsearch)
        self.es_client.bulk.side_effect = _bulk_ok
        self.uploader = BulkUploader(self.es_client)

    def _config(self, store, sources, **kwargs):
        return IndexUploadConfig(index_name="posts", store=store, sources=sources, **kwargs)

    def test_all_sources_ok(self):
        """测试两个数据源都没有错误时返回成功."""
        store = IterableStore({"a": _posts(0, 3), "b": _posts(3, 5)})

        result = self.uploader.upload(self._config(store, ["a", "b"]))

        self.assertTrue(result.ok)
        self.assertEqual(result.errors, [])
        self.assertEqual(result.documents, 5)
        self.assertEqual(result.pages, 2)

    def test_error_in_second_source(self):
        """测试第二个数据源有一个错误时返回失败并携带该错误."""
        self.es_client.bulk.side_effect = _bulk_failing("4")
        store = IterableStore({"a": _posts(0, 3), "b": _posts(3, 5)})

        result = self.uploader.upload(self._config(store, ["a", "b"]))

        self.assertFalse(result.ok)
        self.assertEqual(len(result.errors), 1)
        self.assertIsInstance(result.errors[0], BulkErrorItem)
        self.assertEqual(result.errors[0].doc_id, "4")

    def test_pages_submitted_in_order(self):
        """测试按页大小分页并按顺序提交."""
        store = IterableStore({"a": _posts(0, 7)})

        self.uploader.upload(self._config(store, ["a"], page_size=3))

        pages = [c.kwargs["operations"] for c in self.es_client.bulk.call_args_list]
        self.assertEqual([len(page) for page in pages], [3, 3, 1])
        ids = [a.split('"_id":"')[1].split('"')[0] for page in pages for a in page]
        self.assertEqual(ids, [str(i) for i in range(7)])
        for page in pages:
            for action in page:
                self.assertEqual(action.count("\n"), 2)
                self.assertTrue(action.endswith("\n"))

    def test_empty_source(self):
        """测试没有记录的数据源是合法的且不发送请求."""
        store = IterableStore({"a": []})

        result = self.uploader.upload(self._config(store, ["a"]))

        self.assertTrue(result.ok)
        self.es_client.bulk.assert_not_called()

    def test_no_sources(self):
        """测试没有数据源时直接成功."""
        result = self.uploader.upload(self._config(IterableStore({}), []))
        self.assertTrue(result.ok)

    def test_each_source_in_own_transaction(self):
        """测试每个数据源在各自的事务中处理."""
        store = RecordingStore({"a": _posts(0, 1), "b": _posts(1, 2)})

        self.uploader.upload(self._config(store, ["a", "b"]))

        self.assertEqual(store.events, ["begin", "end", "begin", "end"])

    def test_malformed_item_does_not_crash_upload(self):
        """测试条目格式错误的响应被记录为传输错误，上传继续."""
        self.es_client.bulk.side_effect = [
            {"errors": True, "items": [None]},
            {"errors": False, "items": [{"index": {"status": 201}}]},
        ]
        store = IterableStore({"a": _posts(0, 1), "b": _posts(1, 2)})

        result = self.uploader.upload(self._config(store, ["a", "b"]))

        self.assertEqual(self.es_client.bulk.call_count, 2)
        self.assertEqual(len(result.errors), 1)
        self.assertIsInstance(result.errors[0], BulkTransportError)

    def test_non_finite_field_only_drops_that_record(self):
        """测试 NaN 字段只使该记录失败，同页其他记录照常提交."""
        store = IterableStore({"a": [Post(1), Post(2, float("nan")), Post(3)]})

        result = self.uploader.upload(self._config(store, ["a"]))

        self.assertEqual(len(result.errors), 1)
        self.assertIsInstance(result.errors[0], EncodingError)
        operations = self.es_client.bulk.call_args.kwargs["operations"]
        self.assertEqual(len(operations), 2)
        self.assertNotIn("NaN", "".join(operations))

    def test_transport_error_does_not_stop_upload(self):
        """测试传输错误被记录且继续提交下一页."""
        self.es_client.bulk.side_effect = [
            ESConnectionError("connection refused"),
            {"errors": False, "items": [{"index": {"status": 201}}] * 2},
        ]
        store = IterableStore({"a": _posts(0, 4)})

        result = self.uploader.upload(self._config(store, ["a"], page_size=2))

        self.assertEqual(self.es_client.bulk.call_count, 2)
        self.assertFalse(result.ok)
        self.assertEqual(len(result.errors), 1)
        self.assertIsInstance(result.errors[0], BulkTransportError)

    def test_encoding_error_is_collected(self):
        """测试编码失败的记录被收集为错误而不中断上传."""
        store = IterableStore({"a": [Post(1), 123, Post(2)]})

        result = self.uploader.upload(self._config(store, ["a"]))

        self.assertFalse(result.ok)
        self.assertEqual(len(result.errors), 1)
        self.assertIsInstance(result.errors[0], EncodingError)
        self.assertEqual(result.errors[0].value, 123)
        self.assertEqual(len(self.es_client.bulk.call_args.kwargs["operations"]), 2)

    def test_newest_errors_first_across_sources(self):
        """测试跨数据源累积时最新的错误在前."""
        self.es_client.bulk.side_effect = _bulk_failing("0", "3")
        store = IterableStore({"a": _posts(0, 2), "b": _posts(2, 4)})

        result = self.uploader.upload(self._config(store, ["a", "b"]))

        self.assertEqual([e.doc_id for e in result.errors], ["3", "0"])

    def test_transaction_failure_propagates(self):
        """测试存储事务的异常向上传播并终止上传."""
        store = MagicMock()
        store.transaction.side_effect = RuntimeError("rollback")

        with self.assertRaises(RuntimeError):
            self.uploader.upload(self._config(store, ["a", "b"]))

        store.transaction.assert_called_once()

    def test_stream_failure_propagates(self):
        """测试读取数据源时的异常向上传播."""
        def broken():
            yield Post(1)
            raise RuntimeError("cursor closed")

        store = IterableStore({"a": broken})

        with self.assertRaises(RuntimeError):
            self.uploader.upload(self._config(store, ["a"]))

    @patch("elasticload.bulk.submitter.time.sleep")
    def test_pace_between_pages(self, mock_sleep):
        """测试页之间插入等待，最后一页之后不等待."""
        store = IterableStore({"a": _posts(0, 6)})

        self.uploader.upload(self._config(store, ["a"], page_size=2, pace_ms=20))

        self.assertEqual(mock_sleep.call_count, 2)
        mock_sleep.assert_called_with(0.02)

    def test_pace_delays_second_submission(self):
        """测试节流实际延迟第二次提交，且不改变页内容与顺序."""
        calls = []

        def bulk(index=None, operations=None):
            calls.append((time.monotonic(), list(operations)))
            return _bulk_ok(index=index, operations=operations)

        self.es_client.bulk.side_effect = bulk
        store = IterableStore({"a": _posts(0, 4)})

        self.uploader.upload(self._config(store, ["a"], page_size=2, pace_ms=60))

        self.assertEqual(len(calls), 2)
        self.assertGreaterEqual(calls[1][0] - calls[0][0], 0.05)
        self.assertIn('"_id":"0"', calls[0][1][0])
        self.assertIn('"_id":"2"', calls[1][1][0])


class TestIndexUploadConfig:
    """IndexUploadConfig 测试."""

    def test_defaults(self) -> None:
        """测试默认页大小与节流."""
        config = IndexUploadConfig(index_name="posts", store=IterableStore({}))
        assert config.page_size == 5000
        assert config.pace_ms == 0
        assert config.sources == ()

    def test_from_settings_aliases(self) -> None:
        """测试支持 bulk_page_size 与 bulk_wait_interval 键名."""
        config = IndexUploadConfig.from_settings(
            "posts",
            {"store": IterableStore({}), "sources": ["a"], "bulk_page_size": 10, "bulk_wait_interval": 5},
        )
        assert config.page_size == 10
        assert config.pace_ms == 5
        assert config.sources == ("a",)

    def test_from_settings_unset_values(self) -> None:
        """测试值为 None 时使用默认值."""
        config = IndexUploadConfig.from_settings(
            "posts", {"store": IterableStore({}), "page_size": None}
        )
        assert config.page_size == 5000

    def test_from_settings_missing_store(self) -> None:
        """测试缺少 store."""
        with pytest.raises(UploadConfigError, match="store"):
            IndexUploadConfig.from_settings("posts", {"sources": ["a"]})

    @pytest.mark.parametrize("page_size,pace_ms", [(0, 0), (-1, 0), (10, -1), ("10", 0)])
    def test_invalid_values(self, page_size, pace_ms) -> None:
        """测试非法参数."""
        with pytest.raises(UploadConfigError):
            IndexUploadConfig(
                index_name="posts", store=IterableStore({}), page_size=page_size, pace_ms=pace_ms
            )

    def test_frozen(self) -> None:
        """测试配置不可变."""
        config = IndexUploadConfig(index_name="posts", store=IterableStore({}))
        with pytest.raises(AttributeError):
            config.page_size = 1  # type: ignore[misc]


def test_upload_entry_point() -> None:
    """测试 upload 入口函数."""
    es_client = MagicMock(spec=Elasticsearch)
    es_client.bulk.side_effect = _bulk_failing("1")
    store = IterableStore({"a": _posts(0, 3)})

    result = upload(es_client, "posts-v2", {"store": store, "sources": ["a"]})

    assert not result.ok
    assert result.errors[0].doc_id == "1"
    assert es_client.bulk.call_args.kwargs["index"] == "posts-v2"
    assert "Total errors: 1" in result.get_error_summary()
