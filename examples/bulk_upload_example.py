"""批量上传使用示例.

本文件展示了如何使用 elasticload 把数据库中的记录流式上传到 Elasticsearch。
"""

import logging
import sqlite3

from elasticload import ClusterConfig, DBAPIStore, ESClientFactory, IterableStore, upload

logging.basicConfig(level=logging.INFO)


# ==================== 文档类型 ====================
class Article:
    """实现 Document 协议的文章类型."""

    def __init__(self, id, title, author_id):
        self.id = id
        self.title = title
        self.author_id = author_id

    def doc_id(self) -> str:
        return str(self.id)

    def routing(self) -> str | None:
        # 按作者路由，同一作者的文章落在同一分片
        return str(self.author_id) if self.author_id else None

    def to_fields(self) -> dict:
        return {"title": self.title, "author_id": self.author_id}


# ==================== 示例1：内存数据源 ====================
def example_iterable_store(es_client):
    """从内存数据源上传."""
    store = IterableStore(
        {
            "drafts": lambda: (Article(i, f"草稿 {i}", None) for i in range(10_000)),
            "published": [Article(1, "已发布", 7)],
        }
    )

    result = upload(
        es_client,
        "articles",
        {"store": store, "sources": ["drafts", "published"], "page_size": 1000, "pace_ms": 100},
    )

    print(f"上传结果: ok={result.ok}, 文档={result.documents}, 页={result.pages}")
    if not result.ok:
        print(result.get_error_summary())
    return result


# ==================== 示例2：数据库数据源 + 集群配置 ====================
def example_database_store():
    """从 SQLite 数据库上传，配置来自环境变量 ELASTICSEARCH_URL."""
    conn = sqlite3.connect("articles.db")
    store = DBAPIStore(
        conn,
        {"articles": "SELECT id, title, author_id FROM articles"},
        row_factory=lambda cursor, row: Article(*row),
        fetch_size=1000,
    )
    config = ClusterConfig.from_env(
        indexes={"articles": {"store": store, "sources": ["articles"], "bulk_page_size": 5000}}
    )

    with ESClientFactory(config) as factory:
        result = factory.upload("articles", target_index="articles-2026-10-19")

    conn.close()
    return result


if __name__ == "__main__":
    example_database_store()
