"""数据源存储模块.

存储为上传提供两项能力：按数据源流式读取记录，以及把一次读取包裹在事务中。

主要组件:
    - Store: 存储协议
    - IterableStore: 内存存储
    - DBAPIStore: 基于 DB-API 2.0 连接的数据库存储
"""

from .dbapi import DBAPIStore
from .exceptions import SourceNotFoundError, StoreError
from .memory import IterableStore
from .models import Store

__all__ = [
    "Store",
    "IterableStore",
    "DBAPIStore",
    "StoreError",
    "SourceNotFoundError",
]
