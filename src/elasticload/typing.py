"""elasticload 类型定义模块."""

from typing import Any, Callable, List, Union

# JSON 编码函数类型
DumpsFunc = Callable[[Any], str]

# 编码后的单个批量动作（header 行 + body 行，均以换行结尾）
ActionLine = str

# 批量页：若干编码后的动作
Page = List[ActionLine]

# 节流标记：两页之间的等待毫秒数
PaceMarker = int

# 页构建器产出的元素
PageItem = Union[Page, PaceMarker]
