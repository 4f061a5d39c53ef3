"""请求/响应模型的公共基类。"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON 中使用 camelCase，Python 侧使用 snake_case，两种写法均可入参。"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PartialUpdate(CamelModel):
    """部分更新的基类。

    所有字段均可省略；只有客户端显式提交的字段才会合并到已有记录。
    ``non_nullable`` 中列出的字段可以省略，但不能显式置为 ``null``。
    """

    non_nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_null_required(self) -> "PartialUpdate":
        for name in self.model_fields_set & self.non_nullable:
            if getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """返回客户端实际提交的字段（snake_case 键）。"""
        return self.model_dump(exclude_unset=True)
