"""
Shared schema configuration for the public API
"""

from typing import Annotated, Generic, List, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python; both accepted on input"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value.strip()


NonBlankStr = Annotated[str, AfterValidator(not_blank)]


class PageResponse(ApiModel, Generic[T]):
    """List envelope: {"content": [...], "total": n}"""
    content: List[T]
    total: int
