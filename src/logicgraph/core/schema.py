# src/logicgraph/core/schema.py
"""Serialized graph document (GraphData) models."""
from __future__ import annotations

from typing import Any, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import DocumentError
from .types import PortKind

M = TypeVar("M", bound=BaseModel)


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class OffsetDocument(_Document):
    dx: float = 0.0
    dy: float = 0.0


class PortDocument(_Document):
    id: str
    name: str = ""
    kind: Optional[PortKind] = None
    value: Any = None
    offset: Optional[OffsetDocument] = None


class NodeDocument(_Document):
    id: str
    name: str = ""
    type: str = "default"
    x: float = 0.0
    y: float = 0.0
    width: Optional[float] = Field(default=None, ge=0)
    height: Optional[float] = Field(default=None, ge=0)
    inputs: List[PortDocument] = Field(default_factory=list)
    outputs: List[PortDocument] = Field(default_factory=list)


class EdgeDocument(_Document):
    id: str
    source_port_id: str = Field(alias="sourcePortId")
    target_port_id: str = Field(alias="targetPortId")


class GraphDocument(_Document):
    id: str
    name: str = ""
    nodes: List[NodeDocument] = Field(default_factory=list)
    edges: List[EdgeDocument] = Field(default_factory=list)


def parse(model: Type[M], data: Any) -> M:
    """
    Validate `data` into `model`.
    Accepts an instance of the model (returned as-is) or a mapping.
    Raises DocumentError with pydantic's message on failure.
    """
    if isinstance(data, model):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(by_alias=True)
    if not isinstance(data, Mapping):
        raise DocumentError(f"{model.__name__}: expected a mapping, got {type(data).__name__}")
    try:
        return model.model_validate(dict(data))
    except ValidationError as e:
        raise DocumentError(f"invalid {model.__name__}: {e}") from e
