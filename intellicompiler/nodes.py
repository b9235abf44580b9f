"""Syntax node variants and their metadata bag."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterator, List, Mapping, MutableMapping, Tuple

from intellicompiler.exceptions import NodeDecodeError


@dataclass
class NodeMetadata(MutableMapping[str, str]):
    """Auxiliary facts attached to a node by an upstream analysis."""

    data: Dict[str, str] = field(default_factory=dict)

    def __getitem__(self, key: str) -> str:
        return self.data[key]

    def __setitem__(self, key: str, value: str) -> None:
        self.data[key] = value

    def __delitem__(self, key: str) -> None:
        del self.data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def to_dict(self) -> Dict[str, str]:
        return dict(self.data)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def flag(self, key: str) -> bool:
        """True only when ``key`` is present with the literal value ``"true"``."""

        return self.data.get(key) == "true"


@dataclass
class SyntaxNode:
    """Base class for every node variant."""

    metadata: NodeMetadata | Dict[str, str] = field(
        default_factory=NodeMetadata, kw_only=True
    )

    kind = "unrecognized"

    def __post_init__(self) -> None:
        if not isinstance(self.metadata, NodeMetadata):
            self.metadata = NodeMetadata(
                {str(k): str(v) for k, v in dict(self.metadata).items()}
            )

    @property
    def meta(self) -> NodeMetadata:
        assert isinstance(self.metadata, NodeMetadata)
        return self.metadata

    def children(self) -> Tuple["SyntaxNode", ...]:
        return ()

    def describe(self) -> str:
        """Structural description used when the node is shown to the oracle."""

        parts = []
        for item in fields(self):
            if item.name == "metadata":
                continue
            parts.append(f"{item.name}={_describe_value(getattr(self, item.name))}")
        metadata = ", ".join(
            f"{key!r}: {value!r}" for key, value in sorted(self.meta.items())
        )
        parts.append(f"metadata={{{metadata}}}")
        return f"{type(self).__name__}({', '.join(parts)})"

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"kind": self.kind}
        for item in fields(self):
            if item.name == "metadata":
                continue
            payload[item.name] = _encode_value(getattr(self, item.name))
        if self.meta:
            payload["metadata"] = self.meta.to_dict()
        return payload


@dataclass
class Identifier(SyntaxNode):
    name: str

    kind = "identifier"


@dataclass
class NumberLiteral(SyntaxNode):
    value: float

    kind = "number"

    def __post_init__(self) -> None:
        super().__post_init__()
        self.value = float(self.value)


@dataclass
class BinaryOperation(SyntaxNode):
    operator: str
    left: SyntaxNode
    right: SyntaxNode

    kind = "binary_op"

    def children(self) -> Tuple[SyntaxNode, ...]:
        return (self.left, self.right)


@dataclass
class FunctionDefinition(SyntaxNode):
    name: str
    parameters: Tuple[str, ...] = ()
    body: Tuple[SyntaxNode, ...] = ()

    kind = "function"

    def __post_init__(self) -> None:
        super().__post_init__()
        self.parameters = tuple(self.parameters)
        self.body = tuple(self.body)

    def children(self) -> Tuple[SyntaxNode, ...]:
        return self.body


@dataclass
class Unrecognized(SyntaxNode):
    kind = "unrecognized"


def _describe_value(value: Any) -> str:
    if isinstance(value, SyntaxNode):
        return value.describe()
    if isinstance(value, tuple):
        return "[" + ", ".join(_describe_value(item) for item in value) + "]"
    return repr(value)


def _encode_value(value: Any) -> Any:
    if isinstance(value, SyntaxNode):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_encode_value(item) for item in value]
    return value


def _require(data: Mapping[str, Any], key: str) -> Any:
    if key not in data:
        raise NodeDecodeError(
            f"node of kind '{data.get('kind')}' is missing '{key}'"
        )
    return data[key]


def node_from_dict(data: Mapping[str, Any]) -> SyntaxNode:
    """Build a node tree from a plain mapping (YAML/JSON document).

    Unknown ``kind`` values decode to :class:`Unrecognized` so that upstream
    producers can emit constructs this pipeline does not model yet.
    """

    if not isinstance(data, Mapping):
        raise NodeDecodeError(f"expected a mapping, got {type(data).__name__}")
    kind = str(data.get("kind", "unrecognized")).lower()
    metadata = data.get("metadata") or {}
    if not isinstance(metadata, Mapping):
        raise NodeDecodeError("node metadata must be a mapping")

    if kind == "identifier":
        return Identifier(str(_require(data, "name")), metadata=dict(metadata))
    if kind == "number":
        raw = _require(data, "value")
        try:
            value = float(raw)
        except (TypeError, ValueError) as exc:
            raise NodeDecodeError(f"invalid number literal {raw!r}") from exc
        return NumberLiteral(value, metadata=dict(metadata))
    if kind == "binary_op":
        return BinaryOperation(
            str(_require(data, "operator")),
            node_from_dict(_require(data, "left")),
            node_from_dict(_require(data, "right")),
            metadata=dict(metadata),
        )
    if kind == "function":
        body: List[SyntaxNode] = [
            node_from_dict(item) for item in data.get("body") or []
        ]
        return FunctionDefinition(
            str(_require(data, "name")),
            tuple(str(param) for param in data.get("parameters") or []),
            tuple(body),
            metadata=dict(metadata),
        )
    return Unrecognized(metadata=dict(metadata))


__all__ = [
    "BinaryOperation",
    "FunctionDefinition",
    "Identifier",
    "NodeMetadata",
    "NumberLiteral",
    "SyntaxNode",
    "Unrecognized",
    "node_from_dict",
]
