"""Token types produced by the script lexer."""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Tuple

from dataclasses_json import dataclass_json


@dataclass_json
@dataclass(frozen=True)
class Invocation:
    """A code name and the raw argument remainder that follows it."""

    kind: ClassVar[str] = "invocation"

    name: str
    args: str = ""
    span: Tuple[int, int] = field(default=(0, 0), compare=False)

    def as_dict(self) -> Dict[str, Any]:
        return {"type": self.kind, **self.to_dict()}


@dataclass_json
@dataclass(frozen=True)
class Comment:
    """A ``//`` or ``#`` comment with its marker stripped and body trimmed."""

    kind: ClassVar[str] = "comment"

    body: str
    span: Tuple[int, int] = field(default=(0, 0), compare=False)

    def as_dict(self) -> Dict[str, Any]:
        return {"type": self.kind, **self.to_dict()}


@dataclass_json
@dataclass(frozen=True)
class Ignorable:
    """Input that matched no rule. The shell always discards it."""

    kind: ClassVar[str] = "ignorable"

    text: str
    span: Tuple[int, int] = field(default=(0, 0), compare=False)

    def as_dict(self) -> Dict[str, Any]:
        return {"type": self.kind, **self.to_dict()}
