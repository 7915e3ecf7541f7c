from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Result:
    """Outcome of one remote call: a value on success, the cause on failure.

    A success may carry ``None`` when the server answered 2xx without a body
    on purpose (e.g. a decrement that deleted the item).
    """

    value: Any = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BaseException) -> "Result":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        return str(self.error) if self.error is not None else ""
