from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Success:
    data: Any


@dataclass(frozen=True)
class Error:
    message: str


UiState = Union[Idle, Loading, Success, Error]

IDLE = Idle()
LOADING = Loading()
