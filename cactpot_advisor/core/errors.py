from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CactpotError(Exception):
    """Base error envelope. The CLI prints these as `path: CODE: message`."""

    code: str
    message: str
    path: Optional[str] = None

    def __str__(self) -> str:
        loc = self.path if self.path else "<board>"
        return f"{loc}: {self.code}: {self.message}"


class InvalidIndex(CactpotError):
    pass


class InvalidGrid(CactpotError):
    pass


class InvalidDigit(CactpotError):
    pass


class DuplicateDigit(CactpotError):
    pass


class UnknownLine(CactpotError):
    pass


class BoardLoadError(CactpotError):
    pass
