from __future__ import annotations

from dataclasses import dataclass

from .enums import FileKind, PollState, READY_STATUS


@dataclass(frozen=True, slots=True)
class StagedTarget:
    url: str
    resource_url: str
    parameters: tuple[tuple[str, str], ...]


@dataclass(frozen=True, slots=True)
class RegisteredAsset:
    kind: FileKind
    id: str


@dataclass(frozen=True, slots=True)
class AssetStatus:
    """One observation of a file node while polling."""

    kind: FileKind | None
    file_status: str | None
    url: str | None = None

    @property
    def is_ready(self) -> bool:
        return self.file_status == READY_STATUS and bool(self.url)


@dataclass(frozen=True, slots=True)
class PollOutcome:
    state: PollState
    attempts: int
    url: str | None = None
    last_status: str | None = None
