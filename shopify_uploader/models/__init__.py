from .enums import AssetContentType, FileKind, PollState
from .upload import AssetStatus, PollOutcome, RegisteredAsset, StagedTarget

__all__ = [
    "AssetContentType",
    "AssetStatus",
    "FileKind",
    "PollOutcome",
    "PollState",
    "RegisteredAsset",
    "StagedTarget",
]
