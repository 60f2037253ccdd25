from __future__ import annotations

import enum


class AssetContentType(str, enum.Enum):
    image = "IMAGE"
    video = "VIDEO"
    file = "FILE"

    @classmethod
    def from_mime(cls, mime_type: str) -> "AssetContentType":
        mime_type = mime_type.lower()
        if mime_type.startswith("video/"):
            return cls.video
        if mime_type.startswith("image/"):
            return cls.image
        # PDFs, archives and everything else
        return cls.file


class FileKind(str, enum.Enum):
    generic_file = "GenericFile"
    media_image = "MediaImage"
    video = "Video"


class PollState(str, enum.Enum):
    pending = "pending"
    ready = "ready"
    exhausted = "exhausted"


READY_STATUS = "READY"
UNKNOWN_STATUS = "UNKNOWN"
