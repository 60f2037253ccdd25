#!/usr/bin/env python3
"""
Upload a local file through a running server
Run via: python scripts/upload_file.py path/to/file.png [--server http://localhost:3000]
"""

import argparse
import mimetypes
import sys
from pathlib import Path

import httpx


def upload(path: Path, server: str, timeout: float) -> int:
    print("=" * 80)
    print(f"UPLOADING {path.name}")
    print("=" * 80)

    if not path.is_file():
        print(f"❌ File not found: {path}")
        return 1

    mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    content = path.read_bytes()
    print(f"Size: {len(content)} bytes, MIME type: {mime_type}")

    try:
        response = httpx.post(
            f"{server.rstrip('/')}/upload",
            files={"file": (path.name, content, mime_type)},
            timeout=timeout,
        )
    except httpx.HTTPError as exc:
        print(f"❌ Request failed: {exc}")
        return 1

    body = response.json()
    if response.status_code != 200:
        print(f"❌ Upload failed with status {response.status_code}: {body}")
        return 1

    print(f"✅ Public URL: {body['url']}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("path", type=Path)
    parser.add_argument("--server", default="http://localhost:3000")
    # server-side polling alone can take POLL_ATTEMPTS seconds
    parser.add_argument("--timeout", type=float, default=120.0)
    args = parser.parse_args()
    sys.exit(upload(args.path, args.server, args.timeout))


if __name__ == "__main__":
    main()
