from __future__ import annotations

import logging
import sys

import uvicorn
from pydantic import ValidationError

from .core.config import get_settings

logger = logging.getLogger(__name__)


def run() -> None:
    try:
        settings = get_settings()
    except ValidationError as exc:
        missing = ", ".join(str(error["loc"][0]) for error in exc.errors())
        logging.basicConfig(level=logging.ERROR)
        logger.error(f"❌ Invalid configuration ({missing}); set SHOPIFY_STORE_DOMAIN and SHOPIFY_ADMIN_TOKEN")
        sys.exit(1)
    uvicorn.run("shopify_uploader.app:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
