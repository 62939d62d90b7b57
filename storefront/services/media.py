"""
Rewriting of storage-relative media keys into public URLs.

The rewrite works on read models only; persisted rows keep their keys.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Sequence

from pydantic import BaseModel

from storefront.schemas.common import MediaRead

logger = logging.getLogger(__name__)

ABSOLUTE_PREFIXES = ("http://", "https://")


class MediaUrlRewriter:
    def __init__(self, build_public_url: Callable[[str], str]):
        self._build_public_url = build_public_url

    def rewrite_one(self, media: MediaRead) -> MediaRead:
        if media.url.startswith(ABSOLUTE_PREFIXES):
            return media
        try:
            url = self._build_public_url(media.url)
        except Exception as exc:
            # Item keeps its key; the surrounding read still succeeds.
            logger.warning("Could not build public URL for media %s (%s): %s", media.id, media.url, exc)
            return media
        return media.model_copy(update={"url": url})

    def rewrite(self, media: Sequence[MediaRead]) -> List[MediaRead]:
        return [self.rewrite_one(item) for item in media]

    def rewrite_nested(self, value: Any) -> Any:
        """Apply `rewrite_one` to every media read model inside `value`."""
        if isinstance(value, MediaRead):
            return self.rewrite_one(value)
        if isinstance(value, BaseModel):
            updates = {}
            for name in type(value).model_fields:
                current = getattr(value, name)
                if isinstance(current, (BaseModel, list)):
                    updates[name] = self.rewrite_nested(current)
            return value.model_copy(update=updates) if updates else value
        if isinstance(value, list):
            return [self.rewrite_nested(item) for item in value]
        return value
