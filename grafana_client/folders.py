"""Folder operations."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .context import Context
from .models import Folder, StatusMessage

logger = logging.getLogger(__name__)


class FoldersMixin:

    def get_all_folders(self, ctx: Optional[Context] = None) -> List[Folder]:
        data, status = self._get(ctx, "api/folders")
        return self._decode(data, status, List[Folder])

    def get_folder_by_uid(self, uid: str, ctx: Optional[Context] = None) -> Folder:
        data, status = self._get(ctx, f"api/folders/{uid}")
        return self._decode(data, status, Folder)

    def create_folder(self, title: str, uid: str = "", ctx: Optional[Context] = None) -> Folder:
        """Create a folder; the server generates a uid when none is given."""
        payload: Dict[str, Any] = {"title": title}
        if uid:
            payload["uid"] = uid
        logger.info("Creating folder %r", title)
        data, status = self._post(ctx, "api/folders", None, self._encode(payload))
        return self._decode(data, status, Folder)

    def delete_folder_by_uid(self, uid: str, ctx: Optional[Context] = None) -> StatusMessage:
        """Delete a folder together with every dashboard stored in it."""
        logger.info("Deleting folder %s", uid)
        data, status = self._delete(ctx, f"api/folders/{uid}")
        return self._decode(data, status, StatusMessage)
