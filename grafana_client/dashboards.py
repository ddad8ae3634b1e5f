"""Dashboard operations: import, search, fetch and delete."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .context import Context
from .models import BoardProperties, DashboardWithMeta, FoundBoard, StatusMessage

logger = logging.getLogger(__name__)

SEARCH_TYPE_DASHBOARD = "dash-db"


class DashboardsMixin:

    def set_raw_dashboard(self, raw: bytes, ctx: Optional[Context] = None) -> StatusMessage:
        """
        Import an already serialized dashboard import request.

        ``raw`` is sent as-is to ``POST /api/dashboards/db``; nothing is
        validated locally. A dashboard with the same uid or title is
        overwritten only if the document asks for it.

        Args:
            raw: JSON bytes, typically ``{"dashboard": {...}, "overwrite": true}``
            ctx: Cancellation context

        Returns:
            StatusMessage describing the stored dashboard
        """
        logger.info("Importing raw dashboard (%d bytes)", len(raw))
        data, status = self._post(ctx, "api/dashboards/db", None, raw)
        return self._decode(data, status, StatusMessage)

    def set_dashboard(
        self,
        board: Dict[str, Any],
        overwrite: bool = False,
        folder_id: int = 0,
        folder_uid: str = "",
        message: str = "",
        ctx: Optional[Context] = None,
    ) -> StatusMessage:
        """
        Create or update a dashboard from its model.

        Args:
            board: Dashboard model (the object with ``title``, ``panels``, ...)
            overwrite: Replace an existing dashboard with the same uid/title
            folder_id: Target folder id (0 is the General folder)
            folder_uid: Target folder uid, takes precedence over folder_id on the server
            message: Commit message stored with the new version
            ctx: Cancellation context
        """
        payload: Dict[str, Any] = {
            "dashboard": board,
            "overwrite": overwrite,
            "folderId": folder_id,
        }
        if folder_uid:
            payload["folderUid"] = folder_uid
        if message:
            payload["message"] = message
        logger.info("Saving dashboard %r (overwrite=%s)", board.get("title"), overwrite)
        data, status = self._post(ctx, "api/dashboards/db", None, self._encode(payload))
        return self._decode(data, status, StatusMessage)

    def search(
        self,
        query: str = "",
        tags: Sequence[str] = (),
        dashboard_uids: Sequence[str] = (),
        folder_ids: Sequence[int] = (),
        starred: bool = False,
        type_: str = "",
        limit: int = 0,
        ctx: Optional[Context] = None,
    ) -> List[FoundBoard]:
        """Search dashboards and folders; empty filters are not sent."""
        params: Dict[str, Any] = {}
        if query:
            params["query"] = query
        if tags:
            params["tag"] = list(tags)
        if dashboard_uids:
            params["dashboardUIDs"] = list(dashboard_uids)
        if folder_ids:
            params["folderIds"] = list(folder_ids)
        if starred:
            params["starred"] = "true"
        if type_:
            params["type"] = type_
        if limit:
            params["limit"] = limit
        data, status = self._get(ctx, "api/search", params)
        return self._decode(data, status, List[FoundBoard])

    def search_dashboards(self, query: str = "", starred: bool = False, tags: Sequence[str] = (),
                          ctx: Optional[Context] = None) -> List[FoundBoard]:
        return self.search(query=query, tags=tags, starred=starred, type_=SEARCH_TYPE_DASHBOARD, ctx=ctx)

    def get_dashboard_by_uid(self, uid: str, ctx: Optional[Context] = None) -> DashboardWithMeta:
        data, status = self._get(ctx, f"api/dashboards/uid/{uid}")
        return self._decode(data, status, DashboardWithMeta)

    def get_raw_dashboard_by_uid(self, uid: str, ctx: Optional[Context] = None) -> Tuple[bytes, BoardProperties]:
        """
        Fetch a dashboard without interpreting its model.

        The server response is parsed, so the bytes are the dashboard member
        serialized again: same JSON value, but whitespace, key spacing and
        float formatting may differ from what the server sent. Non-ASCII
        text is kept as UTF-8, not escaped.

        Returns:
            Tuple of the dashboard model as UTF-8 JSON bytes and its meta block
        """
        result = self.get_dashboard_by_uid(uid, ctx=ctx)
        return json.dumps(result.dashboard, ensure_ascii=False).encode("utf-8"), result.meta

    def delete_dashboard_by_uid(self, uid: str, ctx: Optional[Context] = None) -> StatusMessage:
        logger.info("Deleting dashboard %s", uid)
        data, status = self._delete(ctx, f"api/dashboards/uid/{uid}")
        return self._decode(data, status, StatusMessage)

