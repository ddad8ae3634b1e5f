"""Data source operations."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

from .context import Context
from .models import Datasource, StatusMessage

logger = logging.getLogger(__name__)


def _by_name_paths(name: str) -> Tuple[str, str]:
    # data source names may contain "/" which must reach the server escaped
    return f"api/datasources/name/{name}", f"api/datasources/name/{quote(name, safe='')}"


class DatasourcesMixin:

    def get_all_datasources(self, ctx: Optional[Context] = None) -> List[Datasource]:
        data, status = self._get(ctx, "api/datasources")
        return self._decode(data, status, List[Datasource])

    def get_datasource(self, datasource_id: int, ctx: Optional[Context] = None) -> Datasource:
        data, status = self._get(ctx, f"api/datasources/{int(datasource_id)}")
        return self._decode(data, status, Datasource)

    def get_datasource_by_uid(self, uid: str, ctx: Optional[Context] = None) -> Datasource:
        data, status = self._get(ctx, f"api/datasources/uid/{uid}")
        return self._decode(data, status, Datasource)

    def get_datasource_by_name(self, name: str, ctx: Optional[Context] = None) -> Datasource:
        query, raw_path = _by_name_paths(name)
        data, status = self._get_with_raw_path(ctx, query, raw_path)
        return self._decode(data, status, Datasource)

    def create_datasource(self, datasource: Dict[str, Any], ctx: Optional[Context] = None) -> StatusMessage:
        """
        Create a data source.

        Args:
            datasource: Data source definition (``name``, ``type``, ``url``, ``access``...)
            ctx: Cancellation context

        Returns:
            StatusMessage with the new data source id
        """
        logger.info("Creating datasource %r", datasource.get("name"))
        data, status = self._post(ctx, "api/datasources", None, self._encode(datasource))
        return self._decode(data, status, StatusMessage)

    def update_datasource(self, datasource_id: int, datasource: Dict[str, Any],
                          ctx: Optional[Context] = None) -> StatusMessage:
        logger.info("Updating datasource %d", datasource_id)
        data, status = self._put(ctx, f"api/datasources/{int(datasource_id)}", None, self._encode(datasource))
        return self._decode(data, status, StatusMessage)

    def delete_datasource(self, datasource_id: int, ctx: Optional[Context] = None) -> StatusMessage:
        logger.info("Deleting datasource %d", datasource_id)
        data, status = self._delete(ctx, f"api/datasources/{int(datasource_id)}")
        return self._decode(data, status, StatusMessage)

    def delete_datasource_by_name(self, name: str, ctx: Optional[Context] = None) -> StatusMessage:
        logger.info("Deleting datasource %r", name)
        query, raw_path = _by_name_paths(name)
        data, status = self._delete(ctx, query, raw_path)
        return self._decode(data, status, StatusMessage)
