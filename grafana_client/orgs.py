"""Organization and server health operations."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .context import Context
from .models import Health, Org, StatusMessage

logger = logging.getLogger(__name__)


class OrgsMixin:

    def get_actual_org(self, ctx: Optional[Context] = None) -> Org:
        """The organization the credentials (or the org-ID header) currently point at."""
        data, status = self._get(ctx, "api/org")
        return self._decode(data, status, Org)

    def get_all_orgs(self, ctx: Optional[Context] = None) -> List[Org]:
        data, status = self._get(ctx, "api/orgs")
        return self._decode(data, status, List[Org])

    def create_org(self, name: str, ctx: Optional[Context] = None) -> StatusMessage:
        logger.info("Creating organization %r", name)
        data, status = self._post(ctx, "api/orgs", None, self._encode({"name": name}))
        return self._decode(data, status, StatusMessage)

    def update_actual_org_preferences(self, preferences: Dict[str, Any],
                                      ctx: Optional[Context] = None) -> StatusMessage:
        """
        Patch preferences of the current organization.

        Only the keys present in ``preferences`` change (``theme``,
        ``homeDashboardUID``, ``timezone``, ``weekStart``...).
        """
        logger.info("Updating organization preferences: %s", sorted(preferences))
        data, status = self._patch(ctx, "api/org/preferences", None, self._encode(preferences))
        return self._decode(data, status, StatusMessage)


class HealthMixin:

    def get_health(self, ctx: Optional[Context] = None) -> Health:
        data, status = self._get(ctx, "api/health")
        return self._decode(data, status, Health)
