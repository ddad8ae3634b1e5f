"""The full Grafana client: request plumbing plus every typed operation."""

from .dashboards import DashboardsMixin
from .datasources import DatasourcesMixin
from .folders import FoldersMixin
from .orgs import HealthMixin, OrgsMixin
from .rest_request import Client


class GrafanaClient(DashboardsMixin, DatasourcesMixin, FoldersMixin, OrgsMixin, HealthMixin, Client):
    """Client for a Grafana server's REST API.

    Example:
        with GrafanaClient("http://grafana.host:3000", "api-key") as client:
            status = client.set_raw_dashboard(raw_bytes)
    """


__all__ = ["GrafanaClient"]
