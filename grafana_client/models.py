"""
Response shapes returned by the Grafana REST API.

The server omits fields it has nothing to say about, so every field is
Optional and stays None when absent. A None is "not provided", a 0 is a
real zero sent by the server.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _APIModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class StatusMessage(_APIModel):
    id: Optional[int] = None
    org_id: Optional[int] = Field(default=None, alias="orgId")
    message: Optional[str] = None
    slug: Optional[str] = None
    version: Optional[int] = None
    status: Optional[str] = None
    uid: Optional[str] = None
    url: Optional[str] = None


class FoundBoard(_APIModel):
    """One hit of /api/search."""
    id: Optional[int] = None
    uid: Optional[str] = None
    title: Optional[str] = None
    uri: Optional[str] = None
    url: Optional[str] = None
    slug: Optional[str] = None
    type: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    is_starred: Optional[bool] = Field(default=None, alias="isStarred")
    folder_id: Optional[int] = Field(default=None, alias="folderId")
    folder_uid: Optional[str] = Field(default=None, alias="folderUid")
    folder_title: Optional[str] = Field(default=None, alias="folderTitle")
    folder_url: Optional[str] = Field(default=None, alias="folderUrl")


class BoardProperties(_APIModel):
    """The ``meta`` block that accompanies a dashboard."""
    is_starred: Optional[bool] = Field(default=None, alias="isStarred")
    is_home: Optional[bool] = Field(default=None, alias="isHome")
    is_snapshot: Optional[bool] = Field(default=None, alias="isSnapshot")
    type: Optional[str] = None
    can_save: Optional[bool] = Field(default=None, alias="canSave")
    can_edit: Optional[bool] = Field(default=None, alias="canEdit")
    can_star: Optional[bool] = Field(default=None, alias="canStar")
    slug: Optional[str] = None
    url: Optional[str] = None
    expires: Optional[str] = None
    created: Optional[str] = None
    updated: Optional[str] = None
    updated_by: Optional[str] = Field(default=None, alias="updatedBy")
    created_by: Optional[str] = Field(default=None, alias="createdBy")
    version: Optional[int] = None
    folder_id: Optional[int] = Field(default=None, alias="folderId")
    folder_uid: Optional[str] = Field(default=None, alias="folderUid")
    folder_title: Optional[str] = Field(default=None, alias="folderTitle")
    folder_url: Optional[str] = Field(default=None, alias="folderUrl")
    provisioned: Optional[bool] = None


class DashboardWithMeta(_APIModel):
    dashboard: Dict[str, Any]
    meta: BoardProperties = Field(default_factory=BoardProperties)


class Datasource(_APIModel):
    id: Optional[int] = None
    uid: Optional[str] = None
    org_id: Optional[int] = Field(default=None, alias="orgId")
    name: Optional[str] = None
    type: Optional[str] = None
    access: Optional[str] = None
    url: Optional[str] = None
    user: Optional[str] = None
    database: Optional[str] = None
    basic_auth: Optional[bool] = Field(default=None, alias="basicAuth")
    basic_auth_user: Optional[str] = Field(default=None, alias="basicAuthUser")
    with_credentials: Optional[bool] = Field(default=None, alias="withCredentials")
    is_default: Optional[bool] = Field(default=None, alias="isDefault")
    json_data: Optional[Dict[str, Any]] = Field(default=None, alias="jsonData")
    read_only: Optional[bool] = Field(default=None, alias="readOnly")


class Folder(_APIModel):
    id: Optional[int] = None
    uid: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    has_acl: Optional[bool] = Field(default=None, alias="hasAcl")
    can_save: Optional[bool] = Field(default=None, alias="canSave")
    can_edit: Optional[bool] = Field(default=None, alias="canEdit")
    can_admin: Optional[bool] = Field(default=None, alias="canAdmin")
    version: Optional[int] = None


class Address(_APIModel):
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    zip_code: Optional[str] = Field(default=None, alias="zipCode")
    state: Optional[str] = None
    country: Optional[str] = None


class Org(_APIModel):
    id: Optional[int] = None
    name: Optional[str] = None
    address: Optional[Address] = None


class Health(_APIModel):
    commit: Optional[str] = None
    database: Optional[str] = None
    version: Optional[str] = None
