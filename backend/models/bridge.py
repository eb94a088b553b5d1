"""Request bodies accepted by the host's data and command planes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class CreateReportRequest(BaseModel):
    """What the tool runner sends to POST /api/create-report."""

    owner_object_name: str
    report: dict[str, Any]
    page_init_flow: dict[str, Any]


class CreateWorkflowRequest(BaseModel):
    owner_object_name: str
    workflow: dict[str, Any]


class CreateDataObjectRequest(BaseModel):
    """POST /api/data-objects. Field names follow the model document."""

    name: str
    parentObjectName: str
    isLookup: str = "false"
    codeDescription: str | None = None


class AddPropsRequest(BaseModel):
    name: str
    props: list[dict[str, Any]] = Field(min_length=1)


class CreateUserStoryRequest(BaseModel):
    story: dict[str, Any]


class UpdateUserStoryRequest(BaseModel):
    """POST /api/user-stories/update. `name` is the story's generated identifier."""

    name: str
    updates: dict[str, Any]


class MutationRequest(BaseModel):
    """
    Body of every generic entity mutation (POST /api/<verb>-<family>[-<child>]).

    `name` selects the entity (exact match); `owner_object_name` scopes it.
    Which of the remaining fields is read depends on the verb.
    """

    name: str
    owner_object_name: str | None = None
    updates: dict[str, Any] | None = None
    entity: dict[str, Any] | None = None
    item: dict[str, Any] | None = None
    child_name: str | None = None
    new_position: int | None = None


class CommandRequest(BaseModel):
    """POST /api/execute-command on the command plane."""

    command: str = Field(min_length=1)
    args: list[Any] = Field(default_factory=list)
    featureName: str | None = None
    blueprintName: str | None = None
    version: str | None = None


class ServiceListRequest(BaseModel):
    """Paging body for POST /api/model-services/<endpoint>."""

    pageNumber: int = Field(default=1, ge=1)
    itemCountPerPage: int = Field(default=10, ge=1)
    orderByColumnName: str | None = None
    orderByDescending: bool = False
