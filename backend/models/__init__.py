"""
Pydantic models for the model host.

Request bodies only. No imports from store or routes.
"""

from backend.models.bridge import (
    AddPropsRequest,
    CommandRequest,
    CreateDataObjectRequest,
    CreateReportRequest,
    CreateUserStoryRequest,
    CreateWorkflowRequest,
    MutationRequest,
    ServiceListRequest,
    UpdateUserStoryRequest,
)

__all__ = [
    # Data plane
    "AddPropsRequest",
    "CreateDataObjectRequest",
    "CreateReportRequest",
    "CreateUserStoryRequest",
    "CreateWorkflowRequest",
    "MutationRequest",
    "UpdateUserStoryRequest",
    # Command plane
    "CommandRequest",
    "ServiceListRequest",
]
