"""Tool facades, one per entity family, all sharing a single BridgeClient."""

from __future__ import annotations

from dna_tools.client import BridgeClient
from dna_tools.tools.data_objects import DataObjectTools
from dna_tools.tools.flows import GeneralFlowTools, PageInitFlowTools
from dna_tools.tools.model import ModelTools
from dna_tools.tools.model_services import ModelServiceTools
from dna_tools.tools.reports import ReportTools
from dna_tools.tools.user_stories import UserStoryTools
from dna_tools.tools.workflows import WorkflowTools


class Toolbox:
    """Every facade, wired to one bridge client."""

    def __init__(self, client: BridgeClient):
        self.client = client
        self.reports = ReportTools(client)
        self.workflows = WorkflowTools(client)
        self.general_flows = GeneralFlowTools(client)
        self.page_init_flows = PageInitFlowTools(client)
        self.data_objects = DataObjectTools(client)
        self.user_stories = UserStoryTools(client)
        self.model = ModelTools(client)
        self.model_services = ModelServiceTools(client)


__all__ = [
    "Toolbox",
    "DataObjectTools",
    "GeneralFlowTools",
    "PageInitFlowTools",
    "ModelTools",
    "ModelServiceTools",
    "ReportTools",
    "UserStoryTools",
    "WorkflowTools",
]
