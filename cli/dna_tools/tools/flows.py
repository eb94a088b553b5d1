"""
General flow and page init flow tools.

Both families share the objectWorkflow array with workflows. General flows
carry no kind marker; page init flows are recognised by the InitObjWF /
InitReport name suffix. Parameter and output variable types are exposed as
dataType / dataSize.
"""

from __future__ import annotations

from dna_tools.client import BridgeClient
from dna_tools.tools.base import FamilyTools
from engine.kernel.families import GENERAL_FLOW, PAGE_INIT_FLOW


class GeneralFlowTools(FamilyTools):
    def __init__(self, client: BridgeClient):
        super().__init__(client, GENERAL_FLOW)


class PageInitFlowTools(FamilyTools):
    def __init__(self, client: BridgeClient):
        super().__init__(client, PAGE_INIT_FLOW)
