"""
Fixtures for tool runner tests.

Tools talk to a real model host built from the backend apps; every exchange
goes through a TestClient instead of a socket.
"""

from __future__ import annotations

import copy

import pytest
from fastapi.testclient import TestClient

from backend.main import create_command_app, create_data_app
from backend.store import DocumentStore
from dna_tools.client import BridgeClient
from dna_tools.config import BridgeConfig, Plane
from dna_tools.tools import Toolbox

MODEL = {
    "root": {
        "name": "Shop",
        "namespace": [
            {
                "name": "Main",
                "userStory": [
                    {"name": "s-1", "storyNumber": "US-1", "storyText": "A Manager wants to view all Orders", "isIgnored": "true"},
                ],
                "object": [
                    {"name": "Pac", "parentObjectName": "", "prop": []},
                    {
                        "name": "Role",
                        "parentObjectName": "Pac",
                        "isLookup": "true",
                        "lookupItem": [{"name": "Admin"}, {"name": "Manager"}],
                    },
                    {
                        "name": "Customer",
                        "parentObjectName": "Pac",
                        "isLookup": "false",
                        "prop": [{"name": "FirstName", "sqlServerDBDataType": "nvarchar"}],
                        "report": [
                            {
                                "name": "CustomerList",
                                "titleText": "Customer List",
                                "visualizationType": "Grid",
                                "isPage": "true",
                                "reportParam": [{"name": "Status"}],
                                "reportColumn": [{"name": "FirstName"}, {"name": "LastName"}, {"name": "Email"}],
                                "reportButton": [{"buttonText": "Back", "buttonType": "back"}],
                            }
                        ],
                        "objectWorkflow": [
                            {
                                "name": "CustomerListInitReport",
                                "isPage": "false",
                                "pageTitleText": "Customers",
                                "objectWorkflowOutputVar": [{"name": "Total", "sqlServerDBDataType": "int"}],
                            },
                            {
                                "name": "CustomerProcessing",
                                "isDynaFlow": "true",
                                "isDynaFlowTask": "false",
                                "codeDescription": "Nightly processing",
                                "dynaFlowTask": [{"name": "StepOne"}, {"name": "StepTwo"}, {"name": "StepThree"}],
                            },
                            {
                                "name": "CalculateDiscount",
                                "isPage": "false",
                                "objectWorkflowParam": [
                                    {"name": "Amount", "sqlServerDBDataType": "decimal", "sqlServerDBDataTypeSize": "18,2"}
                                ],
                                "objectWorkflowOutputVar": [{"name": "Discount", "sqlServerDBDataType": "decimal"}],
                            },
                        ],
                    },
                ],
            },
            {
                "name": "Sales",
                "object": [
                    {
                        "name": "Order",
                        "parentObjectName": "Customer",
                        "isLookup": "false",
                        "report": [{"name": "OrderList"}],
                        "objectWorkflow": [{"name": "Recalculate"}],
                    }
                ],
            },
        ],
    }
}

SERVICE_DATA = {
    "model-features": [
        {"name": "Auditing", "version": "1.0", "displayName": "Auditing"},
        {"name": "Billing", "version": "2.1", "displayName": "Billing"},
    ],
    "template-sets": [{"name": "WebApp", "version": "3.0", "displayName": "Web Application"}],
}


class HostHarness:
    """Backend apps plus a client factory that counts exchanges per plane."""

    def __init__(self, store: DocumentStore):
        self.store = store
        self.apps = {Plane.DATA: create_data_app(store), Plane.COMMAND: create_command_app(store)}
        self.exchanges: list[Plane] = []

    def factory(self, plane: Plane, timeout: float) -> TestClient:
        self.exchanges.append(plane)
        return TestClient(self.apps[plane])


@pytest.fixture
def store(tmp_path):
    return DocumentStore(
        document=copy.deepcopy(MODEL),
        path=tmp_path / "app-dna.json",
        logged_in=True,
        service_data=copy.deepcopy(SERVICE_DATA),
    )


@pytest.fixture
def host(store):
    return HostHarness(store)


@pytest.fixture
def bridge(host):
    return BridgeClient(BridgeConfig(), client_factory=host.factory)


@pytest.fixture
def tools(bridge):
    return Toolbox(bridge)
