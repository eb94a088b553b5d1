"""
Pytest configuration and fixtures for model host tests.
"""

from __future__ import annotations

import copy

import httpx
import pytest
import pytest_asyncio

from backend.main import create_command_app, create_data_app
from backend.store import DocumentStore

SAMPLE_DOCUMENT = {
    "root": {
        "name": "Shop",
        "namespace": [
            {
                "name": "Main",
                "userStory": [
                    {"name": "s-1", "storyNumber": "1", "storyText": "A Manager wants to view all Orders", "isIgnored": "false"},
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
                        "codeDescription": "People who buy things",
                        "prop": [{"name": "FirstName", "sqlServerDBDataType": "nvarchar"}],
                        "report": [
                            {
                                "name": "CustomerList",
                                "titleText": "Customer List",
                                "visualizationType": "Grid",
                                "reportParam": [{"name": "Status"}],
                                "reportColumn": [{"name": "FirstName"}, {"name": "LastName"}, {"name": "Email"}],
                                "reportButton": [{"buttonText": "Back", "buttonType": "back"}],
                            }
                        ],
                        "objectWorkflow": [
                            {"name": "CustomerListInitReport", "isPage": "false", "titleText": "hidden"},
                            {
                                "name": "CustomerProcessing",
                                "isDynaFlow": "true",
                                "dynaFlowTask": [{"name": "StepOne"}, {"name": "StepTwo"}],
                            },
                            {
                                "name": "CalculateDiscount",
                                "isPage": "false",
                                "objectWorkflowParam": [{"name": "Amount", "sqlServerDBDataType": "decimal"}],
                                "objectWorkflowOutputVar": [{"name": "Discount"}],
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
        {"name": "Auditing", "version": "1.0", "displayName": "Auditing", "isCompleted": "false"},
        {"name": "Billing", "version": "2.1", "displayName": "Billing", "isCompleted": "true"},
        {"name": "Chat", "version": "1.2", "displayName": "Chat", "isCompleted": "false"},
    ],
    "prep-requests": [
        {"modelPrepRequestCode": "A", "modelPrepRequestRequestedUTCDateTime": "2024-01-01T00:00:00"},
        {"modelPrepRequestCode": "B", "modelPrepRequestRequestedUTCDateTime": "2024-03-01T00:00:00"},
    ],
}


@pytest.fixture
def store(tmp_path):
    """Fresh store over a copy of the sample document, saving into tmp_path."""
    return DocumentStore(
        document=copy.deepcopy(SAMPLE_DOCUMENT),
        path=tmp_path / "app-dna.json",
        logged_in=True,
        service_data=copy.deepcopy(SERVICE_DATA),
    )


@pytest_asyncio.fixture
async def data_client(store):
    """Async HTTP client against the data plane app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=create_data_app(store)),
        base_url="http://test",
    ) as client:
        yield client


@pytest_asyncio.fixture
async def command_client(store):
    """Async HTTP client against the command plane app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=create_command_app(store)),
        base_url="http://test",
    ) as client:
        yield client
