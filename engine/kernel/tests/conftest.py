"""
Engine kernel test configuration.

Provides a small model document shared by the locator and family tests.
"""

import copy

import pytest

SAMPLE_DOCUMENT = {
    "root": {
        "name": "Sample",
        "namespace": [
            {
                "name": "Main",
                "userStory": [],
                "object": [
                    {
                        "name": "Pac",
                        "parentObjectName": "",
                        "prop": [],
                        "report": [],
                        "objectWorkflow": [],
                    },
                    {
                        "name": "Customer",
                        "parentObjectName": "Pac",
                        "prop": [{"name": "FirstName", "sqlServerDBDataType": "nvarchar"}],
                        "report": [
                            {
                                "name": "CustomerList",
                                "titleText": "Customer List",
                                "reportParam": [{"name": "Status"}],
                                "reportColumn": [{"name": "FirstName"}, {"name": "LastName"}],
                                "reportButton": [{"buttonText": "Back", "buttonType": "back"}],
                            }
                        ],
                        "objectWorkflow": [
                            {"name": "CustomerListInitReport", "isPage": "false"},
                            {"name": "CustomerAddInitObjWF", "isPage": "false"},
                            {"name": "CustomerProcessing", "isDynaFlow": "true", "dynaFlowTask": [{"name": "StepOne"}]},
                            {"name": "CalculateDiscount", "isPage": "false"},
                            {"name": "SendEmailTask", "isDynaFlowTask": "true"},
                            {"name": "BrokenInitReport", "isDynaFlow": "true"},
                        ],
                    },
                ],
            },
            {
                "name": "Secondary",
                "object": [
                    {
                        "name": "Order",
                        "parentObjectName": "Customer",
                        "report": [{"name": "OrderList"}],
                        "objectWorkflow": [{"name": "Recalculate"}, {"name": "CalculateDiscount"}],
                    }
                ],
            },
        ],
    }
}


@pytest.fixture
def document():
    """Deep copy of the sample document so tests can mutate freely."""
    return copy.deepcopy(SAMPLE_DOCUMENT)
