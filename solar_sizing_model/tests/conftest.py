"""Shared pytest fixtures for the solar_sizing_model test suite.

All fixtures are synthetic and deterministic; no test touches the network.

Reference quote (used by reference_body and the calculator tests)
-----------------------------------------------------------------
residential, 3 000 THB/month, single-phase, 60 % daytime usage

  monthly consumption = 3 000 / 4.5            = 666.67 kWh
  daily consumption   = 666.67 / 30            =  22.22 kWh
  offsettable         = 22.22 × 0.60           =  13.33 kWh
  raw capacity        = 13.33 / (4.5 × 0.85)   =   3.486 kW
  recommended         = ceil(34.86) / 10       =   3.5 kW
  estimated cost      = 3.5 × 45 000           = 157 500 THB
  daily generation    = 3.5 × 4.5 × 0.85       =  13.3875 kWh
  monthly savings     = 13.3875 × 30 × 4.5     =   1 807.31 → 1 807 THB
  payback             = 157 500 / (1 807.31×12) =  7.26 → 7.3 years
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from solar_sizing_model.leads.cms_client import PayloadClient


@pytest.fixture
def reference_body() -> dict:
    """Wire-format body of the reference quote."""
    return {
        "locationType": "residential",
        "monthlyBill": 3000,
        "electricSystem": "single-phase",
        "dayNightRatio": 60,
    }


@pytest.fixture
def valid_lead_body() -> dict:
    return {
        "fullName": "สมชาย ใจดี",
        "phone": "081-234-5678",
        "email": "somchai@example.com",
    }


@pytest.fixture
def mock_cms_client() -> MagicMock:
    """PayloadClient stand-in whose submit_lead returns a created document."""
    client = MagicMock(spec=PayloadClient)
    client.submit_lead.return_value = {
        "id": "lead-1",
        "fullName": "สมชาย ใจดี",
        "phone": "0812345678",
        "email": "somchai@example.com",
    }
    return client


@pytest.fixture
def batch_entries(reference_body) -> list[dict]:
    """Three quotes: the reference, a commercial one and an invalid one."""
    return [
        {"label": "house", **reference_body},
        {
            "label": "shop",
            "locationType": "commercial",
            "monthlyBill": 10000,
            "electricSystem": "three-phase",
            "dayNightRatio": 70,
        },
        {
            "label": "typo",
            "locationType": "residential",
            "monthlyBill": -100,
            "electricSystem": "single-phase",
            "dayNightRatio": 150,
        },
    ]


@pytest.fixture
def batch_json_path(tmp_path, batch_entries):
    path = tmp_path / "quotes.json"
    path.write_text(json.dumps(batch_entries), encoding="utf-8")
    return path


@pytest.fixture
def batch_csv_path(tmp_path):
    path = tmp_path / "quotes.csv"
    path.write_text(
        "label,locationType,monthlyBill,electricSystem,dayNightRatio\n"
        "house,residential,3000,single-phase,60\n"
        "factory,industrial,50000,three-phase,80\n"
        "bad,castle,3000,single-phase,60\n",
        encoding="utf-8",
    )
    return path
