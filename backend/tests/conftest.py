"""Pytest configuration and fixtures for backend tests."""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from clinical_risk.main import app
from clinical_risk.services.scoring import RiskScoringService, reset_risk_scoring_service


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client for the API."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def service() -> RiskScoringService:
    """Fresh scoring service, independent of the singleton."""
    reset_risk_scoring_service()
    return RiskScoringService()


@pytest.fixture
def dapt_inputs() -> dict[str, Any]:
    """DAPT record scoring 0: age <65, 3.5 mm stent, no risk factors."""
    return {"age": 50, "stent_diameter": 3.5}


@pytest.fixture
def gwtg_inputs() -> dict[str, Any]:
    """GWTG-HF record scoring 30 (low band)."""
    return {
        "age": 50,
        "systolic_bp": 120,
        "bun": 20,
        "sodium": 139,
        "heart_rate": 70,
        "race": "black",
        "copd": False,
    }


@pytest.fixture
def maggic_inputs() -> dict[str, Any]:
    """MAGGIC record scoring 0 points."""
    return {
        "age": 50,
        "gender": "female",
        "lvef": 45,
        "nyha_class": "1",
        "systolic_bp": 140,
        "bmi": 32,
        "creatinine": 80,
        "beta_blocker": True,
        "ace_inhibitor": True,
    }


@pytest.fixture
def hcm_inputs() -> dict[str, Any]:
    """HCM Risk-SCD record with a low (about 2.6 %) 5-year risk."""
    return {
        "age": 45,
        "max_wall_thickness": 22,
        "la_diameter": 45,
        "lvot_gradient": 30,
    }


@pytest.fixture
def euroscore_inputs() -> dict[str, Any]:
    """EuroSCORE II elective isolated CABG, 65-year-old man, no risk factors."""
    return {
        "age": 65,
        "gender": "male",
        "creatinine_clearance": ">85",
        "lv_function": "good",
        "nyha_class": "1",
        "pa_pressure": "<31",
        "urgency": "elective",
        "procedure_weight": "isolated_cabg",
    }


@pytest.fixture
def timi_inputs() -> dict[str, Any]:
    """TIMI record scoring 3 (intermediate)."""
    return {"age": 70, "cad_risk_factors": 3, "known_cad": True}
