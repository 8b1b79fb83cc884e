"""Pytest configuration and shared fixtures."""

import json

import pytest

from rtcatalog.review.revision import FixedClock
from rtcatalog.schemas.models import ProductRecord

TODAY = "2025-06-30"


def _make_product(**overrides) -> ProductRecord:
    """A product that passes every completeness rule unless fields are overridden."""
    data = {
        "id": "contour-ai-pro",
        "name": "ContourAI Pro",
        "company": "Acme Oncology",
        "category": "Auto-Contouring",
        "description": "Deep-learning auto-segmentation of organs at risk.",
        "productUrl": "https://acme.example/contourai",
        "companyUrl": "https://acme.example",
        "githubUrl": "https://github.com/acme/contourai",
        "contactEmail": "info@acme.example",
        "contactPhone": "+1 555 0100",
        "modality": ["CT"],
        "anatomicalLocation": ["Head & Neck"],
        "certification": "CE & FDA",
        "features": ["Fast segmentation"],
        "technicalSpecifications": {"population": "Adult", "input": ["CT"]},
        "regulatory": {"ce": {"status": "Certified", "class": "IIb"}, "fda": "510(k) cleared"},
        "market": {"onMarketSince": "2021"},
        "pricing": {"model": ["Subscription"]},
        "evidence": [{"type": "Peer-reviewed", "description": "Dice 0.85"}],
        "limitations": ["Adults only"],
        "lastUpdated": "2025-05-01",
        "lastRevised": "2025-05-01",
        "lastVerified": "2025-05-01",
    }
    data.update(overrides)
    return ProductRecord.model_validate(data)


@pytest.fixture
def make_product():
    return _make_product


@pytest.fixture
def clock():
    return FixedClock(TODAY)


@pytest.fixture
def sample_products():
    """Small mixed catalog: two contouring products, one planning tool, one bare record."""
    return [
        _make_product(),
        _make_product(
            id="mr-contour",
            name="MR Contour",
            company="Beta Medical",
            modality=["MRI"],
            anatomicalLocation=["Pelvis", "Prostate"],
            certification="CE",
            lastRevised="2024-10-01",
        ),
        _make_product(
            id="plan-optimizer",
            name="Plan Optimizer",
            company="Acme Oncology",
            category="Treatment Planning",
            secondaryCategories=["Clinical Prediction"],
            modality="CT",
            anatomicalLocation=["Thorax"],
            certification="FDA",
            lastRevised="2023-01-15",
        ),
        ProductRecord(id="bare", name="Bare Record"),
    ]


@pytest.fixture
def products_file(tmp_path, sample_products):
    """The sample catalog written as a JSON bundle."""
    path = tmp_path / "products.json"
    payload = [p.model_dump(mode="json", by_alias=True, exclude_none=True) for p in sample_products]
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path
