"""Tests for facet options, catalog statistics and model counting."""

from rtcatalog.catalog.stats import (
    count_models_for_task,
    count_models_in_product,
    count_total_models,
    facet_options,
    product_stats,
)


def test_facet_options(sample_products):
    assert facet_options(sample_products, "category") == ["Auto-Contouring", "Treatment Planning"]
    assert facet_options(sample_products, "company") == ["Acme Oncology", "Beta Medical"]
    assert facet_options(sample_products, "modality") == ["CT", "MRI"]
    assert facet_options(sample_products, "certification") == ["CE", "CE & FDA", "FDA"]
    assert facet_options(sample_products, "anatomical_location") == [
        "Head & Neck",
        "Pelvis",
        "Prostate",
        "Thorax",
    ]


def test_category_options_follow_workflow_order(make_product):
    products = [
        make_product(id="a", category="Registration"),
        make_product(id="b", category="Zeta Tool"),
        make_product(id="c", category="Reconstruction"),
    ]
    assert facet_options(products, "category") == ["Reconstruction", "Registration", "Zeta Tool"]


def test_product_stats(sample_products):
    stats = product_stats(sample_products)
    assert stats.total_products == 4
    assert stats.modalities_count == 2
    assert stats.top_companies[0] == ("Acme Oncology", 2)
    assert stats.top_categories[0] == ("Auto-Contouring", 2)


def test_model_counting(make_product):
    contouring = make_product(modality=["CT", "MRI", "CBCT"])
    planning = make_product(id="plan", category="Treatment Planning", modality=["CT", "MRI"])
    assert count_models_in_product(contouring) == 3
    assert count_models_in_product(contouring, mode="products") == 1
    assert count_models_in_product(planning) == 1
    assert count_models_in_product(make_product(modality=None)) == 1
    assert count_total_models([contouring, planning]) == 4
    assert count_models_for_task([contouring, planning], "Auto-Contouring") == 3
