"""Tests for known-field format validation."""

from rtcatalog.review.validator import validate_product, validate_product_result, validate_products
from rtcatalog.vocabulary import load_vocabulary


class TestValidateProduct:

    def test_clean_product_has_no_issues(self, make_product):
        assert validate_product(make_product()) == []

    def test_invalid_modalities_batched_into_one_issue(self, make_product):
        issues = validate_product(make_product(modality=["CT", "XYZ", "BOGUS"]))
        assert len(issues) == 1
        assert issues[0].field == "modality"
        assert issues[0].invalid_values == ["XYZ", "BOGUS"]

    def test_scalar_modality_is_wrapped(self, make_product):
        issues = validate_product(make_product(modality="Sonar"))
        assert [i.invalid_values for i in issues] == [["Sonar"]]

    def test_blank_modality_is_absent(self, make_product):
        assert validate_product(make_product(modality="")) == []
        assert make_product(modality="  ").modality_list == []

    def test_invalid_locations_batched(self, make_product):
        issues = validate_product(make_product(anatomicalLocation=["Brain", "Elbow", "Knee"]))
        assert len(issues) == 1
        assert issues[0].field == "anatomicalLocation"
        assert issues[0].invalid_values == ["Elbow", "Knee"]

    def test_certification_exact_match(self, make_product):
        issues = validate_product(make_product(certification="ce"))
        assert len(issues) == 1
        assert issues[0].field == "certification"
        assert issues[0].invalid_values == ["ce"]
        assert validate_product(make_product(certification="CE")) == []

    def test_missing_certification_is_not_a_format_issue(self, make_product):
        assert validate_product(make_product(certification=None)) == []

    def test_all_issues_reported_in_field_order(self, make_product):
        product = make_product(
            modality=["Sonar"], anatomicalLocation=["Elbow"], certification="CE Pending"
        )
        issues = validate_product(product)
        assert [i.field for i in issues] == ["modality", "anatomicalLocation", "certification"]

    def test_deterministic(self, make_product):
        product = make_product(modality=["XYZ"], certification="fda")
        assert validate_product(product) == validate_product(product)

    def test_custom_vocabulary(self, make_product, tmp_path):
        path = tmp_path / "vocab.yaml"
        path.write_text("modalities: [MRI]\n", encoding="utf-8")
        issues = validate_product(make_product(modality=["CT"]), load_vocabulary(path))
        assert issues[0].invalid_values == ["CT"]


class TestCollections:

    def test_validation_result_shape(self, make_product):
        result = validate_product_result(make_product(modality=["XYZ"]))
        assert result.product_id == "contour-ai-pro"
        assert not result.is_valid
        assert validate_product_result(make_product()).is_valid

    def test_validate_products_keeps_every_id(self, sample_products):
        results = validate_products(sample_products)
        assert list(results) == [p.id for p in sample_products]
        assert all(issues == [] for issues in results.values())
