"""Tests for the rtcatalog command line."""

import json

from typer.testing import CliRunner

from rtcatalog.cli import app

runner = CliRunner()


def _json(result):
    """Parse the JSON document printed by a --json command."""
    lines = result.stdout.splitlines()
    start = next(i for i, line in enumerate(lines) if line.startswith(("[", "{")))
    return json.loads("\n".join(lines[start:]))


def _write(tmp_path, records):
    path = tmp_path / "products.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return str(path)


class TestValidate:

    def test_reports_issues(self, tmp_path):
        path = _write(tmp_path, [{"id": "a", "modality": ["CT", "XYZ"]}, {"id": "b", "certification": "CE"}])
        result = runner.invoke(app, ["validate", path, "--json"])
        assert result.exit_code == 0
        issues = _json(result)
        assert list(issues) == ["a"]
        assert issues["a"][0]["invalid_values"] == ["XYZ"]

    def test_strict_exit_code(self, tmp_path):
        path = _write(tmp_path, [{"id": "a", "certification": "ce"}])
        result = runner.invoke(app, ["validate", path, "--strict", "--json"])
        assert result.exit_code == 1

    def test_missing_bundle(self, tmp_path):
        result = runner.invoke(app, ["validate", str(tmp_path / "missing.json")])
        assert result.exit_code == 1


class TestReview:

    def test_summaries(self, products_file):
        result = runner.invoke(app, ["review", str(products_file), "--today", "2025-06-30", "--json"])
        assert result.exit_code == 0
        rows = _json(result)
        assert [r["id"] for r in rows] == ["contour-ai-pro", "mr-contour", "plan-optimizer", "bare"]
        assert rows[0]["status"] == "ok"
        assert rows[0]["days_since_review"] == 60

    def test_status_filter(self, products_file):
        result = runner.invoke(
            app, ["review", str(products_file), "--today", "2025-06-30", "--status", "critical", "--json"]
        )
        assert [r["id"] for r in _json(result)] == ["bare"]

    def test_invalid_urgency(self, products_file):
        result = runner.invoke(app, ["review", str(products_file), "--urgency", "someday"])
        assert result.exit_code == 1

    def test_single_product_checklist(self, products_file):
        result = runner.invoke(app, ["review", str(products_file), "--product", "bare", "--json"])
        body = _json(result)
        assert body["progress"]["failures"] > 0
        assert "Critical Issues:" in body["notes"]

    def test_table_output(self, products_file):
        result = runner.invoke(app, ["review", str(products_file), "--today", "2025-06-30"])
        assert result.exit_code == 0
        assert "Critical: 1" in result.stdout


class TestSearch:

    def test_facets_and_query(self, products_file):
        result = runner.invoke(
            app, ["search", str(products_file), "--task", "Auto-Contouring", "--modality", "MRI", "--json"]
        )
        assert _json(result) == ["mr-contour"]

    def test_first_value_only_flag(self, products_file):
        args = ["search", str(products_file), "--location", "Prostate", "--location", "Thorax", "--json"]
        assert _json(runner.invoke(app, args)) == ["mr-contour", "plan-optimizer"]
        assert _json(runner.invoke(app, args + ["--first-value-only"])) == ["mr-contour"]

    def test_free_text(self, products_file):
        result = runner.invoke(app, ["search", str(products_file), "-q", "BETA", "--json"])
        assert _json(result) == ["mr-contour"]


class TestStructures:

    def test_grouped_json(self, tmp_path):
        path = _write(
            tmp_path,
            [{"id": "a", "supportedStructures": ["Spine: Cord", "Spine: Cord", "Brainstem", "GTV"]}],
        )
        result = runner.invoke(app, ["structures", "a", path, "--types", "--json"])
        body = _json(result)
        assert body["groups"] == [{"model_name": "Spine", "structures": ["Cord"]}]
        assert body["ungrouped"] == ["Brainstem", "GTV"]
        assert body["types"]["gtv"] == 1

    def test_unknown_product(self, products_file):
        result = runner.invoke(app, ["structures", "nope", str(products_file)])
        assert result.exit_code == 1


def test_revisions(products_file):
    result = runner.invoke(app, ["revisions", str(products_file), "--today", "2025-06-30"])
    assert result.exit_code == 0
    assert "Up to date: 25%" in result.stdout
    assert "bare" in result.stdout


def test_audit_data(products_file):
    result = runner.invoke(app, ["audit-data", str(products_file), "--category", "Auto-Contouring"])
    assert result.exit_code == 0
    assert "Add supported structures" in result.stdout
