"""Tests for the family-law command-line entry point."""

from __future__ import annotations

import json

import pytest
import yaml

from packs.family_law import run


class TestLoadCase:
    def test_json(self, tmp_path, case_payload) -> None:
        path = tmp_path / "case.json"
        path.write_text(json.dumps(case_payload, ensure_ascii=False), encoding="utf-8")

        assert run.load_case(path) == case_payload

    def test_yaml_with_case_key(self, tmp_path, case_payload) -> None:
        path = tmp_path / "case.yaml"
        path.write_text(yaml.safe_dump({"case": case_payload}, allow_unicode=True), encoding="utf-8")

        assert run.load_case(path)["claimant"]["fullName"] == "דנה כהן"

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            run.load_case(tmp_path / "missing.json")

    def test_unknown_suffix(self, tmp_path) -> None:
        path = tmp_path / "case.txt"
        path.write_text("{}", encoding="utf-8")

        with pytest.raises(ValueError):
            run.load_case(path)

    def test_top_level_must_be_an_object(self, tmp_path) -> None:
        path = tmp_path / "case.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ValueError):
            run.load_case(path)


class TestMain:
    @pytest.fixture
    def case_file(self, tmp_path, case_payload):
        path = tmp_path / "case.json"
        path.write_text(json.dumps(case_payload, ensure_ascii=False), encoding="utf-8")
        return path

    def test_generates_selected_claims_and_backup(self, tmp_path, case_file, capsys) -> None:
        output = tmp_path / "out"

        exit_code = run.main([str(case_file), "--no-rewrite", "--format", "text", "--backup", "--output", str(output)])

        assert exit_code == 0
        names = sorted(path.name.split("_")[0] for path in output.iterdir())
        assert names == ["backup", "property"]
        assert "Generation complete" in capsys.readouterr().out

    def test_explicit_docx_claim(self, tmp_path, case_file) -> None:
        output = tmp_path / "out"

        assert run.main([str(case_file), "--no-rewrite", "--claim", "divorce", "--output", str(output)]) == 0

        (document,) = output.iterdir()
        assert document.suffix == ".docx"
        assert document.read_bytes().startswith(b"PK")

    def test_generates_alimony_claim(self, tmp_path, case_file) -> None:
        output = tmp_path / "out"

        exit_code = run.main(
            [str(case_file), "--no-rewrite", "--claim", "alimony", "--format", "text", "--output", str(output)]
        )

        assert exit_code == 0
        (document,) = output.iterdir()
        assert document.name.startswith("alimony_")
        assert "הרצאת פרטים (טופס 4)" in document.read_text(encoding="utf-8")

    def test_invalid_case_reports_error(self, tmp_path, case_payload, capsys) -> None:
        case_payload["children"] = "נועה"
        path = tmp_path / "case.json"
        path.write_text(json.dumps(case_payload, ensure_ascii=False), encoding="utf-8")

        exit_code = run.main([str(path), "--no-rewrite", "--output", str(tmp_path / "out")])

        assert exit_code == 1
        assert "✗ Invalid case" in capsys.readouterr().out

    def test_nothing_to_generate_exits(self, tmp_path, case_payload) -> None:
        case_payload["selectedClaims"] = []
        path = tmp_path / "case.json"
        path.write_text(json.dumps(case_payload, ensure_ascii=False), encoding="utf-8")

        with pytest.raises(SystemExit):
            run.main([str(path), "--no-rewrite"])
