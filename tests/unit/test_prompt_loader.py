"""Tests for prompt template, response structure and system prompt loading."""

import json
from pathlib import Path

import pytest

from app.analysis.exceptions import AnalysisError
from app.analysis.prompt_loader import (
    load_prompt_template,
    load_response_structure,
    load_system_prompt,
)
from app.documents.models import DocumentType


class TestLoadPromptTemplate:
    def test_loads_default_template(self) -> None:
        template = load_prompt_template()
        assert "{document_type}" in template
        assert "{extracted_text}" in template
        assert "{response_structure}" in template

    def test_loads_custom_template(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom.txt"
        custom.write_text("Analyze {document_type}")
        result = load_prompt_template(custom)
        assert result == "Analyze {document_type}"

    def test_missing_file_raises_error(self) -> None:
        with pytest.raises(AnalysisError, match="Failed to load prompt"):
            load_prompt_template(Path("/nonexistent/file.txt"))


class TestLoadResponseStructure:
    def test_default_structure_is_valid_json(self) -> None:
        structure = json.loads(load_response_structure())
        assert "documentValidation" in structure
        assert "expiryAnalysis" in structure
        assert "recommendations" in structure

    def test_missing_file_raises_error(self) -> None:
        with pytest.raises(AnalysisError, match="Failed to load response structure"):
            load_response_structure(Path("/nonexistent/structure.json"))


class TestLoadSystemPrompt:
    def test_appends_category_focus(self) -> None:
        prompt = load_system_prompt(DocumentType.PASSPORT)
        assert "For passport documents" in prompt

    def test_unknown_category_gets_base_prompt_only(self) -> None:
        base = load_system_prompt(DocumentType.UNKNOWN)
        assert "For passport documents" not in base
        assert load_system_prompt(DocumentType.PASSPORT).startswith(base)

    def test_custom_prompt_dir(self, tmp_path: Path) -> None:
        system_dir = tmp_path / "system"
        system_dir.mkdir()
        (system_dir / "default.txt").write_text("Base prompt\n")
        (system_dir / "visa.txt").write_text("Visa focus\n")
        assert load_system_prompt(DocumentType.VISA, tmp_path) == "Base prompt\n\nVisa focus"
        assert load_system_prompt(DocumentType.PASSPORT, tmp_path) == "Base prompt"

    def test_missing_base_prompt_raises_error(self, tmp_path: Path) -> None:
        with pytest.raises(AnalysisError, match="Failed to load system prompt"):
            load_system_prompt(DocumentType.PASSPORT, tmp_path)
