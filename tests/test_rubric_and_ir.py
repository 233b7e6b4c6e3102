"""
Test: Rubric score parsing and the IR placeholder service.
"""
import pytest
from codeir.rubric_config import RUBRIC_TOTAL, AUTO_GRADE_SCORES, parse_scores, total_score
from codeir.services import ir_service


class TestParseScores:
    def test_valid(self):
        assert parse_scores({"correctness": 9, "efficiency": 8, "style": 7}) == AUTO_GRADE_SCORES

    def test_missing_default_to_zero(self):
        assert parse_scores({"style": 3}) == {"correctness": 0, "efficiency": 0, "style": 3}
        assert parse_scores(None) == {"correctness": 0, "efficiency": 0, "style": 0}

    def test_numeric_strings(self):
        assert parse_scores({"correctness": "10"})["correctness"] == 10

    def test_ignores_unknown_keys(self):
        assert "bonus" not in parse_scores({"bonus": 5})

    @pytest.mark.parametrize("value", [11, -1, "abc", 7.5, True, None, [1]])
    def test_rejects_bad_values(self, value):
        with pytest.raises(ValueError):
            parse_scores({"correctness": value})

    def test_rejects_non_object(self):
        with pytest.raises(ValueError):
            parse_scores([9, 8, 7])


class TestTotalScore:
    def test_total(self):
        assert total_score(AUTO_GRADE_SCORES) == 24
        assert RUBRIC_TOTAL == 30

    def test_nulls(self):
        assert total_score(None) == 0
        assert total_score({"correctness": None, "style": 2}) == 2


class TestIrService:
    def test_validate(self):
        result = ir_service.validate_source("print(1)", "python")
        assert result["ir_output"] == ir_service.VALIDATED_IR
        assert result["translated_code"] == "// Converted to optimized python\nfunction opt() { ... }"

    def test_default_language(self):
        assert ir_service.validate_source("x", None)["language"] == "javascript"

    def test_unknown_language(self):
        with pytest.raises(ValueError):
            ir_service.check_language("cobol")

    def test_hints_after_submit(self):
        hints = ir_service.hints_after_submit()
        assert hints[:2] == ir_service.DEFAULT_HINTS
        assert hints[-1] == "Great job! Consider reducing time complexity."

    def test_hints_after_submit_keeps_existing(self):
        assert ir_service.hints_after_submit(["a"]) == ["a", ir_service.SUBMIT_HINT]

    def test_editor_defaults(self):
        defaults = ir_service.editor_defaults()
        assert defaults["source_code"] == "// Write your source code here..."
        assert [l["label"] for l in defaults["languages"]] == ["JS", "Python", "C++"]
