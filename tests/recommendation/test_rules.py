"""
Tests for the answer classifier.

Tests cover:
- Every row of the decision table
- First-match-wins ordering within a purpose
- Unknown, empty and missing purposes
- Idempotence and custom rule tables
"""

import pytest

from prompt_writer.recommendation import RULES, ClassificationRule, Purpose, classify, is_recognized_purpose
from prompt_writer.recommendation.types import AnswerVector


class TestDecisionTable:
    """One case per table row."""

    @pytest.mark.parametrize(
        "keywords, label, confidence, model_keys",
        [
            (["writing", "complex", "balanced"], "고급 텍스트 생성", 90, ("gpt-4", "claude-3-opus")),
            (["writing", "simple", "performance"], "고급 텍스트 생성", 90, ("gpt-4", "claude-3-opus")),
            (["writing", "simple", "cost"], "일반 텍스트 생성", 85, ("gpt-3.5-turbo",)),
            (["coding", "complex", "cost"], "고급 코딩 지원", 95, ("gpt-4", "gemini-pro")),
            (["coding", "medium", "performance"], "고급 코딩 지원", 95, ("gpt-4", "gemini-pro")),
            (["coding", "simple", "cost"], "일반 코딩 지원", 80, ("gpt-3.5-turbo", "gpt-4")),
            (["analysis", "complex", "cost"], "고급 데이터 분석", 90, ("gpt-4", "claude-3-opus", "gemini-pro")),
            (["analysis", "medium", "performance"], "기본 데이터 분석", 75, ("gpt-3.5-turbo", "gemini-pro")),
            (["translation", "simple", "cost"], "번역", 85, ("gpt-4", "claude-3-opus", "gemini-pro")),
            (["visual", "complex", "cost"], "경제적 이미지 생성", 90, ("stable-diffusion-xl",)),
            (["visual", "simple", "performance"], "고품질 이미지 생성", 95, ("dall-e-3", "midjourney-v6")),
            (["general", "complex", "cost"], "경제적 범용 AI", 75, ("gpt-3.5-turbo",)),
            (["general", "simple", "balanced"], "고성능 범용 AI", 85, ("gpt-4", "claude-3-opus")),
        ],
    )
    def test_row(self, keywords, label, confidence, model_keys):
        result = classify(keywords)

        assert result is not None
        assert result.category_label == label
        assert result.confidence == confidence
        assert result.model_keys == model_keys

    def test_table_has_eleven_rows(self):
        assert len(RULES) == 11

    def test_every_purpose_has_catch_all(self):
        """Each purpose ends with an unconditional rule, so a known purpose always matches."""
        for purpose in Purpose:
            purpose_rules = [rule for rule in RULES if rule.purpose is purpose]
            assert purpose_rules, purpose
            assert purpose_rules[-1].condition is None

    def test_translation_ignores_secondary_answers(self):
        assert classify(["translation"]).category_label == "번역"
        assert classify(["translation", "complex", "performance"]).category_label == "번역"


class TestUnmatchedInput:

    @pytest.mark.parametrize(
        "keywords",
        [
            ["gardening", "simple", "cost"],
            ["", "complex", "performance"],
            [],
            None,
            ["Coding", "complex", "performance"],
        ],
    )
    def test_no_match_returns_none(self, keywords):
        assert classify(keywords) is None

    def test_known_purpose_with_missing_slots_uses_catch_all(self):
        result = classify(["coding"])

        assert result.category_label == "일반 코딩 지원"

    def test_unknown_secondary_answers_use_catch_all(self):
        result = classify(["visual", "huge", "cheap-ish"])

        assert result.category_label == "고품질 이미지 생성"

    def test_extra_keywords_are_ignored(self):
        assert classify(["general", "simple", "cost", "extra"]).category_label == "경제적 범용 AI"


class TestRecognizedPurpose:

    @pytest.mark.parametrize("value", ["writing", "coding", "analysis", "translation", "visual", "general"])
    def test_known(self, value):
        assert is_recognized_purpose(value) is True

    @pytest.mark.parametrize("value", ["gardening", "", None, "WRITING"])
    def test_unknown(self, value):
        assert is_recognized_purpose(value) is False


class TestClassifierProperties:

    def test_idempotent(self):
        keywords = ["analysis", "complex", "balanced"]

        assert classify(keywords) == classify(keywords)

    def test_custom_rule_table(self):
        rules = [
            ClassificationRule(
                purpose=Purpose.CODING,
                category_label="custom",
                confidence=50,
                model_keys=("gpt-4",),
            )
        ]

        result = classify(["coding", "complex", "performance"], rules=rules)

        assert result.category_label == "custom"
        assert classify(["writing"], rules=rules) is None

    def test_answer_vector_pads_missing_slots(self):
        answers = AnswerVector.from_keywords(["writing"])

        assert answers == AnswerVector(purpose="writing", complexity=None, priority=None)
