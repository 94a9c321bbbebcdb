"""
Tests for the catalog seed script data.
"""

import pytest

from prompt_writer.recommendation import RULES
from scripts.seed_catalog import (
    CATEGORIES,
    MODELS,
    PROVIDERS,
    TAGS,
    build_category_rows,
    build_model_rows,
    create_admin_client,
)


class TestSeedData:

    def test_counts(self):
        assert len(PROVIDERS) == 5
        assert len(MODELS) == 7
        assert len(CATEGORIES) == 8
        assert len(TAGS) == 8

    def test_every_rule_key_is_seeded(self):
        seeded = {model["model_key"] for model in MODELS}

        for rule in RULES:
            assert set(rule.model_keys) <= seeded, rule.category_label

    def test_category_sort_order(self):
        rows = build_category_rows()

        assert [row["sort_order"] for row in rows] == list(range(1, 9))

    def test_model_rows_resolve_providers(self):
        provider_ids = {provider["name"]: i + 1 for i, provider in enumerate(PROVIDERS)}

        rows = build_model_rows(provider_ids)

        assert len(rows) == 7
        assert all("provider" not in row for row in rows)
        assert rows[0]["provider_id"] == provider_ids["OpenAI"]

    def test_unknown_provider_skipped(self):
        rows = build_model_rows({"OpenAI": 1})

        assert {row["model_key"] for row in rows} == {"gpt-4", "gpt-3.5-turbo", "dall-e-3"}

    def test_admin_client_requires_service_key(self, monkeypatch):
        monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)

        with pytest.raises(ValueError):
            create_admin_client()
