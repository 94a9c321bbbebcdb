"""
Tests for the category, tag and saved prompt services.
"""

import pytest
from unittest.mock import MagicMock

from prompt_writer.services.category_service import (
    get_active_categories,
    get_all_tags,
    get_or_create_category,
    get_or_create_tag,
    resolve_category_id,
)
from prompt_writer.services.prompt_service import create_prompt, get_prompt_by_id, list_prompts


def _response(data):
    response = MagicMock()
    response.data = data
    return response


@pytest.fixture
def mock_client():
    return MagicMock()


class TestResolveCategoryId:

    @pytest.mark.asyncio
    async def test_partial_match(self, mock_client):
        chain = mock_client.table.return_value.select.return_value.ilike.return_value
        chain.order.return_value.limit.return_value.execute.return_value = _response([{"id": 2, "name": "프로그래밍"}])

        result = await resolve_category_id(mock_client, " 프로그 ")

        mock_client.table.return_value.select.return_value.ilike.assert_called_once_with("name", "%프로그%")
        chain.order.assert_called_once_with("id")
        assert result == 2

    @pytest.mark.asyncio
    async def test_no_match(self, mock_client):
        chain = mock_client.table.return_value.select.return_value.ilike.return_value
        chain.order.return_value.limit.return_value.execute.return_value = _response([])

        assert await resolve_category_id(mock_client, "gardening") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", [None, "", "   "])
    async def test_blank_name_skips_query(self, mock_client, name):
        assert await resolve_category_id(mock_client, name) is None
        mock_client.table.assert_not_called()


class TestGetOrCreate:

    @pytest.mark.asyncio
    async def test_existing_category(self, mock_client):
        mock_client.table.return_value.select.return_value.eq.return_value.execute.return_value = _response([{"id": 4}])

        assert await get_or_create_category(mock_client, "번역") == 4
        mock_client.table.return_value.insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_creates_missing_category(self, mock_client):
        mock_client.table.return_value.select.return_value.eq.return_value.execute.return_value = _response([])
        mock_client.table.return_value.insert.return_value.execute.return_value = _response([{"id": 9}])

        assert await get_or_create_category(mock_client, "요리") == 9
        mock_client.table.return_value.insert.assert_called_once_with(
            {"name": "요리", "description": "Auto-created category for 요리"}
        )

    @pytest.mark.asyncio
    async def test_creates_missing_tag(self, mock_client):
        mock_client.table.return_value.select.return_value.eq.return_value.execute.return_value = _response([])
        mock_client.table.return_value.insert.return_value.execute.return_value = _response([{"id": 21}])

        assert await get_or_create_tag(mock_client, "레시피") == 21

    @pytest.mark.asyncio
    async def test_insert_without_row_raises(self, mock_client):
        mock_client.table.return_value.select.return_value.eq.return_value.execute.return_value = _response([])
        mock_client.table.return_value.insert.return_value.execute.return_value = _response([])

        with pytest.raises(Exception):
            await get_or_create_tag(mock_client, "레시피")


class TestCatalogLists:

    @pytest.mark.asyncio
    async def test_active_categories(self, mock_client):
        chain = mock_client.table.return_value.select.return_value.eq.return_value
        chain.order.return_value.order.return_value.execute.return_value = _response([{"id": 1, "name": "번역"}])

        result = await get_active_categories(mock_client)

        mock_client.table.assert_called_with("category")
        assert result == [{"id": 1, "name": "번역"}]

    @pytest.mark.asyncio
    async def test_tags_most_used_first(self, mock_client):
        chain = mock_client.table.return_value.select.return_value
        chain.order.return_value.order.return_value.execute.return_value = _response([{"id": 3, "name": "고급"}])

        result = await get_all_tags(mock_client)

        chain.order.assert_called_once_with("usage_count", desc=True)
        assert result[0]["name"] == "고급"


class TestPromptService:

    @pytest.mark.asyncio
    async def test_list_newest_first(self, mock_client):
        chain = mock_client.table.return_value.select.return_value
        chain.order.return_value.execute.return_value = _response([{"id": 2}, {"id": 1}])

        result = await list_prompts(mock_client)

        chain.order.assert_called_once_with("created_at", desc=True)
        assert [p["id"] for p in result] == [2, 1]

    @pytest.mark.asyncio
    async def test_get_missing(self, mock_client):
        mock_client.table.return_value.select.return_value.eq.return_value.execute.return_value = _response([])

        assert await get_prompt_by_id(mock_client, 5) is None

    @pytest.mark.asyncio
    async def test_create(self, mock_client):
        mock_client.table.return_value.insert.return_value.execute.return_value = _response([{"id": 1, "title": "번역가"}])

        result = await create_prompt(
            mock_client, "user-1", title="번역가", prompt="번역해주세요:", role="user", tags=["번역"]
        )

        payload = mock_client.table.return_value.insert.call_args[0][0]
        assert payload["created_by"] == "user-1"
        assert payload["tags"] == ["번역"]
        assert result["id"] == 1
