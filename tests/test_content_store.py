"""Tests for the static content store."""

import json

import pytest

from hig_docs.cache import HIGCache
from hig_docs.services.content_store import ContentStoreError, StaticContentStore, section_records

from .conftest import BUTTONS_CONTENT


def write_bundle(path, records):
    path.write_text(json.dumps({"sections": records}))
    return path


class TestSectionRecords:
    def test_accepts_list_and_wrapped_forms(self):
        records = [{"id": "a"}]
        assert section_records(records) == records
        assert section_records({"sections": records}) == records

    def test_rejects_other_shapes(self):
        with pytest.raises(ContentStoreError):
            section_records({"items": []})


class TestStaticContentStore:
    @pytest.mark.asyncio
    async def test_bundled_sections(self):
        sections = await StaticContentStore(HIGCache()).load_sections()
        assert len(sections) >= 15
        assert len({s.id for s in sections}) == len(sections)
        assert any(s.title == "Buttons" for s in sections)

    @pytest.mark.asyncio
    async def test_invalid_records_skipped(self, tmp_path):
        path = write_bundle(
            tmp_path / "sections.json",
            [
                {
                    "id": "buttons",
                    "title": "Buttons",
                    "url": "https://example.com/buttons",
                    "platform": "iOS",
                    "category": "visual-design",
                    "content": BUTTONS_CONTENT,
                    "lastUpdated": "2024-06-01T00:00:00Z",
                },
                {"id": "bad", "title": "Bad", "platform": "Windows", "category": "layout"},
            ],
        )
        sections = await StaticContentStore(HIGCache(), content_path=path).load_sections()
        assert [s.id for s in sections] == ["buttons"]
        assert sections[0].last_updated.year == 2024

    @pytest.mark.asyncio
    async def test_missing_bundle(self, tmp_path):
        store = StaticContentStore(HIGCache(), content_path=tmp_path / "missing.json")
        with pytest.raises(ContentStoreError, match="not found"):
            await store.load_sections()

    @pytest.mark.asyncio
    async def test_cached_copy_survives_file_removal(self, tmp_path):
        path = write_bundle(
            tmp_path / "sections.json",
            [{"id": "a", "title": "A", "platform": "iOS", "category": "layout", "content": "x"}],
        )
        store = StaticContentStore(HIGCache(), content_path=path)
        await store.load_sections()
        path.unlink()
        assert [s.id for s in await store.load_sections()] == ["a"]

    @pytest.mark.asyncio
    async def test_no_index_path(self):
        assert await StaticContentStore(HIGCache()).load_index() is None

    @pytest.mark.asyncio
    async def test_index_round_trip(self, tmp_path, indexer):
        store = StaticContentStore(HIGCache(), index_path=tmp_path / "index" / "search.json")
        await store.save_index(indexer.generate_index())

        fresh = StaticContentStore(HIGCache(), index_path=tmp_path / "index" / "search.json")
        data = await fresh.load_index()
        assert data["metadata"]["total_sections"] == 5
        assert set(data["keyword_index"]) == {s.id for s in indexer.entries}

    @pytest.mark.asyncio
    async def test_save_without_index_path(self):
        with pytest.raises(ContentStoreError):
            await StaticContentStore(HIGCache()).save_index({})
