# quotesync Import / Export Tests
# Tests for bulk JSON export and dedup-merging import

import json
from pathlib import Path

import pytest

from conftest import read_snapshot
from quotesync.errors import ParseError
from quotesync.sync.quote import Quote
from quotesync.sync.store import QuoteStore
from quotesync.sync.transfer import export_json, export_quotes, import_quotes, parse_import


class TestExport:
    """Tests for export."""

    def test_export_matches_snapshot_shape(self, store: QuoteStore, snapshot_path: Path, temp_dir: Path):
        target = export_quotes(store, temp_dir / "out" / "quotes.json")

        assert target.exists()
        assert json.loads(target.read_text(encoding="utf-8")) == read_snapshot(snapshot_path)

    def test_export_json_keeps_unicode(self):
        content = export_json([Quote("Grüße", "Welt")])
        assert "Grüße" in content
        assert content.endswith("\n")


class TestImport:
    """Tests for import."""

    def test_malformed_input_leaves_store_untouched(self, store: QuoteStore, snapshot_path: Path):
        before = store.all()
        on_disk = snapshot_path.read_text(encoding="utf-8")

        with pytest.raises(ParseError, match="Invalid file format"):
            import_quotes(store, "{not json")

        assert store.all() == before
        assert snapshot_path.read_text(encoding="utf-8") == on_disk

    @pytest.mark.parametrize(
        "content",
        [
            '{"text": "A", "category": "X"}',
            '[{"text": "A", "category": "X"}, {"text": "B"}]',
            '[{"text": "A", "category": "X"}, "B"]',
        ],
    )
    def test_any_bad_element_rejects_whole_input(self, store: QuoteStore, content):
        size = len(store)
        with pytest.raises(ParseError):
            import_quotes(store, content)
        assert len(store) == size

    def test_import_merges_with_dedup(self, store: QuoteStore):
        content = json.dumps(
            [
                {"text": "Stay hungry, stay foolish.", "category": "Dupe"},
                {"text": "Fresh", "author": "Someone", "category": "New"},
                {"text": "Fresh", "category": "New"},
            ]
        )

        added = import_quotes(store, content)

        assert added == [Quote("Fresh", "New", "Someone")]
        assert store.all()[-1] == Quote("Fresh", "New", "Someone")

    def test_import_from_file(self, empty_store: QuoteStore, temp_dir: Path):
        path = temp_dir / "import.json"
        path.write_text(json.dumps([{"text": "From file", "category": "Disk"}]), encoding="utf-8")

        added = import_quotes(empty_store, path)

        assert added == [Quote("From file", "Disk")]

    def test_import_binary_file_is_parse_error(self, empty_store: QuoteStore, temp_dir: Path):
        path = temp_dir / "import.json"
        path.write_bytes(b"\xff\xfe\x00garbage")

        with pytest.raises(ParseError) as exc:
            import_quotes(empty_store, path)
        assert exc.value.source == str(path)

    def test_import_missing_file(self, empty_store: QuoteStore, temp_dir: Path):
        with pytest.raises(FileNotFoundError):
            import_quotes(empty_store, temp_dir / "nope.json")

    def test_export_then_import_adds_nothing(self, store: QuoteStore, temp_dir: Path):
        path = export_quotes(store, temp_dir / "backup.json")
        assert import_quotes(store, path) == []

    def test_parse_import_reports_source(self):
        with pytest.raises(ParseError) as exc:
            parse_import("[1]", source="upload.json")
        assert exc.value.source == "upload.json"
