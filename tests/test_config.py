# quotesync Config Tests
# Tests for configuration loading and validation

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from quotesync.config.defaults import DEFAULT_CONFIG, DEFAULT_SEED_QUOTES, generate_default_config
from quotesync.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    load_or_create_config,
    save_config,
    validate_config_file,
)
from quotesync.config.schema import QuoteSyncConfig, RemoteConfig, SeedQuote, SyncConfig
from quotesync.sync.quote import DedupKey, Quote


class TestQuoteSyncConfig:
    """Tests for QuoteSyncConfig schema."""

    def test_defaults(self):
        """Test configuration built entirely from defaults."""
        config = QuoteSyncConfig()
        assert config.remote.page_size == 5
        assert config.remote.imported_category == "Imported"
        assert config.sync.dedup_key == DedupKey.TEXT
        assert config.seed_quotes == []

    def test_full_config(self, sample_config: dict):
        """Test full configuration loading."""
        config = QuoteSyncConfig.model_validate(sample_config)

        assert config.remote.endpoint == "http://quotes.test/posts"
        assert config.snapshot_path.name == "quotes.json"
        assert config.get_seed_quotes()[0] == Quote("Stay hungry, stay foolish.", "Life", "Steve Jobs")

    def test_path_expansion(self, temp_home: Path):
        """Test that ~ is expanded in storage paths."""
        config = QuoteSyncConfig.model_validate({"storage": {"snapshot_path": "~/q.json"}})
        assert config.snapshot_path == temp_home / "q.json"

    def test_dedup_key_enum(self):
        assert SyncConfig(dedup_key="text_author").dedup_key == DedupKey.TEXT_AUTHOR
        with pytest.raises(ValidationError):
            SyncConfig(dedup_key="author")


class TestRemoteConfig:
    """Tests for RemoteConfig validators."""

    @pytest.mark.parametrize("endpoint", ["ftp://x/posts", "quotes.test/posts", ""])
    def test_endpoint_must_be_http(self, endpoint):
        with pytest.raises(ValidationError):
            RemoteConfig(endpoint=endpoint)

    @pytest.mark.parametrize("field,value", [("page_size", 0), ("page_size", 101), ("timeout_seconds", 0)])
    def test_numeric_bounds(self, field, value):
        with pytest.raises(ValidationError):
            RemoteConfig(**{field: value})


class TestSeedQuote:
    """Tests for SeedQuote."""

    def test_blank_text_rejected(self):
        with pytest.raises(ValidationError):
            SeedQuote(text="   ", category="Life")

    def test_to_quote_normalizes_author(self):
        assert SeedQuote(text=" Hi ", author="  ", category="Life").to_quote() == Quote("Hi", "Life")


class TestLoader:
    """Tests for configuration loading and saving."""

    def test_load_config(self, config_file: Path):
        """Test loading configuration from file."""
        config = load_config(config_file)
        assert config.remote.timeout_seconds == 2.0
        assert len(config.seed_quotes) == 2

    def test_load_missing_file(self, temp_dir: Path):
        """Test loading non-existent config file."""
        with pytest.raises(FileNotFoundError):
            load_config(temp_dir / "nope.yaml")

    def test_load_non_mapping(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)

    def test_partial_sections_merge_with_defaults(self, temp_dir: Path):
        """Test that missing keys are filled from defaults."""
        path = temp_dir / "config.yaml"
        path.write_text("remote:\n  page_size: 3\n", encoding="utf-8")

        config = load_config(path)

        assert config.remote.page_size == 3
        assert config.remote.endpoint == DEFAULT_CONFIG["remote"]["endpoint"]
        assert len(config.seed_quotes) == len(DEFAULT_SEED_QUOTES)

    def test_seed_quotes_replace_defaults(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text("seed_quotes:\n  - text: Only\n    category: One\n", encoding="utf-8")
        assert load_config(path).get_seed_quotes() == [Quote("Only", "One")]

    def test_save_and_reload(self, temp_dir: Path, sample_config: dict):
        """Test saving configuration to file."""
        config = QuoteSyncConfig.model_validate(sample_config)
        config.sync.dedup_key = DedupKey.TEXT_AUTHOR
        path = save_config(config, temp_dir / "out" / "config.yaml")

        with open(path, encoding="utf-8") as f:
            assert yaml.safe_load(f)["sync"]["dedup_key"] == "text_author"
        assert load_config(path).sync.dedup_key == DedupKey.TEXT_AUTHOR

    def test_config_path_from_env(self, temp_home: Path, monkeypatch: pytest.MonkeyPatch):
        assert get_config_path() == temp_home / ".config" / "quotesync" / "config.yaml"
        monkeypatch.setenv("QUOTESYNC_CONFIG", str(temp_home / "custom.yaml"))
        assert get_config_path() == temp_home / "custom.yaml"

    def test_ensure_config_exists(self, temp_home: Path):
        path, created = ensure_config_exists()
        assert created
        assert path.exists()

        path, created = ensure_config_exists()
        assert not created

        path.write_text("remote:\n  page_size: 3\n", encoding="utf-8")
        path, created = ensure_config_exists(force=True)
        assert created
        assert load_config(path).remote.page_size == 5

    def test_load_or_create_config(self, temp_home: Path):
        config, created = load_or_create_config()
        assert created
        assert len(config.get_seed_quotes()) == 5


class TestValidateConfigFile:
    """Tests for validate_config_file."""

    def test_valid_file(self, config_file: Path):
        is_valid, errors = validate_config_file(config_file)
        assert is_valid
        assert errors == []

    def test_missing_file(self, temp_dir: Path):
        is_valid, errors = validate_config_file(temp_dir / "nope.yaml")
        assert not is_valid
        assert "not found" in errors[0]

    def test_invalid_yaml(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text("remote: [unclosed", encoding="utf-8")
        is_valid, errors = validate_config_file(path)
        assert not is_valid
        assert "Invalid YAML" in errors[0]

    def test_schema_errors_have_locations(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text("remote:\n  page_size: 0\n", encoding="utf-8")
        is_valid, errors = validate_config_file(path)
        assert not is_valid
        assert errors[0].startswith("remote -> page_size")

    def test_empty_seed_list_is_reported(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text("seed_quotes: []\n", encoding="utf-8")
        is_valid, errors = validate_config_file(path)
        assert not is_valid
        assert "seed_quotes" in errors[0]


class TestDefaults:
    """Tests for the generated default configuration."""

    def test_generated_yaml_is_valid(self):
        data = yaml.safe_load(generate_default_config())
        config = QuoteSyncConfig.model_validate(data)
        assert config.sync.interval_seconds == 30.0
        assert len(config.seed_quotes) == len(DEFAULT_SEED_QUOTES)

    def test_default_seed_texts_are_unique(self):
        texts = [q["text"] for q in DEFAULT_SEED_QUOTES]
        assert len(texts) == len(set(texts))
