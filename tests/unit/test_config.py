"""
Runtime Configuration Unit Tests
Tests for merkle_core/config/runtime.py
"""
import hashlib
import logging

import pytest

from merkle_core.config import MerkleConfig, setup_logging
from merkle_core.crypto.hashing import sha256
from merkle_core.merkle import build_tree, proof_for, verify
from merkle_core.schemas.errors import (
    ConfigurationException,
    ErrorCodes,
    UnsupportedHashAlgorithmException,
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("MERKLE_HASH_ALGORITHM", "MERKLE_LOG_LEVEL", "MERKLE_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestDefaults:
    """Tests for default configuration."""

    def test_defaults(self):
        config = MerkleConfig()

        assert config.hash_algorithm == "sha256"
        assert config.log_level == "INFO"
        assert config.log_file is None
        assert config.extra == {}

    def test_default_hash_function(self):
        assert MerkleConfig().hash_function() is sha256

    def test_log_level_normalized(self):
        assert MerkleConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_raises(self):
        with pytest.raises(ConfigurationException) as exc_info:
            MerkleConfig(log_level="LOUD")

        assert exc_info.value.code == ErrorCodes.CONFIG_ERROR
        assert exc_info.value.details["field_path"] == "log_level"

    def test_non_string_log_level_raises(self):
        with pytest.raises(ConfigurationException) as exc_info:
            MerkleConfig(log_level=10)

        assert exc_info.value.details["field_path"] == "log_level"


class TestLoading:
    """Tests for from_env / from_dict / from_yaml."""

    def test_from_dict_partial(self):
        config = MerkleConfig.from_dict({"hash_algorithm": "sha512"})

        assert config.hash_algorithm == "sha512"
        assert config.log_level == "INFO"

    def test_from_env(self, clean_env):
        clean_env.setenv("MERKLE_HASH_ALGORITHM", "blake2b")
        clean_env.setenv("MERKLE_LOG_LEVEL", "warning")

        config = MerkleConfig.from_env()

        assert config.hash_algorithm == "blake2b"
        assert config.log_level == "WARNING"

    def test_from_env_empty(self, clean_env):
        assert MerkleConfig.from_env() == MerkleConfig()

    def test_with_env_overrides(self, clean_env):
        base = MerkleConfig.from_dict({"hash_algorithm": "sha512", "log_level": "ERROR"})
        clean_env.setenv("MERKLE_LOG_LEVEL", "debug")

        overridden = base.with_env_overrides()

        assert overridden.hash_algorithm == "sha512"
        assert overridden.log_level == "DEBUG"
        assert base.log_level == "ERROR"

    def test_with_env_overrides_noop(self, clean_env):
        base = MerkleConfig()

        assert base.with_env_overrides() is base

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "merkle.yaml"
        path.write_text("hash_algorithm: sha3_256\nlog_level: DEBUG\nextra:\n  owner: ops\n")

        config = MerkleConfig.from_yaml(path)

        assert config.hash_algorithm == "sha3_256"
        assert config.log_level == "DEBUG"
        assert config.extra == {"owner": "ops"}

    def test_from_yaml_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert MerkleConfig.from_yaml(path) == MerkleConfig()

    def test_from_yaml_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            MerkleConfig.from_yaml(tmp_path / "missing.yaml")

    def test_from_yaml_not_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationException):
            MerkleConfig.from_yaml(path)

    def test_from_yaml_numeric_log_level(self, tmp_path):
        path = tmp_path / "merkle.yaml"
        path.write_text("log_level: 10\n")

        with pytest.raises(ConfigurationException):
            MerkleConfig.from_yaml(path)

    def test_to_dict_round_trip(self):
        config = MerkleConfig(hash_algorithm="sha512", log_file="merkle.log")

        assert MerkleConfig.from_dict(config.to_dict()) == config


class TestConfiguredTree:
    """Trees built with the configured hash function."""

    def test_configured_algorithm_used(self):
        config = MerkleConfig(hash_algorithm="sha512")
        tree = build_tree(["A"], hash_fn=config.hash_function())

        assert tree.root_hash == hashlib.sha512(b'\x01"A"').digest()

    def test_configured_round_trip(self):
        hash_fn = MerkleConfig(hash_algorithm="blake2s").hash_function()
        tree = build_tree(["A", "B", "C"], hash_fn=hash_fn)

        assert verify(tree, "B", proof_for(tree, "B"))

    def test_unknown_algorithm_deferred_to_resolution(self):
        config = MerkleConfig(hash_algorithm="nope")

        with pytest.raises(UnsupportedHashAlgorithmException):
            config.hash_function()


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_configures_root_logger(self, tmp_path, monkeypatch):
        root = logging.getLogger()
        monkeypatch.setattr(root, "handlers", [])
        monkeypatch.setattr(root, "level", logging.WARNING)
        log_file = tmp_path / "merkle.log"

        setup_logging("DEBUG", str(log_file))
        logging.getLogger("merkle_core.test").debug("hello")

        assert root.level == logging.DEBUG
        assert any(isinstance(h, logging.FileHandler) for h in root.handlers)
        for handler in root.handlers:
            handler.flush()
        assert "[DEBUG] merkle_core.test: hello" in log_file.read_text()

        for handler in root.handlers:
            handler.close()

    def test_apply_logging(self, monkeypatch):
        calls = []
        monkeypatch.setattr(
            "merkle_core.config.runtime.setup_logging",
            lambda level, log_file: calls.append((level, log_file)),
        )

        MerkleConfig(log_level="ERROR").apply_logging()

        assert calls == [("ERROR", None)]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
