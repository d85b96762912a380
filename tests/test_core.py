"""
Tests for the core module: settings, audit logger and errors.
"""

import pytest
import tempfile
import os
from pathlib import Path

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import Settings, load_settings, save_settings
from core.errors import GuardFSError, ConfigError, DemoFault
from core.logger import AuditLogger, AuditEntry, ActionType, ActionStatus


class TestSettings:
    """Test loading settings from YAML."""

    @pytest.fixture
    def temp_config(self):
        """Create a temporary config file."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write("""guardfs:
  audit_log: logs/ops.jsonl
  dry_run: true
""")
        yield f.name
        os.unlink(f.name)

    def test_missing_file_gives_defaults(self, tmp_path):
        """Test defaults when no settings file exists."""
        settings = load_settings(str(tmp_path / "nope.yaml"))

        assert settings == Settings()
        assert settings.audit_log == "data/audit_log.jsonl"
        assert settings.encoding == "utf-8"
        assert settings.dry_run is False

    def test_values_override_defaults(self, temp_config):
        """Test that file values replace defaults."""
        settings = load_settings(temp_config)

        assert settings.audit_log == "logs/ops.jsonl"
        assert settings.dry_run is True
        assert settings.encoding == "utf-8"

    def test_top_level_key_is_optional(self, tmp_path):
        """Test settings without the guardfs key."""
        path = tmp_path / "config.yaml"
        path.write_text("encoding: latin-1\n", encoding="utf-8")

        assert load_settings(str(path)).encoding == "latin-1"

    def test_empty_file_gives_defaults(self, tmp_path):
        """Test that an empty file gives defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        assert load_settings(str(path)) == Settings()

    def test_malformed_yaml(self, tmp_path):
        """Test that malformed YAML raises ConfigError."""
        path = tmp_path / "config.yaml"
        path.write_text("guardfs: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_settings(str(path))

    def test_wrong_type(self, tmp_path):
        """Test that a wrongly typed value raises ConfigError."""
        path = tmp_path / "config.yaml"
        path.write_text("guardfs:\n  dry_run: sometimes\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_settings(str(path))

    def test_save_round_trip(self, tmp_path):
        """Test saving settings and loading them back."""
        path = str(tmp_path / "config.yaml")
        save_settings(Settings(audit_log="audit.jsonl", dry_run=True), path)

        assert load_settings(path) == Settings(audit_log="audit.jsonl", dry_run=True)


class TestErrors:
    """Test the error hierarchy."""

    def test_errors_share_a_base(self):
        """Test the error hierarchy."""
        assert issubclass(ConfigError, GuardFSError)
        assert issubclass(DemoFault, GuardFSError)

    def test_demo_fault_message(self):
        """Test DemoFault carries its message."""
        with pytest.raises(DemoFault, match="That won't work"):
            raise DemoFault("That won't work")


class TestAuditLogger:
    """Test AuditLogger class."""

    @pytest.fixture
    def temp_log(self):
        """Create a temporary log file."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.jsonl', delete=False) as f:
            pass
        yield f.name
        os.unlink(f.name)

    @pytest.fixture
    def logger(self, temp_log):
        """Create a logger with temp file."""
        return AuditLogger(log_path=temp_log)

    def test_creates_missing_directory(self, tmp_path):
        """Test that the log directory is created."""
        logger = AuditLogger(log_path=str(tmp_path / "nested" / "audit.jsonl"))

        assert logger.log_path.exists()

    def test_log_action(self, logger):
        """Test logging an action."""
        entry = logger.log_action(
            action_type=ActionType.CREATE,
            description="Created file: test.txt",
            status=ActionStatus.EXECUTED
        )

        assert entry.action_description == "Created file: test.txt"
        assert entry.action_type == "create"
        assert entry.status == "executed"
        assert entry.metadata == {}

    def test_entry_json(self):
        """Test JSON serialization of an entry."""
        entry = AuditEntry.create(
            action_type=ActionType.MOVE,
            action_description="Move a to b",
            status=ActionStatus.CONFLICT,
            metadata={"source": "a"}
        )

        assert AuditEntry.from_json(entry.to_json()) == entry

    def test_get_recent(self, logger):
        """Test getting recent entries."""
        for i in range(5):
            logger.log_action(
                action_type=ActionType.READ,
                description=f"Action {i}",
                status=ActionStatus.EXECUTED
            )

        entries = logger.get_recent(limit=3)

        assert len(entries) == 3
        assert entries[0].action_description == "Action 4"

    def test_get_by_action_type(self, logger):
        """Test filtering entries by action type."""
        logger.log_action(ActionType.READ, "Read a", ActionStatus.EXECUTED)
        logger.log_action(ActionType.DELETE, "Delete a", ActionStatus.EXECUTED)
        logger.log_action(ActionType.READ, "Read b", ActionStatus.CONFLICT)

        reads = logger.get_by_action_type(ActionType.READ)

        assert [e.action_description for e in reads] == ["Read a", "Read b"]

    def test_get_by_status(self, logger):
        """Test getting conflicting actions."""
        logger.log_action(
            action_type=ActionType.COPY,
            description="Copy a to b",
            status=ActionStatus.CONFLICT,
            result="Cannot copy! File does not exist"
        )
        logger.log_action(ActionType.COPY, "Copy c to d", ActionStatus.EXECUTED)

        conflicts = logger.get_by_status(ActionStatus.CONFLICT)

        assert len(conflicts) == 1
        assert conflicts[0].result == "Cannot copy! File does not exist"

    def test_corrupt_lines_are_skipped(self, logger):
        """Test that unparseable lines are ignored."""
        logger.log_action(ActionType.MKDIR, "Make directory a", ActionStatus.EXECUTED)
        with open(logger.log_path, "a", encoding="utf-8") as f:
            f.write("not json\n")

        assert len(logger.get_recent()) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
