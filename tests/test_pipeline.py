# =============================================================================
# Generation Pipeline Tests
# =============================================================================

import tomllib

import pytest

from himalaya_config.config import Declaration, ProgramSettings
from himalaya_config.core import WatcherServiceSpec
from himalaya_config.generator import GenerationError, generate, write_outputs


class TestGenerate:
    def test_disabled_program_generates_nothing(self, declaration):
        declaration.program.enable = False

        result = generate(declaration)

        assert result.enabled is False
        assert result.document == {}
        assert result.service is None

    def test_document_contents(self, declaration):
        document = generate(declaration).document

        assert set(document) == {"downloads-dir", "personal", "local"}
        assert document["personal"]["backend"] == "imap"
        assert document["local"]["maildir"] == {"root-dir": "/home/test/Maildir/local"}

    def test_disabled_accounts_are_left_out(self, declaration):
        declaration.accounts["local"].himalaya.enable = False

        assert "local" not in generate(declaration).document

    def test_watcher_uses_program_binary(self, declaration):
        service = generate(declaration).service

        assert service.exec_start == [
            "/usr/bin/himalaya", "envelopes", "watch", "--account", "personal",
        ]

    def test_disabled_watcher(self, declaration):
        declaration.watcher.enable = False

        result = generate(declaration)

        assert result.service is None
        assert result.unit_text() is None

    def test_needs_notmuch(self, declaration):
        assert generate(declaration).needs_notmuch is False

        declaration.accounts["local"].notmuch = True
        assert generate(declaration).needs_notmuch is True

    def test_generation_is_deterministic(self, declaration_file):
        first = generate(Declaration.load(declaration_file))
        second = generate(Declaration.load(declaration_file))

        assert first.config_text().encode() == second.config_text().encode()
        assert first.unit_text().encode() == second.unit_text().encode()

    def test_end_to_end_from_file(self, declaration_file):
        text = generate(Declaration.load(declaration_file)).config_text()

        assert tomllib.loads(text) == {
            "downloads-dir": "/home/test/Downloads",
            "personal": {
                "email": "test@example.com",
                "display-name": "Test User",
                "default": True,
                "folder": {
                    "alias": {
                        "inbox": "Inbox",
                        "sent": "Sent",
                        "drafts": "Drafts",
                        "trash": "Trash",
                    },
                },
                "signature": "Cheers",
                "signature-delim": "-- \n",
                "backend": "imap",
                "imap": {
                    "host": "imap.example.com",
                    "port": 993,
                    "encryption": "tls",
                    "login": "test",
                    "passwd": {"cmd": "pass show mail/personal"},
                },
                "message": {"send": {"backend": "smtp"}},
                "smtp": {
                    "host": "smtp.example.com",
                    "port": 587,
                    "encryption": "start-tls",
                    "login": "test",
                    "passwd": {"cmd": "pass show mail/personal"},
                },
                "sync": {"enable": True},
            },
        }


class TestWriteOutputs:
    def test_writes_config_and_unit(self, declaration, tmp_path):
        written = write_outputs(generate(declaration), tmp_path)

        config_path = tmp_path / "himalaya" / "config.toml"
        unit_path = tmp_path / "systemd" / "user" / "himalaya-watch.service"
        assert written == [config_path, unit_path]
        assert tomllib.loads(config_path.read_text())["personal"]["email"] == "test@example.com"
        assert "ExecStart=/usr/bin/himalaya envelopes watch --account personal" in (
            unit_path.read_text()
        )

    def test_no_unit_when_watcher_disabled(self, declaration, tmp_path):
        declaration.watcher.enable = False

        written = write_outputs(generate(declaration), tmp_path)

        assert written == [tmp_path / "himalaya" / "config.toml"]
        assert not (tmp_path / "systemd").exists()

    def test_nothing_written_when_disabled(self, tmp_path):
        declaration = Declaration(
            program=ProgramSettings(enable=False),
            watcher=WatcherServiceSpec(enable=True),
        )

        assert write_outputs(generate(declaration), tmp_path) == []
        assert list(tmp_path.iterdir()) == []

    def test_write_failure(self, declaration, tmp_path):
        # A file where the himalaya directory should be
        (tmp_path / "himalaya").write_text("")

        with pytest.raises(GenerationError, match="Cannot write"):
            write_outputs(generate(declaration), tmp_path)
