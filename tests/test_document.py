# =============================================================================
# Config Document Tests
# =============================================================================

import tomllib

from himalaya_config.generator import assemble_document, render_document


def test_null_global_settings_are_pruned():
    document = assemble_document({"downloads-dir": None, "editor": "vim"}, {})

    assert document == {"editor": "vim"}
    assert "downloads-dir" not in render_document(document)


def test_accounts_are_keyed_by_name():
    accounts = {"personal": {"email": "a@example.com"}, "work": {"email": "b@example.com"}}

    document = assemble_document({"editor": "vim"}, accounts)

    assert document == {
        "editor": "vim",
        "personal": {"email": "a@example.com"},
        "work": {"email": "b@example.com"},
    }


def test_global_settings_are_not_mutated():
    settings = {"editor": "vim", "pager": None}

    assemble_document(settings, {"personal": {"email": "a@example.com"}})

    assert settings == {"editor": "vim", "pager": None}


def test_rendered_document_is_valid_toml():
    document = assemble_document(
        {"downloads-dir": "/tmp"},
        {
            "personal": {
                "email": "a@example.com",
                "default": True,
                "imap": {"host": "imap.example.com", "port": 993},
                "message": {"send": {"backend": "smtp"}},
            },
        },
    )

    assert tomllib.loads(render_document(document)) == document


def test_rendering_is_deterministic():
    def build():
        return assemble_document(
            {"downloads-dir": "/tmp"},
            {"personal": {"email": "a@example.com", "imap": {"host": "h"}}},
        )

    assert render_document(build()).encode() == render_document(build()).encode()
