# =============================================================================
# Generator Module
# =============================================================================
# Turns an accounts declaration into Himalaya files.
#
# Features:
#   - Account selection and backend resolution (notmuch > IMAP > Maildir,
#     SMTP > sendmail)
#   - Per-account tables with free-form settings overrides
#   - TOML config document (via tomli_w)
#   - systemd user unit for the envelope watcher
# =============================================================================

from himalaya_config.generator.accounts import (
    RetrievalBackend,
    SendBackend,
    build_account_config,
    build_accounts_config,
    encryption_mode,
    needs_notmuch_feature,
    password_command,
    resolve_backends,
    select_accounts,
)
from himalaya_config.generator.document import assemble_document, render_document
from himalaya_config.generator.pipeline import (
    GenerationError,
    GenerationResult,
    generate,
    write_outputs,
)
from himalaya_config.generator.service import ServiceUnit, build_watch_service, render_unit

__all__ = [
    "RetrievalBackend",
    "SendBackend",
    "build_account_config",
    "build_accounts_config",
    "encryption_mode",
    "needs_notmuch_feature",
    "password_command",
    "resolve_backends",
    "select_accounts",
    "assemble_document",
    "render_document",
    "GenerationError",
    "GenerationResult",
    "generate",
    "write_outputs",
    "ServiceUnit",
    "build_watch_service",
    "render_unit",
]
