# =============================================================================
# Himalaya-Config Core Module
# =============================================================================
# This module contains the core domain models and the attribute tree helpers.
# These are pure Python dataclasses and functions with no external
# dependencies, so they can be imported anywhere without causing circular
# imports.
#
#   - Account: A declared email account (identity, backends, signature)
#   - ServerSettings / TlsSettings: IMAP and SMTP connection details
#   - WatcherServiceSpec: Options of the envelope watcher service
#   - deep_merge / compact / merge_fragments: config tree composition
# =============================================================================

from himalaya_config.core.account import (
    Account,
    FolderNames,
    HimalayaAccountSettings,
    MaildirSettings,
    ServerSettings,
    Signature,
    TlsSettings,
)
from himalaya_config.core.attrs import compact, deep_merge, merge_fragments
from himalaya_config.core.watcher import WatcherServiceSpec

__all__ = [
    "Account",
    "FolderNames",
    "HimalayaAccountSettings",
    "MaildirSettings",
    "ServerSettings",
    "Signature",
    "TlsSettings",
    "WatcherServiceSpec",
    "compact",
    "deep_merge",
    "merge_fragments",
]
