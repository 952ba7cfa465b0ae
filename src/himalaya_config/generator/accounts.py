# =============================================================================
# Account Config Builder
# =============================================================================
# Turns declared accounts into Himalaya account tables.
#
# Key responsibilities:
#   - Selecting the accounts that opt into Himalaya
#   - Resolving which retrieval and send backend applies to an account
#   - Building the account table from identity, signature and backend blocks
#   - Merging the account's free-form settings override on top
#
# Backend precedence is fixed and must not change, since Himalaya only
# honours one retrieval and one send backend per account:
#   - Retrieval: notmuch > IMAP > Maildir
#   - Sending:   SMTP > sendmail (msmtp)
#
# Accounts with no usable backend are NOT rejected: the backend block is
# simply left out and Himalaya reports the problem when it runs.
# =============================================================================

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from himalaya_config.core import Account, TlsSettings, compact, deep_merge, merge_fragments

logger = logging.getLogger(__name__)


class RetrievalBackend(Enum):
    """Backend Himalaya reads mail from."""
    NOTMUCH = "notmuch"
    IMAP = "imap"
    MAILDIR = "maildir"
    NONE = "none"


class SendBackend(Enum):
    """Backend Himalaya sends mail with."""
    SMTP = "smtp"
    SENDMAIL = "sendmail"
    NONE = "none"


# =============================================================================
# Selection and Resolution
# =============================================================================

def select_accounts(accounts: Mapping[str, Account]) -> dict[str, Account]:
    """Returns the accounts that enable the Himalaya integration."""
    return {
        name: account
        for name, account in accounts.items()
        if account.himalaya.enable
    }


def resolve_backends(account: Account) -> tuple[RetrievalBackend, SendBackend]:
    """
    Decide which retrieval and send backends apply to `account`.

    The first enabled backend wins, so an account with notmuch enabled reads
    through notmuch even when IMAP or Maildir settings are also declared.
    """
    if account.notmuch:
        retrieval = RetrievalBackend.NOTMUCH
    elif account.imap is not None:
        retrieval = RetrievalBackend.IMAP
    elif account.maildir is not None:
        retrieval = RetrievalBackend.MAILDIR
    else:
        retrieval = RetrievalBackend.NONE

    if account.smtp is not None:
        send = SendBackend.SMTP
    elif account.msmtp:
        send = SendBackend.SENDMAIL
    else:
        send = SendBackend.NONE

    return retrieval, send


def needs_notmuch_feature(accounts: Mapping[str, Account]) -> bool:
    """Returns True if any of `accounts` reads its mail through notmuch."""
    return any(account.notmuch for account in accounts.values())


# =============================================================================
# Field Helpers
# =============================================================================

def encryption_mode(tls: TlsSettings) -> str:
    """
    Map TLS settings to a Himalaya encryption mode.

    STARTTLS is checked first, so it wins even when `enable` is also set:
        use_start_tls=True              -> "start-tls"
        enable=True, use_start_tls=False -> "tls"
        otherwise                       -> "none"
    """
    if tls.use_start_tls:
        return "start-tls"
    if tls.enable:
        return "tls"
    return "none"


def password_command(tokens: list[str] | None) -> str | None:
    """
    Join command tokens into a single command line.

    Tokens are joined with single spaces and are not shell-escaped.
    """
    if tokens is None:
        return None
    return " ".join(tokens)


# =============================================================================
# Config Blocks
# =============================================================================
# Each block returns None when it does not apply. merge_fragments() skips
# those, so an account never ends up with placeholder keys.

def _identity_block(account: Account) -> dict[str, Any]:
    return {
        "email": account.address,
        "display-name": account.real_name,
        "default": account.primary,
        "folder": {
            "alias": {
                "inbox": account.folders.inbox,
                "sent": account.folders.sent,
                "drafts": account.folders.drafts,
                "trash": account.folders.trash,
            },
        },
    }


def _signature_block(account: Account) -> dict[str, Any] | None:
    # Himalaya cannot attach signatures yet, so only "append" is forwarded
    if account.signature.show_signature != "append":
        return None
    return {
        "signature": account.signature.text,
        "signature-delim": account.signature.delimiter,
    }


def _retrieval_block(
    account: Account,
    backend: RetrievalBackend,
    maildir_base_path: str,
) -> dict[str, Any] | None:
    if backend is RetrievalBackend.IMAP:
        return {
            "backend": "imap",
            "imap": {
                "host": account.imap.host,
                "port": account.imap.port,
                "encryption": encryption_mode(account.imap.tls),
                "login": account.user_name,
                "passwd": {"cmd": password_command(account.password_command)},
            },
        }

    if backend is RetrievalBackend.MAILDIR:
        return {
            "backend": "maildir",
            "maildir": {"root-dir": account.maildir.abs_path(maildir_base_path)},
        }

    if backend is RetrievalBackend.NOTMUCH:
        # The notmuch database lives at the root of the mail store, not in
        # the account's own Maildir.
        return {
            "backend": "notmuch",
            "notmuch": {"database-path": maildir_base_path},
        }

    return None


def _send_block(
    account: Account,
    backend: SendBackend,
    sendmail_command: str,
) -> dict[str, Any] | None:
    if backend is SendBackend.SMTP:
        return {
            "message": {"send": {"backend": "smtp"}},
            "smtp": {
                "host": account.smtp.host,
                "port": account.smtp.port,
                "encryption": encryption_mode(account.smtp.tls),
                "login": account.user_name,
                "passwd": {"cmd": password_command(account.password_command)},
            },
        }

    if backend is SendBackend.SENDMAIL:
        return {
            "message": {"send": {"backend": "sendmail"}},
            "sendmail": {"cmd": sendmail_command},
        }

    return None


def build_account_config(
    account: Account,
    maildir_base_path: str,
    sendmail_command: str,
) -> dict[str, Any]:
    """
    Build the Himalaya account table for `account`.

    Args:
        account: The declared account.
        maildir_base_path: Root of the shared mail store. Used for Maildir
                           roots and as the notmuch database path.
        sendmail_command: Path of the sendmail-compatible binary.

    Returns:
        The account table, with the account's settings override merged last.
    """
    retrieval, send = resolve_backends(account)
    logger.debug(
        f"Account {account.name}: retrieval={retrieval.value}, send={send.value}"
    )

    config = merge_fragments([
        _identity_block(account),
        _signature_block(account),
        _retrieval_block(account, retrieval, maildir_base_path),
        _send_block(account, send, sendmail_command),
    ])

    # The override may set keys to None to unset generated values
    return compact(deep_merge(config, account.himalaya.settings))


def build_accounts_config(
    accounts: Mapping[str, Account],
    maildir_base_path: str,
    sendmail_command: str,
) -> dict[str, dict[str, Any]]:
    """
    Build the account tables of `accounts`, keyed by name.

    `accounts` must already be filtered with select_accounts().
    """
    return {
        name: build_account_config(account, maildir_base_path, sendmail_command)
        for name, account in accounts.items()
    }
