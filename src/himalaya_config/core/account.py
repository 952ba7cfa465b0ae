# =============================================================================
# Account Model
# =============================================================================
# Represents a declared email account, as described in the accounts
# declaration file. An account carries:
#
#   - Identity: address, display name, primary flag, folder names
#   - Retrieval: IMAP, Maildir and/or notmuch settings
#   - Sending: SMTP settings and/or the msmtp (sendmail) flag
#   - Signature settings
#   - The Himalaya block: opt-in flag plus free-form settings override
#
# IMPORTANT: Passwords are NOT stored here. Only the command that prints the
# password is recorded, and it is passed through to Himalaya verbatim.
# =============================================================================

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class TlsSettings:
    """
    Transport security for an IMAP or SMTP server.

    Attributes:
        enable: Whether the connection is encrypted at all.
        use_start_tls: Upgrade a plain connection with STARTTLS. When set,
                       this takes precedence over `enable`.
    """
    enable: bool = True
    use_start_tls: bool = False


@dataclass
class ServerSettings:
    """
    Connection details for an IMAP or SMTP server.

    Attributes:
        host: Hostname of the server (e.g., "imap.example.com").
        port: Port number. None lets Himalaya pick its default.
        tls: Transport security settings.
    """
    host: str
    port: int | None = None
    tls: TlsSettings = field(default_factory=TlsSettings)


@dataclass
class MaildirSettings:
    """
    Location of an account's local Maildir.

    Attributes:
        path: Directory of this account, relative to the shared maildir base
              path. An absolute path is used as-is.
    """
    path: str

    def abs_path(self, base_path: str) -> str:
        """Returns the account's Maildir root, resolved against `base_path`."""
        return str(Path(base_path) / self.path)


@dataclass
class FolderNames:
    """Names of the well-known folders of an account."""
    inbox: str = "Inbox"
    sent: str = "Sent"
    drafts: str = "Drafts"
    trash: str = "Trash"


@dataclass
class Signature:
    """
    Signature settings.

    Attributes:
        text: Signature body.
        delimiter: Separator inserted before the signature.
        show_signature: "none", "append" or "attach". Only "append" is
                        forwarded to Himalaya at the moment.
    """
    text: str = ""
    delimiter: str = "-- \n"
    show_signature: str = "none"


@dataclass
class HimalayaAccountSettings:
    """
    Per-account Himalaya options.

    Attributes:
        enable: Include this account in the generated Himalaya config.
        settings: Free-form Himalaya account settings, merged on top of the
                  generated ones.
    """
    enable: bool = False
    settings: dict[str, Any] = field(default_factory=dict)


@dataclass
class Account:
    """
    Represents a declared email account.

    Attributes:
        name: A unique identifier for this account (e.g., "personal", "work").
              Used as the account's table name in the Himalaya config.
        address: The email address of this account.
        real_name: The name shown in the "From" field when sending emails.
        primary: Whether this is the default account.
        user_name: Login used for both IMAP and SMTP.
        password_command: Command printing the password, as a list of tokens.

        folders: Names of the well-known folders.
        imap: IMAP server settings, if the account is read over IMAP.
        maildir: Local Maildir settings, if any.
        notmuch: Whether the account is indexed by notmuch.
        smtp: SMTP server settings, if the account sends over SMTP.
        msmtp: Whether the account sends through msmtp (sendmail).

        signature: Signature settings.
        himalaya: Himalaya opt-in flag and settings override.

    Example:
        >>> account = Account(
        ...     name="personal",
        ...     address="user@example.com",
        ...     real_name="John Doe",
        ...     imap=ServerSettings(host="imap.example.com", port=993),
        ...     himalaya=HimalayaAccountSettings(enable=True),
        ... )
    """

    # Identity
    name: str
    address: str
    real_name: str | None = None
    primary: bool = False
    user_name: str | None = None
    password_command: list[str] | None = None
    folders: FolderNames = field(default_factory=FolderNames)

    # Retrieval
    imap: ServerSettings | None = None
    maildir: MaildirSettings | None = None
    notmuch: bool = False

    # Sending
    smtp: ServerSettings | None = None
    msmtp: bool = False

    signature: Signature = field(default_factory=Signature)
    himalaya: HimalayaAccountSettings = field(default_factory=HimalayaAccountSettings)

    def __str__(self) -> str:
        """Human-readable representation showing account name and address."""
        return f"{self.name} <{self.address}>"
