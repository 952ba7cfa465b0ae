# =============================================================================
# Configuration Management
# =============================================================================
# Handles loading and validating the accounts declaration.
#
# XDG Base Directory Compliance (https://specifications.freedesktop.org/basedir-spec/):
#   - Config:  $XDG_CONFIG_HOME/  (default: ~/.config/)
#
# Files:
#   - himalaya-config/accounts.toml: Accounts declaration (input)
#   - himalaya/config.toml: Generated Himalaya config (output)
#   - systemd/user/himalaya-watch.service: Generated watcher unit (output)
#
# Declaration layout:
#
#   [programs.himalaya]
#   enable = true
#   binary = "/usr/bin/himalaya"
#   sendmail-command = "/usr/bin/msmtp"
#   settings = { downloads-dir = "~/Downloads" }
#
#   [services.himalaya-watch]
#   enable = true
#   environment = { PASSWORD_STORE_DIR = "~/.password-store" }
#   settings = { account = "personal" }
#
#   [accounts.email]
#   maildir-base-path = "~/Maildir"
#
#   [accounts.email.accounts.personal]
#   address = "user@example.com"
#   imap = { host = "imap.example.com", port = 993 }
#   himalaya = { enable = true }
# =============================================================================

import os
import tomllib  # Built into Python 3.11+
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from himalaya_config.core import (
    Account,
    FolderNames,
    HimalayaAccountSettings,
    MaildirSettings,
    ServerSettings,
    Signature,
    TlsSettings,
    WatcherServiceSpec,
)


# =============================================================================
# XDG Directory Management
# =============================================================================

# Application identifier used for the declaration directory
APP_NAME = "himalaya-config"

# File name of the generated watcher unit
UNIT_NAME = "himalaya-watch.service"


def get_xdg_config_home() -> Path:
    """
    Returns the XDG config base directory.

    Respects $XDG_CONFIG_HOME if set, otherwise uses ~/.config/
    Both the declaration and the generated files live below it.
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def declaration_file_path() -> Path:
    """Returns the default path of the accounts declaration."""
    return get_xdg_config_home() / APP_NAME / "accounts.toml"


def himalaya_config_path(config_home: Path) -> Path:
    """Returns where the Himalaya config is written below `config_home`."""
    return config_home / "himalaya" / "config.toml"


def watch_unit_path(config_home: Path) -> Path:
    """Returns where the watcher unit is written below `config_home`."""
    return config_home / "systemd" / "user" / UNIT_NAME


# =============================================================================
# Configuration Data Structures
# =============================================================================

# Default binaries, overridable in [programs.himalaya]
DEFAULT_BINARY = "himalaya"
DEFAULT_SENDMAIL_COMMAND = "/usr/bin/msmtp"


@dataclass
class ProgramSettings:
    """
    Options of the Himalaya program itself.

    Attributes:
        enable: Generate anything at all.
        binary: Path of the Himalaya binary, used by the watcher unit.
        sendmail_command: Path of the sendmail-compatible binary used by
                          accounts that send through msmtp.
        settings: Free-form global Himalaya settings.
    """
    enable: bool = False
    binary: str = DEFAULT_BINARY
    sendmail_command: str = DEFAULT_SENDMAIL_COMMAND
    settings: dict[str, Any] = field(default_factory=dict)


@dataclass
class Declaration:
    """
    The whole accounts declaration.

    Attributes:
        program: Himalaya program options.
        watcher: Watcher service options.
        maildir_base_path: Root of the local mail store, shared by every
                           account. Also the notmuch database location.
        accounts: Declared email accounts, keyed by name.

    Usage:
        >>> declaration = Declaration.load()
        >>> declaration.accounts["personal"].address
        'user@example.com'
    """
    program: ProgramSettings = field(default_factory=ProgramSettings)
    watcher: WatcherServiceSpec = field(default_factory=WatcherServiceSpec)
    maildir_base_path: str = field(default_factory=lambda: str(Path.home() / "Maildir"))
    accounts: dict[str, Account] = field(default_factory=dict)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path | None = None) -> "Declaration":
        """
        Load the declaration from a TOML file.

        Args:
            path: Declaration file. Defaults to the XDG location.

        Returns:
            Loaded Declaration object.

        Raises:
            ConfigError: If the file is missing, unreadable or invalid.
        """
        declaration_path = path or declaration_file_path()

        try:
            with open(declaration_path, "rb") as f:
                data = tomllib.load(f)
        except FileNotFoundError as e:
            raise ConfigError(f"Declaration file not found: {declaration_path}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read declaration file: {e}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid declaration file: {e}") from e

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Declaration":
        """
        Create a Declaration from a dictionary (parsed TOML).

        Only the structure is checked: tables must be tables, flags must be
        booleans. Semantic gaps, like an account without any backend, are
        left for Himalaya to report.
        """
        declaration = cls()

        # Program settings
        programs = _table(data, "programs", "")
        program = _table(programs, "himalaya", "programs")
        declaration.program = ProgramSettings(
            enable=_flag(program, "enable", "programs.himalaya"),
            binary=_string(program, "binary", "programs.himalaya", DEFAULT_BINARY),
            sendmail_command=_string(
                program, "sendmail-command", "programs.himalaya", DEFAULT_SENDMAIL_COMMAND
            ),
            settings=_table(program, "settings", "programs.himalaya"),
        )

        # Watcher service
        services = _table(data, "services", "")
        watcher = _table(services, "himalaya-watch", "services")
        watcher_settings = _table(watcher, "settings", "services.himalaya-watch")
        environment = _table(watcher, "environment", "services.himalaya-watch")
        declaration.watcher = WatcherServiceSpec(
            enable=_flag(watcher, "enable", "services.himalaya-watch"),
            environment={
                name: _string(environment, name, "services.himalaya-watch.environment")
                for name in environment
            },
            account=_string(watcher_settings, "account", "services.himalaya-watch.settings"),
        )

        # Accounts - each key under [accounts.email.accounts] is an account name
        email = _table(_table(data, "accounts", ""), "email", "accounts")
        base_path = _string(email, "maildir-base-path", "accounts.email")
        if base_path is not None:
            declaration.maildir_base_path = os.path.expanduser(base_path)

        for name, acct_data in _table(email, "accounts", "accounts.email").items():
            declaration.accounts[name] = _account_from_dict(
                name, acct_data, f"accounts.email.accounts.{name}"
            )

        return declaration


# =============================================================================
# Exceptions
# =============================================================================

class ConfigError(Exception):
    """Raised when there's an error loading or parsing the declaration."""
    pass


# =============================================================================
# Parsing Helpers
# =============================================================================

def _where(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def _table(data: Any, key: str, prefix: str) -> dict[str, Any]:
    """Returns the table at `key`, or an empty one if it is missing."""
    if not isinstance(data, dict):
        raise ConfigError(f"{prefix or 'declaration'} must be a table")
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ConfigError(f"{_where(prefix, key)} must be a table")
    return value


def _flag(data: dict[str, Any], key: str, prefix: str, default: bool = False) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{_where(prefix, key)} must be true or false")
    return value


def _string(
    data: dict[str, Any],
    key: str,
    prefix: str,
    default: str | None = None,
) -> str | None:
    value = data.get(key, default)
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"{_where(prefix, key)} must be a string")
    return value


def _port(data: dict[str, Any], prefix: str) -> int | None:
    value = data.get("port")
    # bool is a subclass of int, so rule it out explicitly
    if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
        raise ConfigError(f"{prefix}.port must be an integer")
    return value


def _server_from_dict(data: dict[str, Any], prefix: str) -> ServerSettings:
    host = _string(data, "host", prefix)
    if host is None:
        raise ConfigError(f"{prefix}.host is required")

    tls = _table(data, "tls", prefix)
    return ServerSettings(
        host=host,
        port=_port(data, prefix),
        tls=TlsSettings(
            enable=_flag(tls, "enable", f"{prefix}.tls", default=True),
            use_start_tls=_flag(tls, "use-start-tls", f"{prefix}.tls"),
        ),
    )


def _password_command(data: dict[str, Any], prefix: str) -> list[str] | None:
    value = data.get("password-command")
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(token, str) for token in value):
        return list(value)
    raise ConfigError(f"{prefix}.password-command must be a string or a list of strings")


def _account_from_dict(name: str, data: Any, prefix: str) -> Account:
    """Create an Account from its declaration table."""
    if not isinstance(data, dict):
        raise ConfigError(f"{prefix} must be a table")

    address = _string(data, "address", prefix)
    if address is None:
        raise ConfigError(f"{prefix}.address is required")

    folders = _table(data, "folders", prefix)
    signature = _table(data, "signature", prefix)
    himalaya = _table(data, "himalaya", prefix)

    imap = None
    if "imap" in data:
        imap = _server_from_dict(_table(data, "imap", prefix), f"{prefix}.imap")

    smtp = None
    if "smtp" in data:
        smtp = _server_from_dict(_table(data, "smtp", prefix), f"{prefix}.smtp")

    maildir = None
    if "maildir" in data:
        maildir_path = _string(_table(data, "maildir", prefix), "path", f"{prefix}.maildir")
        if maildir_path is None:
            maildir_path = name
        maildir = MaildirSettings(path=os.path.expanduser(maildir_path))

    return Account(
        name=name,
        address=address,
        real_name=_string(data, "real-name", prefix),
        primary=_flag(data, "primary", prefix),
        user_name=_string(data, "user-name", prefix),
        password_command=_password_command(data, prefix),
        folders=FolderNames(
            inbox=_string(folders, "inbox", f"{prefix}.folders", "Inbox"),
            sent=_string(folders, "sent", f"{prefix}.folders", "Sent"),
            drafts=_string(folders, "drafts", f"{prefix}.folders", "Drafts"),
            trash=_string(folders, "trash", f"{prefix}.folders", "Trash"),
        ),
        imap=imap,
        maildir=maildir,
        notmuch=_flag(_table(data, "notmuch", prefix), "enable", f"{prefix}.notmuch"),
        smtp=smtp,
        msmtp=_flag(_table(data, "msmtp", prefix), "enable", f"{prefix}.msmtp"),
        signature=Signature(
            text=_string(signature, "text", f"{prefix}.signature", ""),
            delimiter=_string(signature, "delimiter", f"{prefix}.signature", "-- \n"),
            show_signature=_string(
                signature, "show-signature", f"{prefix}.signature", "none"
            ),
        ),
        himalaya=HimalayaAccountSettings(
            enable=_flag(himalaya, "enable", f"{prefix}.himalaya"),
            settings=_table(himalaya, "settings", f"{prefix}.himalaya"),
        ),
    )


# =============================================================================
# Utility Functions
# =============================================================================

def print_paths(config_home: Path | None = None) -> None:
    """
    Print the declaration and output paths.
    Useful for users wondering where their files are read from and written to.
    """
    home = config_home or get_xdg_config_home()
    print(f"Declaration:     {declaration_file_path()}")
    print(f"Himalaya config: {himalaya_config_path(home)}")
    print(f"Watcher unit:    {watch_unit_path(home)}")
