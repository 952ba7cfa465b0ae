# =============================================================================
# Pytest Configuration and Fixtures
# =============================================================================
# Shared fixtures for the Himalaya-Config test suite.
# =============================================================================

import pytest

from himalaya_config.core import (
    Account,
    HimalayaAccountSettings,
    MaildirSettings,
    ServerSettings,
    TlsSettings,
    WatcherServiceSpec,
)
from himalaya_config.config import Declaration, ProgramSettings


@pytest.fixture
def imap_account():
    """An account read over IMAP and sent over SMTP."""
    return Account(
        name="personal",
        address="test@example.com",
        real_name="Test User",
        primary=True,
        user_name="test",
        password_command=["pass", "show", "mail/personal"],
        imap=ServerSettings(host="imap.example.com", port=993),
        smtp=ServerSettings(
            host="smtp.example.com",
            port=587,
            tls=TlsSettings(enable=True, use_start_tls=True),
        ),
        himalaya=HimalayaAccountSettings(enable=True),
    )


@pytest.fixture
def maildir_account():
    """An account backed by a local Maildir, sending through msmtp."""
    return Account(
        name="local",
        address="local@example.com",
        maildir=MaildirSettings(path="local"),
        msmtp=True,
        himalaya=HimalayaAccountSettings(enable=True),
    )


@pytest.fixture
def declaration(imap_account, maildir_account):
    """A declaration with Himalaya enabled and two accounts."""
    return Declaration(
        program=ProgramSettings(
            enable=True,
            binary="/usr/bin/himalaya",
            settings={"downloads-dir": "/home/test/Downloads"},
        ),
        watcher=WatcherServiceSpec(enable=True, account="personal"),
        maildir_base_path="/home/test/Maildir",
        accounts={"personal": imap_account, "local": maildir_account},
    )


DECLARATION_TOML = """\
[programs.himalaya]
enable = true
binary = "/usr/bin/himalaya"

[programs.himalaya.settings]
downloads-dir = "/home/test/Downloads"

[services.himalaya-watch]
enable = true
environment = { PASSWORD_STORE_DIR = "/home/test/.password-store" }
settings = { account = "personal" }

[accounts.email]
maildir-base-path = "/home/test/Maildir"

[accounts.email.accounts.personal]
address = "test@example.com"
real-name = "Test User"
primary = true
user-name = "test"
password-command = ["pass", "show", "mail/personal"]
imap = { host = "imap.example.com", port = 993 }
smtp = { host = "smtp.example.com", port = 587, tls = { use-start-tls = true } }
signature = { text = "Cheers", show-signature = "append" }
himalaya = { enable = true, settings = { sync = { enable = true } } }

[accounts.email.accounts.work]
address = "work@example.com"
imap = { host = "imap.work.example.com" }
"""


@pytest.fixture
def declaration_file(tmp_path):
    """A declaration file on disk."""
    path = tmp_path / "accounts.toml"
    path.write_text(DECLARATION_TOML, encoding="utf-8")
    return path
