# =============================================================================
# Himalaya-Config: Declarative Configuration for the Himalaya Email CLI
# =============================================================================
#
# Himalaya-Config turns a single accounts declaration into:
#   - ~/.config/himalaya/config.toml for the Himalaya CLI
#   - a systemd user unit running `himalaya envelopes watch`
#
# Features:
#   - IMAP, Maildir and notmuch retrieval; SMTP and sendmail (msmtp) sending
#   - TLS / STARTTLS encryption modes
#   - Password commands passed through to Himalaya
#   - Free-form per-account and global settings overrides
#   - Reproducible output: same declaration, same bytes
#
# =============================================================================

__version__ = "0.1.0"
__app_name__ = "himalaya-config"

# Main entry point - this is what gets called by the 'himalaya-config' command
from himalaya_config.app import main

__all__ = ["main", "__version__", "__app_name__"]
