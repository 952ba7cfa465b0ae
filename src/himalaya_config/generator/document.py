# =============================================================================
# Top-Level Config Document
# =============================================================================
# Assembles and serializes the Himalaya config.toml.
#
# The document is the global Himalaya settings plus one table per account:
#
#   downloads-dir = "~/Downloads"     <- global settings
#
#   [personal]                        <- account tables, keyed by name
#   email = "user@example.com"
#   backend = "imap"
#   ...
#
# Serialization uses tomli_w. Keys are written in insertion order, so the same
# declaration always produces the same bytes.
# =============================================================================

from collections.abc import Mapping
from typing import Any

import tomli_w

from himalaya_config.core import compact


def assemble_document(
    global_settings: Mapping[str, Any],
    accounts_config: Mapping[str, Mapping[str, Any]],
) -> dict[str, Any]:
    """
    Combine global settings and account tables into one document.

    Null-valued global settings are dropped. Account tables are added under
    their account name, after the global settings.
    """
    document = compact(global_settings)
    for name, account_config in accounts_config.items():
        document[name] = dict(account_config)
    return document


def render_document(document: Mapping[str, Any]) -> str:
    """Serialize a config document to TOML text."""
    return tomli_w.dumps(document)
