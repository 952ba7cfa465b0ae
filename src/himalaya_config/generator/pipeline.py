# =============================================================================
# Generation Pipeline
# =============================================================================
# Runs the whole generation for a declaration:
#
#   1. Select the accounts that opt into Himalaya
#   2. Build each account's table (backends resolved per account)
#   3. Assemble the top-level document from global settings + accounts
#   4. Build the watcher unit, if the watcher is enabled
#
# Generation is pure: it never touches the filesystem. Writing the results
# is done separately by write_outputs().
# =============================================================================

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from himalaya_config.config import Declaration, himalaya_config_path, watch_unit_path
from himalaya_config.generator.accounts import (
    build_accounts_config,
    needs_notmuch_feature,
    select_accounts,
)
from himalaya_config.generator.document import assemble_document, render_document
from himalaya_config.generator.service import ServiceUnit, build_watch_service, render_unit

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """
    Everything generated from one declaration.

    Attributes:
        enabled: Whether the Himalaya program is enabled. When False, nothing
                 else is populated and nothing should be written.
        document: The Himalaya config document.
        service: The watcher unit, or None when the watcher is disabled.
        needs_notmuch: Whether any account reads through notmuch, meaning
                       Himalaya must be built with its notmuch feature.
    """
    enabled: bool = False
    document: dict[str, Any] = field(default_factory=dict)
    service: ServiceUnit | None = None
    needs_notmuch: bool = False

    def config_text(self) -> str:
        """Returns the document as TOML text."""
        return render_document(self.document)

    def unit_text(self) -> str | None:
        """Returns the watcher unit file text, or None without a unit."""
        if self.service is None:
            return None
        return render_unit(self.service)


class GenerationError(Exception):
    """Raised when generated files cannot be written."""
    pass


def generate(declaration: Declaration) -> GenerationResult:
    """
    Generate the Himalaya config and watcher unit for `declaration`.

    Returns an empty, disabled result when the program is not enabled.
    """
    if not declaration.program.enable:
        logger.info("Himalaya is not enabled, nothing to generate")
        return GenerationResult()

    selected = select_accounts(declaration.accounts)
    logger.debug(f"Selected accounts: {', '.join(selected) or '(none)'}")

    needs_notmuch = needs_notmuch_feature(selected)
    if needs_notmuch:
        logger.info("At least one account uses notmuch; Himalaya needs its notmuch feature")

    accounts_config = build_accounts_config(
        selected,
        declaration.maildir_base_path,
        declaration.program.sendmail_command,
    )

    return GenerationResult(
        enabled=True,
        document=assemble_document(declaration.program.settings, accounts_config),
        service=build_watch_service(declaration.watcher, declaration.program.binary),
        needs_notmuch=needs_notmuch,
    )


def write_outputs(result: GenerationResult, config_home: Path) -> list[Path]:
    """
    Write the generated files below `config_home`.

    The Himalaya config goes to himalaya/config.toml and the watcher unit,
    if any, to systemd/user/himalaya-watch.service. Directories are created
    as needed.

    Returns:
        The paths written, in order.

    Raises:
        GenerationError: If a file cannot be written.
    """
    if not result.enabled:
        return []

    outputs = [(himalaya_config_path(config_home), result.config_text())]
    unit_text = result.unit_text()
    if unit_text is not None:
        outputs.append((watch_unit_path(config_home), unit_text))

    written = []
    for path, text in outputs:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise GenerationError(f"Cannot write {path}: {e}") from e
        logger.info(f"Wrote {path}")
        written.append(path)

    return written
