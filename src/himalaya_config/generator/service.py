# =============================================================================
# Watcher Service Unit
# =============================================================================
# Builds the systemd user unit that runs Himalaya's envelope watcher:
#
#   himalaya envelopes watch [--account NAME]
#
# The unit restarts the watcher whenever it exits, after a fixed 10 second
# delay. No unit is produced at all when the watcher is disabled.
# =============================================================================

import logging
from dataclasses import dataclass, field

from himalaya_config.core import WatcherServiceSpec

logger = logging.getLogger(__name__)

# Fixed restart policy
RESTART_POLICY = "always"
RESTART_DELAY_SECONDS = 10


@dataclass
class ServiceUnit:
    """
    A systemd service unit, ready to be rendered.

    Attributes:
        description: Human-readable unit description.
        after: Units this one is ordered after.
        wanted_by: Targets that pull this unit in when installed.
        exec_start: Command line tokens.
        exec_search_path: Directory searched for the command.
        environment: "NAME=VALUE" entries.
        restart: systemd Restart= policy.
        restart_sec: Delay before a restart, in seconds.
    """
    description: str
    exec_start: list[str]
    after: list[str] = field(default_factory=lambda: ["network.target"])
    wanted_by: list[str] = field(default_factory=lambda: ["default.target"])
    exec_search_path: str = "/bin"
    environment: list[str] = field(default_factory=list)
    restart: str = RESTART_POLICY
    restart_sec: int = RESTART_DELAY_SECONDS


def build_watch_service(spec: WatcherServiceSpec, binary: str) -> ServiceUnit | None:
    """
    Build the watcher unit for `spec`.

    Args:
        spec: Watcher service options.
        binary: Path of the Himalaya binary.

    Returns:
        The unit, or None when the watcher is disabled.
    """
    if not spec.enable:
        return None

    command = [binary, "envelopes", "watch"]
    if spec.account is not None:
        command += ["--account", spec.account]

    logger.debug(f"Watcher command: {' '.join(command)}")

    return ServiceUnit(
        description="Email client Himalaya CLI envelopes watcher service",
        exec_start=command,
        environment=[f"{name}={value}" for name, value in spec.environment.items()],
    )


def render_unit(unit: ServiceUnit) -> str:
    """
    Render `unit` as systemd unit file text.

    Environment entries and command tokens containing whitespace are
    double-quoted so systemd reads each as one word. "%" is doubled in both
    so it is not expanded as a specifier, and "$" is doubled in the command
    so it is not expanded as a variable.
    """
    lines = [
        "[Unit]",
        f"Description={unit.description}",
    ]
    lines += [f"After={target}" for target in unit.after]

    lines += ["", "[Install]"]
    lines += [f"WantedBy={target}" for target in unit.wanted_by]

    lines += [
        "",
        "[Service]",
    ]
    lines += [f"Environment={_quote(_escape_specifiers(entry))}" for entry in unit.environment]
    lines += [
        f"ExecSearchPath={unit.exec_search_path}",
        f"ExecStart={_command_line(unit.exec_start)}",
        f"Restart={unit.restart}",
        f"RestartSec={unit.restart_sec}",
    ]

    return "\n".join(lines) + "\n"


def _command_line(tokens: list[str]) -> str:
    """Join command tokens into an ExecStart= value."""
    return " ".join(
        _quote(_escape_specifiers(token).replace("$", "$$")) for token in tokens
    )


def _escape_specifiers(value: str) -> str:
    return value.replace("%", "%%")


def _quote(entry: str) -> str:
    """Double-quote a value if it contains whitespace."""
    if any(char.isspace() for char in entry):
        escaped = entry.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return entry
