# =============================================================================
# Watcher Model
# =============================================================================
# Options of the himalaya-watch service, which keeps `himalaya envelopes
# watch` running in the background.
# =============================================================================

from dataclasses import dataclass, field


@dataclass
class WatcherServiceSpec:
    """
    Options of the watcher service.

    Attributes:
        enable: Whether the watcher service is generated.
        environment: Extra environment variables for the service
                     (e.g., {"PASSWORD_STORE_DIR": "~/.password-store"}).
        account: Account to watch. None watches the default account.
    """
    enable: bool = False
    environment: dict[str, str] = field(default_factory=dict)
    account: str | None = None
