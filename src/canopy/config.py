"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

from canopy.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Navigator configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(initial_location="/home", debug_log_diagnostics=True)
    """

    # Location used by Navigator.start() when there is nothing to restore
    initial_location: str = "/"

    # Redirect pipeline hop limit
    max_redirects: int = 10

    # Log every navigation event and the location stack at INFO
    debug_log_diagnostics: bool = False

    def __post_init__(self) -> None:
        if self.max_redirects < 1:
            msg = f"max_redirects must be at least 1, got {self.max_redirects}"
            raise ConfigurationError(msg)
        if not self.initial_location.startswith("/"):
            msg = f"initial_location must be an absolute path, got {self.initial_location!r}"
            raise ConfigurationError(msg)
