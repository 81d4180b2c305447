"""Application configuration.

AppConfig is a frozen dataclass. The setup walk never mutates it in place;
server and logger declarations swap in a copy via ``dataclasses.replace``.
"""

from dataclasses import dataclass

from trellis.logger import Level


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=3000, log_level=Level.DEBUG)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Logging
    log_level: Level = Level.INFO

    # Default maximum for collected request bodies
    max_body_size: int = 16 * 1024  # 16 KiB
