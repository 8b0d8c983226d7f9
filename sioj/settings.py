"""Global configuration for WebSocket connections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


def _clamp(value, low, high):
    return max(low, min(high, value))


@dataclass
class HorizonSettings:
    """Defaults for WebSocket connections, logging, security and debugging."""

    default_heartbeat_enabled: bool = True
    default_heartbeat_interval: float = 30.0
    default_max_reconnect_attempts: int = 3
    default_reconnect_delay: float = 5.0
    default_auto_reconnect: bool = True
    default_heartbeat_message: str = "ping"

    enable_verbose_logging: bool = False
    log_connection_events: bool = True
    log_message_events: bool = False
    log_heartbeat_events: bool = False

    allow_insecure_connections: bool = True
    verify_ssl_certificates: bool = True
    connection_timeout: float = 30.0
    max_message_size: int = 1048576

    enable_auto_cleanup: bool = True
    enable_global_event_broadcasting: bool = True

    enable_debug_mode: bool = False
    debug_server_urls: list[str] = field(
        default_factory=lambda: ["ws://localhost:8080", "ws://localhost:3000"]
    )
    auto_connect_in_pie: bool = False
    simulate_connection_failures: bool = False

    enable_http_client: bool = False
    enable_tcp_client: bool = False
    enable_udp_client: bool = False

    def validate(self) -> None:
        """Clamp every bounded setting into its allowed range."""
        self.default_heartbeat_interval = _clamp(self.default_heartbeat_interval, 5.0, 300.0)
        self.default_max_reconnect_attempts = _clamp(self.default_max_reconnect_attempts, 1, 10)
        self.default_reconnect_delay = _clamp(self.default_reconnect_delay, 1.0, 60.0)
        self.connection_timeout = _clamp(self.connection_timeout, 5.0, 120.0)
        self.max_message_size = _clamp(self.max_message_size, 1024, 16777216)

    @property
    def verbose_logging_enabled(self) -> bool:
        """Whether verbose logging is switched on."""
        return self.enable_verbose_logging

    @property
    def debug_mode_enabled(self) -> bool:
        """Whether debug mode is switched on."""
        return self.enable_debug_mode


_settings: Optional[HorizonSettings] = None


def get_horizon_settings() -> HorizonSettings:
    """Return the process-wide settings, creating them on first use."""
    global _settings
    if _settings is None:
        _settings = HorizonSettings()
    return _settings