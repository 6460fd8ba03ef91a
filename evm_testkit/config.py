from pathlib import Path
from typing import Any, Dict, Optional

import tomli

from evm_testkit.logger import logger

DEFAULT_RPC_URL = "http://127.0.0.1:8545"
DEFAULT_RPC_TIMEOUT = 10
DEFAULT_EVENT_TIMEOUT_MS = 5000
DEFAULT_POLL_INTERVAL = 0.1


class Config:
    """
    Configuration manager for evm-testkit

    Handles loading and accessing configuration from TOML files.
    Provides default values and graceful error handling.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager

        Args:
            config_path: Path to the TOML configuration file.
                        If not provided, defaults to "evm-testkit.toml"
        """
        self.config_path = config_path or "evm-testkit.toml"
        self.config: Dict[str, Any] = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration from TOML file

        Returns:
            Dict[str, Any]: Configuration dictionary, empty if file not found or invalid
        """
        config_path = Path(self.config_path)
        if not config_path.exists():
            logger.warning(
                f"Config file not found: {self.config_path}, using defaults"
            )
            return {}

        try:
            with open(config_path, "rb") as f:
                return tomli.load(f)
        except tomli.TOMLDecodeError as e:
            logger.error(f"Error loading config file: {e}")
            return {}

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-separated key

        Args:
            key: Dot-separated configuration key (e.g., "rpc.url")
            default: Default value if key not found

        Returns:
            Any: Configuration value or default if not found
        """
        value = self.config
        for k in key.split("."):
            if not isinstance(value, dict):
                return default
            value = value.get(k, default)
        return value if value is not None else default

    @property
    def rpc_url(self) -> str:
        """Test node RPC endpoint"""
        return self.get("rpc.url", DEFAULT_RPC_URL)

    @property
    def rpc_timeout(self) -> int:
        """HTTP request timeout in seconds"""
        return self.get("rpc.timeout", DEFAULT_RPC_TIMEOUT)

    @property
    def default_account_index(self) -> int:
        """Index into the node's account list used as default sender"""
        return self.get("accounts.default_index", 0)

    @property
    def event_timeout_ms(self) -> int:
        """Default event wait timeout in milliseconds"""
        return self.get("events.timeout_ms", DEFAULT_EVENT_TIMEOUT_MS)

    @property
    def poll_interval(self) -> float:
        """Seconds between log filter polls"""
        return self.get("events.poll_interval", DEFAULT_POLL_INTERVAL)

    @property
    def logging(self) -> dict:
        """Logging section, passed to setup_logger"""
        return self.config.get("logging", {})
