"""Application configuration.

AppConfig is a frozen dataclass holding startup settings. Config is the
mutable runtime key/value store an App exposes through ``get_config`` and
``set_config``.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(vendor="shop", vendor_path="src", debug=True)
    """

    # Vendor namespace: controllers and listeners live under it
    vendor: str = "roost_app"
    vendor_path: str | Path = "src"
    listeners_dir: str | Path | None = None  # None = <vendor_path>/<vendor>/listeners

    # View
    template_dir: str | Path = "templates"
    autoescape: bool = True

    # Dispatch
    escalate_warnings: bool = True
    default_controller: str = "Index"
    default_action: str = "index"

    # Runtime
    debug: bool = False
    log_level: str = "info"

    def resolve_listeners_dir(self) -> Path:
        """Return the directory scanned for listener modules."""
        if self.listeners_dir is not None:
            return Path(self.listeners_dir)
        return Path(self.vendor_path) / self.vendor.replace(".", "/") / "listeners"


class Config:
    """String-keyed runtime configuration values.

    Deliberately narrow: ``get`` and ``set`` only, no enumeration or
    deletion. Missing keys read as ``None``.
    """

    __slots__ = ("_values",)

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def get(self, key: str) -> Any:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def __repr__(self) -> str:
        return f"<Config {len(self._values)} keys>"
