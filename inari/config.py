"""Settings for inari, stored as TOML under the XDG config directory.

Layout of config.toml:

    [codec]
    strict_precision = false   # raise instead of warn on float precision loss

    [display]
    currency = "EUR"           # currency used by the calculators
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from inari.domain.currency import EUR, CurrencyCode
from inari.domain.errors import ContractViolation

CONFIG_DIR_NAME = "inari"
CONFIG_FILE_NAME = "config.toml"


@dataclass(frozen=True)
class Settings:
    """Immutable settings read from the config file."""

    strict_precision: bool = False
    currency: CurrencyCode = EUR


def get_config_path() -> Path:
    """Location of config.toml, honouring XDG_CONFIG_HOME (default ~/.config)."""
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def _resolve(config_path: Path | None) -> Path:
    return get_config_path() if config_path is None else config_path


def default_config() -> dict[str, Any]:
    defaults = Settings()
    return {
        "codec": {"strict_precision": defaults.strict_precision},
        "display": {"currency": defaults.currency.code},
    }


def create_default_config(config_path: Path | None = None) -> Path:
    """Write the default settings, creating parent directories as needed.

    Returns:
        Path the file was written to.
    """
    path = _resolve(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    save_config(default_config(), path)
    return path


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Read the raw TOML table.

    Raises:
        FileNotFoundError: If there is no config file yet.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    return tomllib.loads(_resolve(config_path).read_text(encoding="utf-8"))


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Write config as TOML, readable by the owner only."""
    path = _resolve(config_path)
    path.write_text(tomli_w.dumps(config), encoding="utf-8")
    path.chmod(0o600)


def parse_settings(config: dict[str, Any]) -> Settings:
    """Build Settings from a configuration dictionary.

    Missing sections and keys fall back to the defaults.

    Raises:
        ContractViolation: If a value has the wrong type or is invalid.
    """
    defaults = Settings()
    codec = config.get("codec", {})
    display = config.get("display", {})

    strict = codec.get("strict_precision", defaults.strict_precision)
    if not isinstance(strict, bool):
        raise ContractViolation("strict_precision", "codec.strict_precision must be true or false")

    currency = display.get("currency", defaults.currency.code)
    return Settings(strict_precision=strict, currency=CurrencyCode(currency))


def load_settings(config_path: Path | None = None) -> Settings:
    """Settings from the config file, or the defaults when there is none."""
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return Settings()
    return parse_settings(config)
