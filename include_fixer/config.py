"""Configuration loading.

Config file format (JSON, every key optional):
    {
        "databases": ["symbols.yaml"],
        "fixed_database": "Foo=foo.h;a::Bar=bar.h",
        "include_dirs": ["include"],
        "system_include_dirs": ["/usr/include"],
        "minimize_include_paths": true,
        "style": "llvm",
        "base_dir": "/path/to/build"
    }
"""

from pathlib import Path
from typing import Any, Optional

import msgspec

from .errors import ConfigError


class FixerConfig(msgspec.Struct, forbid_unknown_fields=True, omit_defaults=True):
    """Settings for one include-fixer run."""

    databases: list[str] = []
    fixed_database: Optional[str] = None
    include_dirs: list[str] = []
    system_include_dirs: list[str] = []
    minimize_include_paths: bool = True
    style: str = "llvm"
    base_dir: Optional[str] = None

    def merged(self, **overrides: Any) -> "FixerConfig":
        """Return a copy with CLI overrides applied.

        ``None`` values are ignored; list values extend the configured lists.
        """
        changes: dict[str, Any] = {}
        for key, value in overrides.items():
            if value is None:
                continue
            current = getattr(self, key)
            if isinstance(current, list):
                changes[key] = current + list(value)
            else:
                changes[key] = value
        return msgspec.structs.replace(self, **changes)


_decoder = msgspec.json.Decoder(FixerConfig)


def load_config(path: str | Path | None) -> FixerConfig:
    """Load configuration from a JSON file, or defaults when ``path`` is None.

    Relative database paths and include directories stay relative; they are
    resolved against ``base_dir`` (or the working directory) when used.

    Raises:
        ConfigError: If the file can't be read or doesn't match the schema.
    """
    if path is None:
        return FixerConfig()
    try:
        with open(path, "rb") as f:
            return _decoder.decode(f.read())
    except OSError as e:
        raise ConfigError(str(path), e.strerror or str(e)) from e
    except (msgspec.DecodeError, msgspec.ValidationError) as e:
        raise ConfigError(str(path), str(e)) from e
