"""Loading utilities for symbol databases.

Databases use the find-all-symbols record layout, either as a YAML document
stream (one record per document) or as a JSON list of records. Records are
validated with msgspec.
"""

from pathlib import Path
from typing import Optional

import msgspec
import yaml

from ..errors import SymbolIndexError
from ..models import SymbolInfo, SymbolContext, SYMBOL_KINDS, CONTEXT_KINDS


class ContextSpec(msgspec.Struct, rename="pascal"):
    """Enclosing context of a symbol record."""

    context_type: str
    context_name: str = ""


class SymbolRecord(msgspec.Struct, rename="pascal", omit_defaults=True):
    """One symbol record as written by find-all-symbols."""

    name: str
    type: str
    file_path: str
    line_number: int = 0
    contexts: Optional[list[ContextSpec]] = None  # null for global symbols
    num_occurrences: int = 1

    def to_symbol(self) -> SymbolInfo:
        return SymbolInfo(
            name=self.name,
            kind=self.type if self.type in SYMBOL_KINDS else "Unknown",
            file_path=self.file_path,
            line=self.line_number,
            contexts=tuple(
                SymbolContext(kind=c.context_type, name=c.context_name)
                for c in self.contexts or []
                if c.context_type in CONTEXT_KINDS
            ),
            occurrences=max(self.num_occurrences, 0),
        )


# Reusable decoder for JSON databases
_json_decoder = msgspec.json.Decoder(list[SymbolRecord])


def decode_symbols(data: bytes | str, fmt: str = "yaml") -> list[SymbolInfo]:
    """Decode a symbol database payload.

    Args:
        data: Raw database contents.
        fmt: ``"yaml"`` for a find-all-symbols document stream, ``"json"`` for a list.

    Returns:
        Decoded symbols in file order.

    Raises:
        msgspec.ValidationError: If a record is missing a required field.
        msgspec.DecodeError: If JSON input is malformed.
        yaml.YAMLError: If YAML input is malformed.
    """
    if fmt == "json":
        records = _json_decoder.decode(data)
    else:
        documents = [doc for doc in yaml.safe_load_all(data) if doc is not None]
        records = msgspec.convert(documents, list[SymbolRecord])
    return [record.to_symbol() for record in records]


def load_symbols(path: str | Path) -> list[SymbolInfo]:
    """Load a symbol database from file.

    The format is chosen from the suffix: ``.json`` is JSON, anything else YAML.

    Raises:
        SymbolIndexError: If the file can't be read or decoded.
    """
    path = Path(path)
    fmt = "json" if path.suffix == ".json" else "yaml"
    try:
        with open(path, "rb") as f:
            return decode_symbols(f.read(), fmt=fmt)
    except OSError as e:
        raise SymbolIndexError(str(path), e.strerror or str(e)) from e
    except (msgspec.DecodeError, msgspec.ValidationError, yaml.YAMLError) as e:
        raise SymbolIndexError(str(path), str(e)) from e


def parse_fixed_database(spec: str) -> list[SymbolInfo]:
    """Parse a fixed database string.

    Format: ``name1=header1,header2;name2=header3``. Qualified names such as
    ``a::b::X`` become symbol ``X`` inside namespaces ``b`` and ``a``.
    """
    symbols: list[SymbolInfo] = []
    for entry in spec.split(";"):
        entry = entry.strip()
        if not entry:
            continue
        name, sep, headers = entry.partition("=")
        parts = [p for p in name.strip().split("::") if p]
        if not sep or not parts:
            raise SymbolIndexError("fixed", f"malformed entry {entry!r}")
        contexts = tuple(SymbolContext(kind="Namespace", name=p) for p in reversed(parts[:-1]))
        for header in headers.split(","):
            header = header.strip()
            if header:
                symbols.append(
                    SymbolInfo(
                        name=parts[-1],
                        kind="Unknown",
                        file_path=header,
                        line=1,
                        contexts=contexts,
                        occurrences=1,
                    )
                )
    return symbols
