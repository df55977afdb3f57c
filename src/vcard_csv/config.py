from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from .model import Mode

logger = logging.getLogger(__name__)


@dataclass
class Paths:
    root: Path
    input_dir: Path
    output_dir: Path
    local_dir: Path
    conf_file: Path


@dataclass
class Settings:
    mode: Mode = Mode.DYNAMIC
    escape_quotes: bool = True      # fixed mode only; dynamic always escapes
    output_suffix: str = "_contacts"
    preview_rows: int = 10


DEFAULT_CONF = """# vcard-csv local config (TOML)
# "dynamic" = one column per field found, "fixed" = name, 3 phones, 3 emails, addresses
mode = "dynamic"
escape_quotes = true
output_suffix = "_contacts"
preview_rows = 10
"""


def parse_mode(value: str | Mode) -> Mode:
    if isinstance(value, Mode):
        return value
    try:
        return Mode(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown mode {value!r}; expected 'fixed' or 'dynamic'") from None


def load_settings(conf: Path) -> Settings:
    """Read settings from a TOML file; missing or bad values keep their defaults."""
    settings = Settings()
    if not conf.exists():
        return settings
    try:
        data = tomllib.loads(conf.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        logger.warning("Ignoring malformed config %s: %s", conf, e)
        return settings

    if "mode" in data:
        try:
            settings.mode = parse_mode(data["mode"])
        except ValueError as e:
            logger.warning("%s: %s", conf, e)
    if isinstance(data.get("escape_quotes"), bool):
        settings.escape_quotes = data["escape_quotes"]
    if isinstance(data.get("output_suffix"), str):
        settings.output_suffix = data["output_suffix"]
    if isinstance(data.get("preview_rows"), int) and data["preview_rows"] > 0:
        settings.preview_rows = data["preview_rows"]
    return settings


def ensure_workspace(base: Path | None = None) -> tuple[Paths, Settings]:
    root = Path(base or os.getcwd())
    input_dir = root / "cards-in"
    output_dir = root / "csv-out"
    local = root / "local"
    conf = local / "vcard-csv.conf"

    for d in (input_dir, output_dir, local):
        d.mkdir(parents=True, exist_ok=True)

    if not conf.exists():
        conf.write_text(DEFAULT_CONF, encoding="utf-8")

    return (
        Paths(root=root, input_dir=input_dir, output_dir=output_dir, local_dir=local, conf_file=conf),
        load_settings(conf),
    )
