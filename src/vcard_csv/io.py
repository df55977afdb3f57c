from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

VCF_SUFFIX = ".vcf"
CSV_SUFFIX = ".csv"
CSV_CONTENT_TYPE = "text/csv"


def is_vcf(path: Path) -> bool:
    return path.suffix.lower() == VCF_SUFFIX


def read_vcf_file(path: Path) -> str:
    """Return the decoded text of a .vcf file.

    Undecodable bytes are replaced rather than rejected; a leading BOM is
    dropped so it never ends up glued to the first BEGIN:VCARD.
    """
    if not is_vcf(path):
        raise ValueError(f"Invalid file type: {path.name} (expected a {VCF_SUFFIX} file)")
    text = path.read_text(encoding="utf-8-sig", errors="replace")
    logger.debug("Read %d character(s) from %s", len(text), path)
    return text


def write_csv_file(csv_text: str, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps the "\n" row separators as-is on every platform
    with open(path, "w", encoding="utf-8", newline="") as fh:
        fh.write(csv_text)
    logger.info("Wrote %s", path)
    return path


def default_output_path(source: Path, out_dir: Path | None = None, suffix: str = "_contacts") -> Path:
    """contacts.vcf -> contacts_contacts.csv, next to the source unless out_dir is given."""
    stem = source.name[: -len(VCF_SUFFIX)] if is_vcf(source) else source.stem
    return (out_dir or source.parent) / f"{stem}{suffix}{CSV_SUFFIX}"


def collect_sources(source_dir: Path) -> list[Path]:
    """Return all .vcf files found directly inside source_dir, sorted by name."""
    if not source_dir.is_dir():
        return []
    return sorted(p for p in source_dir.iterdir() if p.is_file() and is_vcf(p))
