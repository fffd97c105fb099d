"""
Export accumulated results to Excel (.xlsx) and XML.
"""

import re
from pathlib import Path
from typing import Dict, Optional, Sequence

import pandas as pd
from loguru import logger
from lxml import etree
from openpyxl.utils.exceptions import IllegalCharacterError

import src.config as cfg
from src.core.exceptions import EmptyExportError, ExportError
from src.models.business import FIELD_ORDER, BusinessRecord

# Free-text fields written as CDATA sections in the XML export.
CDATA_FIELDS = frozenset({"name", "address"})

_PATH_SEP_RE = re.compile(r"[\\/]+")


def _ensure_dir(path: Path) -> None:
    """Create parent directories if they don't exist."""
    path.parent.mkdir(parents=True, exist_ok=True)


def _require_records(data: Sequence[BusinessRecord], fmt: str) -> None:
    if not data:
        logger.warning("Nothing to export to {}", fmt.upper())
        raise EmptyExportError(fmt)


def build_file_stem(keyword: str, city: str) -> str:
    """``{keyword}_{city}_businesses`` with path separators neutralised."""
    parts = [_PATH_SEP_RE.sub("_", part.strip()) for part in (keyword, city)]
    return "_".join(parts + [cfg.FILE_SUFFIX])


def _cdata_or_text(value: str):
    # A CDATA section cannot contain its own terminator; lxml escapes plain text.
    if "]]>" in value:
        return value
    return etree.CDATA(value)


# ── Writers ──────────────────────────────────────────────────────────────────

def export_to_excel(data: Sequence[BusinessRecord], output_path: Path) -> Path:
    """
    Write records to a single-sheet workbook using pandas + openpyxl.

    Returns the resolved output path.
    """
    _require_records(data, "xlsx")
    _ensure_dir(output_path)
    df = pd.DataFrame(
        [item.model_dump() for item in data], columns=list(FIELD_ORDER)
    )
    try:
        df.to_excel(
            output_path,
            sheet_name=cfg.EXCEL_SHEET_NAME,
            index=False,
            engine="openpyxl",
        )
    except (OSError, ValueError, IllegalCharacterError) as exc:
        logger.error("Excel export failed: {}", exc)
        if output_path.is_file():
            output_path.unlink()
        raise ExportError(output_path, exc) from exc
    logger.info("Excel exported ({} rows)  ->  {}", len(df), output_path)
    return output_path


def export_to_xml(data: Sequence[BusinessRecord], output_path: Path) -> Path:
    """
    Write records as a UTF-8 XML document built with lxml.

    ``name`` and ``address`` go into CDATA sections; the remaining fields
    are written as plain element text.

    Returns the resolved output path.
    """
    _require_records(data, "xml")
    _ensure_dir(output_path)
    try:
        root = etree.Element(cfg.XML_ROOT_TAG)
        for item in data:
            node = etree.SubElement(root, cfg.XML_RECORD_TAG)
            values = item.model_dump()
            for field in FIELD_ORDER:
                child = etree.SubElement(node, field)
                value = str(values[field])
                child.text = _cdata_or_text(value) if field in CDATA_FIELDS else value
        etree.ElementTree(root).write(
            str(output_path),
            xml_declaration=True,
            encoding="UTF-8",
            pretty_print=True,
        )
    except (OSError, ValueError, etree.LxmlError) as exc:
        logger.error("XML export failed: {}", exc)
        if output_path.is_file():
            output_path.unlink()
        raise ExportError(output_path, exc) from exc
    logger.info("XML exported ({} records)  ->  {}", len(data), output_path)
    return output_path


# ── Named exports ────────────────────────────────────────────────────────────

def export_tabular(
    data: Sequence[BusinessRecord],
    keyword: str,
    city: str,
    output_dir: Optional[Path] = None,
) -> Path:
    """Export to ``{keyword}_{city}_businesses.xlsx`` in *output_dir*."""
    output_dir = output_dir or cfg.OUTPUT_DIR
    return export_to_excel(data, output_dir / f"{build_file_stem(keyword, city)}.xlsx")


def export_markup(
    data: Sequence[BusinessRecord],
    keyword: str,
    city: str,
    output_dir: Optional[Path] = None,
) -> Path:
    """Export to ``{keyword}_{city}_businesses.xml`` in *output_dir*."""
    output_dir = output_dir or cfg.OUTPUT_DIR
    return export_to_xml(data, output_dir / f"{build_file_stem(keyword, city)}.xml")


EXPORTERS = {
    "xlsx": export_tabular,
    "xml": export_markup,
}


def export_all(
    data: Sequence[BusinessRecord],
    keyword: str,
    city: str,
    output_dir: Optional[Path] = None,
) -> Dict[str, Path]:
    """
    Export to every supported format.

    Returns a dict mapping format name to output file path.
    """
    return {
        fmt: exporter(data, keyword, city, output_dir)
        for fmt, exporter in EXPORTERS.items()
    }
