"""
Customer ledger import.

The ledger is an externally maintained export (name/phone columns) used
only to cross-reference phone numbers during search. It is supplementary:
any failure while fetching or decoding yields an empty ledger.
"""
import logging
import re
from dataclasses import dataclass
from pathlib import Path

import requests

from salon.config import settings

logger = logging.getLogger("salon.services.ledger")

# Browsers decode the "euc-kr" label as windows-949, a superset of EUC-KR
LEGACY_ENCODING = "cp949"
BOM = "\ufeff"


@dataclass(frozen=True)
class CustomerRecord:
    name: str
    phone: str


def decode_ledger(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        logger.info("Ledger is not valid UTF-8, falling back to CP949")
        return raw.decode(LEGACY_ENCODING, errors="replace")


def detect_delimiter(text: str) -> str:
    # Detected once for the whole file, never per line
    if "\t" in text:
        return "\t"
    if "," in text:
        return ","
    return " "


def _clean_field(value: str) -> str:
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def parse_ledger(raw: bytes) -> list[CustomerRecord]:
    """
    Header line plus data lines; the first two columns are Name and Phone,
    trailing columns are ignored and short lines are skipped.
    """
    try:
        text = decode_ledger(raw)
        if text.startswith(BOM):
            text = text[1:]
        text = text.strip()

        lines = [line for line in re.split(r"\r?\n", text) if line.strip()]
        if len(lines) < 2:
            return []

        delimiter = detect_delimiter(text)
        records = []
        for line in lines[1:]:
            parts = [_clean_field(part) for part in line.split(delimiter)]
            if len(parts) >= 2:
                records.append(CustomerRecord(name=parts[0], phone=parts[1]))
        return records
    except Exception as e:
        logger.warning(f"Could not parse ledger: {e}")
        return []


def fetch_ledger_bytes(source: str, timeout: int = 10) -> bytes | None:
    if source.startswith(("http://", "https://")):
        response = requests.get(source, timeout=timeout)
        if not response.ok:
            logger.warning(f"Ledger fetch failed: HTTP {response.status_code}")
            return None
        return response.content
    return Path(source).read_bytes()


def load_ledger(source: str, timeout: int = 10) -> list[CustomerRecord]:
    """Reads the ledger from a local path or an http(s) URL."""
    try:
        raw = fetch_ledger_bytes(source, timeout)
    except (requests.exceptions.RequestException, OSError) as e:
        logger.warning(f"Ledger {source} unavailable: {e}")
        return []
    if raw is None:
        return []
    records = parse_ledger(raw)
    logger.info(f"Ledger loaded: {len(records)} customer rows")
    return records


def get_ledger() -> list[CustomerRecord]:
    return load_ledger(settings.ledger_source, settings.ledger_timeout_seconds)
