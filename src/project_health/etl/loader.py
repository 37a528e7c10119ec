import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, List

from pydantic import ValidationError

from project_health.domain.models import HealthSnapshot
from project_health.exceptions import DataSourceError

logger = logging.getLogger(__name__)


def _unwrap(payload: Any, file_path: Path) -> List[Any]:
    # Either a bare list or an API envelope: {"data": [...]} / {"success": true, "data": [...]}
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping) and isinstance(payload.get("data"), list):
        return payload["data"]
    if isinstance(payload, Mapping) and payload.get("data") is None and "data" in payload:
        return []
    raise DataSourceError(f"Unsupported snapshot payload in {file_path}: expected a list or a 'data' envelope")


def load_snapshots(file_path: Path) -> List[HealthSnapshot]:
    """
    Loads health snapshots from a JSON file.
    Skips corrupt records and logs them; the file order is preserved.
    """
    file_path = Path(file_path)
    logger.debug(f"Loading snapshots from {file_path}")

    if not file_path.exists():
        logger.error(f"Input file not found: {file_path}")
        raise DataSourceError(f"Input file not found: {file_path}")

    try:
        with open(file_path, mode="r", encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise DataSourceError(f"Invalid JSON in {file_path}: {e}")

    snapshots: List[HealthSnapshot] = []
    for row_num, record in enumerate(_unwrap(payload, file_path), start=1):
        if not isinstance(record, Mapping):
            logger.warning(f"Skipping record {row_num}: not an object. Data: {record!r}")
            continue
        try:
            snapshots.append(HealthSnapshot(**record))
        except ValidationError as e:
            logger.warning(f"Skipping corrupt record {row_num}: {e}. Data: {record}")

    return snapshots
