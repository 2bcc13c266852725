"""On-disk archive of persisted route plans."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path

from ..config import settings

logger = logging.getLogger(__name__)

SUMMARY_FILE = "summary.json"
ROUTES_CSV_FILE = "routes.csv"
ROUTES_GEOJSON_FILE = "routes.geojson"


class RoutePlanStore:
    """Keeps one directory per saved plan under ``<data_root>/plans``.

    Directory names start with the UTC save time, so a plain sort lists
    plans oldest first. A short random suffix keeps plans saved within the
    same second apart.
    """

    def __init__(self, root: Path | None = None) -> None:
        self.plans_root = (root or settings.data_root).resolve() / "plans"

    def _new_plan_directory(self) -> Path:
        plan_id = f"{datetime.now(timezone.utc):%Y%m%dT%H%M%SZ}_{uuid.uuid4().hex[:6]}"
        path = self.plans_root / plan_id
        path.mkdir(parents=True)
        return path

    def save(self, summary: dict, routes_csv: str, geojson: dict) -> Path:
        plan_dir = self._new_plan_directory()
        (plan_dir / SUMMARY_FILE).write_text(json.dumps(summary, ensure_ascii=False, indent=2), encoding="utf-8")
        # the csv module already emits \r\n row endings
        with (plan_dir / ROUTES_CSV_FILE).open("w", encoding="utf-8", newline="") as handle:
            handle.write(routes_csv)
        (plan_dir / ROUTES_GEOJSON_FILE).write_text(json.dumps(geojson, ensure_ascii=False), encoding="utf-8")
        logger.info(f"Saved route plan with {len(geojson.get('features', []))} features to {plan_dir}")
        return plan_dir
