"""
JSON Ingestor — Loads a sales dataset from disk or an uploaded file.

Accepted sources:
    - path to one JSON file holding purchase_records / products / sellers
    - path to a directory holding sellers.json, products.json and
      purchase_records.json (each a JSON array)
    - an open text or binary file object

Structural validation stays in the analyzer; this module only reads JSON.
"""

from __future__ import annotations

import json
import logging
import os
from typing import IO, Any, Union

from .core.validation import REQUIRED_COLLECTIONS


logger = logging.getLogger(__name__)


class JsonIngestError(ValueError):
    """The source could not be read or is not valid JSON."""


class SalesDataIngestor:
    """
    Reads raw sales data into a plain dictionary.

    Usage:
        ingestor = SalesDataIngestor()
        data = ingestor.ingest("data/sales.json")
        ingestor.file_info  → [{"filename": "sales.json", "records": {...}}]
    """

    def __init__(self):
        self._file_info: list[dict] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def ingest(self, source: Union[str, os.PathLike, IO]) -> dict:
        """
        Load *source* and return the raw dataset mapping.

        Raises:
            JsonIngestError: unreadable source or invalid JSON.
        """
        self._file_info = []

        if isinstance(source, (str, os.PathLike)):
            path = os.fspath(source)
            if os.path.isdir(path):
                return self._ingest_directory(path)
            return self._ingest_file(path)

        name = getattr(source, "name", "upload.json")
        data = self._parse(source.read(), name)
        self._record(name, data)
        return data

    @property
    def file_info(self) -> list[dict]:
        return self._file_info

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _ingest_file(self, path: str) -> Any:
        fname = os.path.basename(path)
        try:
            with open(path, "rb") as fh:
                raw = fh.read()
        except OSError as exc:
            raise JsonIngestError(f"Cannot read {path}: {exc}") from exc

        data = self._parse(raw, fname)
        self._record(fname, data)
        return data

    def _ingest_directory(self, path: str) -> dict:
        data: dict[str, Any] = {}
        for key in REQUIRED_COLLECTIONS:
            fpath = os.path.join(path, f"{key}.json")
            if not os.path.exists(fpath):
                logger.warning("Missing %s in %s", os.path.basename(fpath), path)
                continue
            data[key] = self._ingest_file(fpath)

        if not data:
            raise JsonIngestError(f"No dataset files found in {path}")
        return data

    @staticmethod
    def _parse(raw: Union[str, bytes], name: str) -> Any:
        try:
            return json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise JsonIngestError(f"{name} is not valid JSON: {exc}") from exc

    def _record(self, fname: str, data: Any) -> None:
        if isinstance(data, dict):
            counts = {
                k: len(v) for k, v in data.items()
                if k in REQUIRED_COLLECTIONS and isinstance(v, list)
            }
        elif isinstance(data, list):
            counts = {"rows": len(data)}
        else:
            counts = {}
        self._file_info.append({"filename": fname, "records": counts})
        logger.info("Loaded %s %s", fname, counts)
