"""Persistent notebook store. Saves to ~/.blockflow/notebooks/{id}.json."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from blockflow.config import notebooks_dir as default_notebooks_dir
from blockflow.core import Result
from blockflow.notebook.meta import NotebookMeta

if TYPE_CHECKING:
    from blockflow.notebook.notebook import Notebook

logger = logging.getLogger("blockflow.store")


class NotebookStore:
    """Full-snapshot upserts keyed by notebook id.

    There is no delete: a record stays on disk until it is overwritten,
    including after the notebook's name is cleared.
    """

    def __init__(self, notebooks_dir: Path) -> None:
        self._notebooks_dir = notebooks_dir
        self._notebooks_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, notebook_id: str) -> Path:
        return self._notebooks_dir / f"{notebook_id}.json"

    def save_notebook(self, notebook: Notebook) -> None:
        self.save_record(notebook.meta.to_record())

    def save_record(self, record: dict[str, Any]) -> None:
        """Atomic write: write to .tmp, then rename."""
        path = self.path_for(record["id"])
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(json.dumps(record, indent=2) + "\n")
        tmp_path.replace(path)
        logger.info("Saved notebook %s (%d blocks)", record["id"], len(record["blocks"]))

    def load(self, notebook_id: str) -> Result[NotebookMeta]:
        """Load a notebook record from disk by ID."""
        result: Result[NotebookMeta] = Result()
        path = self.path_for(notebook_id)
        if not path.exists():
            result.error("NOT_FOUND", f"Notebook {notebook_id} not found")
            return result
        try:
            result.data = NotebookMeta.from_record(json.loads(path.read_text()))
        except (json.JSONDecodeError, ValidationError) as e:
            result.error("LOAD_ERROR", f"Failed to load notebook: {e}")
            return result
        if result.data.is_deleted:
            result.warning(
                "DELETED",
                f"Notebook {notebook_id} is marked deleted",
                hint="It is hidden from listings until restored",
            )
        return result

    def list_notebooks(self, *, include_deleted: bool = False) -> list[NotebookMeta]:
        """All readable records, sorted by name then id."""
        found: list[NotebookMeta] = []
        for path in self._notebooks_dir.glob("nb_*.json"):
            try:
                meta = NotebookMeta.from_record(json.loads(path.read_text()))
            except (json.JSONDecodeError, ValidationError):
                logger.warning("Skipping corrupt notebook: %s", path)
                continue
            if meta.is_deleted and not include_deleted:
                continue
            found.append(meta)
        return sorted(found, key=lambda m: (m.name or "", m.id))


class MemoryStore:
    """In-process store holding the latest snapshot per notebook."""

    def __init__(self) -> None:
        self.records: dict[str, dict[str, Any]] = {}
        self.save_count = 0

    def save_notebook(self, notebook: Notebook) -> None:
        record = notebook.meta.to_record()
        self.records[record["id"]] = record
        self.save_count += 1

    def load(self, notebook_id: str) -> Result[NotebookMeta]:
        result: Result[NotebookMeta] = Result()
        record = self.records.get(notebook_id)
        if record is None:
            result.error("NOT_FOUND", f"Notebook {notebook_id} not found")
        else:
            result.data = NotebookMeta.from_record(record)
        return result


_store: NotebookStore | None = None


def get_store(notebooks_dir: Path | None = None) -> NotebookStore:
    """Get the module-level singleton store."""
    global _store  # noqa: PLW0603
    if _store is None:
        if notebooks_dir is None:
            notebooks_dir = default_notebooks_dir()
        _store = NotebookStore(notebooks_dir)
    return _store


def reset_store() -> None:
    """Reset the singleton (for testing)."""
    global _store  # noqa: PLW0603
    _store = None
