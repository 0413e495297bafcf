"""Flat-file skill library — one JSON document per skill."""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from pathlib import Path

import pydantic

from skillbuilder.errors import NotFoundError, StorageError
from skillbuilder.schemas.skill import SkillRecord
from skillbuilder.storage.base import SkillStore

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"^[A-Za-z0-9_\-]+$")


class FileSkillStore(SkillStore):
    """Stores ``<library_dir>/<id>.json``. No locking: last write wins."""

    def __init__(self, library_dir: Path) -> None:
        self.library_dir = Path(library_dir)

    def _path(self, skill_id: str) -> Path:
        # Ids become file names, so anything that isn't a bare token can't exist.
        if not _SAFE_ID.match(skill_id):
            raise NotFoundError()
        return self.library_dir / f"{skill_id}.json"

    def _read(self, path: Path) -> SkillRecord:
        try:
            return SkillRecord.model_validate_json(path.read_text(encoding="utf-8"))
        except OSError as exc:
            logger.error("Failed to read %s: %s", path, exc)
            raise StorageError("Failed to load skill.") from exc
        except pydantic.ValidationError as exc:
            logger.error("Corrupt skill record %s: %s", path, exc)
            raise StorageError("Failed to load skill.") from exc

    async def put(self, record: SkillRecord, *, create: bool = False) -> None:
        path = self._path(record.id)
        payload = json.dumps(record.to_json_dict(), indent=2)
        try:
            self.library_dir.mkdir(parents=True, exist_ok=True)
            if create and path.exists():
                raise StorageError("Skill id collision. Please try again.")
            # Write beside the target then rename, so readers never see half a record.
            fd, tmp_name = tempfile.mkstemp(dir=self.library_dir, prefix=".tmp-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            logger.error("Failed to write %s: %s", path, exc)
            raise StorageError() from exc

    async def get(self, skill_id: str) -> SkillRecord:
        path = self._path(skill_id)
        if not path.is_file():
            raise NotFoundError()
        return self._read(path)

    async def list(self) -> list[SkillRecord]:
        if not self.library_dir.exists():
            return []
        try:
            paths = [p for p in self.library_dir.iterdir() if p.suffix == ".json" and not p.name.startswith(".")]
        except OSError as exc:
            logger.error("Failed to scan %s: %s", self.library_dir, exc)
            raise StorageError("Failed to load skills.") from exc

        records = [self._read(p) for p in paths]
        records.sort(key=lambda r: r.created_at)
        return records
