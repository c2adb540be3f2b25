"""Local progress cache (~/.lcvirtual.progress)."""

import datetime
import json
from pathlib import Path
from typing import Any, Dict, Optional

from ..client.models import Problem


class ProgressTracker:
    """
    Persists per-problem state and per-day statistics.
    Every update rewrites the JSON file.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = path or Path.home() / ".lcvirtual.progress"
        self.data = self._load()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {"problems": {}, "stats": {}}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError):
            return {"problems": {}, "stats": {}}

        data.setdefault("problems", {})
        data.setdefault("stats", {})
        return data

    def _save(self) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self.data, f, indent=2, ensure_ascii=False)

    def state_of(self, fid: str) -> Optional[str]:
        return self.data["problems"].get(str(fid), {}).get("state")

    def update_problem(self, problem: Problem, state: str) -> None:
        """Record the latest judge outcome of ``problem``."""
        self.data["problems"].setdefault(str(problem.fid), {})["state"] = state
        self._save()

    def update_stat(self, name: str, value: Any) -> None:
        """Bump today's counter ``name``, or add ``value`` to a ``.set`` stat."""
        today = datetime.date.today().isoformat()
        day = self.data["stats"].setdefault(today, {})

        if name.endswith(".set"):
            items = day.setdefault(name, [])
            if value not in items:
                items.append(value)
        else:
            day[name] = day.get(name, 0) + value
        self._save()

    def stats(self) -> Dict[str, Dict[str, Any]]:
        """Per-day statistics, oldest first."""
        return dict(sorted(self.data["stats"].items()))
