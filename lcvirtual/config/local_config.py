"""Local configuration management (.lcvirtual.local)."""

import json
from pathlib import Path
from typing import Optional
from dataclasses import dataclass


@dataclass
class LocalConfig:
    """
    Local configuration for a solutions directory.
    Stored at .lcvirtual.local in project directory.
    Stores the default language and where generated code goes.
    """

    lang: str = "cpp"
    outdir: str = "."

    @classmethod
    def load(cls, path: Optional[Path] = None) -> Optional["LocalConfig"]:
        """
        Load local config from file.
        If path is not specified, searches upward from current directory.
        """
        if path is None:
            path = cls.find_config()

        if path is None or not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
                return cls(
                    lang=data.get("lang", "cpp"),
                    outdir=data.get("outdir", "."),
                )
        except (json.JSONDecodeError, IOError, TypeError, AttributeError):
            return None

    def save(self, path: Optional[Path] = None) -> None:
        """Save local config to file."""
        if path is None:
            path = Path.cwd() / ".lcvirtual.local"

        data = {"lang": self.lang, "outdir": self.outdir}

        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    @staticmethod
    def find_config() -> Optional[Path]:
        """
        Search for .lcvirtual.local starting from current directory,
        walking up to root.
        """
        current = Path.cwd()

        while True:
            config_path = current / ".lcvirtual.local"
            if config_path.exists():
                return config_path

            # Check if we've reached the root
            if current == current.parent:
                return None

            current = current.parent
