"""Global configuration management (~/.lcvirtual.global)."""

import json
import pickle
from pathlib import Path
from typing import Optional
from dataclasses import dataclass


SITES = {
    "us": "https://leetcode.com",
    "cn": "https://leetcode.cn",
}


@dataclass
class GlobalConfig:
    """
    Global configuration storing the account name and judge site.
    Stored at ~/.lcvirtual.global
    Session cookies are kept separately in ~/.lcvirtual.cookies.
    """

    user: str = ""
    site: str = "us"
    poll_interval: float = 1.0

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "GlobalConfig":
        """Load global config from file."""
        if path is None:
            path = Path.home() / ".lcvirtual.global"

        if not path.exists():
            return cls()

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
                return cls(
                    user=data.get("user", ""),
                    site=data.get("site", "us"),
                    poll_interval=float(data.get("poll_interval", 1.0)),
                )
        except (json.JSONDecodeError, IOError, ValueError):
            return cls()

    def save(self, path: Optional[Path] = None) -> None:
        """Save global config to file."""
        if path is None:
            path = Path.home() / ".lcvirtual.global"

        data = {
            "user": self.user,
            "site": self.site,
            "poll_interval": self.poll_interval,
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    @property
    def base_url(self) -> str:
        """Root URL of the configured judge site."""
        return SITES.get(self.site, SITES["us"])

    @staticmethod
    def save_cookies(cookies, path: Optional[Path] = None) -> None:
        """Save cookies using pickle."""
        if path is None:
            path = Path.home() / ".lcvirtual.cookies"

        with open(path, "wb") as f:
            pickle.dump(cookies, f)

    @staticmethod
    def load_cookies(path: Optional[Path] = None):
        """Load cookies using pickle."""
        if path is None:
            path = Path.home() / ".lcvirtual.cookies"

        if not path.exists():
            return None

        try:
            with open(path, "rb") as f:
                return pickle.load(f)
        except (FileNotFoundError, pickle.UnpicklingError, EOFError):
            return None
