"""Platform-specific discovery of the RimWorld mods directory.

Each supported platform gets one PathResolver implementation; select_resolver() picks
the right one once at startup so the rest of rimpub stays platform-agnostic.
"""

import logging
import os
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

RIMWORLD_PATH = Path("steamapps", "common", "RimWorld")
MODS_DIR_NAME = "Mods"


class PathResolver(ABC):
    """Locates the Steam installation and, from it, the RimWorld mods directory."""

    @abstractmethod
    def steam_roots(self) -> List[Path]:
        """Return candidate Steam installation directories, most likely first."""
        pass

    def find_mods_dir(self) -> Optional[Path]:
        """Return the first existing ``<steam>/steamapps/common/RimWorld/Mods``, or None.

        Never raises; lookup failures are logged.
        """
        try:
            roots = self.steam_roots()
        except OSError as e:
            logger.warning("Failed to read Steam install path: %s", e)
            return None

        for root in roots:
            candidate = root / RIMWORLD_PATH / MODS_DIR_NAME
            if candidate.is_dir():
                logger.debug("Found mods directory at %s", candidate)
                return candidate.resolve()
        logger.debug("No RimWorld mods directory found under %s", [str(r) for r in roots])
        return None


class WindowsPathResolver(PathResolver):
    """Reads the Steam path from ``HKCU\\Software\\Valve\\Steam``."""

    def steam_roots(self) -> List[Path]:
        import winreg  # type: ignore

        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, r"Software\Valve\Steam") as key:
            steam_path, _ = winreg.QueryValueEx(key, "SteamPath")
        return [Path(steam_path)]


class LinuxPathResolver(PathResolver):
    def steam_roots(self) -> List[Path]:
        home = Path.home()
        data_home = Path(os.environ.get("XDG_DATA_HOME") or home / ".local" / "share")
        return [home / ".steam" / "steam", data_home / "Steam"]


class MacPathResolver(PathResolver):
    def steam_roots(self) -> List[Path]:
        return [Path.home() / "Library" / "Application Support" / "Steam"]


class NullPathResolver(PathResolver):
    """Used on platforms without Steam auto-detection."""

    def steam_roots(self) -> List[Path]:
        return []


def select_resolver(platform: Optional[str] = None) -> PathResolver:
    """Pick the resolver for a ``sys.platform`` value (defaults to the running one)."""
    platform = platform or sys.platform
    if platform.startswith("win"):
        return WindowsPathResolver()
    if platform == "darwin":
        return MacPathResolver()
    if platform.startswith("linux"):
        return LinuxPathResolver()
    return NullPathResolver()
