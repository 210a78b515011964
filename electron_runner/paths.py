"""Filesystem locations used by the installer."""

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class Paths(BaseModel):
    """Where archives are kept and where the active version is unpacked."""

    model_config = ConfigDict(frozen=True)

    electron_downloads: Path
    electron_install: Path

    @classmethod
    def default(cls) -> "Paths":
        home = os.environ.get("ELECTRON_RUNNER_HOME")
        base = Path(home) if home else Path.home() / ".local" / "share" / "electron_runner"
        return cls(
            electron_downloads=base / "electron" / "zips",
            electron_install=base / "electron" / "current",
        )
