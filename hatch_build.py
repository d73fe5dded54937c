"""Custom build hook for Hatchling to embed the git commit."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

from hatchling.builders.hooks.plugin.interface import BuildHookInterface

PACKAGE = "keyviz"


class CustomBuildHook(BuildHookInterface):
    """Writes keyviz/_build_info.py so installed copies know their commit."""

    def initialize(self, version: str, build_data: dict[str, Any]) -> None:
        target = Path(self.root) / PACKAGE / "_build_info.py"
        commit = self._run_git(["rev-parse", "HEAD"])
        target.write_text(
            "# Auto-generated at build time.\n"
            f"COMMIT = {commit!r}\n",
            encoding="utf-8",
        )
        build_data.setdefault("artifacts", []).append(f"{PACKAGE}/_build_info.py")

    def _run_git(self, args: list[str]) -> str | None:
        try:
            out = subprocess.check_output(["git", *args], cwd=self.root, stderr=subprocess.DEVNULL)
            return out.decode().strip() or None
        except (subprocess.CalledProcessError, FileNotFoundError, OSError):
            # Build should not fail just because git is unavailable
            return None
