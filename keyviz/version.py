from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

DISTRIBUTION = "keyviz"


class BuildInfo(NamedTuple):
    version: Optional[str]
    commit: Optional[str]
    dirty: bool


def _run_git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
        return out.decode().strip() or None
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None


def _installed_version() -> Optional[str]:
    try:
        return importlib.metadata.version(DISTRIBUTION)
    except importlib.metadata.PackageNotFoundError:
        return None


def _commit_from_checkout() -> tuple[Optional[str], bool]:
    here = Path(__file__).resolve().parent
    commit = _run_git(["rev-parse", "HEAD"], cwd=here)
    if commit is None:
        return None, False
    status = _run_git(["status", "--porcelain"], cwd=here)
    return commit, bool(status)


def _commit_from_build() -> Optional[str]:
    # Generated at build time by hatch build hook
    try:
        from . import _build_info  # type: ignore
    except ImportError:
        return None
    return getattr(_build_info, "COMMIT", None)


def get_build_info() -> BuildInfo:
    # Priority: live git checkout -> embedded build file
    commit, dirty = _commit_from_checkout()
    if commit is None:
        commit, dirty = _commit_from_build(), False
    return BuildInfo(version=_installed_version(), commit=commit, dirty=dirty)


def get_version_string() -> str:
    info = get_build_info()
    version = info.version or "unknown"
    if not info.commit:
        return f"{DISTRIBUTION} {version}"
    # Use short (7-character) git hashes
    dirty_suffix = "-dirty" if info.dirty else ""
    return f"{DISTRIBUTION} {version} ({info.commit[:7]}{dirty_suffix})"
