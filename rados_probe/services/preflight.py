import logging
import shutil
import sys
from typing import Iterable, List, Optional

import psutil

from rados_probe.config import Settings, get_settings

logger = logging.getLogger(__name__)


class PreflightError(RuntimeError):
    """The host environment cannot run the probe."""


def _effective_uid() -> int:
    return psutil.Process().uids().effective


def _missing_tools(tools: Iterable[str]) -> List[str]:
    return [tool for tool in tools if shutil.which(tool) is None]


def _tools_to_check(settings: Settings) -> List[str]:
    # The configured rados binary is always checked, whatever required_tools says
    tools = [settings.rados_bin]
    for tool in settings.required_tools:
        if tool not in tools:
            tools.append(tool)
    return tools


def run_preflight(settings: Optional[Settings] = None) -> None:
    """
    Verify interpreter version, privilege level and required tools.

    Checks run in that order and the first failure raises PreflightError;
    nothing is retried.
    """
    settings = settings or get_settings()

    if sys.version_info[:2] < tuple(settings.min_python):
        wanted = ".".join(str(part) for part in settings.min_python)
        raise PreflightError(f"Python {wanted} or newer is required")

    if settings.require_root:
        euid = _effective_uid()
        if euid != 0:
            raise PreflightError(
                f"must be run as root (effective uid is {euid})"
            )

    tools = _tools_to_check(settings)
    missing = _missing_tools(tools)
    if missing:
        raise PreflightError(
            "required tools not found in PATH: " + ", ".join(missing)
        )

    logger.debug("Preflight passed, tools: %s", ", ".join(tools))
