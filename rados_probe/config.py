from typing import Tuple
from pydantic import BaseModel, ConfigDict, Field
import os
from functools import lru_cache


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off")


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    # rados bench parameters
    bench_seconds: int = Field(
        default=10,
        ge=1,
        description="Duration of the rados bench write run in seconds",
    )
    bench_threads: int = Field(
        default=1,
        ge=1,
        description="Number of concurrent operations passed to rados bench (-t)",
    )
    object_size: int = Field(
        default=64 * 1024,
        ge=1,
        description="Object size in bytes passed to rados bench (-b)",
    )
    timeout_seconds: int = Field(
        default=30,
        ge=1,
        description="Overall timeout for the benchmark, enforced by the timeout wrapper",
    )
    rados_bin: str = Field(
        default="rados",
        description="Name or path of the rados client binary",
    )

    # Preflight
    min_python: Tuple[int, int] = Field(
        default=(3, 8),
        description="Minimum interpreter version required by the probe",
    )
    require_root: bool = Field(
        default=True,
        description="Refuse to run unless the effective uid is 0 (the rados client reads the admin keyring)",
    )
    required_tools: Tuple[str, ...] = Field(
        default=("timeout",),
        description="Executables besides rados_bin that must resolve on PATH before the probe runs",
    )

    log_level: str = Field(
        default="WARNING",
        description="Level for the stderr log handler, e.g. DEBUG or INFO",
    )

    @classmethod
    def from_env(cls) -> "Settings":
        raw_tools = os.getenv("RADOS_PROBE_REQUIRED_TOOLS", "")
        required_tools = tuple(t.strip() for t in raw_tools.split(",") if t.strip()) or None

        values = {
            "bench_seconds": os.getenv("RADOS_BENCH_SECONDS"),
            "bench_threads": os.getenv("RADOS_BENCH_THREADS"),
            "object_size": os.getenv("RADOS_BENCH_OBJECT_SIZE"),
            "timeout_seconds": os.getenv("RADOS_PROBE_TIMEOUT"),
            "rados_bin": os.getenv("RADOS_BIN"),
            "required_tools": required_tools,
            "log_level": os.getenv("RADOS_PROBE_LOG_LEVEL"),
        }
        # Unset variables fall back to the field defaults
        values = {key: value for key, value in values.items() if value}

        return cls(
            require_root=_env_bool("RADOS_PROBE_REQUIRE_ROOT", True),
            **values,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
