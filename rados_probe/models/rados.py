from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, Field


class Status(IntEnum):
    """Plugin states; the value is the process exit code."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


class LatencyField(IntEnum):
    """Position of each statistic among the latency(s) lines of rados bench.

    rados bench prints exactly four such lines, always in this order. The
    output format of the rados client is the contract here; if a Ceph
    release changes it, the probe reports a parse failure.
    """

    AVERAGE = 0
    STDDEV = 1
    MAX = 2
    MIN = 3


class Thresholds(BaseModel):
    """Optional max-latency limits in milliseconds."""

    warning: Optional[int] = Field(
        None,
        description="Max latency above which the probe reports WARNING",
    )
    critical: Optional[int] = Field(
        None,
        description="Max latency above which the probe reports CRITICAL",
    )


class LatencySample(BaseModel):
    """Write latency statistics of one rados bench run, in milliseconds."""

    average_ms: int = Field(..., ge=0, description="Average latency")
    stddev_ms: int = Field(..., ge=0, description="Standard deviation of the latency")
    max_ms: int = Field(..., ge=0, description="Maximum latency")
    min_ms: int = Field(..., ge=0, description="Minimum latency")


class ProbeResult(BaseModel):
    """Outcome of a single probe run against one pool."""

    pool: str = Field(..., min_length=1, description="Name of the benchmarked pool")
    status: Status = Field(..., description="Resulting plugin state")
    sample: Optional[LatencySample] = Field(
        None,
        description="Parsed latency figures; absent if the bench output could not be parsed.",
    )
    summary: str = Field(..., description="Human readable status line")
    perfdata: Optional[str] = Field(
        None,
        description="Performance data in the Nagios plugin format, if a sample exists.",
    )

    def render(self) -> str:
        if self.perfdata:
            return f"{self.summary} | {self.perfdata}"
        return self.summary
