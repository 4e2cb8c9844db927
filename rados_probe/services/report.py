"""Nagios/Icinga plugin formatting for rados latency results."""

from rados_probe.models.rados import LatencySample, Status

PARSE_FAILURE_MESSAGE = "CRITICAL: Unable to parse rados bench result"


def format_summary(status: Status, pool: str, sample: LatencySample) -> str:
    return (
        f"{status.name}: pool {pool} write latency "
        f"avg {sample.average_ms} ms, stddev {sample.stddev_ms} ms, "
        f"max {sample.max_ms} ms, min {sample.min_ms} ms"
    )


def format_perfdata(sample: LatencySample) -> str:
    return " ".join(
        [
            f"'average_latency'={sample.average_ms}ms",
            f"'stddev_latency'={sample.stddev_ms}ms",
            f"'max_latency'={sample.max_ms}ms",
            f"'min_latency'={sample.min_ms}ms",
        ]
    )
