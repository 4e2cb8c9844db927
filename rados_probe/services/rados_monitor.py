import logging
import re
import subprocess
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import List, Optional, Sequence

from rados_probe.config import Settings, get_settings
from rados_probe.models.rados import (
    LatencyField,
    LatencySample,
    ProbeResult,
    Status,
    Thresholds,
)
from rados_probe.services import report

logger = logging.getLogger(__name__)

# Matches e.g. "Average Latency(s):     0.0123" or "Max latency(s):  0.05";
# the label sits in the second column, the value in the third.
_LATENCY_PATTERN = re.compile(
    r"^\s*\S+\s+latency\(s\):\s+(\S+)", re.IGNORECASE
)

# Seconds the timeout wrapper waits after SIGTERM before sending SIGKILL
_KILL_GRACE_SECONDS = 5


class BenchParseError(RuntimeError):
    """rados bench output did not contain the expected latency lines."""


def build_bench_command(pool: str, settings: Settings) -> List[str]:
    return [
        "timeout",
        "-k",
        str(_KILL_GRACE_SECONDS),
        str(settings.timeout_seconds),
        settings.rados_bin,
        "-p",
        pool,
        "bench",
        str(settings.bench_seconds),
        "write",
        "-t",
        str(settings.bench_threads),
        "-b",
        str(settings.object_size),
    ]


def _run_bench(pool: str, settings: Settings) -> str:
    """
    Run `rados bench` in write mode against a pool and return its stdout.

    stderr is discarded. A run that cannot be started or that outlives the
    timeout yields an empty string instead of raising, so that the caller
    reports it as unparseable output.
    """
    command = build_bench_command(pool, settings)
    logger.info("Running %s", " ".join(command))

    try:
        result = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            errors="replace",
            # backstop for a hung wrapper; its own -k kill fires before this
            timeout=settings.timeout_seconds + 2 * _KILL_GRACE_SECONDS,
            check=False,  # the exit status is judged by what the output contains
        )
    except FileNotFoundError:
        logger.error("timeout wrapper not found; cannot run rados bench")
        return ""
    except subprocess.TimeoutExpired:
        # subprocess.run has already killed and reaped the child
        logger.error(
            "rados bench on pool %s did not finish within %ss",
            pool,
            settings.timeout_seconds,
        )
        return ""

    if result.returncode != 0:
        logger.warning(
            "rados bench on pool %s exited with return code %s",
            pool,
            result.returncode,
        )
    return result.stdout or ""


def _seconds_to_ms(raw: str) -> int:
    # Decimal keeps 0.1235 exact so half-up rounding gives 124, not 123
    millis = Decimal(raw) * 1000
    return int(millis.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def extract_latencies(output: str) -> List[int]:
    """
    Return every latency(s) value in the bench output as whole milliseconds.

    Values keep the order of their lines. A latency(s) line whose value is
    not a finite number raises BenchParseError, since dropping it would shift
    the positions of the remaining values.
    """
    values: List[int] = []
    for line in output.splitlines():
        match = _LATENCY_PATTERN.match(line)
        if not match:
            continue
        try:
            values.append(_seconds_to_ms(match.group(1)))
        except (InvalidOperation, ValueError, OverflowError) as exc:
            raise BenchParseError(
                f"non-numeric latency value in line {line.strip()!r}"
            ) from exc
    return values


def sample_from_values(values: Sequence[int]) -> LatencySample:
    if len(values) != len(LatencyField):
        raise BenchParseError(
            f"expected {len(LatencyField)} latency lines, found {len(values)}"
        )

    return LatencySample(
        average_ms=values[LatencyField.AVERAGE],
        stddev_ms=values[LatencyField.STDDEV],
        max_ms=values[LatencyField.MAX],
        min_ms=values[LatencyField.MIN],
    )


def evaluate(sample: LatencySample, thresholds: Thresholds) -> Status:
    if thresholds.critical is not None and sample.max_ms > thresholds.critical:
        return Status.CRITICAL
    if thresholds.warning is not None and sample.max_ms > thresholds.warning:
        return Status.WARNING
    return Status.OK


def build_result(
    pool: str, output: str, thresholds: Optional[Thresholds] = None
) -> ProbeResult:
    """
    Turn captured rados bench output into a ProbeResult.

    Output without a usable set of latency figures is CRITICAL regardless of
    the thresholds and carries no performance data.
    """
    thresholds = thresholds or Thresholds()

    try:
        sample = sample_from_values(extract_latencies(output))
    except (BenchParseError, ValueError) as exc:
        logger.error("Unable to parse rados bench output for pool %s: %s", pool, exc)
        return ProbeResult(
            pool=pool,
            status=Status.CRITICAL,
            sample=None,
            summary=report.PARSE_FAILURE_MESSAGE,
            perfdata=None,
        )

    status = evaluate(sample, thresholds)
    return ProbeResult(
        pool=pool,
        status=status,
        sample=sample,
        summary=report.format_summary(status, pool, sample),
        perfdata=report.format_perfdata(sample),
    )


def get_rados_latency(
    pool: str,
    thresholds: Optional[Thresholds] = None,
    settings: Optional[Settings] = None,
) -> ProbeResult:
    """
    Benchmark write latency on a pool and evaluate it against the thresholds.

    Bench parameters (duration, threads, object size, timeout) come from
    Settings.
    """
    settings = settings or get_settings()
    output = _run_bench(pool, settings)
    result = build_result(pool, output, thresholds)
    logger.info("Pool %s: %s", pool, result.status.name)
    return result
