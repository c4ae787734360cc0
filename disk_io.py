"""Per-device disk I/O counter snapshots and their deltas.

psutil exposes nine of the eleven counters reported by the benchmark. On
Linux the remaining two, I/Os currently in progress and weighted time spent
doing I/Os, are read from /proc/diskstats. Elsewhere they stay at zero.
"""

import logging
import os
from dataclasses import asdict, dataclass, fields

import psutil

logger = logging.getLogger(__name__)

PROC_DISKSTATS = "/proc/diskstats"

# Fields that are a point-in-time gauge rather than a cumulative counter
GAUGE_FIELDS = frozenset({"iops_in_progress"})


@dataclass(frozen=True)
class DiskCounters:
    read_count: int = 0
    merged_read_count: int = 0
    write_count: int = 0
    merged_write_count: int = 0
    read_bytes: int = 0
    write_bytes: int = 0
    read_time: int = 0
    write_time: int = 0
    iops_in_progress: int = 0
    io_time: int = 0
    weighted_io: int = 0

    def as_dict(self):
        return asdict(self)


# Report names, in report order
METRIC_NAMES = {
    "read_count": "ReadCount",
    "merged_read_count": "MergedReadCount",
    "write_count": "WriteCount",
    "merged_write_count": "MergedWriteCount",
    "read_bytes": "ReadBytes",
    "write_bytes": "WriteBytes",
    "read_time": "ReadTime",
    "write_time": "WriteTime",
    "iops_in_progress": "IopsInProgress",
    "io_time": "IoTime",
    "weighted_io": "WeightedIO",
}


def _read_proc_diskstats(path=PROC_DISKSTATS):
    """Map device name to (iops_in_progress, weighted_io) from /proc/diskstats."""
    extra = {}
    if not os.path.exists(path):
        return extra
    with open(path) as f:
        for line in f:
            parts = line.split()
            if len(parts) < 14:
                continue
            extra[parts[2]] = (int(parts[11]), int(parts[13]))
    return extra


def _from_psutil(counters, extra=(0, 0)):
    return DiskCounters(
        read_count=counters.read_count,
        merged_read_count=getattr(counters, "read_merged_count", 0),
        write_count=counters.write_count,
        merged_write_count=getattr(counters, "write_merged_count", 0),
        read_bytes=counters.read_bytes,
        write_bytes=counters.write_bytes,
        read_time=getattr(counters, "read_time", 0),
        write_time=getattr(counters, "write_time", 0),
        iops_in_progress=extra[0],
        io_time=getattr(counters, "busy_time", 0),
        weighted_io=extra[1],
    )


def snapshot():
    """Read cumulative counters for every disk the OS reports."""
    per_disk = psutil.disk_io_counters(perdisk=True) or {}
    extra = _read_proc_diskstats()
    return {name: _from_psutil(counters, extra.get(name, (0, 0))) for name, counters in per_disk.items()}


def device_delta(before, after, device=None):
    """Field-wise after - before for one device.

    A cumulative counter that went backwards was reset during the window;
    its delta is taken as the value it has counted since the reset.
    iops_in_progress is a gauge, so its delta is the only one that can be negative.
    """
    values = {}
    for f in fields(DiskCounters):
        b = getattr(before, f.name)
        a = getattr(after, f.name)
        if f.name in GAUGE_FIELDS or a >= b:
            values[f.name] = a - b
        else:
            logger.warning("Counter %s on %s went backwards (%d -> %d), assuming reset", f.name, device, b, a)
            values[f.name] = a
    return DiskCounters(**values)


def total_delta(before, after):
    """Sum per-device deltas over the devices present in both snapshots."""
    totals = dict.fromkeys(METRIC_NAMES, 0)
    for device, before_counters in before.items():
        after_counters = after.get(device)
        if after_counters is None:
            logger.warning("Device %s disappeared during measurement, skipping", device)
            continue
        delta = device_delta(before_counters, after_counters, device)
        for name in totals:
            totals[name] += getattr(delta, name)
    return DiskCounters(**totals)
