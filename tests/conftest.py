"""Shared test fixtures."""

from __future__ import annotations

import pytest

from simplehealth.stats import (
    DiskUsage,
    InodeStats,
    LoadAverages,
    Partition,
    ProcessInfo,
    StatsError,
    StatsProvider,
)


class FakeStatsProvider(StatsProvider):
    """Synthetic snapshot; any value set to an Exception instance is raised on read."""

    def __init__(self) -> None:
        self.processes: list | Exception = []
        self.limits: dict = {}
        self.fds: dict = {}
        self.load: LoadAverages | Exception = LoadAverages(0.1, 0.1, 0.1)
        self.cpus: int | Exception = 4
        self.partitions: list | Exception = []
        self.usage: dict = {}
        self.inodes: dict = {}

    @staticmethod
    def _read(value):
        if isinstance(value, Exception):
            raise value
        return value

    @classmethod
    def _lookup(cls, table: dict, key):
        if key not in table:
            raise StatsError(f"no data for {key}")
        return cls._read(table[key])

    def list_processes(self):
        return self._read(self.processes)

    def process_descriptor_limit(self, pid):
        return self._lookup(self.limits, pid)

    def process_open_descriptor_count(self, pid):
        return self._lookup(self.fds, pid)

    def system_load_averages(self):
        return self._read(self.load)

    def logical_cpu_count(self):
        return self._read(self.cpus)

    def list_mounted_filesystems(self, physical_only=True):
        return self._read(self.partitions)

    def filesystem_usage(self, mountpoint):
        return self._lookup(self.usage, mountpoint)

    def filesystem_inode_stats(self, mountpoint):
        return self._lookup(self.inodes, mountpoint)

    # helpers

    def add_process(self, pid, user="app", name="svc", soft=1024, fds=10):
        self.processes.append(ProcessInfo(pid=pid, user=user, name=name))
        self.limits[pid] = (soft, soft) if not isinstance(soft, Exception) else soft
        self.fds[pid] = fds

    def add_partition(self, mountpoint, device="/dev/sda1", used=10.0, inodes=(1000, 900)):
        self.partitions.append(Partition(device=device, mountpoint=mountpoint))
        self.usage[mountpoint] = DiskUsage(used) if not isinstance(used, Exception) else used
        if inodes is not None:
            self.inodes[mountpoint] = (
                InodeStats(*inodes) if not isinstance(inodes, Exception) else inodes
            )


@pytest.fixture
def provider() -> FakeStatsProvider:
    return FakeStatsProvider()
