"""
시스템 통계 제공 모듈

체크가 사용하는 OS/프로세스/파일시스템 통계를 하나의 인터페이스로 제공합니다.
체크 로직은 StatsProvider 에만 의존하므로 테스트에서는 가짜 구현을 주입할 수 있습니다.

모든 메소드는 읽기에 실패하면 StatsError 를 발생시킵니다.
"""

import os
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Tuple

import psutil

logger = logging.getLogger(__name__)


class StatsError(Exception):
    """통계 읽기 실패"""


@dataclass(frozen=True)
class ProcessInfo:
    pid: int
    user: str = ''
    name: str = ''


@dataclass(frozen=True)
class LoadAverages:
    load1: float
    load5: float
    load15: float


@dataclass(frozen=True)
class Partition:
    device: str
    mountpoint: str


@dataclass(frozen=True)
class DiskUsage:
    used_percent: float


@dataclass(frozen=True)
class InodeStats:
    total: int
    free: int


class StatsProvider(ABC):
    """
    통계 제공자 인터페이스

    호출할 때마다 현재 시스템 상태를 새로 읽습니다 (캐시 없음).
    """

    @abstractmethod
    def list_processes(self) -> List[ProcessInfo]:
        """실행 중인 프로세스 목록 (user/name 은 읽을 수 없으면 빈 문자열)"""

    @abstractmethod
    def process_descriptor_limit(self, pid: int) -> Tuple[int, int]:
        """프로세스의 열린 파일 제한 (soft, hard)"""

    @abstractmethod
    def process_open_descriptor_count(self, pid: int) -> int:
        """프로세스가 현재 열고 있는 파일 디스크립터 수"""

    @abstractmethod
    def system_load_averages(self) -> LoadAverages:
        """1/5/15분 평균 부하"""

    @abstractmethod
    def logical_cpu_count(self) -> int:
        """논리 CPU 개수"""

    @abstractmethod
    def list_mounted_filesystems(self, physical_only: bool = True) -> List[Partition]:
        """마운트된 파일시스템 목록"""

    @abstractmethod
    def filesystem_usage(self, mountpoint: str) -> DiskUsage:
        """파일시스템 사용률"""

    @abstractmethod
    def filesystem_inode_stats(self, mountpoint: str) -> InodeStats:
        """파일시스템 inode 통계"""


class PsutilStatsProvider(StatsProvider):
    """psutil 기반 통계 제공자"""

    def list_processes(self) -> List[ProcessInfo]:
        try:
            processes = []
            for proc in psutil.process_iter(['username', 'name'], ad_value=None):
                info = proc.info
                processes.append(ProcessInfo(
                    pid=proc.pid,
                    user=info.get('username') or '',
                    name=info.get('name') or ''
                ))
            return processes
        except (psutil.Error, OSError) as e:
            raise StatsError(f"cannot list processes: {e}") from e

    def process_descriptor_limit(self, pid: int) -> Tuple[int, int]:
        # RLIMIT_NOFILE 은 Linux/FreeBSD 에서만 제공됩니다
        if not hasattr(psutil, 'RLIMIT_NOFILE'):
            raise StatsError("RLIMIT_NOFILE is not supported on this platform")
        try:
            soft, hard = psutil.Process(pid).rlimit(psutil.RLIMIT_NOFILE)
            return soft, hard
        except (psutil.Error, OSError) as e:
            raise StatsError(f"cannot read rlimit of {pid}: {e}") from e

    def process_open_descriptor_count(self, pid: int) -> int:
        try:
            return psutil.Process(pid).num_fds()
        except (psutil.Error, OSError, AttributeError) as e:
            raise StatsError(f"cannot count fds of {pid}: {e}") from e

    def system_load_averages(self) -> LoadAverages:
        try:
            load1, load5, load15 = psutil.getloadavg()
        except (psutil.Error, OSError) as e:
            raise StatsError(f"cannot read load average: {e}") from e
        return LoadAverages(load1=load1, load5=load5, load15=load15)

    def logical_cpu_count(self) -> int:
        # 프로세스가 사용할 수 있는 CPU (affinity 미지원 플랫폼은 전체 논리 CPU)
        try:
            count = len(psutil.Process().cpu_affinity())
        except (AttributeError, psutil.Error, OSError):
            count = psutil.cpu_count(logical=True)
        if not count:
            raise StatsError("cannot determine logical cpu count")
        return count

    def list_mounted_filesystems(self, physical_only: bool = True) -> List[Partition]:
        try:
            parts = psutil.disk_partitions(all=not physical_only)
        except (psutil.Error, OSError) as e:
            raise StatsError(f"cannot list partitions: {e}") from e
        return [Partition(device=p.device, mountpoint=p.mountpoint) for p in parts]

    def filesystem_usage(self, mountpoint: str) -> DiskUsage:
        try:
            usage = psutil.disk_usage(mountpoint)
        except (psutil.Error, OSError) as e:
            raise StatsError(f"cannot read usage of {mountpoint}: {e}") from e
        # psutil 의 percent 는 소수 첫째 자리로 반올림되므로 원시 값으로 계산
        avail = usage.used + usage.free
        used_percent = 100.0 * usage.used / avail if avail > 0 else 0.0
        return DiskUsage(used_percent=used_percent)

    def filesystem_inode_stats(self, mountpoint: str) -> InodeStats:
        try:
            st = os.statvfs(mountpoint)
        except (OSError, AttributeError) as e:
            raise StatsError(f"cannot statvfs {mountpoint}: {e}") from e
        return InodeStats(total=st.f_files, free=st.f_ffree)
