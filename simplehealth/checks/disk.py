"""
디스크 체크 모듈
물리 파티션별 디스크 사용률과 inode 사용률을 확인합니다.
"""

from typing import Optional

from .base import BaseChecker
from ..stats import Partition, StatsError

# 디스크/inode 사용률 상한 (이상이면 실패)
MAX_DISK_PERC = 0.9

# 용량 신호로 의미가 없는 장치/마운트 지점
IGNORED_DEVICE_PARTS = ('loop', 'devfs')
IGNORED_MOUNTPOINT_PARTS = ('/snap/', '/boot')


def is_ignored(part: Partition) -> bool:
    """체크 대상에서 제외할 파티션인지 확인"""
    return (any(s in part.device for s in IGNORED_DEVICE_PARTS)
            or any(s in part.mountpoint for s in IGNORED_MOUNTPOINT_PARTS))


class DiskChecker(BaseChecker):
    """디스크 공간과 inode 사용률을 체크하는 클래스"""

    def __init__(self, provider=None):
        super().__init__('disk', provider)

    def evaluate(self) -> Optional[str]:
        try:
            parts = self.provider.list_mounted_filesystems(physical_only=True)
        except StatsError as e:
            self.logger.error(f"  ✗ 파티션 목록 읽기 실패: {e}")
            return str(e)

        limit = 100 * MAX_DISK_PERC

        for part in parts:
            if is_ignored(part):
                continue

            try:
                usage = self.provider.filesystem_usage(part.mountpoint)
            except StatsError as e:
                self.logger.debug(f"  - {part.mountpoint} 건너뜀: {e}")
                continue

            self.logger.debug(f"  디스크 {part.mountpoint}: {usage.used_percent:.0f}%")
            if usage.used_percent >= limit:
                return f"disk {part.mountpoint} bytes {usage.used_percent:.0f}% full"

            try:
                inodes = self.provider.filesystem_inode_stats(part.mountpoint)
            except StatsError as e:
                self.logger.debug(f"  - {part.mountpoint} inode 건너뜀: {e}")
                continue

            if inodes.total > 0:
                perc_inodes = 100.0 * (inodes.total - inodes.free) / inodes.total
                self.logger.debug(f"  inode {part.mountpoint}: {perc_inodes:.0f}%")
                if perc_inodes >= limit:
                    return f"disk {part.mountpoint} inodes {perc_inodes:.0f}% full"

        return None
