"""
열린 파일 체크 모듈
프로세스별 열린 파일 디스크립터 수를 soft limit 과 비교합니다.

첫 번째로 임계값을 넘은 프로세스에서 바로 실패를 반환합니다.
다음 위반 프로세스는 다시 실행했을 때 보고됩니다.
"""

from typing import Optional

from .base import BaseChecker
from ..stats import StatsError

# 열린 파일 사용률 상한 (초과 시 실패)
MAX_OPEN_FILES_PERC = 0.9

# root 프로세스의 soft limit 이 이 값 미만이면 건너뜀
ROOT_LIMIT_CARVE_OUT = 1024


class OpenFilesChecker(BaseChecker):
    """프로세스별 열린 파일 사용률을 체크하는 클래스"""

    def __init__(self, provider=None):
        super().__init__('open_files', provider)

    def evaluate(self) -> Optional[str]:
        try:
            processes = self.provider.list_processes()
        except StatsError as e:
            self.logger.error(f"  ✗ 프로세스 목록 읽기 실패: {e}")
            return str(e)

        for proc in processes:
            pname = f"{proc.pid}/{proc.user}/{proc.name}"

            # 목록을 읽은 뒤 종료된 프로세스는 건너뜀
            try:
                soft_limit, _ = self.provider.process_descriptor_limit(proc.pid)
            except StatsError as e:
                self.logger.debug(f"  - {pname} 건너뜀: {e}")
                continue

            # 제한 없음
            if soft_limit <= 0:
                continue

            # sshd 같은 root 데몬은 가끔 limit 이 1 로 보고됩니다
            # (cat /proc/$(pgrep sshd -n)/limits 의 "Max open files 1 1 files")
            if soft_limit < ROOT_LIMIT_CARVE_OUT and proc.user == 'root':
                continue

            try:
                cur = self.provider.process_open_descriptor_count(proc.pid)
            except StatsError as e:
                self.logger.debug(f"  - {pname} 건너뜀: {e}")
                continue
            # 0 은 "읽을 수 없음" 과 구분되지 않음
            if cur == 0:
                continue

            usage = cur / soft_limit
            if usage > MAX_OPEN_FILES_PERC:
                return f"{pname} uses {int(usage * 100)}% open files, are we growing too fast?"

        return None
