"""
부하 체크 모듈
CPU 당 5분 평균 부하를 확인합니다.
"""

from typing import Optional

from .base import BaseChecker
from ..stats import StatsError

# CPU 당 5분 평균 부하 상한 (초과 시 실패)
MAX_LOAD = 0.8


class LoadChecker(BaseChecker):
    """CPU 당 평균 부하를 체크하는 클래스"""

    def __init__(self, provider=None):
        super().__init__('load', provider)

    def evaluate(self) -> Optional[str]:
        try:
            avg = self.provider.system_load_averages()
            num_cpu = self.provider.logical_cpu_count()
        except StatsError as e:
            self.logger.error(f"  ✗ 평균 부하 읽기 실패: {e}")
            return str(e)

        got = avg.load5 / num_cpu
        self.logger.debug(f"  CPU 당 load5: {got:.3f} (cpu={num_cpu})")
        if got > MAX_LOAD:
            return f"high load5 per cpu: {got:f}"
        return None
