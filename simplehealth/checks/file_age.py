"""
파일 나이 체크 모듈
glob 패턴에 맞는 가장 최근 파일이 얼마나 오래되었는지 확인합니다.

백업이나 배치 결과물이 주기적으로 갱신되는지 감시할 때 사용합니다.
"""

import glob
import os
import time
from typing import Optional

from .base import BaseChecker

SECONDS_PER_DAY = 24 * 60 * 60


def age_of_newest_file(pattern: str) -> float:
    """
    패턴에 맞는 파일 중 가장 최근에 수정된 파일의 나이를 일 단위로 반환합니다.

    Args:
        pattern: 파일 경로 glob 패턴 (예: /var/backups/*.tar.gz)

    Returns:
        float: 가장 최근 파일의 나이 (일)

    Raises:
        FileNotFoundError: 패턴에 맞는 파일이 없는 경우
        OSError: 파일 stat 실패
    """
    files = glob.glob(pattern)
    if not files:
        raise FileNotFoundError(f"no files found at {pattern}")

    newest = max(os.stat(f).st_mtime for f in files)
    return (time.time() - newest) / SECONDS_PER_DAY


class FileAgeChecker(BaseChecker):
    """가장 최근 파일의 나이를 체크하는 클래스"""

    def __init__(self, pattern: str, max_age_days: float, provider=None):
        super().__init__(f'file_age:{pattern}', provider)
        self.pattern = pattern
        self.max_age_days = max_age_days

    def evaluate(self) -> Optional[str]:
        try:
            age = age_of_newest_file(self.pattern)
        except OSError as e:
            return str(e)

        self.logger.debug(f"  {self.pattern} 최신 파일 나이: {age:.2f}일")
        if age > self.max_age_days:
            return f"newest file at {self.pattern} is {age:.1f} days old (max {self.max_age_days})"
        return None
