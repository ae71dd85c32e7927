"""
헬스체크 모듈 패키지

각 체크 유형별로 모듈이 분리되어 있습니다:
- base: 베이스 체커 클래스
- load: CPU 당 평균 부하 체크
- open_files: 프로세스별 열린 파일 체크
- disk: 디스크/inode 사용률 체크
- file_age: 최신 파일 나이 체크 (선택)
"""

from typing import List, Optional

from ..stats import StatsProvider, PsutilStatsProvider
from .base import BaseChecker, CheckResult
from .load import LoadChecker, MAX_LOAD
from .open_files import OpenFilesChecker, MAX_OPEN_FILES_PERC, ROOT_LIMIT_CARVE_OUT
from .disk import DiskChecker, MAX_DISK_PERC
from .file_age import FileAgeChecker, age_of_newest_file


def default_checks(provider: Optional[StatsProvider] = None) -> List[BaseChecker]:
    """
    기본 체크 목록을 새로 생성합니다.

    호출할 때마다 새 리스트를 반환하므로 엔진 인스턴스끼리 공유되지 않습니다.
    """
    if provider is None:
        provider = PsutilStatsProvider()
    return [
        LoadChecker(provider),
        OpenFilesChecker(provider),
        DiskChecker(provider),
    ]


__all__ = [
    'BaseChecker',
    'CheckResult',
    'LoadChecker',
    'OpenFilesChecker',
    'DiskChecker',
    'FileAgeChecker',
    'age_of_newest_file',
    'default_checks',
    'MAX_LOAD',
    'MAX_OPEN_FILES_PERC',
    'MAX_DISK_PERC',
    'ROOT_LIMIT_CARVE_OUT',
]
