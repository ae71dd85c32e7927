"""
simplehealth - 로컬 호스트 헬스체크 집계기

부하, 열린 파일, 디스크/inode 체크를 동시에 실행하고
하나의 정상/비정상 판정과 실패 사유 목록을 제공합니다.
"""

from .engine import HealthEngine
from .report import build_verdict
from .checks import default_checks, age_of_newest_file

__version__ = '1.0.0'

__all__ = [
    'HealthEngine',
    'build_verdict',
    'default_checks',
    'age_of_newest_file',
]
