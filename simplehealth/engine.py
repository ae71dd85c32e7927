"""
헬스체크 엔진 모듈

등록된 체크를 모두 동시에 실행하고 실패 메시지를 모읍니다.

- 체크마다 스레드 하나를 할당하며, 모든 체크가 끝날 때까지 기다립니다.
- 한 체크의 실패가 다른 체크의 실행이나 결과 수집을 막지 않습니다.
- 체크별 타임아웃은 없습니다. 멈춘 체크는 run() 전체를 멈춥니다.
- add_check()/set_checks() 는 설정 단계에서만 호출해야 하며,
  실행 중인 run() 과 동시에 호출하면 안 됩니다 (내부 잠금 없음).
"""

import time
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional

from .checks import BaseChecker, CheckResult, default_checks
from .stats import StatsProvider

logger = logging.getLogger(__name__)

Check = Callable[[], Optional[str]]


def check_name(check: Check) -> str:
    """로그와 결과에 표시할 체크 이름"""
    name = getattr(check, 'name', None)
    if isinstance(name, str) and name:
        return name
    return getattr(check, '__name__', None) or repr(check)


class HealthEngine:
    """
    체크 레지스트리 및 실행기

    Attributes:
        checks: 현재 등록된 체크 목록 (복사본)
    """

    def __init__(self, checks: Optional[List[Check]] = None,
                 provider: Optional[StatsProvider] = None):
        """
        엔진 초기화

        Args:
            checks: 초기 체크 목록 (None 이면 기본 체크 3종)
            provider: 기본 체크가 사용할 통계 제공자
        """
        if checks is None:
            checks = default_checks(provider)
        self._checks: List[Check] = list(checks)

    @property
    def checks(self) -> List[Check]:
        return list(self._checks)

    def add_check(self, check: Check) -> None:
        """체크를 레지스트리 끝에 추가합니다."""
        self._checks.append(check)

    def set_checks(self, *checks: Check) -> None:
        """레지스트리 전체를 교체합니다."""
        self._checks = list(checks)

    def run(self) -> List[str]:
        """
        모든 체크를 동시에 실행합니다.

        Returns:
            List[str]: 실패 메시지 목록 (등록 순서, 순서에 의미 없음).
                       모두 정상이면 빈 리스트.
        """
        failures = [msg for msg in self._fan_out(self._run_one) if msg is not None]
        if failures:
            logger.warning(f"⚠️  {len(failures)}/{len(self._checks)}개 체크 실패")
        else:
            logger.debug(f"✅ {len(self._checks)}개 체크 모두 정상")
        return failures

    def run_detailed(self) -> List[CheckResult]:
        """
        모든 체크를 동시에 실행하고 체크별 결과를 반환합니다.

        Returns:
            List[CheckResult]: 체크별 결과 (등록 순서)
        """
        return self._fan_out(self._detail_one)

    def _fan_out(self, fn):
        checks = list(self._checks)
        if not checks:
            return []

        with ThreadPoolExecutor(max_workers=len(checks),
                                thread_name_prefix='healthcheck') as executor:
            futures = [executor.submit(fn, check) for check in checks]
            return [future.result() for future in futures]

    @staticmethod
    def _run_one(check: Check) -> Optional[str]:
        try:
            return check()
        except Exception as e:
            name = check_name(check)
            logger.error(f"체크 실행 실패 ({name}): {e}", exc_info=True)
            return f"{name} check crashed: {e}"

    @staticmethod
    def _detail_one(check: Check) -> CheckResult:
        name = check_name(check)
        start_time = time.time()
        try:
            if isinstance(check, BaseChecker):
                return check.check()
            failure = check()
        except Exception as e:
            logger.error(f"체크 실행 실패 ({name}): {e}", exc_info=True)
            failure = f"{name} check crashed: {e}"

        duration_ms = round((time.time() - start_time) * 1000, 2)
        if failure is None:
            return CheckResult(name=name, status='UP', message='OK', duration_ms=duration_ms)
        return CheckResult(name=name, status='DOWN', message=failure, duration_ms=duration_ms)
