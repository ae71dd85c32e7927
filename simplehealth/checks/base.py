"""
베이스 체커 모듈

모든 체커의 부모 클래스를 정의합니다.

체크(Check)는 인자가 없는 callable 로, 정상이면 None 을,
비정상이면 실패 메시지(str)를 반환합니다. BaseChecker 인스턴스는
그 자체로 체크이므로 HealthEngine 에 바로 등록할 수 있습니다.
"""

import time
import logging
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ..stats import StatsProvider, PsutilStatsProvider

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """
    체크 결과 데이터 클래스

    Attributes:
        name: 체크 이름
        status: 상태 ('UP' 또는 'DOWN')
        message: 상태 메시지 (DOWN 이면 실패 사유)
        details: 상세 정보
        timestamp: 체크 시간
        duration_ms: 체크 소요 시간 (밀리초)
    """
    name: str
    status: str  # 'UP' or 'DOWN'
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
    )
    duration_ms: float = 0.0

    def is_healthy(self) -> bool:
        """정상 상태인지 확인"""
        return self.status == 'UP'

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        return {
            'name': self.name,
            'status': self.status,
            'message': self.message,
            'details': self.details,
            'timestamp': self.timestamp,
            'duration_ms': self.duration_ms
        }


class BaseChecker(ABC):
    """
    헬스체커 베이스 클래스

    하위 클래스는 evaluate() 만 구현하면 됩니다.
    evaluate() 는 정상이면 None, 비정상이면 실패 메시지를 반환합니다.
    """

    def __init__(self, name: str, provider: Optional[StatsProvider] = None):
        """
        베이스 체커 초기화

        Args:
            name: 체커 이름
            provider: 통계 제공자 (None 이면 psutil 기반 제공자 사용)
        """
        self.name = name
        self.provider = provider if provider is not None else PsutilStatsProvider()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def evaluate(self) -> Optional[str]:
        """
        현재 시스템 상태를 읽어 판정합니다.

        Returns:
            Optional[str]: 정상이면 None, 비정상이면 실패 메시지
        """
        pass

    def check(self) -> CheckResult:
        """
        헬스체크를 수행합니다.

        Returns:
            CheckResult: 체크 결과
        """
        start_time = time.time()
        failure = self.evaluate()
        duration_ms = round((time.time() - start_time) * 1000, 2)

        if failure is None:
            self.logger.debug(f"✅ {self.name} 체크 성공 ({duration_ms}ms)")
            return self._create_result('UP', 'OK', duration_ms=duration_ms)

        self.logger.warning(f"⚠️  {self.name} 체크 실패: {failure}")
        return self._create_result('DOWN', failure, duration_ms=duration_ms)

    def __call__(self) -> Optional[str]:
        result = self.check()
        return None if result.is_healthy() else result.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"

    def _create_result(
        self,
        status: str,
        message: str,
        details: Dict[str, Any] = None,
        duration_ms: float = 0.0
    ) -> CheckResult:
        """
        CheckResult 객체를 생성합니다.

        Args:
            status: 상태 ('UP' 또는 'DOWN')
            message: 메시지
            details: 상세 정보
            duration_ms: 소요 시간

        Returns:
            CheckResult: 체크 결과
        """
        return CheckResult(
            name=self.name,
            status=status,
            message=message,
            details=details or {},
            duration_ms=duration_ms
        )
