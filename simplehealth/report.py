"""
판정 응답 모듈

엔진의 실패 메시지 목록을 HTTP 상태 코드와 응답 본문으로 변환합니다.
"""

from typing import Any, Dict, List, Tuple

STATUS_HEALTHY = 'VERYHAPPY'
STATUS_UNHEALTHY = 'MUCHSAD'


def build_verdict(failures: List[str]) -> Tuple[Dict[str, Any], int]:
    """
    실패 메시지 목록으로 판정 응답을 만듭니다.

    Args:
        failures: HealthEngine.run() 의 결과

    Returns:
        (본문, 상태 코드): 정상이면 200, 비정상이면 500
    """
    if failures:
        return {'status': STATUS_UNHEALTHY, 'errors': [str(f) for f in failures]}, 500
    return {'status': STATUS_HEALTHY}, 200
