#!/usr/bin/env python3
"""
헬스체크 메인 애플리케이션

Flask 웹 서버를 실행하고 헬스체크 엔드포인트를 제공합니다.

실행 방법:
    python -m simplehealth.main

또는 Gunicorn으로 실행 (프로덕션):
    gunicorn -w 4 -b 0.0.0.0:8080 'simplehealth.main:create_app()'
"""

import sys
import time
import logging
from datetime import datetime, timezone
from typing import Optional

from flask import Flask, jsonify, request

from simplehealth.config import Config, load_config
from simplehealth.logging_utils import setup_logging
from simplehealth.engine import HealthEngine, check_name
from simplehealth.report import build_verdict
from simplehealth.stats import PsutilStatsProvider, StatsProvider
from simplehealth.checks import (
    LoadChecker,
    OpenFilesChecker,
    DiskChecker,
    FileAgeChecker,
)

logger = logging.getLogger(__name__)


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


# =============================================================================
# 엔진 구성
# =============================================================================

def build_engine(config: Config, provider: Optional[StatsProvider] = None) -> HealthEngine:
    """
    설정에 따라 체크를 등록한 엔진을 만듭니다.

    Args:
        config: 설정
        provider: 통계 제공자 (None 이면 psutil)

    Returns:
        HealthEngine: 체크가 등록된 엔진
    """
    if provider is None:
        provider = PsutilStatsProvider()

    engine = HealthEngine(checks=[])
    builtins = [
        ('load', LoadChecker),
        ('open_files', OpenFilesChecker),
        ('disk', DiskChecker),
    ]
    for name, checker_cls in builtins:
        if config.get('checks', name, 'enabled', default=True):
            engine.add_check(checker_cls(provider))
            logger.info(f"✅ {name} 체커 활성화")

    for target in config.get('checks', 'file_age', default=[]):
        pattern = target.get('pattern')
        max_age_days = target.get('max_age_days')
        if not pattern or max_age_days is None:
            logger.warning(f"잘못된 file_age 설정 무시: {target}")
            continue
        engine.add_check(FileAgeChecker(pattern, float(max_age_days), provider))
        logger.info(f"✅ 파일 나이 체커 활성화: {pattern} (최대 {max_age_days}일)")

    logger.info(f"총 {len(engine.checks)}개 체커 초기화 완료")
    return engine


# =============================================================================
# Flask 애플리케이션
# =============================================================================

def create_app(config: Optional[Config] = None, engine: Optional[HealthEngine] = None) -> Flask:
    """
    Flask 애플리케이션을 만듭니다.

    Args:
        config: 설정 (None 이면 load_config() 로 로드하고 로깅도 설정)
        engine: 헬스체크 엔진 (None 이면 설정으로 구성)

    Returns:
        Flask: 애플리케이션
    """
    if config is None:
        config = load_config()
        setup_logging(config.get('logging', default={}))
    if engine is None:
        engine = build_engine(config)

    app = Flask(__name__)
    app.config['HEALTH_ENGINE'] = engine
    start_time = time.time()

    app_name = config.get('application', 'name', default='simplehealth')
    app_version = config.get('application', 'version', default='1.0.0')
    environment = config.get('application', 'environment', default='production')
    health_path = config.get('endpoints', 'health', default='/health')
    healthz_path = config.get('endpoints', 'healthz', default='/healthz')
    log_requests = config.get('logging', 'log_requests', default=False)

    @app.before_request
    def log_request():
        if log_requests:
            logger.debug(f"요청: {request.method} {request.path} (from: {request.remote_addr})")

    @app.route('/', methods=['GET'])
    def root():
        """루트 엔드포인트 - 서버 정보 반환"""
        return jsonify({
            'service': app_name,
            'version': app_version,
            'environment': environment,
            'uptime_seconds': round(time.time() - start_time, 2),
            'endpoints': {
                'health': health_path,
                'healthz': healthz_path,
                'checks': '/checks',
            },
            'checks': {
                'available': [check_name(c) for c in engine.checks],
                'count': len(engine.checks)
            },
            'timestamp': _utcnow()
        }), 200

    def verdict():
        failures = engine.run()
        body, status_code = build_verdict(failures)
        if failures:
            logger.warning(f"⚠️  {request.path} 응답: {status_code} {body['status']}")
        if request.method == 'HEAD':
            return '', status_code
        return jsonify(body), status_code

    app.add_url_rule(health_path, 'health', verdict, methods=['GET', 'HEAD'])
    if healthz_path != health_path:
        app.add_url_rule(healthz_path, 'healthz', verdict, methods=['GET', 'HEAD'])

    @app.route('/checks', methods=['GET'])
    def checks():
        """체크별 상세 결과"""
        results = engine.run_detailed()
        healthy = all(r.is_healthy() for r in results)
        return jsonify({
            'status': 'UP' if healthy else 'DOWN',
            'timestamp': _utcnow(),
            'checks': [r.to_dict() for r in results]
        }), 200 if healthy else 500

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({
            'error': 'Not Found',
            'message': 'The requested endpoint does not exist',
            'available_endpoints': [health_path, healthz_path, '/checks']
        }), 404

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Internal server error: {error}", exc_info=True)
        return jsonify({
            'error': 'Internal Server Error',
            'message': 'An unexpected error occurred'
        }), 500

    return app


# =============================================================================
# 메인 실행
# =============================================================================

def main():
    """메인 함수"""
    config = load_config()
    setup_logging(config.get('logging', default={}))

    host = config.get('server', 'host', default='0.0.0.0')
    port = config.get('server', 'port', default=8080)
    environment = config.get('application', 'environment', default='production')

    app = create_app(config)

    logger.info("=" * 80)
    logger.info(f"🚀 헬스체크 서버 시작")
    logger.info(f"  설정: {config.config_path}")
    logger.info(f"  주소: http://{host}:{port}")
    logger.info("=" * 80)

    try:
        app.run(host=host, port=port, debug=(environment == 'development'))
    except KeyboardInterrupt:
        logger.info("서버 종료 중...")
    except OSError as e:
        logger.error(f"서버 시작 실패: {e}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
