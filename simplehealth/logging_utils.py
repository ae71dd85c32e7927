"""
로깅 유틸리티 모듈

콘솔 및 파일 로깅을 설정합니다.
파일 로그는 크기 기반 로테이션을 사용합니다.
"""

import sys
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Any, List

# 로그 레벨 매핑
LOG_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARN': logging.WARNING,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
}

TEXT_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s'
JSON_FORMAT = ('{"timestamp":"%(asctime)s","level":"%(levelname)s",'
               '"name":"%(name)s","thread":"%(threadName)s","message":"%(message)s"}')
FILE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)-30s | %(threadName)-15s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _console_handler(console_config: Dict[str, Any]) -> logging.Handler:
    level = str(console_config.get('level', 'INFO')).upper()
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(LOG_LEVELS.get(level, logging.INFO))

    if console_config.get('format', 'text') == 'json':
        handler.setFormatter(logging.Formatter(JSON_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _file_handler(file_config: Dict[str, Any]) -> logging.Handler:
    level = str(file_config.get('level', 'WARN')).upper()
    path = Path(file_config.get('path', '/var/log/simplehealth/simplehealth.log'))
    max_size_mb = file_config.get('max_size_mb', 10)
    backup_count = file_config.get('backup_count', 5)

    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=max_size_mb * 1024 * 1024,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(LOG_LEVELS.get(level, logging.WARNING))
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(config: Dict[str, Any]) -> List[logging.Handler]:
    """
    로깅 시스템을 설정합니다.

    루트 로거의 기존 핸들러를 제거하고 설정에 따라 새 핸들러를 붙입니다.

    Args:
        config: 로깅 설정 딕셔너리

    Returns:
        List[logging.Handler]: 설치된 핸들러 목록

    Example:
        >>> setup_logging({
        ...     'console': {'enabled': True, 'level': 'INFO', 'format': 'text'},
        ...     'file': {
        ...         'enabled': True,
        ...         'level': 'WARN',
        ...         'path': '/var/log/simplehealth/simplehealth.log',
        ...         'max_size_mb': 10,
        ...         'backup_count': 5
        ...     }
        ... })
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    # 루트는 DEBUG, 레벨 필터링은 핸들러에서
    root_logger.setLevel(logging.DEBUG)

    handlers = []

    console_config = config.get('console', {})
    if console_config.get('enabled', True):
        handlers.append(_console_handler(console_config))

    file_config = config.get('file', {})
    if file_config.get('enabled', False):
        handlers.append(_file_handler(file_config))

    for handler in handlers:
        root_logger.addHandler(handler)

    if not handlers:
        logging.getLogger(__name__).addHandler(logging.NullHandler())

    return handlers
