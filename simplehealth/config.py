"""
설정 로더 모듈

YAML 설정 파일을 읽고 기본 설정 위에 병합합니다.
환경 변수를 통한 오버라이드를 지원합니다.

임계값(부하 0.8, 열린 파일 0.9, 디스크 0.9)은 설정 대상이 아닙니다.
"""

import os
import copy
import yaml
import logging
from typing import Dict, Any, Optional
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = '/etc/simplehealth/config.yaml'


class Config:
    """
    설정 클래스

    Attributes:
        config (Dict[str, Any]): 설정 딕셔너리
        config_path (Optional[str]): 설정 파일 경로
    """

    # 환경 변수 -> 설정 키 경로
    ENV_MAPPINGS = {
        'APP_NAME': ['application', 'name'],
        'APP_VERSION': ['application', 'version'],
        'ENVIRONMENT': ['application', 'environment'],
        'SERVER_HOST': ['server', 'host'],
        'SERVER_PORT': ['server', 'port'],
        'LOG_LEVEL': ['logging', 'console', 'level'],
        'LOG_FORMAT': ['logging', 'console', 'format'],
    }

    def __init__(self, config_path: Optional[str] = DEFAULT_CONFIG_PATH):
        """
        Config 초기화

        Args:
            config_path: 설정 파일 경로 (None 이면 기본 설정만 사용)
        """
        self.config_path = config_path
        self.config: Dict[str, Any] = self._get_default_config()
        if config_path is not None:
            self._load_config()
        self._apply_env_overrides()

    @classmethod
    def from_dict(cls, overrides: Dict[str, Any]) -> 'Config':
        """기본 설정 위에 딕셔너리를 병합한 Config 를 만듭니다 (환경 변수 미적용)."""
        config = cls.__new__(cls)
        config.config_path = None
        config.config = cls._merge(cls._get_default_config(), overrides or {})
        return config

    def _load_config(self) -> None:
        """YAML 설정 파일을 로드합니다."""
        config_path = Path(self.config_path)

        if not config_path.exists():
            logger.warning(f"설정 파일을 찾을 수 없음: {config_path}, 기본 설정을 사용합니다.")
            return

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"설정 파일 로드 실패: {e}")
            logger.warning("기본 설정을 사용합니다.")
            return

        if not isinstance(loaded, dict):
            logger.error(f"설정 파일 형식 오류 (매핑이 아님): {config_path}")
            return

        self.config = self._merge(self.config, loaded)
        logger.info(f"설정 파일 로드 완료: {config_path}")

    def _apply_env_overrides(self) -> None:
        """환경 변수로 설정을 오버라이드합니다."""
        for env_var, keys in self.ENV_MAPPINGS.items():
            env_value = os.getenv(env_var)
            if not env_value:
                continue

            if env_var == 'SERVER_PORT':
                try:
                    env_value = int(env_value)
                except ValueError:
                    logger.warning(f"잘못된 SERVER_PORT 값: {env_value}, 무시됨")
                    continue

            self._set_nested(self.config, keys, env_value)
            logger.debug(f"환경 변수 적용: {env_var}={env_value}")

    @staticmethod
    def _set_nested(d: Dict, keys: list, value: Any) -> None:
        for key in keys[:-1]:
            d = d.setdefault(key, {})
        d[keys[-1]] = value

    @staticmethod
    def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """딕셔너리를 재귀적으로 병합합니다 (override 우선)."""
        merged = copy.deepcopy(base)
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = Config._merge(merged[key], value)
            else:
                merged[key] = copy.deepcopy(value)
        return merged

    @staticmethod
    def _get_default_config() -> Dict[str, Any]:
        """
        기본 설정을 반환합니다.

        Returns:
            Dict[str, Any]: 기본 설정 딕셔너리
        """
        return {
            'application': {
                'name': 'simplehealth',
                'version': '1.0.0',
                'environment': 'production'
            },
            'server': {
                'host': '0.0.0.0',
                'port': 8080
            },
            'endpoints': {
                'health': '/health',
                'healthz': '/healthz'
            },
            'logging': {
                'console': {
                    'enabled': True,
                    'level': 'INFO',
                    'format': 'text'
                },
                'file': {
                    'enabled': False,
                    'level': 'WARN',
                    'path': '/var/log/simplehealth/simplehealth.log',
                    'max_size_mb': 10,
                    'backup_count': 5
                },
                'log_requests': False
            },
            'checks': {
                'load': {'enabled': True},
                'open_files': {'enabled': True},
                'disk': {'enabled': True},
                'file_age': []
            }
        }

    def get(self, *keys, default=None) -> Any:
        """
        중첩된 설정 값을 가져옵니다.

        Example:
            >>> config.get('server', 'port')
            8080
            >>> config.get('checks', 'disk', 'enabled')
            True
        """
        value = self.config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
            if value is None:
                return default
        return value


# 전역 설정 인스턴스
_config: Optional[Config] = None


def load_config(config_path: Optional[str] = None) -> Config:
    """
    설정을 로드합니다.

    Args:
        config_path: 설정 파일 경로 (None 이면 $SIMPLEHEALTH_CONFIG_PATH 또는 기본 경로)

    Returns:
        Config: Config 인스턴스
    """
    global _config
    if config_path is None:
        config_path = os.getenv('SIMPLEHEALTH_CONFIG_PATH', DEFAULT_CONFIG_PATH)
    _config = Config(config_path)
    return _config


def get_config() -> Config:
    """
    현재 설정 인스턴스를 반환합니다.

    Raises:
        RuntimeError: 설정이 로드되지 않은 경우
    """
    if _config is None:
        raise RuntimeError("설정이 로드되지 않았습니다. load_config()를 먼저 호출하세요.")
    return _config
