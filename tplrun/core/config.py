"""
설정 로드: default.yaml + 사용자 config.yaml + 환경변수.

우선순위 (높은 것이 이김):
1. 환경변수 (TPLRUN_HOME, TPLRUN_LOG_LEVEL)
2. <home>/config.yaml
3. 패키지 내장 default.yaml
"""

import copy
import os
from pathlib import Path
from typing import Any

import yaml

from tplrun.domain.constants import (
    DEFAULT_HOME,
    HOME_ENV_VAR,
    LOG_LEVEL_ENV_VAR,
    USER_CONFIG_FILENAME,
)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "default.yaml"


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """중첩 dict 병합 (override 우선)."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def resolve_home(
    config: dict[str, Any] | None = None,
    home: str | Path | None = None,
) -> Path:
    """tplrun 홈 디렉터리 경로 (인자 > 환경변수 > 설정 > 기본값)."""
    if not home:
        home = os.environ.get(HOME_ENV_VAR)
    if not home:
        home = (config or {}).get("home") or DEFAULT_HOME
    return Path(home).expanduser()


def load_config(
    config_path: Path | None = None,
    home: str | Path | None = None,
) -> dict[str, Any]:
    """
    설정 로드.

    Args:
        config_path: 사용자 설정 파일 경로 (None이면 <home>/config.yaml)
        home: 홈 디렉터리 (환경변수와 설정의 home 보다 우선)

    Returns:
        병합된 설정 dict (home은 절대 경로 문자열로 정규화)
    """
    config = _read_yaml(DEFAULT_CONFIG_PATH)

    if config_path is None:
        config_path = resolve_home(config, home) / USER_CONFIG_FILENAME
    config = _merge(config, _read_yaml(config_path))

    config["home"] = str(resolve_home(config, home))

    log_level = os.environ.get(LOG_LEVEL_ENV_VAR)
    if log_level:
        config.setdefault("logging", {})["level"] = log_level.upper()

    return config
