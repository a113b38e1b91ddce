"""
Domain Constants: 전역 상수.

파일명 정책, 경로 상수 등 시스템 전반에서 사용되는 값들.
"""

# =============================================================================
# Home Directory Structure
# =============================================================================
# ~/.tplrun/
# ├── config.yaml          # 사용자 설정 (선택)
# └── templates/
#     ├── .locks/          # 템플릿별 락 파일
#     └── <template_id>.yaml

DEFAULT_HOME = "~/.tplrun"
HOME_ENV_VAR = "TPLRUN_HOME"
LOG_LEVEL_ENV_VAR = "TPLRUN_LOG_LEVEL"
USER_CONFIG_FILENAME = "config.yaml"

TEMPLATES_DIRNAME = "templates"
LOCKS_DIRNAME = ".locks"
TEMPLATE_SUFFIX = ".yaml"

# =============================================================================
# Local Config
# =============================================================================
# 작업 디렉토리의 활성 설정. `run`은 이 파일을 읽어 실행한다.

LOCAL_CONFIG_FILENAME = ".tplrun.yaml"

# =============================================================================
# Script Runner
# =============================================================================

OSASCRIPT_COMMAND = "osascript"
DEFAULT_SCRIPT_TIMEOUT_SECONDS = 300.0
DEFAULT_LOCK_TIMEOUT_SECONDS = 10.0
