"""
Error definitions for tplrun.

규칙:
- 조용한 실패 금지 → 코드가 붙은 예외로 명시적 실패
- store/runner 에러는 orchestrator에서 감싸지 않고 그대로 전파
- 사용자가 확인을 거절한 경우는 에러가 아님 (no-op)
"""

from typing import Any


class TplrunError(Exception):
    """
    tplrun 공통 에러.

    Usage:
        raise TemplateError("TEMPLATE_NOT_FOUND", "Template 'x' not found", template_id="x")
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(f"[{code}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            "message": self.message,
            **self.context,
        }


class TemplateError(TplrunError):
    """템플릿 저장소 에러 (조회/복사/삭제/로컬 설정 로드)."""


class ConfigError(TplrunError):
    """설정 → 스크립트 변환 실패."""


class ScriptExecutionError(TplrunError):
    """스크립트 실행 실패 (osascript)."""


class UnknownActionError(TplrunError):
    """목록 메뉴에서 알 수 없는 액션이 선택됨."""


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Store ===
    INVALID_TEMPLATE_ID = "INVALID_TEMPLATE_ID"
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    TEMPLATE_LOCK_TIMEOUT = "TEMPLATE_LOCK_TIMEOUT"
    LOCAL_CONFIG_NOT_FOUND = "LOCAL_CONFIG_NOT_FOUND"
    LOCAL_CONFIG_CORRUPT = "LOCAL_CONFIG_CORRUPT"

    # === Translate ===
    INVALID_CONFIG = "INVALID_CONFIG"

    # === Run ===
    SCRIPT_FAILED = "SCRIPT_FAILED"
    SCRIPT_TIMEOUT = "SCRIPT_TIMEOUT"
    RUNNER_NOT_FOUND = "RUNNER_NOT_FOUND"

    # === Dispatch ===
    UNKNOWN_ACTION = "UNKNOWN_ACTION"
