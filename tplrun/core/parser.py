"""
설정 → AppleScript 변환기.

순수 함수: 같은 설정이면 항상 같은 스크립트.

설정 형식:
    application: Terminal      # run 단계의 대상 앱 (기본 Terminal)
    steps:
      - activate: Safari
      - open: https://example.com
      - run: npm start
      - keystroke: hello
      - delay: 1.5
      - say: Done
      - notify: Build ready
"""

from collections.abc import Callable, Mapping
from typing import Any

from tplrun.domain.errors import ConfigError, ErrorCodes

DEFAULT_APPLICATION = "Terminal"


def quote(value: Any) -> str:
    """AppleScript 문자열 리터럴로 변환 (\\ 와 " 이스케이프)."""
    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


# =============================================================================
# Step Renderers
# =============================================================================

def _activate(value: Any, application: str) -> list[str]:
    return [f"tell application {quote(value)} to activate"]


def _open(value: Any, application: str) -> list[str]:
    return [f"open location {quote(value)}"]


def _run(value: Any, application: str) -> list[str]:
    return [
        f"tell application {quote(application)}",
        f"    do script {quote(value)}",
        "end tell",
    ]


def _keystroke(value: Any, application: str) -> list[str]:
    return [f'tell application "System Events" to keystroke {quote(value)}']


def _delay(value: Any, application: str) -> list[str]:
    # bool은 int 하위 타입이라 별도 차단
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise ValueError(f"delay must be a non-negative number, got {value!r}")
    return [f"delay {value}"]


def _say(value: Any, application: str) -> list[str]:
    return [f"say {quote(value)}"]


def _notify(value: Any, application: str) -> list[str]:
    return [f'display notification {quote(value)} with title "tplrun"']


STEP_RENDERERS: dict[str, Callable[[Any, str], list[str]]] = {
    "activate": _activate,
    "open": _open,
    "run": _run,
    "keystroke": _keystroke,
    "delay": _delay,
    "say": _say,
    "notify": _notify,
}


# =============================================================================
# Parse
# =============================================================================

def parse(config: Mapping[str, Any]) -> str:
    """
    설정을 실행 가능한 AppleScript로 변환.

    Args:
        config: 로컬 설정 (load_local_config 결과)

    Returns:
        AppleScript 소스 (단계가 없으면 빈 문자열)

    Raises:
        ConfigError: INVALID_CONFIG
    """
    if not isinstance(config, Mapping):
        raise ConfigError(
            ErrorCodes.INVALID_CONFIG,
            "config must be a mapping",
            type=type(config).__name__,
        )

    application = str(config.get("application") or DEFAULT_APPLICATION)
    steps = config.get("steps") or []

    if not isinstance(steps, list):
        raise ConfigError(
            ErrorCodes.INVALID_CONFIG,
            "steps must be a list",
            type=type(steps).__name__,
        )

    lines: list[str] = []
    for index, step in enumerate(steps):
        if not isinstance(step, Mapping) or len(step) != 1:
            raise ConfigError(
                ErrorCodes.INVALID_CONFIG,
                f"step {index} must be a mapping with exactly one key",
                step=index,
            )

        (kind, value), = step.items()
        renderer = STEP_RENDERERS.get(kind)
        if renderer is None:
            raise ConfigError(
                ErrorCodes.INVALID_CONFIG,
                f"step {index} has unknown kind '{kind}'",
                step=index,
                kind=kind,
                known=sorted(STEP_RENDERERS),
            )

        try:
            lines.extend(renderer(value, application))
        except ValueError as e:
            raise ConfigError(
                ErrorCodes.INVALID_CONFIG,
                f"step {index}: {e}",
                step=index,
                kind=kind,
            ) from e

    return "\n".join(lines)
