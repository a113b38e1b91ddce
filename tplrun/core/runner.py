"""
스크립트 실행기: AppleScript → osascript.

callback 스타일 인터페이스:
    exec_string(script, callback)   # callback(error | None, result)

- 실제 실행은 worker thread (subprocess.run)
- callback은 항상 이벤트 루프 스레드에서 호출
- 호출자는 실행 중인 이벤트 루프 안에 있어야 함
"""

import asyncio
import logging
import subprocess
from collections.abc import Callable
from typing import Any

from tplrun.domain.constants import DEFAULT_SCRIPT_TIMEOUT_SECONDS, OSASCRIPT_COMMAND
from tplrun.domain.errors import ErrorCodes, ScriptExecutionError

logger = logging.getLogger(__name__)

Callback = Callable[[BaseException | None, Any], None]

# 출력 길이 제한 (에러 메시지용)
MAX_OUTPUT_SIZE = 4000

# 실행 중인 future 참조 유지 (GC 방지)
_pending: set[asyncio.Future] = set()


def run_osascript(
    script: str,
    command: str = OSASCRIPT_COMMAND,
    timeout: float = DEFAULT_SCRIPT_TIMEOUT_SECONDS,
) -> str:
    """
    스크립트를 동기 실행 (blocking).

    Args:
        script: AppleScript 소스
        command: 실행 파일 (기본 osascript)
        timeout: 제한 시간 (초)

    Returns:
        stdout (앞뒤 공백 제거)

    Raises:
        ScriptExecutionError: RUNNER_NOT_FOUND, SCRIPT_TIMEOUT, SCRIPT_FAILED
    """
    if not script.strip():
        return ""

    try:
        result = subprocess.run(
            [command, "-"],
            input=script,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise ScriptExecutionError(
            ErrorCodes.RUNNER_NOT_FOUND,
            f"Script runner '{command}' not found (AppleScript requires macOS)",
            command=command,
        ) from e
    except subprocess.TimeoutExpired as e:
        raise ScriptExecutionError(
            ErrorCodes.SCRIPT_TIMEOUT,
            f"Script timed out after {timeout} seconds",
            timeout=timeout,
        ) from e

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()[:MAX_OUTPUT_SIZE]
        raise ScriptExecutionError(
            ErrorCodes.SCRIPT_FAILED,
            stderr or f"{command} exited with {result.returncode}",
            returncode=result.returncode,
        )

    return (result.stdout or "").strip()[:MAX_OUTPUT_SIZE]


def exec_string(
    script: str,
    callback: Callback,
    command: str = OSASCRIPT_COMMAND,
    timeout: float = DEFAULT_SCRIPT_TIMEOUT_SECONDS,
) -> None:
    """
    스크립트를 비동기 실행하고 완료 시 callback 호출.

    Args:
        script: AppleScript 소스
        callback: callback(error, result). 성공 시 error는 None, 취소 시 CancelledError
        command: 실행 파일
        timeout: 제한 시간 (초)
    """
    loop = asyncio.get_running_loop()
    future = loop.run_in_executor(None, run_osascript, script, command, timeout)
    _pending.add(future)

    def _done(fut: asyncio.Future) -> None:
        _pending.discard(fut)
        if fut.cancelled():
            logger.warning("Script execution cancelled")
            callback(asyncio.CancelledError(), None)
            return

        error = fut.exception()
        if error is not None:
            logger.error(f"Script execution failed: {error}")
            callback(error, None)
            return

        logger.debug("Script execution finished")
        callback(None, fut.result())

    future.add_done_callback(_done)
