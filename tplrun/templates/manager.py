"""
템플릿 저장소: 템플릿 YAML 보관 + 로컬 설정 관리.

핵심 규칙:
- 템플릿 = <templates_root>/<template_id>.yaml
- 로컬 설정 = <local_dir>/.tplrun.yaml (run이 읽는 활성 설정)
- template_id 네이밍: 소문자/숫자/_/-, 최대 50자
- 변경 작업은 템플릿별 FileLock으로 보호
- 비동기 메서드의 파일 I/O는 worker thread에서 실행
"""

import asyncio
import logging
import re
import shutil
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import yaml
from filelock import FileLock, Timeout

from tplrun.core.config import load_config, resolve_home
from tplrun.domain.constants import (
    DEFAULT_LOCK_TIMEOUT_SECONDS,
    LOCAL_CONFIG_FILENAME,
    LOCKS_DIRNAME,
    TEMPLATE_SUFFIX,
    TEMPLATES_DIRNAME,
)
from tplrun.domain.errors import ErrorCodes, TemplateError

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

# template_id 네이밍 규칙
TEMPLATE_ID_PATTERN = re.compile(r"^[a-z0-9]([a-z0-9_-]*[a-z0-9])?$")
TEMPLATE_ID_MAX_LENGTH = 50
FORBIDDEN_CHARS = set('/\\:*?"<>| ')

# 존재하지 않는 템플릿을 로컬로 꺼낼 때 쓰는 골격
DEFAULT_TEMPLATE: dict[str, Any] = {
    "application": "Terminal",
    "steps": [
        {"activate": "Terminal"},
        {"run": "echo 'edit .tplrun.yaml to get started'"},
    ],
}


# =============================================================================
# Validation
# =============================================================================

def validate_template_id(template_id: str) -> None:
    """
    template_id 유효성 검증.

    규칙:
    - 소문자 + 숫자 + 언더스코어 + 하이픈만 허용
    - 시작/끝은 소문자 또는 숫자
    - 최대 50자
    - 금지 문자: / \\ : * ? " < > | 공백

    Raises:
        TemplateError: INVALID_TEMPLATE_ID
    """
    if not template_id:
        raise TemplateError(
            ErrorCodes.INVALID_TEMPLATE_ID,
            "template_id cannot be empty",
        )

    if len(template_id) > TEMPLATE_ID_MAX_LENGTH:
        raise TemplateError(
            ErrorCodes.INVALID_TEMPLATE_ID,
            f"template_id exceeds {TEMPLATE_ID_MAX_LENGTH} characters",
            length=len(template_id),
        )

    found_forbidden = set(template_id) & FORBIDDEN_CHARS
    if found_forbidden:
        raise TemplateError(
            ErrorCodes.INVALID_TEMPLATE_ID,
            f"template_id contains forbidden characters: {sorted(found_forbidden)}",
            forbidden=sorted(found_forbidden),
        )

    if not TEMPLATE_ID_PATTERN.match(template_id):
        raise TemplateError(
            ErrorCodes.INVALID_TEMPLATE_ID,
            "template_id must be lowercase alphanumeric with '_' or '-', "
            "start/end with alphanumeric",
            pattern=TEMPLATE_ID_PATTERN.pattern,
        )


def get_template_path(templates_root: Path, template_id: str) -> Path:
    """템플릿 파일 경로 반환 (존재 여부는 확인하지 않음)."""
    return templates_root / f"{template_id}{TEMPLATE_SUFFIX}"


# =============================================================================
# Template Manager
# =============================================================================

class TemplateManager:
    """
    템플릿 저장소.

    구조:
    <home>/templates/
    ├── .locks/               # 템플릿별 락
    └── <template_id>.yaml    # 템플릿 본문

    <local_dir>/.tplrun.yaml  # 활성 로컬 설정
    """

    def __init__(
        self,
        templates_root: Path | None = None,
        local_dir: Path | None = None,
        local_config_filename: str = LOCAL_CONFIG_FILENAME,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT_SECONDS,
    ):
        """
        Args:
            templates_root: 템플릿 폴더 (None이면 설정의 <home>/templates)
            local_dir: 로컬 설정이 놓이는 폴더 (None이면 현재 작업 디렉터리)
            local_config_filename: 로컬 설정 파일명
            lock_timeout: 락 timeout (초)
        """
        if templates_root is None:
            templates_root = resolve_home(load_config()) / TEMPLATES_DIRNAME

        self.templates_root = templates_root
        self.local_dir = local_dir if local_dir is not None else Path.cwd()
        self.local_config_path = self.local_dir / local_config_filename
        self.lock_timeout = lock_timeout
        self._locks_dir = templates_root / LOCKS_DIRNAME

    @classmethod
    def from_config(
        cls,
        config: dict[str, Any],
        local_dir: Path | None = None,
    ) -> "TemplateManager":
        """load_config() 결과로 생성."""
        return cls(
            templates_root=Path(config["home"]) / TEMPLATES_DIRNAME,
            local_dir=local_dir,
            local_config_filename=config.get("local_config_filename", LOCAL_CONFIG_FILENAME),
            lock_timeout=float(
                config.get("store", {}).get("lock_timeout_seconds", DEFAULT_LOCK_TIMEOUT_SECONDS)
            ),
        )

    @contextmanager
    def _template_lock(self, template_id: str) -> Generator[None, None, None]:
        """
        템플릿별 락 획득.

        Raises:
            TemplateError: TEMPLATE_LOCK_TIMEOUT
        """
        self._locks_dir.mkdir(parents=True, exist_ok=True)
        lock = FileLock(self._locks_dir / f"{template_id}.lock", timeout=self.lock_timeout)

        try:
            lock.acquire()
        except Timeout:
            raise TemplateError(
                ErrorCodes.TEMPLATE_LOCK_TIMEOUT,
                f"Failed to acquire lock for template '{template_id}'",
                template_id=template_id,
                timeout=self.lock_timeout,
            )

        try:
            yield
        finally:
            lock.release()

    # =========================================================================
    # Queries
    # =========================================================================

    def exists(self, template_id: str) -> bool:
        """템플릿 존재 여부. 유효하지 않은 template_id 는 False."""
        try:
            validate_template_id(template_id)
        except TemplateError:
            return False
        return get_template_path(self.templates_root, template_id).is_file()

    def local_config_exists(self) -> bool:
        """작업 디렉터리에 로컬 설정이 있는지."""
        return self.local_config_path.is_file()

    async def get_all(self) -> list[str]:
        """
        모든 템플릿 ID (정렬됨).

        Returns:
            template_id 목록 (폴더가 없으면 빈 목록)
        """
        return await asyncio.to_thread(self._list_ids)

    async def load_local_config(self) -> dict[str, Any]:
        """
        로컬 설정 로드.

        Returns:
            설정 dict (빈 파일이면 {})

        Raises:
            TemplateError: LOCAL_CONFIG_NOT_FOUND, LOCAL_CONFIG_CORRUPT
        """
        return await asyncio.to_thread(self._read_local_config)

    # =========================================================================
    # Mutations
    # =========================================================================

    async def copy_to_local(self, template_id: str) -> Path:
        """
        템플릿을 로컬 설정으로 복사.

        템플릿이 없으면 DEFAULT_TEMPLATE로 먼저 생성한 뒤 복사한다.

        Returns:
            로컬 설정 파일 경로

        Raises:
            TemplateError: INVALID_TEMPLATE_ID, TEMPLATE_LOCK_TIMEOUT
        """
        validate_template_id(template_id)
        return await asyncio.to_thread(self._copy_to_local, template_id)

    async def delete(self, template_id: str) -> None:
        """
        템플릿 삭제.

        Raises:
            TemplateError: INVALID_TEMPLATE_ID, TEMPLATE_NOT_FOUND, TEMPLATE_LOCK_TIMEOUT
        """
        validate_template_id(template_id)
        await asyncio.to_thread(self._delete, template_id)

    # =========================================================================
    # Internal Helpers (blocking)
    # =========================================================================

    def _list_ids(self) -> list[str]:
        if not self.templates_root.exists():
            return []

        ids = []
        for path in self.templates_root.iterdir():
            if not path.is_file() or path.name.startswith("."):
                continue
            if path.suffix != TEMPLATE_SUFFIX:
                continue
            ids.append(path.stem)
        return sorted(ids)

    def _read_local_config(self) -> dict[str, Any]:
        path = self.local_config_path
        if not path.is_file():
            raise TemplateError(
                ErrorCodes.LOCAL_CONFIG_NOT_FOUND,
                f"No local config at {path}",
                path=str(path),
            )

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise TemplateError(
                ErrorCodes.LOCAL_CONFIG_CORRUPT,
                f"Local config is not valid YAML: {e}",
                path=str(path),
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise TemplateError(
                ErrorCodes.LOCAL_CONFIG_CORRUPT,
                "Local config must be a mapping",
                path=str(path),
                type=type(data).__name__,
            )
        return data

    def _copy_to_local(self, template_id: str) -> Path:
        with self._template_lock(template_id):
            template_path = get_template_path(self.templates_root, template_id)

            if not template_path.exists():
                self.templates_root.mkdir(parents=True, exist_ok=True)
                with open(template_path, "w", encoding="utf-8") as f:
                    yaml.dump(DEFAULT_TEMPLATE, f, default_flow_style=False, allow_unicode=True, sort_keys=False)
                logger.info(f"Created template '{template_id}' at {template_path}")

            self.local_dir.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(template_path, self.local_config_path)

        logger.info(f"Copied template '{template_id}' to {self.local_config_path}")
        return self.local_config_path

    def _delete(self, template_id: str) -> None:
        with self._template_lock(template_id):
            template_path = get_template_path(self.templates_root, template_id)
            if not template_path.is_file():
                raise TemplateError(
                    ErrorCodes.TEMPLATE_NOT_FOUND,
                    f"Template '{template_id}' not found",
                    template_id=template_id,
                )
            template_path.unlink()

        logger.info(f"Deleted template '{template_id}'")
