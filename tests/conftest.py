"""
Pytest fixtures for tplrun tests.

구성:
- 파일 기반 저장소 (tmp_path 아래 home / 작업 디렉터리)
- 주입용 저장소 stub
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import yaml

from tplrun.templates.manager import TemplateManager

# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def home_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """테스트용 tplrun 홈 (TPLRUN_HOME 고정)."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("TPLRUN_HOME", str(home))
    monkeypatch.delenv("TPLRUN_LOG_LEVEL", raising=False)
    return home


@pytest.fixture
def templates_root(home_dir: Path) -> Path:
    """테스트용 templates/ 루트."""
    root = home_dir / "templates"
    root.mkdir()
    return root


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    """로컬 설정이 놓이는 작업 디렉터리."""
    work = tmp_path / "work"
    work.mkdir()
    return work


@pytest.fixture
def manager(templates_root: Path, work_dir: Path) -> TemplateManager:
    """TemplateManager 인스턴스."""
    return TemplateManager(templates_root, local_dir=work_dir)


# =============================================================================
# Config Fixtures
# =============================================================================

@pytest.fixture
def sample_config() -> dict:
    """정상 로컬 설정."""
    return {
        "application": "iTerm",
        "steps": [
            {"activate": "iTerm"},
            {"run": "npm start"},
            {"delay": 2},
            {"open": "http://localhost:3000"},
        ],
    }


@pytest.fixture
def write_template(templates_root: Path):
    """템플릿 파일 작성 헬퍼."""
    def _write(template_id: str, config: dict) -> Path:
        path = templates_root / f"{template_id}.yaml"
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(config, f, allow_unicode=True)
        return path

    return _write


# =============================================================================
# Stub Fixtures
# =============================================================================

@pytest.fixture
def template_manager_stub() -> MagicMock:
    """
    주입용 저장소 stub.

    기본값: 템플릿 없음, 로컬 설정 없음, 모든 비동기 호출 성공
    """
    stub = MagicMock(spec=TemplateManager)
    stub.exists.return_value = False
    stub.local_config_exists.return_value = False
    stub.copy_to_local = AsyncMock(return_value=Path("/work/.tplrun.yaml"))
    stub.delete = AsyncMock(return_value=None)
    stub.get_all = AsyncMock(return_value=[])
    stub.load_local_config = AsyncMock(return_value={})
    return stub
