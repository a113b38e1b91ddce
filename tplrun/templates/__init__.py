"""
Templates layer: 템플릿 저장소 모듈.

역할:
- 템플릿 조회/복사/삭제 (manager.py)
- 로컬 설정 존재 확인 및 로드
"""

from .manager import (
    DEFAULT_TEMPLATE,
    TemplateManager,
    get_template_path,
    validate_template_id,
)

__all__ = [
    "TemplateManager",
    "DEFAULT_TEMPLATE",
    "validate_template_id",
    "get_template_path",
]
