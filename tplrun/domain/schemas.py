"""
Domain schemas: 프롬프트 질문 명세와 메뉴 액션.

질문 batch는 호출마다 생성되고 응답(dict)과 함께 버려진다.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class QuestionType(str, Enum):
    """질문 종류."""
    INPUT = "input"      # 자유 입력
    CONFIRM = "confirm"  # yes/no
    LIST = "list"        # 단일 선택 목록
    EXPAND = "expand"    # 단축키 메뉴


class TemplateAction(str, Enum):
    """템플릿 목록 메뉴에서 선택 가능한 액션."""
    DELETE = "delete"
    RUN = "run"
    SAVE = "save"


@dataclass
class ExpandChoice:
    """expand 메뉴 항목 (key는 한 글자)."""
    key: str
    name: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "name": self.name, "value": self.value}


@dataclass
class Question:
    """
    프롬프트 질문 하나.

    name은 응답 dict의 키가 된다.
    choices: list → 문자열 목록, expand → ExpandChoice 목록
    """
    type: QuestionType
    name: str
    message: str
    choices: list[Any] = field(default_factory=list)
    default: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "name": self.name,
            "message": self.message,
            "choices": [
                c.to_dict() if isinstance(c, ExpandChoice) else c
                for c in self.choices
            ],
            "default": self.default,
        }


# 목록 메뉴의 기본 액션 (단축키 순서 유지)
TEMPLATE_ACTION_CHOICES = [
    ExpandChoice(key="d", name="Delete template", value=TemplateAction.DELETE.value),
    ExpandChoice(key="r", name="Run template", value=TemplateAction.RUN.value),
    ExpandChoice(key="s", name="Save template to local config", value=TemplateAction.SAVE.value),
]
