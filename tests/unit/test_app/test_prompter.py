"""
test_prompter.py - rich 기반 Prompter 테스트

rich.prompt.Prompt / Confirm 을 patch 하여 입력을 흉내낸다.
"""

from unittest.mock import patch

import pytest

from tplrun.app import prompter
from tplrun.domain.schemas import (
    TEMPLATE_ACTION_CHOICES,
    Question,
    QuestionType,
)


@pytest.fixture
def prompt_ask():
    with patch.object(prompter.Prompt, "ask") as mock:
        yield mock


@pytest.fixture
def confirm_ask():
    with patch.object(prompter.Confirm, "ask") as mock:
        yield mock


class TestAskAll:
    """질문 종류별 응답 변환."""

    def test_input(self, prompt_ask):
        prompt_ask.return_value = "my_template"

        answers = prompter.ask_all([
            Question(type=QuestionType.INPUT, name="template", message="Template name"),
        ])

        assert answers == {"template": "my_template"}

    def test_input_with_default(self, prompt_ask):
        prompt_ask.return_value = "dflt"

        prompter.ask_all([
            Question(type=QuestionType.INPUT, name="template", message="Name", default="dflt"),
        ])

        assert prompt_ask.call_args.kwargs["default"] == "dflt"

    def test_confirm(self, confirm_ask):
        confirm_ask.return_value = False

        answers = prompter.ask_all([
            Question(type=QuestionType.CONFIRM, name="overwrite", message="Overwrite?"),
        ])

        assert answers == {"overwrite": False}
        assert confirm_ask.call_args.kwargs["default"] is False

    def test_list_by_number(self, prompt_ask):
        prompt_ask.return_value = "2"

        answers = prompter.ask_all([
            Question(type=QuestionType.LIST, name="template", message="Pick", choices=["a", "b"]),
        ])

        assert answers == {"template": "b"}

    def test_list_by_name(self, prompt_ask):
        prompt_ask.return_value = "a"

        answers = prompter.ask_all([
            Question(type=QuestionType.LIST, name="template", message="Pick", choices=["a", "b"]),
        ])

        assert answers == {"template": "a"}

    def test_list_name_wins_over_number(self, prompt_ask):
        """숫자 이름 템플릿 "2" → 두 번째 항목이 아니라 "2"."""
        prompt_ask.return_value = "2"

        answers = prompter.ask_all([
            Question(type=QuestionType.LIST, name="template", message="Pick", choices=["2", "a"]),
        ])

        assert answers == {"template": "2"}

    def test_list_number_beyond_names(self, prompt_ask):
        prompt_ask.return_value = "2"

        answers = prompter.ask_all([
            Question(type=QuestionType.LIST, name="template", message="Pick", choices=["1", "b"]),
        ])

        assert answers == {"template": "b"}

    def test_list_empty(self, prompt_ask):
        """선택지 없음 → None, 입력 요청 안 함."""
        answers = prompter.ask_all([
            Question(type=QuestionType.LIST, name="template", message="Pick", choices=[]),
        ])

        assert answers == {"template": None}
        prompt_ask.assert_not_called()

    def test_expand_returns_value(self, prompt_ask):
        prompt_ask.return_value = "r"

        answers = prompter.ask_all([
            Question(
                type=QuestionType.EXPAND,
                name="action",
                message="Action",
                choices=list(TEMPLATE_ACTION_CHOICES),
            ),
        ])

        assert answers == {"action": "run"}
        assert prompt_ask.call_args.kwargs["choices"] == ["d", "r", "s"]

    def test_batch_order(self, prompt_ask):
        """batch 순서대로 묻는다."""
        prompt_ask.side_effect = ["1", "s"]

        answers = prompter.ask_all([
            Question(type=QuestionType.LIST, name="template", message="Pick", choices=["x"]),
            Question(
                type=QuestionType.EXPAND,
                name="action",
                message="Action",
                choices=list(TEMPLATE_ACTION_CHOICES),
            ),
        ])

        assert answers == {"template": "x", "action": "save"}


class TestPrompt:
    """비동기 prompt 래퍼."""

    @pytest.mark.asyncio
    async def test_prompt_runs_batch(self, prompt_ask):
        prompt_ask.return_value = "hello"

        answers = await prompter.prompt([
            Question(type=QuestionType.INPUT, name="template", message="Name"),
        ])

        assert answers == {"template": "hello"}
