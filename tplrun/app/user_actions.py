"""
UserActions: 사용자 액션 오케스트레이터.

create / delete / list / run / save 를 받아
Prompter, TemplateManager, parser, runner 를 순서대로 구동한다.

규칙:
- 한 호출 안에서는 한 번에 하나의 대기만 (병렬 prompt/store 호출 없음)
- store/runner 에러는 감싸지 않고 그대로 전파
- 확인 거절은 에러가 아님 → None 반환, 변경 없음
- prompter.prompt / parser.parse / runner.exec_string 은 모듈 속성으로 호출
"""

import asyncio
import logging
from typing import Any

from tplrun.app import prompter
from tplrun.core import parser, runner
from tplrun.core.config import load_config
from tplrun.domain.errors import ErrorCodes, UnknownActionError
from tplrun.domain.schemas import (
    TEMPLATE_ACTION_CHOICES,
    Question,
    QuestionType,
    TemplateAction,
)
from tplrun.templates.manager import TemplateManager

logger = logging.getLogger(__name__)


async def execute_script(script: str, **runner_options: Any) -> Any:
    """
    runner.exec_string(callback 스타일)을 await 가능하게 감싼다.

    callback의 error가 None이 아니면 같은 인스턴스를 그대로 raise.
    CancelledError 는 future 취소로 전달한다.

    Args:
        script: 실행할 스크립트
        **runner_options: exec_string에 그대로 전달 (command, timeout)

    Returns:
        runner 결과
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future = loop.create_future()

    def _callback(error: BaseException | None, result: Any = None) -> None:
        if future.done():
            return
        if isinstance(error, asyncio.CancelledError):
            future.cancel()
        elif error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)

    runner.exec_string(script, _callback, **runner_options)
    return await future


class UserActions:
    """사용자 액션 진입점."""

    def __init__(
        self,
        template_manager: TemplateManager,
        runner_options: dict[str, Any] | None = None,
    ):
        self.template_manager = template_manager
        self.runner_options = runner_options or {}

    # =========================================================================
    # Create / Delete / Save
    # =========================================================================

    async def create_template(self, name: str | None = None) -> Any:
        """
        템플릿을 로컬 설정으로 꺼낸다 (없으면 새로 생성).

        Args:
            name: 템플릿 이름 (None이면 입력받음)

        Returns:
            copy_to_local 결과, 거절 시 None
        """
        if not name:
            answers = await prompter.prompt([
                Question(
                    type=QuestionType.INPUT,
                    name="template",
                    message="Template name",
                ),
            ])
            name = answers.get("template")

        if self.template_manager.exists(name):
            answers = await prompter.prompt([
                Question(
                    type=QuestionType.CONFIRM,
                    name="overwrite",
                    message=f"Template '{name}' already exists. Overwrite?",
                    default=False,
                ),
            ])
            if not answers.get("overwrite"):
                logger.debug(f"Create declined for existing template '{name}'")
                return None

        return await self.template_manager.copy_to_local(name)

    async def delete_template(self, name: str) -> Any:
        """템플릿 삭제 (없으면 아무것도 묻지 않음)."""
        if not self.template_manager.exists(name):
            logger.debug(f"Template '{name}' does not exist, nothing to delete")
            return None

        answers = await prompter.prompt([
            Question(
                type=QuestionType.CONFIRM,
                name="del",
                message=f"Delete template '{name}'?",
                default=False,
            ),
        ])
        if not answers.get("del"):
            logger.debug(f"Delete declined for template '{name}'")
            return None

        return await self.template_manager.delete(name)

    async def save_template(self, name: str) -> Any:
        """
        템플릿을 로컬 설정으로 저장.

        로컬 설정이 이미 있으면 덮어쓸지 확인한다.
        """
        if self.template_manager.local_config_exists():
            answers = await prompter.prompt([
                Question(
                    type=QuestionType.CONFIRM,
                    name="overwrite",
                    message="A local config already exists. Overwrite?",
                    default=False,
                ),
            ])
            if not answers.get("overwrite"):
                logger.debug("Save declined, local config kept")
                return None

        return await self.template_manager.copy_to_local(name)

    # =========================================================================
    # List
    # =========================================================================

    async def list_templates(self) -> Any:
        """
        템플릿 선택 + 액션 메뉴를 한 batch로 묻고 해당 액션으로 분기.

        Returns:
            선택된 액션 메서드의 결과 (그대로)

        Raises:
            UnknownActionError: 메뉴에 없는 액션
        """
        templates = await self.template_manager.get_all()

        answers = await prompter.prompt([
            Question(
                type=QuestionType.LIST,
                name="template",
                message="Select a template",
                choices=list(templates),
            ),
            Question(
                type=QuestionType.EXPAND,
                name="action",
                message="What do you want to do?",
                choices=list(TEMPLATE_ACTION_CHOICES),
            ),
        ])

        template = answers.get("template")
        action = answers.get("action")

        try:
            selected = TemplateAction(action)
        except ValueError:
            raise UnknownActionError(
                ErrorCodes.UNKNOWN_ACTION,
                f"Unknown action '{action}'",
                action=action,
                template=template,
            ) from None

        if selected is TemplateAction.DELETE:
            return await self.delete_template(template)
        if selected is TemplateAction.RUN:
            if template is None and not self.template_manager.local_config_exists():
                # 선택도 로컬 설정도 없으면 run(None) 이 다시 목록을 연다
                logger.info("No template selected and no local config, nothing to run")
                return None
            return await self.run(template)
        return await self.save_template(template)

    # =========================================================================
    # Run
    # =========================================================================

    async def run(self, name: str | None = None) -> Any:
        """
        로컬 설정을 로드 → 변환 → 실행.

        이름 없이 호출했는데 로컬 설정이 없으면 템플릿 목록으로 넘어간다.
        로컬 설정 존재 여부는 이름과 무관하게 전역으로 확인한다.

        Returns:
            runner 결과 또는 list_templates() 결과
        """
        if not name and not self.template_manager.local_config_exists():
            return await self.list_templates()

        config = await self.template_manager.load_local_config()
        script = parser.parse(config)
        logger.debug(f"Running script ({len(script)} chars)")
        return await execute_script(script, **self.runner_options)


def create(
    template_manager: TemplateManager | None = None,
    runner_options: dict[str, Any] | None = None,
) -> UserActions:
    """
    UserActions 생성.

    Args:
        template_manager: 주입할 저장소 (None이면 load_config() 기반 TemplateManager)
        runner_options: exec_string 옵션 (command, timeout)
    """
    if template_manager is None:
        template_manager = TemplateManager.from_config(load_config())
    return UserActions(template_manager, runner_options)
