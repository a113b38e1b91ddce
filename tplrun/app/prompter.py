"""
Prompter: 질문 batch → 응답 dict.

rich.prompt 기반. 질문은 batch 순서대로 묻고, 응답은 질문 name으로 키잉.
rich 프롬프트는 blocking이라 worker thread에서 실행한다.
"""

import asyncio
from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.prompt import Confirm, Prompt

from tplrun.domain.schemas import ExpandChoice, Question, QuestionType

console = Console()


def _ask_input(question: Question) -> str:
    if question.default is None:
        return Prompt.ask(question.message, console=console)
    return Prompt.ask(question.message, default=str(question.default), console=console)


def _ask_confirm(question: Question) -> bool:
    return Confirm.ask(question.message, default=bool(question.default), console=console)


def _ask_list(question: Question) -> str | None:
    """
    번호 또는 이름으로 선택. 선택지가 없으면 None.

    이름과 번호가 겹치면 (예: 템플릿 "2") 이름이 우선한다.
    """
    names = [str(c) for c in question.choices]
    if not names:
        console.print("[yellow]Nothing to choose from.[/]")
        return None

    console.print(f"\n[bold]{question.message}[/]")
    for index, name in enumerate(names, start=1):
        console.print(f"  [cyan]{index}[/]) {name}")

    numbers = [str(i) for i in range(1, len(names) + 1)]
    default = str(question.default) if question.default is not None else "1"
    answer = Prompt.ask(
        "Choose",
        choices=numbers + names,
        default=default,
        show_choices=False,
        console=console,
    )
    if answer in names:
        return answer
    return names[int(answer) - 1]


def _ask_expand(question: Question) -> str:
    """한 글자 단축키로 선택, choice의 value 반환."""
    choices: list[ExpandChoice] = list(question.choices)
    for choice in choices:
        console.print(f"  [cyan]{choice.key}[/]) {choice.name}")

    keys = [c.key for c in choices]
    kwargs: dict[str, Any] = {}
    if question.default is not None:
        kwargs["default"] = str(question.default)
    key = Prompt.ask(question.message, choices=keys, console=console, **kwargs)
    return next(c.value for c in choices if c.key == key)


ASKERS = {
    QuestionType.INPUT: _ask_input,
    QuestionType.CONFIRM: _ask_confirm,
    QuestionType.LIST: _ask_list,
    QuestionType.EXPAND: _ask_expand,
}


def ask_all(questions: Sequence[Question]) -> dict[str, Any]:
    """질문 batch를 순서대로 묻는다 (blocking)."""
    answers: dict[str, Any] = {}
    for question in questions:
        answers[question.name] = ASKERS[question.type](question)
    return answers


async def prompt(questions: Sequence[Question]) -> dict[str, Any]:
    """
    질문 batch를 사용자에게 묻고 응답을 반환.

    Args:
        questions: 질문 목록 (순서 유지)

    Returns:
        {question.name: answer}
    """
    return await asyncio.to_thread(ask_all, list(questions))
