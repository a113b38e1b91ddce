"""
tplrun CLI 진입점.

사용법:
    # 템플릿을 로컬 설정(.tplrun.yaml)으로 꺼내기 (없으면 새로 생성)
    tplrun create my_template

    # 로컬 설정 실행 (없으면 템플릿 목록 메뉴)
    tplrun run

    # 템플릿 목록 → 삭제/실행/저장 선택
    tplrun list

    # 템플릿 삭제 / 로컬 설정으로 저장
    tplrun delete my_template
    tplrun save my_template
"""

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Any

from tplrun.app import user_actions
from tplrun.core.config import load_config
from tplrun.domain.constants import HOME_ENV_VAR
from tplrun.domain.errors import TplrunError
from tplrun.templates.manager import TemplateManager

logger = logging.getLogger(__name__)

COMMANDS = {
    "create": "Copy a template into the local config, creating it if needed",
    "delete": "Delete a template",
    "list": "Pick a template and an action from a menu",
    "run": "Run the local config (falls back to the template menu)",
    "save": "Save a template as the local config",
}

# 이름이 반드시 필요한 명령
NAME_REQUIRED = {"delete", "save"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tplrun",
        description="Manage automation templates and run them as AppleScript",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "command",
        choices=list(COMMANDS),
        help="; ".join(f"{k}: {v}" for k, v in COMMANDS.items()),
    )
    parser.add_argument(
        "name",
        nargs="?",
        help="Template name",
    )
    parser.add_argument(
        "--home",
        type=str,
        help=f"tplrun home directory (default: ${HOME_ENV_VAR} or ~/.tplrun)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def configure_logging(config: dict[str, Any], verbose: bool = False) -> None:
    log_config = config.get("logging", {})
    level = "DEBUG" if verbose else str(log_config.get("level", "WARNING")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format=log_config.get("format", "%(asctime)s [%(levelname)s] %(message)s"),
        datefmt=log_config.get("datefmt", "%Y-%m-%d %H:%M:%S"),
    )


def build_user_actions(config: dict[str, Any]) -> user_actions.UserActions:
    """설정으로 저장소와 runner 옵션을 구성한다."""
    runner_config = config.get("runner", {})
    runner_options: dict[str, Any] = {}
    if "command" in runner_config:
        runner_options["command"] = runner_config["command"]
    if "timeout_seconds" in runner_config:
        runner_options["timeout"] = float(runner_config["timeout_seconds"])

    return user_actions.create(
        TemplateManager.from_config(config),
        runner_options=runner_options,
    )


async def dispatch(actions: user_actions.UserActions, command: str, name: str | None) -> Any:
    """명령 → 액션 메서드."""
    if command == "create":
        return await actions.create_template(name)
    if command == "delete":
        return await actions.delete_template(name)
    if command == "list":
        return await actions.list_templates()
    if command == "run":
        return await actions.run(name)
    return await actions.save_template(name)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command in NAME_REQUIRED and not args.name:
        parser.error(f"'{args.command}' requires a template name")

    config = load_config(home=args.home)
    configure_logging(config, args.verbose)

    actions = build_user_actions(config)
    logger.debug(f"Home: {config['home']}, command: {args.command}, name: {args.name}")

    try:
        result = asyncio.run(dispatch(actions, args.command, args.name))
    except TplrunError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        return 130

    if isinstance(result, Path):
        print(f"Wrote {result}")
    elif isinstance(result, str) and result:
        print(result)
    return 0


if __name__ == "__main__":
    exit(main())
