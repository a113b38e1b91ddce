"""
Core layer: 설정, 변환, 실행.

역할:
- 설정 로드 (config.py)
- 설정 → AppleScript 변환 (parser.py)
- osascript 실행 (runner.py)
"""

from .config import load_config, resolve_home
from .parser import parse
from .runner import exec_string, run_osascript

__all__ = [
    # config
    "load_config",
    "resolve_home",
    # parser
    "parse",
    # runner
    "exec_string",
    "run_osascript",
]
