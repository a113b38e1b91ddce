"""
tplrun: 자동화 템플릿 관리 + AppleScript 실행 CLI.

레이어:
- domain/     에러, 상수, 질문 스키마
- core/       설정, 설정 → 스크립트 변환, osascript 실행
- templates/  템플릿 저장소
- app/        프롬프트, 액션 오케스트레이터, CLI
"""

__version__ = "0.1.0"
