"""App layer: 프롬프트, 사용자 액션, CLI."""
