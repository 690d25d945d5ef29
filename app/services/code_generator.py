"""
방문 패스 코드 생성기
호출부를 건드리지 않고 형식을 바꿀 수 있도록 전략 객체로 분리
"""
import secrets
from typing import Protocol
from app.config import settings


class PassCodeGenerator(Protocol):
    """패스 코드 생성 전략"""

    def generate(self) -> str:
        ...


class AlphanumericCodeGenerator:
    """대문자 영숫자 코드 생성기 (기본 8자리)"""

    def __init__(self, length: int | None = None, alphabet: str | None = None):
        self.length = settings.pass_code_length if length is None else length
        self.alphabet = settings.pass_code_alphabet if alphabet is None else alphabet
        if self.length < 1:
            raise ValueError("Code length must be positive")
        if not self.alphabet:
            raise ValueError("Code alphabet must not be empty")

    def generate(self) -> str:
        return "".join(secrets.choice(self.alphabet) for _ in range(self.length))


default_code_generator = AlphanumericCodeGenerator()
