"""
환경 설정 모듈
환경별 설정을 관리하고 유효성 검증 수행
"""
import os
from pathlib import Path
from typing import List
from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator

# 저장소 루트 (content/ 기본 경로 계산용)
BASE_DIR = Path(__file__).resolve().parent.parent.parent
DEFAULT_DOCUMENT = BASE_DIR / "content" / "containerize-an-application.md"


class BaseConfig(BaseSettings):
    """
    기본 설정 클래스
    모든 환경에서 공통으로 사용되는 설정
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # 애플리케이션 설정
    # ===========================================
    SERVICE_NAME: str = Field(default="quizdoc")
    ENV: str = Field(default="development")
    LOG_LEVEL: str = Field(default="INFO")
    DEBUG: bool = Field(default=False)

    # ===========================================
    # 퀴즈 문서 설정
    # ===========================================
    QUIZ_DOCUMENT_PATH: str = Field(default=str(DEFAULT_DOCUMENT))
    DOCUMENT_ENCODING: str = Field(default="utf-8")

    # ===========================================
    # CORS 설정
    # ===========================================
    CORS_ORIGINS: str = Field(default="*")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v_upper

    @cached_property
    def cors_origins_list(self) -> List[str]:
        """CORS origins를 리스트로 반환"""
        if not self.CORS_ORIGINS:
            return []
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @cached_property
    def document_path(self) -> Path:
        """퀴즈 문서 경로"""
        return Path(self.QUIZ_DOCUMENT_PATH).expanduser()

    @cached_property
    def is_development(self) -> bool:
        """개발 환경 여부"""
        return self.ENV.lower() in ("dev", "development", "local")

    @cached_property
    def is_production(self) -> bool:
        """운영 환경 여부"""
        return self.ENV.lower() in ("prod", "production")


class DevelopmentConfig(BaseConfig):
    """개발 환경 설정"""
    ENV: str = Field(default="development")
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="DEBUG")


class StagingConfig(BaseConfig):
    """스테이징 환경 설정"""
    ENV: str = Field(default="staging")
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")


class ProductionConfig(BaseConfig):
    """운영 환경 설정"""
    ENV: str = Field(default="production")
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="WARNING")


class TestConfig(BaseConfig):
    """테스트 환경 설정"""
    ENV: str = Field(default="test")
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="DEBUG")


def get_settings() -> BaseConfig:
    """
    환경에 맞는 설정 객체 반환

    ENV 환경변수에 따라 적절한 설정 클래스를 선택
    """
    env = os.getenv("ENV", "development").lower()

    config_map = {
        "development": DevelopmentConfig,
        "dev": DevelopmentConfig,
        "local": DevelopmentConfig,
        "staging": StagingConfig,
        "stage": StagingConfig,
        "production": ProductionConfig,
        "prod": ProductionConfig,
        "test": TestConfig,
        "testing": TestConfig,
    }

    config_class = config_map.get(env, DevelopmentConfig)
    return config_class()


# 전역 설정 인스턴스
settings = get_settings()


# ===========================================
# 설정 검증 함수
# ===========================================

def validate_required_settings(config: BaseConfig = None) -> List[str]:
    """
    필수 설정이 모두 있는지 검증

    Returns:
        누락된 설정 목록
    """
    config = config or settings
    missing = []

    if not config.QUIZ_DOCUMENT_PATH or not config.document_path.is_file():
        missing.append("QUIZ_DOCUMENT_PATH")

    return missing
