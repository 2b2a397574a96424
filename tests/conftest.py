"""
테스트 공통 설정 및 Fixtures
pytest의 conftest.py는 모든 테스트에서 공유되는 fixture를 정의
"""
import os
import sys
import pytest
from pathlib import Path
from typing import Callable, Generator

# 설정 모듈 import 전에 테스트 환경 지정
os.environ["ENV"] = "test"

# 프로젝트 루트를 path에 추가
ROOT_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT_DIR))

from fastapi.testclient import TestClient

from quizdoc.services.quiz_store import QuizStore, get_quiz_store


# ===========================================
# 문서 Fixtures
# ===========================================

CLOJURE_QUIZ_DOCUMENT = """\
# Containerize a Clojure application

Some prose about Dockerfiles.

{{< quiz >}}
### Which Dockerfile instruction sets the base image?
- [ ] RUN
- [x] FROM
> Every build stage starts with FROM.

### Which base image is commonly used for Clojure applications?
- [x] openjdk
- [ ] ubuntu
- [ ] alpine
- [ ] node
> Clojure runs on the JVM.
> Clojure images build on a Java image.
{{< /quiz >}}

More prose after the quiz.
"""


@pytest.fixture
def sample_document() -> str:
    """정상 퀴즈 블록이 들어 있는 문서"""
    return CLOJURE_QUIZ_DOCUMENT


@pytest.fixture
def content_document_path() -> Path:
    """저장소에 포함된 튜토리얼 문서"""
    return ROOT_DIR / "content" / "containerize-an-application.md"


@pytest.fixture
def make_store() -> Callable[[str], QuizStore]:
    """문서 텍스트로 QuizStore 생성"""
    def _make(text: str) -> QuizStore:
        return QuizStore(text=text)
    return _make


@pytest.fixture
def write_document(tmp_path) -> Callable[[str], Path]:
    """임시 파일에 문서 저장"""
    def _write(text: str, name: str = "doc.md") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


# ===========================================
# FastAPI 클라이언트
# ===========================================

@pytest.fixture(scope="module")
def app():
    """FastAPI 애플리케이션 인스턴스"""
    from quizdoc.main import app as fastapi_app
    return fastapi_app


@pytest.fixture(scope="module")
def client(app) -> Generator:
    """테스트 클라이언트"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def override_store(app):
    """
    get_quiz_store 의존성 오버라이드
    라우트 테스트에서 문서 텍스트를 직접 주입할 때 사용
    """
    def _override(text: str) -> QuizStore:
        store = QuizStore(text=text)
        app.dependency_overrides[get_quiz_store] = lambda: store
        return store

    yield _override
    app.dependency_overrides.clear()


# ===========================================
# 유틸리티 Fixtures
# ===========================================

@pytest.fixture
def capture_logs():
    """로그 캡처"""
    import logging

    class LogCapture(logging.Handler):
        def __init__(self):
            super().__init__()
            self.records = []

        def emit(self, record):
            self.records.append(record)

        def get_messages(self):
            return [r.getMessage() for r in self.records]

    handler = LogCapture()
    logger = logging.getLogger()
    logger.addHandler(handler)
    yield handler
    logger.removeHandler(handler)
