"""
퀴즈 데이터 저장소
문서에서 퀴즈 블록을 읽어 검증하고, 외부 렌더러에 읽기 전용으로 제공
"""
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from quizdoc.core.constants import ErrorMessages
from quizdoc.core.exceptions import DocumentNotFoundError, MalformedQuizError, OutOfRangeError
from quizdoc.core.settings import settings
from quizdoc.schemas.quiz import AnswerResult, Quiz, QuizQuestion
from quizdoc.services.quiz_parser import extract_title, parse_quiz_document

logger = logging.getLogger(__name__)


def _errors_for_details(exc: ValidationError) -> List[Dict[str, Any]]:
    return [
        {
            "field": " -> ".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]


def build_question(record: Dict[str, Any], index: int) -> QuizQuestion:
    """
    파서 레코드 1개를 QuizQuestion 으로 변환

    Raises:
        MalformedQuizError: 정답 표시가 없거나 둘 이상, 또는 필드 검증 실패
    """
    line = record.get("line")
    correct_count = record.get("correct_count", 1)
    if correct_count == 0:
        raise MalformedQuizError(ErrorMessages.NO_CORRECT_OPTION, question_index=index, line=line)
    if correct_count > 1:
        raise MalformedQuizError(ErrorMessages.MULTIPLE_CORRECT_OPTIONS, question_index=index, line=line)

    try:
        return QuizQuestion.model_validate(record)
    except ValidationError as e:
        raise MalformedQuizError(
            question_index=index,
            line=line,
            errors=_errors_for_details(e),
        ) from e


class QuizStore:
    """
    퀴즈 데이터 저장소

    파일 경로 또는 문서 텍스트를 받아 load() 시점에 파싱/검증한다.
    한 번 읽은 Quiz 는 변경되지 않으므로 그대로 재사용한다.
    """

    def __init__(
        self,
        source: Optional[Union[str, Path]] = None,
        *,
        text: Optional[str] = None,
        encoding: Optional[str] = None
    ):
        self._text = text
        self.source = None if text is not None else Path(source or settings.document_path)
        self.encoding = encoding or settings.DOCUMENT_ENCODING
        self._quiz: Optional[Quiz] = None

    @property
    def source_name(self) -> str:
        return str(self.source) if self.source is not None else "<text>"

    def _read(self) -> str:
        if self._text is not None:
            return self._text
        try:
            return self.source.read_text(encoding=self.encoding)
        except FileNotFoundError as e:
            logger.error("quiz_document_missing", extra={"source": self.source_name})
            raise DocumentNotFoundError(self.source) from e

    def load(self) -> Quiz:
        """
        문서를 읽고 퀴즈를 검증해 반환

        Raises:
            MalformedQuizError: 블록 구조 오류, 정답 표시 누락/중복, 빈 텍스트
            DocumentNotFoundError: 문서 파일 없음
        """
        if self._quiz is not None:
            return self._quiz

        document = self._read()
        try:
            records = parse_quiz_document(document)
            questions = [build_question(r, i) for i, r in enumerate(records)]
        except MalformedQuizError as e:
            logger.warning(
                "quiz_invalid",
                extra={"source": self.source_name, "reason": e.message, "details": e.details},
            )
            raise

        self._quiz = Quiz(title=extract_title(document), questions=questions)
        logger.info("quiz_loaded", extra={"source": self.source_name, "questions": len(questions)})
        return self._quiz

    def __len__(self) -> int:
        return len(self.load())

    def questions(self) -> List[QuizQuestion]:
        return list(self.load().questions)

    def get(self, index: int) -> QuizQuestion:
        """
        index 번째 문항 (0부터)

        Raises:
            OutOfRangeError: index 가 [0, length) 밖 (음수는 뒤에서 세지 않음)
        """
        quiz = self.load()
        if not 0 <= index < len(quiz.questions):
            raise OutOfRangeError("question", index, len(quiz.questions))
        return quiz.questions[index]

    def check_answer(self, index: int, choice: int) -> AnswerResult:
        """렌더러가 사용자의 선택을 채점할 때 사용"""
        question = self.get(index)
        if not 0 <= choice < len(question.options):
            raise OutOfRangeError("option", choice, len(question.options))
        return AnswerResult(
            index=index,
            choice=choice,
            correct=choice == question.correct_index,
            correct_index=question.correct_index,
            explanation=question.explanation,
        )


@lru_cache()
def get_quiz_store() -> QuizStore:
    """설정의 문서 경로로 만든 전역 QuizStore (FastAPI 의존성)"""
    return QuizStore(settings.document_path)
