# quizdoc/schemas/quiz.py
from typing import Any, List, Optional, Tuple
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, constr, model_validator

from quizdoc.core.constants import ErrorMessages

OptionText = constr(strip_whitespace=True, min_length=1)


class QuizQuestion(BaseModel):
    """
    단일 정답 객관식 문항 1개.
    O/X 문항도 보기 2개짜리 문항으로 표현한다.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore", str_strip_whitespace=True)

    prompt: str = Field(min_length=1, validation_alias=AliasChoices("prompt", "question"))
    options: Tuple[OptionText, ...] = Field(min_length=2)
    correct_index: int = Field(ge=0, validation_alias=AliasChoices("correct_index", "correctIndex"))
    explanation: str = Field(min_length=1, validation_alias=AliasChoices("explanation", "rationale"))

    # --- JSON 입력 하위호환 (보기별 정답 플래그, 정답 텍스트 표기 통일) ---
    @model_validator(mode="before")
    @classmethod
    def _coerce_legacy(cls, data: Any):
        """
        입력 호환:
        - options: [{"text": ..., "correct": bool}, ...] → 텍스트 리스트 + correct_index
        - correct_option(정답 보기 텍스트) → correct_index
        """
        if not isinstance(data, dict):
            return data
        data = dict(data)
        has_index = "correct_index" in data or "correctIndex" in data

        options = data.get("options")
        if isinstance(options, (list, tuple)) and options and all(isinstance(o, dict) for o in options):
            data["options"] = [o.get("text", "") for o in options]
            if not has_index:
                flagged = [i for i, o in enumerate(options) if o.get("correct")]
                if not flagged:
                    raise ValueError(ErrorMessages.NO_CORRECT_OPTION)
                if len(flagged) > 1:
                    raise ValueError(ErrorMessages.MULTIPLE_CORRECT_OPTIONS)
                data["correct_index"] = flagged[0]
                has_index = True

        if not has_index and data.get("correct_option") is not None:
            answer = str(data["correct_option"]).strip()
            texts = [str(o).strip() for o in data.get("options") or []]
            if texts.count(answer) != 1:
                raise ValueError(f"correct_option {answer!r} must match exactly one option")
            data["correct_index"] = texts.index(answer)
        return data

    @model_validator(mode="after")
    def _correct_index_in_range(self):
        if self.correct_index >= len(self.options):
            raise ValueError(
                f"correct_index {self.correct_index} is outside options [0, {len(self.options)})"
            )
        return self

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_index]


class Quiz(BaseModel):
    """문서에 포함된 퀴즈 전체. questions 순서 = 출제 순서."""
    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    questions: Tuple[QuizQuestion, ...] = Field(min_length=1)

    def __len__(self) -> int:
        return len(self.questions)

    def __iter__(self):
        return iter(self.questions)


# ===========================================
# API 입출력 스키마
# ===========================================

class QuizResponse(BaseModel):
    title: Optional[str] = None
    count: int
    questions: List[QuizQuestion]


class QuestionResponse(BaseModel):
    index: int
    prompt: str
    options: List[str]
    correct_index: int
    explanation: str


class AnswerRequest(BaseModel):
    choice: int


class AnswerResult(BaseModel):
    index: int
    choice: int
    correct: bool
    correct_index: int
    explanation: str


class ErrorResponse(BaseModel):
    code: str
    message: str
    trace_id: str | None = None
