# quizdoc/routes/quiz.py
from fastapi import APIRouter, Depends

from quizdoc.schemas.quiz import AnswerRequest, AnswerResult, ErrorResponse, QuestionResponse, QuizResponse
from quizdoc.services.quiz_store import QuizStore, get_quiz_store

router = APIRouter(
    tags=["quiz"],
    responses={500: {"model": ErrorResponse, "description": "퀴즈 문서 오류"}},
)


@router.get("", response_model=QuizResponse)
def get_quiz(store: QuizStore = Depends(get_quiz_store)):
    quiz = store.load()
    return QuizResponse(title=quiz.title, count=len(quiz), questions=quiz.questions)


@router.get(
    "/questions/{index}",
    response_model=QuestionResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_question(index: int, store: QuizStore = Depends(get_quiz_store)):
    question = store.get(index)
    return QuestionResponse(index=index, **question.model_dump())


@router.post(
    "/questions/{index}/answer",
    response_model=AnswerResult,
    responses={404: {"model": ErrorResponse}},
)
def check_answer(index: int, body: AnswerRequest, store: QuizStore = Depends(get_quiz_store)):
    return store.check_answer(index, body.choice)
