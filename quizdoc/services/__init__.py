"""
서비스 레이어
퀴즈 문서 파싱과 저장소
"""
from quizdoc.services.quiz_parser import (
    QuizBlock,
    extract_quiz_blocks,
    extract_title,
    parse_quiz_document,
    replace_quiz_block,
    serialize_quiz,
)
from quizdoc.services.quiz_store import (
    QuizStore,
    build_question,
    get_quiz_store,
)

__all__ = [
    # Parser
    "QuizBlock",
    "extract_quiz_blocks",
    "extract_title",
    "parse_quiz_document",
    "replace_quiz_block",
    "serialize_quiz",

    # Store
    "QuizStore",
    "build_question",
    "get_quiz_store",
]
