"""
상수 정의 모듈
매직 스트링을 상수로 관리하여 유지보수성 향상
"""
import re


class QuizMarkers:
    """퀴즈 블록 표기 규칙"""
    BLOCK_OPEN = "{{< quiz >}}"
    BLOCK_CLOSE = "{{< /quiz >}}"
    QUESTION_PREFIX = "### "
    CORRECT_OPTION = "- [x] "
    WRONG_OPTION = "- [ ] "
    EXPLANATION_PREFIX = "> "

    # {{< quiz >}}, {{<quiz>}} 모두 허용
    OPEN_RE = re.compile(r"^\s*\{\{<\s*quiz\s*>\}\}\s*$")
    CLOSE_RE = re.compile(r"^\s*\{\{<\s*/\s*quiz\s*>\}\}\s*$")
    QUESTION_RE = re.compile(r"^\s*###\s*(?P<text>.*)$")
    OPTION_RE = re.compile(r"^\s*[-*]\s+\[(?P<mark>[ xX*])\]\s?(?P<text>.*)$")
    EXPLANATION_RE = re.compile(r"^\s*>\s?(?P<text>.*)$")
    TITLE_RE = re.compile(r"^#\s+(?P<text>.+?)\s*#*\s*$")

    CORRECT_MARKS = {"x", "X", "*"}


class ErrorCodes:
    """에러 코드"""
    VALIDATION_FAILED = "VALIDATION_FAILED"
    MALFORMED_QUIZ = "MALFORMED_QUIZ"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorMessages:
    """사용자 친화적 에러 메시지"""
    INVALID_INPUT = "입력값이 올바르지 않습니다."
    MALFORMED_QUIZ = "퀴즈 데이터 형식이 올바르지 않습니다."
    QUIZ_BLOCK_MISSING = "문서에서 퀴즈 블록을 찾을 수 없습니다."
    QUIZ_BLOCK_UNCLOSED = "퀴즈 블록이 닫히지 않았습니다."
    QUIZ_BLOCK_NESTED = "퀴즈 블록 안에서 새 퀴즈 블록을 열 수 없습니다."
    QUIZ_BLOCK_STRAY_CLOSE = "열리지 않은 퀴즈 블록을 닫으려 했습니다."
    QUIZ_EMPTY = "퀴즈 블록에 문항이 없습니다."
    UNEXPECTED_LINE = "퀴즈 블록 안에서 해석할 수 없는 줄입니다."
    OPTION_WITHOUT_QUESTION = "문항 제목(###) 없이 보기가 나왔습니다."
    NO_CORRECT_OPTION = "정답으로 표시된 보기가 없습니다."
    MULTIPLE_CORRECT_OPTIONS = "정답으로 표시된 보기가 둘 이상입니다."
    DOCUMENT_NOT_FOUND = "퀴즈 문서를 찾을 수 없습니다."
    INTERNAL_ERROR = "서버 오류가 발생했습니다. 관리자에게 문의하세요."


class HTTPHeaders:
    """HTTP 헤더 상수"""
    REQUEST_ID = "X-Request-Id"
