"""
커스텀 예외 클래스 정의
일관된 에러 처리를 위한 예외 계층 구조
"""
from typing import Any, Dict, List, Optional
from fastapi import status

from quizdoc.core.constants import ErrorCodes, ErrorMessages


class AppException(Exception):
    """
    기본 애플리케이션 예외
    모든 커스텀 예외의 베이스 클래스
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """예외를 딕셔너리로 변환"""
        result = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# ===========================================
# 퀴즈 데이터 관련 예외
# ===========================================

class MalformedQuizError(AppException):
    """
    퀴즈 블록 형식/정답 표시 오류
    문서를 작성·배포하는 쪽에서 고쳐야 하므로 500으로 응답
    """

    def __init__(
        self,
        message: str = ErrorMessages.MALFORMED_QUIZ,
        question_index: Optional[int] = None,
        line: Optional[int] = None,
        errors: Optional[List[Dict[str, Any]]] = None
    ):
        details: Dict[str, Any] = {}
        if question_index is not None:
            details["question_index"] = question_index
        if line is not None:
            details["line"] = line
        if errors:
            details["errors"] = errors

        self.question_index = question_index
        self.line = line
        super().__init__(
            code=ErrorCodes.MALFORMED_QUIZ,
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details
        )


class OutOfRangeError(AppException, IndexError):
    """요청한 문항/보기 번호가 [0, length) 밖에 있음"""

    def __init__(
        self,
        resource: str,
        index: int,
        length: int,
        message: Optional[str] = None
    ):
        msg = message or f"{resource} {index}은(는) 범위 [0, {length})를 벗어났습니다."
        self.index = index
        self.length = length
        super().__init__(
            code=ErrorCodes.OUT_OF_RANGE,
            message=msg,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "index": index, "length": length}
        )


class DocumentNotFoundError(AppException):
    """퀴즈 문서 파일이 없음"""

    def __init__(self, path: Any):
        super().__init__(
            code=ErrorCodes.DOCUMENT_NOT_FOUND,
            message=ErrorMessages.DOCUMENT_NOT_FOUND,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"path": str(path)}
        )
