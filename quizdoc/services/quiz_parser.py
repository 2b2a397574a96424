# quizdoc/services/quiz_parser.py
"""
문서(Markdown) 안의 퀴즈 블록 파서/직렬화기

블록 형식:
    {{< quiz >}}
    ### 질문
    - [x] 정답 보기
    - [ ] 오답 보기
    > 해설 (여러 줄이면 공백 하나로 이어 붙임)
    {{< /quiz >}}

구조 오류(닫히지 않은 블록, 해석 불가 줄 등)는 여기서 MalformedQuizError 로 올리고,
정답 개수/빈 텍스트 검증은 QuizStore 가 스키마(QuizQuestion)로 처리한다.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from quizdoc.core.constants import ErrorMessages, QuizMarkers
from quizdoc.core.exceptions import MalformedQuizError

_RE_FENCE = re.compile(r"^\s*(?P<fence>```|~~~)")
_RE_FRONT_MATTER_DELIM = re.compile(r"^---\s*$")
_RE_FRONT_MATTER_TITLE = re.compile(r"^title\s*:\s*(?P<text>.+?)\s*$")


@dataclass
class QuizBlock:
    """문서 안의 퀴즈 블록 1개 (줄 번호는 1부터)"""
    start_line: int
    end_line: int = 0
    lines: List[Tuple[int, str]] = field(default_factory=list)


def _iter_lines(document: str) -> Iterable[Tuple[int, str]]:
    return enumerate((document or "").splitlines(), start=1)


def _next_fence(line: str, fence: Optional[str]) -> Tuple[Optional[str], bool]:
    """
    (갱신된 펜스, 이 줄이 펜스 표식인지)
    펜스는 연 것과 같은 표식(``` 또는 ~~~)으로만 닫힌다.
    """
    m = _RE_FENCE.match(line)
    if not m:
        return fence, False
    marker = m.group("fence")
    if fence is None:
        return marker, True
    if marker == fence:
        return None, True
    # 다른 종류의 표식은 펜스 안의 일반 텍스트
    return fence, False


def extract_quiz_blocks(document: str) -> List[QuizBlock]:
    """
    문서에서 퀴즈 블록을 순서대로 찾는다.
    코드 펜스(``` / ~~~) 안의 표식은 예제 코드로 보고 무시한다.
    """
    blocks: List[QuizBlock] = []
    current: Optional[QuizBlock] = None
    fence: Optional[str] = None

    for lineno, line in _iter_lines(document):
        if current is None:
            fence, is_marker = _next_fence(line, fence)
            if is_marker or fence is not None:
                continue
            if QuizMarkers.OPEN_RE.match(line):
                current = QuizBlock(start_line=lineno)
            elif QuizMarkers.CLOSE_RE.match(line):
                raise MalformedQuizError(ErrorMessages.QUIZ_BLOCK_STRAY_CLOSE, line=lineno)
            continue

        if QuizMarkers.OPEN_RE.match(line):
            raise MalformedQuizError(ErrorMessages.QUIZ_BLOCK_NESTED, line=lineno)
        if QuizMarkers.CLOSE_RE.match(line):
            current.end_line = lineno
            blocks.append(current)
            current = None
            continue
        current.lines.append((lineno, line))

    if current is not None:
        raise MalformedQuizError(ErrorMessages.QUIZ_BLOCK_UNCLOSED, line=current.start_line)
    return blocks


def _finish(record: Dict[str, Any]) -> Dict[str, Any]:
    marks = record.pop("marks")
    explanation_parts = record.pop("explanation_lines")
    flagged = [i for i, is_correct in enumerate(marks) if is_correct]
    record["correct_count"] = len(flagged)
    record["correct_index"] = flagged[0] if len(flagged) == 1 else None
    record["explanation"] = " ".join(p for p in explanation_parts if p)
    return record


def parse_quiz_block(block: QuizBlock) -> List[Dict[str, Any]]:
    """블록 1개를 원시 문항 레코드 리스트로 변환"""
    records: List[Dict[str, Any]] = []
    current: Optional[Dict[str, Any]] = None

    for lineno, line in block.lines:
        if not line.strip():
            continue

        m = QuizMarkers.QUESTION_RE.match(line)
        if m:
            if current is not None:
                records.append(_finish(current))
            current = {
                "prompt": m.group("text").strip(),
                "options": [],
                "marks": [],
                "explanation_lines": [],
                "line": lineno,
            }
            continue

        m = QuizMarkers.OPTION_RE.match(line)
        if m:
            if current is None:
                raise MalformedQuizError(ErrorMessages.OPTION_WITHOUT_QUESTION, line=lineno)
            current["options"].append(m.group("text").strip())
            current["marks"].append(m.group("mark") in QuizMarkers.CORRECT_MARKS)
            continue

        m = QuizMarkers.EXPLANATION_RE.match(line)
        if m:
            if current is None:
                raise MalformedQuizError(ErrorMessages.OPTION_WITHOUT_QUESTION, line=lineno)
            current["explanation_lines"].append(m.group("text").strip())
            continue

        raise MalformedQuizError(ErrorMessages.UNEXPECTED_LINE, line=lineno)

    if current is not None:
        records.append(_finish(current))
    return records


def parse_quiz_document(document: str) -> List[Dict[str, Any]]:
    """
    문서 전체의 퀴즈 블록을 파싱해 원시 레코드를 출제 순서대로 반환.

    레코드 키: prompt, options, correct_index(정답이 정확히 1개가 아니면 None),
    correct_count, explanation, line
    """
    blocks = extract_quiz_blocks(document)
    if not blocks:
        raise MalformedQuizError(ErrorMessages.QUIZ_BLOCK_MISSING)

    records: List[Dict[str, Any]] = []
    for block in blocks:
        records.extend(parse_quiz_block(block))

    if not records:
        raise MalformedQuizError(ErrorMessages.QUIZ_EMPTY, line=blocks[0].start_line)
    return records


def extract_title(document: str) -> Optional[str]:
    """front matter 의 title, 없으면 첫 번째 '# ' 제목"""
    lines = (document or "").splitlines()
    body_start = 0

    if lines and _RE_FRONT_MATTER_DELIM.match(lines[0]):
        for i, line in enumerate(lines[1:], start=1):
            if _RE_FRONT_MATTER_DELIM.match(line):
                # front matter 안의 '# ...' 는 YAML 주석이므로 제목 탐색은 그 다음부터
                body_start = i + 1
                break
            m = _RE_FRONT_MATTER_TITLE.match(line)
            if m:
                return m.group("text").strip().strip("\"'") or None

    fence: Optional[str] = None
    for line in lines[body_start:]:
        fence, is_marker = _next_fence(line, fence)
        if is_marker or fence is not None:
            continue
        m = QuizMarkers.TITLE_RE.match(line)
        if m:
            return m.group("text").strip()
    return None


# ===========================================
# 직렬화
# ===========================================

def _one_line(text: str) -> str:
    # 줄바꿈만 공백으로 바꾸고 줄 안의 공백은 그대로 둔다
    return " ".join(part.strip() for part in str(text).splitlines() if part.strip())


def serialize_quiz(quiz) -> str:
    """
    Quiz 를 퀴즈 블록 텍스트로 되돌린다 (끝 줄바꿈 없음).
    parse_quiz_document(serialize_quiz(q)) 는 같은 순서의 같은 문항을 돌려준다.
    """
    out: List[str] = [QuizMarkers.BLOCK_OPEN]
    for i, question in enumerate(quiz.questions):
        if i:
            out.append("")
        out.append(QuizMarkers.QUESTION_PREFIX + _one_line(question.prompt))
        for j, option in enumerate(question.options):
            marker = QuizMarkers.CORRECT_OPTION if j == question.correct_index else QuizMarkers.WRONG_OPTION
            out.append(marker + _one_line(option))
        for part in str(question.explanation).splitlines():
            if part.strip():
                out.append(QuizMarkers.EXPLANATION_PREFIX + part.strip())
    out.append(QuizMarkers.BLOCK_CLOSE)
    return "\n".join(out)


def replace_quiz_block(document: str, quiz) -> str:
    """문서의 첫 번째 퀴즈 블록만 새 내용으로 교체 (본문은 그대로)"""
    blocks = extract_quiz_blocks(document)
    if not blocks:
        raise MalformedQuizError(ErrorMessages.QUIZ_BLOCK_MISSING)

    first = blocks[0]
    lines = document.splitlines()
    rebuilt = lines[: first.start_line - 1] + serialize_quiz(quiz).splitlines() + lines[first.end_line:]
    result = "\n".join(rebuilt)
    if document.endswith("\n"):
        result += "\n"
    return result
