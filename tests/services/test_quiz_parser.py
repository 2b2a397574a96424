"""
quiz_parser 테스트
퀴즈 블록 추출/파싱/직렬화 단위 테스트
"""
import pytest

from quizdoc.core.exceptions import MalformedQuizError
from quizdoc.schemas.quiz import Quiz, QuizQuestion
from quizdoc.services.quiz_parser import (
    extract_quiz_blocks,
    extract_title,
    parse_quiz_document,
    replace_quiz_block,
    serialize_quiz,
)


class TestExtractQuizBlocks:
    """블록 탐색 테스트"""

    def test_single_block(self, sample_document):
        """블록 1개와 줄 번호"""
        blocks = extract_quiz_blocks(sample_document)

        assert len(blocks) == 1
        assert blocks[0].start_line == 5
        assert blocks[0].end_line == 18
        assert blocks[0].lines[0] == (6, "### Which Dockerfile instruction sets the base image?")

    def test_no_block(self):
        """블록이 없으면 빈 리스트"""
        assert extract_quiz_blocks("# Title\n\njust prose\n") == []

    def test_compact_markers(self):
        """공백 없는 표식 허용"""
        doc = "{{<quiz>}}\n### Q?\n- [x] a\n- [ ] b\n> e\n{{</quiz>}}\n"
        assert len(extract_quiz_blocks(doc)) == 1

    def test_unclosed_block(self):
        """닫히지 않은 블록"""
        doc = "intro\n{{< quiz >}}\n### Q?\n- [x] a\n"

        with pytest.raises(MalformedQuizError) as exc_info:
            extract_quiz_blocks(doc)

        assert exc_info.value.line == 2

    def test_nested_block(self):
        """블록 안의 여는 표식"""
        doc = "{{< quiz >}}\n{{< quiz >}}\n{{< /quiz >}}\n"

        with pytest.raises(MalformedQuizError) as exc_info:
            extract_quiz_blocks(doc)

        assert exc_info.value.line == 2

    def test_stray_close(self):
        """열리지 않은 블록 닫기"""
        with pytest.raises(MalformedQuizError):
            extract_quiz_blocks("text\n{{< /quiz >}}\n")

    def test_markers_inside_code_fence_ignored(self):
        """코드 펜스 안의 예제 표식은 무시"""
        doc = "```\n{{< quiz >}}\n```\n"
        assert extract_quiz_blocks(doc) == []

    def test_other_fence_marker_does_not_close(self):
        """``` 펜스 안의 ~~~ 는 펜스를 닫지 않음"""
        doc = (
            "```markdown\n"
            "~~~\n"
            "{{< quiz >}}\n"
            "### Example?\n"
            "{{< /quiz >}}\n"
            "```\n"
            "{{< quiz >}}\n### Real?\n- [x] a\n- [ ] b\n> e\n{{< /quiz >}}\n"
        )
        blocks = extract_quiz_blocks(doc)

        assert len(blocks) == 1
        assert blocks[0].start_line == 7


class TestParseQuizDocument:
    """원시 레코드 파싱 테스트"""

    def test_parse_sample(self, sample_document):
        """문항 순서, 보기 순서, 해설 병합"""
        records = parse_quiz_document(sample_document)

        assert [r["prompt"] for r in records] == [
            "Which Dockerfile instruction sets the base image?",
            "Which base image is commonly used for Clojure applications?",
        ]
        second = records[1]
        assert second["options"] == ["openjdk", "ubuntu", "alpine", "node"]
        assert second["correct_index"] == 0
        assert second["correct_count"] == 1
        assert second["explanation"] == "Clojure runs on the JVM. Clojure images build on a Java image."
        assert second["line"] == 11

    def test_alternative_correct_marks(self):
        """[X], [*] 도 정답 표시"""
        doc = "{{< quiz >}}\n### Q?\n- [ ] a\n- [X] b\n> e\n### R?\n* [*] c\n* [ ] d\n> f\n{{< /quiz >}}"
        records = parse_quiz_document(doc)

        assert records[0]["correct_index"] == 1
        assert records[1]["correct_index"] == 0

    def test_zero_correct_recorded(self):
        """정답 표시가 없으면 correct_index None"""
        doc = "{{< quiz >}}\n### Q?\n- [ ] a\n- [ ] b\n> e\n{{< /quiz >}}"
        record = parse_quiz_document(doc)[0]

        assert record["correct_index"] is None
        assert record["correct_count"] == 0

    def test_multiple_correct_recorded(self):
        """정답 표시가 둘 이상"""
        doc = "{{< quiz >}}\n### Q?\n- [x] a\n- [x] b\n> e\n{{< /quiz >}}"
        record = parse_quiz_document(doc)[0]

        assert record["correct_index"] is None
        assert record["correct_count"] == 2

    def test_multiple_blocks_concatenated(self):
        """여러 블록은 문서 순서대로 이어 붙임"""
        doc = (
            "{{< quiz >}}\n### First?\n- [x] a\n- [ ] b\n> e\n{{< /quiz >}}\n"
            "prose\n"
            "{{< quiz >}}\n### Second?\n- [ ] a\n- [x] b\n> e\n{{< /quiz >}}\n"
        )
        records = parse_quiz_document(doc)

        assert [r["prompt"] for r in records] == ["First?", "Second?"]

    def test_missing_block(self):
        """블록 없음"""
        with pytest.raises(MalformedQuizError):
            parse_quiz_document("# Only prose\n")

    def test_empty_block(self):
        """문항 없는 블록"""
        with pytest.raises(MalformedQuizError):
            parse_quiz_document("{{< quiz >}}\n\n{{< /quiz >}}\n")

    def test_unexpected_line(self):
        """해석할 수 없는 줄은 줄 번호와 함께 오류"""
        doc = "{{< quiz >}}\n### Q?\n- [x] a\nrandom text\n{{< /quiz >}}"

        with pytest.raises(MalformedQuizError) as exc_info:
            parse_quiz_document(doc)

        assert exc_info.value.line == 4
        assert exc_info.value.details["line"] == 4

    def test_option_before_question(self):
        """질문 없이 나온 보기"""
        doc = "{{< quiz >}}\n- [x] a\n{{< /quiz >}}"

        with pytest.raises(MalformedQuizError):
            parse_quiz_document(doc)


class TestExtractTitle:
    """제목 추출 테스트"""

    def test_heading(self, sample_document):
        assert extract_title(sample_document) == "Containerize a Clojure application"

    def test_front_matter_wins(self):
        doc = '---\ntitle: "From front matter"\n---\n\n# Heading\n'
        assert extract_title(doc) == "From front matter"

    def test_heading_in_code_fence_ignored(self):
        doc = "```\n# comment\n```\n# Real title\n"
        assert extract_title(doc) == "Real title"

    def test_front_matter_comment_not_title(self):
        """title 없는 front matter 의 YAML 주석은 제목이 아님"""
        doc = "---\n# draft\nweight: 3\n---\n\nintro\n# Real title\n"
        assert extract_title(doc) == "Real title"

    def test_no_title(self):
        assert extract_title("no headings here") is None


class TestSerializeQuiz:
    """직렬화 테스트"""

    def _quiz(self) -> Quiz:
        return Quiz(questions=[
            QuizQuestion(prompt="Pick B", options=["A", "B", "C"], correct_index=1, explanation="B is right."),
            QuizQuestion(prompt="Docker images are layered.", options=["True", "False"], correct_index=0,
                         explanation="Each instruction adds a layer."),
        ])

    def test_serialized_text(self):
        """블록 표기"""
        text = serialize_quiz(self._quiz())

        assert text.splitlines() == [
            "{{< quiz >}}",
            "### Pick B",
            "- [ ] A",
            "- [x] B",
            "- [ ] C",
            "> B is right.",
            "",
            "### Docker images are layered.",
            "- [x] True",
            "- [ ] False",
            "> Each instruction adds a layer.",
            "{{< /quiz >}}",
        ]

    def test_round_trip_preserves_order(self, sample_document):
        """파싱 → 직렬화 → 파싱 결과가 같은 순서의 같은 문항"""
        records = parse_quiz_document(sample_document)
        quiz = Quiz(questions=[QuizQuestion.model_validate(r) for r in records])

        reparsed = parse_quiz_document(serialize_quiz(quiz))

        keys = ("prompt", "options", "correct_index", "explanation")
        assert [{k: r[k] for k in keys} for r in reparsed] == [{k: r[k] for k in keys} for r in records]

    def test_round_trip_keeps_inner_spacing(self, make_store):
        """질문/보기 안의 연속 공백 유지"""
        quiz = make_store("{{< quiz >}}\n### Pick  one\n- [x] a  b\n- [ ] c\n> e\n{{< /quiz >}}").load()

        reparsed = parse_quiz_document(serialize_quiz(quiz))

        assert reparsed[0]["prompt"] == "Pick  one"
        assert reparsed[0]["options"] == ["a  b", "c"]
        assert reparsed[0]["correct_index"] == 0

    def test_line_breaks_flattened(self):
        """줄바꿈이 든 텍스트는 한 줄로 직렬화"""
        quiz = Quiz(questions=[
            QuizQuestion(prompt="Two\nlines?", options=["a\nb", "c"], correct_index=1, explanation="e"),
        ])

        lines = serialize_quiz(quiz).splitlines()

        assert lines[1] == "### Two lines?"
        assert lines[2] == "- [ ] a b"

    def test_replace_quiz_block_keeps_prose(self, sample_document):
        """첫 번째 블록만 교체, 본문 유지"""
        updated = replace_quiz_block(sample_document, self._quiz())

        assert updated.startswith("# Containerize a Clojure application\n\nSome prose about Dockerfiles.\n")
        assert updated.endswith("More prose after the quiz.\n")
        assert [r["prompt"] for r in parse_quiz_document(updated)] == ["Pick B", "Docker images are layered."]
