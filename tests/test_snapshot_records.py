from datetime import datetime

import pytest
from pydantic import ValidationError

from council_portal.models.snapshot import CouncilMemberRecord, QuestionRecord, ResponseRecord


def test_question_record_reads_camel_case_and_drops_denormalized_fields() -> None:
    record = QuestionRecord.model_validate(
        {
            "_id": "q1",
            "_creationTime": 1709251200000,
            "title": "Q1",
            "content": "本文",
            "category": "教育",
            "councilMemberId": "m1",
            "councilMemberName": "田中",
            "sessionDate": 1709251200000,
            "unknownField": "ignored",
        }
    )

    assert record.id == "q1"
    assert record.session_date == datetime(2024, 3, 1)
    assert record.to_columns() == {
        "title": "Q1",
        "content": "本文",
        "category": "教育",
        "council_member_id": "m1",
        "session_date": datetime(2024, 3, 1),
    }


def test_to_document_uses_aliases_and_epoch_ms() -> None:
    record = ResponseRecord(
        id="r1",
        creation_time=datetime(2024, 3, 1),
        question_id="q1",
        content="回答",
        respondent_title="市長",
        question_title="Q1",
    )

    assert record.to_document() == {
        "_id": "r1",
        "_creationTime": 1709251200000,
        "questionId": "q1",
        "content": "回答",
        "respondentTitle": "市長",
        "questionTitle": "Q1",
    }


def test_missing_natural_key_is_rejected() -> None:
    with pytest.raises(ValidationError):
        CouncilMemberRecord.model_validate({"party": "無所属"})
