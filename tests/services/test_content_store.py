from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from clinicleads_api.db.models import AiLandingPage
from clinicleads_api.db.repositories.landing_pages import LandingPageRepository
from clinicleads_api.domain.enums import QuizType
from clinicleads_api.domain.schemas.content import ChatbotColors, ContentRecordRead
from clinicleads_api.services.landing_pages.store import ContentStore
from tests.utils import snot12_document

pytestmark = pytest.mark.asyncio

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


async def _seed(session, doctor_id: str, quiz_type: QuizType, rows: list[dict]) -> list[int]:
    ids = []
    for row in rows:
        entity = AiLandingPage(doctor_id=doctor_id, quiz_type=quiz_type.value, **row)
        session.add(entity)
        await session.flush()
        ids.append(entity.id)
    await session.commit()
    return ids


async def _count(session, doctor_id: str, quiz_type: QuizType) -> int:
    result = await session.execute(
        select(func.count())
        .select_from(AiLandingPage)
        .where(AiLandingPage.doctor_id == doctor_id, AiLandingPage.quiz_type == quiz_type.value)
    )
    return result.scalar_one()


async def test_fetch_keeps_most_recently_updated_duplicate(db_session) -> None:
    ids = await _seed(
        db_session,
        "d1",
        QuizType.NOSE,
        [
            {"content": {"headline": "old"}, "created_at": BASE_TIME, "updated_at": BASE_TIME},
            {
                "content": {"headline": "newest"},
                "created_at": BASE_TIME,
                "updated_at": BASE_TIME + timedelta(hours=2),
            },
            {
                "content": {"headline": "middle"},
                "created_at": BASE_TIME + timedelta(hours=3),
                "updated_at": BASE_TIME + timedelta(hours=1),
            },
        ],
    )
    store = ContentStore(db_session)

    record = await store.fetch("d1", QuizType.NOSE)

    assert record is not None
    assert record.id == ids[1]
    assert record.content == {"headline": "newest"}
    assert await _count(db_session, "d1", QuizType.NOSE) == 1


async def test_created_at_stands_in_for_missing_updated_at(db_session) -> None:
    ids = await _seed(
        db_session,
        "d1",
        QuizType.TNSS,
        [
            {"content": {"headline": "a"}, "created_at": BASE_TIME, "updated_at": None},
            {
                "content": {"headline": "b"},
                "created_at": BASE_TIME + timedelta(days=1),
                "updated_at": None,
            },
        ],
    )
    result = await ContentStore(db_session).compact("d1", QuizType.TNSS)

    assert result.canonical_id == ids[1]
    assert result.examined == 2
    assert result.deleted == 1
    assert not result.failed


async def test_fetch_is_idempotent(db_session) -> None:
    await _seed(
        db_session,
        "d1",
        QuizType.SNOT12,
        [{"content": snot12_document(), "created_at": BASE_TIME, "updated_at": BASE_TIME}],
    )
    store = ContentStore(db_session)

    first = await store.fetch("d1", QuizType.SNOT12)
    second = await store.fetch("d1", QuizType.SNOT12)

    assert first == second
    assert await _count(db_session, "d1", QuizType.SNOT12) == 1


async def test_fetch_returns_none_when_nothing_stored(db_session) -> None:
    assert await ContentStore(db_session).fetch("missing", QuizType.NOSE) is None


async def test_compaction_failure_is_reported_not_raised(db_session, monkeypatch) -> None:
    await _seed(
        db_session,
        "d1",
        QuizType.NOSE,
        [
            {"content": {"headline": "a"}, "created_at": BASE_TIME, "updated_at": BASE_TIME},
            {
                "content": {"headline": "b"},
                "created_at": BASE_TIME,
                "updated_at": BASE_TIME + timedelta(minutes=5),
            },
        ],
    )

    async def _failing_delete(self, record_ids):
        raise OperationalError("DELETE", {}, Exception("database is locked"))

    monkeypatch.setattr(LandingPageRepository, "delete_ids", _failing_delete)
    store = ContentStore(db_session)

    record = await store.fetch("d1", QuizType.NOSE)

    assert record is not None
    assert record.content == {"headline": "b"}
    result = await store.compact("d1", QuizType.NOSE)
    assert result.failed
    assert result.deleted == 0


async def test_later_upsert_wins_and_leaves_one_record(db_session) -> None:
    store = ContentStore(db_session)

    first = await store.upsert("d1", QuizType.TNSS, {"headline": "first"})
    second = await store.upsert("d1", QuizType.TNSS, {"headline": "second"})

    assert second.id == first.id
    assert await _count(db_session, "d1", QuizType.TNSS) == 1
    stored = await store.fetch("d1", QuizType.TNSS)
    assert stored is not None
    assert stored.content == {"headline": "second"}


async def test_upsert_raises_lookup_error_when_row_vanishes(db_session, monkeypatch) -> None:
    async def _missing(self, record_id):
        return None

    monkeypatch.setattr(LandingPageRepository, "get", _missing)

    with pytest.raises(LookupError):
        await ContentStore(db_session).upsert("d1", QuizType.TNSS, {"headline": "gone"})


async def test_insert_sets_both_timestamps_and_default_colors(db_session) -> None:
    record = await ContentStore(db_session).upsert("d1", QuizType.NOSE, {"headline": "x"})

    assert record.created_at is not None
    assert record.updated_at is not None
    assert record.chatbot_colors == ChatbotColors().as_record()


async def test_update_keeps_colors_unless_supplied(db_session) -> None:
    store = ContentStore(db_session)
    custom = ChatbotColors(primary="#000000")
    await store.upsert("d1", QuizType.NOSE, {"headline": "x"}, custom)

    updated = await store.upsert("d1", QuizType.NOSE, {"headline": "y"})

    assert updated.chatbot_colors is not None
    assert updated.chatbot_colors["primary"] == "#000000"
    assert updated.content == {"headline": "y"}


async def test_delete_is_idempotent(db_session) -> None:
    store = ContentStore(db_session)
    await store.upsert("d1", QuizType.NOSE, {"headline": "x"})

    assert await store.delete("d1", QuizType.NOSE) == 1
    assert await store.delete("d1", QuizType.NOSE) == 0
    assert await store.fetch("d1", QuizType.NOSE) is None


async def test_colors_default_until_set(db_session) -> None:
    store = ContentStore(db_session)
    assert await store.get_colors("d1", QuizType.TNSS) == ChatbotColors()

    await store.set_colors("d1", QuizType.TNSS, ChatbotColors(bot_text="#111111"))

    colors = await store.get_colors("d1", QuizType.TNSS)
    assert colors.bot_text == "#111111"
    assert colors.primary == "#2563eb"


def _record(content) -> ContentRecordRead:
    return ContentRecordRead(
        id=1,
        doctor_id="d1",
        quiz_type=QuizType.SNOT12,
        content=content,
        created_at=BASE_TIME,
    )


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        (snot12_document(), True),
        (None, False),
        ({"error": "Failed to parse AI response", "raw": "x"}, False),
        (snot12_document(intro="   "), False),
        (snot12_document(symptoms=[]), False),
        ({k: v for k, v in snot12_document().items() if k != "whatIsSNOT12"}, False),
    ],
)
async def test_is_usable_applies_required_fields(content, expected: bool) -> None:
    assert ContentStore.is_usable(_record(content), QuizType.SNOT12) is expected


async def test_nose_pages_have_no_required_fields() -> None:
    record = _record({"headline": "Only a headline"})
    assert ContentStore.is_usable(record, QuizType.NOSE)
    assert not ContentStore.is_usable(None, QuizType.NOSE)
