from datetime import datetime, timedelta, timezone

import pytest

from app.domain.annotations import AnnotationType, PhotoAnnotation, new_annotation
from app.domain.errors import IllegalStateError
from app.domain.events import PhotoApproved, PhotoRejected
from app.domain.metadata import PhotoMetadata
from app.domain.photo_document import ApprovalStatus, PhotoDocument, approval_transition
from app.domain.templates import TOP_VIEW_OF_JOINT

T0 = datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)
T1 = T0 + timedelta(hours=1)
T_CLOCK = T0 + timedelta(minutes=30)

GOOD = PhotoMetadata(1920, 1080, 3 * 1024 * 1024, "JPEG", "sRGB", 150)
BAD = PhotoMetadata(800, 600, 2 * 1024 * 1024, "BMP", "RGB")


@pytest.fixture
def photo():
    return PhotoDocument("p1", TOP_VIEW_OF_JOINT, "/img/p1.jpg", "tech", T0, clock=lambda: T_CLOCK)


def test_new_photo_is_pending(photo):
    assert photo.status is ApprovalStatus.PENDING
    assert photo.is_pending()
    assert photo.reviewed_by is None
    assert photo.last_modified_at == T0
    assert photo.annotations == ()


def test_upload_generates_id():
    a = PhotoDocument.upload(TOP_VIEW_OF_JOINT, "/a.jpg", "tech")
    b = PhotoDocument.upload(TOP_VIEW_OF_JOINT, "/a.jpg", "tech")
    assert a.id != b.id
    assert a.uploaded_at.tzinfo is not None


def test_required_constructor_fields():
    with pytest.raises(ValueError):
        PhotoDocument("p1", None, "/img", "tech", T0)
    with pytest.raises(ValueError):
        PhotoDocument("p1", TOP_VIEW_OF_JOINT, "/img", None, T0)


def test_approve(photo):
    event = photo.approve("qa-lead", T1)
    assert photo.is_approved()
    assert photo.reviewed_by == "qa-lead"
    assert photo.reviewed_at == T1
    assert photo.last_modified_at == T1
    assert isinstance(event, PhotoApproved)
    assert event.photo_id == "p1"
    assert event.occurred_at == T1


def test_reject_records_reason(photo):
    event = photo.reject("qa-lead", T1, "blurry")
    assert photo.is_rejected()
    assert photo.review_comment == "blurry"
    assert isinstance(event, PhotoRejected)
    assert event.reason == "blurry"


def test_decided_photo_cannot_change(photo):
    photo.approve("qa-lead", T1)
    with pytest.raises(IllegalStateError, match="already approved") as exc:
        photo.reject("other", T1)
    assert exc.value.current_state is ApprovalStatus.APPROVED
    with pytest.raises(IllegalStateError):
        photo.approve("other", T1)
    assert photo.reviewed_by == "qa-lead"


def test_rejected_photo_cannot_be_approved(photo):
    photo.reject("qa-lead", T1)
    with pytest.raises(IllegalStateError, match="already rejected"):
        photo.approve("qa-lead", T1)


def test_state_guard_runs_before_argument_checks(photo):
    photo.approve("qa-lead", T1)
    with pytest.raises(IllegalStateError):
        photo.approve(None, None)


def test_missing_reviewer_leaves_photo_pending(photo):
    with pytest.raises(ValueError):
        photo.approve(None, T1)
    with pytest.raises(ValueError):
        photo.reject("qa", None)
    assert photo.is_pending()


def test_approval_transition_table():
    assert approval_transition(ApprovalStatus.PENDING, ApprovalStatus.REJECTED) is ApprovalStatus.REJECTED
    with pytest.raises(ValueError):
        approval_transition(ApprovalStatus.PENDING, ApprovalStatus.PENDING)
    assert ApprovalStatus.APPROVED.is_terminal
    assert not ApprovalStatus.PENDING.is_terminal


def test_set_metadata_returns_violations_without_enforcing(photo):
    assert photo.set_metadata(GOOD) == []
    assert photo.meets_quality_standards()
    assert photo.last_modified_at == T_CLOCK

    violations = photo.set_metadata(BAD)
    assert len(violations) == 2
    assert photo.metadata is BAD
    assert not photo.meets_quality_standards()
    assert photo.quality_violations() == violations


def test_no_metadata_does_not_meet_standards(photo):
    assert not photo.meets_quality_standards()
    assert photo.quality_violations() == []


def test_approve_good_photo_end_to_end(photo):
    photo.set_metadata(GOOD)
    photo.approve("qa-lead", T1)
    assert photo.status is ApprovalStatus.APPROVED
    assert photo.meets_quality_standards()


def test_annotation_add_update_remove(photo):
    a = new_annotation(0.2, 0.3, "porosity", AnnotationType.ISSUE)
    assert photo.add_annotation(a)
    assert photo.find_annotation(a.id) == a

    assert photo.update_annotation(a.with_text("porosity, 2mm"))
    assert photo.find_annotation(a.id).text == "porosity, 2mm"
    assert not photo.update_annotation(PhotoAnnotation("missing", 0, 0, "x", AnnotationType.NOTE))

    assert photo.remove_annotation(a.id)
    assert not photo.remove_annotation(a.id)
    assert photo.annotations == ()


def test_unchanged_annotation_ops_do_not_touch(photo):
    assert not photo.remove_annotation("missing")
    assert photo.last_modified_at == T0


def test_annotations_allowed_after_review(photo):
    photo.approve("qa-lead", T1)
    assert photo.add_annotation(new_annotation(0.5, 0.5, "late note"))
    assert len(photo.annotations) == 1


def test_assign_to_order(photo):
    photo.assign_to_order("o1")
    assert photo.order_id == "o1"
    with pytest.raises(ValueError):
        photo.assign_to_order(None)


def test_identity():
    a = PhotoDocument("same", TOP_VIEW_OF_JOINT, "/a.jpg", "tech", T0)
    b = PhotoDocument("same", TOP_VIEW_OF_JOINT, "/b.jpg", "other", T1)
    assert a == b
    assert len({a, b}) == 1


def test_reject_without_reason(photo):
    photo.reject("qa-lead", T1, None)
    assert photo.is_rejected()
    assert photo.review_comment is None


def test_removing_known_annotation_touches():
    a = PhotoAnnotation("a1", 0.1, 0.1, "mark", AnnotationType.NOTE)
    photo = PhotoDocument("p1", TOP_VIEW_OF_JOINT, "/img/p1.jpg", "tech", T0, annotations=[a], clock=lambda: T_CLOCK)
    assert photo.last_modified_at == T0
    assert photo.remove_annotation("a1")
    assert photo.last_modified_at == T_CLOCK


def test_review_state_cannot_be_assigned_directly(photo):
    assert photo.image_path == "/img/p1.jpg"
    with pytest.raises(AttributeError):
        photo.status = ApprovalStatus.APPROVED
    with pytest.raises(AttributeError):
        photo.reviewed_by = "someone"
    assert photo.is_pending()
