"""Tests for the ProfileForm session: load, draft edits, submit and sign out"""
import pytest

from app.modules.profiles.form import (
    ProfileForm, split_list_field, join_list_field,
    READY, SAVING, ERROR, UNAUTHENTICATED, SAVED_MESSAGE,
)
from app.modules.profiles.schemas import ProfileUpdate, UserProfileResult
from tests.fakes import ALICE_ID, ALICE_TOKEN, DOCX, FakeAPIError


@pytest.fixture
def form_for(service, auth_service):
    def _form(token=ALICE_TOKEN):
        return ProfileForm(service, auth_service, token).activate()
    return _form


@pytest.mark.parametrize("text,expected", [
    ("React, Node, React", ["React", "Node", "React"]),
    (" , ,", []),
    ("", []),
    ("  Go  ,Rust,,  ", ["Go", "Rust"]),
    ("Machine Learning", ["Machine Learning"]),
])
def test_split_list_field(text, expected):
    assert split_list_field(text) == expected


def test_join_list_field():
    assert join_list_field(["Go", "Rust"]) == "Go, Rust"
    assert join_list_field([]) == ""
    assert join_list_field(None) == ""


def test_activate_without_identity_shows_unauthenticated_view(form_for, supabase):
    form = form_for(token=None)

    assert form.state == UNAUTHENTICATED
    assert form.user is None
    assert supabase.calls == []


def test_activate_for_new_identity_has_empty_draft(form_for):
    form = form_for()

    assert form.state == READY
    assert form.user.id == ALICE_ID
    assert form.profile is None
    assert form.data.skills == ""
    assert form.existing_resume_url == ""


def test_activate_fills_draft_from_profile(form_for, service, alice):
    service.save_profile(ProfileUpdate(
        resume_url="https://example.supabase.co/storage/v1/object/public/resumes/x/1.pdf",
        skills=["Python", "Go"],
        interests=["ML"],
        experience_level="entry",
        bio="hi",
    ), alice)

    form = form_for()

    assert form.state == READY
    assert form.data.skills == "Python, Go"
    assert form.data.interests == "ML"
    assert form.data.experience_level == "entry"
    assert form.data.bio == "hi"
    assert form.data.github_url == ""
    assert form.existing_resume_url.endswith("/resumes/x/1.pdf")


def test_activate_any_authentication_failure_shows_unauthenticated_view(form_for, service, monkeypatch):
    monkeypatch.setattr(service, "load_current_user_with_profile", lambda token: UserProfileResult(
        success=False, error="Session expired", status_code=401,
    ))

    form = form_for()

    assert form.state == UNAUTHENTICATED
    assert form.error == ""


def test_activate_backend_failure_enters_error_state(form_for, supabase):
    supabase.fail_with = FakeAPIError("connection refused")

    form = form_for()

    assert form.state == ERROR
    assert form.error == "Failed to load profile: connection refused"


def test_editing_fields_does_not_write(form_for, supabase):
    form = form_for()
    calls_before = list(supabase.calls)

    form.update_field("skills", "Go")
    form.update_field("bio", "draft")

    assert form.data.skills == "Go"
    assert supabase.calls == calls_before


def test_update_field_rejects_unknown_names(form_for):
    form = form_for()

    with pytest.raises(ValueError):
        form.update_field("owner_id", "someone-else")


def test_new_identity_submits_skills_without_file(form_for, supabase):
    form = form_for()
    form.update_field("skills", "Go, Rust")
    form.update_field("experience_level", "mid")

    form.submit()

    assert form.state == READY
    assert form.success == SAVED_MESSAGE
    assert form.error == ""
    assert form.profile.skills == ["Go", "Rust"]
    assert form.profile.resume_url is None
    assert form.profile.experience_level == "mid"
    assert supabase.storage.upload_calls == []
    assert len(supabase.rows()) == 1


def test_staging_a_file_clears_current_resume_without_uploading(form_for, service, alice, supabase, make_resume):
    service.save_profile(ProfileUpdate(resume_url="https://old/resume.pdf"), alice)
    form = form_for()
    assert form.existing_resume_url == "https://old/resume.pdf"

    form.stage_resume(make_resume())

    assert form.existing_resume_url == ""
    assert form.snapshot().staged_resume == "resume.pdf"
    assert supabase.storage.upload_calls == []


def test_submit_uploads_staged_file_before_saving(form_for, supabase, make_resume):
    form = form_for()
    form.stage_resume(make_resume(filename="cv.docx", content_type=DOCX))

    form.submit()

    assert form.success == SAVED_MESSAGE
    assert supabase.calls[-1] == ("profiles", "upsert")
    _, key, _ = supabase.storage.upload_calls[0]
    assert form.profile.resume_url.endswith(key)
    assert form.existing_resume_url == form.profile.resume_url
    assert form.resume_file is None


def test_submit_aborts_when_upload_declines(form_for, supabase, make_resume):
    form = form_for()
    form.update_field("bio", "not saved")
    form.stage_resume(make_resume(content_type="image/png"))

    form.submit()

    assert form.state == READY
    assert form.error == "Invalid file type. Please upload a PDF, DOC, or DOCX file."
    assert form.success == ""
    assert supabase.rows() == []
    assert form.resume_file is not None


def test_submit_keeps_existing_resume_when_no_file_staged(form_for, service, alice):
    service.save_profile(ProfileUpdate(resume_url="https://old/resume.pdf"), alice)
    form = form_for()
    form.update_field("bio", "updated")

    form.submit()

    assert form.profile.resume_url == "https://old/resume.pdf"
    assert form.profile.bio == "updated"


def test_submit_rejects_unknown_experience_level(form_for, supabase):
    form = form_for()
    form.update_field("experience_level", "principal")

    form.submit()

    assert form.error == "Invalid experience level: principal"
    assert supabase.rows() == []


def test_latest_notice_replaces_previous_one(form_for, supabase):
    form = form_for()
    form.submit()
    assert form.success == SAVED_MESSAGE

    supabase.fail_with = FakeAPIError("quota exceeded")
    form.submit()

    assert form.success == ""
    assert form.error == "Failed to save profile: quota exceeded"
    assert form.state == READY


def test_submit_without_identity_reports_error(service, auth_service):
    form = ProfileForm(service, auth_service, None)

    form.submit()

    assert form.error == "User not authenticated"


def test_sign_out_invalidates_session(form_for, supabase):
    form = form_for()

    redirect_to = form.sign_out()

    assert redirect_to == "/auth/login"
    assert supabase.auth.signed_out == [ALICE_TOKEN]


def test_submit_is_saving_while_writing_then_ready(form_for, service, monkeypatch):
    form = form_for()
    seen = []
    save_profile = service.save_profile

    def recording_save(fields, identity):
        seen.append(form.state)
        return save_profile(fields, identity)

    monkeypatch.setattr(service, "save_profile", recording_save)

    form.submit()
    form.submit()

    assert seen == [SAVING, SAVING]
    assert form.state == READY
    assert form.success == SAVED_MESSAGE
