import uuid

import pytest

from domain.exceptions import (
    NotRegisteredForHackathon,
    SubmissionAccessDenied,
    SubmissionNotFound,
    TeamMismatch,
    UserNotFound,
)
from domain.models.identity import Caller, Role
from domain.models.submission import (
    FileSpec,
    NewSubmission,
    SubmissionChanges,
    SubmissionFilter,
    SubmissionStatus,
    SubmissionType,
)


@pytest.fixture
def registered(registration_service, hackathon, users):
    team = registration_service.register(users["alice"], hackathon.id, team_name="Rocket").team
    registration_service.register(users["bob"], hackathon.id, selected_track=1)
    return team


def caller(users, name, role=Role.PARTICIPANT):
    return Caller(user_id=users[name], role=role)


def test_final_submission_is_stamped(submission_service, hackathon, users, registered):
    view = submission_service.create_submission(
        users["bob"],
        NewSubmission(
            hackathon_id=hackathon.id,
            title="Solo app",
            repository_url="https://git.example.com/bob/app",
            live_url="https://app.example.com",
        ),
    )
    assert view.status == SubmissionStatus.SUBMITTED
    assert view.is_final and not view.is_draft
    assert view.submitted_at is not None
    assert view.repository_url == "https://git.example.com/bob/app"
    assert view.demo_url == "https://app.example.com"
    assert view.type == SubmissionType.INDIVIDUAL
    assert view.selected_track == 1
    assert view.submitter_id == users["bob"]
    assert view.submitter.email == "bob@example.com"
    assert view.hackathon.title == "AI Sprint"
    assert [(t.number, t.title) for t in view.hackathon.tracks] == [(1, "Climate"), (2, "Health")]


def test_draft_then_submit(submission_service, hackathon, users, registered):
    draft = submission_service.create_submission(
        users["bob"], NewSubmission(hackathon_id=hackathon.id, title="WIP", is_draft=True)
    )
    assert draft.status == SubmissionStatus.DRAFT
    assert draft.submitted_at is None

    final = submission_service.update_submission(
        users["bob"], draft.id, SubmissionChanges(is_draft=False)
    )
    assert final.status == SubmissionStatus.SUBMITTED
    assert final.submitted_at is not None
    assert final.title == "WIP"

    back = submission_service.update_submission(
        users["bob"], draft.id, SubmissionChanges(is_draft=True)
    )
    assert back.status == SubmissionStatus.DRAFT
    assert back.submitted_at is None


def test_update_without_draft_flag_keeps_status(submission_service, hackathon, users, registered):
    draft = submission_service.create_submission(
        users["bob"], NewSubmission(hackathon_id=hackathon.id, title="WIP", is_draft=True)
    )
    updated = submission_service.update_submission(
        users["bob"], draft.id, SubmissionChanges(title="Renamed")
    )
    assert updated.title == "Renamed"
    assert updated.status == SubmissionStatus.DRAFT
    assert updated.submitted_at is None


def test_team_submission_defaults_to_participants_team(
    submission_service, hackathon, users, registered
):
    view = submission_service.create_submission(
        users["alice"], NewSubmission(hackathon_id=hackathon.id, title="Rocket app")
    )
    assert view.team_id == registered.id
    assert view.type == SubmissionType.TEAM
    assert view.team_info.name == "Rocket"

    # Same derivation on every read path
    assert submission_service.get_submission(view.id, caller(users, "alice")).type == SubmissionType.TEAM
    listed = submission_service.list_submissions(SubmissionFilter(), caller(users, "alice"))
    assert [s.type for s in listed] == [SubmissionType.TEAM]


def test_submitting_for_another_team_is_rejected(submission_service, hackathon, users, registered):
    with pytest.raises(TeamMismatch):
        submission_service.create_submission(
            users["bob"],
            NewSubmission(hackathon_id=hackathon.id, title="Hijack", team_id=registered.id),
        )


def test_unregistered_user_cannot_submit(submission_service, hackathon, users):
    with pytest.raises(NotRegisteredForHackathon):
        submission_service.create_submission(
            users["alice"], NewSubmission(hackathon_id=hackathon.id, title="Nope")
        )


def test_unknown_user_cannot_submit(submission_service, hackathon):
    with pytest.raises(UserNotFound):
        submission_service.create_submission(
            uuid.uuid4(), NewSubmission(hackathon_id=hackathon.id, title="Nope")
        )


def test_file_defaults(submission_service, hackathon, users, registered):
    view = submission_service.create_submission(
        users["bob"],
        NewSubmission(
            hackathon_id=hackathon.id,
            title="With files",
            files=[
                FileSpec(),
                FileSpec(name="deck.pdf", url="https://cdn.example.com/deck.pdf", type="application/pdf", size=2048),
            ],
        ),
    )
    by_name = {f.name: f for f in view.files}
    assert by_name["Unknown"].type == "application/octet-stream"
    assert by_name["Unknown"].size == 0
    assert by_name["Unknown"].url == ""
    assert by_name["deck.pdf"].download_url == "https://cdn.example.com/deck.pdf"
    assert by_name["deck.pdf"].size == 2048


def test_participant_sees_only_own_submissions(submission_service, hackathon, users, registered):
    submission_service.create_submission(users["alice"], NewSubmission(hackathon_id=hackathon.id, title="A"))
    submission_service.create_submission(users["bob"], NewSubmission(hackathon_id=hackathon.id, title="B"))

    titles = [s.title for s in submission_service.list_submissions(SubmissionFilter(), caller(users, "bob"))]
    assert titles == ["B"]


def test_organizer_sees_submissions_of_own_hackathons(
    submission_service, hackathon, users, registered
):
    submission_service.create_submission(users["alice"], NewSubmission(hackathon_id=hackathon.id, title="A"))

    organizer = caller(users, "organizer", Role.ORGANIZER)
    other = caller(users, "other_organizer", Role.ORGANIZER)
    assert [s.title for s in submission_service.list_submissions(SubmissionFilter(), organizer)] == ["A"]
    assert submission_service.list_submissions(SubmissionFilter(), other) == []


def test_judge_sees_everything_and_filters_apply(submission_service, hackathon, users, registered):
    submission_service.create_submission(
        users["alice"], NewSubmission(hackathon_id=hackathon.id, title="A", is_draft=True)
    )
    submission_service.create_submission(users["bob"], NewSubmission(hackathon_id=hackathon.id, title="B"))

    judge = caller(users, "judge", Role.JUDGE)
    assert len(submission_service.list_submissions(SubmissionFilter(), judge)) == 2
    drafts = submission_service.list_submissions(SubmissionFilter(status=SubmissionStatus.DRAFT), judge)
    assert [s.title for s in drafts] == ["A"]
    by_team = submission_service.list_submissions(SubmissionFilter(team_id=registered.id), judge)
    assert [s.title for s in by_team] == ["A"]


def test_get_submission_access(submission_service, hackathon, users, registered):
    view = submission_service.create_submission(
        users["alice"], NewSubmission(hackathon_id=hackathon.id, title="A")
    )

    assert submission_service.get_submission(view.id, caller(users, "judge", Role.JUDGE)).id == view.id
    with pytest.raises(SubmissionAccessDenied):
        submission_service.get_submission(view.id, caller(users, "bob"))
    with pytest.raises(SubmissionNotFound):
        submission_service.get_submission(uuid.uuid4(), caller(users, "alice"))


def test_only_owner_can_update_or_delete(submission_service, hackathon, users, registered):
    view = submission_service.create_submission(
        users["alice"], NewSubmission(hackathon_id=hackathon.id, title="A")
    )

    with pytest.raises(SubmissionAccessDenied):
        submission_service.update_submission(users["bob"], view.id, SubmissionChanges(title="Mine"))
    with pytest.raises(SubmissionAccessDenied):
        submission_service.delete_submission(users["bob"], view.id)

    judge = caller(users, "judge", Role.JUDGE)
    assert submission_service.get_submission(view.id, judge).title == "A"

    assert submission_service.delete_submission(users["alice"], view.id) == {
        "message": "Submission deleted successfully"
    }
    with pytest.raises(SubmissionNotFound):
        submission_service.get_submission(view.id, judge)
    with pytest.raises(SubmissionNotFound):
        submission_service.delete_submission(users["alice"], view.id)


def test_explicit_user_filter_overrides_participant_scope(submission_service, hackathon, users, registered):
    submission_service.create_submission(users["alice"], NewSubmission(hackathon_id=hackathon.id, title="A"))
    submission_service.create_submission(users["bob"], NewSubmission(hackathon_id=hackathon.id, title="B"))

    listed = submission_service.list_submissions(SubmissionFilter(user_id=users["alice"]), caller(users, "bob"))
    assert [s.title for s in listed] == ["A"]


def test_organizer_with_hackathon_filter_is_not_limited_to_own_events(
    submission_service, hackathon, users, registered
):
    submission_service.create_submission(users["alice"], NewSubmission(hackathon_id=hackathon.id, title="A"))

    other = caller(users, "other_organizer", Role.ORGANIZER)
    listed = submission_service.list_submissions(SubmissionFilter(hackathon_id=hackathon.id), other)
    assert [s.title for s in listed] == ["A"]


def test_update_keeps_derived_fields(submission_service, hackathon, users, registered):
    team_view = submission_service.create_submission(
        users["alice"], NewSubmission(hackathon_id=hackathon.id, title="Rocket app")
    )
    solo_view = submission_service.create_submission(
        users["bob"], NewSubmission(hackathon_id=hackathon.id, title="Solo app")
    )

    team_updated = submission_service.update_submission(
        users["alice"], team_view.id, SubmissionChanges(title="Rocket app v2")
    )
    solo_updated = submission_service.update_submission(
        users["bob"], solo_view.id, SubmissionChanges(is_draft=True)
    )

    assert team_updated.type == SubmissionType.TEAM
    assert team_updated.team_id == registered.id
    assert team_updated.selected_track is None
    assert solo_updated.type == SubmissionType.INDIVIDUAL
    assert solo_updated.selected_track == 1
    assert solo_updated.submitter_id == users["bob"]
    assert [t.number for t in solo_updated.hackathon.tracks] == [1, 2]
