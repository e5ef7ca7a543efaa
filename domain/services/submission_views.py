from __future__ import annotations

from domain.models.submission import (
    FileView,
    HackathonRef,
    Submission,
    SubmissionFile,
    SubmissionStatus,
    SubmissionType,
    SubmissionView,
    TrackView,
)


def build_file_view(f: SubmissionFile) -> FileView:
    return FileView(
        name=f.file_name,
        url=f.file_url,
        type=f.file_type,
        size=f.file_size,
        download_url=f.file_url,
    )


def build_submission_view(submission: Submission) -> SubmissionView:
    """
    Single projection used by every submission read/write path, so derived
    fields (type, repository_url, selected_track, tracks, files) never drift.
    """
    participant = submission.participant
    tracks = sorted(submission.tracks, key=lambda t: t.track_number)
    return SubmissionView(
        id=submission.id,
        hackathon_id=submission.hackathon_id,
        participant_id=submission.participant_id,
        team_id=submission.team_id,
        title=submission.title,
        description=submission.description,
        repository_url=submission.repo_url,
        demo_url=submission.demo_url,
        status=submission.status,
        is_draft=submission.status == SubmissionStatus.DRAFT,
        is_final=submission.status == SubmissionStatus.SUBMITTED,
        submitted_at=submission.submitted_at,
        created_at=submission.created_at,
        updated_at=submission.updated_at,
        type=SubmissionType.TEAM if submission.team_id else SubmissionType.INDIVIDUAL,
        selected_track=participant.selected_track if participant else None,
        submitter_id=participant.user_id if participant else None,
        submitter=participant.user if participant else None,
        team_info=submission.team,
        hackathon=HackathonRef(
            id=submission.hackathon_id,
            title=submission.hackathon_title,
            tracks=[TrackView(number=t.track_number, title=t.track_title) for t in tracks],
        ),
        files=[build_file_view(f) for f in submission.files],
    )
