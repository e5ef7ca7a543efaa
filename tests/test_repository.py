import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from domain.models.submission import NewSubmission


def test_failed_owned_update_rolls_back(repo, hackathon, users):
    with pytest.raises(IntegrityError):
        repo.update_hackathon_owned(hackathon.id, users["organizer"], {"title": None})

    # Session is usable again and the row is untouched
    assert repo.get_hackathon_by_id(hackathon.id).title == "AI Sprint"
    assert repo.update_hackathon_owned(hackathon.id, users["organizer"], {"title": "Renamed"})
    assert repo.get_hackathon_by_id(hackathon.id).title == "Renamed"


def test_owned_writes_match_only_the_owner(repo, hackathon, users):
    assert not repo.update_hackathon_owned(hackathon.id, users["other_organizer"], {"title": "Taken"})
    assert not repo.delete_hackathon_owned(hackathon.id, users["other_organizer"])
    assert not repo.delete_hackathon_owned(uuid.uuid4(), users["organizer"])
    assert repo.get_hackathon_by_id(hackathon.id).title == "AI Sprint"

    assert repo.delete_hackathon_owned(hackathon.id, users["organizer"])
    assert repo.get_hackathon_by_id(hackathon.id) is None


def test_failed_submission_update_rolls_back(repo, registration_service, submission_service, hackathon, users):
    registration_service.register(users["bob"], hackathon.id)
    view = submission_service.create_submission(users["bob"], NewSubmission(hackathon_id=hackathon.id, title="B"))

    with pytest.raises(IntegrityError):
        repo.update_submission_owned(view.id, users["bob"], {"title": None})

    assert repo.get_submission_by_id(view.id).title == "B"
    assert repo.delete_submission_owned(view.id, users["bob"])
    assert repo.get_submission_by_id(view.id) is None
