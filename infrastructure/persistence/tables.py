from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import declarative_base, relationship
import uuid
from datetime import datetime

Base = declarative_base()


class UserTable(Base):
    # Owned by the identity layer; read here for organizer/submitter summaries.
    __tablename__ = "users"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(Text, unique=True, nullable=False)
    first_name = Column(Text)
    last_name = Column(Text)
    role = Column(String, nullable=False, default="PARTICIPANT")
    created_at = Column(DateTime, default=datetime.utcnow)


class HackathonTable(Base):
    __tablename__ = "hackathons"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")
    type = Column(String, nullable=False, default="TEAM")
    status = Column(String, nullable=False, default="UPCOMING", index=True)
    min_team_size = Column(Integer, nullable=False, default=1)
    max_team_size = Column(Integer, nullable=False, default=5)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    registration_deadline = Column(DateTime)
    organizer_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    banner_url = Column(Text)
    location = Column(Text)
    is_virtual = Column(Boolean, nullable=False, default=False)
    prize_pool = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    organizer = relationship("UserTable")
    problem_statements = relationship(
        "ProblemStatementTable",
        order_by="ProblemStatementTable.track_number",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class ProblemStatementTable(Base):
    __tablename__ = "problem_statements"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    hackathon_id = Column(Uuid, ForeignKey("hackathons.id", ondelete="CASCADE"), nullable=False, index=True)
    uploaded_by_id = Column(Uuid)
    track_number = Column(Integer, nullable=False)
    track_title = Column(Text, nullable=False)
    description = Column(Text)
    file_name = Column(Text)
    file_url = Column(Text)
    file_type = Column(String)
    file_size = Column(Integer)
    created_at = Column(DateTime, default=datetime.utcnow)


class TeamTable(Base):
    __tablename__ = "teams"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    hackathon_id = Column(Uuid, ForeignKey("hackathons.id", ondelete="CASCADE"), nullable=False, index=True)
    leader_id = Column(Uuid, nullable=False)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow)

    members = relationship("ParticipantTable", back_populates="team")


class ParticipantTable(Base):
    __tablename__ = "participants"
    __table_args__ = (
        # One registration per user per hackathon; enforced by the store.
        UniqueConstraint("user_id", "hackathon_id", name="uq_participant_user_hackathon"),
    )
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    hackathon_id = Column(Uuid, ForeignKey("hackathons.id", ondelete="CASCADE"), nullable=False, index=True)
    team_id = Column(Uuid, ForeignKey("teams.id", ondelete="SET NULL"))
    role = Column(String, nullable=False, default="MEMBER")
    selected_track = Column(Integer)
    joined_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("UserTable")
    team = relationship("TeamTable", back_populates="members")


class SubmissionTable(Base):
    __tablename__ = "submissions"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    hackathon_id = Column(Uuid, ForeignKey("hackathons.id", ondelete="CASCADE"), nullable=False, index=True)
    participant_id = Column(Uuid, ForeignKey("participants.id", ondelete="CASCADE"), nullable=False, index=True)
    team_id = Column(Uuid, ForeignKey("teams.id", ondelete="SET NULL"))
    title = Column(Text, nullable=False)
    description = Column(Text)
    repo_url = Column(Text)
    demo_url = Column(Text)
    status = Column(String, nullable=False, default="DRAFT")
    submitted_at = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    participant = relationship("ParticipantTable")
    team = relationship("TeamTable")
    hackathon = relationship("HackathonTable")
    files = relationship(
        "SubmissionFileTable",
        backref="submission",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class SubmissionFileTable(Base):
    __tablename__ = "submission_files"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    submission_id = Column(Uuid, ForeignKey("submissions.id", ondelete="CASCADE"), nullable=False, index=True)
    file_name = Column(Text, nullable=False)
    file_url = Column(Text, nullable=False)
    file_type = Column(String, nullable=False)
    file_size = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
