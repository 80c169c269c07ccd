"""
Table models behind DataGateway; names and columns follow the hosted schema
"""

from extensions import db
from datetime import datetime
from flask_login import UserMixin
from sqlalchemy import JSON
import uuid


# Custom JSON type that uses JSONB on PostgreSQL and JSON/Text on SQLite
class SafeJSON(db.TypeDecorator):
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            from sqlalchemy.dialects.postgresql import JSONB
            return dialect.type_descriptor(JSONB())
        else:
            return dialect.type_descriptor(JSON())


def _uuid():
    return str(uuid.uuid4())


class User(UserMixin, db.Model):
    __tablename__ = 'users'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    username = db.Column(db.String(255), unique=True, nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(50), default='client')  # client, owner
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    profile = db.relationship('Profile', backref='user', uselist=False, lazy=True,
                              cascade='all, delete-orphan')


class Profile(db.Model):
    __tablename__ = 'profiles'
    id = db.Column(db.String(36), db.ForeignKey('users.id'), primary_key=True)
    full_name = db.Column(db.String(255))
    avatar_url = db.Column(db.String(500))
    bio = db.Column(db.Text)
    role = db.Column(db.String(50))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)


class Project(db.Model):
    __tablename__ = 'projects'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    client_id = db.Column(db.String(36), db.ForeignKey('users.id'))
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    requirements = db.Column(db.Text)
    type = db.Column(db.String(100), nullable=False)  # web, mobile, ml, iot, other
    budget_range = db.Column(db.String(100))
    deadline = db.Column(db.DateTime)
    status = db.Column(db.String(50), default='pending')  # pending, in_progress, completed
    file_urls = db.Column(SafeJSON, default=list)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    messages = db.relationship('Message', backref='project', lazy=True, cascade='all, delete-orphan')


class Message(db.Model):
    __tablename__ = 'messages'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    project_id = db.Column(db.String(36), db.ForeignKey('projects.id'))
    sender_id = db.Column(db.String(36))
    content = db.Column(db.Text, nullable=False)
    is_read = db.Column(db.Boolean, default=False)
    # Contact form fields, empty for project messages
    name = db.Column(db.String(255))
    email = db.Column(db.String(255))
    subject = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)


class ProjectAssignment(db.Model):
    __tablename__ = 'project_assignments'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    project_id = db.Column(db.String(36), db.ForeignKey('projects.id'))
    team_member_id = db.Column(db.String(36), db.ForeignKey('team_members.id'))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)


class Review(db.Model):
    __tablename__ = 'reviews'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    reviewer_name = db.Column(db.String(255), nullable=False)
    project_name = db.Column(db.String(255))
    content = db.Column(db.Text, nullable=False)
    rating = db.Column(db.Float)
    is_approved = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Service(db.Model):
    __tablename__ = 'services'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    category = db.Column(db.String(100), nullable=False)
    image_url = db.Column(db.String(500))
    price_range = db.Column(db.String(100))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class TeamMember(db.Model):
    __tablename__ = 'team_members'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    name = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(255), nullable=False)
    bio = db.Column(db.Text)
    avatar_url = db.Column(db.String(500))
    social_links = db.Column(SafeJSON, default=dict)  # {github, linkedin, twitter}
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class TrainingRequest(db.Model):
    __tablename__ = 'training_requests'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    client_id = db.Column(db.String(36), db.ForeignKey('users.id'))
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(50))
    topic = db.Column(db.String(255), nullable=False)
    availability = db.Column(SafeJSON, default=list)
    status = db.Column(db.String(50), default='pending')
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Meeting(db.Model):
    __tablename__ = 'meetings'
    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    client_id = db.Column(db.String(36), db.ForeignKey('users.id'))
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    meeting_time = db.Column(db.DateTime, nullable=False)
    duration = db.Column(db.Integer, default=30)  # minutes
    meeting_link = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Index for upcoming-meeting queries
    __table_args__ = (
        db.Index('idx_meeting_client_time', 'client_id', 'meeting_time'),
    )
