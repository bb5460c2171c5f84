import re
import secrets
from datetime import datetime
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

OBJECT_ID_PATTERN = re.compile(r'^[0-9a-fA-F]{24}$')


def generate_object_id() -> str:
    """Generate a random 24-character hexadecimal document id."""
    return secrets.token_hex(12)


def is_valid_id(value) -> bool:
    return isinstance(value, str) and OBJECT_ID_PATTERN.match(value) is not None


class Video(db.Model):
    __tablename__ = "videos"

    id = db.Column(db.String(24), primary_key=True, default=generate_object_id)
    video_file = db.Column(db.String(500), nullable=False)
    video_file_public_id = db.Column(db.String(255), nullable=True)
    thumbnail = db.Column(db.String(500), nullable=False)
    thumbnail_public_id = db.Column(db.String(255), nullable=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    duration = db.Column(db.Float, nullable=False, default=0)
    views = db.Column(db.Integer, default=0, nullable=False)
    is_published = db.Column(db.Boolean, default=True, nullable=False)
    # No foreign key: videos outlive a deleted owner
    owner_id = db.Column(db.String(24), nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def increment_views(self):
        self.views += 1

    def toggle_publish(self):
        self.is_published = not self.is_published

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "videoFile": self.video_file,
            "thumbnail": self.thumbnail,
            "title": self.title,
            "description": self.description,
            "duration": self.duration,
            "views": self.views,
            "isPublished": self.is_published,
            "owner": self.owner_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


class Playlist(db.Model):
    __tablename__ = "playlists"
    __table_args__ = (
        db.UniqueConstraint('owner_id', 'name', name='unique_owner_playlist_name'),
    )

    id = db.Column(db.String(24), primary_key=True, default=generate_object_id)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.String(5000), nullable=False)
    owner_id = db.Column(db.String(24), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    entries = db.relationship(
        "PlaylistVideo",
        backref="playlist",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="PlaylistVideo.position",
    )

    @property
    def video_ids(self) -> list[str]:
        return [entry.video_id for entry in self.entries]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "videos": self.video_ids,
            "owner": self.owner_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


class PlaylistVideo(db.Model):
    __tablename__ = "playlist_videos"
    __table_args__ = (
        db.UniqueConstraint('playlist_id', 'video_id', name='unique_playlist_video'),
    )

    id = db.Column(db.Integer, primary_key=True)
    playlist_id = db.Column(db.String(24), db.ForeignKey("playlists.id"), nullable=False, index=True)
    video_id = db.Column(db.String(24), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False, default=0)
    added_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)


class Subscription(db.Model):
    __tablename__ = "subscriptions"
    __table_args__ = (
        db.UniqueConstraint('subscriber_id', 'channel_id', name='unique_subscriber_channel'),
    )

    id = db.Column(db.String(24), primary_key=True, default=generate_object_id)
    subscriber_id = db.Column(db.String(24), nullable=False, index=True)
    channel_id = db.Column(db.String(24), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)


class Tweet(db.Model):
    __tablename__ = "tweets"

    id = db.Column(db.String(24), primary_key=True, default=generate_object_id)
    content = db.Column(db.Text, nullable=False)
    owner_id = db.Column(db.String(24), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "content": self.content,
            "owner": self.owner_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


class Like(db.Model):
    __tablename__ = "likes"
    __table_args__ = (
        db.UniqueConstraint('liked_by_id', 'video_id', name='unique_user_video_like'),
        db.UniqueConstraint('liked_by_id', 'tweet_id', name='unique_user_tweet_like'),
    )

    id = db.Column(db.String(24), primary_key=True, default=generate_object_id)
    liked_by_id = db.Column(db.String(24), nullable=False, index=True)
    video_id = db.Column(db.String(24), nullable=True, index=True)
    tweet_id = db.Column(db.String(24), nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
