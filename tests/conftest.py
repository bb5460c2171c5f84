"""
Pytest configuration and fixtures for VTube tests.
"""
import os
import uuid
import pytest

# Set testing environment before importing app
os.environ["TESTING"] = "true"

from vtube.app import create_app
from vtube.models import db, Video
from vtube.models_auth import User


class FakeMediaStorage:
    """In-memory stand-in for MediaStorage recording every call."""

    def __init__(self):
        self.uploads = []
        self.deleted = []
        self.fail_uploads = False

    def upload(self, local_path):
        self.uploads.append(local_path.name)
        local_path.unlink(missing_ok=True)
        if self.fail_uploads:
            return None
        public_id = uuid.uuid4().hex
        return {
            "public_id": public_id,
            "secure_url": f"https://media.example.com/{public_id}",
            "duration": 42.5,
        }

    def delete(self, public_id, resource_type="image"):
        self.deleted.append((public_id, resource_type))
        return {"result": "ok"}


@pytest.fixture(scope="function")
def media_storage():
    return FakeMediaStorage()


@pytest.fixture(scope="function")
def app(media_storage, tmp_path):
    """Create and configure a test application instance with in-memory SQLite."""
    test_config = {
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "SECRET_KEY": "test-secret-key",
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
    }

    app = create_app(test_config=test_config, media_storage=media_storage)

    yield app

    # Cleanup
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope="function")
def client(app):
    """Create a test client."""
    return app.test_client()


@pytest.fixture(scope="function")
def make_user(app):
    """Factory creating users and returning their credentials."""
    def _make_user(username, password="TestPassword123!"):
        with app.app_context():
            user = User(
                username=username,
                email=f"{username}@example.com",
                avatar=f"https://img.example.com/{username}.png"
            )
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return {"id": user.id, "username": username, "email": user.email, "password": password}
    return _make_user


@pytest.fixture(scope="function")
def make_video(app):
    """Factory creating videos directly in the database."""
    def _make_video(owner_id, title="Test Video", thumbnail=None, views=0, is_published=True):
        unique_id = uuid.uuid4().hex[:8]
        with app.app_context():
            video = Video(
                video_file=f"https://media.example.com/video_{unique_id}.mp4",
                thumbnail=thumbnail or f"https://media.example.com/thumb_{unique_id}.jpg",
                title=title,
                description="A test video description",
                duration=120.0,
                views=views,
                is_published=is_published,
                owner_id=owner_id,
            )
            db.session.add(video)
            db.session.commit()
            return {"id": video.id, "title": video.title, "thumbnail": video.thumbnail}
    return _make_video


@pytest.fixture(scope="function")
def sample_user(make_user):
    """Create a sample user for testing."""
    return make_user("testuser")


@pytest.fixture(scope="function")
def other_user(make_user):
    """Create a second user, owner of nothing by default."""
    return make_user("otheruser", "OtherPassword123!")


@pytest.fixture(scope="function")
def sample_video(make_video, sample_user):
    """Create a sample published video owned by sample_user."""
    return make_video(sample_user["id"])


def login(client, user):
    return client.post('/api/v1/users/login', json={
        'username': user['username'],
        'password': user['password']
    })


@pytest.fixture(scope="function")
def authenticated_client(client, sample_user):
    """Create an authenticated test client."""
    login(client, sample_user)
    return client


@pytest.fixture(scope="function")
def other_client(app, other_user):
    """Create a second client logged in as other_user."""
    other = app.test_client()
    login(other, other_user)
    return other
