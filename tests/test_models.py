"""
Tests for VTube database models.
"""
import pytest

from vtube.models import db, Video, Playlist, PlaylistVideo, generate_object_id, is_valid_id
from vtube.models_auth import User


class TestObjectIds:

    def test_generated_ids_are_24_hex_chars(self):
        object_id = generate_object_id()
        assert len(object_id) == 24
        assert is_valid_id(object_id)

    def test_generated_ids_are_unique(self):
        assert len({generate_object_id() for _ in range(100)}) == 100

    @pytest.mark.parametrize("value,expected", [
        ("0123456789abcdef01234567", True),
        ("0123456789ABCDEF01234567", True),
        ("0123456789abcdef0123456", False),
        ("0123456789abcdef012345678", False),
        ("0123456789abcdef0123456g", False),
        ("", False),
        (None, False),
        (12345, False),
    ])
    def test_is_valid_id(self, value, expected):
        assert is_valid_id(value) is expected


class TestVideoModel:

    def test_create_video_defaults(self, app, sample_user):
        with app.app_context():
            video = Video(
                video_file="https://media.example.com/v.mp4",
                thumbnail="https://media.example.com/t.jpg",
                title="Test Video",
                description="Test description",
                owner_id=sample_user["id"],
            )
            db.session.add(video)
            db.session.commit()

            assert is_valid_id(video.id)
            assert video.views == 0
            assert video.duration == 0
            assert video.is_published is True
            assert video.created_at is not None

    def test_increment_views(self, app, sample_video):
        with app.app_context():
            video = db.session.get(Video, sample_video["id"])
            video.increment_views()
            video.increment_views()
            assert video.views == 2

    def test_toggle_publish(self, app, sample_video):
        with app.app_context():
            video = db.session.get(Video, sample_video["id"])
            video.toggle_publish()
            assert video.is_published is False
            video.toggle_publish()
            assert video.is_published is True

    def test_to_dict_uses_camel_case(self, app, sample_video):
        with app.app_context():
            data = db.session.get(Video, sample_video["id"]).to_dict()
        assert {"videoFile", "isPublished", "createdAt"} <= set(data)


class TestPlaylistModel:

    def test_video_ids_follow_position(self, app, sample_user):
        with app.app_context():
            playlist = Playlist(name="Mix", description="mixed", owner_id=sample_user["id"])
            db.session.add(playlist)
            db.session.flush()
            db.session.add(PlaylistVideo(playlist_id=playlist.id, video_id="b" * 24, position=1))
            db.session.add(PlaylistVideo(playlist_id=playlist.id, video_id="a" * 24, position=0))
            db.session.commit()

            assert playlist.video_ids == ["a" * 24, "b" * 24]

    def test_deleting_playlist_deletes_entries(self, app, sample_user):
        with app.app_context():
            playlist = Playlist(name="Mix", description="mixed", owner_id=sample_user["id"])
            db.session.add(playlist)
            db.session.flush()
            db.session.add(PlaylistVideo(playlist_id=playlist.id, video_id="a" * 24, position=0))
            db.session.commit()

            db.session.delete(playlist)
            db.session.commit()
            assert PlaylistVideo.query.count() == 0


class TestUserModel:

    def test_password_hashing(self, app):
        with app.app_context():
            user = User(username="hasher", email="hasher@example.com")
            user.set_password("TestPassword123!")
            assert user.password_hash != "TestPassword123!"
            assert user.check_password("TestPassword123!") is True
            assert user.check_password("WrongPassword123!") is False

    def test_to_dict_hides_password(self, app, sample_user):
        with app.app_context():
            data = db.session.get(User, sample_user["id"]).to_dict()
        assert "password_hash" not in data
        assert data["username"] == "testuser"

    def test_validate_password(self):
        assert User.validate_password("SecureP@ssword99!") == (True, [])
        is_valid, errors = User.validate_password("weak")
        assert is_valid is False
        assert "Password must be at least 12 characters long" in errors

    @pytest.mark.parametrize("username,expected", [
        ("valid_name", True),
        ("ab", False),
        ("with space", False),
        ("a" * 31, False),
    ])
    def test_validate_username(self, username, expected):
        assert User.validate_username(username)[0] is expected

    @pytest.mark.parametrize("email,expected", [
        ("someone@example.com", True),
        ("no-at-sign.com", False),
        ("two@@example.com", False),
    ])
    def test_validate_email(self, email, expected):
        assert User.validate_email(email) is expected
