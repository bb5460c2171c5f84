"""
Tests for tweets, likes, subscriptions, dashboard and healthcheck routes.
"""
import vtube
from vtube.models import db, Like, Subscription, Tweet
from vtube.models_auth import User


def create_tweet(client, content="Hello world"):
    return client.post('/api/v1/tweets/', json={'content': content})


class TestTweetRoutes:

    def test_create_and_list(self, authenticated_client, sample_user):
        response = create_tweet(authenticated_client)
        assert response.status_code == 201
        assert response.get_json()["data"]["owner"] == sample_user["id"]

        response = authenticated_client.get('/api/v1/tweets/')
        assert [t["content"] for t in response.get_json()["data"]] == ["Hello world"]

    def test_create_empty_tweet(self, authenticated_client):
        response = create_tweet(authenticated_client, content="   ")
        assert response.status_code == 400

    def test_create_overlong_tweet(self, authenticated_client, app):
        response = create_tweet(authenticated_client, content="a" * 281)
        assert response.status_code == 400
        assert response.get_json()["message"] == "Content must be at most 280 characters"
        with app.app_context():
            assert Tweet.query.count() == 0

    def test_user_tweets(self, authenticated_client, other_client, sample_user, other_user):
        create_tweet(authenticated_client, "mine")
        create_tweet(other_client, "theirs")

        response = authenticated_client.get(f'/api/v1/tweets/user/{other_user["id"]}')
        assert [t["content"] for t in response.get_json()["data"]] == ["theirs"]

    def test_update_own_tweet(self, authenticated_client):
        tweet_id = create_tweet(authenticated_client).get_json()["data"]["id"]
        response = authenticated_client.patch(f'/api/v1/tweets/{tweet_id}', json={'content': 'Edited'})
        assert response.status_code == 200
        assert response.get_json()["data"]["content"] == "Edited"

    def test_update_other_users_tweet(self, authenticated_client, other_client):
        tweet_id = create_tweet(authenticated_client).get_json()["data"]["id"]
        response = other_client.patch(f'/api/v1/tweets/{tweet_id}', json={'content': 'Hijacked'})
        assert response.status_code == 403

    def test_delete_tweet_removes_likes(self, authenticated_client, other_client, app):
        tweet_id = create_tweet(authenticated_client).get_json()["data"]["id"]
        other_client.post(f'/api/v1/likes/toggle/t/{tweet_id}')

        response = authenticated_client.delete(f'/api/v1/tweets/{tweet_id}')
        assert response.status_code == 200
        with app.app_context():
            assert db.session.get(Tweet, tweet_id) is None
            assert Like.query.count() == 0

    def test_delete_unknown_tweet(self, authenticated_client):
        response = authenticated_client.delete(f'/api/v1/tweets/{"a" * 24}')
        assert response.status_code == 404


class TestLikeRoutes:

    def test_toggle_video_like(self, other_client, sample_video, app):
        response = other_client.post(f'/api/v1/likes/toggle/v/{sample_video["id"]}')
        assert response.get_json()["data"] == {"isLiked": True}

        response = other_client.get('/api/v1/likes/videos')
        assert [v["id"] for v in response.get_json()["data"]] == [sample_video["id"]]

        response = other_client.post(f'/api/v1/likes/toggle/v/{sample_video["id"]}')
        assert response.get_json()["data"] == {"isLiked": False}
        with app.app_context():
            assert Like.query.count() == 0

    def test_like_unknown_video(self, authenticated_client):
        response = authenticated_client.post(f'/api/v1/likes/toggle/v/{"b" * 24}')
        assert response.status_code == 404

    def test_like_malformed_tweet_id(self, authenticated_client):
        response = authenticated_client.post('/api/v1/likes/toggle/t/xyz')
        assert response.status_code == 400


class TestSubscriptionRoutes:

    def test_toggle_subscription(self, other_client, sample_user, other_user, app):
        response = other_client.post(f'/api/v1/subscriptions/c/{sample_user["id"]}')
        assert response.get_json()["data"] == {"isSubscribed": True}

        response = other_client.get(f'/api/v1/subscriptions/c/{sample_user["id"]}')
        assert [s["username"] for s in response.get_json()["data"]] == [other_user["username"]]

        response = other_client.post(f'/api/v1/subscriptions/c/{sample_user["id"]}')
        assert response.get_json()["data"] == {"isSubscribed": False}
        with app.app_context():
            assert Subscription.query.count() == 0

    def test_cannot_subscribe_to_self(self, authenticated_client, sample_user):
        response = authenticated_client.post(f'/api/v1/subscriptions/c/{sample_user["id"]}')
        assert response.status_code == 400

    def test_subscribe_to_unknown_channel(self, authenticated_client):
        response = authenticated_client.post(f'/api/v1/subscriptions/c/{"c" * 24}')
        assert response.status_code == 404


class TestDashboardRoutes:

    def test_stats(self, authenticated_client, other_client, sample_user, make_video):
        video = make_video(sample_user["id"], views=7)
        other_client.post(f'/api/v1/subscriptions/c/{sample_user["id"]}')
        other_client.post(f'/api/v1/likes/toggle/v/{video["id"]}')

        response = authenticated_client.get('/api/v1/dashboard/stats')
        assert response.status_code == 200
        assert response.get_json()["data"] == {
            "totalVideos": 1,
            "totalViews": 7,
            "totalSubscribers": 1,
            "totalLikes": 1,
        }

    def test_channel_videos(self, authenticated_client, sample_user, sample_video):
        response = authenticated_client.get(f'/api/v1/dashboard/videos/{sample_user["id"]}')
        body = response.get_json()
        assert body["message"] == "Successfully sent videos"
        assert [v["id"] for v in body["data"]] == [sample_video["id"]]

    def test_channel_videos_of_deleted_user(self, authenticated_client, app, make_user, make_video):
        ghost = make_user("ghost")
        make_video(ghost["id"])
        with app.app_context():
            db.session.delete(db.session.get(User, ghost["id"]))
            db.session.commit()

        response = authenticated_client.get(f'/api/v1/dashboard/videos/{ghost["id"]}')
        assert response.status_code == 200
        assert response.get_json()["data"] == []
        assert response.get_json()["message"] == "No videos uploaded yet"

    def test_stats_requires_auth(self, client):
        response = client.get('/api/v1/dashboard/stats')
        assert response.status_code == 401


class TestHealthcheck:

    def test_healthcheck(self, client):
        response = client.get('/api/v1/healthcheck/')
        assert response.status_code == 200
        assert response.get_json()["data"] == {"status": "OK", "version": vtube.__version__}

    def test_unknown_route_uses_error_envelope(self, client):
        response = client.get('/api/v1/does-not-exist')
        assert response.status_code == 404
        body = response.get_json()
        assert body["success"] is False
        assert body["statusCode"] == 404
