from vtube.routes.auth import auth_bp
from vtube.routes.dashboard import dashboard_bp
from vtube.routes.healthcheck import healthcheck_bp
from vtube.routes.likes import likes_bp
from vtube.routes.playlists import playlists_bp
from vtube.routes.subscriptions import subscriptions_bp
from vtube.routes.tweets import tweets_bp
from vtube.routes.videos import videos_bp

__all__ = [
    "auth_bp",
    "dashboard_bp",
    "healthcheck_bp",
    "likes_bp",
    "playlists_bp",
    "subscriptions_bp",
    "tweets_bp",
    "videos_bp",
]
