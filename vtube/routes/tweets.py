from flask import Blueprint, current_app
from flask_login import login_required, current_user

from vtube.errors import Forbidden, NotFound
from vtube.models import db, Tweet, Like
from vtube.responses import api_response, request_data
from vtube.services.validation import require_id, require_text

tweets_bp = Blueprint('tweets', __name__, url_prefix='/api/v1/tweets')

CONTENT_MAX_LENGTH = 280


def get_owned_tweet(tweet_id: str) -> Tweet:
    tweet = db.session.get(Tweet, require_id(tweet_id, "tweet"))
    if not tweet:
        raise NotFound("No tweet found with the provided id")
    if tweet.owner_id != current_user.id:
        raise Forbidden("You don't have permission to modify this tweet")
    return tweet


@tweets_bp.route('/', methods=['POST'])
@login_required
def create_tweet():
    content = require_text(request_data().get('content'), "Content", CONTENT_MAX_LENGTH)
    tweet = Tweet(content=content, owner_id=current_user.id)
    db.session.add(tweet)
    db.session.commit()
    return api_response(201, tweet.to_dict(), "Successfully created tweet")


@tweets_bp.route('/')
@login_required
def all_tweets():
    tweets = Tweet.query.order_by(Tweet.created_at.desc(), Tweet.id).all()
    return api_response(200, [tweet.to_dict() for tweet in tweets], "Successfully fetched tweets")


@tweets_bp.route('/user/<user_id>')
@login_required
def user_tweets(user_id):
    tweets = Tweet.query.filter_by(owner_id=require_id(user_id, "user")).order_by(
        Tweet.created_at.desc(), Tweet.id
    ).all()
    return api_response(200, [tweet.to_dict() for tweet in tweets], "Successfully fetched tweets")


@tweets_bp.route('/<tweet_id>', methods=['PATCH'])
@login_required
def update_tweet(tweet_id):
    content = require_text(request_data().get('content'), "Content", CONTENT_MAX_LENGTH)
    tweet = get_owned_tweet(tweet_id)
    tweet.content = content
    db.session.commit()
    return api_response(200, tweet.to_dict(), "Successfully updated tweet")


@tweets_bp.route('/<tweet_id>', methods=['DELETE'])
@login_required
def delete_tweet(tweet_id):
    tweet = get_owned_tweet(tweet_id)
    Like.query.filter_by(tweet_id=tweet.id).delete()
    db.session.delete(tweet)
    db.session.commit()
    current_app.logger.info(f"User '{current_user.username}' deleted tweet {tweet_id}")
    return api_response(200, None, "Successfully deleted tweet")
