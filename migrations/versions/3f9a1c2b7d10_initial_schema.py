"""Initial schema

Revision ID: 3f9a1c2b7d10
Revises:
Create Date: 2026-10-19 10:12:41.503112

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f9a1c2b7d10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Users table
    op.create_table('users',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('username', sa.String(length=30), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('avatar', sa.String(length=500), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    # Videos table (owner_id has no foreign key on purpose: videos outlive their owner)
    op.create_table('videos',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('video_file', sa.String(length=500), nullable=False),
        sa.Column('video_file_public_id', sa.String(length=255), nullable=True),
        sa.Column('thumbnail', sa.String(length=500), nullable=False),
        sa.Column('thumbnail_public_id', sa.String(length=255), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('duration', sa.Float(), nullable=False),
        sa.Column('views', sa.Integer(), nullable=False),
        sa.Column('is_published', sa.Boolean(), nullable=False),
        sa.Column('owner_id', sa.String(length=24), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_videos_owner_id'), 'videos', ['owner_id'], unique=False)

    # Playlists table
    op.create_table('playlists',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.String(length=5000), nullable=False),
        sa.Column('owner_id', sa.String(length=24), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('owner_id', 'name', name='unique_owner_playlist_name')
    )
    op.create_index(op.f('ix_playlists_owner_id'), 'playlists', ['owner_id'], unique=False)

    # Playlist membership, ordered by position
    op.create_table('playlist_videos',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('playlist_id', sa.String(length=24), nullable=False),
        sa.Column('video_id', sa.String(length=24), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('added_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['playlist_id'], ['playlists.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('playlist_id', 'video_id', name='unique_playlist_video')
    )
    op.create_index(op.f('ix_playlist_videos_playlist_id'), 'playlist_videos', ['playlist_id'], unique=False)
    op.create_index(op.f('ix_playlist_videos_video_id'), 'playlist_videos', ['video_id'], unique=False)

    # Subscriptions table
    op.create_table('subscriptions',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('subscriber_id', sa.String(length=24), nullable=False),
        sa.Column('channel_id', sa.String(length=24), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('subscriber_id', 'channel_id', name='unique_subscriber_channel')
    )
    op.create_index(op.f('ix_subscriptions_subscriber_id'), 'subscriptions', ['subscriber_id'], unique=False)
    op.create_index(op.f('ix_subscriptions_channel_id'), 'subscriptions', ['channel_id'], unique=False)

    # Tweets table
    op.create_table('tweets',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('owner_id', sa.String(length=24), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_tweets_owner_id'), 'tweets', ['owner_id'], unique=False)

    # Likes table (either video_id or tweet_id is set)
    op.create_table('likes',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('liked_by_id', sa.String(length=24), nullable=False),
        sa.Column('video_id', sa.String(length=24), nullable=True),
        sa.Column('tweet_id', sa.String(length=24), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('liked_by_id', 'video_id', name='unique_user_video_like'),
        sa.UniqueConstraint('liked_by_id', 'tweet_id', name='unique_user_tweet_like')
    )
    op.create_index(op.f('ix_likes_liked_by_id'), 'likes', ['liked_by_id'], unique=False)
    op.create_index(op.f('ix_likes_video_id'), 'likes', ['video_id'], unique=False)
    op.create_index(op.f('ix_likes_tweet_id'), 'likes', ['tweet_id'], unique=False)


def downgrade():
    op.drop_table('likes')
    op.drop_table('tweets')
    op.drop_table('subscriptions')
    op.drop_table('playlist_videos')
    op.drop_table('playlists')
    op.drop_table('videos')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_table('users')
