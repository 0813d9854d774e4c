from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ironlog.deps.session import get_gateway
from ironlog.repositories.gateway import SqlGateway
from ironlog.schemas.post import CommentCreate, CommentRead, PostRead, PostRecord
from ironlog.services import feed
from ironlog.services.formatters import format_duration, format_relative_time, format_volume

router = APIRouter(prefix="/posts", tags=["posts"])

def to_read(post: PostRecord, now: datetime) -> PostRead:
    return PostRead(
        **post.model_dump(),
        time_ago=format_relative_time(post.created_at, now),
        volume_label=format_volume(post.total_volume),
        duration_label=format_duration(post.duration),
    )

@router.get("", response_model=list[PostRead])
def list_posts(
    gateway: SqlGateway = Depends(get_gateway),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    now = datetime.now(timezone.utc)
    return [to_read(p, now) for p in gateway.get_posts(limit=limit, offset=offset)]

@router.post("/{post_id}/like", response_model=PostRecord)
def like_post(post_id: str, gateway: SqlGateway = Depends(get_gateway)):
    me = gateway.get_user_profile()
    post = feed.toggle_like(gateway, post_id, me.id)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post

@router.get("/{post_id}/comments", response_model=list[CommentRead])
def list_comments(post_id: str, gateway: SqlGateway = Depends(get_gateway)):
    post = gateway.get_post(post_id)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post.comments

@router.post("/{post_id}/comments", response_model=PostRecord, status_code=status.HTTP_201_CREATED)
def add_comment(post_id: str, payload: CommentCreate, gateway: SqlGateway = Depends(get_gateway)):
    post = feed.add_comment(gateway, post_id, gateway.get_user_profile(), payload.text)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post
