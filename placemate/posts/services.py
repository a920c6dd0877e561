"""Service layer for posts, their comments and likes."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore
from flask import current_app

from placemate.core.constants import NOTIFICATION_COMMENT, POSTS
from placemate.errors import ForbiddenError, NotFoundError, ValidationError
from placemate.notifications.services import NotificationService
from placemate.user.helpers import display_name, get_user_by_id
from placemate.utils import now_ms

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference
    from google.cloud.firestore_v1.transaction import Transaction

    from .models import Media, Post, PostComment

DEFAULT_MEDIA_TYPE = "image"


def normalize_medias(medias: list[Any] | None) -> list[Media]:
    """Turn URLs or ``{"url", "type"}`` maps into media entries.

    Raises:
        ValidationError: If an entry has no URL.
    """
    normalized: list[Media] = []
    for media in medias or []:
        if isinstance(media, str):
            url, media_type = media, DEFAULT_MEDIA_TYPE
        elif isinstance(media, dict):
            url = media.get("url")
            media_type = media.get("type") or DEFAULT_MEDIA_TYPE
        else:
            url = None
        if not isinstance(url, str) or not url.strip():
            raise ValidationError("Each media needs a url.", code="INVALID_MEDIA")
        normalized.append({"url": url.strip(), "type": str(media_type)})
    return normalized


class PostService:
    """Service class for post operations."""

    @staticmethod
    def _get_post_doc(db: Client, post_id: str) -> tuple[DocumentReference, Post]:
        if not post_id:
            raise ValidationError("postId is required.", code="MISSING_FIELDS")
        post_ref = db.collection(POSTS).document(post_id)
        snapshot = cast("DocumentSnapshot", post_ref.get())
        if not snapshot.exists:
            raise NotFoundError("Post not found.", code="POST_NOT_FOUND")
        post = cast("Post", snapshot.to_dict() or {})
        post["id"] = snapshot.id
        return post_ref, post

    @staticmethod
    def _require_author(post: Post, user_id: str) -> None:
        if post.get("userId") != user_id:
            raise ForbiddenError("Only the author can change this post.")

    @staticmethod
    def create_post(
        db: Client, user_id: str, caption: str | None, medias: list[Any]
    ) -> Post:
        """Publish a post with at least one media."""
        normalized = normalize_medias(medias)
        if not normalized:
            raise ValidationError(
                "At least one media is required.", code="MISSING_FIELDS"
            )
        author = get_user_by_id(db, user_id)
        if author is None:
            raise NotFoundError("User not found.", code="USER_NOT_FOUND")

        post_ref = db.collection(POSTS).document()
        post: Post = {
            "id": post_ref.id,
            "userId": user_id,
            "username": display_name(author),
            "userAvatar": author.get("avatar"),
            "caption": (caption or "").strip(),
            "medias": normalized,
            "likedBy": [],
            "likes": 0,
            "comments": [],
            "createdAt": now_ms(),
        }
        post_ref.set(post)
        current_app.logger.info(f"Post {post_ref.id} created by {user_id}.")
        return post

    @staticmethod
    def get_post(db: Client, post_id: str) -> Post:
        """Fetch a single post."""
        _, post = PostService._get_post_doc(db, post_id)
        return post

    @staticmethod
    def list_user_posts(db: Client, user_id: str) -> list[Post]:
        """Return a user's posts, newest first."""
        query = db.collection(POSTS).where(
            filter=firestore.FieldFilter("userId", "==", user_id)
        )
        posts = [
            cast("Post", {**(doc.to_dict() or {}), "id": doc.id})
            for doc in query.stream()
        ]
        posts.sort(key=lambda p: p.get("createdAt") or 0, reverse=True)
        return posts

    @staticmethod
    def edit_post(
        db: Client,
        post_id: str,
        user_id: str,
        caption: str | None = None,
        medias: list[Any] | None = None,
    ) -> dict[str, Any]:
        """Change a post's caption and/or medias. Returns the applied fields."""
        post_ref, post = PostService._get_post_doc(db, post_id)
        PostService._require_author(post, user_id)

        update_data: dict[str, Any] = {}
        if caption is not None:
            update_data["caption"] = caption.strip()
        if medias:
            update_data["medias"] = normalize_medias(medias)
        if not update_data:
            raise ValidationError("Nothing to update.", code="NOTHING_TO_UPDATE")

        update_data["updatedAt"] = now_ms()
        post_ref.update(update_data)
        return update_data

    @staticmethod
    def delete_post(db: Client, post_id: str, user_id: str) -> None:
        """Delete a post owned by the user."""
        post_ref, post = PostService._get_post_doc(db, post_id)
        PostService._require_author(post, user_id)
        post_ref.delete()
        current_app.logger.info(f"Post {post_id} deleted by {user_id}.")

    @staticmethod
    def _remove_media_transaction(
        transaction: Transaction, post_ref: DocumentReference, url: str
    ) -> list[Media]:
        snapshot = cast("DocumentSnapshot", post_ref.get(transaction=transaction))
        if not snapshot.exists:
            raise NotFoundError("Post not found.", code="POST_NOT_FOUND")
        medias = (snapshot.to_dict() or {}).get("medias") or []
        remaining = [m for m in medias if m.get("url") != url]
        if len(remaining) != len(medias):
            transaction.update(post_ref, {"medias": remaining, "updatedAt": now_ms()})
        return remaining

    @staticmethod
    def remove_media(db: Client, post_id: str, user_id: str, url: str) -> list[Media]:
        """Drop one media from a post and return the medias left."""
        if not url:
            raise ValidationError("url is required.", code="MISSING_FIELDS")
        post_ref, post = PostService._get_post_doc(db, post_id)
        PostService._require_author(post, user_id)
        remove = firestore.transactional(PostService._remove_media_transaction)
        return cast("list[Media]", remove(db.transaction(), post_ref, url))

    @staticmethod
    def add_comment(db: Client, post_id: str, user_id: str, text: str) -> PostComment:
        """Comment on a post and notify its author."""
        text = (text or "").strip()
        if not text:
            raise ValidationError("Comment text is required.", code="MISSING_FIELDS")
        post_ref, post = PostService._get_post_doc(db, post_id)
        author = get_user_by_id(db, user_id)

        comment: PostComment = {
            "id": str(uuid.uuid4()),
            "userId": user_id,
            "username": display_name(author),
            "userAvatar": (author or {}).get("avatar"),
            "text": text,
            "createdAt": now_ms(),
        }
        post_ref.update({"comments": firestore.ArrayUnion([comment])})

        if post.get("userId"):
            NotificationService.notify(
                db,
                post["userId"],
                user_id,
                NOTIFICATION_COMMENT,
                {"postId": post_id, "commentId": comment["id"], "text": text},
            )
        return comment

    @staticmethod
    def list_comments(db: Client, post_id: str) -> list[PostComment]:
        """Return a post's comments, oldest first."""
        post = PostService.get_post(db, post_id)
        comments = list(post.get("comments") or [])
        comments.sort(key=lambda c: c.get("createdAt") or 0)
        return comments

    @staticmethod
    def _delete_comment_transaction(
        transaction: Transaction,
        post_ref: DocumentReference,
        comment_id: str,
        user_id: str,
    ) -> None:
        snapshot = cast("DocumentSnapshot", post_ref.get(transaction=transaction))
        if not snapshot.exists:
            raise NotFoundError("Post not found.", code="POST_NOT_FOUND")
        post = snapshot.to_dict() or {}
        comments = post.get("comments") or []
        comment = next((c for c in comments if c.get("id") == comment_id), None)
        if comment is None:
            raise NotFoundError("Comment not found.", code="COMMENT_NOT_FOUND")
        if user_id not in (comment.get("userId"), post.get("userId")):
            raise ForbiddenError("You cannot delete this comment.")
        remaining = [c for c in comments if c.get("id") != comment_id]
        transaction.update(post_ref, {"comments": remaining})

    @staticmethod
    def delete_comment(db: Client, post_id: str, comment_id: str, user_id: str) -> None:
        """Delete a comment; its author or the post's author may do this."""
        if not post_id or not comment_id:
            raise ValidationError(
                "postId and commentId are required.", code="MISSING_FIELDS"
            )
        post_ref = db.collection(POSTS).document(post_id)
        delete = firestore.transactional(PostService._delete_comment_transaction)
        delete(db.transaction(), post_ref, comment_id, user_id)

    @staticmethod
    def _toggle_like_transaction(
        transaction: Transaction, post_ref: DocumentReference, user_id: str
    ) -> list[str]:
        snapshot = cast("DocumentSnapshot", post_ref.get(transaction=transaction))
        if not snapshot.exists:
            raise NotFoundError("Post not found.", code="POST_NOT_FOUND")
        liked_by = list((snapshot.to_dict() or {}).get("likedBy") or [])
        if user_id in liked_by:
            liked_by.remove(user_id)
        else:
            liked_by.append(user_id)
        transaction.update(post_ref, {"likedBy": liked_by, "likes": len(liked_by)})
        return liked_by

    @staticmethod
    def toggle_like(db: Client, post_id: str, user_id: str) -> dict[str, Any]:
        """Like a post, or take the like back if already given."""
        if not post_id:
            raise ValidationError("postId is required.", code="MISSING_FIELDS")
        post_ref = db.collection(POSTS).document(post_id)
        toggle = firestore.transactional(PostService._toggle_like_transaction)
        liked_by = toggle(db.transaction(), post_ref, user_id)
        return {"likedBy": liked_by, "likes": len(liked_by)}
