"""Routes for the posts blueprint."""

from firebase_admin import firestore
from flask import g, jsonify

from placemate.auth.decorators import login_required
from placemate.core.forms import validate_form

from . import bp
from .forms import MediaForm, PostCommentForm, PostForm
from .services import PostService


@bp.route("/new", methods=["POST"])
@login_required
def new_post():
    """Publish a post as the caller."""
    form = validate_form(PostForm())
    post = PostService.create_post(
        firestore.client(), g.user["uid"], form.caption.data, form.medias.data
    )
    return jsonify({"success": True, "post": post})


@bp.route("/user/<string:user_id>", methods=["GET"])
@login_required
def user_posts(user_id):
    """List a user's posts."""
    posts = PostService.list_user_posts(firestore.client(), user_id)
    return jsonify({"success": True, "posts": posts})


@bp.route("/<string:post_id>", methods=["GET"])
@login_required
def view_post(post_id):
    post = PostService.get_post(firestore.client(), post_id)
    return jsonify({"success": True, "post": post})


@bp.route("/<string:post_id>/edit", methods=["PUT"])
@login_required
def edit_post(post_id):
    """Change the caption or medias of the caller's post."""
    form = validate_form(PostForm())
    updated = PostService.edit_post(
        firestore.client(),
        post_id,
        g.user["uid"],
        caption=form.caption.data or None,
        medias=form.medias.data or None,
    )
    return jsonify({"success": True, "updated": updated})


@bp.route("/<string:post_id>/delete", methods=["DELETE"])
@login_required
def delete_post(post_id):
    PostService.delete_post(firestore.client(), post_id, g.user["uid"])
    return jsonify({"success": True})


@bp.route("/<string:post_id>/media", methods=["DELETE"])
@login_required
def remove_media(post_id):
    """Remove one media from the caller's post."""
    form = validate_form(MediaForm())
    medias = PostService.remove_media(
        firestore.client(), post_id, g.user["uid"], form.url.data
    )
    return jsonify({"success": True, "medias": medias})


@bp.route("/<string:post_id>/comment", methods=["POST"])
@login_required
def add_comment(post_id):
    """Comment on a post as the caller."""
    form = validate_form(PostCommentForm())
    comment = PostService.add_comment(
        firestore.client(), post_id, g.user["uid"], form.text.data
    )
    return jsonify({"success": True, "comment": comment})


@bp.route("/<string:post_id>/comments", methods=["GET"])
@login_required
def list_comments(post_id):
    comments = PostService.list_comments(firestore.client(), post_id)
    return jsonify({"success": True, "comments": comments})


@bp.route("/<string:post_id>/comment/<string:comment_id>/delete", methods=["DELETE"])
@login_required
def delete_comment(post_id, comment_id):
    """Delete a comment from a post."""
    PostService.delete_comment(firestore.client(), post_id, comment_id, g.user["uid"])
    return jsonify({"success": True})


@bp.route("/<string:post_id>/like", methods=["POST"])
@login_required
def toggle_like(post_id):
    """Like or unlike a post as the caller."""
    result = PostService.toggle_like(firestore.client(), post_id, g.user["uid"])
    return jsonify({"success": True, **result})
