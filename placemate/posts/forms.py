"""Forms for the posts blueprint."""

from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional

from placemate.core.forms import ListField


class PostForm(FlaskForm):
    """Form to create or edit a post."""

    caption = TextAreaField("Caption", validators=[Optional(), Length(max=2000)])
    medias = ListField("Medias")


class MediaForm(FlaskForm):
    """Form naming a media URL on a post."""

    url = StringField("URL", validators=[DataRequired()])


class PostCommentForm(FlaskForm):
    """Form to comment on a post."""

    text = TextAreaField("Comment", validators=[DataRequired(), Length(max=1000)])
