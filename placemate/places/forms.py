"""Forms for the places blueprint."""

from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional

from placemate.core.forms import ListField, MapField


class AddPlaceForm(FlaskForm):
    """Form to add a place."""

    name = StringField("Name", validators=[DataRequired(), Length(max=120)])
    country = StringField("Country", validators=[DataRequired()])
    city = StringField("City", validators=[DataRequired()])
    district = StringField("District", validators=[DataRequired()])
    description = TextAreaField(
        "Description", validators=[Optional(), Length(max=2000)]
    )
    properties = ListField("Properties")
    photos = ListField("Photos")
    location = MapField("Location")


class CommentForm(FlaskForm):
    """Form to comment on a place."""

    comment = TextAreaField("Comment", validators=[DataRequired(), Length(max=1000)])


class ReportCommentForm(FlaskForm):
    """Form to report a comment on a place."""

    commentId = StringField("Comment", validators=[DataRequired()])
    reason = StringField("Reason", validators=[DataRequired(), Length(max=500)])
