"""Forms for the admin blueprint."""

from flask_wtf import FlaskForm
from wtforms import FloatField, StringField
from wtforms.validators import DataRequired, NumberRange, Optional

from placemate.core.constants import BAN_TYPE_ALL


class UserIdForm(FlaskForm):
    """Form naming the user to act on."""

    userId = StringField("User", validators=[DataRequired()])


class BanUserForm(FlaskForm):
    """Form to ban a user for a number of hours."""

    targetId = StringField("User", validators=[DataRequired()])
    hours = FloatField("Hours", validators=[DataRequired(), NumberRange(min=0)])
    banType = StringField("Ban Type", default=BAN_TYPE_ALL, validators=[Optional()])


class RemoveCommentForm(FlaskForm):
    """Form to remove a reported comment and close its report."""

    placeId = StringField("Place", validators=[DataRequired()])
    commentId = StringField("Comment", validators=[DataRequired()])
    reportId = StringField("Report", validators=[DataRequired()])


class ReportIdForm(FlaskForm):
    """Form naming a single report."""

    reportId = StringField("Report", validators=[DataRequired()])


class PlaceIdForm(FlaskForm):
    """Form naming a single place."""

    placeId = StringField("Place", validators=[DataRequired()])
