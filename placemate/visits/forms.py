"""Forms for the visits blueprint."""

from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional

from placemate.core.forms import ListField


class VisitForm(FlaskForm):
    """Form to record a new visit or overwrite an existing one."""

    visitId = StringField("Visit", validators=[Optional()])
    placeId = StringField("Place", validators=[DataRequired()])
    name = StringField("Place Name", validators=[Optional()])
    city = StringField("City", validators=[Optional()])
    teammates = ListField("Teammates")
    startDate = StringField("Start Date")
    endDate = StringField("End Date")
    experience = TextAreaField("Experience", validators=[Optional(), Length(max=2000)])
    photos = ListField("Photos")


class VisitDetailForm(FlaskForm):
    """Form listing the visits to expand."""

    ids = ListField("Visits")
