"""Forms for the favorites blueprint."""

from flask_wtf import FlaskForm
from wtforms import StringField
from wtforms.validators import DataRequired


class FavoriteForm(FlaskForm):
    """Form naming the place to favorite or unfavorite."""

    placeId = StringField("Place", validators=[DataRequired()])
