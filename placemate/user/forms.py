"""Forms for the user blueprint."""

from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField
from wtforms.validators import Length, Optional, URL


class UpdateProfileForm(FlaskForm):
    """Form for a user to edit their own profile."""

    nickname = StringField("Nickname", validators=[Optional(), Length(max=40)])
    bio = TextAreaField("Bio", validators=[Optional(), Length(max=500)])
    avatar = StringField("Avatar", validators=[Optional(), URL()])
    coverPhoto = StringField("Cover Photo", validators=[Optional(), URL()])
