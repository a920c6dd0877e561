"""Forms for the teams blueprint."""

from flask_wtf import FlaskForm
from wtforms import StringField
from wtforms.validators import DataRequired, Length, Optional

from placemate.core.forms import Base64Field


class CreateTeamForm(FlaskForm):
    """Form to create a team."""

    teamName = StringField("Team Name", validators=[DataRequired(), Length(max=80)])
    logo = Base64Field("Logo")


class TeamIdForm(FlaskForm):
    """Form naming a single team."""

    teamId = StringField("Team", validators=[DataRequired()])


class InviteForm(FlaskForm):
    """Form to invite a user to a team."""

    teamId = StringField("Team", validators=[DataRequired()])
    toId = StringField("Invitee", validators=[DataRequired()])


class TeamMemberForm(FlaskForm):
    """Form naming a team and one of its (prospective) members."""

    teamId = StringField("Team", validators=[DataRequired()])
    userId = StringField("User", validators=[DataRequired()])


class RequestActionForm(FlaskForm):
    """Form to accept or reject a team request."""

    requestId = StringField("Request", validators=[DataRequired()])


class RenameTeamForm(FlaskForm):
    """Form to edit a team's name."""

    teamId = StringField("Team", validators=[DataRequired()])
    newName = StringField("Team Name", validators=[DataRequired(), Length(max=80)])


class UpdateTeamForm(FlaskForm):
    """Form to edit a team's name and/or logo."""

    teamId = StringField("Team", validators=[DataRequired()])
    newName = StringField("Team Name", validators=[Optional(), Length(max=80)])
    newLogoBase64 = Base64Field("Logo")


class UpdateLogoForm(FlaskForm):
    """Form to replace a team's logo."""

    teamId = StringField("Team", validators=[DataRequired()])
    logo = Base64Field("Logo", validators=[DataRequired()])
