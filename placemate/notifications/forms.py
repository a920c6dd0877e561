"""Forms for the notifications blueprint."""

from flask_wtf import FlaskForm
from wtforms import StringField
from wtforms.validators import DataRequired


class SendInviteForm(FlaskForm):
    """Form to send a team invite notification."""

    toUserId = StringField("Recipient", validators=[DataRequired()])
    teamId = StringField("Team", validators=[DataRequired()])


class NotificationIdForm(FlaskForm):
    """Form naming a single notification."""

    notifId = StringField("Notification", validators=[DataRequired()])
