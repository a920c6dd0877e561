"""Forms for the backpack blueprint."""

from flask_wtf import FlaskForm
from wtforms import StringField
from wtforms.validators import DataRequired

from placemate.core.forms import MapField


class AddItemForm(FlaskForm):
    """Form to pack an item."""

    item = MapField("Item", validators=[DataRequired()])


class RemoveItemForm(FlaskForm):
    """Form naming the item to unpack."""

    itemId = StringField("Item", validators=[DataRequired()])
