from flask_wtf import FlaskForm
from wtforms import TextAreaField, SubmitField
from wtforms.validators import DataRequired

class CheckoutForm(FlaskForm):
    address = TextAreaField('Teslimat adresi', validators=[DataRequired()])
    submit = SubmitField('Siparişi Tamamla')
