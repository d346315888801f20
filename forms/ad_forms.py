from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileAllowed
from wtforms import StringField, SelectField, HiddenField, SubmitField
from wtforms.validators import DataRequired, Optional, Length
from forms.product_forms import IMAGE_EXTENSIONS
from models.ad import AD_POSITIONS

class AdForm(FlaskForm):
    id = HiddenField()
    title = StringField('Başlık', validators=[DataRequired(), Length(max=128)])
    link = StringField('Bağlantı', validators=[Optional(), Length(max=255)])
    position = SelectField('Pozisyon', choices=AD_POSITIONS, validators=[DataRequired()])
    image = FileField('Görsel', validators=[FileAllowed(IMAGE_EXTENSIONS, 'Sadece görsel dosyaları yüklenebilir.')])
    submit = SubmitField('Kaydet')
