from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileAllowed
from wtforms import StringField, SelectField, IntegerField, FloatField, TextAreaField, HiddenField, SubmitField
from wtforms.validators import DataRequired, InputRequired, NumberRange, Optional, ValidationError

IMAGE_EXTENSIONS = ['jpg', 'jpeg', 'png', 'gif', 'webp']

class ProductForm(FlaskForm):
    id = HiddenField()
    name = StringField('Ürün adı', validators=[DataRequired()])
    slug = StringField('Slug', validators=[Optional()])
    price = FloatField('Fiyat', validators=[InputRequired()])
    unit = StringField('Birim', validators=[DataRequired()])
    stock = IntegerField('Stok', validators=[InputRequired(), NumberRange(min=0)])
    category_id = SelectField('Kategori', coerce=int, validators=[DataRequired()])
    description = TextAreaField('Açıklama', validators=[Optional()])
    image = FileField('Görsel', validators=[FileAllowed(IMAGE_EXTENSIONS, 'Sadece görsel dosyaları yüklenebilir.')])
    submit = SubmitField('Kaydet')

    def validate_price(self, field):
        if field.data is None or field.data <= 0:
            raise ValidationError('Fiyat sıfırdan büyük olmalı.')
