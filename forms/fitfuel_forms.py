from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, TextAreaField, SubmitField
from wtforms.validators import Length, Optional, ValidationError

def full_name(form, field):
    name = (field.data or '').strip()
    if not name or len(name.split(' ')) < 2:
        raise ValidationError('Lütfen ad soyad girin')

def email_address(form, field):
    if '@' not in (field.data or ''):
        raise ValidationError('Geçerli bir e-posta giriniz')

password_length = Length(min=6, message='Şifre en az 6 karakter olmalı')

class FitFuelLoginForm(FlaskForm):
    email = StringField('E-posta', validators=[email_address])
    password = PasswordField('Şifre', validators=[password_length])
    submit = SubmitField('Giriş Yap')

class FitFuelRegisterForm(FlaskForm):
    name = StringField('Ad Soyad', validators=[full_name])
    email = StringField('E-posta', validators=[email_address])
    password = PasswordField('Şifre', validators=[password_length])
    submit = SubmitField('Üye Ol')

class ContactForm(FlaskForm):
    name = StringField('Ad Soyad', validators=[Optional()])
    email = StringField('E-posta', validators=[Optional()])
    message = TextAreaField('Mesaj', validators=[Optional()])
    submit = SubmitField('Gönder')
