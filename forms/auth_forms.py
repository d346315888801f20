from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, SubmitField
from wtforms.validators import DataRequired, Length

class LoginForm(FlaskForm):
    email = StringField('E-posta', validators=[DataRequired(), Length(max=255)])
    password = PasswordField('Şifre', validators=[DataRequired()])
    submit = SubmitField('Giriş Yap')

class RegisterForm(FlaskForm):
    name = StringField('Ad Soyad', validators=[DataRequired(), Length(max=128)])
    email = StringField('E-posta', validators=[DataRequired(), Length(max=255)])
    password = PasswordField('Şifre', validators=[DataRequired()])
    submit = SubmitField('Üye Ol')
