from flask import Blueprint, render_template, redirect, url_for, flash, session, current_app
from flask_login import login_user, logout_user, login_required, current_user
from functools import wraps
from sqlalchemy.exc import SQLAlchemyError
from forms.auth_forms import LoginForm, RegisterForm
from models.user import User
from models import db

auth_bp = Blueprint('auth', __name__)

# Only the account registered with ADMIN_EMAIL may reach the admin pages
def admin_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated or not current_user.is_admin():
            flash('Bu alana erişim yetkiniz yok.', 'danger')
            return redirect(url_for('shop.home'))
        return f(*args, **kwargs)
    return decorated_function

@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    form = RegisterForm()
    if form.is_submitted():
        if not form.validate():
            flash('Tüm alanlar zorunludur.', 'danger')
            return redirect(url_for('auth.register'))
        email = form.email.data.strip().lower()
        if User.query.filter_by(email=email).first():
            flash('Bu e-posta ile kayıtlı bir hesap zaten var.', 'danger')
            return redirect(url_for('auth.register'))
        user = User(name=form.name.data.strip(), email=email)
        user.set_password(form.password.data)
        try:
            db.session.add(user)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception('registration failed for %s', email)
            flash('Kayıt sırasında bir hata oluştu.', 'danger')
            return redirect(url_for('auth.register'))
        login_user(user)
        flash('Hoş geldiniz!', 'success')
        return redirect(url_for('shop.home'))
    return render_template('auth/register.html', title='Üye Ol', form=form)

@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    form = LoginForm()
    if form.is_submitted():
        if not form.validate():
            flash('Tüm alanlar zorunludur.', 'danger')
            return redirect(url_for('auth.login'))
        user = User.query.filter_by(email=form.email.data.strip().lower()).first()
        if user is None or not user.check_password(form.password.data):
            flash('Geçersiz e-posta veya şifre.', 'danger')
            return redirect(url_for('auth.login'))
        login_user(user)
        flash('Tekrar hoş geldiniz!', 'success')
        return redirect(url_for('shop.home'))
    return render_template('auth/login.html', title='Giriş Yap', form=form)

@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    session.clear()
    return redirect(url_for('shop.home'))
