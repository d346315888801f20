import os
from datetime import timedelta

basedir = os.path.abspath(os.path.dirname(__file__))


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'super-secret-yesil-market'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'db', 'yesilmarket.sqlite')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BABEL_DEFAULT_LOCALE = 'tr'
    BABEL_DEFAULT_TIMEZONE = 'Europe/Istanbul'

    # Session cookie carries the cart and the login
    PERMANENT_SESSION_LIFETIME = timedelta(hours=2)
    SESSION_COOKIE_HTTPONLY = True

    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL') or 'admin@yesilmarket.com'
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(basedir, 'static', 'img')
    MAX_CONTENT_LENGTH = 2 * 1024 * 1024
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'

    # create tables and seed data when the database is empty
    BOOTSTRAP_DB = True


class TestingConfig(Config):
    TESTING = True
    WTF_CSRF_ENABLED = False
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    BOOTSTRAP_DB = False
    LOG_LEVEL = 'DEBUG'
