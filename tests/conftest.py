import pytest
from app import create_app
from config import TestingConfig
from models import db
from models.user import User
from models.category import Category
from models.product import Product, slugify

DEFAULT_PASSWORD = 'secret123'


@pytest.fixture
def app(tmp_path):
    class Config(TestingConfig):
        SQLALCHEMY_DATABASE_URI = f'sqlite:///{tmp_path / "test.sqlite"}'
        UPLOAD_FOLDER = str(tmp_path / 'uploads')

    app = create_app(Config)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_product(app):
    def _make(name='Salkım Domates', price=10.0, stock=5, unit='kg', category='Sebze', **kwargs):
        with app.app_context():
            cat = Category.query.filter_by(name=category).first()
            if cat is None:
                cat = Category(name=category, slug=slugify(category))
            product = Product(category=cat, name=name, slug=slugify(name), price=price,
                              unit=unit, stock=stock, **kwargs)
            db.session.add(product)
            db.session.commit()
            return product.id
    return _make


@pytest.fixture
def make_user(app):
    def _make(email='ayse@example.com', name='Ayşe Yılmaz', password=DEFAULT_PASSWORD):
        with app.app_context():
            user = User(name=name, email=email)
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return user.id
    return _make


@pytest.fixture
def login(client):
    def _login(email='ayse@example.com', password=DEFAULT_PASSWORD):
        return client.post('/login', data={'email': email, 'password': password})
    return _login


@pytest.fixture
def admin_client(app, client, make_user, login):
    make_user(email=app.config['ADMIN_EMAIL'], name='Market Yönetici')
    login(email=app.config['ADMIN_EMAIL'])
    return client
