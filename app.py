import os
from flask import Flask, render_template, redirect, flash, request, session, url_for
from flask_login import LoginManager, current_user
from flask_babel import Babel, format_currency, format_date
from flask_wtf.csrf import CSRFProtect, CSRFError
from sqlalchemy import inspect
from config import Config
from models import db
from models.user import User
from models.cart import SessionCart

# Initialize extensions
login_manager = LoginManager()
babel = Babel()
csrf = CSRFProtect()

def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config['LOG_LEVEL'])

    db.init_app(app)
    csrf.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.login_message = 'Lütfen giriş yapın.'
    login_manager.login_message_category = 'danger'
    # Turkish storefront, prices in TRY
    def get_locale():
        return 'tr'
    babel.init_app(app, locale_selector=get_locale)

    # Flask-Login user loader
    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    # Register Blueprints
    from routes.shop import shop_bp
    app.register_blueprint(shop_bp)
    from routes.auth import auth_bp
    app.register_blueprint(auth_bp)
    from routes.cart import cart_bp
    app.register_blueprint(cart_bp)
    from routes.orders import orders_bp
    app.register_blueprint(orders_bp)
    from routes.admin import admin_bp
    app.register_blueprint(admin_bp)
    from routes.fitfuel import fitfuel_bp
    app.register_blueprint(fitfuel_bp)

    @app.template_filter('currency')
    def currency_filter(value):
        try:
            amount = float(value or 0)
        except (TypeError, ValueError):
            amount = 0
        return format_currency(amount, 'TRY')

    @app.template_filter('date')
    def date_filter(value):
        return format_date(value) if value else ''

    # cart and login expire with PERMANENT_SESSION_LIFETIME
    @app.before_request
    def make_session_permanent():
        session.permanent = True

    @app.context_processor
    def inject_store_context():
        cart = SessionCart.load(session)
        return {
            'cart_count': cart.totals['count'],
            'is_admin': current_user.is_authenticated and current_user.is_admin(),
        }

    register_error_handlers(app)

    if app.config['BOOTSTRAP_DB']:
        with app.app_context():
            bootstrap_database(app)

    return app

def register_error_handlers(app):
    @app.errorhandler(CSRFError)
    def handle_csrf_error(e):
        app.logger.warning('CSRF validation failed on %s: %s', request.path, e.description)
        flash('Form güvenlik doğrulaması başarısız oldu.', 'danger')
        return redirect(request.referrer or url_for('shop.home'))

    @app.errorhandler(404)
    def not_found(e):
        return render_template('errors/404.html', title='Sayfa Bulunamadı'), 404

    @app.errorhandler(413)
    def too_large(e):
        flash('Dosya en fazla 2 MB olabilir.', 'danger')
        return redirect(request.referrer or url_for('shop.home'))

    # Flask has already logged the traceback through app.logger
    @app.errorhandler(500)
    def server_error(e):
        db.session.rollback()
        return render_template('errors/500.html', title='Sunucu Hatası'), 500

def bootstrap_database(app):
    """Create the schema and load the seed data on first run."""
    url = db.engine.url
    if url.drivername.startswith('sqlite') and url.database:
        os.makedirs(os.path.dirname(os.path.abspath(url.database)), exist_ok=True)
    if inspect(db.engine).has_table('products'):
        return False
    from seed_data import seed_database
    db.create_all()
    seed_database()
    app.logger.info('database bootstrapped at %s', app.config['SQLALCHEMY_DATABASE_URI'])
    return True

if __name__ == "__main__":
    app = create_app()
    app.run(debug=True)
