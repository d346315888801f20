from flask import Blueprint, render_template, redirect, url_for, request, jsonify, abort, send_from_directory, current_app
from sqlalchemy import func, or_
from models.product import Product
from models.category import Category
from models.ad import Ad

shop_bp = Blueprint('shop', __name__)

HOME_PRODUCT_LIMIT = 12


def render_catalog(title, products, **context):
    categories = Category.query.order_by(Category.name).all()
    return render_template('shop/home.html',
                         title=title,
                         categories=categories,
                         products=products,
                         banner_ads=Ad.active('banner'),
                         side_ads=Ad.active('sidebar'),
                         **context)

@shop_bp.route('/health')
def health():
    return jsonify({'status': 'ok'})

@shop_bp.route('/')
def home():
    products = (
        Product.query
        .order_by(Product.created_at.desc(), Product.id.desc())
        .limit(HOME_PRODUCT_LIMIT)
        .all()
    )
    return render_catalog('Yeşil Market', products)

@shop_bp.route('/search')
def search():
    q = request.args.get('q', '').strip()
    if not q:
        return redirect(url_for('shop.home'))
    term = f'%{q.lower()}%'
    products = (
        Product.query
        .outerjoin(Category, Category.id == Product.category_id)
        .filter(or_(func.lower(Product.name).like(term), func.lower(Category.name).like(term)))
        .order_by(Product.name)
        .all()
    )
    return render_catalog(f'Arama Sonuçları: {q}', products, search_query=q)

@shop_bp.route('/category/<slug>')
def category(slug):
    category = Category.query.filter_by(slug=slug).first_or_404()
    products = category.products.order_by(Product.name).all()
    return render_catalog(category.name, products, current_category=category)

@shop_bp.route('/product/<slug>')
def product_detail(slug):
    product = Product.query.filter_by(slug=slug).first()
    if product is None:
        abort(404)
    return render_template('shop/product.html', title=product.name, product=product)

@shop_bp.route('/img/<path:filename>')
def uploaded_image(filename):
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)

@shop_bp.route('/ads')
def ads():
    return render_template('shop/ads.html', title='Reklam Alanı', banner_ads=Ad.active())
