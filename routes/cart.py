from flask import Blueprint, render_template, redirect, url_for, flash, request, session
from models import db
from models.product import Product
from models.cart import SessionCart

cart_bp = Blueprint('cart', __name__, url_prefix='/cart')

@cart_bp.route('')
def view_cart():
    cart = SessionCart.load(session)
    return render_template('cart/cart.html', title='Sepetiniz', cart=cart)

@cart_bp.route('/add', methods=['POST'])
def add():
    product = db.session.get(Product, request.form.get('product_id', type=int) or 0)
    if product is None:
        flash('Ürün bulunamadı.', 'danger')
        return redirect(request.referrer or url_for('shop.home'))
    cart = SessionCart.load(session)
    if not cart.add(product, request.form.get('qty')):
        flash(f'{product.name} şu anda stokta yok.', 'danger')
        return redirect(request.referrer or url_for('shop.home'))
    cart.save(session)
    flash(f'{product.name} sepete eklendi.', 'success')
    return redirect(url_for('cart.view_cart'))

@cart_bp.route('/update', methods=['POST'])
def update():
    cart = SessionCart.load(session)
    cart.update(request.form.get('product_id', ''), request.form.get('qty'))
    cart.save(session)
    return redirect(url_for('cart.view_cart'))

@cart_bp.route('/remove', methods=['POST'])
def remove():
    cart = SessionCart.load(session)
    cart.remove(request.form.get('product_id', ''))
    cart.save(session)
    return redirect(url_for('cart.view_cart'))
