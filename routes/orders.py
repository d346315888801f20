from flask import Blueprint, render_template, redirect, url_for, flash, session, current_app
from flask_login import login_required, current_user
from forms.checkout_forms import CheckoutForm
from models.cart import SessionCart
from models.order import Order, StockUnavailableError

orders_bp = Blueprint('orders', __name__)

@orders_bp.route('/checkout', methods=['GET', 'POST'])
@login_required
def checkout():
    cart = SessionCart.load(session)
    if cart.is_empty():
        flash('Sepetiniz boş.', 'danger')
        return redirect(url_for('cart.view_cart'))
    form = CheckoutForm()
    if not form.is_submitted():
        return render_template('orders/checkout.html', title='Ödeme', cart=cart, form=form)

    if not form.validate() or not form.address.data.strip():
        flash('Teslimat adresi zorunludur.', 'danger')
        return redirect(url_for('orders.checkout'))
    try:
        order = Order.place(current_user.id, cart.lines(), form.address.data.strip())
    except StockUnavailableError as e:
        current_app.logger.warning('checkout aborted for user %s: %s', current_user.id, e)
        flash('Stok yetersiz. Lütfen sepetinizi güncelleyin.', 'danger')
        return redirect(url_for('orders.checkout'))
    except Exception:
        current_app.logger.exception('checkout failed for user %s', current_user.id)
        flash('Ödeme sırasında bir sorun oluştu.', 'danger')
        return redirect(url_for('orders.checkout'))

    current_app.logger.info('order #%s placed by user %s, total %.2f', order.id, current_user.id, order.total)
    cart.clear()
    cart.save(session)
    flash(f'Siparişiniz alındı. Sipariş numarası #{order.id}.', 'success')
    return redirect(url_for('orders.list_orders'))

@orders_bp.route('/orders')
@login_required
def list_orders():
    orders = current_user.orders.order_by(Order.created_at.desc(), Order.id.desc()).all()
    return render_template('orders/list.html', title='Siparişlerim', orders=orders)

@orders_bp.route('/profile')
@login_required
def profile():
    return render_template('orders/profile.html', title='Profilim', profile=current_user)
