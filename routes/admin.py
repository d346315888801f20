from flask import Blueprint, render_template, redirect, url_for, flash, request, send_file, current_app
from flask_login import login_required
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.utils import secure_filename
from datetime import datetime
import pandas as pd
import io
import os
import re
import time
from routes.auth import admin_required
from forms.product_forms import ProductForm
from forms.ad_forms import AdForm
from models import db
from models.product import Product, slugify
from models.category import Category
from models.order import Order, OrderItem, ORDER_STATUSES
from models.ad import Ad

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')

XLSX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def save_upload(file):
    """Store an uploaded image as <base>-<millis><ext> and return its public path."""
    if not file or not file.filename:
        return None
    base, ext = os.path.splitext(file.filename)
    base = re.sub(r'[^a-zA-Z0-9-_]', '-', secure_filename(base)) or 'image'
    filename = f'{base}-{int(time.time() * 1000)}{ext.lower() or ".jpg"}'
    folder = current_app.config['UPLOAD_FOLDER']
    os.makedirs(folder, exist_ok=True)
    file.save(os.path.join(folder, filename))
    return url_for('shop.uploaded_image', filename=filename)


def product_form_error(form):
    if form.price.errors or form.stock.errors:
        return 'Fiyat ve stok değerlerini kontrol edin.'
    if form.image.errors:
        return form.image.errors[0]
    return 'Lütfen zorunlu alanları doldurun.'


def category_choices():
    return [(c.id, c.name) for c in Category.query.order_by(Category.name).all()]


def fill_product(product, form, image_path):
    product.category_id = form.category_id.data
    product.name = form.name.data.strip()
    product.slug = (form.slug.data or '').strip() or slugify(product.name)
    product.price = form.price.data
    product.unit = form.unit.data.strip()
    product.stock = form.stock.data
    product.description = form.description.data
    if image_path:
        product.image = image_path


@admin_bp.route('')
@login_required
@admin_required
def dashboard():
    stats = {
        'product_count': Product.query.count(),
        'order_count': Order.query.count(),
        'ad_count': Ad.query.count(),
    }
    return render_template('admin/dashboard.html', title='Yönetim Paneli', stats=stats)

# ---------------------------------------------------------------- products

@admin_bp.route('/products')
@login_required
@admin_required
def list_products():
    products = Product.query.order_by(Product.created_at.desc(), Product.id.desc()).all()
    categories = Category.query.order_by(Category.name).all()
    form = ProductForm()
    form.category_id.choices = [(c.id, c.name) for c in categories]
    return render_template('admin/products.html', title='Ürün Yönetimi',
                         products=products, categories=categories, form=form)

@admin_bp.route('/product/create', methods=['POST'])
@login_required
@admin_required
def create_product():
    form = ProductForm()
    form.category_id.choices = category_choices()
    if not form.validate():
        flash(product_form_error(form), 'danger')
        return redirect(url_for('admin.list_products'))
    product = Product()
    try:
        fill_product(product, form, save_upload(form.image.data))
        db.session.add(product)
        db.session.commit()
        flash('Ürün eklendi.', 'success')
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('product create failed')
        flash('Ürün eklenemedi.', 'danger')
    return redirect(url_for('admin.list_products'))

@admin_bp.route('/product/update', methods=['POST'])
@login_required
@admin_required
def update_product():
    form = ProductForm()
    form.category_id.choices = category_choices()
    product = db.session.get(Product, int(form.id.data)) if (form.id.data or '').isdigit() else None
    if product is None:
        flash('Ürün bulunamadı.', 'danger')
        return redirect(url_for('admin.list_products'))
    if not form.validate():
        flash(product_form_error(form), 'danger')
        return redirect(url_for('admin.list_products'))
    try:
        fill_product(product, form, save_upload(form.image.data))
        db.session.commit()
        flash('Ürün güncellendi.', 'success')
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('product update failed for #%s', product.id)
        flash('Ürün güncellenemedi.', 'danger')
    return redirect(url_for('admin.list_products'))

@admin_bp.route('/product/delete', methods=['POST'])
@login_required
@admin_required
def delete_product():
    product = db.session.get(Product, request.form.get('id', type=int) or 0)
    if product is None:
        flash('Ürün bulunamadı.', 'danger')
        return redirect(url_for('admin.list_products'))

    # products that appear in an order stay for the order history
    if OrderItem.query.filter_by(product_id=product.id).count() > 0:
        flash('Siparişlerde yer alan ürün silinemez.', 'danger')
        return redirect(url_for('admin.list_products'))
    try:
        db.session.delete(product)
        db.session.commit()
        flash('Ürün silindi.', 'success')
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('product delete failed for #%s', product.id)
        flash('Ürün silinemedi.', 'danger')
    return redirect(url_for('admin.list_products'))

# --------------------------------------------------------------------- ads

@admin_bp.route('/ads')
@login_required
@admin_required
def list_ads():
    ads = Ad.query.order_by(Ad.created_at.desc(), Ad.id.desc()).all()
    return render_template('admin/ads.html', title='Reklam Yönetimi', ads=ads, form=AdForm())

@admin_bp.route('/ad/create', methods=['POST'])
@login_required
@admin_required
def create_ad():
    form = AdForm()
    if not form.validate():
        flash(form.image.errors[0] if form.image.errors else 'Başlık ve pozisyon zorunludur.', 'danger')
        return redirect(url_for('admin.list_ads'))
    try:
        ad = Ad(title=form.title.data.strip(), link=form.link.data or None,
                position=form.position.data, is_active=True,
                image=save_upload(form.image.data))
        db.session.add(ad)
        db.session.commit()
        flash('Reklam eklendi.', 'success')
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('ad create failed')
        flash('Reklam eklenemedi.', 'danger')
    return redirect(url_for('admin.list_ads'))

@admin_bp.route('/ad/update', methods=['POST'])
@login_required
@admin_required
def update_ad():
    form = AdForm()
    ad = db.session.get(Ad, int(form.id.data)) if (form.id.data or '').isdigit() else None
    if ad is None:
        flash('Reklam bulunamadı.', 'danger')
        return redirect(url_for('admin.list_ads'))
    if not form.validate():
        flash(form.image.errors[0] if form.image.errors else 'Başlık ve pozisyon zorunludur.', 'danger')
        return redirect(url_for('admin.list_ads'))
    try:
        ad.title = form.title.data.strip()
        ad.link = form.link.data or None
        ad.position = form.position.data
        image_path = save_upload(form.image.data)
        if image_path:
            ad.image = image_path
        db.session.commit()
        flash('Reklam güncellendi.', 'success')
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('ad update failed for #%s', ad.id)
        flash('Reklam güncellenemedi.', 'danger')
    return redirect(url_for('admin.list_ads'))

@admin_bp.route('/ad/toggle', methods=['POST'])
@login_required
@admin_required
def toggle_ad():
    ad = db.session.get(Ad, request.form.get('id', type=int) or 0)
    if ad is None:
        flash('Reklam bulunamadı.', 'danger')
        return redirect(url_for('admin.list_ads'))
    try:
        ad.toggle()
        db.session.commit()
        flash('Reklam durumu güncellendi.', 'success')
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('ad toggle failed for #%s', ad.id)
        flash('Reklam durumu güncellenemedi.', 'danger')
    return redirect(url_for('admin.list_ads'))

@admin_bp.route('/ad/delete', methods=['POST'])
@login_required
@admin_required
def delete_ad():
    ad = db.session.get(Ad, request.form.get('id', type=int) or 0)
    if ad is None:
        flash('Reklam bulunamadı.', 'danger')
        return redirect(url_for('admin.list_ads'))
    try:
        db.session.delete(ad)
        db.session.commit()
        flash('Reklam silindi.', 'success')
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('ad delete failed for #%s', ad.id)
        flash('Reklam silinemedi.', 'danger')
    return redirect(url_for('admin.list_ads'))

# ------------------------------------------------------------------ orders

@admin_bp.route('/orders')
@login_required
@admin_required
def list_orders():
    orders = Order.query.order_by(Order.created_at.desc(), Order.id.desc()).all()
    return render_template('admin/orders.html', title='Sipariş Yönetimi',
                         orders=orders, statuses=ORDER_STATUSES)

@admin_bp.route('/order/status', methods=['POST'])
@login_required
@admin_required
def update_order_status():
    order = db.session.get(Order, request.form.get('id', type=int) or 0)
    status = request.form.get('status')
    if order is None or status not in ORDER_STATUSES:
        flash('Sipariş durumu güncellenemedi.', 'danger')
        return redirect(url_for('admin.list_orders'))
    try:
        order.status = status
        db.session.commit()
        flash(f'#{order.id} numaralı sipariş "{status}" olarak güncellendi.', 'success')
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('status update failed for order #%s', order.id)
        flash('Sipariş durumu güncellenemedi.', 'danger')
    return redirect(url_for('admin.list_orders'))

@admin_bp.route('/orders/export')
@login_required
@admin_required
def export_orders():
    orders = Order.query.order_by(Order.created_at.desc(), Order.id.desc()).all()
    data = [{
        'Sipariş No': o.id,
        'Müşteri': o.user.name,
        'E-posta': o.user.email,
        'Ürün Adedi': sum(item.qty for item in o.items),
        'Ara Toplam': o.subtotal,
        'KDV': o.tax,
        'Toplam': o.total,
        'Durum': o.status,
        'Adres': o.address,
        'Tarih': o.created_at.strftime('%Y-%m-%d %H:%M'),
    } for o in orders]
    df = pd.DataFrame(data, columns=['Sipariş No', 'Müşteri', 'E-posta', 'Ürün Adedi', 'Ara Toplam',
                                     'KDV', 'Toplam', 'Durum', 'Adres', 'Tarih'])

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine='xlsxwriter') as writer:
        df.to_excel(writer, sheet_name='Siparişler', index=False)

        # column widths follow the longest value
        worksheet = writer.sheets['Siparişler']
        for i, col in enumerate(df.columns):
            longest = df[col].astype(str).map(len).max() if not df.empty else 0
            worksheet.set_column(i, i, max(longest, len(col)) + 2)
    output.seek(0)

    filename = f'siparisler_{datetime.now().strftime("%Y%m%d_%H%M%S")}.xlsx'
    return send_file(output, as_attachment=True, download_name=filename, mimetype=XLSX_MIMETYPE)
