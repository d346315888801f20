from flask import Blueprint, render_template, redirect, url_for, flash, request, session
from forms.fitfuel_forms import FitFuelLoginForm, FitFuelRegisterForm, ContactForm

fitfuel_bp = Blueprint('fitfuel', __name__, url_prefix='/fitfuel')

CART_KEY = 'fitfuel_cart'
USER_KEY = 'fitfuel_user'
REGISTERED_KEY = 'fitfuel_registered'

# Demo catalog, never stored in the database
PRODUCTS = [
    {
        'id': 'protein',
        'name': 'FitFuel Whey Protein',
        'description': '24g protein içeriğiyle kas gelişimini destekleyen premium whey karışımı.',
        'price': 599,
        'weight': '2.27 kg',
        'image': 'https://images.unsplash.com/photo-1582719478250-c89cae4dc85b?auto=format&fit=crop&w=900&q=80',
    },
    {
        'id': 'dumbbell',
        'name': 'Hex Dambıl Seti (2x10kg)',
        'description': 'Ergonomik tutuş, kaymaz yüzey ve sessiz bırakma için kauçuk kaplama.',
        'price': 899,
        'weight': '2x10 kg',
        'image': 'https://images.unsplash.com/photo-1593079831268-3381b0db4a77?auto=format&fit=crop&w=900&q=80',
    },
    {
        'id': 'shaker',
        'name': 'ProMix Shaker 700ml',
        'description': 'Paslanmaz çelik karıştırıcı topu ve sızdırmaz kapaklı shaker.',
        'price': 169,
        'weight': '700 ml',
        'image': 'https://images.unsplash.com/photo-1579722821273-0f6c4f3f7b58?auto=format&fit=crop&w=900&q=80',
    },
    {
        'id': 'bcaa',
        'name': 'BCAA Recovery Blend',
        'description': 'Antrenman sonrası toparlanmayı hızlandıran 4:1:1 BCAA formülü.',
        'price': 349,
        'weight': '400 g',
        'image': 'https://images.unsplash.com/photo-1549576490-b0b4831ef60a?auto=format&fit=crop&w=900&q=80',
    },
    {
        'id': 'mat',
        'name': 'GripMat Yoga Matı',
        'description': 'Kaymaz yüzeye sahip, terlemeye dayanıklı premium yoga matı.',
        'price': 299,
        'weight': '6 mm',
        'image': 'https://images.unsplash.com/photo-1545239351-1141bd82e8a6?auto=format&fit=crop&w=900&q=80',
    },
]

PRODUCTS_BY_ID = {p['id']: p for p in PRODUCTS}


def get_product(product_id):
    return PRODUCTS_BY_ID.get(product_id)


def cart_summary(cart):
    """Lines, total and item count for a {product_id: qty} cart; unknown ids are skipped."""
    lines = []
    total = 0
    count = 0
    for product_id, quantity in cart.items():
        product = get_product(product_id)
        if product is None:
            continue
        line_total = product['price'] * quantity
        total += line_total
        count += quantity
        lines.append({'product': product, 'qty': quantity, 'line_total': line_total})
    return {'lines': lines, 'total': total, 'count': count}


def change_quantity(cart, product_id, delta):
    next_value = cart.get(product_id, 0) + delta
    if next_value <= 0:
        cart.pop(product_id, None)
    else:
        cart[product_id] = next_value
    return cart


def first_error(form):
    for field in form:
        if field.errors:
            return field.errors[0]
    return None


def back_to_store():
    return redirect(url_for('fitfuel.index'))

@fitfuel_bp.route('/')
def index():
    cart = session.get(CART_KEY, {})
    return render_template('fitfuel/index.html',
                         title='FitFuel',
                         products=PRODUCTS,
                         summary=cart_summary(cart),
                         user=session.get(USER_KEY),
                         login_form=FitFuelLoginForm(),
                         register_form=FitFuelRegisterForm(),
                         contact_form=ContactForm())

@fitfuel_bp.route('/cart/add', methods=['POST'])
def add_to_cart():
    product_id = request.form.get('product_id', '')
    if get_product(product_id) is None:
        flash('Ürün bulunamadı', 'danger')
        return back_to_store()
    session[CART_KEY] = change_quantity(dict(session.get(CART_KEY, {})), product_id, 1)
    flash('Ürün sepete eklendi', 'success')
    return back_to_store()

@fitfuel_bp.route('/cart/update', methods=['POST'])
def update_cart():
    product_id = request.form.get('product_id', '')
    if get_product(product_id) is None:
        flash('Ürün bulunamadı', 'danger')
        return back_to_store()
    delta = 1 if request.form.get('delta') == '1' else -1
    session[CART_KEY] = change_quantity(dict(session.get(CART_KEY, {})), product_id, delta)
    return back_to_store()

@fitfuel_bp.route('/checkout', methods=['POST'])
def checkout():
    if not cart_summary(session.get(CART_KEY, {}))['lines']:
        flash('Sepetin boş, önce ürün ekle', 'danger')
        return back_to_store()
    session[CART_KEY] = {}
    flash('Siparişin alındı! Teşekkürler.', 'success')
    return back_to_store()

@fitfuel_bp.route('/register', methods=['POST'])
def register():
    form = FitFuelRegisterForm()
    if not form.validate():
        flash(first_error(form), 'danger')
        return back_to_store()
    user = {'name': form.name.data.strip(), 'email': form.email.data}
    session[REGISTERED_KEY] = user
    session[USER_KEY] = user
    flash(f'Hoş geldin {user["name"].split(" ")[0]}!', 'success')
    return back_to_store()

@fitfuel_bp.route('/login', methods=['POST'])
def login():
    form = FitFuelLoginForm()
    if not form.validate():
        flash(first_error(form), 'danger')
        return back_to_store()
    stored = session.get(REGISTERED_KEY)
    if not stored or stored['email'] != form.email.data:
        flash('Kullanıcı bulunamadı, lütfen kayıt olun', 'danger')
        return back_to_store()
    session[USER_KEY] = stored
    flash(f'Hoş geldin {stored["name"].split(" ")[0]}!', 'success')
    return back_to_store()

@fitfuel_bp.route('/logout', methods=['POST'])
def logout():
    session.pop(USER_KEY, None)
    flash('Çıkış yapıldı', 'success')
    return back_to_store()

@fitfuel_bp.route('/contact', methods=['POST'])
def contact():
    # messages are not stored anywhere
    flash('Mesajın başarıyla gönderildi. En kısa sürede dönüş yapacağız.', 'success')
    return back_to_store()
