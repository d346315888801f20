import threading
import pytest
from models import db
from models.order import Order, OrderItem, StockUnavailableError, STATUS_PREPARING
from models.product import Product


@pytest.fixture
def shopper(make_user, login):
    user_id = make_user()
    login()
    return user_id


def add_to_cart(client, product_id, qty):
    return client.post('/cart/add', data={'product_id': product_id, 'qty': qty})


def test_checkout_creates_order_and_decrements_stock(app, client, shopper, make_product):
    tomato = make_product(name='Domates', price=10.0, stock=5)
    bread = make_product(name='Köy Ekmeği', price=22.5, stock=3, category='Fırın')
    add_to_cart(client, tomato, 2)
    add_to_cart(client, bread, 1)

    response = client.post('/checkout', data={'address': 'Moda Cad. 12, Kadıköy'})

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/orders')
    with app.app_context():
        order = Order.query.one()
        assert order.user_id == shopper
        assert order.status == STATUS_PREPARING
        assert len(order.items) == 2
        assert order.subtotal == pytest.approx(42.5)
        assert order.subtotal == pytest.approx(order.items_total)
        assert order.total == pytest.approx(round(42.5 * 1.08, 2))
        assert db.session.get(Product, tomato).stock == 3
        assert db.session.get(Product, bread).stock == 2

    page = client.get('/cart').get_data(as_text=True)
    assert 'Sepetiniz boş' in page


def test_order_keeps_price_paid(app, client, shopper, make_product):
    product_id = make_product(price=10.0, stock=5)
    add_to_cart(client, product_id, 1)
    client.post('/checkout', data={'address': 'Bağdat Cad. 5'})

    with app.app_context():
        db.session.get(Product, product_id).price = 99.0
        db.session.commit()
        item = OrderItem.query.one()
        assert item.price == 10.0
        assert item.order.total == pytest.approx(10.8)


def test_stock_shortfall_aborts_whole_order(app, client, shopper, make_product):
    enough = make_product(name='Elma', stock=5)
    short = make_product(name='Muz', stock=3)
    add_to_cart(client, enough, 2)
    add_to_cart(client, short, 3)

    # someone else buys the bananas first
    with app.app_context():
        db.session.get(Product, short).stock = 1
        db.session.commit()

    response = client.post('/checkout', data={'address': 'Moda'}, follow_redirects=True)

    assert 'Stok yetersiz. Lütfen sepetinizi güncelleyin.' in response.get_data(as_text=True)
    with app.app_context():
        assert Order.query.count() == 0
        assert OrderItem.query.count() == 0
        assert db.session.get(Product, enough).stock == 5
        assert db.session.get(Product, short).stock == 1


def test_stale_carts_cannot_oversell(app, make_user, make_product):
    product_id = make_product(stock=5)
    clients = []
    for email in ('a@example.com', 'b@example.com'):
        make_user(email=email)
        c = app.test_client()
        c.post('/login', data={'email': email, 'password': 'secret123'})
        add_to_cart(c, product_id, 3)
        clients.append(c)

    first = clients[0].post('/checkout', data={'address': 'A'})
    second = clients[1].post('/checkout', data={'address': 'B'}, follow_redirects=True)

    assert first.headers['Location'].endswith('/orders')
    assert 'Stok yetersiz' in second.get_data(as_text=True)
    with app.app_context():
        assert Order.query.count() == 1
        assert db.session.get(Product, product_id).stock == 2


def test_concurrent_checkouts_never_go_negative(app, make_user, make_product):
    product_id = make_product(stock=5)
    user_id = make_user()
    barrier = threading.Barrier(4)
    outcomes = []

    def buy():
        with app.app_context():
            barrier.wait()
            try:
                Order.place(user_id, [(product_id, 2)], 'Kadıköy')
                outcomes.append('ok')
            except StockUnavailableError:
                outcomes.append('short')
            finally:
                db.session.remove()

    threads = [threading.Thread(target=buy) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count('ok') == 2
    assert outcomes.count('short') == 2
    with app.app_context():
        sold = sum(item.qty for item in OrderItem.query.all())
        assert sold == 4
        assert db.session.get(Product, product_id).stock == 1


def test_place_rejects_unknown_product(app, make_user):
    user_id = make_user()
    with app.app_context():
        with pytest.raises(StockUnavailableError):
            Order.place(user_id, [(404, 1)], 'Kadıköy')
        assert Order.query.count() == 0


def test_checkout_requires_login(client, make_product):
    add_to_cart(client, make_product(), 1)
    response = client.get('/checkout')
    assert response.status_code == 302
    assert '/login' in response.headers['Location']


def test_checkout_with_empty_cart(client, shopper):
    response = client.get('/checkout', follow_redirects=True)
    assert 'Sepetiniz boş.' in response.get_data(as_text=True)


def test_checkout_requires_address(app, client, shopper, make_product):
    add_to_cart(client, make_product(), 1)
    response = client.post('/checkout', data={'address': '  '}, follow_redirects=True)
    assert 'Teslimat adresi zorunludur.' in response.get_data(as_text=True)
    with app.app_context():
        assert Order.query.count() == 0


def test_orders_page_lists_own_orders(client, shopper, make_product):
    add_to_cart(client, make_product(name='Simit', price=10.0), 2)
    client.post('/checkout', data={'address': 'Moda'})

    page = client.get('/orders').get_data(as_text=True)
    assert 'Simit' in page
    assert 'Hazırlanıyor' in page
