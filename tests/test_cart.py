import pytest
from models.cart import SessionCart, TAX_RATE, parse_quantity
from models.product import Product


def make_product(id=1, price=10.0, stock=5):
    return Product(id=id, name=f'Ürün {id}', slug=f'urun-{id}', price=price, unit='kg', stock=stock)


@pytest.mark.parametrize('lines', [
    [],
    [(1, 19.9)],
    [(3, 2.5), (2, 14.75)],
    [(7, 0.1), (1, 1234.56), (12, 9.99)],
])
def test_total_is_subtotal_plus_tax(lines):
    cart = SessionCart()
    for i, (qty, price) in enumerate(lines, start=1):
        cart.add(make_product(id=i, price=price, stock=100), qty)

    totals = cart.totals
    assert totals['count'] == sum(qty for qty, _ in lines)
    assert totals['subtotal'] == pytest.approx(sum(qty * price for qty, price in lines))
    assert totals['tax'] == pytest.approx(totals['subtotal'] * TAX_RATE)
    assert totals['total'] == pytest.approx(totals['subtotal'] * 1.08)


def test_add_accumulates_and_clamps_to_stock():
    cart = SessionCart()
    product = make_product(stock=4)

    cart.add(product, 3)
    cart.add(product, 3)

    assert cart.items['1']['qty'] == 4
    assert cart.totals['count'] == 4


def test_add_refuses_out_of_stock_product():
    cart = SessionCart()
    assert cart.add(make_product(stock=0), 1) is False
    assert cart.is_empty()


def test_update_keeps_quantity_between_one_and_stock():
    cart = SessionCart()
    cart.add(make_product(stock=6), 2)

    cart.update(1, 50)
    assert cart.items['1']['qty'] == 6
    cart.update('1', -3)
    assert cart.items['1']['qty'] == 1
    cart.update('1', 'abc')
    assert cart.items['1']['qty'] == 1


def test_update_ignores_unknown_product():
    cart = SessionCart()
    cart.update(99, 2)
    assert len(cart) == 0


@pytest.mark.parametrize('value, expected', [
    ('3', 3), (None, 1), ('', 1), ('0', 1), ('-2', 1), ('2.7', 2), ('x', 1),
])
def test_parse_quantity(value, expected):
    assert parse_quantity(value) == expected


def test_remove_and_lines_sorted_by_product_id():
    cart = SessionCart()
    cart.add(make_product(id=5), 1)
    cart.add(make_product(id=2), 2)
    cart.add(make_product(id=9), 3)

    cart.remove(5)

    assert cart.lines() == [(2, 2), (9, 3)]
    assert 5 not in cart


def test_save_and_load_through_session():
    session = {}
    cart = SessionCart()
    cart.add(make_product(price=12.5), 2)
    cart.save(session)

    loaded = SessionCart.load(session)

    assert loaded.lines() == [(1, 2)]
    assert loaded.totals['subtotal'] == pytest.approx(25.0)
    assert session['cart']['totals']['count'] == 2


def test_clear_resets_totals():
    cart = SessionCart()
    cart.add(make_product(), 2)
    cart.clear()
    assert cart.totals == {'count': 0, 'subtotal': 0, 'tax': 0, 'total': 0}
