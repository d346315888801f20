TAX_RATE = 0.08


def parse_quantity(value):
    """Form quantity to a positive int, anything unparsable counts as 1."""
    try:
        qty = int(float(value))
    except (TypeError, ValueError, OverflowError):
        qty = 0
    return max(1, qty or 1)


def empty_totals():
    return {'count': 0, 'subtotal': 0, 'tax': 0, 'total': 0}


# Cart kept in the session cookie, not in the database
class SessionCart:
    SESSION_KEY = 'cart'

    def __init__(self, items=None):
        # {"<product id>": {"product": {...snapshot...}, "qty": n}}
        self.items = dict(items or {})
        self.totals = empty_totals()
        self.update_totals()

    @classmethod
    def load(cls, session):
        data = session.get(cls.SESSION_KEY) or {}
        return cls(data.get('items'))

    def save(self, session):
        self.update_totals()
        session[self.SESSION_KEY] = {'items': self.items, 'totals': self.totals}

    def __len__(self):
        return len(self.items)

    def __contains__(self, product_id):
        return str(product_id) in self.items

    def is_empty(self):
        return self.totals['count'] == 0

    def add(self, product, qty=1):
        if product.stock < 1:
            return False
        key = str(product.id)
        line = self.items.get(key) or {'qty': 0}
        line['product'] = product.to_cart_dict()
        line['qty'] = min(product.stock, line['qty'] + parse_quantity(qty))
        self.items[key] = line
        self.update_totals()
        return True

    def update(self, product_id, qty):
        line = self.items.get(str(product_id))
        if line is None:
            return
        quantity = parse_quantity(qty)
        max_qty = line['product'].get('stock') or quantity
        line['qty'] = min(quantity, max_qty)
        self.update_totals()

    def remove(self, product_id):
        self.items.pop(str(product_id), None)
        self.update_totals()

    def clear(self):
        self.items = {}
        self.update_totals()

    def lines(self):
        """(product_id, qty) pairs ordered by product id."""
        return sorted((int(key), line['qty']) for key, line in self.items.items())

    def update_totals(self):
        count = 0
        subtotal = 0
        for line in self.items.values():
            count += line['qty']
            subtotal += line['qty'] * line['product']['price']
        self.totals = {
            'count': count,
            'subtotal': subtotal,
            'tax': subtotal * TAX_RATE,
            'total': subtotal * (1 + TAX_RATE),
        }
        return self.totals
