from sqlalchemy import update
from models import db
from models.cart import TAX_RATE
from models.product import Product

STATUS_PREPARING = 'Hazırlanıyor'
STATUS_SHIPPED = 'Kargoda'
STATUS_DELIVERED = 'Teslim Edildi'
ORDER_STATUSES = [STATUS_PREPARING, STATUS_SHIPPED, STATUS_DELIVERED]


class StockUnavailableError(ValueError):
    """Raised when a cart line asks for more than the live stock."""

    def __init__(self, product_id, requested):
        super().__init__(f'stock unavailable for product {product_id} (requested {requested})')
        self.product_id = product_id
        self.requested = requested


# Order; line items keep the price paid at checkout
class Order(db.Model):
    __tablename__ = 'orders'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    subtotal = db.Column(db.Float, nullable=False, default=0)
    tax = db.Column(db.Float, nullable=False, default=0)
    total = db.Column(db.Float, nullable=False, default=0)
    status = db.Column(db.String(32), nullable=False, default=STATUS_PREPARING)
    address = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())

    items = db.relationship('OrderItem', backref='order', cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Order {self.id}>'

    @property
    def items_total(self):
        return sum(item.line_total for item in self.items)

    @classmethod
    def place(cls, user_id, lines, address):
        """Create an order from (product_id, qty) lines in one transaction.

        Stock is decremented with a conditional UPDATE so a concurrent
        checkout always sees the stock left by the previous one. Nothing is
        written if any line is short.
        """
        lines = sorted(lines)
        if not lines:
            raise ValueError('cannot place an order without lines')

        order = cls(user_id=user_id, address=address, status=STATUS_PREPARING)
        db.session.add(order)
        try:
            subtotal = 0
            for product_id, qty in lines:
                result = db.session.execute(
                    update(Product)
                    .where(Product.id == product_id, Product.stock >= qty)
                    .values(stock=Product.stock - qty)
                    .execution_options(synchronize_session='evaluate')
                )
                if result.rowcount != 1:
                    raise StockUnavailableError(product_id, qty)
                product = db.session.get(Product, product_id)
                order.items.append(OrderItem(product_id=product.id, qty=qty, price=product.price))
                subtotal += qty * product.price
            order.subtotal = round(subtotal, 2)
            order.tax = round(subtotal * TAX_RATE, 2)
            order.total = round(subtotal * (1 + TAX_RATE), 2)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return order


class OrderItem(db.Model):
    __tablename__ = 'order_items'
    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    qty = db.Column(db.Integer, nullable=False)
    price = db.Column(db.Float, nullable=False)

    product = db.relationship('Product', backref='order_items')

    @property
    def line_total(self):
        return self.qty * self.price
