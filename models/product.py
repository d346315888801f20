import re
from models import db

_TR_CHARS = str.maketrans('çğıöşüÇĞİÖŞÜ', 'cgiosuCGIOSU')


def slugify(value):
    """'Taze Domates (kg)' -> 'taze-domates-kg'"""
    value = value.translate(_TR_CHARS).lower()
    return re.sub(r'[^a-z0-9]+', '-', value).strip('-')


# Catalog product
class Product(db.Model):
    __tablename__ = 'products'
    __table_args__ = (
        db.CheckConstraint('stock >= 0', name='ck_products_stock_non_negative'),
    )
    id = db.Column(db.Integer, primary_key=True)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=False)
    name = db.Column(db.String(128), nullable=False)
    slug = db.Column(db.String(160), unique=True, nullable=False)
    price = db.Column(db.Float, nullable=False)
    unit = db.Column(db.String(32), nullable=False)
    stock = db.Column(db.Integer, nullable=False, default=0)
    image = db.Column(db.String(255), nullable=True)
    description = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())

    def __repr__(self):
        return f'<Product {self.slug}>'

    def is_out_of_stock(self):
        return self.stock == 0

    def to_cart_dict(self):
        # snapshot kept in the session cookie
        return {
            'id': self.id,
            'name': self.name,
            'slug': self.slug,
            'price': self.price,
            'unit': self.unit,
            'stock': self.stock,
            'image': self.image,
        }
