from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

from .user import User
from .category import Category
from .product import Product
from .order import Order, OrderItem, StockUnavailableError
from .ad import Ad
from .cart import SessionCart
