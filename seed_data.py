from models import db
from models.user import User
from models.category import Category
from models.product import Product, slugify
from models.ad import Ad

ADMIN_NAME = 'Yeşil Market Yönetici'
ADMIN_PASSWORD = 'admin123'

CATEGORIES = ['Meyve', 'Sebze', 'Süt Ürünleri', 'Fırın', 'İçecek']

# (category, name, price, unit, stock, description)
PRODUCTS = [
    ('Meyve', 'Amasya Elması', 34.90, 'kg', 120, 'Tokat bağlarından mevsiminde toplanmış kırmızı elma.'),
    ('Meyve', 'Muz', 59.90, 'kg', 80, 'Anamur muzu, olgunlaşmış ve tatlı.'),
    ('Meyve', 'Portakal', 27.50, 'kg', 150, 'Finike portakalı, sıkmalık.'),
    ('Sebze', 'Salkım Domates', 42.00, 'kg', 90, 'Seradan günlük gelen salkım domates.'),
    ('Sebze', 'Salatalık', 24.90, 'kg', 100, 'Çıtır Silivri salatalığı.'),
    ('Sebze', 'Kuru Soğan', 14.90, 'kg', 200, 'Polatlı kuru soğanı.'),
    ('Süt Ürünleri', 'Günlük Süt', 32.50, 'litre', 60, 'Pastörize tam yağlı inek sütü.'),
    ('Süt Ürünleri', 'Ezine Peyniri', 189.00, 'kg', 40, 'Tam yağlı olgunlaştırılmış beyaz peynir.'),
    ('Süt Ürünleri', 'Süzme Yoğurt', 74.90, 'adet', 50, '1 kg cam kavanozda süzme yoğurt.'),
    ('Fırın', 'Köy Ekmeği', 22.00, 'adet', 70, 'Taş fırında ekşi mayalı köy ekmeği.'),
    ('Fırın', 'Simit', 10.00, 'adet', 120, 'Susamlı çıtır simit.'),
    ('İçecek', 'Doğal Maden Suyu', 9.50, 'adet', 300, '200 ml cam şişe.'),
]

ADS = [
    ('Haftanın Meyveleri %20 İndirimli', 'banner', '/category/meyve'),
    ('Taze Sebzeler Kapında', 'banner', '/category/sebze'),
    ('Kahvaltılık Fırsatları', 'sidebar', '/category/sut-urunleri'),
]


def seed_database():
    """Load the sample catalog, ads and the admin account into an empty schema."""
    from flask import current_app

    admin = User(name=ADMIN_NAME, email=current_app.config['ADMIN_EMAIL'])
    admin.set_password(ADMIN_PASSWORD)
    db.session.add(admin)

    categories = {}
    for name in CATEGORIES:
        categories[name] = Category(name=name, slug=slugify(name))
        db.session.add(categories[name])

    for category, name, price, unit, stock, description in PRODUCTS:
        db.session.add(Product(
            category=categories[category],
            name=name,
            slug=slugify(name),
            price=price,
            unit=unit,
            stock=stock,
            description=description,
        ))

    for title, position, link in ADS:
        db.session.add(Ad(title=title, position=position, link=link, is_active=True))

    db.session.commit()
