"""
Drops every table, re-creates the schema and reloads the seed data.
Destructive: all orders and users are lost.
"""

from app import create_app
from models import db
from seed_data import seed_database, ADMIN_PASSWORD

def reset_database():
    app = create_app()
    with app.app_context():
        # drop everything, orders included
        db.drop_all()
        print("Eski tablolar silindi.")

        db.create_all()
        seed_database()

        print("Veritabanı sıfırlandı ve örnek veriler yüklendi.")
        print("Yönetici girişi:")
        print(f"E-posta: {app.config['ADMIN_EMAIL']}")
        print(f"Şifre: {ADMIN_PASSWORD}")

if __name__ == '__main__':
    reset_database()
