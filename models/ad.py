from models import db

AD_POSITIONS = [('banner', 'Banner'), ('sidebar', 'Yan alan')]


class Ad(db.Model):
    __tablename__ = 'ads'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(128), nullable=False)
    image = db.Column(db.String(255), nullable=True)
    link = db.Column(db.String(255), nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    position = db.Column(db.String(16), nullable=False, default='banner')
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())

    def __repr__(self):
        return f'<Ad {self.title}>'

    def toggle(self):
        self.is_active = not self.is_active

    @classmethod
    def active(cls, position=None):
        query = cls.query.filter_by(is_active=True)
        if position:
            query = query.filter_by(position=position)
        return query.order_by(cls.created_at.desc(), cls.id.desc()).all()
