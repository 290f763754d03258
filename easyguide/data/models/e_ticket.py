# easyguide/data/models/e_ticket.py
from easyguide.extensions import db
from easyguide.data.models.base import SerializerMixin, TimestampMixin


class ETicket(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "e_tickets"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"))
    e_ticket_id = db.Column(db.String(255))
    order_id = db.Column(db.Integer, db.ForeignKey("sales_flat_orders.id", ondelete="CASCADE"))
    ticket_sent = db.Column(db.Integer, default=0)
    day = db.Column(db.Text)
    time_slot = db.Column(db.String(64))
    status = db.Column(db.Integer, default=1)
