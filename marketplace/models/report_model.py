import enum
from marketplace import db
from marketplace.utils.util import generate_id, utcnow, isoformat


class ReportStatus(enum.Enum):
    PENDING = 'pending'
    REVIEWED = 'reviewed'
    RESOLVED = 'resolved'


REPORT_TRANSITIONS = {
    ReportStatus.PENDING.value: [ReportStatus.REVIEWED.value, ReportStatus.RESOLVED.value],
    ReportStatus.REVIEWED.value: [ReportStatus.RESOLVED.value],
    ReportStatus.RESOLVED.value: []
}


class Report(db.Model):
    __tablename__ = 'reports'
    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    product_id = db.Column(db.String(36), db.ForeignKey('products.id'), nullable=False)
    reporter_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
    reason = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=ReportStatus.PENDING.value)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f'<Report {self.id} on Product {self.product_id} ({self.status})>'

    def to_dict(self):
        return {
            'id': self.id,
            'productId': self.product_id,
            'reporterId': self.reporter_id,
            'reason': self.reason,
            'status': self.status,
            'createdAt': isoformat(self.created_at)
        }
