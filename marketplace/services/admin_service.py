from sqlalchemy import func
from marketplace import db
from marketplace.models.user_model import User
from marketplace.models.product_model import Product, LISTED_STATUSES
from marketplace.models.report_model import Report, ReportStatus


def get_admin_stats():
    """Aggregate counters for the admin dashboard, computed on every call."""
    total_users = db.session.query(func.count(User.id)).scalar()
    active_listings = Product.query.filter(Product.status.in_(LISTED_STATUSES)).count()
    pending_reports = Report.query.filter_by(status=ReportStatus.PENDING.value).count()
    estimated_value = db.session.query(
        func.coalesce(func.sum(Product.price), 0)
    ).filter(Product.status.in_(LISTED_STATUSES)).scalar()

    return {
        'totalUsers': total_users or 0,
        'activeListings': active_listings,
        'pendingReports': pending_reports,
        'estimatedValue': float(estimated_value or 0)
    }
