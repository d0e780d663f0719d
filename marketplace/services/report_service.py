# Report service module for listing moderation
import logging
from marketplace import db
from marketplace.errors import NotFoundError, ValidationError
from marketplace.models.report_model import Report, ReportStatus, REPORT_TRANSITIONS
from marketplace.services.product_service import get_product_or_404

logger = logging.getLogger(__name__)


def create_report(product_id, reporter_id, reason):
    product = get_product_or_404(product_id)
    report = Report(product_id=product.id, reporter_id=reporter_id, reason=reason)
    db.session.add(report)
    db.session.commit()
    logger.info(f"Report {report.id} raised on product {product.id} by {reporter_id}")
    return report


def list_reports(status=None):
    query = Report.query
    if status:
        query = query.filter_by(status=status)
    return query.order_by(Report.created_at.desc()).all()


def update_report_status(report_id, new_status):
    report = db.session.get(Report, report_id)
    if not report:
        raise NotFoundError('Report not found')

    valid_statuses = [s.value for s in ReportStatus]
    if new_status not in valid_statuses:
        raise ValidationError(f'Invalid status: {new_status}')
    if new_status != report.status and new_status not in REPORT_TRANSITIONS.get(report.status, []):
        raise ValidationError(f'Invalid status transition from {report.status} to {new_status}')

    report.status = new_status
    db.session.commit()
    logger.info(f"Report {report.id} moved to {new_status}")
    return report
