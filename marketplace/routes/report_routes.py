import logging
from flask import request
from flask_restx import Namespace, Resource, fields
from sqlalchemy.exc import SQLAlchemyError
from marketplace import db
from marketplace.services import report_service
from marketplace.utils.auth_middleware import auth_required

report_ns = Namespace('reports', description='Flag listings for moderation')

logger = logging.getLogger(__name__)

report_model = report_ns.model('ReportInput', {
    'productId': fields.String(required=True),
    'reason': fields.String(required=True, min_length=5)
})


@report_ns.route('')
class ReportList(Resource):
    @auth_required
    @report_ns.expect(report_model, validate=True)
    def post(self, auth):
        """Report a listing"""
        data = request.get_json()
        try:
            report = report_service.create_report(data['productId'], auth.user_id, data['reason'])
            return {'report': report.to_dict()}, 201
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to create report: {str(e)}")
            return {'message': 'Failed to create report'}, 500
