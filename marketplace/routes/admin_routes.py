import logging
from flask import request
from flask_restx import Namespace, Resource, fields, reqparse
from sqlalchemy.exc import SQLAlchemyError
from marketplace import db
from marketplace.models.report_model import ReportStatus
from marketplace.models.user_model import Role
from marketplace.services import admin_service, user_service, product_service, report_service
from marketplace.utils.auth_middleware import admin_required

admin_ns = Namespace('admin', description='Moderation and dashboard statistics')

logger = logging.getLogger(__name__)

user_update_model = admin_ns.model('AdminUserUpdate', {
    'firstName': fields.String(min_length=1),
    'lastName': fields.String(min_length=1),
    'university': fields.String(),
    'campusLocation': fields.String(),
    'role': fields.String(enum=[r.value for r in Role]),
    'isVerified': fields.Boolean()
})

report_update_model = admin_ns.model('AdminReportUpdate', {
    'status': fields.String(required=True, enum=[s.value for s in ReportStatus])
})

status_parser = reqparse.RequestParser()
status_parser.add_argument('status', type=str, location='args', help='Status filter')


@admin_ns.route('/stats')
class AdminStats(Resource):
    @admin_required
    def get(self, auth):
        """Get dashboard statistics"""
        try:
            return admin_service.get_admin_stats(), 200
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch stats: {str(e)}")
            return {'message': 'Failed to fetch stats'}, 500


@admin_ns.route('/users')
class AdminUserList(Resource):
    @admin_required
    def get(self, auth):
        """List every user, newest first"""
        users = user_service.list_users()
        return {'users': [u.to_dict() for u in users]}, 200


@admin_ns.route('/users/<string:user_id>')
class AdminUserResource(Resource):
    @admin_required
    @admin_ns.expect(user_update_model, validate=True)
    def patch(self, user_id, auth):
        """Update a user's profile, role or verification flag"""
        data = request.get_json()
        try:
            user = user_service.update_user(user_id, data, auth.user_id)
            return {'user': user.to_dict()}, 200
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to update user {user_id}: {str(e)}")
            return {'message': 'Failed to update user'}, 500


@admin_ns.route('/products')
class AdminProductList(Resource):
    @admin_required
    @admin_ns.expect(status_parser)
    def get(self, auth):
        """List products in every status"""
        args = status_parser.parse_args()
        products = product_service.list_all_products(status=args['status'])
        return {'products': [p.to_dict() for p in products]}, 200


@admin_ns.route('/reports')
class AdminReportList(Resource):
    @admin_required
    @admin_ns.expect(status_parser)
    def get(self, auth):
        """List reports, optionally filtered by status"""
        args = status_parser.parse_args()
        reports = report_service.list_reports(status=args['status'])
        return {'reports': [r.to_dict() for r in reports]}, 200


@admin_ns.route('/reports/<string:report_id>')
class AdminReportResource(Resource):
    @admin_required
    @admin_ns.expect(report_update_model, validate=True)
    def patch(self, report_id, auth):
        """Move a report along pending -> reviewed -> resolved"""
        data = request.get_json()
        try:
            report = report_service.update_report_status(report_id, data['status'])
            return {'report': report.to_dict()}, 200
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to update report {report_id}: {str(e)}")
            return {'message': 'Failed to update report'}, 500
