import re
import logging
from flask import request
from flask_restx import Namespace, Resource, fields
from sqlalchemy.exc import SQLAlchemyError
from marketplace import db
from marketplace.errors import ValidationError
from marketplace.services import user_service
from marketplace.utils.auth_middleware import auth_required, start_session, end_session

auth_ns = Namespace('auth', description='Authentication operations')

logger = logging.getLogger(__name__)

EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$')

register_model = auth_ns.model('Register', {
    'email': fields.String(required=True, description='Email address'),
    'password': fields.String(required=True, min_length=8, description='Password, at least 8 characters'),
    'firstName': fields.String(required=True, min_length=1),
    'lastName': fields.String(required=True, min_length=1),
    'university': fields.String(),
    'campusLocation': fields.String()
})

login_model = auth_ns.model('Login', {
    'email': fields.String(required=True),
    'password': fields.String(required=True)
})


@auth_ns.route('/register')
class Register(Resource):
    @auth_ns.expect(register_model, validate=True)
    def post(self):
        """Register a new student account and start a session"""
        data = request.get_json()
        if not EMAIL_REGEX.match(data['email']):
            raise ValidationError('Invalid email format')

        try:
            user = user_service.create_user(data)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to register user: {str(e)}")
            return {'message': 'Failed to register user'}, 500

        start_session(user)
        return {'user': user.to_dict()}, 201


@auth_ns.route('/login')
class Login(Resource):
    @auth_ns.expect(login_model, validate=True)
    def post(self):
        """Verify credentials and start a session"""
        data = request.get_json()
        user = user_service.authenticate(data['email'], data['password'])
        if not user:
            return {'message': 'Invalid credentials'}, 401

        start_session(user)
        logger.info(f"User {user.id} logged in")
        return {'user': user.to_dict()}, 200


@auth_ns.route('/logout')
class Logout(Resource):
    @auth_required
    def post(self, auth):
        """Destroy the current session"""
        end_session()
        logger.info(f"User {auth.user_id} logged out")
        return {'message': 'Logged out successfully'}, 200


@auth_ns.route('/me')
class Me(Resource):
    @auth_required
    def get(self, auth):
        """Return the signed-in user"""
        user = user_service.get_user_or_404(auth.user_id)
        return {'user': user.to_dict()}, 200
