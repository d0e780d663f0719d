import os
import uuid
import logging
from flask import current_app
from flask_restx import Namespace, Resource, reqparse
from werkzeug.datastructures import FileStorage
from marketplace.errors import ValidationError
from marketplace.utils.auth_middleware import auth_required

upload_ns = Namespace('upload', description='Listing image upload', path='/upload')

logger = logging.getLogger(__name__)

upload_parser = reqparse.RequestParser()
upload_parser.add_argument('image', type=FileStorage, location='files', help='JPEG, PNG, GIF or WebP image up to 5MB')


def file_size(storage):
    stream = storage.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


@upload_ns.route('')
class ImageUpload(Resource):
    @auth_required
    @upload_ns.expect(upload_parser)
    def post(self, auth):
        """Store an image and return the URL it is served from"""
        args = upload_parser.parse_args()
        image = args['image']
        if image is None or not image.filename:
            raise ValidationError('No image file provided')

        allowed_types = current_app.config['ALLOWED_IMAGE_TYPES']
        if image.mimetype not in allowed_types:
            raise ValidationError('Invalid file type. Only JPEG, PNG, GIF, and WebP are allowed.')

        max_size = current_app.config['MAX_IMAGE_SIZE']
        if file_size(image) > max_size:
            raise ValidationError(f'File too large. Maximum size is {max_size // (1024 * 1024)}MB.')

        filename = f"{uuid.uuid4().hex}{allowed_types[image.mimetype]}"
        upload_folder = os.path.abspath(current_app.config['UPLOAD_FOLDER'])
        os.makedirs(upload_folder, exist_ok=True)
        save_path = os.path.join(upload_folder, filename)
        try:
            image.save(save_path)
        except OSError as e:
            logger.error(f"Failed to save image: {str(e)}")
            return {'message': 'Failed to save image'}, 500

        logger.info(f"Image uploaded by user {auth.user_id}: {save_path}")
        return {'imageUrl': f'/uploads/{filename}'}, 201
