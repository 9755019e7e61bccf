# forum/api/courses/routes.py
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity

from forum.api.courses.schemas import PaginationArgsSchema, TopicCreateSchema
from forum.engine import PageRequest

courses_bp = Blueprint('courses_bp', __name__)


def _page_request() -> PageRequest:
    args = PaginationArgsSchema().load(request.args)
    return PageRequest(first=args['first'], after=args['after'], last=args['last'], before=args['before'])


@courses_bp.route('/', methods=['GET'])
def get_all_courses():
    """Cursor-paginated course connection (?first=&after= or ?last=&before=)."""
    course_service = current_app.services['courses']
    return jsonify(course_service.get_all_courses(_page_request())), 200


@courses_bp.route('/<string:course_id>', methods=['GET'])
def get_course_by_id(course_id: str):
    course_service = current_app.services['courses']
    return jsonify(course_service.get_course_by_id(course_id)), 200


@courses_bp.route('/slug/<string:slug>', methods=['GET'])
def get_course_by_slug(slug: str):
    """Course with topicCount and latestTopic."""
    course_service = current_app.services['courses']
    return jsonify(course_service.get_course_by_slug(slug)), 200


@courses_bp.route('/<string:course_id>/topics', methods=['GET'])
def get_topics_by_course(course_id: str):
    topic_service = current_app.services['topics']
    return jsonify(topic_service.get_topics_by_course(course_id, _page_request())), 200


@courses_bp.route('/<string:course_id>/topics', methods=['POST'])
@jwt_required(optional=True)
def create_topic(course_id: str):
    """Creates a topic in the course. Requires a signed-in user."""
    topic_service = current_app.services['topics']
    user_id = get_jwt_identity()
    data = TopicCreateSchema().load(request.get_json(silent=True) or {})
    topic = topic_service.create_topic(user_id, course_id, data['title'], data['description'])
    return jsonify(topic), 201
