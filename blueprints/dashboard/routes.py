"""
Dashboard Routes - Signed-in dashboard
Handles: Projects, meetings, messages and training requests; owner moderation
"""

from datetime import datetime
from flask import request, jsonify, current_app
from utils.auth import get_auth_status
from utils.badges import PROJECT_STATUSES, get_status_badge
from utils.data import parse_datetime
from utils.decorators import login_required, owner_required
from utils.gateway import gateway, GatewayError
from utils.helpers import get_form_data, clean_fields, missing_fields
from utils.loaders import CollectionResult, LoadState, load_collection
from . import dashboard_bp


RECENT_MESSAGES_LIMIT = 10


def _scope(auth):
    """Owners see every row; clients only their own"""
    return None if auth.is_owner else {'client_id': auth.user_id}


def _load_messages(auth):
    """Recent messages on the user's projects (all messages for the owner)"""
    if auth.is_owner:
        return load_collection('messages', order_by='created_at', ascending=False,
                               limit=RECENT_MESSAGES_LIMIT)

    try:
        projects = gateway.select('projects', eq={'client_id': auth.user_id})
        project_ids = [p['id'] for p in projects]
        if not project_ids:
            return CollectionResult(LoadState.EMPTY, [])
        items = gateway.select('messages', in_={'project_id': project_ids},
                               order_by='created_at', ascending=False,
                               limit=RECENT_MESSAGES_LIMIT)
    except GatewayError as e:
        current_app.logger.error(f"Error fetching messages: {str(e)}")
        return CollectionResult(LoadState.ERROR, [])
    return CollectionResult(LoadState.READY if items else LoadState.EMPTY, items)


def _get_project(project_id):
    rows = gateway.select('projects', eq={'id': project_id})
    return rows[0] if rows else None


@dashboard_bp.route('/')
@login_required
def index():
    """Main dashboard: each section loads independently"""
    auth = get_auth_status()

    projects = load_collection('projects', filters=_scope(auth),
                               order_by='created_at', ascending=False)
    for project in projects.items:
        project['badge'] = get_status_badge(project.get('status'))

    meetings = load_collection('meetings', filters=_scope(auth),
                               since={'meeting_time': datetime.utcnow()},
                               order_by='meeting_time', ascending=True)

    sections = {
        'projects': projects.to_dict(),
        'meetings': meetings.to_dict(),
        'messages': _load_messages(auth).to_dict()
    }
    if auth.is_owner:
        sections['training_requests'] = load_collection(
            'training_requests', order_by='created_at', ascending=False).to_dict()

    current_app.logger.info(f"Dashboard index for {auth.username}, is_owner={auth.is_owner}")
    return jsonify({'auth': auth.to_dict(), **sections})


@dashboard_bp.route('/projects/<project_id>/messages', methods=['POST'])
@login_required
def post_project_message(project_id):
    """Add a message to a project thread"""
    auth = get_auth_status()
    content = clean_fields(get_form_data(), ['content'])['content']
    if not content:
        return jsonify({'success': False, 'message': 'Message cannot be empty.'}), 400

    try:
        project = _get_project(project_id)
        if not project:
            return jsonify({'success': False, 'message': 'Project not found.'}), 404
        if not auth.is_owner and project.get('client_id') != auth.user_id:
            return jsonify({'success': False, 'message': 'Access denied.'}), 403

        message = gateway.insert('messages', {
            'project_id': project_id,
            'sender_id': auth.user_id,
            'content': content,
            'is_read': False
        })
    except GatewayError as e:
        current_app.logger.error(f"Error posting message on project {project_id}: {str(e)}")
        return jsonify({'success': False, 'message': 'Error sending message. Please try again.'}), 500

    return jsonify({'success': True, 'message': message}), 201


@dashboard_bp.route('/projects/<project_id>/status', methods=['POST'])
@owner_required
def update_project_status(project_id):
    status = clean_fields(get_form_data(), ['status'])['status']
    if status not in PROJECT_STATUSES:
        return jsonify({'success': False, 'message': f'Unknown status: {status}',
                        'allowed': list(PROJECT_STATUSES)}), 400

    try:
        updated = gateway.update('projects', {'status': status}, eq={'id': project_id})
    except GatewayError as e:
        current_app.logger.error(f"Error updating project {project_id}: {str(e)}")
        return jsonify({'success': False, 'message': 'Error updating project.'}), 500

    if not updated:
        return jsonify({'success': False, 'message': 'Project not found.'}), 404

    project = updated[0]
    project['badge'] = get_status_badge(project.get('status'))
    current_app.logger.info(f"Project {project_id} status set to {status}")
    return jsonify({'success': True, 'project': project})


@dashboard_bp.route('/meetings', methods=['POST'])
@owner_required
def schedule_meeting():
    """Schedule a meeting, optionally linked to a client"""
    form = get_form_data()
    data = clean_fields(form, ['title', 'description', 'meeting_time', 'meeting_link',
                               'client_id', 'duration'])
    missing = missing_fields(data, ['title', 'meeting_time'])
    if missing:
        return jsonify({'success': False, 'message': 'Required fields missing.',
                        'missing': missing}), 400

    meeting_time = parse_datetime(data['meeting_time'])
    if meeting_time is None:
        return jsonify({'success': False, 'message': 'Invalid meeting time.'}), 400

    try:
        duration = int(data['duration'] or 30)
    except ValueError:
        return jsonify({'success': False, 'message': 'Duration must be a number of minutes.'}), 400
    if duration <= 0:
        return jsonify({'success': False, 'message': 'Duration must be a number of minutes.'}), 400

    try:
        meeting = gateway.insert('meetings', {
            'title': data['title'][:255],
            'description': data['description'] or None,
            'meeting_time': meeting_time,
            'duration': duration,
            'meeting_link': data['meeting_link'][:500] or None,
            'client_id': data['client_id'] or None
        })
    except GatewayError as e:
        current_app.logger.error(f"Error scheduling meeting: {str(e)}")
        return jsonify({'success': False, 'message': 'Error scheduling meeting.'}), 500

    return jsonify({'success': True, 'meeting': meeting}), 201


@dashboard_bp.route('/messages/<message_id>/read', methods=['POST'])
@owner_required
def mark_message_read(message_id):
    try:
        updated = gateway.update('messages', {'is_read': True}, eq={'id': message_id})
    except GatewayError as e:
        current_app.logger.error(f"Error marking message {message_id} read: {str(e)}")
        return jsonify({'success': False, 'message': 'Error updating message.'}), 500
    if not updated:
        return jsonify({'success': False, 'message': 'Message not found.'}), 404
    return jsonify({'success': True, 'message': updated[0]})


@dashboard_bp.route('/reviews/<review_id>/approve', methods=['POST'])
@owner_required
def approve_review(review_id):
    approved = request.args.get('approved', 'true').lower() != 'false'
    try:
        updated = gateway.update('reviews', {'is_approved': approved}, eq={'id': review_id})
    except GatewayError as e:
        current_app.logger.error(f"Error approving review {review_id}: {str(e)}")
        return jsonify({'success': False, 'message': 'Error updating review.'}), 500
    if not updated:
        return jsonify({'success': False, 'message': 'Review not found.'}), 404
    return jsonify({'success': True, 'review': updated[0]})
